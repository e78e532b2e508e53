"""Application-wide Qt signals for ExpensePie.

This module provides:
    - Signals: custom Qt signals for settings changes, store mutations,
      category selection, UI actions (showSettings, showCategories, showLogs), and errors.
    - signals: the shared Signals instance.
"""
import logging

from PySide6 import QtCore


class Signals(QtCore.QObject):
    """Centralized Qt signals for application config, data, and UI events."""
    initializationRequested = QtCore.Signal()

    configSectionChanged = QtCore.Signal(str)  # Section
    metadataChanged = QtCore.Signal(str, object)

    categoriesChanged = QtCore.Signal()
    expensesChanged = QtCore.Signal()

    categoryChanged = QtCore.Signal(str)  # selected category id
    categoryUpdateRequested = QtCore.Signal(str)

    expenseEditRequested = QtCore.Signal(str)  # expense id

    showSettings = QtCore.Signal()
    showCategories = QtCore.Signal()
    showLogs = QtCore.Signal()

    error = QtCore.Signal(str)

    def __init__(self):
        super().__init__()
        self._connect_signals()

    def _connect_signals(self):
        # The chart view is the only category selector, forward requests verbatim
        self.categoryUpdateRequested.connect(self.categoryChanged)

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key != 'theme':
                return

            try:
                from . import ui
                ui.apply_theme()
            except RuntimeError as ex:
                logging.debug(f'Error applying theme: {ex}')

        self.metadataChanged.connect(metadata_changed)

        @QtCore.Slot(str)
        def section_changed(section: str) -> None:
            if section == 'metadata':
                metadata_changed('theme', None)

        self.configSectionChanged.connect(section_changed)


signals = Signals()
