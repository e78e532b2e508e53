"""Log view and dock widget for displaying application log messages.

This module provides:
    - LogView: table view of the messages captured by the in-memory log handler
    - LogDockWidget: dockable container with level filter and clear actions
"""
import logging

from PySide6 import QtCore, QtWidgets, QtGui

from . import log
from .model import LogFilterProxyModel, LogTableModel, Columns
from ..ui import ui
from ..ui.dockable_widget import DockableWidget

LEVELS = [
    ('Debug', logging.DEBUG),
    ('Info', logging.INFO),
    ('Warning', logging.WARNING),
    ('Error', logging.ERROR),
    ('Critical', logging.CRITICAL),
]


class LogView(QtWidgets.QTableView):
    """A QTableView displaying log messages from LogTableModel, newest last."""

    def __init__(self, parent=None, fetch_interval_ms: int = 1000):
        super().__init__(parent=parent)
        self.setObjectName('ExpensePieLogView')
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.setWordWrap(False)
        self.setShowGrid(False)
        self.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)

        self._init_model(fetch_interval_ms)
        self._init_headers()
        self._connect_signals()

    def _init_model(self, fetch_interval_ms: int) -> None:
        proxy = LogFilterProxyModel(self)
        proxy.setSourceModel(LogTableModel(parent=self, fetch_interval_ms=fetch_interval_ms))
        self.setModel(proxy)

    def _init_headers(self) -> None:
        header = self.horizontalHeader()
        header.setDefaultAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter)
        header.setSectionResizeMode(Columns.Date.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Module.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Level.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Message.value, QtWidgets.QHeaderView.Stretch)

        header = self.verticalHeader()
        header.setDefaultSectionSize(ui.Size.RowHeight(0.8))
        header.setHidden(True)

    def _connect_signals(self) -> None:
        self.model().rowsInserted.connect(self.scrollToBottom)

    def source_model(self) -> LogTableModel:
        return self.model().sourceModel()

    @QtCore.Slot()
    def clear_logs(self) -> None:
        """Clear the log handler's tank and the view's rows."""
        try:
            log.get_handler().clear_logs()
        except RuntimeError:
            logging.warning('TankHandler not found; cannot clear underlying logs.')
        self.source_model().clear_logs()

    def sizeHint(self):
        return QtCore.QSize(
            ui.Size.DefaultWidth(1.0),
            ui.Size.DefaultHeight(0.5)
        )


class LogDockWidget(DockableWidget):
    """Dockable widget for viewing app logs."""

    def __init__(self, parent=None) -> None:
        super().__init__('Logs', parent=parent)
        self.setObjectName('ExpensePieLogDockWidget')

        self.view = LogView(self)
        self.setWidget(self.view)

        self._init_actions()
        self._connect_signals()

    def _connect_signals(self) -> None:
        self.visibilityChanged.connect(self.on_visibility_changed)

    def _add_level_menu(self, title: str, current: int, callback) -> None:
        action = QtGui.QAction(title, self)
        menu = QtWidgets.QMenu(self)
        action_group = QtGui.QActionGroup(self)
        action_group.setExclusive(True)

        for name, lvl in LEVELS:
            act = menu.addAction(name)
            act.setData(lvl)
            act.setCheckable(True)
            act.setChecked(current == lvl)
            action_group.addAction(act)
        action_group.triggered.connect(lambda a: callback(a.data()))

        action.setMenu(menu)
        self.view.addAction(action)

    def _init_actions(self) -> None:
        self._add_level_menu('App Level', logging.getLogger().level, log.set_logging_level)
        proxy = self.view.model()
        self._add_level_menu('View Filter', proxy.filter_level(), proxy.set_filter_level)

        action = QtGui.QAction('Clear Logs', self)
        action.setToolTip('Clear all log entries')
        action.triggered.connect(self.view.clear_logs)
        self.view.addAction(action)

    @QtCore.Slot(bool)
    def on_visibility_changed(self, visible: bool) -> None:
        model = self.view.source_model()
        if visible:
            model.resume()
        else:
            model.pause()
