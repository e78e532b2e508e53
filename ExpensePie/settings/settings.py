"""Settings UI and dock widget for configuring application preferences.

Provides:
    - BaseComboBoxEditor, ChartModeEditor: combo boxes bound to a metadata key.
    - NameEditor: line edit for the document name.
    - BoolEditor: check box bound to a boolean metadata key.
    - DarkModeEditor: check box toggling between the light and dark theme.
    - SettingsWidget: composite editor for the metadata section.
    - SettingsDockWidget: dockable container wrapping the settings UI.
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtCore

from . import lib
from ..core import store
from ..ui import ui
from ..ui.actions import signals
from ..ui.dockable_widget import DockableWidget


class BaseComboBoxEditor(QtWidgets.QComboBox):
    """Base combo-box editor for a metadata property.

    The editor is initialized using:
      - property_name: key for lib.settings.
      - options: list of (display, value) tuples.
    """

    def __init__(self, property_name, options, parent=None):
        super().__init__(parent=parent)
        self._options = options
        self.property_name = property_name

        self.init_data()
        self._connect_signals()

    def init_data(self):
        self.blockSignals(True)
        try:
            self.clear()
            for display, value in self._options:
                self.addItem(display, userData=value)

            idx = self.findData(lib.settings[self.property_name])
            self.setCurrentIndex(max(idx, 0))
        finally:
            self.blockSignals(False)

    def _connect_signals(self):
        self.currentIndexChanged.connect(self.save)
        signals.metadataChanged.connect(self.on_metadata_changed)
        signals.configSectionChanged.connect(self.on_section_changed)

    @QtCore.Slot(str, object)
    def on_metadata_changed(self, key: str, value: object) -> None:
        if key != self.property_name:
            return
        idx = self.findData(value)
        if idx != -1 and idx != self.currentIndex():
            self.blockSignals(True)
            self.setCurrentIndex(idx)
            self.blockSignals(False)

    @QtCore.Slot(str)
    def on_section_changed(self, section: str) -> None:
        if section == 'metadata':
            self.init_data()

    @QtCore.Slot(int)
    def save(self, index):
        if index == -1:
            return
        value = self.itemData(index)
        logging.debug(f'Setting {self.property_name} to {value}')
        lib.settings[self.property_name] = value


class ChartModeEditor(BaseComboBoxEditor):
    """Editor for the pie chart grouping."""

    def __init__(self, parent=None):
        super().__init__(
            'chart_mode',
            [('One slice per expense', 'expense'), ('One slice per category', 'category')],
            parent=parent,
        )


class BoolEditor(QtWidgets.QCheckBox):
    """Check box bound to a boolean metadata key."""

    def __init__(self, property_name: str, label: str, parent=None):
        super().__init__(label, parent=parent)
        self.property_name = property_name

        self.init_data()
        self._connect_signals()

    def to_value(self, checked: bool):
        return checked

    def from_value(self, value) -> bool:
        return bool(value)

    def init_data(self):
        self.blockSignals(True)
        self.setChecked(self.from_value(lib.settings[self.property_name]))
        self.blockSignals(False)

    def _connect_signals(self):
        self.toggled.connect(self.save)
        signals.metadataChanged.connect(self.on_metadata_changed)
        signals.configSectionChanged.connect(self.on_section_changed)

    @QtCore.Slot(str, object)
    def on_metadata_changed(self, key: str, value: object) -> None:
        if key == self.property_name:
            self.init_data()

    @QtCore.Slot(str)
    def on_section_changed(self, section: str) -> None:
        if section == 'metadata':
            self.init_data()

    @QtCore.Slot(bool)
    def save(self, checked: bool):
        lib.settings[self.property_name] = self.to_value(checked)


class DarkModeEditor(BoolEditor):
    """Check box switching the theme between light and dark."""

    def __init__(self, parent=None):
        super().__init__('theme', 'Dark Mode', parent=parent)

    def to_value(self, checked: bool):
        return ui.Theme.Dark.value if checked else ui.Theme.Light.value

    def from_value(self, value) -> bool:
        return value == ui.Theme.Dark.value


class NameEditor(QtWidgets.QLineEdit):
    """Line edit for the document name shown in the window title."""

    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self.setPlaceholderText('Untitled')

        self.init_data()
        self._connect_signals()

    def init_data(self):
        self.blockSignals(True)
        self.setText(lib.settings['name'])
        self.blockSignals(False)

    def _connect_signals(self):
        self.editingFinished.connect(self.save)
        signals.metadataChanged.connect(self.on_metadata_changed)
        signals.configSectionChanged.connect(self.on_section_changed)

    @QtCore.Slot(str, object)
    def on_metadata_changed(self, key: str, value: object) -> None:
        if key == 'name' and value != self.text():
            self.init_data()

    @QtCore.Slot(str)
    def on_section_changed(self, section: str) -> None:
        if section == 'metadata':
            self.init_data()

    @QtCore.Slot()
    def save(self):
        lib.settings['name'] = self.text().strip()


class SettingsWidget(QtWidgets.QWidget):

    def __init__(self, parent=None):
        super().__init__(parent)

        self.setObjectName('SettingsWidget')
        self.setWindowTitle('Settings')

        self.name_editor = None
        self.dark_mode_editor = None
        self.chart_mode_editor = None
        self.legend_editor = None
        self.tooltip_editor = None

        self._create_ui()
        self._connect_signals()

    def _add_section(self, title: str, parent: QtWidgets.QWidget) -> QtWidgets.QGroupBox:
        group = QtWidgets.QGroupBox(title, parent)
        QtWidgets.QFormLayout(group)

        o = ui.Size.Margin(0.5)
        group.layout().setContentsMargins(o, o, o, o)
        group.layout().setSpacing(o)
        group.layout().setFormAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignTop)

        parent.layout().addWidget(group, 0)
        return group

    def _create_ui(self):
        QtWidgets.QVBoxLayout(self)
        o = ui.Size.Margin(0.5)
        self.layout().setContentsMargins(o, o, o, o)
        self.layout().setSpacing(o)
        self.layout().setAlignment(QtCore.Qt.AlignTop)

        group = self._add_section('Appearance', self)
        self.name_editor = NameEditor(group)
        group.layout().addRow('Title', self.name_editor)
        self.dark_mode_editor = DarkModeEditor(group)
        group.layout().addRow(self.dark_mode_editor)

        group = self._add_section('Pie Chart', self)
        self.chart_mode_editor = ChartModeEditor(group)
        group.layout().addRow('Slices', self.chart_mode_editor)
        self.legend_editor = BoolEditor('show_legend', 'Show Legend', group)
        group.layout().addRow(self.legend_editor)
        self.tooltip_editor = BoolEditor('show_tooltip', 'Show Tooltip', group)
        group.layout().addRow(self.tooltip_editor)

        group = self._add_section('Data', self)
        self.revert_button = QtWidgets.QPushButton('Revert Settings', group)
        group.layout().addRow(self.revert_button)
        self.reset_button = QtWidgets.QPushButton('Clear All Expenses', group)
        group.layout().addRow(self.reset_button)

        self.layout().addStretch(1)

    def _connect_signals(self):
        self.revert_button.clicked.connect(lambda: lib.settings.revert_section('metadata'))

        @QtCore.Slot()
        def clear_expenses() -> None:
            res = QtWidgets.QMessageBox.question(
                self, 'Clear All Expenses',
                'Remove every expense and restore the default categories?',
            )
            if res != QtWidgets.QMessageBox.Yes:
                return
            store.store.reset()

        self.reset_button.clicked.connect(clear_expenses)

    def sizeHint(self):
        return QtCore.QSize(
            ui.Size.DefaultWidth(0.6),
            ui.Size.DefaultHeight(0.8)
        )


class SettingsDockWidget(DockableWidget):
    """Dockable widget for editing app settings."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__('Settings', parent=parent, min_width=ui.Size.DefaultWidth(0.5))
        self.setObjectName('ExpensePieSettingsWidget')

        settings_widget = SettingsWidget(parent=self)
        settings_widget.setWindowFlags(QtCore.Qt.Widget)
        self.setWidget(settings_widget)
