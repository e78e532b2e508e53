"""Main window composition and UI entry points for ExpensePie.

This module defines:
    - show(): initialize and display the main window
    - MainWindow: the pie chart surrounded by the expense, category, settings and log panels
"""
import logging

from PySide6 import QtWidgets, QtCore, QtGui

from . import ui
from ..data.view.expense import ExpenseDockWidget
from ..data.view.piechart import PieChartView
from ..log.view import LogDockWidget
from ..settings import lib
from ..settings.category_editor import CategoryDockWidget
from ..settings.settings import SettingsDockWidget
from ..ui.actions import signals

widget = None


def show():
    global widget

    if widget is None:
        widget = MainWindow()

    widget.show()


class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, parent=None):
        super().__init__(parent=parent)
        self._configure_dock_behavior()
        self.setObjectName('ExpensePieMainWindow')

        self.toolbar: QtWidgets.QToolBar
        self.piechart_view: PieChartView

        self.expense_view: ExpenseDockWidget
        self.category_view: CategoryDockWidget
        self.settings_view: SettingsDockWidget
        self.log_view: LogDockWidget

        self._create_ui()
        self._init_actions()
        self._connect_signals()

        self.update_title()

    def _configure_dock_behavior(self) -> None:
        opts = self.dockOptions()
        opts |= QtWidgets.QMainWindow.AllowNestedDocks | QtWidgets.QMainWindow.AnimatedDocks
        self.setDockOptions(opts)

        for area, pos in (
                (QtCore.Qt.LeftDockWidgetArea, QtWidgets.QTabWidget.West),
                (QtCore.Qt.RightDockWidgetArea, QtWidgets.QTabWidget.East),
                (QtCore.Qt.BottomDockWidgetArea, QtWidgets.QTabWidget.South),
        ):
            self.setTabPosition(area, pos)

    def _create_ui(self) -> None:
        """
        Build the main UI: the chart as central widget, the toolbar and the docks.
        """
        self.piechart_view = PieChartView(parent=self)
        self.piechart_view.setObjectName('ExpensePiePieChartView')
        self.setCentralWidget(self.piechart_view)

        self.toolbar = QtWidgets.QToolBar(self)
        self.toolbar.setObjectName('ExpensePieActionToolBar')
        self.toolbar.setMovable(False)
        self.addToolBar(QtCore.Qt.TopToolBarArea, self.toolbar)

        self.setStatusBar(QtWidgets.QStatusBar(self))

        dock_configs = [
            {
                'attr': 'expense_view',
                'class': ExpenseDockWidget,
                'area': QtCore.Qt.LeftDockWidgetArea,
                'visible': True},
            {
                'attr': 'category_view',
                'class': CategoryDockWidget,
                'area': QtCore.Qt.RightDockWidgetArea,
                'visible': False},
            {
                'attr': 'settings_view',
                'class': SettingsDockWidget,
                'area': QtCore.Qt.RightDockWidgetArea,
                'visible': False},
            {
                'attr': 'log_view',
                'class': LogDockWidget,
                'area': QtCore.Qt.BottomDockWidgetArea,
                'visible': False},
        ]
        for cfg in dock_configs:
            widget = cfg['class'](parent=self)
            setattr(self, cfg['attr'], widget)
            self.addDockWidget(cfg['area'], widget)
            widget.setVisible(cfg['visible'])

            logging.debug(f'Added dock {widget.objectName()} in area {cfg["area"]}')

        self.tabifyDockWidget(self.category_view, self.settings_view)

    def _init_actions(self) -> None:
        """
        Create the toolbar actions toggling the dock widgets.
        """

        def _make_action(_cfg: dict) -> QtGui.QAction:
            if _cfg.get('separator'):
                action = QtGui.QAction(self)
                action.setSeparator(True)
                return action

            action = QtGui.QAction(_cfg['label'], self)
            if 'trigger' in _cfg:
                action.triggered.connect(_cfg['trigger'])

            if 'widget_attr' in _cfg:
                _widget = getattr(self, _cfg['widget_attr'])
                action.setCheckable(True)
                action.setChecked(_widget.isVisible())
                action.triggered.connect(_widget.setVisible)
                _widget.toggled.connect(action.setChecked)

            if 'shortcut' in _cfg:
                action.setShortcut(_cfg['shortcut'])
                action.setShortcutContext(QtCore.Qt.ApplicationShortcut)

            return action

        action_configs = [
            {
                'label': 'Expenses',
                'widget_attr': 'expense_view',
                'shortcut': 'Ctrl+1'
            },
            {
                'label': 'Categories',
                'widget_attr': 'category_view',
                'shortcut': 'Ctrl+2'
            },
            {'separator': True},
            {
                'label': 'Settings',
                'widget_attr': 'settings_view',
                'shortcut': 'Ctrl+3'
            },
            {
                'label': 'Logs',
                'widget_attr': 'log_view',
                'shortcut': 'Ctrl+L'
            },
        ]

        for cfg in action_configs:
            act = _make_action(cfg)
            self.toolbar.addAction(act)
            self.addAction(act)

    def _connect_signals(self) -> None:
        signals.showLogs.connect(self.log_view.reveal)
        signals.showSettings.connect(self.settings_view.reveal)
        signals.showCategories.connect(self.category_view.reveal)
        signals.error.connect(lambda message: self.statusBar().showMessage(message, 5000))

        @QtCore.Slot(str, object)
        def metadata_changed(key: str, value: object) -> None:
            if key == 'name':
                self.update_title()

        signals.metadataChanged.connect(metadata_changed)

    @QtCore.Slot()
    def update_title(self) -> None:
        name = lib.settings['name']
        self.setWindowTitle(f'{name} - {lib.app_name}' if name else lib.app_name)

    def sizeHint(self):
        return QtCore.QSize(
            ui.Size.DefaultWidth(1.6),
            ui.Size.DefaultHeight(1.4)
        )
