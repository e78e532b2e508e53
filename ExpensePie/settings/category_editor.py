"""Category editor: UI for adding, editing and removing expense categories.

Provides:
    - CategoriesModel: table model listing the store's categories (emoji, name, color)
    - CategoryEditor: the category table with a name/color/emoji form
    - CategoryDockWidget: dockable container wrapping CategoryEditor
"""
import logging
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from . import lib
from ..core import store
from ..status import status
from ..ui import ui
from ..ui.actions import signals
from ..ui.dockable_widget import DockableWidget

COL_EMOJI = 0
COL_NAME = 1
COL_COLOR = 2

IdRole = QtCore.Qt.UserRole + 1


class CategoriesModel(QtCore.QAbstractTableModel):
    """Read-only model of the store's categories, in store order.

    """
    HEADERS = {
        COL_EMOJI: '',
        COL_NAME: 'Name',
        COL_COLOR: 'Color',
    }

    def __init__(self, parent=None):
        super().__init__(parent)
        self._categories = []

        self._connect_signals()
        self.init_data()

    @QtCore.Slot()
    def init_data(self):
        self.beginResetModel()
        try:
            self._categories = store.store.categories()
        finally:
            self.endResetModel()

    def _connect_signals(self):
        signals.categoriesChanged.connect(self.init_data)

    def rowCount(self, parent=QtCore.QModelIndex()):
        return len(self._categories) if not parent.isValid() else 0

    def columnCount(self, parent=QtCore.QModelIndex()):
        return len(self.HEADERS) if not parent.isValid() else 0

    def data(self, index, role=QtCore.Qt.DisplayRole):
        if not index.isValid():
            return None
        row = index.row()
        col = index.column()
        cat = self._categories[row]

        if role == IdRole:
            return cat.id

        if role == QtCore.Qt.DisplayRole:
            if col == COL_EMOJI:
                return cat.emoji
            elif col == COL_NAME:
                return cat.name
            elif col == COL_COLOR:
                return cat.color

        if role == QtCore.Qt.DecorationRole and col == COL_COLOR:
            return QtGui.QColor(cat.color)

        if role == QtCore.Qt.ForegroundRole:
            if col == COL_NAME:
                return QtGui.QColor(cat.color)
            if col == COL_COLOR:
                return ui.Color.SecondaryText()
            return ui.Color.Text()

        if role == QtCore.Qt.TextAlignmentRole:
            if col == COL_EMOJI:
                return QtCore.Qt.AlignCenter
            return QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter

        return None

    def headerData(self, section, orientation, role=QtCore.Qt.DisplayRole):
        if orientation == QtCore.Qt.Horizontal and role == QtCore.Qt.DisplayRole:
            return self.HEADERS.get(section, '')
        return None

    def category_id(self, row: int) -> str:
        return self._categories[row].id

    def row_of(self, category_id: str) -> int:
        for row, cat in enumerate(self._categories):
            if cat.id == category_id:
                return row
        return -1


class CategoryEditor(QtWidgets.QWidget):
    """Widget for managing categories.

    Selecting a row loads it into the form. "Add" creates a new category from
    the form, "Save" updates the selected one and "Remove" deletes it.
    """

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpensePieCategoryEditor')

        self.view = None
        self.name_editor = None
        self.color_editor = None
        self.emoji_editor = None
        self.add_button = None
        self.save_button = None
        self.remove_button = None

        self._create_ui()
        self._connect_signals()
        self._update_buttons()

    def _create_ui(self) -> None:
        QtWidgets.QVBoxLayout(self)
        o = ui.Size.Margin(0.5)
        self.layout().setContentsMargins(o, o, o, o)
        self.layout().setSpacing(o)

        self.view = QtWidgets.QTableView(self)
        self.view.setModel(CategoriesModel(self.view))
        self.view.verticalHeader().hide()
        self.view.setShowGrid(False)
        self.view.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.view.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.view.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        header = self.view.horizontalHeader()
        header.setSectionResizeMode(COL_EMOJI, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(COL_NAME, QtWidgets.QHeaderView.Stretch)
        header.setSectionResizeMode(COL_COLOR, QtWidgets.QHeaderView.ResizeToContents)
        self.layout().addWidget(self.view, 1)

        form = QtWidgets.QWidget(self)
        QtWidgets.QFormLayout(form)
        form.layout().setContentsMargins(0, 0, 0, 0)

        self.name_editor = QtWidgets.QLineEdit(form)
        self.name_editor.setPlaceholderText('Name')
        form.layout().addRow('Name', self.name_editor)

        self.color_editor = QtWidgets.QComboBox(form)
        self.color_editor.setEditable(True)
        self.color_editor.setInsertPolicy(QtWidgets.QComboBox.NoInsert)
        for name, value in lib.NAMED_COLORS.items():
            pixmap = QtGui.QPixmap(ui.Size.Margin(0.6), ui.Size.Margin(0.6))
            pixmap.fill(QtGui.QColor(value))
            self.color_editor.addItem(QtGui.QIcon(pixmap), name)
        self.color_editor.lineEdit().setPlaceholderText('Color name or #RRGGBB')
        form.layout().addRow('Color', self.color_editor)

        self.emoji_editor = QtWidgets.QLineEdit(form)
        self.emoji_editor.setPlaceholderText('Emoji (optional)')
        self.emoji_editor.setMaxLength(8)
        form.layout().addRow('Emoji', self.emoji_editor)

        self.layout().addWidget(form, 0)

        row = QtWidgets.QWidget(self)
        QtWidgets.QHBoxLayout(row)
        row.layout().setContentsMargins(0, 0, 0, 0)

        self.add_button = QtWidgets.QPushButton('Add Category', row)
        row.layout().addWidget(self.add_button, 1)
        self.save_button = QtWidgets.QPushButton('Save', row)
        row.layout().addWidget(self.save_button, 0)
        self.remove_button = QtWidgets.QPushButton('Remove', row)
        row.layout().addWidget(self.remove_button, 0)

        self.layout().addWidget(row, 0)

    def _connect_signals(self) -> None:
        self.add_button.clicked.connect(self.add_category)
        self.save_button.clicked.connect(self.save_category)
        self.remove_button.clicked.connect(self.remove_category)
        self.view.selectionModel().selectionChanged.connect(self.load_selection)
        self.view.model().modelReset.connect(self._update_buttons)

    def selected_category_id(self) -> str:
        sel = self.view.selectionModel()
        if not sel.hasSelection():
            return ''
        index = next(iter(sel.selectedIndexes()), QtCore.QModelIndex())
        if not index.isValid():
            return ''
        return index.data(IdRole) or ''

    def select_category(self, category_id: str) -> None:
        row = self.view.model().row_of(category_id)
        if row >= 0:
            self.view.selectRow(row)

    @QtCore.Slot()
    def _update_buttons(self) -> None:
        has_selection = bool(self.selected_category_id())
        self.save_button.setEnabled(has_selection)
        self.remove_button.setEnabled(has_selection)

    @QtCore.Slot()
    def load_selection(self) -> None:
        self._update_buttons()
        category_id = self.selected_category_id()
        if not category_id:
            return

        category = store.store.get_category(category_id)
        self.name_editor.setText(category.name)
        name = next((k for k, v in lib.NAMED_COLORS.items() if v == category.color), category.color)
        self.color_editor.setCurrentText(name)
        self.emoji_editor.setText(category.emoji)

    def clear_form(self) -> None:
        self.name_editor.clear()
        self.color_editor.setCurrentText('')
        self.emoji_editor.clear()

    @QtCore.Slot()
    def add_category(self) -> None:
        try:
            category = store.store.add_category(
                self.name_editor.text(),
                self.color_editor.currentText(),
                emoji=self.emoji_editor.text(),
            )
        except status.BaseStatusException as ex:
            QtWidgets.QMessageBox.warning(self, 'Error', str(ex))
            return

        logging.debug(f'Category added: {category.name}')
        self.clear_form()
        self.select_category(category.id)

    @QtCore.Slot()
    def save_category(self) -> None:
        category_id = self.selected_category_id()
        if not category_id:
            return
        try:
            store.store.update_category(
                category_id,
                name=self.name_editor.text(),
                color=self.color_editor.currentText(),
                emoji=self.emoji_editor.text(),
            )
        except status.BaseStatusException as ex:
            QtWidgets.QMessageBox.warning(self, 'Error', str(ex))
            return
        self.select_category(category_id)

    @QtCore.Slot()
    def remove_category(self) -> None:
        category_id = self.selected_category_id()
        if not category_id:
            return
        try:
            store.store.remove_category(category_id)
        except status.BaseStatusException as ex:
            QtWidgets.QMessageBox.warning(self, 'Error', str(ex))
            return
        self.clear_form()


class CategoryDockWidget(DockableWidget):
    """Dockable widget for managing categories."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__('Categories', parent=parent, min_width=ui.Size.DefaultWidth(0.5))
        self.setObjectName('ExpensePieCategoryDockWidget')
        self.setWidget(CategoryEditor(self))
