"""Expense form and list view.

This module provides:
    - ExpenseEditor: form for adding a new expense or editing an existing one
    - ExpenseView: table of expenses with edit and delete actions
    - ExpenseWidget: the form and the table stacked together
    - ExpenseDockWidget: dockable container wrapping ExpenseWidget
"""
import logging
from typing import Optional

from PySide6 import QtWidgets, QtGui, QtCore

from ..model.expense import ExpenseModel, Columns, IdRole, format_amount
from ...core import store
from ...status import status
from ...ui import ui
from ...ui.actions import signals
from ...ui.dockable_widget import DockableWidget


def show_error(parent: Optional[QtWidgets.QWidget], ex: status.BaseStatusException) -> None:
    QtWidgets.QMessageBox.warning(parent, 'Error', str(ex))


class ExpenseEditor(QtWidgets.QWidget):
    """Form for entering an expense.

    In add mode the form appends a new expense. Calling :meth:`edit` switches
    it to edit mode, where saving replaces the expense with the same id.
    """
    expenseSaved = QtCore.Signal(str)  # expense id

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpensePieExpenseEditor')

        self._expense_id: Optional[str] = None

        self.category_editor = None
        self.amount_editor = None
        self.detail_editor = None
        self.save_button = None
        self.cancel_button = None

        self._create_ui()
        self._connect_signals()
        self.init_categories()

    def _create_ui(self) -> None:
        QtWidgets.QFormLayout(self)
        o = ui.Size.Margin(0.5)
        self.layout().setContentsMargins(o, o, o, o)
        self.layout().setSpacing(o)

        self.category_editor = QtWidgets.QComboBox(self)
        self.layout().addRow('Category', self.category_editor)

        self.amount_editor = QtWidgets.QLineEdit(self)
        self.amount_editor.setPlaceholderText('Amount')
        self.amount_editor.setInputMethodHints(QtCore.Qt.ImhFormattedNumbersOnly)
        self.layout().addRow('Amount', self.amount_editor)

        self.detail_editor = QtWidgets.QLineEdit(self)
        self.detail_editor.setPlaceholderText('Detail (optional)')
        self.layout().addRow('Detail', self.detail_editor)

        row = QtWidgets.QWidget(self)
        QtWidgets.QHBoxLayout(row)
        row.layout().setContentsMargins(0, 0, 0, 0)

        self.save_button = QtWidgets.QPushButton('Add Expense', row)
        self.save_button.setDefault(True)
        row.layout().addWidget(self.save_button, 1)

        self.cancel_button = QtWidgets.QPushButton('Cancel', row)
        self.cancel_button.setHidden(True)
        row.layout().addWidget(self.cancel_button, 0)

        self.layout().addRow(row)

    def _connect_signals(self) -> None:
        self.save_button.clicked.connect(self.save)
        self.amount_editor.returnPressed.connect(self.save)
        self.detail_editor.returnPressed.connect(self.save)
        self.cancel_button.clicked.connect(self.reset)

        signals.categoriesChanged.connect(self.init_categories)
        signals.expenseEditRequested.connect(self.edit)

    @QtCore.Slot()
    def init_categories(self) -> None:
        current = self.category_editor.currentData()

        self.category_editor.blockSignals(True)
        self.category_editor.clear()
        for category in store.store.categories():
            label = f'{category.emoji} {category.name}'.strip()
            pixmap = QtGui.QPixmap(ui.Size.Margin(0.6), ui.Size.Margin(0.6))
            pixmap.fill(QtGui.QColor(category.color))
            self.category_editor.addItem(QtGui.QIcon(pixmap), label, userData=category.id)

        idx = self.category_editor.findData(current)
        self.category_editor.setCurrentIndex(max(idx, 0))
        self.category_editor.blockSignals(False)

    @property
    def expense_id(self) -> Optional[str]:
        return self._expense_id

    @QtCore.Slot(str)
    def edit(self, expense_id: str) -> None:
        """Load an existing expense into the form for editing."""
        try:
            expense = store.store.get_expense(expense_id)
        except status.ExpenseNotFoundException as ex:
            show_error(self, ex)
            return

        self._expense_id = expense.id
        idx = self.category_editor.findData(expense.category_id)
        self.category_editor.setCurrentIndex(max(idx, 0))
        self.amount_editor.setText(format_amount(expense.amount))
        self.detail_editor.setText(expense.detail or '')

        self.save_button.setText('Save Expense')
        self.cancel_button.setHidden(False)
        self.amount_editor.setFocus()

    @QtCore.Slot()
    def reset(self) -> None:
        """Clear the form and return to add mode."""
        self._expense_id = None
        self.amount_editor.clear()
        self.detail_editor.clear()
        self.save_button.setText('Add Expense')
        self.cancel_button.setHidden(True)

    @QtCore.Slot()
    def save(self) -> None:
        """Add or update the expense from the form fields.

        Invalid input leaves the form untouched and shows the error.
        """
        category_id = self.category_editor.currentData()
        if not category_id:
            show_error(self, status.CategoryNotFoundException('Add a category first.'))
            return

        try:
            if self._expense_id:
                expense = store.store.update_expense(
                    self._expense_id,
                    category_id=category_id,
                    amount=self.amount_editor.text(),
                    detail=self.detail_editor.text(),
                )
            else:
                expense = store.store.add_expense(
                    category_id,
                    self.amount_editor.text(),
                    detail=self.detail_editor.text(),
                )
        except status.BaseStatusException as ex:
            show_error(self, ex)
            return

        logging.debug(f'Saved expense {expense.id}')
        self.reset()
        self.expenseSaved.emit(expense.id)


class ExpenseView(QtWidgets.QTableView):
    """Table view listing every expense with edit and delete actions."""

    def __init__(self, parent=None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpensePieExpenseView')
        self.verticalHeader().hide()

        self.setSelectionMode(QtWidgets.QAbstractItemView.SingleSelection)
        self.setSelectionBehavior(QtWidgets.QAbstractItemView.SelectRows)
        self.setEditTriggers(QtWidgets.QAbstractItemView.NoEditTriggers)
        self.setShowGrid(False)
        self.setWordWrap(False)
        self.setTextElideMode(QtCore.Qt.ElideRight)

        self.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)

        self._init_model()
        self._init_actions()
        self._connect_signals()

    def _init_model(self) -> None:
        model = ExpenseModel(parent=self)
        self.setModel(model)
        self._init_section_sizing()

    def _init_section_sizing(self) -> None:
        header = self.horizontalHeader()
        header.setSectionResizeMode(Columns.Emoji.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Category.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Amount.value, QtWidgets.QHeaderView.ResizeToContents)
        header.setSectionResizeMode(Columns.Detail.value, QtWidgets.QHeaderView.Stretch)
        header = self.verticalHeader()
        header.setSectionResizeMode(QtWidgets.QHeaderView.Fixed)
        header.setDefaultSectionSize(ui.Size.RowHeight(1.0))

    def _init_actions(self) -> None:
        action = QtGui.QAction('Edit', self)
        action.setShortcut('Ctrl+E')
        action.setShortcutContext(QtCore.Qt.WidgetWithChildrenShortcut)
        action.triggered.connect(self.edit_selected)
        self.addAction(action)

        action = QtGui.QAction('Delete', self)
        action.setShortcuts(['Delete', 'Backspace'])
        action.setShortcutContext(QtCore.Qt.WidgetWithChildrenShortcut)
        action.triggered.connect(self.delete_selected)
        self.addAction(action)

        action = QtGui.QAction('', self)
        action.setSeparator(True)
        action.setEnabled(False)
        self.addAction(action)

        action = QtGui.QAction('Manage Categories...', self)
        action.triggered.connect(signals.showCategories)
        self.addAction(action)

        action = QtGui.QAction('Open Settings...', self)
        action.setShortcuts(['Ctrl+,'])
        action.setShortcutContext(QtCore.Qt.WidgetWithChildrenShortcut)
        action.triggered.connect(signals.showSettings)
        self.addAction(action)

    def _connect_signals(self) -> None:
        self.doubleClicked.connect(self.edit_selected)

    def selected_expense_id(self) -> str:
        sel = self.selectionModel()
        if not sel.hasSelection():
            return ''
        index = next(iter(sel.selectedIndexes()), QtCore.QModelIndex())
        if not index.isValid():
            return ''
        return index.data(IdRole) or ''

    def select_expense(self, expense_id: str) -> None:
        row = self.model().row_of(expense_id)
        if row < 0:
            return
        self.selectRow(row)

    @QtCore.Slot()
    def edit_selected(self) -> None:
        expense_id = self.selected_expense_id()
        if not expense_id:
            logging.debug('No expense selected')
            return
        signals.expenseEditRequested.emit(expense_id)

    @QtCore.Slot()
    def delete_selected(self) -> None:
        expense_id = self.selected_expense_id()
        if not expense_id:
            logging.debug('No expense selected')
            return
        try:
            store.store.remove_expense(expense_id)
        except status.BaseStatusException as ex:
            show_error(self, ex)


class ExpenseWidget(QtWidgets.QWidget):
    """The expense form stacked above the expense list."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpensePieExpenseWidget')

        QtWidgets.QVBoxLayout(self)
        self.layout().setContentsMargins(0, 0, 0, 0)
        self.layout().setSpacing(ui.Size.Margin(0.5))

        self.editor = ExpenseEditor(self)
        self.layout().addWidget(self.editor, 0)

        self.view = ExpenseView(self)
        self.layout().addWidget(self.view, 1)

        self.editor.expenseSaved.connect(self.view.select_expense)


class ExpenseDockWidget(DockableWidget):
    """Dockable widget for the expense form and list. Not closeable."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__('Expenses', parent=parent, closable=False)

        self.setObjectName('ExpensePieExpenseDockWidget')
        self.setWidget(ExpenseWidget(self))
