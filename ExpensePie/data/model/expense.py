import enum
import logging
from typing import Any, List

from PySide6 import QtCore, QtGui

from ...core import store
from ...ui import ui
from ...ui.actions import signals

IdRole = QtCore.Qt.UserRole + 1
CategoryRole = QtCore.Qt.UserRole + 2
AmountRole = QtCore.Qt.UserRole + 3


class Columns(enum.IntEnum):
    Emoji = 0
    Category = 1
    Amount = 2
    Detail = 3


def format_amount(amount: float) -> str:
    return f'{amount:.2f}'


class ExpenseModel(QtCore.QAbstractTableModel):
    header = ['', 'Category', 'Amount', 'Detail']

    def __init__(self, parent: QtCore.QObject | None = None) -> None:
        super().__init__(parent=parent)
        self.setObjectName('ExpensePieExpenseModel')

        self._expenses: List[store.Expense] = []

        self._connect_signals()
        self.init_data()

    def _connect_signals(self) -> None:
        signals.expensesChanged.connect(self.init_data)
        signals.categoriesChanged.connect(self.init_data)
        signals.metadataChanged.connect(self.on_metadata_changed)

    @QtCore.Slot()
    def init_data(self) -> None:
        self.beginResetModel()
        self._expenses = store.store.expenses()
        self.endResetModel()
        logging.debug(f'ExpenseModel: loaded {len(self._expenses)} expenses')

    @QtCore.Slot(str, object)
    def on_metadata_changed(self, key: str, _: object) -> None:
        if key == 'theme' and self.rowCount():
            self.dataChanged.emit(
                self.index(0, 0),
                self.index(self.rowCount() - 1, self.columnCount() - 1)
            )

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._expenses)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self.header)

    def expense(self, row: int) -> store.Expense:
        return self._expenses[row]

    def row_of(self, expense_id: str) -> int:
        for row, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return row
        return -1

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole) -> Any:
        if not index.isValid():
            return None
        row = index.row()
        col = index.column()

        if row < 0 or row >= self.rowCount():
            return None

        expense = self._expenses[row]

        if role == IdRole:
            return expense.id
        if role == CategoryRole:
            return expense.category_id
        if role == AmountRole:
            return expense.amount

        if store.store.has_category(expense.category_id):
            category = store.store.get_category(expense.category_id)
        else:
            category = None

        # Tint rows with a faint wash of the category color
        if role == QtCore.Qt.BackgroundRole:
            color = QtGui.QColor(ui.category_color(expense.category_id))
            color.setAlphaF(0.1)
            return color

        if role in (QtCore.Qt.ToolTipRole, QtCore.Qt.StatusTipRole):
            return expense.detail or ''

        if col == Columns.Emoji and role == QtCore.Qt.DisplayRole:
            return category.emoji if category else ''

        if col == Columns.Category:
            if role == QtCore.Qt.DisplayRole:
                return category.name if category else expense.category_id
            if role == QtCore.Qt.ForegroundRole:
                return ui.category_color(expense.category_id)

        if col == Columns.Amount:
            if role == QtCore.Qt.DisplayRole:
                return format_amount(expense.amount)
            if role == QtCore.Qt.TextAlignmentRole:
                return QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter
            if role == QtCore.Qt.ForegroundRole:
                return ui.Color.SecondaryText()

        if col == Columns.Detail and role == QtCore.Qt.DisplayRole:
            return expense.detail or ''

        return None

    def headerData(self, section: int, orientation: QtCore.Qt.Orientation,
                   role: int = QtCore.Qt.DisplayRole) -> Any:
        if orientation == QtCore.Qt.Horizontal and role == QtCore.Qt.DisplayRole:
            if 0 <= section < len(self.header):
                return self.header[section]
        return None

    def flags(self, index: QtCore.QModelIndex) -> QtCore.Qt.ItemFlag:
        if not index.isValid():
            return QtCore.Qt.NoItemFlags
        return QtCore.Qt.ItemIsEnabled | QtCore.Qt.ItemIsSelectable
