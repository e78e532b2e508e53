"""In-memory store for expense categories and expense entries.

Categories and expenses are kept in insertion order and addressed by explicit,
caller-assignable string ids compared by value. Every mutation emits
``signals.categoriesChanged`` or ``signals.expensesChanged`` so views can
rebuild, and the pie chart is recomputed from scratch each time.

The store is process-lifetime only, nothing is persisted.
"""
import dataclasses
import logging
import math
import uuid
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..settings import lib
from ..status import status


@dataclass(frozen=True, slots=True)
class Category:
    """An expense category."""
    id: str
    name: str
    color: str  # '#RRGGBB'
    emoji: str = ''


@dataclass(frozen=True, slots=True)
class Expense:
    """A single expense entry recorded against a category."""
    id: str
    category_id: str
    amount: float
    detail: Optional[str] = None


def new_id() -> str:
    return uuid.uuid4().hex


def parse_amount(value: Union[str, int, float]) -> float:
    """Convert form input to a finite, non-negative amount.

    Args:
        value: Numeric text such as ``'12.50'`` or a number.

    Returns:
        float: The parsed amount.

    Raises:
        AmountInvalidException: If the value is not a number, is negative, or is not finite.
    """
    if isinstance(value, bool):
        raise status.AmountInvalidException(f'Got "{value}".')

    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise status.AmountInvalidException('The amount is empty.')
        try:
            amount = float(text)
        except ValueError:
            raise status.AmountInvalidException(f'Got "{value}".') from None
    elif isinstance(value, (int, float)):
        amount = float(value)
    else:
        raise status.AmountInvalidException(f'Got {type(value)}.')

    if not math.isfinite(amount) or amount < 0:
        raise status.AmountInvalidException(f'Got "{value}".')
    return amount


def _clean_detail(detail: Optional[str]) -> Optional[str]:
    if detail is None:
        return None
    detail = str(detail).strip()
    return detail or None


class StoreAPI:
    """Ordered, id-addressed collections of categories and expenses."""

    def __init__(self, categories: Optional[List[Dict[str, str]]] = None) -> None:
        """Create a store seeded with category templates.

        Args:
            categories: Category templates with 'name', 'color' and optional 'emoji'.
                Defaults to the 'categories' section of the settings.
        """
        self._categories: List[Category] = []
        self._expenses: List[Expense] = []
        self._signals_blocked: bool = False

        self.reset(categories)

    def block_signals(self, v: bool) -> None:
        self._signals_blocked = v

    def _emit(self, name: str) -> None:
        if self._signals_blocked:
            return
        from ..ui.actions import signals
        getattr(signals, name).emit()

    def reset(self, categories: Optional[List[Dict[str, str]]] = None) -> None:
        """Clear all expenses and reseed the categories from templates."""
        if categories is None:
            categories = lib.settings.get_section('categories') or []

        blocked = self._signals_blocked
        self._signals_blocked = True
        try:
            self._categories = []
            self._expenses = []
            for template in categories:
                self.add_category(
                    template['name'],
                    template['color'],
                    emoji=template.get('emoji', ''),
                )
        finally:
            self._signals_blocked = blocked

        logging.debug(f'Store reset with {len(self._categories)} categories.')
        self._emit('categoriesChanged')
        self._emit('expensesChanged')

    # Categories

    def categories(self) -> List[Category]:
        return list(self._categories)

    def _category_index(self, category_id: str) -> int:
        for idx, category in enumerate(self._categories):
            if category.id == category_id:
                return idx
        raise status.CategoryNotFoundException(f'Category id: "{category_id}".')

    def get_category(self, category_id: str) -> Category:
        """Return the category with the given id.

        Raises:
            CategoryNotFoundException: If no category has the id.
        """
        return self._categories[self._category_index(category_id)]

    def has_category(self, category_id: str) -> bool:
        return any(c.id == category_id for c in self._categories)

    def _verify_category_name(self, name: str, ignore_id: Optional[str] = None) -> str:
        if not isinstance(name, str) or not name.strip():
            raise status.CategoryInvalidException('The name is empty.')
        name = name.strip()
        for category in self._categories:
            if category.id != ignore_id and category.name.lower() == name.lower():
                raise status.CategoryInvalidException(f'"{name}" already exists.')
        return name

    def add_category(self, name: str, color: str, emoji: str = '',
                     category_id: Optional[str] = None) -> Category:
        """Append a new category.

        Args:
            name: Display name, unique ignoring case.
            color: Color name or '#RRGGBB' hex value.
            emoji: Optional emoji shown next to the name.
            category_id: Optional explicit id. Generated when omitted.

        Returns:
            Category: The stored category.

        Raises:
            CategoryInvalidException: If the name is empty, duplicated, or the id is taken.
            ColorInvalidException: If the color cannot be resolved.
        """
        name = self._verify_category_name(name)
        color = lib.resolve_color(color)

        category_id = category_id or new_id()
        if self.has_category(category_id):
            raise status.CategoryInvalidException(f'Id "{category_id}" already exists.')

        category = Category(category_id, name, color, (emoji or '').strip())
        self._categories.append(category)
        logging.debug(f'Added category {category}')

        self._emit('categoriesChanged')
        return category

    def update_category(self, category_id: str, name: Optional[str] = None,
                        color: Optional[str] = None, emoji: Optional[str] = None) -> Category:
        """Replace fields of an existing category, keeping its id and position.

        Raises:
            CategoryNotFoundException: If no category has the id.
            CategoryInvalidException: If the new name is empty or duplicated.
            ColorInvalidException: If the new color cannot be resolved.
        """
        idx = self._category_index(category_id)
        category = self._categories[idx]

        changes = {}
        if name is not None:
            changes['name'] = self._verify_category_name(name, ignore_id=category_id)
        if color is not None:
            changes['color'] = lib.resolve_color(color)
        if emoji is not None:
            changes['emoji'] = emoji.strip()

        category = dataclasses.replace(category, **changes)
        self._categories[idx] = category
        logging.debug(f'Updated category {category}')

        self._emit('categoriesChanged')
        return category

    def remove_category(self, category_id: str) -> Category:
        """Remove a category that no expense references.

        Raises:
            CategoryNotFoundException: If no category has the id.
            CategoryInUseException: If expenses still reference the category.
        """
        idx = self._category_index(category_id)
        count = sum(1 for e in self._expenses if e.category_id == category_id)
        if count:
            raise status.CategoryInUseException(f'{count} expense(s) use "{self._categories[idx].name}".')

        category = self._categories.pop(idx)
        logging.debug(f'Removed category {category}')

        self._emit('categoriesChanged')
        return category

    # Expenses

    def expenses(self) -> List[Expense]:
        return list(self._expenses)

    def _expense_index(self, expense_id: str) -> int:
        for idx, expense in enumerate(self._expenses):
            if expense.id == expense_id:
                return idx
        raise status.ExpenseNotFoundException(f'Expense id: "{expense_id}".')

    def get_expense(self, expense_id: str) -> Expense:
        """Return the expense with the given id.

        Raises:
            ExpenseNotFoundException: If no expense has the id.
        """
        return self._expenses[self._expense_index(expense_id)]

    def add_expense(self, category_id: str, amount: Union[str, float], detail: Optional[str] = None,
                    expense_id: Optional[str] = None) -> Expense:
        """Append a new expense.

        Args:
            category_id: Id of an existing category.
            amount: Non-negative number, or numeric text from a form field.
            detail: Optional free-text note. Blank text is stored as None.
            expense_id: Optional explicit id. Generated when omitted.

        Returns:
            Expense: The stored expense.

        Raises:
            CategoryNotFoundException: If the category does not exist.
            AmountInvalidException: If the amount is invalid.
        """
        self._category_index(category_id)
        amount = parse_amount(amount)

        expense_id = expense_id or new_id()
        if any(e.id == expense_id for e in self._expenses):
            raise status.ExpenseInvalidException(f'Id "{expense_id}".')

        expense = Expense(expense_id, category_id, amount, _clean_detail(detail))
        self._expenses.append(expense)
        logging.debug(f'Added expense {expense}')

        self._emit('expensesChanged')
        return expense

    def update_expense(self, expense_id: str, category_id: Optional[str] = None,
                       amount: Optional[Union[str, float]] = None,
                       detail: Optional[str] = None) -> Expense:
        """Replace fields of an existing expense, keeping its id and position.

        Pass ``detail=''`` to clear the detail.

        Raises:
            ExpenseNotFoundException: If no expense has the id.
            CategoryNotFoundException: If the new category does not exist.
            AmountInvalidException: If the new amount is invalid.
        """
        idx = self._expense_index(expense_id)
        expense = self._expenses[idx]

        changes = {}
        if category_id is not None:
            self._category_index(category_id)
            changes['category_id'] = category_id
        if amount is not None:
            changes['amount'] = parse_amount(amount)
        if detail is not None:
            changes['detail'] = _clean_detail(detail)

        expense = dataclasses.replace(expense, **changes)
        self._expenses[idx] = expense
        logging.debug(f'Updated expense {expense}')

        self._emit('expensesChanged')
        return expense

    def remove_expense(self, expense_id: str) -> Expense:
        """Remove an expense by id.

        Raises:
            ExpenseNotFoundException: If no expense has the id.
        """
        expense = self._expenses.pop(self._expense_index(expense_id))
        logging.debug(f'Removed expense {expense}')

        self._emit('expensesChanged')
        return expense


store = StoreAPI()
