"""
Tests for ExpensePie.core.store.

Run:
    python -m unittest tests.test_store
"""
import math
import unittest

from ExpensePie.core import store
from ExpensePie.settings import lib
from ExpensePie.status import status
from ExpensePie.ui.actions import signals
from tests.base import BaseTestCase, signal_spy


class ParseAmountTests(BaseTestCase):

    def test_parses_text(self):
        self.assertEqual(store.parse_amount('12.50'), 12.5)
        self.assertEqual(store.parse_amount('  3 '), 3.0)
        self.assertEqual(store.parse_amount('0'), 0.0)

    def test_accepts_numbers(self):
        self.assertEqual(store.parse_amount(4), 4.0)
        self.assertEqual(store.parse_amount(0.25), 0.25)

    def test_rejects_invalid_values(self):
        for bad in ('', '   ', 'abc', '-1', '1,5', 'nan', 'inf', -0.01, math.inf, True, None):
            with self.assertRaises(status.AmountInvalidException, msg=repr(bad)):
                store.parse_amount(bad)


class CategoryTests(BaseTestCase):

    def test_seeded_from_settings(self):
        names = [c.name for c in store.store.categories()]
        self.assertEqual(names, [c['name'] for c in lib.DEFAULT_SETTINGS['categories']])

    def test_seed_from_templates(self):
        s = store.StoreAPI(categories=[{'name': 'Rent', 'color': 'purple'}])
        self.assertEqual(len(s.categories()), 1)
        self.assertEqual(s.categories()[0].color, lib.NAMED_COLORS['purple'])
        self.assertEqual(s.categories()[0].emoji, '')

    def test_add_category(self):
        with signal_spy(signals.categoriesChanged) as emitted:
            category = store.store.add_category('Books', 'Orange', emoji='📚')
        self.assertEqual(category.name, 'Books')
        self.assertEqual(category.color, '#FF9500')
        self.assertEqual(category.emoji, '📚')
        self.assertEqual(store.store.categories()[-1], category)
        self.assertEqual(len(emitted), 1)

    def test_add_category_with_hex_color(self):
        category = store.store.add_category('Pets', '#a1b2c3')
        self.assertEqual(category.color, '#A1B2C3')

    def test_add_category_with_explicit_id(self):
        category = store.store.add_category('Pets', 'red', category_id='pets')
        self.assertEqual(category.id, 'pets')
        self.assertIs(store.store.get_category('pets'), category)

        with self.assertRaises(status.CategoryInvalidException):
            store.store.add_category('Other', 'red', category_id='pets')

    def test_ids_are_unique(self):
        ids = [c.id for c in store.store.categories()]
        self.assertEqual(len(ids), len(set(ids)))

    def test_add_category_rejects_bad_input(self):
        with self.assertRaises(status.CategoryInvalidException):
            store.store.add_category('  ', 'red')
        with self.assertRaises(status.CategoryInvalidException):
            store.store.add_category('food', 'red')
        with self.assertRaises(status.ColorInvalidException):
            store.store.add_category('Books', 'not-a-color')
        self.assertEqual(len(store.store.categories()), len(lib.DEFAULT_SETTINGS['categories']))

    def test_update_category(self):
        cid = self.category_id('Food')
        updated = store.store.update_category(cid, name='Groceries', color='green', emoji='🥦')
        self.assertEqual(updated.id, cid)
        self.assertEqual(updated.name, 'Groceries')
        self.assertEqual(updated.color, lib.NAMED_COLORS['green'])
        self.assertEqual(store.store.categories()[0], updated)

    def test_update_category_keeps_own_name(self):
        cid = self.category_id('Food')
        updated = store.store.update_category(cid, name='FOOD')
        self.assertEqual(updated.name, 'FOOD')

    def test_update_category_rejects_taken_name(self):
        cid = self.category_id('Food')
        with self.assertRaises(status.CategoryInvalidException):
            store.store.update_category(cid, name='Health')

    def test_unknown_category(self):
        with self.assertRaises(status.CategoryNotFoundException):
            store.store.get_category('missing')
        with self.assertRaises(status.CategoryNotFoundException):
            store.store.update_category('missing', name='x')
        with self.assertRaises(status.CategoryNotFoundException):
            store.store.remove_category('missing')
        self.assertFalse(store.store.has_category('missing'))

    def test_remove_category(self):
        cid = self.category_id('Health')
        removed = store.store.remove_category(cid)
        self.assertEqual(removed.name, 'Health')
        self.assertFalse(store.store.has_category(cid))

    def test_remove_category_in_use(self):
        cid = self.category_id('Food')
        store.store.add_expense(cid, 10)
        with self.assertRaises(status.CategoryInUseException):
            store.store.remove_category(cid)
        self.assertTrue(store.store.has_category(cid))

    def test_categories_returns_copy(self):
        store.store.categories().clear()
        self.assertTrue(store.store.categories())


class ExpenseTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.food = self.category_id('Food')
        self.transport = self.category_id('Transport')

    def test_add_expense(self):
        with signal_spy(signals.expensesChanged) as emitted:
            expense = store.store.add_expense(self.food, '12.50', detail='  Lunch ')
        self.assertEqual(expense.category_id, self.food)
        self.assertEqual(expense.amount, 12.5)
        self.assertEqual(expense.detail, 'Lunch')
        self.assertEqual(store.store.expenses(), [expense])
        self.assertEqual(len(emitted), 1)

    def test_blank_detail_is_none(self):
        expense = store.store.add_expense(self.food, 1, detail='   ')
        self.assertIsNone(expense.detail)

    def test_add_expense_with_explicit_id(self):
        store.store.add_expense(self.food, 1, expense_id='e1')
        self.assertEqual(store.store.get_expense('e1').amount, 1.0)
        with self.assertRaises(status.ExpenseInvalidException):
            store.store.add_expense(self.food, 2, expense_id='e1')

    def test_add_expense_rejects_bad_input(self):
        with self.assertRaises(status.CategoryNotFoundException):
            store.store.add_expense('missing', 1)
        with self.assertRaises(status.AmountInvalidException):
            store.store.add_expense(self.food, '-5')
        with self.assertRaises(status.AmountInvalidException):
            store.store.add_expense(self.food, 'twelve')
        self.assertEqual(store.store.expenses(), [])

    def test_insertion_order(self):
        a = store.store.add_expense(self.food, 3)
        b = store.store.add_expense(self.transport, 1)
        c = store.store.add_expense(self.food, 2)
        self.assertEqual([e.id for e in store.store.expenses()], [a.id, b.id, c.id])

    def test_update_expense_keeps_position(self):
        a = store.store.add_expense(self.food, 3, detail='Bread')
        b = store.store.add_expense(self.food, 4)
        updated = store.store.update_expense(a.id, category_id=self.transport, amount='7')
        self.assertEqual(updated.id, a.id)
        self.assertEqual(updated.category_id, self.transport)
        self.assertEqual(updated.amount, 7.0)
        self.assertEqual(updated.detail, 'Bread')
        self.assertEqual([e.id for e in store.store.expenses()], [a.id, b.id])

    def test_update_expense_clears_detail(self):
        a = store.store.add_expense(self.food, 3, detail='Bread')
        self.assertIsNone(store.store.update_expense(a.id, detail='').detail)

    def test_update_expense_rejects_bad_input(self):
        a = store.store.add_expense(self.food, 3)
        with self.assertRaises(status.ExpenseNotFoundException):
            store.store.update_expense('missing', amount=1)
        with self.assertRaises(status.CategoryNotFoundException):
            store.store.update_expense(a.id, category_id='missing')
        with self.assertRaises(status.AmountInvalidException):
            store.store.update_expense(a.id, amount='-1')
        self.assertEqual(store.store.get_expense(a.id), a)

    def test_remove_expense_by_id(self):
        a = store.store.add_expense(self.food, 3)
        b = store.store.add_expense(self.food, 3)
        store.store.remove_expense(a.id)
        self.assertEqual(store.store.expenses(), [b])
        with self.assertRaises(status.ExpenseNotFoundException):
            store.store.remove_expense(a.id)

    def test_reset(self):
        store.store.add_expense(self.food, 3)
        store.store.add_category('Books', 'red')
        with signal_spy(signals.expensesChanged) as expenses_emitted, \
                signal_spy(signals.categoriesChanged) as categories_emitted:
            store.store.reset()
        self.assertEqual(store.store.expenses(), [])
        self.assertEqual(len(store.store.categories()), len(lib.DEFAULT_SETTINGS['categories']))
        self.assertEqual(len(expenses_emitted), 1)
        self.assertEqual(len(categories_emitted), 1)

    def test_block_signals(self):
        store.store.block_signals(True)
        try:
            with signal_spy(signals.expensesChanged) as emitted:
                store.store.add_expense(self.food, 1)
        finally:
            store.store.block_signals(False)
        self.assertEqual(emitted, [])


if __name__ == '__main__':
    unittest.main()
