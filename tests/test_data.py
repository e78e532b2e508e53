"""
Tests for ExpensePie.data.data.

Run:
    python -m unittest tests.test_data
"""
import unittest

from ExpensePie.core import partition
from ExpensePie.core import store
from ExpensePie.data import data
from ExpensePie.settings import lib
from tests.base import BaseTestCase


class DataTests(BaseTestCase):

    def setUp(self):
        super().setUp()
        self.food = self.category_id('Food')
        self.transport = self.category_id('Transport')
        self.health = self.category_id('Health')

    def add_expenses(self):
        store.store.add_expense(self.transport, 30, detail='Bus pass')
        store.store.add_expense(self.food, 10)
        store.store.add_expense(self.transport, 20)
        store.store.add_expense(self.food, 40, detail='Dinner')

    def test_get_data_empty(self):
        df = data.get_data()
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), lib.EXPENSE_DATA_COLUMNS)

    def test_get_data(self):
        self.add_expenses()
        df = data.get_data()
        self.assertEqual(list(df.columns), lib.EXPENSE_DATA_COLUMNS)
        self.assertEqual(len(df), 4)
        self.assertEqual(df['amount'].tolist(), [30.0, 10.0, 20.0, 40.0])
        self.assertEqual(df['category'].tolist(), [self.transport, self.food, self.transport, self.food])
        self.assertEqual(df['detail'].iloc[0], 'Bus pass')

    def test_get_summary_empty(self):
        df = data.get_summary()
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), lib.SUMMARY_DATA_COLUMNS)

    def test_get_summary(self):
        self.add_expenses()
        df = data.get_summary()
        self.assertEqual(list(df.columns), lib.SUMMARY_DATA_COLUMNS)

        # Category order, not first-seen order
        self.assertEqual(df['category'].tolist(), [self.food, self.transport])
        self.assertEqual(df['total'].tolist(), [50.0, 50.0])
        self.assertEqual(df['weight'].tolist(), [0.5, 0.5])
        self.assertEqual(len(df['transactions'].iloc[0]), 2)

    def test_get_summary_zero_total(self):
        store.store.add_expense(self.food, 0)
        df = data.get_summary()
        self.assertEqual(df['weight'].tolist(), [0.0])

    def test_get_entries_expense_mode(self):
        self.add_expenses()
        result = data.get_entries(data.ChartMode.Expense)
        self.assertEqual(
            result,
            [
                partition.WeightedEntry(30.0, self.transport),
                partition.WeightedEntry(10.0, self.food),
                partition.WeightedEntry(20.0, self.transport),
                partition.WeightedEntry(40.0, self.food),
            ]
        )

    def test_get_entries_category_mode(self):
        self.add_expenses()
        store.store.add_expense(self.health, 100)
        result = data.get_entries('category')
        self.assertEqual(
            result,
            [
                partition.WeightedEntry(50.0, self.food),
                partition.WeightedEntry(50.0, self.transport),
                partition.WeightedEntry(100.0, self.health),
            ]
        )

    def test_get_entries_follows_setting(self):
        self.add_expenses()
        self.assertEqual(len(data.get_entries()), 4)
        lib.settings['chart_mode'] = 'category'
        self.assertEqual(len(data.get_entries()), 2)

    def test_get_entries_rejects_unknown_mode(self):
        with self.assertRaises(ValueError):
            data.get_entries('weekly')

    def test_get_slices(self):
        store.store.add_expense(self.food, 1)
        store.store.add_expense(self.transport, 1)
        store.store.add_expense(self.health, 2)
        result = data.get_slices('expense')
        self.assertEqual(
            result,
            [
                partition.AngularSlice(0.0, 90.0, self.food),
                partition.AngularSlice(90.0, 180.0, self.transport),
                partition.AngularSlice(180.0, 360.0, self.health),
            ]
        )

    def test_get_slices_empty(self):
        self.assertEqual(data.get_slices(), [])
        store.store.add_expense(self.food, 0)
        self.assertEqual(data.get_slices(), [])

    def test_slices_follow_edits(self):
        first = store.store.add_expense(self.food, 1)
        store.store.add_expense(self.transport, 1)
        self.assertEqual(data.get_slices()[0].end_angle, 180.0)

        store.store.update_expense(first.id, amount=3)
        self.assertEqual(data.get_slices()[0].end_angle, 270.0)

        store.store.remove_expense(first.id)
        self.assertEqual(data.get_slices(), [partition.AngularSlice(0.0, 360.0, self.transport)])


if __name__ == '__main__':
    unittest.main()
