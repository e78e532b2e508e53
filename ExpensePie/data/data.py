"""Data analytics API for expense analysis.

This module provides a high-level interface for reading the in-memory store as
pandas DataFrames and for turning expenses into the weighted entries and
angular slices rendered by the pie chart.
"""
import enum
import logging
from typing import List, Optional

import pandas as pd

from ..core import partition
from ..core import store
from ..settings import lib


class ChartMode(enum.StrEnum):
    Expense = 'expense'
    Category = 'category'


def get_data() -> pd.DataFrame:
    """Return all expenses as a DataFrame in insertion order.

    Returns:
        pd.DataFrame: Columns are lib.EXPENSE_DATA_COLUMNS. 'category' holds the category id.
    """
    rows = [
        {
            'id': e.id,
            'category': e.category_id,
            'amount': e.amount,
            'detail': e.detail,
        }
        for e in store.store.expenses()
    ]
    if not rows:
        return pd.DataFrame(columns=lib.EXPENSE_DATA_COLUMNS)

    df = pd.DataFrame(rows, columns=lib.EXPENSE_DATA_COLUMNS)
    df['amount'] = df['amount'].astype(float)
    return df


def get_summary() -> pd.DataFrame:
    """Summarize expenses per category.

    Categories without expenses are dropped. Rows follow the store's category order.

    Returns:
        pd.DataFrame: Columns are lib.SUMMARY_DATA_COLUMNS. 'transactions' holds the expense
        ids of each category, 'weight' the category's share of the grand total (0 when the
        grand total is 0).
    """
    df = get_data()
    if df.empty:
        return pd.DataFrame(columns=lib.SUMMARY_DATA_COLUMNS)

    grouped = df.groupby('category', sort=False).agg(
        total=('amount', 'sum'),
        transactions=('id', list),
    )

    order = [c.id for c in store.store.categories() if c.id in grouped.index]
    grouped = grouped.reindex(order).reset_index()

    grand_total = grouped['total'].sum()
    grouped['weight'] = grouped['total'] / grand_total if grand_total > 0 else 0.0

    return grouped[lib.SUMMARY_DATA_COLUMNS]


def get_entries(mode: Optional[str] = None) -> List[partition.WeightedEntry]:
    """Build the weighted entries fed to the pie chart.

    Args:
        mode: A :class:`ChartMode` value. Defaults to the 'chart_mode' setting.

    Returns:
        list[WeightedEntry]: Entries tagged with category ids. In expense mode there is one
        entry per expense in insertion order, in category mode one per category total.
    """
    mode = ChartMode(mode or lib.settings['chart_mode'])

    if mode == ChartMode.Category:
        df = get_summary()
        return [
            partition.WeightedEntry(float(row.total), row.category)
            for row in df.itertuples(index=False)
        ]

    df = get_data()
    return [
        partition.WeightedEntry(float(row.amount), row.category)
        for row in df.itertuples(index=False)
    ]


def get_slices(mode: Optional[str] = None) -> List[partition.AngularSlice]:
    """Partition the full circle between the current chart entries.

    Raises:
        InvalidWeight: If an entry has a negative or non-finite weight.
    """
    entries = get_entries(mode)
    slices = partition.partition(entries)
    logging.debug(f'Partitioned {len(entries)} entries into {len(slices)} slices.')
    return slices
