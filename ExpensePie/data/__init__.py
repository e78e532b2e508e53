"""
ExpensePie data package: chart data, models, and views.

This package provides:

- :mod:`ExpensePie.data.data` – pandas views over the expense store (:func:`ExpensePie.data.data.get_data`, :func:`ExpensePie.data.data.get_summary`) and the weighted entries fed to the pie chart.
- :mod:`ExpensePie.data.model` – Qt table model (:class:`ExpensePie.data.model.expense.ExpenseModel`) listing the recorded expenses.
- :mod:`ExpensePie.data.view` – Qt views for entering expenses and rendering the pie chart.
"""
