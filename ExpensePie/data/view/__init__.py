"""Qt views for the ExpensePie application.

- ExpenseEditor, ExpenseView and ExpenseDockWidget: expense entry form and list
- PieChartView and PieChartDockWidget: the pie chart of recorded expenses
"""
