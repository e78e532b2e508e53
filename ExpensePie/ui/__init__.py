"""
UI package: application actions, main application setup, theming, and widgets.

This package provides:

- :mod:`ExpensePie.ui.actions` – Application-wide Qt signals.
- :mod:`ExpensePie.ui.app` – QApplication subclass.
- :mod:`ExpensePie.ui.main` – Main window composition.
- :mod:`ExpensePie.ui.ui` – Styling constants for fonts, sizes, and colors.
- :mod:`ExpensePie.ui.dockable_widget` – Base class for dockable widgets.
"""
