"""
Settings package: configuration API and editors.

This package provides:

- :mod:`ExpensePie.settings.lib` – In-memory settings with schema validation, default categories and color lookup.
- :mod:`ExpensePie.settings.settings` – UI widgets for editing application preferences.
- :mod:`ExpensePie.settings.category_editor` – UI for adding, editing and removing categories.
"""
