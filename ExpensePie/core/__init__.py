"""
Core, UI-independent services.

Modules:

- :mod:`ExpensePie.core.partition` – Proportional partition of the full circle into pie slices.
- :mod:`ExpensePie.core.store` – In-memory category and expense store addressed by stable ids.
"""
