"""
Logging subsystem: handlers, models, and views for application logging.

Modules:

- :mod:`ExpensePie.log.log` – Logging setup, the in-memory TankHandler and the Qt message bridge.
- :mod:`ExpensePie.log.model` – Table model and proxy for displaying and filtering in-memory logs.
- :mod:`ExpensePie.log.view` – Log view and dock widget.
"""
