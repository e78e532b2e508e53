"""
ExpensePie: desktop application drawing recorded expenses as a pie chart.

This package provides:

- :mod:`ExpensePie.core` – The angular partition engine and the in-memory category and expense store.
- :mod:`ExpensePie.data` – pandas views of the store (:func:`ExpensePie.data.data.get_summary`, :func:`ExpensePie.data.data.get_slices`) and Qt models and views for expenses and the pie chart.
- :mod:`ExpensePie.ui` – PySide6 main window, theming and dockable panels.
- :mod:`ExpensePie.settings` – Settings management with schema validation, and the settings and category editors.
- :mod:`ExpensePie.log` – In-app logging with a log viewer.

Use :func:`ExpensePie.exec_` to launch the application.
"""

import sys

from PySide6 import QtCore

# Fail on Python < 3.11
if not (sys.version_info.major == 3 and sys.version_info.minor >= 11):
    raise RuntimeError('ExpensePie requires Python 3.11 or higher.')

__version__ = '0.1.0'
__license__ = 'GPL-3.0'
__description__ = 'ExpensePie: desktop application drawing recorded expenses as a pie chart.'

from .log import log

log.setup_logging()


def exec_() -> None:
    """Launch the ExpensePie GUI application and enter its event loop.

    Initializes the QApplication, shows the main window, and starts the Qt event loop.
    """
    from .ui import app
    from .ui import main
    from .ui.actions import signals
    app = app.Application(sys.argv)
    main.show()

    # Ask components to load their data
    QtCore.QTimer.singleShot(100, signals.initializationRequested)

    sys.exit(app.exec())


if __name__ == '__main__':
    exec_()
