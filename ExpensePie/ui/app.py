"""Custom QApplication for ExpensePie.

This module provides:
    - Application: subclass of QApplication configuring application metadata and theme
"""
import sys
from typing import Optional, Sequence

from PySide6 import QtWidgets

__version__ = '0.1.0'


class Application(QtWidgets.QApplication):
    """QApplication setting the application name, version and theme."""

    def __init__(self, argv: Optional[Sequence[str]] = None) -> None:
        if argv is None:
            argv = sys.argv

        super().__init__(list(argv))

        from ..settings import lib
        self.setApplicationName(lib.app_name)
        self.setOrganizationName('')
        self.setApplicationVersion(__version__)
        self.setQuitOnLastWindowClosed(True)

        from . import ui
        ui.apply_theme()
