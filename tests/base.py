"""Unittest base class for creating a clean test environment."""
import logging
import os
import unittest
from contextlib import contextmanager
from unittest.mock import patch

from PySide6 import QtWidgets

from ExpensePie.core import store
from ExpensePie.settings import lib


@contextmanager
def signal_spy(signal):
    """Collect the arguments of every emission of `signal` while active."""
    received = []

    def _slot(*args):
        received.append(args)

    signal.connect(_slot)
    try:
        yield received
    finally:
        signal.disconnect(_slot)


class BaseTestCase(unittest.TestCase):
    """Base test case providing a QApplication and fresh settings and store singletons."""

    def setUp(self) -> None:
        # Ensure headless Qt
        if 'QT_QPA_PLATFORM' not in os.environ:
            os.environ['QT_QPA_PLATFORM'] = 'offscreen'
            logging.debug('QT_QPA_PLATFORM set to offscreen for headless testing.')

        # Ensure a QApplication is available
        if not QtWidgets.QApplication.instance():
            QtWidgets.QApplication([])  # type: ignore
            logging.debug('QtWidgets.QApplication initialized for tests.')

        # Message boxes would block the test run
        self.warning = patch('PySide6.QtWidgets.QMessageBox.warning', return_value=QtWidgets.QMessageBox.Ok).start()
        self.question = patch('PySide6.QtWidgets.QMessageBox.question', return_value=QtWidgets.QMessageBox.Yes).start()

        # Reinitialize settings API
        lib.settings = lib.SettingsAPI()
        logging.debug('SettingsAPI reinitialized.')

        # Reinitialize store API
        store.store = store.StoreAPI()
        logging.debug('StoreAPI reinitialized.')

    def tearDown(self) -> None:
        patch.stopall()

    def category_id(self, name: str) -> str:
        """Return the id of the seeded category called `name`."""
        return next(c.id for c in store.store.categories() if c.name == name)
