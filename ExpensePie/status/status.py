"""Status definitions and exceptions for ExpensePie.

This module provides:
    - Status: enumeration of possible application states
    - STATUS_MESSAGE: user-facing messages for each status
    - get_message: retrieve the message for a status
    - BaseStatusException: base exception carrying a Status
    - Specific exceptions (e.g., AmountInvalidException) for error handling in forms and the store
"""
import enum
import logging
from typing import Dict


class Status(enum.StrEnum):
    """Enumeration of application status codes."""
    UnknownStatus = enum.auto()
    Okay = enum.auto()

    # Form input status
    AmountInvalid = enum.auto()
    ColorInvalid = enum.auto()
    CategoryInvalid = enum.auto()
    ExpenseInvalid = enum.auto()

    # Store status
    CategoryNotFound = enum.auto()
    CategoryInUse = enum.auto()
    ExpenseNotFound = enum.auto()

    # Configuration status
    SettingsInvalid = enum.auto()


STATUS_MESSAGE: Dict[Status, str] = {
    Status.UnknownStatus: 'Unknown status. Please check the settings.',
    Status.Okay: 'Everything is okay.',

    Status.AmountInvalid: 'The amount must be a non-negative number.',
    Status.ColorInvalid: 'The color must be a known color name or a hex value like #RRGGBB.',
    Status.CategoryInvalid: 'The category name is empty or already in use.',
    Status.ExpenseInvalid: 'The expense id is already in use.',

    Status.CategoryNotFound: 'Could not find the category.',
    Status.CategoryInUse: 'The category still has expenses. Remove or move them first.',
    Status.ExpenseNotFound: 'Could not find the expense.',

    Status.SettingsInvalid: 'The settings seem to be incomplete, or contain invalid values.',
}


def get_message(status: Status) -> str:
    """
    Get the message for a given status.

    Args:
        status (Status): The status enum.

    Returns:
        str: The message associated with the status.
    """
    return STATUS_MESSAGE.get(status, 'Unknown status')


class BaseStatusException(Exception):
    """Base exception for status-based errors in ExpensePie.

    Attributes:
        status (Status): Status code associated with this error.
        status_message (str): User-facing message for the status.

    Args:
        message (str): Optional additional context for the error.
    """
    status = Status.UnknownStatus

    def __init__(self, message: str = None):
        self.status_message = get_message(self.status)
        exception_message = f'{self.status_message} {message}' if message else self.status_message
        super().__init__(exception_message)

        logging.error(exception_message)

        from ..ui.actions import signals
        signals.error.emit(message or self.status_message)


class AmountInvalidException(BaseStatusException):
    """Exception raised when an expense amount cannot be parsed or is negative."""
    status = Status.AmountInvalid


class ColorInvalidException(BaseStatusException):
    """Exception raised when a category color cannot be resolved."""
    status = Status.ColorInvalid


class CategoryInvalidException(BaseStatusException):
    """Exception raised when a category name is empty or duplicated."""
    status = Status.CategoryInvalid


class CategoryNotFoundException(BaseStatusException):
    """Exception raised when a category id is not in the store."""
    status = Status.CategoryNotFound


class CategoryInUseException(BaseStatusException):
    """Exception raised when removing a category that expenses still reference."""
    status = Status.CategoryInUse


class ExpenseNotFoundException(BaseStatusException):
    """Exception raised when an expense id is not in the store."""
    status = Status.ExpenseNotFound


class SettingsInvalidException(BaseStatusException):
    """Exception raised when a settings section or value fails validation."""
    status = Status.SettingsInvalid


class ExpenseInvalidException(BaseStatusException):
    """Exception raised when an expense cannot be added with the given id."""
    status = Status.ExpenseInvalid
