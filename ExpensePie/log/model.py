import enum
import logging
import re
from typing import Any

from PySide6 import QtCore

from .log import get_handler
from ..ui import ui


class Columns(enum.IntEnum):
    """Column indexes for log table data."""
    Date = 0
    Module = 1
    Level = 2
    Message = 3


class Level(enum.IntEnum):
    """Maps standard log level names to their numeric values."""
    NOTSET = logging.NOTSET
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


LevelRole = QtCore.Qt.UserRole + 1

re_log_pattern = re.compile(
    r'^\[(?P<date>[^\]]+)\]\s+<(?P<module>[^>]+)>\s+(?P<level>[^:]+):\s+(?P<message>.*)$',
    flags=re.DOTALL
)


def parse_log_message(raw_message: str) -> dict[str, Any]:
    """
    Splits a formatted log line into date, module, level and message.

    Lines that do not match the log format are kept whole as the message
    with a NOTSET level.
    """
    result: dict[str, Any] = {
        'date': '',
        'module': '',
        'level': Level.NOTSET,
        'message': raw_message
    }

    match = re_log_pattern.match(raw_message)
    if not match:
        return result

    try:
        level = Level[match.group('level').strip().upper()]
    except KeyError:
        level = Level.NOTSET

    result.update({
        'date': match.group('date'),
        'module': match.group('module'),
        'level': level,
        'message': match.group('message'),
    })
    return result


class LogTableModel(QtCore.QAbstractTableModel):
    """
    Table model polling the TankHandler for new log messages.
    """
    header = {
        Columns.Date: 'Date',
        Columns.Module: 'Module',
        Columns.Level: 'Level',
        Columns.Message: 'Message',
    }

    def __init__(self, parent: Any = None, fetch_interval_ms: int = 1000):
        super().__init__(parent=parent)
        self._logs: list[dict[str, Any]] = []
        self._is_paused = False

        self._timer = QtCore.QTimer(self)
        self._timer.timeout.connect(self.fetch_new_logs)
        self._timer.start(fetch_interval_ms)

    @QtCore.Slot()
    def pause(self) -> None:
        self._is_paused = True

    @QtCore.Slot()
    def resume(self) -> None:
        self._is_paused = False
        self.fetch_new_logs()

    def rowCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(self._logs)

    def columnCount(self, parent: QtCore.QModelIndex = QtCore.QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return len(Columns)

    def data(self, index: QtCore.QModelIndex, role: int = QtCore.Qt.DisplayRole) -> Any:
        if not index.isValid() or index.row() >= len(self._logs):
            return None

        entry = self._logs[index.row()]

        if role == QtCore.Qt.DisplayRole:
            if index.column() == Columns.Date:
                return entry['date']
            elif index.column() == Columns.Module:
                return entry['module']
            elif index.column() == Columns.Level:
                return entry['level'].name
            elif index.column() == Columns.Message:
                return entry['message']

        if role == QtCore.Qt.ToolTipRole and index.column() == Columns.Message:
            return entry['message']

        if role == QtCore.Qt.FontRole and entry['level'] >= Level.ERROR:
            font, _ = ui.font(ui.Size.MediumText(1.0), bold=True)
            return font

        if role == QtCore.Qt.ForegroundRole:
            if entry['level'] == Level.DEBUG:
                return ui.Color.SecondaryText()
            elif entry['level'] == Level.WARNING:
                return ui.Color.Blue()
            elif entry['level'] >= Level.ERROR:
                return ui.Color.Red()

        if role == LevelRole:
            return entry['level'].value

        return None

    def headerData(self, section: int, orientation, role: int = QtCore.Qt.DisplayRole) -> Any:
        if orientation == QtCore.Qt.Horizontal and role == QtCore.Qt.DisplayRole:
            return self.header.get(section, '')
        return None

    @QtCore.Slot()
    def fetch_new_logs(self) -> None:
        """Appends tank messages that are not yet in the model."""
        if self._is_paused:
            return

        try:
            handler = get_handler()
        except RuntimeError:
            return

        all_logs = handler.get_logs(logging.NOTSET)
        existing_count = len(self._logs)
        if len(all_logs) < existing_count:
            # The tank was cleared elsewhere
            self.clear_logs()
            existing_count = 0

        incoming = all_logs[existing_count:]
        if not incoming:
            return

        entries = [parse_log_message(msg) for msg in incoming]
        self.beginInsertRows(QtCore.QModelIndex(), existing_count, existing_count + len(entries) - 1)
        self._logs.extend(entries)
        self.endInsertRows()

    def clear_logs(self) -> None:
        self.beginResetModel()
        self._logs = []
        self.endResetModel()


class LogFilterProxyModel(QtCore.QSortFilterProxyModel):
    """
    Filters out rows below a minimum logging level.
    """

    def __init__(self, parent: Any = None):
        super().__init__(parent)
        self._filter_level = logging.NOTSET

    def filter_level(self) -> int:
        return self._filter_level

    def set_filter_level(self, level: int) -> None:
        self._filter_level = level
        self.invalidateFilter()

    def filterAcceptsRow(self, source_row: int, source_parent: QtCore.QModelIndex) -> bool:
        index = self.sourceModel().index(source_row, Columns.Date, source_parent)
        level = self.sourceModel().data(index, LevelRole)
        if level is None:
            return True
        return level >= self._filter_level
