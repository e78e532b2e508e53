"""Pie chart model and view for visualizing the expense distribution."""
import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..data import get_entries
from ..model.expense import format_amount
from ...core import partition
from ...core import store
from ...settings import lib
from ...ui import ui
from ...ui.actions import signals

QT_CIRCLE = 360 * 16
# Slices start at twelve o'clock and run clockwise
ROTATION_QT = 90 * 16


@dataclass(slots=True)
class ChartSlice:
    """Slice data plus optional geometry."""
    category: str  # category id
    label: str
    value: float
    color: QtGui.QColor
    start_qt: int
    span_qt: int  # negative, clockwise
    # geometry fields for slice rendering
    base_rect: QtCore.QRect = field(default_factory=QtCore.QRect, repr=False)
    popped_rect: QtCore.QRect = field(default_factory=QtCore.QRect, repr=False)
    base_path: QtGui.QPainterPath = field(default_factory=QtGui.QPainterPath, repr=False)
    popped_path: QtGui.QPainterPath = field(default_factory=QtGui.QPainterPath, repr=False)
    mid_deg: float = 0.0


def to_qt_angles(angular_slice: partition.AngularSlice) -> tuple[int, int]:
    """Convert a slice in degrees to Qt's 1/16th degree start and span.

    Both ends are rounded independently so adjacent slices share their edge exactly.
    """
    start = int(round(angular_slice.start_angle * 16))
    end = int(round(angular_slice.end_angle * 16))
    return (ROTATION_QT - start) % QT_CIRCLE, -(end - start)


class ChartModel(QtCore.QObject):
    """Model for constructing ChartSlice instances from expense data."""

    def __init__(self, parent: Optional[QtCore.QObject] = None) -> None:
        super().__init__(parent)
        self._slices: List[ChartSlice] = []
        self._total: float = 0.0
        self._version: int = 0

    @property
    def slices(self) -> List[ChartSlice]:
        return self._slices

    @property
    def total(self) -> float:
        return self._total

    @property
    def version(self) -> int:
        return self._version

    def rebuild(self) -> None:
        """Populate slices from the current expenses."""
        entries = get_entries(lib.settings['chart_mode'])
        try:
            angular_slices = partition.partition(entries)
        except partition.InvalidWeight as ex:
            logging.error(f'ChartModel: cannot render chart, {ex}')
            self.clear()
            return

        if not angular_slices:
            logging.debug('ChartModel: no data available')
            self.clear()
            return

        new_slices: List[ChartSlice] = []
        for angular_slice, entry in zip(angular_slices, entries):
            if store.store.has_category(angular_slice.tag):
                category = store.store.get_category(angular_slice.tag)
                label = f'{category.emoji} {category.name}'.strip()
            else:
                label = str(angular_slice.tag)

            start_qt, span_qt = to_qt_angles(angular_slice)
            new_slices.append(
                ChartSlice(
                    category=angular_slice.tag,
                    label=label,
                    value=entry.weight,
                    color=ui.category_color(angular_slice.tag),
                    start_qt=start_qt,
                    span_qt=span_qt,
                )
            )

        self._slices = new_slices
        self._total = sum(e.weight for e in entries)
        self._version += 1

    def clear(self) -> None:
        """Clear the model."""
        self._slices = []
        self._total = 0.0
        self._version += 1


class PieChartView(QtWidgets.QWidget):
    """Interactive pie chart of the current expenses."""

    hoverChanged = QtCore.Signal(int)  # emits -1 when nothing is hovered

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._selected_category: str = ''
        self._geom_sig: tuple[int, int, int] = (-1, -1, -1)
        self._hover_index: int = -1

        self.pop_offset_px = ui.Size.Indicator(2.0)

        self._init_data_timer = QtCore.QTimer(self)
        self._init_data_timer.setSingleShot(True)
        self._init_data_timer.setInterval(50)

        self.model = ChartModel(self)

        self.setMouseTracking(True)
        self.setContextMenuPolicy(QtCore.Qt.ActionsContextMenu)

        self._create_ui()
        self._connect_signals()
        self._init_actions()

        self.init_data()

    def _create_ui(self) -> None:
        self.setMinimumSize(
            ui.Size.DefaultWidth(0.4), ui.Size.DefaultWidth(0.4)
        )
        self.setSizePolicy(
            QtWidgets.QSizePolicy.Expanding, QtWidgets.QSizePolicy.Expanding
        )

    def _connect_signals(self) -> None:
        signals.expensesChanged.connect(self.start_init_data_timer)
        signals.categoriesChanged.connect(self.start_init_data_timer)
        signals.initializationRequested.connect(self.start_init_data_timer)

        @QtCore.Slot(str, object)
        def _meta(key: str, _: object) -> None:
            if key == 'chart_mode':
                self.start_init_data_timer()
            elif key in ('theme', 'show_legend', 'show_tooltip'):
                self.update()

        signals.metadataChanged.connect(_meta)

        @QtCore.Slot(str)
        def _on_cat(cat: str) -> None:
            self._selected_category = cat or ''
            self.update()

        signals.categoryChanged.connect(_on_cat)

        self._init_data_timer.timeout.connect(self.init_data)

    def _init_actions(self) -> None:
        @QtCore.Slot(bool)
        def toggle_legend(checked: bool) -> None:
            lib.settings['show_legend'] = checked

        action = QtGui.QAction('Toggle Legend', self)
        action.setCheckable(True)
        action.setChecked(lib.settings['show_legend'])
        action.setToolTip('Show/hide legend')
        action.setShortcut('Alt+1')
        action.setShortcutContext(QtCore.Qt.WidgetShortcut)
        action.triggered.connect(toggle_legend)
        self.addAction(action)

        @QtCore.Slot(bool)
        def toggle_tooltip(checked: bool) -> None:
            lib.settings['show_tooltip'] = checked

        action = QtGui.QAction('Toggle Tooltip', self)
        action.setCheckable(True)
        action.setChecked(lib.settings['show_tooltip'])
        action.setToolTip('Show/hide tooltip')
        action.setShortcut('Alt+2')
        action.setShortcutContext(QtCore.Qt.WidgetShortcut)
        action.triggered.connect(toggle_tooltip)
        self.addAction(action)

        @QtCore.Slot(bool)
        def toggle_mode(checked: bool) -> None:
            lib.settings['chart_mode'] = 'category' if checked else 'expense'

        action = QtGui.QAction('Group by Category', self)
        action.setCheckable(True)
        action.setChecked(lib.settings['chart_mode'] == 'category')
        action.setShortcut('Alt+3')
        action.setShortcutContext(QtCore.Qt.WidgetShortcut)
        action.triggered.connect(toggle_mode)
        self.addAction(action)

        @QtCore.Slot(str, object)
        def _sync(key: str, value: object) -> None:
            for act in self.actions():
                if act.text() == 'Toggle Legend' and key == 'show_legend':
                    act.setChecked(bool(value))
                elif act.text() == 'Toggle Tooltip' and key == 'show_tooltip':
                    act.setChecked(bool(value))
                elif act.text() == 'Group by Category' and key == 'chart_mode':
                    act.setChecked(value == 'category')

        signals.metadataChanged.connect(_sync)

    @QtCore.Slot()
    def start_init_data_timer(self) -> None:
        self._init_data_timer.start(self._init_data_timer.interval())

    @QtCore.Slot()
    def init_data(self) -> None:
        self.model.rebuild()
        self._hover_index = -1
        self._geom_sig = (-1, -1, -1)
        self.update()

    @QtCore.Slot()
    def clear_data(self) -> None:
        self.model.clear()
        self._geom_sig = (-1, -1, -1)
        self.update()

    @staticmethod
    def _slice_path(rect: QtCore.QRect, start_deg: float, span_deg: float) -> QtGui.QPainterPath:
        path = QtGui.QPainterPath()
        path.moveTo(QtCore.QPointF(rect.center()))
        path.arcTo(QtCore.QRectF(rect), start_deg, span_deg)
        path.closeSubpath()
        return path

    def _chart_rect(self) -> QtCore.QRect:
        margin = ui.Size.Margin(1.0)
        inner = self.rect().adjusted(margin, margin, -margin, -margin)
        edge = max(0, min(inner.width(), inner.height()) - self.pop_offset_px * 2)
        return QtCore.QRect(
            inner.x() + (inner.width() - edge) // 2,
            inner.y() + (inner.height() - edge) // 2,
            edge,
            edge,
        )

    def _recalc_geometry(self) -> None:
        sig = (self.model.version, self.width(), self.height())
        if sig == self._geom_sig:
            return

        rect = self._chart_rect()
        for sl in self.model.slices:
            start_deg = sl.start_qt / 16.0
            span_deg = sl.span_qt / 16.0
            sl.mid_deg = start_deg + span_deg / 2.0
            theta = math.radians(sl.mid_deg)

            dx = int(round(self.pop_offset_px * math.cos(theta)))
            dy = int(round(-self.pop_offset_px * math.sin(theta)))

            sl.base_rect = QtCore.QRect(rect)
            sl.popped_rect = QtCore.QRect(rect.translated(dx, dy))
            sl.base_path = self._slice_path(sl.base_rect, start_deg, span_deg)
            sl.popped_path = self._slice_path(sl.popped_rect, start_deg, span_deg)

        self._geom_sig = sig

    def slice_at(self, pos: QtCore.QPoint) -> int:
        """Return the index of the slice under `pos`, or -1."""
        self._recalc_geometry()
        for index, sl in enumerate(self.model.slices):
            if sl.base_path.contains(QtCore.QPointF(pos)) or sl.popped_path.contains(QtCore.QPointF(pos)):
                return index
        return -1

    def paintEvent(self, event: QtGui.QPaintEvent) -> None:
        self._recalc_geometry()

        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing)

        self._draw_background(painter)

        if not self.model.slices:
            self._draw_placeholder(painter)
            painter.end()
            return

        self._draw_slices(painter)

        if lib.settings['show_legend']:
            self._draw_legend(painter)

        if lib.settings['show_tooltip']:
            self._draw_tooltip(painter)

        painter.end()

    def _draw_background(self, painter: QtGui.QPainter) -> None:
        painter.fillRect(self.rect(), ui.Color.VeryDarkBackground())
        offset = ui.Size.Margin(0.5)
        inner = self.rect().adjusted(offset, offset, -offset, -offset)
        painter.setBrush(ui.Color.DarkBackground())
        painter.setPen(QtCore.Qt.NoPen)
        painter.drawRoundedRect(inner, ui.Size.Indicator(2.0), ui.Size.Indicator(2.0))

    def _draw_placeholder(self, painter: QtGui.QPainter) -> None:
        font, _ = ui.font(ui.Size.MediumText())
        painter.setFont(font)
        painter.setPen(ui.Color.SecondaryText())
        painter.drawText(self.rect(), QtCore.Qt.AlignCenter, 'No expenses yet')

    def _draw_slices(self, painter: QtGui.QPainter) -> None:
        for idx, sl in enumerate(self.model.slices):
            if sl.span_qt == 0:
                continue
            rect = sl.popped_rect if idx == self._hover_index else sl.base_rect
            painter.setBrush(sl.color)
            # highlight selected category with a border
            if sl.category == self._selected_category:
                pen = QtGui.QPen(sl.color.lighter(125))
                pen.setWidthF(ui.Size.Separator(3.0))
                painter.setPen(pen)
            else:
                painter.setPen(QtCore.Qt.NoPen)
            painter.drawPie(rect, sl.start_qt, sl.span_qt)

    def _draw_legend(self, painter: QtGui.QPainter) -> None:
        font, metrics = ui.font(ui.Size.SmallText(), bold=True)
        painter.setFont(font)

        pad = ui.Size.Indicator(1.0)
        for sl in self.model.slices:
            # skip slices too narrow to carry a label
            if abs(sl.span_qt) / 16.0 < 15.0:
                continue

            centre = sl.base_rect.center()
            radius = sl.base_rect.width() / 2.0
            theta = math.radians(sl.mid_deg)
            cx = centre.x() + radius * 0.65 * math.cos(theta)
            cy = centre.y() - radius * 0.65 * math.sin(theta)

            share = sl.value / self.model.total if self.model.total else 0.0
            text = f'{share:.0%}'
            w = metrics.horizontalAdvance(text) + pad * 2
            h = metrics.height() + pad * 2
            box = QtCore.QRectF(cx - w / 2, cy - h / 2, w, h)

            painter.save()
            painter.setOpacity(0.6)
            painter.setBrush(ui.Color.VeryDarkBackground())
            painter.setPen(QtCore.Qt.NoPen)
            painter.drawRoundedRect(box, pad, pad)
            painter.restore()

            painter.setPen(ui.Color.Text())
            painter.drawText(box, QtCore.Qt.AlignCenter, text)

    def _draw_tooltip(self, painter: QtGui.QPainter) -> None:
        if not (0 <= self._hover_index < len(self.model.slices)):
            return

        sl = self.model.slices[self._hover_index]
        cursor_pos = self.mapFromGlobal(QtGui.QCursor.pos())

        text = f'{sl.label}: {format_amount(sl.value)}'
        font, metrics = ui.font(ui.Size.MediumText(), bold=True)
        painter.setFont(font)

        pad = ui.Size.Indicator(2.0)
        width = metrics.horizontalAdvance(text) + pad * 2
        height = metrics.height() + pad * 2

        x = max(self.rect().left(), min(cursor_pos.x() - width / 2, self.rect().right() - width))
        y = cursor_pos.y() - height - pad
        if y < self.rect().top():
            y = cursor_pos.y() + pad

        bg = QtCore.QRectF(x, y, width, height)
        painter.setBrush(ui.Color.VeryDarkBackground())
        painter.setPen(QtCore.Qt.NoPen)
        painter.drawRoundedRect(bg, pad, pad)

        painter.setPen(ui.Color.Text())
        painter.drawText(bg, QtCore.Qt.AlignCenter, text)

    def mouseMoveEvent(self, event: QtGui.QMouseEvent) -> None:
        idx = self.slice_at(event.position().toPoint())
        if idx != self._hover_index:
            self._hover_index = idx
            self.hoverChanged.emit(idx)
        self.update()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event: QtCore.QEvent) -> None:
        if self._hover_index != -1:
            self._hover_index = -1
            self.hoverChanged.emit(-1)
            self.update()
        super().leaveEvent(event)

    def mousePressEvent(self, event: QtGui.QMouseEvent) -> None:
        idx = self.slice_at(event.position().toPoint())
        cat = self.model.slices[idx].category if 0 <= idx < len(self.model.slices) else ''
        self._selected_category = cat
        self.update()
        signals.categoryUpdateRequested.emit(cat)
        super().mousePressEvent(event)

    def resizeEvent(self, event: QtGui.QResizeEvent) -> None:
        self._geom_sig = (-1, -1, -1)
        self.update()
        super().resizeEvent(event)
