"""UI styling utilities for ExpensePie.

This module provides:
    - Theme: supported UI themes (light, dark)
    - Size: standardized size constants and scaling logic
    - Color: standardized color palette for widgets and themes
    - font(): sized application fonts
    - apply_theme(): palette setup for the current theme
    - category_color(): QColor lookup for category tags
"""
import enum
import logging
import math
import os
from typing import Optional

from PySide6 import QtWidgets, QtGui


class Theme(enum.StrEnum):
    Light = 'light'
    Dark = 'dark'


class Size(enum.Enum):
    """Enumeration of size values used for UI scaling."""
    SmallText = 11.0
    MediumText = 12.0
    LargeText = 16.0
    Indicator = 4.0
    Separator = 1.0
    Margin = 18.0
    RowHeight = 34.0
    DefaultWidth = 640.0
    DefaultHeight = 480.0

    def __new__(cls, value):
        obj = object.__new__(cls)
        obj._value_ = float(value)
        return obj

    def __call__(self, multiplier=1.0, apply_scale=True):
        """
        Returns the scaled size value.

        Args:
            multiplier (float): A multiplier to apply to the size.
            apply_scale (bool): If True, applies UI scaling factors.

        Returns:
            int: The scaled size.
        """
        if apply_scale:
            return round(self.size(self._value_) * float(multiplier))
        return round(self._value_ * float(multiplier))

    @classmethod
    def size(cls, value, ui_scale_factor=1.0, dpi=72.0):
        """Scale a value by DPI and UI scale factor."""
        return math.ceil(float(value) * (float(dpi) / 72.0)) * float(ui_scale_factor)


class Color(enum.Enum):
    """Enumeration of colours used across the UI."""

    Transparent = {
        Theme.Light.value: (0, 0, 0, 0),
        Theme.Dark.value: (0, 0, 0, 0),
    }
    VeryDarkBackground = {
        Theme.Light.value: (245, 245, 245),
        Theme.Dark.value: (30, 30, 30),
    }
    DarkBackground = {
        Theme.Light.value: (230, 230, 230),
        Theme.Dark.value: (45, 45, 45),
    }
    Background = {
        Theme.Light.value: (210, 210, 210),
        Theme.Dark.value: (65, 65, 65),
    }
    DisabledText = {
        Theme.Light.value: (120, 120, 120),
        Theme.Dark.value: (135, 135, 135),
    }
    SecondaryText = {
        Theme.Light.value: (70, 70, 70),
        Theme.Dark.value: (185, 185, 185),
    }
    Text = {
        Theme.Light.value: (30, 30, 30),
        Theme.Dark.value: (225, 225, 225),
    }
    SelectedText = {
        Theme.Light.value: (0, 0, 0),
        Theme.Dark.value: (255, 255, 255),
    }
    Blue = {
        Theme.Light.value: (0, 122, 255),
        Theme.Dark.value: (10, 132, 255),
    }
    Red = {
        Theme.Light.value: (255, 59, 48),
        Theme.Dark.value: (255, 69, 58),
    }

    @classmethod
    def _get_theme(cls):
        from ..settings import lib
        theme = lib.settings['theme']
        if theme not in [f.value for f in Theme]:
            theme = Theme.Light.value
        return theme

    def __new__(cls, v):
        if not isinstance(v, dict):
            raise ValueError(f'Invalid color value: {v}. Must be a dictionary, got {type(v)}: {v}')
        obj = object.__new__(cls)
        obj._value_ = v
        return obj

    def __call__(self, qss=False):
        """
        Returns a QColor or CSS rgba string.

        Args:
            qss (bool): If True, returns a CSS rgba string suitable for QSS.

        Returns:
            QColor or str: A QColor instance if qss=False, otherwise a CSS rgba string.
        """
        theme = self._get_theme()
        if theme not in self._value_:
            theme = Theme.Light.value

        color = QtGui.QColor(*self._value_[theme])
        if not qss:
            return color

        return self.rgb(color)

    @staticmethod
    def rgb(color):
        """Returns the CSS rgba string for a QColor."""
        rgb = [str(f) for f in color.getRgb()]
        return f'rgba({",".join(rgb)})'


def font(size: float, bold: bool = False) -> tuple[QtGui.QFont, QtGui.QFontMetricsF]:
    """Return the application font at the given pixel size, with its metrics."""
    f = QtGui.QFont(QtWidgets.QApplication.font())
    f.setPixelSize(max(1, round(size)))
    f.setBold(bold)
    return f, QtGui.QFontMetricsF(f)


def category_color(category_id: Optional[str]) -> QtGui.QColor:
    """Resolve a category id to its display color.

    Unknown ids resolve to the theme's text color.
    """
    from ..core import store
    if category_id and store.store.has_category(category_id):
        color = QtGui.QColor(store.store.get_category(category_id).color)
        if color.isValid():
            return color
    return Color.Text()


def get_palette() -> QtGui.QPalette:
    """Build a QPalette from the current theme's colors."""
    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, Color.DarkBackground())
    palette.setColor(QtGui.QPalette.Base, Color.VeryDarkBackground())
    palette.setColor(QtGui.QPalette.AlternateBase, Color.DarkBackground())
    palette.setColor(QtGui.QPalette.Button, Color.Background())
    palette.setColor(QtGui.QPalette.WindowText, Color.Text())
    palette.setColor(QtGui.QPalette.Text, Color.Text())
    palette.setColor(QtGui.QPalette.ButtonText, Color.Text())
    palette.setColor(QtGui.QPalette.PlaceholderText, Color.SecondaryText())
    palette.setColor(QtGui.QPalette.Highlight, Color.Blue())
    palette.setColor(QtGui.QPalette.HighlightedText, Color.SelectedText())
    palette.setColor(QtGui.QPalette.Disabled, QtGui.QPalette.Text, Color.DisabledText())
    palette.setColor(QtGui.QPalette.Disabled, QtGui.QPalette.ButtonText, Color.DisabledText())
    return palette


def apply_theme() -> None:
    """Set the palette for the entire app.

    This function should be called after the QApplication is created.

    """
    app = QtWidgets.QApplication.instance()
    if not app:
        raise RuntimeError('apply_theme() must be called after a QApplication is initiated.')

    if os.environ.get('EXPENSEPIE_DISABLE_THEME', '').lower() in ['1', 'true', 'yes']:
        logging.warning('Theme disabled by environment variable.')
        return

    palette = get_palette()
    app.setPalette(palette)

    for widget in app.topLevelWidgets():
        widget.setPalette(palette)
        widget.update()

    logging.debug(f'Applied theme: {Color._get_theme()}')
