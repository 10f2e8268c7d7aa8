"""Unified styling for the bank history UI.

Usage:
    from ui.styles import AppStyles, GraphStyles, COLORS

    button.setStyleSheet(AppStyles.BUTTON_PRIMARY)
    pen = pg.mkPen(GraphStyles.LINE_COLOR, width=GraphStyles.LINE_WIDTH)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from PyQt6.QtWidgets import QApplication


@dataclass(frozen=True)
class ColorPalette:
    """Application color palette for consistent theming."""

    # Primary colors
    PRIMARY: str = "#0d7377"
    PRIMARY_HOVER: str = "#14a1a8"
    PRIMARY_PRESSED: str = "#0a5a5d"

    # Secondary colors
    SECONDARY: str = "#323232"
    SECONDARY_HOVER: str = "#454545"
    SECONDARY_PRESSED: str = "#252525"

    # Background colors
    BG_DARK: str = "#1a1a1a"
    BG_MEDIUM: str = "#1e1e1e"
    BG_LIGHT: str = "#2b2b2b"
    BG_LIGHTER: str = "#3d3d3d"

    # Text colors
    TEXT_PRIMARY: str = "#fff"
    TEXT_SECONDARY: str = "#ccc"
    TEXT_MUTED: str = "#888"
    TEXT_DISABLED: str = "#555"

    # Border colors
    BORDER_LIGHT: str = "#555"
    BORDER_HIGHLIGHT: str = "#888"

    # Status colors
    SUCCESS: str = "#40a040"
    ERROR: str = "#c94040"
    BRAND: str = "#1e95d7"

    # Graph colors
    BANK_VALUE: str = "#e5b94a"
    GRAPH_BG: str = "#232323"


COLORS = ColorPalette()


class AppStyles:
    """Centralized stylesheet definitions for the application."""

    BUTTON_PRIMARY: ClassVar[str] = f"""
        QPushButton {{
            background-color: {COLORS.PRIMARY};
            color: white;
            border: none;
            border-radius: 4px;
            padding: 6px 12px;
            font-weight: bold;
        }}
        QPushButton:hover {{
            background-color: {COLORS.PRIMARY_HOVER};
        }}
        QPushButton:pressed {{
            background-color: {COLORS.PRIMARY_PRESSED};
        }}
        QPushButton:disabled {{
            background-color: {COLORS.SECONDARY};
            color: {COLORS.TEXT_DISABLED};
        }}
    """

    BUTTON_SECONDARY: ClassVar[str] = f"""
        QPushButton {{
            background-color: {COLORS.SECONDARY};
            color: white;
            border: 1px solid {COLORS.BORDER_LIGHT};
            border-radius: 4px;
            padding: 6px 12px;
        }}
        QPushButton:hover {{
            background-color: {COLORS.SECONDARY_HOVER};
            border: 1px solid {COLORS.BORDER_HIGHLIGHT};
        }}
        QPushButton:pressed {{
            background-color: {COLORS.SECONDARY_PRESSED};
        }}
    """

    PANEL_DARK: ClassVar[str] = f"""
        QFrame {{
            background-color: {COLORS.BG_LIGHT};
            border-radius: 4px;
        }}
        QLabel {{
            color: {COLORS.TEXT_SECONDARY};
        }}
    """

    SPINBOX: ClassVar[str] = f"""
        QSpinBox {{
            background-color: {COLORS.BG_LIGHT};
            color: {COLORS.TEXT_PRIMARY};
            border: 1px solid {COLORS.BORDER_LIGHT};
            border-radius: 4px;
            padding: 2px 4px;
        }}
        QSpinBox:hover {{
            border: 1px solid {COLORS.PRIMARY};
        }}
    """

    CHECKBOX: ClassVar[str] = f"""
        QCheckBox {{
            color: {COLORS.TEXT_SECONDARY};
            spacing: 6px;
        }}
        QCheckBox::indicator {{
            width: 16px;
            height: 16px;
            border: 2px solid {COLORS.BORDER_LIGHT};
            border-radius: 3px;
            background-color: {COLORS.BG_LIGHT};
        }}
        QCheckBox::indicator:checked {{
            background-color: {COLORS.PRIMARY};
            border-color: {COLORS.PRIMARY_HOVER};
            image: url(data:image/svg+xml;base64,PHN2ZyB4bWxucz0iaHR0cDovL3d3dy53My5vcmcvMjAwMC9zdmciIHdpZHRoPSIxZW0iIGhlaWdodD0iMWVtIiB2aWV3Qm94PSIwIDAgMjQgMjQiPjxwYXRoIGZpbGw9IndoaXRlIiBkPSJtOSAxOS40MTRsLTYuNzA3LTYuNzA3bDEuNDE0LTEuNDE0TDkgMTYuNTg2TDIwLjI5MyA1LjI5M2wxLjQxNCAxLjQxNHoiLz48L3N2Zz4=);
        }}
    """

    COMBOBOX: ClassVar[str] = f"""
        QComboBox {{
            background-color: {COLORS.BG_LIGHT};
            color: {COLORS.TEXT_SECONDARY};
            border: 1px solid {COLORS.BORDER_LIGHT};
            border-radius: 4px;
            padding: 4px 8px;
            min-height: 20px;
        }}
        QComboBox:hover {{
            border: 1px solid {COLORS.PRIMARY};
        }}
        QComboBox::drop-down {{
            width: 20px;
            border-left: 1px solid {COLORS.BORDER_LIGHT};
            background-color: {COLORS.BG_LIGHTER};
        }}
        QComboBox::down-arrow {{
            width: 10px;
            height: 10px;
            image: url(data:image/svg+xml;base64,PHN2ZyB3aWR0aD0iMTAiIGhlaWdodD0iMTAiIHZpZXdCb3g9IjAgMCAxMCAxMCIgeG1sbnM9Imh0dHA6Ly93d3cudzMub3JnLzIwMDAvc3ZnIj48cGF0aCBkPSJNIDIgMyBMIDUgNyBMIDggMyIgc3Ryb2tlPSIjY2NjIiBzdHJva2Utd2lkdGg9IjEuNSIgZmlsbD0ibm9uZSIvPjwvc3ZnPg==);
        }}
        QComboBox QAbstractItemView {{
            background-color: {COLORS.BG_LIGHT};
            color: {COLORS.TEXT_SECONDARY};
            selection-background-color: {COLORS.PRIMARY};
            selection-color: white;
        }}
    """

    DATE_TIME_EDIT: ClassVar[str] = f"""
        QDateTimeEdit {{
            background-color: {COLORS.BG_LIGHTER};
            color: {COLORS.TEXT_SECONDARY};
            border: 1px solid {COLORS.BORDER_LIGHT};
            border-radius: 4px;
            padding: 2px 4px;
        }}
        QDateTimeEdit:hover {{
            border: 1px solid {COLORS.PRIMARY};
        }}
    """

    CALENDAR: ClassVar[str] = f"""
        QCalendarWidget QToolButton {{
            color: {COLORS.TEXT_SECONDARY};
            background-color: {COLORS.BG_LIGHTER};
            border-radius: 4px;
            padding: 4px 6px;
        }}
        QCalendarWidget QAbstractItemView:enabled {{
            background-color: {COLORS.BG_LIGHT};
            color: {COLORS.TEXT_SECONDARY};
            selection-background-color: {COLORS.PRIMARY};
            selection-color: white;
        }}
        QCalendarWidget QWidget#qt_calendar_navigationbar {{
            background-color: {COLORS.BG_MEDIUM};
        }}
    """

    GROUP_BOX: ClassVar[str] = f"""
        QGroupBox {{
            font-weight: bold;
            border: 1px solid {COLORS.BORDER_LIGHT};
            border-radius: 4px;
            margin-top: 8px;
            padding-top: 8px;
            color: {COLORS.TEXT_PRIMARY};
        }}
        QGroupBox::title {{
            subcontrol-origin: margin;
            padding: 0 4px;
        }}
    """

    GLOBAL_STYLESHEET: ClassVar[str] = f"""
        QWidget {{
            background-color: {COLORS.BG_MEDIUM};
            color: {COLORS.TEXT_SECONDARY};
        }}
        QToolTip {{
            background-color: {COLORS.BG_LIGHT};
            color: {COLORS.TEXT_PRIMARY};
            border: 1px solid {COLORS.BORDER_LIGHT};
            padding: 4px;
        }}
    """


class GraphStyles:
    """Styling constants for the pyqtgraph bank value plot."""

    BACKGROUND: ClassVar[str] = COLORS.GRAPH_BG
    LINE_COLOR: ClassVar[str] = COLORS.BANK_VALUE
    LINE_WIDTH: ClassVar[float] = 2.0
    SYMBOL: ClassVar[str] = "o"
    SYMBOL_SIZE: ClassVar[int] = 5
    GRID_ALPHA: ClassVar[float] = 0.3

    # Colour of the net change label per direction name; None = no data
    CHANGE_COLORS: ClassVar[dict[str | None, str]] = {
        "up": COLORS.SUCCESS,
        "down": COLORS.ERROR,
        "none": COLORS.BRAND,
        None: COLORS.BRAND,
    }


def apply_dark_theme(app: QApplication) -> None:
    """Apply the application-wide dark stylesheet."""
    app.setStyle("Fusion")
    app.setStyleSheet(AppStyles.GLOBAL_STYLESHEET)
