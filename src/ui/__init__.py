"""UI package."""

from .main_window import main_window
from .signal_bus import SignalBus, get_signal_bus, reset_signal_bus
from .styles import AppStyles, ColorPalette, GraphStyles

__all__ = [
    "AppStyles",
    "ColorPalette",
    "GraphStyles",
    "SignalBus",
    "get_signal_bus",
    "main_window",
    "reset_signal_bus",
]
