"""Application/business models (domain layer)."""

from .bank_value import BankValue, BankValueHistory, BankValuePoint, as_aware
from .selection import ALL_TABS, MAX_TAB, MIN_TAB, Selection, WindowMode
from .summary import ChangeDirection, ChangeSummary, SeriesPoint, SeriesResult
from .time_preset import (
    DEFAULT_PRESET,
    DEFAULT_PRESET_INDEX,
    FOUR_HOURS_OFFSET,
    PRESET_OFFSETS,
    PresetOffset,
    TimePreset,
    subtract_months,
    window_start,
)

__all__ = [
    "ALL_TABS",
    "DEFAULT_PRESET",
    "DEFAULT_PRESET_INDEX",
    "FOUR_HOURS_OFFSET",
    "MAX_TAB",
    "MIN_TAB",
    "PRESET_OFFSETS",
    "BankValue",
    "BankValueHistory",
    "BankValuePoint",
    "ChangeDirection",
    "ChangeSummary",
    "PresetOffset",
    "Selection",
    "SeriesPoint",
    "SeriesResult",
    "TimePreset",
    "WindowMode",
    "as_aware",
    "subtract_months",
    "window_start",
]
