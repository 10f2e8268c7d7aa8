"""Bank history data models (domain layer)."""

from .app import (
    BankValue,
    BankValueHistory,
    BankValuePoint,
    ChangeDirection,
    ChangeSummary,
    Selection,
    SeriesPoint,
    SeriesResult,
    TimePreset,
    WindowMode,
)

__all__ = [
    "BankValue",
    "BankValueHistory",
    "BankValuePoint",
    "ChangeDirection",
    "ChangeSummary",
    "Selection",
    "SeriesPoint",
    "SeriesResult",
    "TimePreset",
    "WindowMode",
]
