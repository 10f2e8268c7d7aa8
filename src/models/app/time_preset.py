"""Named relative time windows for the bank history chart.

Each preset maps to a fixed offset in :data:`PRESET_OFFSETS`. The table is
resolved against the current instant at query time, so it can be tested
without any UI code.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum


class TimePreset(Enum):
    """Preset windows in the order they are offered to the user."""

    ALL = "All"
    TODAY = "Today"
    HOUR = "1 hour"
    TWO_HOURS = "2 Hours"
    FOUR_HOURS = "4 Hours"
    EIGHT_HOURS = "8 Hours"
    TWENTY_FOUR_HOURS = "24 Hours"
    WEEK = "Week"
    MONTH = "Month"
    SIX_MONTHS = "6 Months"
    YEAR = "Year"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> TimePreset:
        """Look up a preset by its display label.

        Raises:
            ValueError: If no preset carries ``label``.
        """
        for preset in cls:
            if preset.value == label:
                return preset
        raise ValueError(f"No time preset named {label!r}")

    @classmethod
    def labels(cls) -> list[str]:
        return [preset.value for preset in cls]


DEFAULT_PRESET_INDEX = 6
DEFAULT_PRESET = list(TimePreset)[DEFAULT_PRESET_INDEX]


@dataclass(frozen=True)
class PresetOffset:
    """How far back a preset reaches from ``now``.

    ``delta`` covers fixed durations; ``months`` is calendar arithmetic that
    clamps the day to the target month's length. ``start_of_day`` ignores
    both and truncates ``now`` to midnight.
    """

    delta: timedelta = timedelta(0)
    months: int = 0
    start_of_day: bool = False

    def apply(self, now: datetime) -> datetime:
        if self.start_of_day:
            return now.replace(hour=0, minute=0, second=0, microsecond=0)
        return subtract_months(now, self.months) - self.delta


# The "4 Hours" entry reaches back four hours, matching its label.
FOUR_HOURS_OFFSET = timedelta(hours=4)

PRESET_OFFSETS: dict[TimePreset, PresetOffset | None] = {
    TimePreset.ALL: None,
    TimePreset.TODAY: PresetOffset(start_of_day=True),
    TimePreset.HOUR: PresetOffset(delta=timedelta(hours=1)),
    TimePreset.TWO_HOURS: PresetOffset(delta=timedelta(hours=2)),
    TimePreset.FOUR_HOURS: PresetOffset(delta=FOUR_HOURS_OFFSET),
    TimePreset.EIGHT_HOURS: PresetOffset(delta=timedelta(hours=8)),
    TimePreset.TWENTY_FOUR_HOURS: PresetOffset(delta=timedelta(days=1)),
    TimePreset.WEEK: PresetOffset(delta=timedelta(weeks=1)),
    TimePreset.MONTH: PresetOffset(months=1),
    TimePreset.SIX_MONTHS: PresetOffset(months=6),
    TimePreset.YEAR: PresetOffset(months=12),
}


def subtract_months(value: datetime, months: int) -> datetime:
    """Move ``value`` back by whole calendar months, clamping the day."""
    if months == 0:
        return value
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(value.day, calendar.monthrange(year, month)[1])
    return value.replace(year=year, month=month, day=day)


def window_start(preset: TimePreset, now: datetime) -> datetime | None:
    """Earliest instant covered by ``preset``, or None for an unbounded window.

    Raises:
        ValueError: If ``preset`` has no entry in the offset table.
    """
    if preset not in PRESET_OFFSETS:
        raise ValueError(f"Unable to get past time for {preset!r}")
    offset = PRESET_OFFSETS[preset]
    if offset is None:
        return None
    return offset.apply(now)
