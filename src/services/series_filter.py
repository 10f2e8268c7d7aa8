"""Filtering and summarising of bank value history.

Everything here is pure: callers pass in the points, the selection and the
current instant, and get back the series to plot plus its net change. No
clock reads, no I/O.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import ROUND_DOWN, Decimal
from typing import NamedTuple

from models.app import (
    ALL_TABS,
    BankValuePoint,
    ChangeDirection,
    ChangeSummary,
    Selection,
    SeriesPoint,
    SeriesResult,
    TimePreset,
    as_aware,
    window_start,
)

NO_DATA_TEXT = "No Data available for selected range"
NO_CHANGE_TEXT = "No Change"

_PERCENT_STEP = Decimal("0.01")

# (scale, suffix, decimal places), smallest first
_GP_UNITS = (
    (1, "", 0),
    (1_000, "k", 2),
    (1_000_000, "m", 2),
    (1_000_000_000, "b", 2),
)


class Window(NamedTuple):
    """Inclusive time window; both bounds None means unbounded."""

    start: datetime | None
    end: datetime | None

    @property
    def unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, timestamp: datetime) -> bool:
        if self.unbounded:
            return True
        if self.start is None or self.end is None:
            return False
        return self.start <= timestamp <= self.end


class ChangeLabel(NamedTuple):
    """Display text for a summary and the direction used to colour it."""

    text: str
    direction: ChangeDirection | None


def resolve_window(selection: Selection, now: datetime) -> Window:
    """Turn the selection into concrete bounds relative to ``now``.

    Explicit ranges are returned as chosen, even when the end precedes the
    start; such a window simply matches nothing.
    """
    if selection.preset is None:
        return Window(selection.range_start, selection.range_end)
    if selection.preset is TimePreset.ALL:
        return Window(None, None)
    return Window(window_start(selection.preset, now), now)


def filter_points(
    points: Iterable[BankValuePoint], selection: Selection, window: Window
) -> list[SeriesPoint]:
    """Select points on the chosen tab inside ``window``, oldest first."""
    tab_filter = selection.tab_filter
    selected = [
        point
        for point in points
        if (tab_filter == ALL_TABS or point.tab == tab_filter)
        and window.contains(point.timestamp)
    ]
    selected.sort(key=lambda point: point.timestamp)
    return [SeriesPoint(timestamp=p.timestamp, value=p.value) for p in selected]


def summarize(series: list[SeriesPoint]) -> ChangeSummary | None:
    """Net change between the earliest and the latest point.

    Returns None for an empty series. ``percent_delta`` is None when the
    starting value is zero.
    """
    if not series:
        return None

    start = min(series, key=lambda point: point.timestamp)
    end = max(reversed(series), key=lambda point: point.timestamp)
    delta = end.value - start.value

    percent: Decimal | None = None
    if start.value != 0:
        percent = Decimal(delta) / Decimal(abs(start.value)) * 100

    if delta > 0:
        direction = ChangeDirection.UP
    elif delta < 0:
        direction = ChangeDirection.DOWN
    else:
        direction = ChangeDirection.NONE

    return ChangeSummary(
        absolute_delta=delta, percent_delta=percent, direction=direction
    )


def filter_and_summarize(
    points: Iterable[BankValuePoint], selection: Selection, now: datetime
) -> SeriesResult:
    """Compute the plotted series and its change summary for ``selection``."""
    now = as_aware(now)
    window = resolve_window(selection, now)
    series = filter_points(points, selection, window)
    return SeriesResult(series=series, summary=summarize(series))


def format_gp_short(value: float, signed: bool = False) -> str:
    """Format coin values into b/m/k strings without scientific notation."""

    magnitude = abs(value)
    tier = 0
    while tier + 1 < len(_GP_UNITS) and magnitude >= _GP_UNITS[tier + 1][0]:
        tier += 1

    scale, suffix, places = _GP_UNITS[tier]
    number = f"{magnitude / scale:.{places}f}"
    # Rounding may reach the next unit, e.g. 999_999 -> "1000.00k"
    if float(number) >= 1_000 and tier + 1 < len(_GP_UNITS):
        scale, suffix, places = _GP_UNITS[tier + 1]
        number = f"{magnitude / scale:.{places}f}"
    body = f"{number}{suffix}"

    if signed:
        prefix = "+" if value >= 0 else "-"
    else:
        prefix = "-" if value < 0 else ""
    return f"{prefix}{body}"


def format_change(summary: ChangeSummary | None) -> ChangeLabel:
    """Build the net change label text.

    Percentages are truncated toward zero to two decimals.
    """
    if summary is None:
        return ChangeLabel(NO_DATA_TEXT, None)
    if summary.direction is ChangeDirection.NONE:
        return ChangeLabel(NO_CHANGE_TEXT, ChangeDirection.NONE)

    delta_txt = format_gp_short(summary.absolute_delta, signed=True)
    if summary.percent_delta is None:
        return ChangeLabel(delta_txt, summary.direction)

    pct = summary.percent_delta.quantize(_PERCENT_STEP, rounding=ROUND_DOWN)
    return ChangeLabel(f"{delta_txt} ({pct:+.2f}%)", summary.direction)
