"""Tests for the preset time window table."""

from datetime import UTC, datetime, timedelta

import pytest

from models.app import (
    DEFAULT_PRESET,
    DEFAULT_PRESET_INDEX,
    FOUR_HOURS_OFFSET,
    PRESET_OFFSETS,
    TimePreset,
    subtract_months,
    window_start,
)

NOW = datetime(2024, 3, 31, 15, 45, 30, tzinfo=UTC)


def test_labels_are_offered_in_order():
    assert TimePreset.labels() == [
        "All",
        "Today",
        "1 hour",
        "2 Hours",
        "4 Hours",
        "8 Hours",
        "24 Hours",
        "Week",
        "Month",
        "6 Months",
        "Year",
    ]


def test_default_preset_is_24_hours():
    assert DEFAULT_PRESET_INDEX == 6
    assert DEFAULT_PRESET is TimePreset.TWENTY_FOUR_HOURS


def test_from_label_round_trips_every_preset():
    for preset in TimePreset:
        assert TimePreset.from_label(preset.label) is preset


def test_from_label_rejects_unknown_label():
    with pytest.raises(ValueError, match="3 Hours"):
        TimePreset.from_label("3 Hours")


def test_every_preset_has_an_offset():
    assert set(PRESET_OFFSETS) == set(TimePreset)


def test_four_hours_preset_reaches_back_four_hours():
    assert FOUR_HOURS_OFFSET == timedelta(hours=4)
    assert window_start(TimePreset.FOUR_HOURS, NOW) == NOW - timedelta(hours=4)


@pytest.mark.parametrize(
    ("preset", "expected"),
    [
        (TimePreset.HOUR, NOW - timedelta(hours=1)),
        (TimePreset.TWO_HOURS, NOW - timedelta(hours=2)),
        (TimePreset.EIGHT_HOURS, NOW - timedelta(hours=8)),
        (TimePreset.TWENTY_FOUR_HOURS, NOW - timedelta(days=1)),
        (TimePreset.WEEK, NOW - timedelta(days=7)),
        (TimePreset.TODAY, datetime(2024, 3, 31, tzinfo=UTC)),
        (TimePreset.MONTH, datetime(2024, 2, 29, 15, 45, 30, tzinfo=UTC)),
        (TimePreset.SIX_MONTHS, datetime(2023, 9, 30, 15, 45, 30, tzinfo=UTC)),
        (TimePreset.YEAR, datetime(2023, 3, 31, 15, 45, 30, tzinfo=UTC)),
    ],
)
def test_window_start_per_preset(preset, expected):
    assert window_start(preset, NOW) == expected


def test_all_preset_is_unbounded():
    assert window_start(TimePreset.ALL, NOW) is None


def test_today_keeps_the_timezone_of_now():
    tz = datetime(2024, 1, 1).astimezone().tzinfo
    now = datetime(2024, 6, 1, 8, 30, tzinfo=tz)
    start = window_start(TimePreset.TODAY, now)
    assert start == datetime(2024, 6, 1, tzinfo=tz)
    assert start.tzinfo is tz


def test_subtract_months_clamps_day_and_crosses_years():
    assert subtract_months(datetime(2024, 5, 31), 1) == datetime(2024, 4, 30)
    assert subtract_months(datetime(2023, 3, 29), 1) == datetime(2023, 2, 28)
    assert subtract_months(datetime(2024, 1, 15), 1) == datetime(2023, 12, 15)
    assert subtract_months(datetime(2024, 2, 29), 12) == datetime(2023, 2, 28)
    assert subtract_months(datetime(2024, 2, 29), 0) == datetime(2024, 2, 29)
