"""Tests for bank history series filtering and change summaries."""

import random
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from models.app import (
    BankValueHistory,
    BankValuePoint,
    ChangeDirection,
    ChangeSummary,
    Selection,
    SeriesPoint,
    TimePreset,
)
from services.series_filter import (
    NO_CHANGE_TEXT,
    NO_DATA_TEXT,
    Window,
    filter_and_summarize,
    filter_points,
    format_change,
    format_gp_short,
    resolve_window,
    summarize,
)

DAY = datetime(2024, 5, 1, tzinfo=UTC)


def at(hour: int, minute: int = 0) -> datetime:
    return DAY.replace(hour=hour, minute=minute)


def point(ts: datetime, value: int, tab: int = 0) -> BankValuePoint:
    return BankValuePoint(timestamp=ts, value=value, tab=tab)


def explicit(start: datetime, end: datetime, tab: int = -1) -> Selection:
    return Selection(account_id="acct", tab_filter=tab, range_start=start, range_end=end)


def preset(value: TimePreset, tab: int = -1) -> Selection:
    return Selection(account_id="acct", tab_filter=tab, preset=value)


@pytest.fixture
def sample_points():
    return [
        point(at(9), 100, tab=0),
        point(at(10), 150, tab=0),
        point(at(11), 90, tab=1),
    ]


def test_single_tab_window_scenario(sample_points):
    result = filter_and_summarize(
        sample_points, explicit(at(8), at(12), tab=0), now=at(23)
    )

    assert result.series == [
        SeriesPoint(timestamp=at(9), value=100),
        SeriesPoint(timestamp=at(10), value=150),
    ]
    assert result.summary.absolute_delta == 50
    assert result.summary.percent_delta == Decimal(50)
    assert result.summary.direction is ChangeDirection.UP
    assert format_change(result.summary).text == "+50 (+50.00%)"


def test_all_tabs_single_point_scenario(sample_points):
    result = filter_and_summarize(
        sample_points, explicit(at(10, 30), at(12)), now=at(23)
    )

    assert result.series == [SeriesPoint(timestamp=at(11), value=90)]
    assert result.summary.absolute_delta == 0
    assert result.summary.direction is ChangeDirection.NONE
    assert format_change(result.summary).text == NO_CHANGE_TEXT


def test_empty_input_has_no_summary():
    result = filter_and_summarize([], preset(TimePreset.ALL), now=at(12))

    assert result.series == []
    assert result.summary is None
    assert format_change(result.summary).text == NO_DATA_TEXT
    assert format_change(result.summary).direction is None


def test_boundaries_are_inclusive(sample_points):
    result = filter_and_summarize(sample_points, explicit(at(9), at(10)), now=at(23))

    assert [p.timestamp for p in result.series] == [at(9), at(10)]


def test_preset_window_ends_at_now_inclusive():
    points = [point(at(7, 59), 1), point(at(8), 2), point(at(12), 3), point(at(13), 4)]

    result = filter_and_summarize(points, preset(TimePreset.FOUR_HOURS), now=at(12))

    assert [p.value for p in result.series] == [2, 3]


def test_zero_start_value_has_no_percent():
    points = [point(at(9), 0), point(at(10), 500)]

    summary = filter_and_summarize(points, preset(TimePreset.ALL), now=at(12)).summary

    assert summary.absolute_delta == 500
    assert summary.percent_delta is None
    assert summary.direction is ChangeDirection.UP
    assert format_change(summary).text == "+500"


def test_all_preset_ignores_now(sample_points):
    early = filter_and_summarize(sample_points, preset(TimePreset.ALL), now=DAY)
    late = filter_and_summarize(
        sample_points, preset(TimePreset.ALL), now=DAY + timedelta(days=3650)
    )

    assert len(early.series) == 3
    assert early == late
    assert resolve_window(preset(TimePreset.ALL), DAY).unbounded


def test_explicit_end_before_start_matches_nothing(sample_points):
    result = filter_and_summarize(sample_points, explicit(at(12), at(8)), now=at(23))

    assert result.series == []
    assert result.summary is None


def test_summary_uses_timestamps_not_insertion_order():
    history = BankValueHistory(account_id="acct")
    history.add(at(11), 300, 0)
    history.add(at(9), 100, 0)
    history.add(at(10), 200, 0)

    result = filter_and_summarize(history.points(), preset(TimePreset.ALL), now=at(12))

    assert [p.value for p in result.series] == [100, 200, 300]
    assert result.summary.absolute_delta == 200
    assert result.summary.percent_delta == Decimal(200)


def test_negative_start_value_uses_magnitude():
    series = [SeriesPoint(timestamp=at(9), value=-200), SeriesPoint(timestamp=at(10), value=-300)]

    summary = summarize(series)

    assert summary.absolute_delta == -100
    assert summary.percent_delta == Decimal(-50)
    assert summary.direction is ChangeDirection.DOWN


def test_filter_is_stable_for_equal_timestamps():
    points = [point(at(9), 1, tab=0), point(at(9), 2, tab=1), point(at(8), 3, tab=2)]

    series = filter_points(points, preset(TimePreset.ALL), Window(None, None))

    assert [p.value for p in series] == [3, 1, 2]


def test_filter_and_summarize_is_idempotent(sample_points):
    selection = preset(TimePreset.TWENTY_FOUR_HOURS, tab=0)

    first = filter_and_summarize(sample_points, selection, now=at(12))
    second = filter_and_summarize(sample_points, selection, now=at(12))

    assert first == second


def test_random_point_sets_respect_window_and_tab():
    rng = random.Random(1337)
    now = at(12)

    for _ in range(200):
        points = [
            point(
                now - timedelta(minutes=rng.randint(0, 3 * 24 * 60)),
                rng.randint(0, 5_000_000),
                tab=rng.randint(0, 9),
            )
            for _ in range(rng.randint(1, 40))
        ]
        tab = rng.choice([-1, *range(10)])
        chosen = rng.choice([p for p in TimePreset if p is not TimePreset.ALL])
        selection = preset(chosen, tab=tab)
        window = resolve_window(selection, now)

        result = filter_and_summarize(points, selection, now)

        expected = sorted(
            (
                p
                for p in points
                if (tab == -1 or p.tab == tab)
                and window.start <= p.timestamp <= window.end
            ),
            key=lambda p: p.timestamp,
        )
        assert [(s.timestamp, s.value) for s in result.series] == [
            (p.timestamp, p.value) for p in expected
        ]
        if expected:
            assert result.summary.absolute_delta == expected[-1].value - expected[0].value
        else:
            assert result.summary is None


def test_percent_is_truncated_toward_zero():
    up = ChangeSummary(
        absolute_delta=1, percent_delta=Decimal("12.349"), direction=ChangeDirection.UP
    )
    down = ChangeSummary(
        absolute_delta=-1,
        percent_delta=Decimal("-12.349"),
        direction=ChangeDirection.DOWN,
    )

    assert format_change(up).text == "+1 (+12.34%)"
    assert format_change(down).text == "-1 (-12.34%)"
    assert format_change(down).direction is ChangeDirection.DOWN


def test_format_change_abbreviates_large_deltas():
    summary = ChangeSummary(
        absolute_delta=-2_500_000,
        percent_delta=Decimal(-25),
        direction=ChangeDirection.DOWN,
    )

    assert format_change(summary).text == "-2.50m (-25.00%)"


def test_format_gp_short_scales_suffixes():
    assert format_gp_short(1_500_000_000) == "1.50b"
    assert format_gp_short(25_000_000) == "25.00m"
    assert format_gp_short(12_300) == "12.30k"
    assert format_gp_short(999) == "999"
    assert format_gp_short(-999) == "-999"


def test_format_gp_short_signed_flag():
    assert format_gp_short(1_250, signed=True) == "+1.25k"
    assert format_gp_short(-2_500_000, signed=True) == "-2.50m"
    assert format_gp_short(0, signed=True) == "+0"


def test_format_gp_short_carries_into_next_unit():
    assert format_gp_short(999_999) == "1.00m"
    assert format_gp_short(999_999_999) == "1.00b"
    assert format_gp_short(999.6) == "1.00k"
    assert format_gp_short(-999_999, signed=True) == "-1.00m"
    assert format_gp_short(999_994) == "999.99k"


def test_naive_timestamps_are_read_as_utc():
    naive = BankValuePoint(timestamp=datetime(2024, 5, 1, 9), value=100, tab=0)
    later = point(at(11), 150)

    result = filter_and_summarize(
        [naive, later], preset(TimePreset.TWENTY_FOUR_HOURS), at(12)
    )

    assert naive.timestamp == at(9)
    assert [p.value for p in result.series] == [100, 150]
    assert result.summary is not None
    assert result.summary.absolute_delta == 50


def test_naive_history_keys_and_range_bounds_are_read_as_utc():
    history = BankValueHistory(
        account_id="acct", prices={datetime(2024, 5, 1, 9): {"bank_value": 7, "tab": 1}}
    )
    history.add(datetime(2024, 5, 1, 10), 9, 1)
    selection = explicit(datetime(2024, 5, 1, 8), datetime(2024, 5, 1, 10))

    result = filter_and_summarize(history.points(), selection, datetime(2024, 5, 1, 12))

    assert list(history.prices) == [at(9), at(10)]
    assert selection.range_start == at(8)
    assert [p.value for p in result.series] == [7, 9]
