"""Tests for reading bank captures from the client export file."""

import json
from datetime import UTC, datetime, timedelta, timezone

import pytest

from data.capture import BankCapture, BankExportCaptureSource
from utils.exceptions import CaptureError, TrackerError


def write_export(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


@pytest.mark.asyncio
async def test_missing_export_returns_none(tmp_path):
    source = BankExportCaptureSource(tmp_path / "bank_export.json")

    assert await source.capture() is None


@pytest.mark.asyncio
async def test_reads_capture_fields(tmp_path):
    path = write_export(
        tmp_path / "bank_export.json",
        {
            "account": "Zezima",
            "tab": 3,
            "value": 123_456_789,
            "captured_at": "2025-01-01T12:00:00+02:00",
        },
    )

    capture = await BankExportCaptureSource(path).capture()

    assert capture.account_id == "Zezima"
    assert capture.tab == 3
    assert capture.value == 123_456_789
    assert capture.captured_at == datetime(
        2025, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=2))
    )


@pytest.mark.asyncio
async def test_defaults_tab_and_time(tmp_path):
    path = write_export(tmp_path / "export.json", {"account": "Zezima", "value": 5})

    capture = await BankExportCaptureSource(path).capture()

    assert capture.tab == 0
    assert capture.captured_at is None


@pytest.mark.asyncio
async def test_naive_capture_time_is_treated_as_utc(tmp_path):
    path = write_export(
        tmp_path / "export.json",
        {"account": "Zezima", "value": 5, "captured_at": "2025-01-01T12:00:00"},
    )

    capture = await BankExportCaptureSource(path).capture()

    assert capture.captured_at == datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "content",
    [
        "not json",
        json.dumps({"value": 5}),
        json.dumps({"account": "Zezima", "value": 5, "tab": 12}),
    ],
)
async def test_unreadable_export_raises_capture_error(tmp_path, content):
    path = tmp_path / "export.json"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(CaptureError) as exc_info:
        await BankExportCaptureSource(path).capture()

    assert isinstance(exc_info.value, TrackerError)


def test_capture_accepts_field_name_or_alias():
    by_alias = BankCapture.model_validate({"account": "a", "value": 1})
    by_name = BankCapture(account_id="a", value=1)

    assert by_alias == by_name
