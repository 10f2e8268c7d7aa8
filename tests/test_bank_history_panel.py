"""Tests for the bank history panel widget."""

import os
import sys
from pathlib import Path

# Ensure src is on path
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

# Run Qt in minimal mode to avoid GUI plugin errors
os.environ.setdefault("QT_QPA_PLATFORM", "minimal")

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, Mock

import pytest

from models.app import BankValueHistory, TimePreset, WindowMode
from services.series_filter import NO_DATA_TEXT
from ui.panels import BankHistoryPanel, open_in_new_window
from ui.signal_bus import get_signal_bus, reset_signal_bus
from ui.styles import COLORS
from ui.widgets.date_time_picker import to_qdatetime
from utils.exceptions import NoAccountsError

NOW = datetime(2024, 5, 1, 12, 0).astimezone()


@pytest.fixture(autouse=True)
def fresh_signal_bus():
    reset_signal_bus()
    yield
    reset_signal_bus()


@pytest.fixture
def histories():
    alice = BankValueHistory(account_id="alice")
    alice.add(NOW - timedelta(hours=2), 100, 0)
    alice.add(NOW - timedelta(hours=1), 150, 0)
    alice.add(NOW - timedelta(minutes=30), 90, 1)
    bob = BankValueHistory(account_id="bob")
    bob.add(NOW - timedelta(days=3), 1_000_000, 0)
    return {"alice": alice, "bob": bob}


@pytest.fixture
def mock_tracker(histories):
    tracker = Mock()
    tracker.get_available_users.side_effect = lambda: set(histories)
    tracker.get_bank_value_history.side_effect = histories.get
    tracker.add_entry = AsyncMock(return_value=None)
    return tracker


@pytest.fixture
def mock_settings():
    settings = Mock()
    settings.get_show_accounts_by_default.return_value = True
    settings.get_default_account.return_value = ""
    settings.get_default_bank_tab.return_value = 0
    return settings


@pytest.fixture
def make_panel(qtbot, mock_tracker, mock_settings):
    def _make(**kwargs):
        kwargs.setdefault("clock", lambda: NOW)
        panel = BankHistoryPanel(mock_tracker, mock_settings, **kwargs)
        qtbot.addWidget(panel)
        return panel

    return _make


def test_no_accounts_raises(qtbot, mock_settings):
    tracker = Mock()
    tracker.get_available_users.return_value = set()

    with pytest.raises(NoAccountsError, match="No accounts available"):
        BankHistoryPanel(tracker, mock_settings)


def test_username_alone_is_enough(qtbot, mock_settings):
    tracker = Mock()
    tracker.get_available_users.return_value = set()
    tracker.get_bank_value_history.return_value = None

    panel = BankHistoryPanel(tracker, mock_settings, username="carol", clock=lambda: NOW)
    qtbot.addWidget(panel)

    assert panel.account_combo.currentText() == "carol"
    assert panel.change_label.text() == NO_DATA_TEXT


def test_initial_state(make_panel):
    panel = make_panel()

    assert [panel.account_combo.itemText(i) for i in range(panel.account_combo.count())] == [
        "alice",
        "bob",
    ]
    assert panel.selection_state.selection.account_id == "alice"
    assert panel.preset_combo.currentText() == "24 Hours"
    assert panel.tab_combo.currentText() == "0"
    assert panel.selection_state.selection.tab_filter == 0
    assert panel.advanced_button.text() == "Advanced"
    assert panel.date_picker_container.isHidden()
    assert panel.new_window_button is not None


def test_tab_combo_offers_all_and_ten_tabs(make_panel):
    panel = make_panel()

    labels = [panel.tab_combo.itemText(i) for i in range(panel.tab_combo.count())]
    assert labels == ["All", *[str(tab) for tab in range(10)]]
    assert panel.tab_combo.itemData(0) == -1


def test_change_label_for_single_tab(make_panel):
    panel = make_panel()

    assert panel.change_label.text() == "+50 (+50.00%)"
    assert COLORS.SUCCESS in panel.change_label.styleSheet()
    assert [p.value for p in panel.last_result.series] == [100, 150]


def test_refresh_picks_up_new_history(make_panel, histories):
    panel = make_panel()
    assert panel.change_label.text() == "+50 (+50.00%)"

    histories["alice"].add(NOW - timedelta(minutes=10), 300, 0)
    assert panel.change_label.text() == "+50 (+50.00%)"

    panel.refresh_button.click()

    assert [p.value for p in panel.last_result.series] == [100, 150, 300]
    assert panel.change_label.text() == "+200 (+200.00%)"
    assert COLORS.SUCCESS in panel.change_label.styleSheet()


def test_selecting_all_tabs_updates_label(make_panel):
    panel = make_panel()

    panel.tab_combo.setCurrentIndex(0)

    assert panel.selection_state.selection.tab_filter == -1
    assert panel.change_label.text() == "-10 (-10.00%)"
    assert COLORS.ERROR in panel.change_label.styleSheet()


def test_preset_change_refilters(make_panel):
    panel = make_panel()

    panel.account_combo.setCurrentText("bob")
    assert panel.change_label.text() == NO_DATA_TEXT

    panel.preset_combo.setCurrentText(TimePreset.WEEK.label)
    assert panel.selection_state.selection.preset is TimePreset.WEEK
    assert panel.change_label.text() == "No Change"


def test_default_account_from_settings(make_panel, mock_settings):
    mock_settings.get_default_account.return_value = "bob"

    panel = make_panel()

    assert panel.account_combo.currentText() == "bob"
    assert panel.selection_state.selection.account_id == "bob"


def test_unknown_default_account_falls_back_to_first(make_panel, mock_settings):
    mock_settings.get_default_account.return_value = "zed"

    panel = make_panel()

    assert panel.selection_state.selection.account_id == "alice"


def test_show_accounts_checkbox_toggles_selector(make_panel, mock_settings):
    mock_settings.get_show_accounts_by_default.return_value = False
    panel = make_panel()

    assert not panel.show_accounts_checkbox.isChecked()
    assert panel.account_combo.isHidden()

    panel.show_accounts_checkbox.setChecked(True)
    assert not panel.account_combo.isHidden()


def test_advanced_toggle_switches_to_date_pickers(make_panel):
    panel = make_panel()

    panel.advanced_button.click()

    assert panel.advanced_button.text() == "Simple"
    assert panel.simple_container.isHidden()
    assert not panel.date_picker_container.isHidden()
    selection = panel.selection_state.selection
    assert selection.window_mode is WindowMode.EXPLICIT
    assert selection.range_start == NOW.replace(hour=0, minute=0)
    assert selection.range_end == NOW.replace(hour=0, minute=0) + timedelta(days=1)
    assert panel.change_label.text() == "+50 (+50.00%)"

    panel.advanced_button.click()

    assert panel.advanced_button.text() == "Advanced"
    assert panel.selection_state.selection.preset is TimePreset.TWENTY_FOUR_HOURS


def test_date_picker_narrows_window(make_panel):
    panel = make_panel()
    panel.advanced_button.click()

    panel.start_picker.edit.setDateTime(to_qdatetime(NOW - timedelta(minutes=90)))

    assert panel.selection_state.selection.range_start == NOW - timedelta(minutes=90)
    assert [p.value for p in panel.last_result.series] == [150]
    assert panel.change_label.text() == "No Change"


@pytest.mark.asyncio
async def test_add_entry_disables_button_until_capture_resolves(
    make_panel, mock_tracker, histories
):
    panel = make_panel()
    seen_enabled = []

    async def capture(capture_now=True, on_complete=None):
        seen_enabled.append(panel.add_entry_button.isEnabled())
        histories["alice"].add(NOW - timedelta(minutes=10), 200, 0)
        return "alice"

    mock_tracker.add_entry.side_effect = capture
    added = []
    get_signal_bus().bank_entry_added.connect(added.append)

    result = await panel.add_entry()

    assert result == "alice"
    assert seen_enabled == [False]
    assert panel.add_entry_button.isEnabled()
    assert added == ["alice"]
    assert panel.change_label.text() == "+100 (+100.00%)"
    mock_tracker.add_entry.assert_awaited_once_with(True)


@pytest.mark.asyncio
async def test_add_entry_reenables_after_failure(make_panel, mock_tracker):
    panel = make_panel()
    mock_tracker.add_entry.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await panel.add_entry()

    assert panel.add_entry_button.isEnabled()


def test_entry_from_another_panel_adds_account(make_panel):
    panel = make_panel()

    get_signal_bus().bank_entry_added.emit("dave")

    assert panel.account_combo.findText("dave") >= 0


def test_open_in_new_window(make_panel, qtbot, mock_tracker, mock_settings):
    panel = make_panel()

    dialog = open_in_new_window(panel, mock_tracker, mock_settings, "")
    qtbot.addWidget(dialog)

    assert dialog.windowTitle() == "Bank History"
    assert not dialog.isModal()
    inner = dialog.findChild(BankHistoryPanel)
    assert inner is not None
    assert inner.new_window_button is None
    assert inner.selection_state is not panel.selection_state
    dialog.close()


def test_new_window_panel_has_no_new_window_button(make_panel):
    panel = make_panel(is_new_window=True)

    assert panel.new_window_button is None
