"""Bank value history panel.

Shows one account's recorded bank value as a time-series chart, with a net
change label for the chosen window. The window is either a preset ("24 Hours",
"Week", ...) or an explicit start/end picked in advanced mode, and the chart can
be restricted to a single bank tab.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta

import pyqtgraph as pg  # type: ignore
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
from qasync import asyncSlot

from data.tracker import BankValueTracker
from models.app import (
    ALL_TABS,
    DEFAULT_PRESET,
    DEFAULT_PRESET_INDEX,
    MAX_TAB,
    MIN_TAB,
    BankValuePoint,
    SeriesResult,
    TimePreset,
    WindowMode,
)
from services import SelectionState, filter_and_summarize, format_change
from services.series_filter import format_gp_short
from ui.signal_bus import get_signal_bus
from ui.styles import COLORS, AppStyles, GraphStyles
from ui.widgets import DateTimePickerWidget
from utils.exceptions import NoAccountsError
from utils.settings_manager import SettingsManager

logger = logging.getLogger(__name__)

ALL_TABS_LABEL = "All"
ADVANCED_TEXT = "Advanced"
SIMPLE_TEXT = "Simple"


def _local_now() -> datetime:
    return datetime.now().astimezone()


def start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


class GPAxisItem(pg.AxisItem):
    """Axis implementation that formats ticks using coin abbreviations."""

    def tickStrings(self, values, scale, spacing):
        return [format_gp_short(value) for value in values]


class BankHistoryPanel(QWidget):
    """Chart of one account's bank value with window and tab filters."""

    def __init__(
        self,
        tracker: BankValueTracker,
        settings_manager: SettingsManager,
        username: str = "",
        is_new_window: bool = False,
        clock: Callable[[], datetime] | None = None,
        parent: QWidget | None = None,
    ) -> None:
        """Build the panel.

        Args:
            tracker: Source of recorded history and new captures.
            settings_manager: Panel defaults (account, tab, selector visibility).
            username: Currently logged in account, offered even before it has
                any recorded history.
            is_new_window: Omit the "Open In New Window" button.
            clock: Returns the current aware time; defaults to local now.
            parent: Parent widget.

        Raises:
            NoAccountsError: If neither the tracker nor ``username`` supply an
                account.
        """
        super().__init__(parent)
        self._tracker = tracker
        self._settings = settings_manager
        self._username = username
        self._is_new_window = is_new_window
        self._clock = clock or _local_now
        self._signal_bus = get_signal_bus()
        self._last_result: SeriesResult | None = None
        self._windows: list[QWidget] = []

        accounts = self._collect_accounts()
        account = self._default_account(accounts)
        default_tab = self._settings.get_default_bank_tab()

        today = start_of_day(self._clock())
        self._state = SelectionState(
            account_id=account,
            range_start=today,
            range_end=today + timedelta(days=1),
            tab_filter=default_tab,
            preset=DEFAULT_PRESET,
            parent=self,
        )

        self._setup_ui(accounts, account, default_tab)
        self._connect_signals()
        self._refresh()

    # -- construction -------------------------------------------------------

    def _collect_accounts(self) -> list[str]:
        accounts = set(self._tracker.get_available_users())
        if self._username:
            accounts.add(self._username)
        if not accounts:
            raise NoAccountsError("No accounts available")
        return sorted(accounts)

    def _default_account(self, accounts: list[str]) -> str:
        configured = self._settings.get_default_account()
        if configured in accounts:
            return configured
        if configured:
            logger.info(
                "Default account %r has no history; using %r", configured, accounts[0]
            )
        return accounts[0]

    def _setup_ui(self, accounts: list[str], account: str, default_tab: int) -> None:
        main = QVBoxLayout(self)
        main.setContentsMargins(10, 10, 10, 10)
        main.setSpacing(6)

        # Account selection
        self.account_combo = QComboBox()
        self.account_combo.setStyleSheet(AppStyles.COMBOBOX)
        self.account_combo.addItems(accounts)
        self.account_combo.setCurrentText(account)
        main.addWidget(self.account_combo)

        self.show_accounts_checkbox = QCheckBox("Show accounts")
        self.show_accounts_checkbox.setStyleSheet(AppStyles.CHECKBOX)
        show_accounts = self._settings.get_show_accounts_by_default()
        self.show_accounts_checkbox.setChecked(show_accounts)
        self.account_combo.setVisible(show_accounts)
        main.addWidget(self.show_accounts_checkbox)

        # Window selection: preset combo or explicit date pickers
        self.advanced_button = QPushButton(ADVANCED_TEXT)
        self.advanced_button.setStyleSheet(AppStyles.BUTTON_SECONDARY)
        main.addWidget(self.advanced_button)

        self.simple_container = QWidget()
        simple_layout = QHBoxLayout(self.simple_container)
        simple_layout.setContentsMargins(0, 0, 0, 0)
        self.preset_combo = QComboBox()
        self.preset_combo.setStyleSheet(AppStyles.COMBOBOX)
        self.preset_combo.addItems(TimePreset.labels())
        self.preset_combo.setCurrentIndex(DEFAULT_PRESET_INDEX)
        simple_layout.addWidget(self.preset_combo)
        main.addWidget(self.simple_container)

        self.date_picker_container = QWidget()
        picker_layout = QVBoxLayout(self.date_picker_container)
        picker_layout.setContentsMargins(0, 0, 0, 0)
        picker_layout.setSpacing(4)
        self.start_picker = DateTimePickerWidget("Start Date", self._state.range_start)
        self.end_picker = DateTimePickerWidget("End Date", self._state.range_end)
        picker_layout.addWidget(self.start_picker)
        picker_layout.addWidget(self.end_picker)
        self.date_picker_container.setVisible(False)
        main.addWidget(self.date_picker_container)

        # Bank tab selection
        tab_layout = QHBoxLayout()
        tab_layout.setSpacing(4)
        tab_label = QLabel("Bank Tab: ")
        tab_label.setStyleSheet(f"color: {COLORS.TEXT_SECONDARY};")
        self.tab_combo = QComboBox()
        self.tab_combo.setStyleSheet(AppStyles.COMBOBOX)
        self.tab_combo.addItem(ALL_TABS_LABEL, ALL_TABS)
        for tab in range(MIN_TAB, MAX_TAB + 1):
            self.tab_combo.addItem(str(tab), tab)
        self.tab_combo.setCurrentIndex(self.tab_combo.findData(default_tab))
        tab_layout.addWidget(tab_label)
        tab_layout.addWidget(self.tab_combo, stretch=1)
        main.addLayout(tab_layout)

        # Net change summary
        change_frame = QFrame()
        change_frame.setFrameShape(QFrame.Shape.StyledPanel)
        change_frame.setStyleSheet(AppStyles.PANEL_DARK)
        change_layout = QVBoxLayout(change_frame)
        change_layout.setContentsMargins(8, 6, 8, 6)
        self.change_label = QLabel("")
        self.change_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        change_layout.addWidget(self.change_label)
        main.addWidget(change_frame)

        # Chart
        self._plot_widget = pg.PlotWidget()
        self._plot_widget.setBackground(GraphStyles.BACKGROUND)
        self._plot_widget.setAntialiasing(True)
        self._plot_widget.setMinimumHeight(200)
        plot_item = self._plot_widget.getPlotItem()
        self._y_axis = GPAxisItem(orientation="left")
        self._x_axis = pg.DateAxisItem(orientation="bottom")
        if plot_item is not None:
            plot_item.setAxisItems({"left": self._y_axis, "bottom": self._x_axis})
            plot_item.showGrid(x=True, y=True, alpha=GraphStyles.GRID_ALPHA)
            plot_item.setMenuEnabled(False)
        self._curve = self._plot_widget.plot(
            [],
            [],
            pen=pg.mkPen(GraphStyles.LINE_COLOR, width=GraphStyles.LINE_WIDTH),
            symbol=GraphStyles.SYMBOL,
            symbolSize=GraphStyles.SYMBOL_SIZE,
            symbolBrush=GraphStyles.LINE_COLOR,
        )
        main.addWidget(self._plot_widget, stretch=1)

        # Actions
        self.add_entry_button = QPushButton("Add Entry")
        self.add_entry_button.setStyleSheet(AppStyles.BUTTON_PRIMARY)
        main.addWidget(self.add_entry_button)

        self.refresh_button = QPushButton("Refresh")
        self.refresh_button.setStyleSheet(AppStyles.BUTTON_SECONDARY)
        main.addWidget(self.refresh_button)

        self.new_window_button: QPushButton | None = None
        if not self._is_new_window:
            self.new_window_button = QPushButton("Open In New Window")
            self.new_window_button.setStyleSheet(AppStyles.BUTTON_SECONDARY)
            main.addWidget(self.new_window_button)

    def _connect_signals(self) -> None:
        self._state.selection_changed.connect(self._on_selection_changed)
        self.account_combo.currentTextChanged.connect(self._on_account_changed)
        self.show_accounts_checkbox.toggled.connect(self.account_combo.setVisible)
        self.advanced_button.clicked.connect(self._on_toggle_advanced)
        self.preset_combo.currentTextChanged.connect(self._on_preset_changed)
        self.start_picker.changed.connect(self._state.set_range_start)
        self.end_picker.changed.connect(self._state.set_range_end)
        self.tab_combo.currentIndexChanged.connect(self._on_tab_changed)
        self.add_entry_button.clicked.connect(self._on_add_entry)
        self.refresh_button.clicked.connect(self._refresh)
        if self.new_window_button is not None:
            self.new_window_button.clicked.connect(self._on_open_new_window)
        self._signal_bus.bank_entry_added.connect(self._on_entry_added)

    # -- public -------------------------------------------------------------

    @property
    def selection_state(self) -> SelectionState:
        return self._state

    @property
    def last_result(self) -> SeriesResult | None:
        return self._last_result

    def set_add_entry_enabled(self, enabled: bool) -> None:
        self.add_entry_button.setEnabled(enabled)

    # -- handlers -----------------------------------------------------------

    def _on_account_changed(self, account: str) -> None:
        if account:
            self._state.set_account(account)

    def _on_preset_changed(self, label: str) -> None:
        self._state.set_preset(TimePreset.from_label(label))

    def _on_tab_changed(self, index: int) -> None:
        self._state.set_tab_filter(self.tab_combo.itemData(index))

    def _on_toggle_advanced(self) -> None:
        advanced = self._state.window_mode is WindowMode.PRESET
        self.simple_container.setVisible(not advanced)
        self.date_picker_container.setVisible(advanced)
        if advanced:
            self.advanced_button.setText(SIMPLE_TEXT)
            self._state.use_explicit_range()
        else:
            self.advanced_button.setText(ADVANCED_TEXT)
            self._state.set_preset(TimePreset.from_label(self.preset_combo.currentText()))

    def _on_selection_changed(self, _selection) -> None:
        self._refresh()

    def _on_entry_added(self, account_id: str) -> None:
        if self.account_combo.findText(account_id) < 0:
            self.account_combo.addItem(account_id)
        if account_id == self._state.selection.account_id:
            self._refresh()

    @asyncSlot()
    async def _on_add_entry(self) -> None:
        await self.add_entry()

    async def add_entry(self) -> str | None:
        """Capture the current bank value, then redraw.

        The button stays disabled until the capture has resolved. Other open
        panels are told about the new entry through the signal bus.
        """
        self.set_add_entry_enabled(False)
        account_id: str | None = None
        try:
            account_id = await self._tracker.add_entry(True)
        finally:
            self._refresh()
            self.set_add_entry_enabled(True)
        if account_id is not None:
            self._signal_bus.bank_entry_added.emit(account_id)
            self._signal_bus.status_message.emit(f"Recorded bank value for {account_id}")
        else:
            self._signal_bus.status_message.emit("No bank value captured")
        return account_id

    def _on_open_new_window(self) -> None:
        from .window import open_in_new_window

        dialog = open_in_new_window(self, self._tracker, self._settings, self._username)
        self._windows.append(dialog)
        dialog.finished.connect(lambda _result, d=dialog: self._forget_window(d))

    def _forget_window(self, dialog: QWidget) -> None:
        if dialog in self._windows:
            self._windows.remove(dialog)

    # -- rendering ----------------------------------------------------------

    def _current_points(self) -> list[BankValuePoint]:
        history = self._tracker.get_bank_value_history(self._state.selection.account_id)
        if history is None:
            return []
        return history.points()

    def _refresh(self) -> None:
        """Recompute the filtered series and redraw the chart and label."""
        result = filter_and_summarize(
            self._current_points(), self._state.selection, self._clock()
        )
        self._last_result = result

        xs = [point.timestamp.timestamp() for point in result.series]
        ys = [point.value for point in result.series]
        self._curve.setData(xs, ys)
        if xs:
            self._plot_widget.enableAutoRange()

        self._update_change_label(result)

    def _update_change_label(self, result: SeriesResult) -> None:
        label = format_change(result.summary)
        tone = label.direction.value if label.direction is not None else None
        color = GraphStyles.CHANGE_COLORS[tone]
        self.change_label.setText(label.text)
        self.change_label.setStyleSheet(
            f"color: {color}; font-size: 13px; font-weight: bold;"
        )
