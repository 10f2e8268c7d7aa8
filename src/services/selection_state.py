"""Mutable selection state for one bank history panel."""

from __future__ import annotations

import logging
from datetime import datetime

from PyQt6.QtCore import QObject, pyqtSignal

from models.app import (
    ALL_TABS,
    DEFAULT_PRESET,
    MAX_TAB,
    Selection,
    TimePreset,
    WindowMode,
)

logger = logging.getLogger(__name__)


class SelectionState(QObject):
    """Owns the account, tab filter and time window chosen in a panel.

    The explicit range is remembered while a preset is active so that
    switching back to the date pickers restores it. Every mutator that
    changes the effective selection emits ``selection_changed``.
    """

    selection_changed = pyqtSignal(object)  # Emits Selection

    def __init__(
        self,
        account_id: str,
        range_start: datetime,
        range_end: datetime,
        tab_filter: int = ALL_TABS,
        preset: TimePreset = DEFAULT_PRESET,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._account_id = account_id
        self._tab_filter = self._validate_tab(tab_filter)
        self._preset: TimePreset | None = preset
        self._range_start = range_start
        self._range_end = range_end
        self._selection = self._build()

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def window_mode(self) -> WindowMode:
        return self._selection.window_mode

    @property
    def range_start(self) -> datetime:
        return self._range_start

    @property
    def range_end(self) -> datetime:
        return self._range_end

    def set_account(self, account_id: str) -> None:
        self._account_id = account_id
        self._commit()

    def set_tab_filter(self, tab: int) -> None:
        """Restrict the chart to one bank tab, or -1 for all tabs.

        Raises:
            ValueError: If ``tab`` is outside [-1, 9].
        """
        self._tab_filter = self._validate_tab(tab)
        self._commit()

    def set_preset(self, preset: TimePreset) -> None:
        """Select a preset window, leaving explicit-range mode."""
        self._preset = preset
        self._commit()

    def use_explicit_range(self) -> None:
        """Switch to the remembered explicit range, clearing the preset."""
        self._preset = None
        self._commit()

    def set_range_start(self, start: datetime) -> None:
        self._range_start = start
        self._preset = None
        self._commit()

    def set_range_end(self, end: datetime) -> None:
        self._range_end = end
        self._preset = None
        self._commit()

    def set_range(self, start: datetime, end: datetime) -> None:
        self._range_start = start
        self._range_end = end
        self._preset = None
        self._commit()

    @staticmethod
    def _validate_tab(tab: int) -> int:
        if tab != ALL_TABS and not 0 <= tab <= MAX_TAB:
            raise ValueError(f"Bank tab must be -1 or between 0 and {MAX_TAB}, got {tab}")
        return tab

    def _build(self) -> Selection:
        if self._preset is not None:
            return Selection(
                account_id=self._account_id,
                tab_filter=self._tab_filter,
                preset=self._preset,
            )
        return Selection(
            account_id=self._account_id,
            tab_filter=self._tab_filter,
            range_start=self._range_start,
            range_end=self._range_end,
        )

    def _commit(self) -> None:
        selection = self._build()
        if selection == self._selection:
            return
        self._selection = selection
        logger.debug("Selection changed: %s", selection)
        self.selection_changed.emit(selection)
