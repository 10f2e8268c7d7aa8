"""Chart selection model."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .bank_value import as_aware
from .time_preset import TimePreset

ALL_TABS = -1
MIN_TAB = 0
MAX_TAB = 9


class WindowMode(Enum):
    """Which kind of time window a selection uses."""

    PRESET = "preset"
    EXPLICIT = "explicit"


class Selection(BaseModel):
    """Immutable snapshot of what the user has chosen to chart.

    Preset mode carries ``preset`` and no range; explicit mode carries the
    range and no preset.
    """

    model_config = ConfigDict(frozen=True)

    account_id: str = Field(..., description="Account whose history is shown")
    tab_filter: int = Field(
        ALL_TABS,
        ge=ALL_TABS,
        le=MAX_TAB,
        description="Bank tab to show (-1 = all tabs)",
    )
    preset: TimePreset | None = Field(None, description="Preset window")
    range_start: datetime | None = Field(None, description="Explicit window start")
    range_end: datetime | None = Field(None, description="Explicit window end")

    @field_validator("range_start", "range_end")
    @classmethod
    def _bounds_aware(cls, v: datetime | None) -> datetime | None:
        return None if v is None else as_aware(v)

    @model_validator(mode="after")
    def _check_mode(self) -> Selection:
        has_range = self.range_start is not None or self.range_end is not None
        if self.preset is not None and has_range:
            raise ValueError("A selection cannot use a preset and a range at once")
        if self.preset is None and (self.range_start is None or self.range_end is None):
            raise ValueError("An explicit range needs both a start and an end")
        return self

    @property
    def window_mode(self) -> WindowMode:
        return WindowMode.PRESET if self.preset is not None else WindowMode.EXPLICIT

    @property
    def all_tabs(self) -> bool:
        return self.tab_filter == ALL_TABS
