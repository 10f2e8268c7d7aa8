"""Filtered series and change summary models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field


class ChangeDirection(Enum):
    """Sign of the change between the first and last plotted value."""

    UP = "up"
    DOWN = "down"
    NONE = "none"


class SeriesPoint(BaseModel):
    """One plotted point of the filtered series."""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    value: int


class ChangeSummary(BaseModel):
    """Net change across the plotted window."""

    model_config = ConfigDict(frozen=True)

    absolute_delta: int = Field(..., description="Last value minus first value")
    percent_delta: Decimal | None = Field(
        None,
        description="Delta relative to the first value, None when it is zero",
    )
    direction: ChangeDirection = Field(..., description="Sign of the delta")


class SeriesResult(NamedTuple):
    """Filtered series together with its summary (None when empty)."""

    series: list[SeriesPoint]
    summary: ChangeSummary | None
