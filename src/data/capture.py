"""Sources of fresh bank value captures.

The game client writes the current bank value of the logged-in account to a
small JSON export whenever the bank is opened::

    {"account": "Zezima", "tab": 0, "value": 123456789,
     "captured_at": "2025-01-01T12:00:00+00:00"}

``captured_at`` is optional. The tracker asks a :class:`BankCaptureSource`
for the latest capture when the user adds an entry.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from utils.exceptions import CaptureError

logger = logging.getLogger(__name__)


class BankCapture(BaseModel):
    """Bank value read from the game client."""

    account_id: str = Field(..., alias="account", min_length=1)
    tab: int = Field(0, ge=0, le=9)
    value: int = Field(..., description="Total bank value in coins")
    captured_at: datetime | None = Field(
        None, description="When the client read the bank, if it reported it"
    )

    model_config = ConfigDict(populate_by_name=True)


class BankCaptureSource(Protocol):
    """Anything able to produce the current bank value."""

    async def capture(self) -> BankCapture | None: ...


class BankExportCaptureSource:
    """Reads captures from the game client's bank export file."""

    def __init__(self, export_path: Path) -> None:
        self._path = Path(export_path)

    @property
    def export_path(self) -> Path:
        return self._path

    async def capture(self) -> BankCapture | None:
        """Read the latest export.

        Returns:
            The capture, or None when no export has been written yet.

        Raises:
            CaptureError: If the export exists but cannot be parsed.
        """
        if not self._path.exists():
            logger.warning("No bank export found at %s", self._path)
            return None

        try:
            raw = await asyncio.to_thread(self._path.read_text, encoding="utf-8")
            capture = BankCapture.model_validate(json.loads(raw))
        except (OSError, json.JSONDecodeError, ValidationError) as e:
            raise CaptureError(f"Could not read bank export {self._path}: {e}") from e

        if capture.captured_at is not None and capture.captured_at.tzinfo is None:
            capture = capture.model_copy(
                update={"captured_at": capture.captured_at.replace(tzinfo=UTC)}
            )
        logger.debug("Read bank export for %s: %d", capture.account_id, capture.value)
        return capture
