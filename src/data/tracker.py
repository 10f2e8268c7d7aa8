"""Bank value history tracker.

The tracker is the panel's view of stored history: it lists accounts, hands
out per-account histories and records new captures. Reads are served from an
in-memory cache so the panel can recompute synchronously on every selection
change; writes go through the repository.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Protocol

from models.app import BankValueHistory
from utils.exceptions import BankHistoryError

from .capture import BankCaptureSource
from .repositories import Repository, bank_history

logger = logging.getLogger(__name__)

EntryCallback = Callable[[str | None], None]


class BankValueTracker(Protocol):
    """What a bank history panel needs from its host."""

    def get_available_users(self) -> set[str]: ...

    def get_bank_value_history(self, account_id: str) -> BankValueHistory | None: ...

    async def add_entry(
        self, capture_now: bool = True, on_complete: EntryCallback | None = None
    ) -> str | None: ...


class HistoryTracker:
    """Repository-backed tracker with a synchronous read cache."""

    def __init__(
        self,
        repository: Repository,
        capture_source: BankCaptureSource,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._repo = repository
        self._capture_source = capture_source
        self._clock = clock or (lambda: datetime.now(UTC))
        self._histories: dict[str, BankValueHistory] = {}
        self._loaded = False

    @property
    def loaded(self) -> bool:
        return self._loaded

    async def load(self) -> None:
        """Populate the cache from the repository."""
        await self._repo.initialize()
        histories: dict[str, BankValueHistory] = {}
        for account_id in await bank_history.get_accounts(self._repo):
            history = await bank_history.get_history(self._repo, account_id)
            if history is not None:
                histories[account_id] = history
        self._histories = histories
        self._loaded = True
        logger.info("Loaded bank value history for %d accounts", len(histories))

    def get_available_users(self) -> set[str]:
        return set(self._histories)

    def get_bank_value_history(self, account_id: str) -> BankValueHistory | None:
        return self._histories.get(account_id)

    async def add_entry(
        self, capture_now: bool = True, on_complete: EntryCallback | None = None
    ) -> str | None:
        """Capture the current bank value and append it to the history.

        Args:
            capture_now: Stamp the entry with the current time instead of the
                time reported by the client.
            on_complete: Called with the account id, or None when nothing was
                recorded. Always called, even if the capture fails.

        Returns:
            The account the entry was recorded for, or None.
        """
        account_id: str | None = None
        try:
            capture = await self._capture_source.capture()
            if capture is None:
                logger.info("No bank capture available; nothing recorded")
            else:
                recorded_at = self._clock()
                if not capture_now and capture.captured_at is not None:
                    recorded_at = capture.captured_at
                await bank_history.save_entry(
                    self._repo,
                    capture.account_id,
                    recorded_at,
                    capture.value,
                    capture.tab,
                )
                history = self._histories.setdefault(
                    capture.account_id,
                    BankValueHistory(account_id=capture.account_id),
                )
                history.add(recorded_at, capture.value, capture.tab)
                account_id = capture.account_id
        except BankHistoryError:
            logger.exception("Failed to add bank value entry")
        finally:
            if on_complete is not None:
                on_complete(account_id)
        return account_id

    async def remove_entry(self, account_id: str, recorded_at: datetime) -> bool:
        """Delete one capture from storage and the cache."""
        deleted = await bank_history.delete_entry(self._repo, account_id, recorded_at)
        history = self._histories.get(account_id)
        if history is not None:
            history.prices.pop(recorded_at, None)
            if not history.prices:
                del self._histories[account_id]
        return deleted

    async def close(self) -> None:
        await self._repo.close()
