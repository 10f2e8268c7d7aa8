"""Repository functions for bank value history."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from models.app import BankValueHistory
from utils.exceptions import RepositoryError

if TYPE_CHECKING:
    from .repository import Repository

logger = logging.getLogger(__name__)


def _to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


async def save_entry(
    repo: Repository,
    account_id: str,
    recorded_at: datetime,
    bank_value: int,
    tab: int,
) -> int:
    """Store one bank value capture.

    A second capture for the same account at the same instant replaces the
    first.

    Returns:
        entry_id of the stored row
    """
    cursor = await repo.execute(
        """
        INSERT OR REPLACE INTO bank_value_history (
            account_id, recorded_at, bank_value, tab
        ) VALUES (?, ?, ?, ?)
        """,
        (account_id, _to_utc(recorded_at).isoformat(), bank_value, tab),
    )
    if cursor.lastrowid is None:
        raise RepositoryError("Failed to retrieve lastrowid for bank value entry.")
    entry_id = int(cursor.lastrowid)
    await repo.commit()
    logger.info(
        "Saved bank value %d (tab %d) for %s as entry %d",
        bank_value,
        tab,
        account_id,
        entry_id,
    )
    return entry_id


async def get_history(repo: Repository, account_id: str) -> BankValueHistory | None:
    """Load every capture for an account in insertion order.

    Returns:
        The history, or None when the account has no captures.
    """
    rows = await repo.fetchall(
        """
        SELECT recorded_at, bank_value, tab
        FROM bank_value_history
        WHERE account_id = ?
        ORDER BY entry_id
        """,
        (account_id,),
    )
    if not rows:
        return None

    history = BankValueHistory(account_id=account_id)
    for row in rows:
        recorded_at = _to_utc(datetime.fromisoformat(str(row["recorded_at"])))
        history.add(recorded_at, int(row["bank_value"]), int(row["tab"]))
    return history


async def get_accounts(repo: Repository) -> set[str]:
    """All accounts with at least one capture."""
    rows = await repo.fetchall(
        "SELECT DISTINCT account_id FROM bank_value_history ORDER BY account_id"
    )
    return {str(row["account_id"]) for row in rows}


async def delete_entry(repo: Repository, account_id: str, recorded_at: datetime) -> bool:
    """Remove a single capture. Returns True if a row was deleted."""
    cursor = await repo.execute(
        "DELETE FROM bank_value_history WHERE account_id = ? AND recorded_at = ?",
        (account_id, _to_utc(recorded_at).isoformat()),
    )
    await repo.commit()
    deleted = cursor.rowcount > 0
    if deleted:
        logger.info("Deleted bank value entry for %s at %s", account_id, recorded_at)
    return deleted
