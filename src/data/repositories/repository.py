"""SQLite repository for bank value history.

The repository owns the single database connection and schema setup. Data
access functions live in separate modules (``bank_history.py``) and take the
repository as their first argument.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from pathlib import Path
from typing import Any

from utils.config import get_config
from utils.exceptions import RepositoryError

from . import schemas

logger = logging.getLogger(__name__)


class Repository:
    """Async wrapper around one SQLite connection.

    Usage:
        repo = Repository()
        await repo.initialize()

        from data.repositories import bank_history
        await bank_history.save_entry(repo, "Zezima", when, 1_000_000, 0)
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize repository.

        Args:
            db_path: Path to the SQLite database file, or ":memory:". If None,
                uses the configured database file in the user data directory.
        """
        if db_path is None:
            db_path = get_config().app.database_path

        self._in_memory = str(db_path) == ":memory:"
        self.db_path = Path(db_path)
        if not self._in_memory:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._conn: sqlite3.Connection | None = None
        self._lock = asyncio.Lock()
        self._initialized = False

    def _get_connection(self) -> sqlite3.Connection:
        if self._conn is None:
            target = ":memory:" if self._in_memory else str(self.db_path)
            self._conn = sqlite3.connect(
                target,
                check_same_thread=False,
                isolation_level="DEFERRED",
            )
            self._conn.row_factory = sqlite3.Row
            if not self._in_memory:
                self._conn.execute("PRAGMA journal_mode = WAL")
                self._conn.execute("PRAGMA synchronous = NORMAL")

        return self._conn

    async def execute(
        self, sql: str, parameters: tuple[Any, ...] | dict[str, Any] = ()
    ) -> sqlite3.Cursor:
        """Execute a SQL statement in a worker thread.

        Raises:
            RepositoryError: If SQLite rejects the statement.
        """
        async with self._lock:
            conn = self._get_connection()
            try:
                return await asyncio.to_thread(conn.execute, sql, parameters)
            except sqlite3.Error as e:
                raise RepositoryError(f"Query failed: {e}") from e

    async def fetchall(self, sql: str, parameters: tuple[Any, ...] = ()) -> list[Any]:
        cursor = await self.execute(sql, parameters)
        return cursor.fetchall()

    async def commit(self) -> None:
        """Commit current transaction."""
        async with self._lock:
            if self._conn:
                await asyncio.to_thread(self._conn.commit)

    async def close(self) -> None:
        """Close the database connection."""
        async with self._lock:
            if self._conn:
                await asyncio.to_thread(self._conn.close)
                self._conn = None
                self._initialized = False

    async def initialize(self) -> None:
        """Ensure the schema exists. Safe to call more than once."""
        if self._initialized:
            return

        logger.info("Initializing database schema at %s", self.db_path)
        for sql_statement in schemas.ALL_TABLES:
            statements = [s.strip() for s in sql_statement.split(";") if s.strip()]
            for stmt in statements:
                try:
                    await self.execute(stmt)
                except RepositoryError:
                    logger.error("Failed to execute schema statement: %s", stmt)
                    raise

        await self.commit()
        self._initialized = True
        logger.info("Database schema initialized successfully")
