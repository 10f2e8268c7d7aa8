"""SQLite database schemas for bank value history tracking."""

from __future__ import annotations

CREATE_BANK_VALUE_HISTORY_TABLE = """
CREATE TABLE IF NOT EXISTS bank_value_history (
    entry_id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id TEXT NOT NULL,
    recorded_at TIMESTAMP NOT NULL,
    bank_value INTEGER NOT NULL,
    tab INTEGER NOT NULL DEFAULT 0,
    UNIQUE(account_id, recorded_at)
);
"""

CREATE_BANK_VALUE_HISTORY_INDEX = """
CREATE INDEX IF NOT EXISTS idx_bank_value_history_account
ON bank_value_history(account_id, entry_id);
"""

ALL_TABLES = [
    CREATE_BANK_VALUE_HISTORY_TABLE,
    CREATE_BANK_VALUE_HISTORY_INDEX,
]
