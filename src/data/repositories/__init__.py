"""Repository layer for bank value history storage.

- Repository: single SQLite connection and schema setup
- bank_history: functions for saving and loading bank value captures

Usage:
    from data.repositories import Repository, bank_history

    repo = Repository()
    await repo.initialize()
    history = await bank_history.get_history(repo, "Zezima")
"""

from __future__ import annotations

from . import bank_history
from .repository import Repository

__all__ = [
    "Repository",
    "bank_history",
]
