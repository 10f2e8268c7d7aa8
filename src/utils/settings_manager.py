"""Centralized user settings management for Bank Value History.

This module manages user preferences through a JSON file.

Features:
- Thread-safe global accessor
- Atomic file writes (temp file + replace)
- Type-safe Pydantic models
- Bank history panel defaults
- Logging preferences
- Automatic defaults on first run

Usage:
    from utils.settings_manager import get_settings_manager

    settings = get_settings_manager()
    tab = settings.get_default_bank_tab()
    settings.set_default_account("Zezima")
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
import time
from pathlib import Path

from pydantic import BaseModel, Field

from .config import get_config

logger = logging.getLogger(__name__)


class BankHistoryPreferences(BaseModel):
    """Defaults applied when a bank history panel is opened."""

    show_accounts_by_default: bool = Field(
        default=True,
        description="Whether the account selector is visible when the panel opens",
    )
    default_account: str = Field(
        default="",
        description="Account selected on open (empty = first available)",
    )
    default_bank_tab: int = Field(
        default=0,
        ge=-1,
        le=9,
        description="Bank tab selected on open (-1 = all tabs)",
    )


class LoggingPreferences(BaseModel):
    """Preferences for application logging."""

    save_to_file: bool = Field(
        default=True,
        description="Whether to save logs to files",
    )
    retention_count: int = Field(
        default=7,
        description="Number of log files to retain (older files are deleted)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )


class UserSettings(BaseModel):
    """Root settings model containing all user preferences."""

    bank_history: BankHistoryPreferences = Field(
        default_factory=BankHistoryPreferences,
        description="Bank history panel defaults",
    )
    logging: LoggingPreferences = Field(
        default_factory=LoggingPreferences,
        description="Logging preferences for file output and retention",
    )


class SettingsManager:
    """Settings manager with thread-safe JSON persistence.

    All writes are atomic: settings are written to a temp file in the same
    directory and moved into place.
    """

    def __init__(self, settings_path: Path | None = None) -> None:
        """Initialize the settings manager.

        Args:
            settings_path: JSON file to use (defaults to the configured
                user settings file)
        """
        self._settings_path = settings_path or get_config().app.user_settings_file
        self._write_lock = threading.Lock()
        self._settings = self._load()

    @property
    def settings_path(self) -> Path:
        return self._settings_path

    def _load(self) -> UserSettings:
        """Load settings from JSON file, create defaults if missing."""
        if not self._settings_path.exists():
            logger.info(
                f"Settings file not found at {self._settings_path}, creating defaults"
            )
            return self._create_defaults()

        try:
            with open(self._settings_path, encoding="utf-8") as f:
                data = json.load(f)
            return UserSettings.model_validate(data)
        except Exception as e:
            logger.warning(
                f"Failed to load settings from {self._settings_path}: {e}. "
                f"Using defaults."
            )
            return self._create_defaults()

    def _create_defaults(self) -> UserSettings:
        defaults = UserSettings()
        self._save(defaults)
        return defaults

    def _save(self, settings: UserSettings | None = None) -> None:
        """Atomically save settings to JSON with limited retries on replace.

        Args:
            settings: Settings to save. If None, saves current settings.
        """
        if settings is None:
            settings = self._settings

        with self._write_lock:
            self._settings_path.parent.mkdir(parents=True, exist_ok=True)

            temp_name = f"{self._settings_path.name}.tmp-{os.getpid()}-{int(time.time() * 1000)}"
            temp_path = self._settings_path.parent / temp_name

            try:
                with open(temp_path, "w", encoding="utf-8") as f:
                    json.dump(settings.model_dump(mode="json"), f, indent=2)
                    f.flush()
                    os.fsync(f.fileno())
            except Exception as e:
                logger.error(
                    "Failed to write temporary settings file %s: %s", temp_path, e
                )
                with contextlib.suppress(Exception):
                    if temp_path.exists():
                        temp_path.unlink()
                raise

            max_attempts = 5
            delay = 0.1
            last_err: Exception | None = None
            for attempt in range(1, max_attempts + 1):
                try:
                    os.replace(temp_path, self._settings_path)
                    logger.debug("Settings saved to %s", self._settings_path)
                    last_err = None
                    break
                except PermissionError as e:
                    last_err = e
                    logger.warning(
                        "PermissionError replacing settings (attempt %d/%d): %s",
                        attempt,
                        max_attempts,
                        e,
                    )
                    time.sleep(delay)
                    delay = min(delay * 2, 1.0)

            with contextlib.suppress(Exception):
                if temp_path.exists():
                    temp_path.unlink()

            if last_err is not None:
                raise last_err

    # -------------------------------------------------------------------------
    # Bank History Panel
    # -------------------------------------------------------------------------

    def get_show_accounts_by_default(self) -> bool:
        return self._settings.bank_history.show_accounts_by_default

    def set_show_accounts_by_default(self, visible: bool) -> None:
        self._settings.bank_history.show_accounts_by_default = visible
        self._save()

    def get_default_account(self) -> str:
        return self._settings.bank_history.default_account

    def set_default_account(self, account_id: str) -> None:
        self._settings.bank_history.default_account = account_id
        self._save()

    def get_default_bank_tab(self) -> int:
        return self._settings.bank_history.default_bank_tab

    def set_default_bank_tab(self, tab: int) -> None:
        """Set the bank tab selected on open.

        Raises:
            ValueError: If ``tab`` is outside [-1, 9].
        """
        if not -1 <= tab <= 9:
            raise ValueError(f"Bank tab must be between -1 and 9, got {tab}")
        self._settings.bank_history.default_bank_tab = tab
        self._save()

    # -------------------------------------------------------------------------
    # Logging Preferences
    # -------------------------------------------------------------------------

    def get_logging_save_to_file(self) -> bool:
        return self._settings.logging.save_to_file

    def set_logging_save_to_file(self, enabled: bool) -> None:
        self._settings.logging.save_to_file = enabled
        self._save()

    def get_logging_retention_count(self) -> int:
        return self._settings.logging.retention_count

    def set_logging_retention_count(self, count: int) -> None:
        self._settings.logging.retention_count = max(1, count)
        self._save()

    def get_logging_level(self) -> str:
        return self._settings.logging.log_level

    def set_logging_level(self, level: str) -> None:
        level = level.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {level}")
        self._settings.logging.log_level = level
        self._save()


# Global accessor
_manager_instance: SettingsManager | None = None
_manager_lock = threading.Lock()


def get_settings_manager(
    settings_manager: SettingsManager | None = None,
) -> SettingsManager:
    """Get the global settings manager instance.

    Args:
        settings_manager: Optional settings manager to use instead of the
                          global one. If provided, becomes the global one.

    Returns:
        Global SettingsManager
    """
    global _manager_instance  # noqa: PLW0603

    if settings_manager is not None:
        with _manager_lock:
            _manager_instance = settings_manager
        return _manager_instance

    if _manager_instance is None:
        with _manager_lock:
            if _manager_instance is None:
                _manager_instance = SettingsManager()

    assert _manager_instance is not None
    return _manager_instance


def reset_settings_manager() -> None:
    """Reset the global settings manager instance.

    Primarily for testing purposes.
    """
    global _manager_instance  # noqa: PLW0603

    with _manager_lock:
        _manager_instance = None
