"""Logging configuration with file rotation support.

Log Level Precedence (deterministic resolution order):
1. CLI/explicit parameter (log_level argument to setup_logging)
2. Environment variable (APP_LOG_LEVEL in .env)
3. User preferences (logging.log_level in user_settings.json via SettingsManager)
4. Config defaults (config.app.log_level from config.py)
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from .config import get_config

if TYPE_CHECKING:
    from .settings_manager import SettingsManager

logger = logging.getLogger(__name__)

LOG_FILE_PREFIX = "bankhistory_"


def resolve_log_level(
    settings_manager: SettingsManager | None = None,
    log_level: str | None = None,
) -> str:
    """Pick the effective log level name using the precedence above."""
    if log_level is not None:
        return log_level
    env_level = os.environ.get("APP_LOG_LEVEL")
    if env_level:
        return env_level
    if settings_manager:
        return settings_manager.get_logging_level()
    return get_config().app.log_level


def setup_logging(
    settings_manager: SettingsManager | None = None,
    log_level: str | None = None,
    user_data_dir: Path | None = None,
) -> None:
    """Configure application logging with file output and rotation.

    Args:
        settings_manager: Optional settings manager for logging preferences.
        log_level: Explicit logging level override (highest priority).
        user_data_dir: Directory for log files (defaults to config user_data_dir).
    """
    resolved_level = resolve_log_level(settings_manager, log_level)
    numeric_level = getattr(logging, resolved_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    save_to_file = True
    if settings_manager:
        save_to_file = settings_manager.get_logging_save_to_file()

    if save_to_file:
        if user_data_dir is None:
            user_data_dir = get_config().app.user_data_dir

        log_dir = user_data_dir / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = (
            log_dir / f"{LOG_FILE_PREFIX}{datetime.now(UTC).strftime('%Y%m%d_%H%M%S')}.log"
        )

        retention_count = 7
        if settings_manager:
            retention_count = settings_manager.get_logging_retention_count()

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=retention_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        root_logger.addHandler(file_handler)

        _cleanup_old_logs(log_dir, retention_count)
        logger.info(f"Logging to file: {log_file}")

    logger.info(f"Logging configured with level: {resolved_level}")


def _cleanup_old_logs(log_dir: Path, keep_count: int) -> None:
    """Remove old log files, keeping only the most recent ones."""
    try:
        log_files = sorted(
            log_dir.glob(f"{LOG_FILE_PREFIX}*.log*"),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        for log_file in log_files[keep_count:]:
            try:
                log_file.unlink()
                logger.debug(f"Deleted old log file: {log_file}")
            except OSError as e:
                logger.warning(f"Failed to delete old log file {log_file}: {e}")
    except OSError as e:
        logger.warning(f"Failed to cleanup old log files: {e}")
