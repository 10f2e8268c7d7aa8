"""Centralized configuration management for Bank Value History.

This module provides application-level configuration from environment variables.

Features:
- Environment variable support via .env files
- Fallback priority: .env → hardcoded defaults
- Automatic .env.example generation from defaults
- Type-safe configuration using Pydantic
- Singleton pattern for global access

Usage:
    from utils.config import get_config

    repo = Repository(db_path=get_config().app.database_path)
"""

from __future__ import annotations

import sys
import threading
import tomllib
from logging import getLogger
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = getLogger(__name__)

_DEFAULT_NAME = "bank-value-history"


def _read_pyproject() -> dict:
    """Read pyproject.toml and extract project metadata."""
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        frozen_path = Path(sys._MEIPASS) / "pyproject.toml"  # noqa: SLF001
        if frozen_path.exists():
            pyproject_path = frozen_path
    try:
        with open(pyproject_path, "rb") as f:
            project = tomllib.load(f).get("project", {})
            return {
                "name": project.get("name", _DEFAULT_NAME),
                "version": project.get("version", "?.?.?"),
            }
    except Exception as e:
        logger.warning(f"Could not read pyproject.toml: {e}")
        return {"name": _DEFAULT_NAME, "version": "?.?.?"}


_PROJECT_METADATA = _read_pyproject()


class AppConfig(BaseSettings):
    """Application-wide configuration."""

    name: str = Field(
        default_factory=lambda: _PROJECT_METADATA["name"],
        description="Application name (from pyproject.toml)",
    )
    version: str = Field(
        default_factory=lambda: _PROJECT_METADATA["version"],
        description="Application version (from pyproject.toml)",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING",
        description="Logging level",
    )

    # Storage
    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).parent.parent.parent / "data",
        description="Directory for the database, settings and logs",
    )
    database_file: str = Field(
        default="bank_history.db",
        description="SQLite database file (relative to data_dir)",
    )
    bank_export_file: str = Field(
        default="bank_export.json",
        description="Bank export written by the game client (relative to data_dir)",
    )

    project_root: Path = Field(
        default_factory=lambda: Path(sys._MEIPASS)  # noqa: SLF001
        if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS")
        else Path(__file__).parent.parent.parent,
        description="Project root directory",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def user_data_dir(self) -> Path:
        """Directory for writable files, created on first access.

        When frozen (PyInstaller) this is a 'data' directory next to the
        executable; otherwise ``data_dir``.
        """
        if getattr(sys, "frozen", False):
            app_dir = Path(sys.executable).parent / "data"
        else:
            app_dir = self.data_dir

        app_dir.mkdir(parents=True, exist_ok=True)
        return app_dir

    @property
    def database_path(self) -> Path:
        path = Path(self.database_file)
        if path.is_absolute():
            return path
        return self.user_data_dir / path

    @property
    def bank_export_path(self) -> Path:
        path = Path(self.bank_export_file)
        if path.is_absolute():
            return path
        return self.user_data_dir / path

    @property
    def user_settings_file(self) -> Path:
        return self.user_data_dir / "user_settings.json"


class Config:
    """Main configuration container with auto-initialization."""

    def __init__(self, write_env_example: bool = True) -> None:
        self.app = AppConfig()
        if write_env_example:
            self._update_env_example()

    def _update_env_example(self) -> None:
        """Update .env.example with current default values."""
        env_example_path = self.app.project_root / ".env.example"

        lines = [
            "# Bank Value History - Environment Configuration",
            "# Copy this file to .env and customize the values",
            "#",
            "# Priority: .env > hardcoded defaults",
            "",
        ]

        for field_name, field_info in AppConfig.model_fields.items():
            if field_name in ("project_root", "name", "version"):
                continue

            if field_info.default_factory:
                try:
                    default = field_info.default_factory()
                except Exception:
                    default = None
            else:
                default = field_info.default

            lines.append(f"# {field_info.description or ''}")
            env_var = f"APP_{field_name.upper()}"
            lines.append(f"# {env_var}=" if default is None else f"# {env_var}={default}")
            lines.append("")

        try:
            env_example_path.write_text("\n".join(lines), encoding="utf-8")
        except Exception as e:
            logger.warning(f"Could not write .env.example to {env_example_path}: {e}")

    def __repr__(self) -> str:
        return f"Config(app={self.app})"


_config_instance: Config | None = None
_config_lock = threading.Lock()


def get_config(config: Config | None = None) -> Config:
    """Get the global configuration instance (lazy initialization).

    Args:
        config: Optional config instance to use instead of singleton.
                If provided, sets the singleton.

    Returns:
        Global Config instance
    """
    global _config_instance  # noqa: PLW0603

    if config is not None:
        with _config_lock:
            _config_instance = config
        return _config_instance

    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = Config()

    assert _config_instance is not None
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment."""
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = Config()
    return _config_instance


def reset_config() -> None:
    """Reset the global config instance.

    Primarily for testing.
    """
    global _config_instance  # noqa: PLW0603
    with _config_lock:
        _config_instance = None
