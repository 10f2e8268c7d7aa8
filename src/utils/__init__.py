"""Utility functions and classes for Bank Value History."""

from .config import get_config, reset_config
from .di_container import (
    DIContainer,
    DIContainerError,
    ServiceKeys,
    configure_container,
    get_container,
    reset_container,
)
from .exceptions import (
    BankHistoryError,
    CaptureError,
    ConfigurationError,
    NoAccountsError,
    RepositoryError,
    TrackerError,
)
from .logging_setup import setup_logging
from .settings_manager import get_settings_manager, reset_settings_manager

__all__ = [
    "BankHistoryError",
    "CaptureError",
    "ConfigurationError",
    "DIContainer",
    "DIContainerError",
    "NoAccountsError",
    "RepositoryError",
    "ServiceKeys",
    "TrackerError",
    "configure_container",
    "get_config",
    "get_container",
    "get_settings_manager",
    "reset_config",
    "reset_container",
    "reset_settings_manager",
    "setup_logging",
]
