"""Custom exception hierarchy for Bank Value History.

Provides structured exception classes for different error scenarios.
"""

from __future__ import annotations


class BankHistoryError(Exception):
    """Base exception for all Bank Value History errors."""

    pass


class ConfigurationError(BankHistoryError):
    """Exception raised for configuration-related errors."""

    pass


class RepositoryError(BankHistoryError):
    """Base exception for repository/database errors."""

    pass


class TrackerError(BankHistoryError):
    """Base exception for bank value tracker errors."""

    pass


class NoAccountsError(TrackerError):
    """Exception raised when no tracked accounts exist to chart."""

    pass


class CaptureError(TrackerError):
    """Exception raised when a bank value capture cannot be read."""

    pass
