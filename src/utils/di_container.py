"""Dependency injection container for Bank Value History.

Keeps the host's shared collaborators (config, settings, repository,
tracker) in one place so every panel and window is wired to the same
instances.

Usage:
    from utils.di_container import ServiceKeys, configure_container

    container = configure_container()
    tracker = container.resolve(ServiceKeys.TRACKER)
    settings = container.resolve(ServiceKeys.SETTINGS_MANAGER)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class DIContainerError(ConfigurationError):
    """Exception raised when a service cannot be resolved."""

    pass


class DIContainer:
    """Registry of service instances and lazy factories. Thread-safe."""

    def __init__(self) -> None:
        self._services: dict[str, Any] = {}
        self._factories: dict[str, Callable[[DIContainer], Any]] = {}
        self._lock = threading.RLock()

    def register(self, key: str, instance: Any) -> None:
        """Register a service instance."""
        with self._lock:
            if key in self._services:
                logger.debug("Overwriting existing service: %s", key)
            self._services[key] = instance
            logger.debug("Registered service: %s", key)

    def register_factory(self, key: str, factory: Callable[[DIContainer], Any]) -> None:
        """Register a factory called once, on first resolve.

        The factory receives the container for resolving nested dependencies.
        """
        with self._lock:
            if key in self._factories:
                logger.debug("Overwriting existing factory: %s", key)
            self._factories[key] = factory
            logger.debug("Registered factory: %s", key)

    def resolve(self, key: str) -> Any:
        """Resolve a service by key.

        Raises:
            DIContainerError: If service is not registered
        """
        with self._lock:
            if key in self._services:
                return self._services[key]

            if key in self._factories:
                logger.debug("Creating service from factory: %s", key)
                instance = self._factories[key](self)
                self._services[key] = instance
                return instance

            raise DIContainerError(
                f"Service '{key}' not registered. "
                f"Available: {sorted(set(self._services) | set(self._factories))}"
            )

    def clear(self) -> None:
        """Clear all registered services and factories."""
        with self._lock:
            self._services.clear()
            self._factories.clear()
            logger.debug("Container cleared")


# Standard service keys for the application
class ServiceKeys:
    """Standard service key constants for the DI container."""

    # Core infrastructure
    CONFIG = "config"
    SETTINGS_MANAGER = "settings_manager"
    REPOSITORY = "repository"

    # UI infrastructure
    SIGNAL_BUS = "signal_bus"

    # Bank history
    CAPTURE_SOURCE = "capture_source"
    TRACKER = "tracker"


# Global singleton container
_container_instance: DIContainer | None = None
_container_lock = threading.Lock()


def get_container() -> DIContainer:
    """Get the global DI container instance.

    Returns:
        Global DIContainer singleton
    """
    global _container_instance  # noqa: PLW0603
    if _container_instance is None:
        with _container_lock:
            if _container_instance is None:
                _container_instance = DIContainer()
    assert _container_instance is not None
    return _container_instance


def reset_container() -> None:
    """Reset the global container.

    Primarily for testing.
    """
    global _container_instance  # noqa: PLW0603
    with _container_lock:
        if _container_instance is not None:
            _container_instance.clear()
        _container_instance = None


def configure_container(container: DIContainer | None = None) -> DIContainer:
    """Configure the DI container with default service factories.

    Services are only instantiated when first resolved.

    Args:
        container: Container to configure (uses global if None)

    Returns:
        Configured container
    """
    if container is None:
        container = get_container()

    from utils.config import get_config

    container.register(ServiceKeys.CONFIG, get_config())

    def signal_bus_factory(c: DIContainer) -> Any:
        from ui.signal_bus import get_signal_bus

        return get_signal_bus()

    container.register_factory(ServiceKeys.SIGNAL_BUS, signal_bus_factory)

    def settings_factory(c: DIContainer) -> Any:
        from utils.settings_manager import get_settings_manager

        return get_settings_manager()

    container.register_factory(ServiceKeys.SETTINGS_MANAGER, settings_factory)

    def repository_factory(c: DIContainer) -> Any:
        from data.repositories import Repository

        config = c.resolve(ServiceKeys.CONFIG)
        return Repository(db_path=config.app.database_path)

    container.register_factory(ServiceKeys.REPOSITORY, repository_factory)

    def capture_source_factory(c: DIContainer) -> Any:
        from data.capture import BankExportCaptureSource

        config = c.resolve(ServiceKeys.CONFIG)
        return BankExportCaptureSource(config.app.bank_export_path)

    container.register_factory(ServiceKeys.CAPTURE_SOURCE, capture_source_factory)

    # Tracker shares the repository; every panel and window reads through it
    def tracker_factory(c: DIContainer) -> Any:
        from data.tracker import HistoryTracker

        return HistoryTracker(
            repository=c.resolve(ServiceKeys.REPOSITORY),
            capture_source=c.resolve(ServiceKeys.CAPTURE_SOURCE),
        )

    container.register_factory(ServiceKeys.TRACKER, tracker_factory)

    logger.info("DI container configured with default factories")
    return container
