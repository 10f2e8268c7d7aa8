"""Central signal bus for UI events using PyQt6 signals.

Provides a singleton event bus for decoupled communication between panels
and the main window.
"""

from PyQt6.QtCore import QObject, pyqtSignal


class SignalBus(QObject):
    """Central event bus for application-wide signals."""

    # Bank history signals
    bank_entry_added = pyqtSignal(str)  # Emits account_id of the new entry

    # General signals
    error_occurred = pyqtSignal(str)  # Emits error message
    status_message = pyqtSignal(str)  # Emits status message


_signal_bus = None


def get_signal_bus(signal_bus: SignalBus | None = None) -> SignalBus:
    """Get the global signal bus instance.

    Args:
        signal_bus: Optional signal bus to use instead of singleton.
                    If provided, becomes the singleton.

    Returns:
        Global SignalBus singleton
    """
    global _signal_bus  # noqa: PLW0603
    if signal_bus is not None:
        _signal_bus = signal_bus
        return _signal_bus
    if _signal_bus is None:
        _signal_bus = SignalBus()
    return _signal_bus


def reset_signal_bus() -> None:
    """Reset the global signal bus.

    Primarily for testing.
    """
    global _signal_bus  # noqa: PLW0603
    _signal_bus = None
