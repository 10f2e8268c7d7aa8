"""UI panels package."""

from .bank_history_panel import BankHistoryPanel, GPAxisItem
from .window import open_in_new_window

__all__ = ["BankHistoryPanel", "GPAxisItem", "open_in_new_window"]
