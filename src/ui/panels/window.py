"""Stand-alone window hosting an independent bank history panel."""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import QDialog, QVBoxLayout, QWidget

from data.tracker import BankValueTracker
from utils.settings_manager import SettingsManager

from .bank_history_panel import BankHistoryPanel

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Bank History"
WINDOW_SIZE = (500, 500)


def open_in_new_window(
    parent: QWidget | None,
    tracker: BankValueTracker,
    settings_manager: SettingsManager,
    username: str = "",
) -> QDialog:
    """Show a non-modal dialog with its own panel and selection.

    The new panel shares the tracker and settings but not the selection.
    """
    dialog = QDialog(parent)
    dialog.setWindowTitle(WINDOW_TITLE)
    dialog.setModal(False)
    dialog.resize(*WINDOW_SIZE)

    layout = QVBoxLayout(dialog)
    layout.setContentsMargins(0, 0, 0, 0)
    panel = BankHistoryPanel(
        tracker, settings_manager, username=username, is_new_window=True, parent=dialog
    )
    layout.addWidget(panel)

    dialog.show()
    logger.debug("Opened bank history window")
    return dialog
