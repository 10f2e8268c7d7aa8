"""Main application window."""

import asyncio
import logging
import sys

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QAction, QCloseEvent
from PyQt6.QtWidgets import (
    QApplication,
    QLabel,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)
from qasync import QEventLoop, asyncSlot

from ui.dialogs import PreferencesDialog
from ui.panels import BankHistoryPanel
from ui.styles import COLORS, apply_dark_theme
from utils import (
    NoAccountsError,
    ServiceKeys,
    configure_container,
    get_config,
    get_container,
    setup_logging,
)
from utils.exceptions import BankHistoryError
from utils.settings_manager import get_settings_manager

logger = logging.getLogger(__name__)

NO_ACCOUNTS_TEXT = (
    "No bank history recorded yet.\n"
    "Open your bank in game, then use File > Add Entry."
)


class MainWindow(QMainWindow):
    """Main application window hosting the bank history panel."""

    def __init__(self, username: str = ""):
        """Initialize main window.

        Args:
            username: Account that is currently logged in, if known
        """
        super().__init__()

        # Initialize DI container and configure services
        configure_container()
        container = get_container()

        self._signal_bus = container.resolve(ServiceKeys.SIGNAL_BUS)
        self._config = container.resolve(ServiceKeys.CONFIG)
        self._settings = container.resolve(ServiceKeys.SETTINGS_MANAGER)
        self._tracker = container.resolve(ServiceKeys.TRACKER)
        self._username = username
        self._panel: BankHistoryPanel | None = None
        self._background_tasks: set[asyncio.Task] = set()

        self.setWindowTitle(f"{self._config.app.name} v{self._config.app.version}")
        self.setMinimumSize(420, 640)

        self._setup_ui()
        self._connect_signals()

    @asyncSlot()
    async def initialize_async(self):
        """Load stored history, then build the panel."""
        try:
            await self._tracker.load()
        except BankHistoryError as e:
            logger.exception("Failed to load bank history")
            self._signal_bus.error_occurred.emit(str(e))
            return
        self._show_panel()

    def _setup_ui(self) -> None:
        self._create_menu_bar()

        central = QWidget()
        self._central_layout = QVBoxLayout(central)
        self._central_layout.setContentsMargins(0, 0, 0, 0)

        self._placeholder = QLabel("Loading bank history...")
        self._placeholder.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._placeholder.setWordWrap(True)
        self._placeholder.setStyleSheet(f"color: {COLORS.TEXT_MUTED};")
        self._central_layout.addWidget(self._placeholder)
        self.setCentralWidget(central)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Ready")

    def _create_menu_bar(self) -> None:
        """Create menu bar."""
        menubar = self.menuBar()
        if not menubar:
            return

        file_menu = menubar.addMenu("&File")
        if not file_menu:
            return

        add_entry_action = QAction("&Add Entry", self)
        add_entry_action.setShortcut("Ctrl+N")
        add_entry_action.triggered.connect(self._on_add_entry)
        file_menu.addAction(add_entry_action)

        file_menu.addSeparator()

        preferences_action = QAction("&Preferences...", self)
        preferences_action.setShortcut("Ctrl+,")
        preferences_action.triggered.connect(self._on_preferences)
        file_menu.addAction(preferences_action)

        file_menu.addSeparator()

        exit_action = QAction("E&xit", self)
        exit_action.setShortcut("Ctrl+Q")
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def _connect_signals(self) -> None:
        """Connect signal bus signals to handlers."""
        self._signal_bus.status_message.connect(self._on_status_message)
        self._signal_bus.error_occurred.connect(self._on_error)
        self._signal_bus.bank_entry_added.connect(self._on_bank_entry_added)

    def _show_panel(self) -> None:
        """Replace the placeholder with a panel, if any account is known."""
        if self._panel is not None:
            return
        try:
            panel = BankHistoryPanel(
                self._tracker, self._settings, username=self._username, parent=self
            )
        except NoAccountsError:
            logger.info("No accounts with bank history yet")
            self._placeholder.setText(NO_ACCOUNTS_TEXT)
            self.status_bar.showMessage("No accounts available")
            return

        self._central_layout.removeWidget(self._placeholder)
        self._placeholder.hide()
        self._central_layout.addWidget(panel)
        self._panel = panel
        self.status_bar.showMessage(
            f"Loaded history for {len(self._tracker.get_available_users())} account(s)",
            5000,
        )

    @asyncSlot()
    async def _on_add_entry(self):
        """Capture from the menu, through the panel once it is shown."""
        if self._panel is not None:
            await self._panel.add_entry()
            return
        account_id = await self._tracker.add_entry(True)
        if account_id is None:
            self._signal_bus.status_message.emit("No bank value captured")
            return
        self._signal_bus.bank_entry_added.emit(account_id)

    def _on_bank_entry_added(self, account_id: str) -> None:
        logger.info("Bank entry added for %s", account_id)
        self._show_panel()

    def _on_preferences(self) -> None:
        """Show preferences dialog."""
        dialog = PreferencesDialog(
            self._settings, accounts=self._tracker.get_available_users(), parent=self
        )
        dialog.exec()
        logger.info("Preferences dialog closed")

    def _on_status_message(self, message: str) -> None:
        """Handle status message signal.

        Args:
            message: Status message
        """
        self.status_bar.showMessage(message, 5000)

    def _on_error(self, message: str) -> None:
        """Handle error signal.

        Args:
            message: Error message
        """
        self.status_bar.showMessage(f"Error: {message}", 10000)
        logger.error("UI error: %s", message)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802
        """Handle window close event (Qt method override).

        Args:
            event: Close event
        """
        for task in self._background_tasks:
            if not task.done():
                task.cancel()

        async def cleanup():
            try:
                await self._tracker.close()
            except BankHistoryError as e:
                logger.error("Error during cleanup: %s", e)

        loop = asyncio.get_event_loop()
        if loop.is_running():
            task = asyncio.ensure_future(cleanup())
            self._background_tasks.add(task)
            task.add_done_callback(lambda t: self._background_tasks.discard(t))
        else:
            loop.run_until_complete(cleanup())

        event.accept()


def main_window(username: str = "") -> int:
    """Main entry point for the application.

    Returns:
        Exit code
    """
    settings_manager = get_settings_manager()
    setup_logging(settings_manager=settings_manager)

    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("qasync").setLevel(logging.WARNING)

    config = get_config()
    app = QApplication(sys.argv)
    app.setApplicationName(config.app.name)
    app.setApplicationVersion(config.app.version)

    apply_dark_theme(app)

    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)

    window = MainWindow(username=username)
    window.show()

    # Schedule async initialization after window is shown
    QTimer.singleShot(0, window.initialize_async)

    with loop:
        return loop.run_forever()
