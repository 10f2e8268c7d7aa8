"""User preferences dialog for application-wide settings."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from PyQt6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSpinBox,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from models.app import ALL_TABS, MAX_TAB, MIN_TAB
from ui.styles import AppStyles
from utils.settings_manager import SettingsManager, get_settings_manager

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class PreferencesDialog(QDialog):
    """Dialog for editing user preferences.

    Holds the bank history panel defaults and logging preferences in a
    tabbed interface.
    """

    def __init__(
        self,
        settings_manager: SettingsManager | None = None,
        accounts: Iterable[str] = (),
        parent: QWidget | None = None,
    ) -> None:
        """Initialize preferences dialog.

        Args:
            settings_manager: Settings manager instance (uses global if None)
            accounts: Known accounts offered as the default account
            parent: Parent widget
        """
        super().__init__(parent)
        self._settings = settings_manager or get_settings_manager()
        self._accounts = sorted(accounts)

        self.setWindowTitle("User Preferences")
        self.setMinimumWidth(480)
        self.setMinimumHeight(360)

        self._setup_ui()
        self._load_current_values()

    def _setup_ui(self) -> None:
        """Setup user interface with tabbed layout."""
        layout = QVBoxLayout(self)

        self.tabs = QTabWidget()
        layout.addWidget(self.tabs)

        self.tabs.addTab(self._create_bank_history_tab(), "Bank History")
        self.tabs.addTab(self._create_logging_tab(), "Logging")

        # Button row
        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self.apply_button = QPushButton("Apply")
        self.apply_button.setStyleSheet(AppStyles.BUTTON_PRIMARY)
        self.apply_button.clicked.connect(self._on_apply)
        button_layout.addWidget(self.apply_button)

        self.ok_button = QPushButton("OK")
        self.ok_button.setStyleSheet(AppStyles.BUTTON_PRIMARY)
        self.ok_button.clicked.connect(self._on_ok)
        button_layout.addWidget(self.ok_button)

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.setStyleSheet(AppStyles.BUTTON_SECONDARY)
        self.cancel_button.clicked.connect(self.reject)
        button_layout.addWidget(self.cancel_button)

        layout.addLayout(button_layout)

    def _create_bank_history_tab(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)

        group = QGroupBox("Panel Defaults")
        group.setStyleSheet(AppStyles.GROUP_BOX)
        form = QFormLayout(group)

        self.show_accounts_checkbox = QCheckBox("Show account selector")
        self.show_accounts_checkbox.setStyleSheet(AppStyles.CHECKBOX)
        form.addRow("Accounts:", self.show_accounts_checkbox)

        # Editable so an account without history yet can be chosen
        self.default_account_combo = QComboBox()
        self.default_account_combo.setEditable(True)
        self.default_account_combo.addItem("")
        self.default_account_combo.addItems(self._accounts)
        self.default_account_combo.setStyleSheet(AppStyles.COMBOBOX)
        form.addRow("Default Account:", self.default_account_combo)

        self.default_tab_combo = QComboBox()
        self.default_tab_combo.addItem("All", ALL_TABS)
        for tab in range(MIN_TAB, MAX_TAB + 1):
            self.default_tab_combo.addItem(str(tab), tab)
        self.default_tab_combo.setStyleSheet(AppStyles.COMBOBOX)
        form.addRow("Default Bank Tab:", self.default_tab_combo)

        help_label = QLabel(
            "Leave the default account empty to open the first account. "
            "Changes apply to panels opened afterwards."
        )
        help_label.setWordWrap(True)
        help_label.setStyleSheet("color: #888; font-size: 10px;")
        form.addRow("", help_label)

        layout.addWidget(group)
        layout.addStretch()
        return widget

    def _create_logging_tab(self) -> QWidget:
        """Create logging preferences tab."""
        widget = QWidget()
        layout = QVBoxLayout(widget)

        logging_group = QGroupBox("Log File Settings")
        logging_group.setStyleSheet(AppStyles.GROUP_BOX)
        logging_layout = QFormLayout(logging_group)

        self.log_file_checkbox = QCheckBox("Save logs to files")
        self.log_file_checkbox.setStyleSheet(AppStyles.CHECKBOX)
        logging_layout.addRow("File Logging:", self.log_file_checkbox)

        self.retention_spin = QSpinBox()
        self.retention_spin.setRange(1, 365)
        self.retention_spin.setSuffix(" files")
        self.retention_spin.setStyleSheet(AppStyles.SPINBOX)
        logging_layout.addRow("Retention:", self.retention_spin)

        retention_help = QLabel(
            "Number of log files to keep. Older files are automatically deleted. "
            "Each file represents one application session."
        )
        retention_help.setWordWrap(True)
        retention_help.setStyleSheet("color: #888; font-size: 10px;")
        logging_layout.addRow("", retention_help)

        self.log_level_combo = QComboBox()
        self.log_level_combo.addItems(LOG_LEVELS)
        self.log_level_combo.setStyleSheet(AppStyles.COMBOBOX)
        logging_layout.addRow("Log Level:", self.log_level_combo)

        layout.addWidget(logging_group)
        layout.addStretch()
        return widget

    def _load_current_values(self) -> None:
        """Load current settings into UI controls."""
        self.show_accounts_checkbox.setChecked(
            self._settings.get_show_accounts_by_default()
        )
        self.default_account_combo.setCurrentText(self._settings.get_default_account())
        self.default_tab_combo.setCurrentIndex(
            self.default_tab_combo.findData(self._settings.get_default_bank_tab())
        )

        self.log_file_checkbox.setChecked(self._settings.get_logging_save_to_file())
        self.retention_spin.setValue(self._settings.get_logging_retention_count())
        self.log_level_combo.setCurrentIndex(
            LOG_LEVELS.index(self._settings.get_logging_level())
        )

    def _on_apply(self) -> None:
        """Apply settings without closing dialog."""
        self._save_settings()

    def _on_ok(self) -> None:
        """Apply settings and close dialog."""
        self._save_settings()
        self.accept()

    def _save_settings(self) -> None:
        """Save all settings from UI controls."""
        try:
            self._settings.set_show_accounts_by_default(
                self.show_accounts_checkbox.isChecked()
            )
            self._settings.set_default_account(
                self.default_account_combo.currentText().strip()
            )
            self._settings.set_default_bank_tab(self.default_tab_combo.currentData())

            self._settings.set_logging_save_to_file(self.log_file_checkbox.isChecked())
            self._settings.set_logging_retention_count(self.retention_spin.value())
            self._settings.set_logging_level(self.log_level_combo.currentText())

            logger.info("User preferences saved successfully")

        except (OSError, ValueError) as e:
            logger.exception("Failed to save preferences: %s", e)
