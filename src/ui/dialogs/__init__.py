"""UI dialogs package."""

from .preferences_dialog import PreferencesDialog

__all__ = ["PreferencesDialog"]
