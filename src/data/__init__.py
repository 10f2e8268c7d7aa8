from .capture import BankCapture, BankCaptureSource, BankExportCaptureSource
from .tracker import BankValueTracker, HistoryTracker

__all__ = [
    "BankCapture",
    "BankCaptureSource",
    "BankExportCaptureSource",
    "BankValueTracker",
    "HistoryTracker",
]
