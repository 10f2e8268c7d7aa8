"""Labelled date-time picker with a calendar popup."""

from __future__ import annotations

from datetime import datetime

from PyQt6.QtCore import QDate, QDateTime, QTime, pyqtSignal
from PyQt6.QtWidgets import (
    QCalendarWidget,
    QDateTimeEdit,
    QHBoxLayout,
    QLabel,
    QWidget,
)

from ui.styles import COLORS, AppStyles

DISPLAY_FORMAT = "yyyy-MM-dd HH:mm"


def to_qdatetime(value: datetime) -> QDateTime:
    """Convert an aware datetime to a local QDateTime."""
    local = value.astimezone()
    return QDateTime(
        QDate(local.year, local.month, local.day),
        QTime(local.hour, local.minute, local.second),
    )


def from_qdatetime(value: QDateTime) -> datetime:
    """Convert a local QDateTime to an aware datetime in the local zone."""
    return value.toPyDateTime().astimezone()


class DateTimePickerWidget(QWidget):
    """A caption plus a ``QDateTimeEdit`` that reports aware datetimes."""

    changed = pyqtSignal(object)  # Emits datetime

    def __init__(
        self,
        caption: str,
        value: datetime,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(4)

        self._label = QLabel(caption)
        self._label.setMinimumWidth(40)
        self._label.setStyleSheet(f"color: {COLORS.TEXT_SECONDARY};")
        layout.addWidget(self._label)

        self._edit = QDateTimeEdit()
        self._edit.setCalendarPopup(True)
        self._edit.setDisplayFormat(DISPLAY_FORMAT)
        self._edit.setCorrectionMode(
            QDateTimeEdit.CorrectionMode.CorrectToNearestValue
        )
        self._edit.setStyleSheet(AppStyles.DATE_TIME_EDIT)
        calendar = self._edit.calendarWidget()
        if calendar is not None:
            calendar.setGridVisible(True)
            # Week numbers swallow clicks in the popup
            calendar.setVerticalHeaderFormat(
                QCalendarWidget.VerticalHeaderFormat.NoVerticalHeader
            )
            calendar.setStyleSheet(AppStyles.CALENDAR)
        self.set_value(value)
        self._edit.dateTimeChanged.connect(self._on_changed)
        layout.addWidget(self._edit, stretch=1)

    @property
    def edit(self) -> QDateTimeEdit:
        return self._edit

    def value(self) -> datetime:
        return from_qdatetime(self._edit.dateTime())

    def set_value(self, value: datetime) -> None:
        """Update the picker without emitting ``changed``."""
        self._edit.blockSignals(True)
        self._edit.setDateTime(to_qdatetime(value))
        self._edit.blockSignals(False)

    def _on_changed(self, value: QDateTime) -> None:
        self.changed.emit(from_qdatetime(value))
