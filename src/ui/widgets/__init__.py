"""UI widgets package."""

from .date_time_picker import DateTimePickerWidget

__all__ = ["DateTimePickerWidget"]
