"""Service layer for the bank history panel.

Submodules:
    series_filter: pure filtering of history points and change summaries
    selection_state: per-panel selection state with change notification
"""

from .selection_state import SelectionState
from .series_filter import (
    ChangeLabel,
    Window,
    filter_and_summarize,
    filter_points,
    format_change,
    format_gp_short,
    resolve_window,
    summarize,
)

__all__ = [
    "ChangeLabel",
    "SelectionState",
    "Window",
    "filter_and_summarize",
    "filter_points",
    "format_change",
    "format_gp_short",
    "resolve_window",
    "summarize",
]
