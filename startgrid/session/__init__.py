"""
Grid editing session.

- grid_session: the viewing/editing state machine
- link_cell, dynamic_cell: add-cell builders
- color: contrast test and color suggestion
- state: session-scoped fields and notices
"""

from startgrid.session.color import ColorSuggestion, PickerState, is_dark
from startgrid.session.dynamic_cell import DynamicCellBuilder
from startgrid.session.grid_session import GridSession
from startgrid.session.link_cell import LinkCellBuilder, is_valid_url
from startgrid.session.state import Mode, Notice, SaveStatus, SessionState

__all__ = [
    "ColorSuggestion",
    "PickerState",
    "is_dark",
    "DynamicCellBuilder",
    "GridSession",
    "LinkCellBuilder",
    "is_valid_url",
    "Mode",
    "Notice",
    "SaveStatus",
    "SessionState",
]
