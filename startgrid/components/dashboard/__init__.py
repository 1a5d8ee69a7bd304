"""
Dashboard components for StartGrid.

Provides the main grid area with:
- Draggable/resizable cell grid
- Cell wrapper for link and dynamic content
- Grid menu toolbar
"""

from startgrid.components.dashboard.grid import create_grid_board
from startgrid.components.dashboard.cell import create_cell
from startgrid.components.dashboard.toolbar import create_toolbar, edit_toggle_state

__all__ = [
    "create_grid_board",
    "create_cell",
    "create_toolbar",
    "edit_toggle_state",
]
