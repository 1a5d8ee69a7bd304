"""
UI components for StartGrid.

This package contains all the Dash/Mantine components used in the application:
- dashboard: Draggable cell grid, cell wrapper and grid menu
- modals: Add-cell dialog with link and dynamic tabs
"""

# Dashboard components
from startgrid.components.dashboard import (
    create_grid_board,
    create_cell,
    create_toolbar,
    edit_toggle_state,
)

# Modals
from startgrid.components.modals import create_add_cell_modal, create_icon_results

__all__ = [
    # Dashboard
    "create_grid_board",
    "create_cell",
    "create_toolbar",
    "edit_toggle_state",
    # Modals
    "create_add_cell_modal",
    "create_icon_results",
]
