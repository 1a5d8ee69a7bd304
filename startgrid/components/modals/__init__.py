"""
Modal components for StartGrid.

Provides the add-cell dialog with its link and dynamic tabs.
"""

from startgrid.components.modals.add_cell import create_add_cell_modal, create_icon_results

__all__ = [
    "create_add_cell_modal",
    "create_icon_results",
]
