"""
Start-page grid component using dash-draggable.

Renders the session's engine items as a fixed-size draggable grid. Dragging
and resizing are only enabled in edit mode.
"""

import dash_draggable
from dash import html

from startgrid.components.dashboard.cell import create_cell
from startgrid.engine.draggable import DraggableGridEngine


ROW_HEIGHT = 100


def create_grid_board(engine: DraggableGridEngine, editing: bool) -> html.Div:
    """
    Create the draggable grid for the current engine state.

    Args:
        engine: Engine holding the items to render
        editing: Whether the grid is in edit mode

    Returns:
        Div containing the editing border and the grid
    """
    cells = [create_cell(item, editing) for item in engine.get_grid_items()]

    return html.Div([
        html.Div(
            className="grid__border",
            style={
                "opacity": 1 if editing else 0,
                "position": "absolute",
                "inset": 0,
                "border": "2px dashed var(--mantine-color-blue-5)",
                "borderRadius": "12px",
                "pointerEvents": "none",
                "transition": "opacity 150ms",
            },
        ),
        dash_draggable.GridLayout(
            id="start-grid",
            children=cells,
            layout=engine.to_layout(),
            gridCols=engine.opts.column,
            height=ROW_HEIGHT,
            isDraggable=editing,
            isResizable=editing,
            save=False,
        ),
    ], className="grid editing" if editing else "grid", style={"position": "relative"})
