"""
Cell wrapper component for the start-page grid.

A cell renders its content (link tile or embedded widget) and carries the
serialized content marker the serializer reads back.
"""

from typing import Optional

import dash_mantine_components as dmc
from dash import html
from dash_iconify import DashIconify

from startgrid.engine.base import CONTENT_MARKER, EngineItem
from startgrid.layouts.cells import CellContent, DynamicContent, LinkContent
from startgrid.layouts.serializer import read_content
from startgrid.session.color import is_dark


def contrast_class(color: str) -> Optional[str]:
    """``white`` when artwork over ``color`` should render light."""
    try:
        return "white" if is_dark(color) else None
    except ValueError:
        return None


def create_cell(item: EngineItem, editing: bool) -> html.Div:
    """
    Create the component for one engine item.

    Args:
        item: Engine item (cell or placeholder)
        editing: Whether the grid is in edit mode

    Returns:
        Div whose id matches the item id in the grid layout
    """
    if item.is_placeholder:
        return html.Div(id=item.id, className="cell cell--placeholder")

    content = read_content(item)
    children = [create_cell_content(content)]

    if editing:
        children.append(
            dmc.ActionIcon(
                DashIconify(icon="tabler:trash", width=14),
                id={"type": "cell-remove-btn", "index": item.id},
                variant="filled",
                size="sm",
                color="red",
                className="cell__remove",
            )
        )

    marker = {CONTENT_MARKER: item.serialized} if item.serialized else {}
    return html.Div(
        children,
        id=item.id,
        className="cell editing" if editing else "cell",
        style={"height": "100%", "position": "relative"},
        **marker,
    )


def create_cell_content(content: Optional[CellContent]):
    """Render link, dynamic or empty content."""
    if isinstance(content, LinkContent):
        return html.A(
            html.Img(
                src=content.iconUrl,
                className=contrast_class(content.bgColor),
                style={"width": "50%", "height": "50%"},
            ),
            href=content.link or None,
            target="_blank",
            rel="noopener noreferrer",
            className="cell__link",
            style={
                "backgroundColor": content.bgColor,
                "display": "flex",
                "alignItems": "center",
                "justifyContent": "center",
                "height": "100%",
                "borderRadius": "8px",
            },
        )

    if isinstance(content, DynamicContent):
        return html.Iframe(
            src=content.src,
            className="cell__dynamic",
            style={"width": "100%", "height": "100%", "border": 0, "borderRadius": "8px"},
        )

    return html.Div(className="cell__empty", style={"height": "100%"})
