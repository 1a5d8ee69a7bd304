"""
Add cell modal component.

Two tabs: a link tile built from a searched icon, a color and a URL, and a
dynamic widget picked from the gallery or given as a custom URL.
"""

from typing import List

import dash_mantine_components as dmc
from dash import html
from dash_iconify import DashIconify

from startgrid.components.dashboard.cell import contrast_class
from startgrid.config import GalleryEntry
from startgrid.icons.search import FriendlyIcon
from startgrid.session.link_cell import BLANK_IMAGE
from startgrid.session.state import DYNAMIC_TAB, LINK_TAB


def create_add_cell_modal(gallery: List[GalleryEntry], default_color: str) -> dmc.Modal:
    """
    Create modal for adding link and dynamic cells.

    Args:
        gallery: Built-in widgets offered on the dynamic tab
        default_color: Initial link cell background

    Returns:
        Modal component
    """
    return dmc.Modal(
        id="add-cell-modal",
        title=dmc.Group([
            DashIconify(icon="tabler:square-plus", width=20),
            dmc.Text("Add Cell", fw=500),
        ]),
        children=[
            dmc.Tabs(
                [
                    dmc.TabsList([
                        dmc.TabsTab(
                            "Link",
                            value=LINK_TAB,
                            leftSection=DashIconify(icon="tabler:link", width=16),
                        ),
                        dmc.TabsTab(
                            "Dynamic",
                            value=DYNAMIC_TAB,
                            leftSection=DashIconify(icon="tabler:app-window", width=16),
                        ),
                    ]),
                    dmc.TabsPanel(create_link_tab(default_color), value=LINK_TAB, pt="md"),
                    dmc.TabsPanel(create_dynamic_tab(gallery), value=DYNAMIC_TAB, pt="md"),
                ],
                id="add-cell-tabs",
                value=LINK_TAB,
            ),
        ],
        size="lg",
        opened=False,
    )


def create_link_tab(default_color: str) -> dmc.Stack:
    return dmc.Stack([
        dmc.TextInput(
            id="add-icon-search",
            label="Icon",
            placeholder="Search icons...",
            leftSection=DashIconify(icon="tabler:search", width=16),
            value="",
        ),
        dmc.Text("Brands", size="xs", c="dimmed"),
        dmc.Group(id="add-brand-icons", gap="xs"),
        dmc.Text("Generic", size="xs", c="dimmed"),
        dmc.Group(id="add-generic-icons", gap="xs"),

        dmc.Group([
            dmc.ColorPicker(
                id="add-color-picker",
                format="hex",
                value=default_color,
            ),
            dmc.Stack([
                dmc.Text("Suggested", size="xs", c="dimmed"),
                dmc.ActionIcon(
                    id="add-suggested-color",
                    size="xl",
                    variant="filled",
                    color=default_color,
                ),
            ], gap=4, align="center"),
        ], align="flex-start"),

        dmc.TextInput(
            id="add-link-input",
            label="Link",
            placeholder="https://example.com",
            leftSection=DashIconify(icon="tabler:world", width=16),
            value="",
        ),

        dmc.Group([
            html.Div(
                html.Img(
                    id="add-link-preview-img",
                    src=BLANK_IMAGE,
                    className=contrast_class(default_color),
                    style={"width": "50%", "height": "50%"},
                ),
                id="add-link-preview",
                style={
                    "backgroundColor": default_color,
                    "width": 80,
                    "height": 80,
                    "borderRadius": "8px",
                    "display": "flex",
                    "alignItems": "center",
                    "justifyContent": "center",
                },
            ),
            dmc.Button(
                "Finish",
                id="add-link-finish",
                leftSection=DashIconify(icon="tabler:check", width=16),
            ),
        ], justify="space-between"),
    ], gap="sm")


def create_dynamic_tab(gallery: List[GalleryEntry]) -> dmc.Stack:
    items = [
        dmc.Button(
            entry.name,
            id={"type": "gallery-item", "index": i},
            leftSection=DashIconify(icon=entry.icon, width=16),
            variant="light",
        )
        for i, entry in enumerate(gallery)
    ]

    return dmc.Stack([
        dmc.Text("Gallery", size="xs", c="dimmed"),
        dmc.Group(items, gap="xs"),
        dmc.TextInput(
            id="add-iframe-src",
            label="Custom URL",
            placeholder="https://example.com/widget",
            leftSection=DashIconify(icon="tabler:code", width=16),
            value="",
        ),
        html.Iframe(
            id="add-dynamic-preview",
            style={"width": "100%", "height": 200, "border": 0, "borderRadius": "8px"},
        ),
        dmc.Text(id="add-dynamic-error", size="sm", c="red"),
        dmc.Group([
            dmc.Button(
                "Finish",
                id="add-dynamic-finish",
                leftSection=DashIconify(icon="tabler:check", width=16),
            ),
        ], justify="flex-end"),
    ], gap="sm")


def create_icon_results(icons: List[FriendlyIcon]) -> List[dmc.Tooltip]:
    """Clickable thumbnails for a list of search results."""
    return [
        dmc.Tooltip(
            dmc.ActionIcon(
                html.Img(src=icon.url, style={"width": 20, "height": 20}),
                id={"type": "icon-result", "index": icon.url},
                variant="default",
                size="lg",
            ),
            label=icon.title,
        )
        for icon in icons
    ]
