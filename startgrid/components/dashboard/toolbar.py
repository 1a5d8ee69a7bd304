"""
Grid menu toolbar.

Provides the edit/save toggle, the add-cell button and the retry control
shown after a failed save.
"""

from typing import Tuple

import dash_mantine_components as dmc
from dash_iconify import DashIconify


def edit_toggle_state(editing: bool) -> Tuple[str, DashIconify, str]:
    """Label, icon and variant of the toggle for the current mode."""
    if editing:
        return "Save Cells", DashIconify(icon="tabler:device-floppy", width=16), "filled"
    return "Edit Cells", DashIconify(icon="tabler:pencil", width=16), "light"


def create_toolbar(editing: bool = False) -> dmc.Group:
    """
    Create the grid menu.

    Args:
        editing: Whether the grid starts in edit mode

    Returns:
        Group component with toolbar controls
    """
    label, icon, variant = edit_toggle_state(editing)

    return dmc.Group(
        [
            dmc.Group(
                [
                    dmc.Button(
                        label,
                        id="edit-toggle-btn",
                        leftSection=icon,
                        variant=variant,
                    ),
                    dmc.Button(
                        "Add Cell",
                        id="add-cell-btn",
                        leftSection=DashIconify(icon="tabler:plus", width=16),
                        variant="light",
                    ),
                ],
                gap="xs",
            ),
            dmc.Button(
                "Retry Save",
                id="retry-save-btn",
                leftSection=DashIconify(icon="tabler:refresh", width=16),
                color="red",
                variant="outline",
                size="sm",
                style={"display": "none"},
            ),
        ],
        justify="space-between",
        mb="md",
    )
