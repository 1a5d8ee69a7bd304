import dash_draggable
import dash_mantine_components as dmc
from dash import html

from startgrid.components.dashboard import create_cell, create_grid_board, edit_toggle_state
from startgrid.components.dashboard.cell import contrast_class
from startgrid.components.modals import create_add_cell_modal, create_icon_results
from startgrid.config import default_gallery
from startgrid.engine.base import CONTENT_MARKER
from startgrid.icons.search import FriendlyIcon
from startgrid.layouts.serializer import fill_placeholders


def grid_layout(board):
    return next(c for c in board.children if isinstance(c, dash_draggable.GridLayout))


def test_board_follows_edit_mode(engine):
    viewing = grid_layout(create_grid_board(engine, editing=False))
    assert viewing.isDraggable is False
    assert viewing.gridCols == 4

    engine.enable()
    editing = grid_layout(create_grid_board(engine, editing=True))
    assert editing.isDraggable is True
    assert [entry["i"] for entry in editing.layout] == ["cell-0", "cell-1"]


def test_board_children_match_layout_ids(engine):
    fill_placeholders(engine)

    layout = grid_layout(create_grid_board(engine, editing=False))

    assert [c.id for c in layout.children] == [entry["i"] for entry in layout.layout]


def test_link_cell_renders_anchor_with_marker(engine):
    cell = create_cell(engine.get_item("cell-0"), editing=False)

    anchor = cell.children[0]
    assert isinstance(anchor, html.A)
    assert anchor.href == "https://github.com"
    assert anchor.children.className == "white"
    assert getattr(cell, CONTENT_MARKER) == engine.get_item("cell-0").serialized


def test_remove_button_only_while_editing(engine):
    item = engine.get_item("cell-1")

    assert len(create_cell(item, editing=False).children) == 1

    button = create_cell(item, editing=True).children[1]
    assert isinstance(button, dmc.ActionIcon)
    assert button.id == {"type": "cell-remove-btn", "index": "cell-1"}


def test_contrast_class():
    assert contrast_class("#000000") == "white"
    assert contrast_class("#ffffff") is None
    assert contrast_class("not a color") is None


def test_edit_toggle_state():
    assert edit_toggle_state(True)[0] == "Save Cells"
    assert edit_toggle_state(False)[0] == "Edit Cells"


def test_icon_results_are_keyed_by_url():
    icons = [FriendlyIcon("GitHub", "https://cdn.example.com/github.svg", "#181717")]

    (tooltip,) = create_icon_results(icons)

    assert tooltip.children.id == {"type": "icon-result", "index": "https://cdn.example.com/github.svg"}


def test_add_cell_modal_starts_closed():
    modal = create_add_cell_modal(default_gallery(), "#3e3e3e")

    assert modal.id == "add-cell-modal"
    assert modal.opened is False
