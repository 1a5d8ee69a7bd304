import pytest

from startgrid.errors import ContentParseError
from startgrid.layouts.cells import (
    Cell,
    DynamicContent,
    Grid,
    LinkContent,
    parse_content,
)


def test_parse_link_content():
    content = parse_content({
        "type": "l",
        "iconUrl": "https://cdn.example.com/a.svg",
        "link": "https://a.example.com",
        "bgColor": "#112233",
    })

    assert isinstance(content, LinkContent)
    assert content.type == "l"
    assert content.bgColor == "#112233"


def test_parse_dynamic_content():
    content = parse_content({"type": "d", "src": "/dynamic/mininote"})

    assert content == DynamicContent(src="/dynamic/mininote")
    assert content.to_dict() == {"type": "d", "src": "/dynamic/mininote"}


@pytest.mark.parametrize("data", [
    None,
    "l",
    {},
    {"type": "x", "src": "/a"},
    {"type": "l", "iconUrl": "a", "link": "b"},
    {"type": "d", "src": 3},
])
def test_parse_content_rejects_malformed(data):
    with pytest.raises(ContentParseError):
        parse_content(data)


def test_link_content_dict_has_type_tag():
    content = LinkContent(iconUrl="i", link="", bgColor="#000000")
    assert content.to_dict() == {"type": "l", "iconUrl": "i", "link": "", "bgColor": "#000000"}


def test_cell_from_dict_drops_bad_content_and_geometry():
    cell = Cell.from_dict({"w": "x", "h": -2, "x": 3, "content": {"type": "?"}})

    assert (cell.w, cell.h, cell.x, cell.y) == (1, 1, 3, 0)
    assert cell.content is None


def test_cell_without_content_omits_key():
    assert Cell(w=2, h=1, x=0, y=1).to_dict() == {"w": 2, "h": 1, "x": 0, "y": 1}


def test_grid_from_dict_uses_defaults_for_invalid_size():
    grid = Grid.from_dict({"col": 0, "row": "many", "cells": [{"w": 1}, "junk"]}, 8, 4)

    assert (grid.col, grid.row) == (8, 4)
    assert len(grid.cells) == 1


def test_grid_to_dict():
    grid = Grid(col=2, row=2, cells=[Cell(content=DynamicContent(src="/w"))])

    assert grid.to_dict() == {
        "col": 2,
        "row": 2,
        "cells": [{"w": 1, "h": 1, "x": 0, "y": 0, "content": {"type": "d", "src": "/w"}}],
    }
