"""
Grid layout model and serialization for StartGrid.

This package handles:
- The wire model (Grid, Cell, link and dynamic content)
- Engine <-> Grid serialization
- Placeholder padding outside of edit mode
- JSON file export/import
"""

from startgrid.layouts.cells import (
    Cell,
    CellContent,
    DynamicContent,
    Grid,
    LinkContent,
    parse_content,
)
from startgrid.layouts.serializer import (
    serialize,
    deserialize,
    load_into,
    fill_placeholders,
    remove_placeholders,
    save_grid_to_file,
    load_grid_from_file,
)

__all__ = [
    "Cell",
    "CellContent",
    "DynamicContent",
    "Grid",
    "LinkContent",
    "parse_content",
    "serialize",
    "deserialize",
    "load_into",
    "fill_placeholders",
    "remove_placeholders",
    "save_grid_to_file",
    "load_grid_from_file",
]
