"""
Cell serializer for the grid engine.

Converts live engine items to the wire Grid and back, and manages the
placeholder items that pad the grid outside of edit mode.
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

from startgrid.engine.base import PLACEHOLDER_CLASS, EngineItem, GridEngine, item_geometry, read_int
from startgrid.errors import ContentParseError
from startgrid.layouts.cells import Cell, CellContent, Grid, parse_content

logger = logging.getLogger(__name__)


def serialize(engine: GridEngine) -> Grid:
    """
    Read the engine's current state into a Grid.

    Placeholders are skipped. Missing or malformed geometry falls back to
    ``w=h=1, x=y=0``. A cell whose embedded content fails to parse is kept
    with empty content; the rest of the grid is unaffected.

    Args:
        engine: Engine to read

    Returns:
        Grid with col/row taken from the engine's live configuration
    """
    cells = []
    for item in engine.get_grid_items():
        if item.is_placeholder:
            continue

        cells.append(Cell(
            w=read_int(item.get_attribute("w"), 1),
            h=read_int(item.get_attribute("h"), 1),
            x=read_int(item.get_attribute("x"), 0),
            y=read_int(item.get_attribute("y"), 0),
            content=read_content(item),
        ))

    return Grid(col=engine.opts.column, row=engine.opts.row, cells=cells)


def read_content(item: EngineItem) -> Optional[CellContent]:
    """Parse the embedded content marker of an item, or None."""
    if not item.serialized:
        return None

    try:
        return parse_content(json.loads(item.serialized))
    except (ValueError, ContentParseError) as e:
        # json.JSONDecodeError is a ValueError
        logger.warning("Ignoring unreadable content of cell %s: %s", item.id, e)
        return None


def item_from_cell(cell: Cell, item_id: str) -> EngineItem:
    """Build an engine item carrying the cell's geometry and content marker."""
    serialized = None
    if cell.content is not None:
        serialized = json.dumps(cell.content.to_dict())

    return EngineItem(
        id=item_id,
        attributes={"w": cell.w, "h": cell.h, "x": cell.x, "y": cell.y},
        serialized=serialized,
    )


def deserialize(grid: Grid) -> List[EngineItem]:
    """
    Turn a stored Grid into engine items, in cell order.

    Args:
        grid: Grid loaded from persistence

    Returns:
        List of items with ids ``cell-0``, ``cell-1``, ...
    """
    return [item_from_cell(cell, f"cell-{index}") for index, cell in enumerate(grid.cells)]


def load_into(engine: GridEngine, grid: Grid) -> None:
    """Replace the engine's items and size with the contents of a Grid."""
    for item in engine.get_grid_items():
        engine.remove_widget(item)

    engine.opts.column = grid.col
    engine.opts.row = grid.row
    for item in deserialize(grid):
        engine.add_widget(item)


def fill_placeholders(engine: GridEngine) -> int:
    """
    Pad every free unit of the grid with a 1x1 placeholder.

    Returns:
        Number of placeholders added
    """
    taken = set()
    for item in engine.get_grid_items():
        x, y, w, h = item_geometry(item)
        taken.update((cx, cy) for cx in range(x, x + w) for cy in range(y, y + h))

    added = 0
    for y in range(engine.opts.row):
        for x in range(engine.opts.column):
            if (x, y) in taken:
                continue
            engine.add_widget(EngineItem(
                id=f"placeholder-{x}-{y}",
                attributes={"w": 1, "h": 1, "x": x, "y": y},
                classes={PLACEHOLDER_CLASS},
            ))
            added += 1

    return added


def remove_placeholders(engine: GridEngine) -> int:
    """
    Remove all placeholder items.

    Returns:
        Number of placeholders removed
    """
    removed = 0
    for item in engine.get_grid_items():
        if item.is_placeholder:
            engine.remove_widget(item)
            removed += 1
    return removed


def save_grid_to_file(grid: Grid, filepath: Path) -> None:
    """
    Save a grid to a JSON file.

    Args:
        grid: Grid to export
        filepath: Path to save the file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(grid.to_dict(), f, indent=2, ensure_ascii=False)


def load_grid_from_file(filepath: Path) -> Grid:
    """
    Load a grid from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file is not a JSON grid object
    """
    with open(Path(filepath), "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Not a grid file: {filepath}")

    return Grid.from_dict(data)

