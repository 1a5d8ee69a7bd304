"""
Grid-layout engine capability.

The drag/resize/placement engine itself is a black box (``dash_draggable`` in
the browser). The session only relies on the small surface defined here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Set, Tuple


GEOMETRY_ATTRIBUTES = ("w", "h", "x", "y")
PLACEHOLDER_CLASS = "placeholder"
CONTENT_MARKER = "data-serialized"

EVENTS = ("dragstart", "dragstop", "change")


@dataclass
class EngineOptions:
    """Live configuration of the engine."""

    column: int
    row: int


@dataclass
class EngineItem:
    """
    One item managed by the engine.

    Geometry lives in ``attributes`` exactly as the engine reports it, so values
    may be missing or malformed. ``serialized`` is the embedded content marker:
    the JSON text of the cell content, if any.
    """

    id: str
    attributes: Dict[str, Any] = field(default_factory=dict)
    serialized: Optional[str] = None
    classes: Set[str] = field(default_factory=set)

    def get_attribute(self, name: str) -> Any:
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        if name not in GEOMETRY_ATTRIBUTES:
            raise KeyError(f"Unknown geometry attribute: {name}")
        self.attributes[name] = value

    @property
    def is_placeholder(self) -> bool:
        return PLACEHOLDER_CLASS in self.classes


class GridEngine(ABC):
    """Interface the grid session drives."""

    opts: EngineOptions

    @abstractmethod
    def enable(self) -> None:
        """Allow the user to drag and resize items."""

    @abstractmethod
    def disable(self) -> None:
        """Freeze the layout."""

    @property
    @abstractmethod
    def is_enabled(self) -> bool:
        ...

    @abstractmethod
    def on(self, event: str, handler: Callable[..., None]) -> None:
        """Subscribe to ``dragstart``, ``dragstop`` or ``change``."""

    @abstractmethod
    def get_grid_items(self) -> List[EngineItem]:
        """Current items in engine order."""

    @abstractmethod
    def add_widget(self, item: EngineItem) -> EngineItem:
        ...

    @abstractmethod
    def remove_widget(self, item: EngineItem) -> None:
        ...

    def get_item(self, item_id: str) -> Optional[EngineItem]:
        for item in self.get_grid_items():
            if item.id == item_id:
                return item
        return None

    def find_free_slot(self, w: int, h: int) -> Optional[Tuple[int, int]]:
        """
        Find the first top-left position where a w x h item fits.

        Placeholders do not count as occupied.

        Returns:
            (x, y) or None if the item does not fit inside the grid
        """
        column, row = self.opts.column, self.opts.row
        if w > column or h > row:
            return None

        taken = set()
        for item in self.get_grid_items():
            if item.is_placeholder:
                continue
            x, y, iw, ih = item_geometry(item)
            taken.update((cx, cy) for cx in range(x, x + iw) for cy in range(y, y + ih))

        for y in range(row - h + 1):
            for x in range(column - w + 1):
                cells = {(cx, cy) for cx in range(x, x + w) for cy in range(y, y + h)}
                if not cells & taken:
                    return x, y
        return None


def read_int(value: Any, default: int) -> int:
    """Read a geometry attribute, falling back to default if missing, malformed or negative."""
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 0 else default


def item_geometry(item: EngineItem) -> Tuple[int, int, int, int]:
    """(x, y, w, h) of an item with defaults applied."""
    return (
        read_int(item.get_attribute("x"), 0),
        read_int(item.get_attribute("y"), 0),
        read_int(item.get_attribute("w"), 1),
        read_int(item.get_attribute("h"), 1),
    )
