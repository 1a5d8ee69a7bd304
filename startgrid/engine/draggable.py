"""
Server-side mirror of a ``dash_draggable.GridLayout``.

The browser component owns dragging and resizing. This engine keeps the item
list, geometry and interaction flag in sync with it so the session can read
and mutate the grid between callbacks.
"""

import logging
import uuid
from collections import defaultdict
from typing import Any, Callable, Dict, List

from startgrid.engine.base import EVENTS, EngineItem, EngineOptions, GridEngine, item_geometry

logger = logging.getLogger(__name__)


class DraggableGridEngine(GridEngine):
    """In-memory engine whose layout is exchanged with dash_draggable."""

    def __init__(self, column: int, row: int):
        self.opts = EngineOptions(column=column, row=row)
        self._items: List[EngineItem] = []
        self._enabled = False
        self._handlers: Dict[str, List[Callable[..., None]]] = defaultdict(list)

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    @property
    def is_enabled(self) -> bool:
        return self._enabled

    def on(self, event: str, handler: Callable[..., None]) -> None:
        if event not in EVENTS:
            raise ValueError(f"Unknown engine event: {event}")
        self._handlers[event].append(handler)

    def emit(self, event: str, *args: Any) -> None:
        for handler in list(self._handlers[event]):
            handler(*args)

    def get_grid_items(self) -> List[EngineItem]:
        return list(self._items)

    def add_widget(self, item: EngineItem) -> EngineItem:
        if not item.id:
            item.id = f"cell-{uuid.uuid4().hex[:8]}"
        self._items.append(item)
        return item

    def remove_widget(self, item: EngineItem) -> None:
        self._items = [i for i in self._items if i.id != item.id]

    def to_layout(self) -> List[Dict[str, Any]]:
        """Layout list for the ``layout`` prop of dash_draggable.GridLayout."""
        layout = []
        for item in self._items:
            x, y, w, h = item_geometry(item)
            layout.append({
                "i": item.id,
                "x": x,
                "y": y,
                "w": w,
                "h": h,
                "static": item.is_placeholder or not self._enabled,
            })
        return layout

    def apply_layout(self, layout: List[Dict[str, Any]]) -> bool:
        """
        Copy geometry reported by the browser onto the matching items.

        Unknown ids and placeholders are ignored. Emits ``change`` once if
        anything moved.

        Returns:
            True if any item changed
        """
        changed = False
        for entry in layout or []:
            item = self.get_item(str(entry.get("i")))
            if item is None or item.is_placeholder:
                continue
            for name in ("w", "h", "x", "y"):
                if name in entry and item.get_attribute(name) != entry[name]:
                    item.set_attribute(name, entry[name])
                    changed = True

        if changed:
            logger.debug("Layout changed in browser (%d entries)", len(layout))
            self.emit("change")
        return changed
