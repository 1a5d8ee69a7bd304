"""
Grid-layout engine adapters.

- base: the engine capability the session relies on
- draggable: in-memory mirror of a dash_draggable grid
"""

from startgrid.engine.base import (
    CONTENT_MARKER,
    GEOMETRY_ATTRIBUTES,
    PLACEHOLDER_CLASS,
    EngineItem,
    EngineOptions,
    GridEngine,
)
from startgrid.engine.draggable import DraggableGridEngine

__all__ = [
    "CONTENT_MARKER",
    "GEOMETRY_ATTRIBUTES",
    "PLACEHOLDER_CLASS",
    "EngineItem",
    "EngineOptions",
    "GridEngine",
    "DraggableGridEngine",
]
