"""
Wire model of a persisted start-page grid.

A Grid holds the column/row configuration and an ordered list of cells.
Cell content is a tagged union keyed by ``type``: ``"l"`` for link tiles and
``"d"`` for embedded dynamic widgets.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from startgrid.errors import ContentParseError


LINK_TYPE = "l"
DYNAMIC_TYPE = "d"


@dataclass
class LinkContent:
    """External-link icon tile."""

    iconUrl: str
    link: str
    bgColor: str
    type: str = field(default=LINK_TYPE, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "iconUrl": self.iconUrl,
            "link": self.link,
            "bgColor": self.bgColor,
        }


@dataclass
class DynamicContent:
    """Embedded-URL mini-app."""

    src: str
    type: str = field(default=DYNAMIC_TYPE, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "src": self.src}


CellContent = Union[LinkContent, DynamicContent]


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ContentParseError(f"Field '{key}' must be a string, got {type(value).__name__}")
    return value


def parse_content(data: Any) -> CellContent:
    """
    Build a CellContent from its JSON-compatible dict.

    The ``type`` tag is checked before any other field is trusted.

    Raises:
        ContentParseError: If the tag is unknown or a required field is missing
    """
    if not isinstance(data, dict):
        raise ContentParseError(f"Cell content must be an object, got {type(data).__name__}")

    tag = data.get("type")
    if tag == LINK_TYPE:
        return LinkContent(
            iconUrl=_require_str(data, "iconUrl"),
            link=_require_str(data, "link"),
            bgColor=_require_str(data, "bgColor"),
        )
    if tag == DYNAMIC_TYPE:
        return DynamicContent(src=_require_str(data, "src"))

    raise ContentParseError(f"Unknown cell content type: {tag!r}")


@dataclass
class Cell:
    """One positioned widget slot, in grid units."""

    w: int = 1
    h: int = 1
    x: int = 0
    y: int = 0
    content: Optional[CellContent] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"w": self.w, "h": self.h, "x": self.x, "y": self.y}
        if self.content is not None:
            data["content"] = self.content.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Cell":
        """Load a stored cell. Content that does not parse is dropped."""
        content = None
        if data.get("content"):
            try:
                content = parse_content(data["content"])
            except ContentParseError:
                content = None

        return cls(
            w=_as_int(data.get("w"), 1),
            h=_as_int(data.get("h"), 1),
            x=_as_int(data.get("x"), 0),
            y=_as_int(data.get("y"), 0),
            content=content,
        )


@dataclass
class Grid:
    """The full persisted layout of an account."""

    col: int
    row: int
    cells: List[Cell] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "col": self.col,
            "row": self.row,
            "cells": [cell.to_dict() for cell in self.cells],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_col: int = 10, default_row: int = 5) -> "Grid":
        col = _as_int(data.get("col"), default_col)
        row = _as_int(data.get("row"), default_row)
        cells = data.get("cells") or []

        return cls(
            col=col if col > 0 else default_col,
            row=row if row > 0 else default_row,
            cells=[Cell.from_dict(c) for c in cells if isinstance(c, dict)],
        )


def _as_int(value: Any, default: int) -> int:
    """Coerce a geometry value to a non-negative int, falling back to default."""
    if isinstance(value, bool):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 0 else default
