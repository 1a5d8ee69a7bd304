"""
Icon catalog backing the ``/grid/search_icon`` endpoint.

The catalog is a JSON file with two sections: ``si`` brand icons
(``slug``, ``title``, ``hex`` without ``#``) and ``fa`` generic icon names.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional


MAX_LIMIT = 50


@dataclass
class BrandIcon:
    slug: str
    title: str
    hex: str

    def to_dict(self) -> Dict[str, str]:
        return {"slug": self.slug, "title": self.title, "hex": self.hex}


def _rank(query: str, *names: str) -> Optional[int]:
    """0 for an exact match, 1 for a prefix, 2 for a substring, None otherwise."""
    best = None
    for name in names:
        name = name.lower()
        if name == query:
            rank = 0
        elif name.startswith(query):
            rank = 1
        elif query in name:
            rank = 2
        else:
            continue
        best = rank if best is None else min(best, rank)
    return best


class IconCatalog:
    """In-memory icon index."""

    def __init__(self, brands: List[BrandIcon], generics: List[str]):
        self.brands = brands
        self.generics = generics

    @classmethod
    def load(cls, path: Path) -> "IconCatalog":
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)

        brands = [
            BrandIcon(slug=i["slug"], title=i.get("title", i["slug"]), hex=i.get("hex", "3e3e3e").lstrip("#"))
            for i in data.get("si", [])
        ]
        return cls(brands, list(data.get("fa", [])))

    def search(self, query: str, limit: int = 15) -> Dict[str, List[Dict[str, Any]]]:
        """
        Find icons whose names contain the query, best matches first.

        Args:
            query: Free text; matching is case-insensitive
            limit: Maximum results per section, capped at MAX_LIMIT

        Returns:
            ``{"si": [...], "fa": [...]}``
        """
        query = (query or "").strip().lower()
        limit = max(0, min(limit, MAX_LIMIT))
        if not query or limit == 0:
            return {"si": [], "fa": []}

        brand_hits = []
        for index, icon in enumerate(self.brands):
            rank = _rank(query, icon.slug, icon.title)
            if rank is not None:
                brand_hits.append((rank, index, icon))

        generic_hits = []
        for index, name in enumerate(self.generics):
            rank = _rank(query, name, name.replace("-", " "))
            if rank is not None:
                generic_hits.append((rank, index, name))

        brand_hits.sort(key=lambda hit: hit[:2])
        generic_hits.sort(key=lambda hit: hit[:2])

        return {
            "si": [icon.to_dict() for _, _, icon in brand_hits[:limit]],
            "fa": [{"name": name} for _, _, name in generic_hits[:limit]],
        }
