"""
Icon search for link cells.

- catalog: server-side icon index behind /grid/search_icon
- search: debounced client that turns responses into renderable icons
"""

from startgrid.icons.catalog import BrandIcon, IconCatalog
from startgrid.icons.search import (
    BRAND_ICON_URL,
    GENERIC_ICON_URL,
    FriendlyIcon,
    IconResults,
    IconSearchClient,
    build_results,
)

__all__ = [
    "BrandIcon",
    "IconCatalog",
    "BRAND_ICON_URL",
    "GENERIC_ICON_URL",
    "FriendlyIcon",
    "IconResults",
    "IconSearchClient",
    "build_results",
]
