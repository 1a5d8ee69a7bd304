"""
Configuration management for StartGrid.

This module defines the Config dataclass that holds all application settings.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


BUNDLED_ICON_CATALOG = Path(__file__).parent / "icons" / "data" / "icons.json"


@dataclass
class GalleryEntry:
    """A built-in dynamic widget offered in the add-cell gallery."""

    name: str
    src: str
    icon: str = "tabler:app-window"


def default_gallery() -> List[GalleryEntry]:
    return [
        GalleryEntry("Mini Note", "/dynamic/mininote", "tabler:notes"),
        GalleryEntry("Weather", "/dynamic/weather", "tabler:cloud"),
    ]


@dataclass
class Config:
    """
    Application configuration.

    Attributes:
        db_path: Path to SQLite database holding account grids
        host: Host address to bind the server
        port: Port number for the server
        debug: Enable debug mode with hot reloading
        account_id: Account whose grid is served (stands in for the session user)
        default_col: Column count of a freshly created grid
        default_row: Row count of a freshly created grid
        search_delay: Icon search debounce delay in seconds
        search_limit: Maximum icons requested per search
        default_color: Background color of new link cells
        gallery: Built-in dynamic widgets
        icon_catalog_path: JSON catalog served by the icon search endpoint
    """

    db_path: Path = field(default_factory=lambda: Path.cwd() / "startgrid.db")
    host: str = "127.0.0.1"
    port: int = 8050
    debug: bool = False
    account_id: str = "default"

    # Grid defaults
    default_col: int = 10
    default_row: int = 5

    # Add-cell dialog
    search_delay: float = 0.5
    search_limit: int = 15
    default_color: str = "#3e3e3e"
    gallery: List[GalleryEntry] = field(default_factory=default_gallery)
    icon_catalog_path: Optional[Path] = None

    def __post_init__(self):
        """Validate and normalize paths."""
        self.db_path = Path(self.db_path).resolve()

        if self.icon_catalog_path is None:
            self.icon_catalog_path = BUNDLED_ICON_CATALOG
        self.icon_catalog_path = Path(self.icon_catalog_path).resolve()

        if self.default_col <= 0 or self.default_row <= 0:
            raise ValueError(
                f"Grid size must be positive: {self.default_col}x{self.default_row}"
            )

        if self.search_delay < 0:
            raise ValueError(f"Search delay must not be negative: {self.search_delay}")

        if not self.account_id:
            raise ValueError("Account id must not be empty")

    @property
    def api_base_url(self) -> str:
        """Base URL the session client uses to reach the grid API."""
        host = "127.0.0.1" if self.host == "0.0.0.0" else self.host
        return f"http://{host}:{self.port}"

    def to_dict(self) -> dict:
        """Convert config to dictionary for serialization."""
        return {
            "db_path": str(self.db_path),
            "host": self.host,
            "port": self.port,
            "debug": self.debug,
            "account_id": self.account_id,
            "default_col": self.default_col,
            "default_row": self.default_row,
            "search_delay": self.search_delay,
            "search_limit": self.search_limit,
            "default_color": self.default_color,
            "gallery": [
                {"name": g.name, "src": g.src, "icon": g.icon} for g in self.gallery
            ],
            "icon_catalog_path": str(self.icon_catalog_path),
        }
