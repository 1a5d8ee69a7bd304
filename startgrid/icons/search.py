"""
Debounced icon search for link cells.

Keystrokes reschedule a single pending query; only the response of the most
recently issued query is applied.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional

from startgrid.errors import NetworkError
from startgrid.timer import CancellableTimer

logger = logging.getLogger(__name__)


BRAND_ICON_URL = "https://cdn.jsdelivr.net/npm/simple-icons@v7/icons/{slug}.svg"
GENERIC_ICON_URL = "https://cdn.jsdelivr.net/gh/FortAwesome/Font-Awesome@6.1.1/svgs/solid/{name}.svg"
DEFAULT_ICON_COLOR = "#3e3e3e"
SEARCH_LIMIT = 15


@dataclass
class FriendlyIcon:
    """A search result ready to render and to drive color suggestion."""

    title: str
    url: str
    hex: str


@dataclass
class IconResults:
    query: str = ""
    brands: List[FriendlyIcon] = field(default_factory=list)
    generics: List[FriendlyIcon] = field(default_factory=list)

    def all(self) -> List[FriendlyIcon]:
        return self.brands + self.generics


def build_results(query: str, response: Dict[str, Any], default_color: str = DEFAULT_ICON_COLOR) -> IconResults:
    """
    Convert a ``/grid/search_icon`` response into renderable icons.

    Brand icons carry their own color; generic icons always use the default.
    """
    brands = []
    for icon in response.get("si") or []:
        slug = icon.get("slug")
        if not slug:
            continue
        brands.append(FriendlyIcon(
            title=icon.get("title") or slug,
            url=BRAND_ICON_URL.format(slug=slug),
            hex="#" + str(icon.get("hex") or default_color).lstrip("#"),
        ))

    generics = []
    for icon in response.get("fa") or []:
        name = icon.get("name")
        if not name:
            continue
        generics.append(FriendlyIcon(
            title=name,
            url=GENERIC_ICON_URL.format(name=name),
            hex=default_color,
        ))

    return IconResults(query=query, brands=brands, generics=generics)


class IconSearchClient:
    """
    Debounced search against the icon endpoint.

    Args:
        search: Coroutine function ``(query, limit) -> response dict``
        timer: Debounce timer
        limit: Maximum icons per request
        default_color: Color given to generic icons
        on_error: Called with the NetworkError of a failed current query
    """

    def __init__(
        self,
        search: Callable[[str, int], Awaitable[Dict[str, Any]]],
        timer: CancellableTimer,
        limit: int = SEARCH_LIMIT,
        default_color: str = DEFAULT_ICON_COLOR,
        on_error: Optional[Callable[[NetworkError], None]] = None,
    ):
        self._search = search
        self.timer = timer
        self.limit = limit
        self.default_color = default_color
        self._on_error = on_error

        self.query = ""
        self.results = IconResults()
        self.error: Optional[NetworkError] = None
        self.version = 0
        self._issued = 0

    def on_input(self, text: str) -> None:
        """Record a keystroke; the query runs once input pauses."""
        self.query = text
        self.timer.schedule(lambda: self.run_query(text))

    async def run_query(self, text: str) -> None:
        self._issued += 1
        query_id = self._issued

        try:
            response = await self._search(text, self.limit)
        except NetworkError as e:
            if query_id != self._issued:
                return
            logger.warning("Icon search for %r failed: %s", text, e)
            self.error = e
            if self._on_error is not None:
                self._on_error(e)
            return

        if query_id != self._issued:
            logger.debug("Discarding stale icon results for %r", text)
            return

        # New results replace the previous set entirely
        self.results = build_results(text, response, self.default_color)
        self.error = None
        self.version += 1

    def find(self, url: str) -> Optional[FriendlyIcon]:
        for icon in self.results.all():
            if icon.url == url:
                return icon
        return None

    def clear(self) -> None:
        self.timer.cancel()
        # Responses still in flight belong to the old query
        self._issued += 1
        self.query = ""
        self.results = IconResults()
        self.error = None
        self.version += 1
