"""
HTTP client for the grid API.

Requests are made with ``requests`` on the event loop's default executor so
the session stays responsive while a search or save is pending.
"""

import asyncio
import functools
import logging
from typing import Any, Dict, Optional

import requests

from startgrid.errors import NetworkError
from startgrid.layouts.cells import Grid

logger = logging.getLogger(__name__)

UPDATE_PATH = "/grid/update"
SEARCH_PATH = "/grid/search_icon"


class GridApiClient:
    """Talks to ``/grid/update`` and ``/grid/search_icon``."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()

    def search_icons_sync(self, query: str, limit: int) -> Dict[str, Any]:
        """GET the icon candidates for ``query``."""
        url = self.base_url + SEARCH_PATH
        try:
            response = self._session.get(
                url, params={"q": query, "l": limit}, timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            raise NetworkError(f"Icon search failed: {e}", SEARCH_PATH, getattr(e.response, "status_code", None)) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Icon search failed: {e}", SEARCH_PATH) from e
        except ValueError as e:
            raise NetworkError(f"Icon search returned invalid JSON: {e}", SEARCH_PATH) from e

        if not isinstance(data, dict):
            raise NetworkError("Icon search returned an unexpected payload", SEARCH_PATH)
        return data

    def update_grid_sync(self, grid: Grid) -> None:
        """PUT the full grid snapshot. The response body is not used."""
        url = self.base_url + UPDATE_PATH
        try:
            response = self._session.put(url, json=grid.to_dict(), timeout=self.timeout)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise NetworkError(f"Saving grid failed: {e}", UPDATE_PATH, getattr(e.response, "status_code", None)) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Saving grid failed: {e}", UPDATE_PATH) from e

        logger.debug("Saved grid with %d cells", len(grid.cells))

    async def search_icons(self, query: str, limit: int) -> Dict[str, Any]:
        return await self._run(self.search_icons_sync, query, limit)

    async def update_grid(self, grid: Grid) -> None:
        await self._run(self.update_grid_sync, grid)

    async def _run(self, fn, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(fn, *args))

    def close(self) -> None:
        self._session.close()
