"""
Persistence gateway: pushes full grid snapshots to the backend.
"""

import asyncio
import logging
from typing import Awaitable, Callable

from startgrid.layouts.cells import Grid

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """
    Sends grid snapshots one at a time, newest wins.

    Saves are serialized behind a lock. A snapshot that has been superseded by
    a newer one while waiting for the lock is dropped instead of sent, so an
    older snapshot can never overwrite a newer one.
    """

    def __init__(self, send: Callable[[Grid], Awaitable[None]]):
        self._send = send
        self._lock = asyncio.Lock()
        self._issued = 0
        self.last_saved = 0

    async def save(self, grid: Grid) -> bool:
        """
        Persist a snapshot.

        Returns:
            True if the snapshot was sent, False if a newer one replaced it

        Raises:
            NetworkError: If the request fails
        """
        self._issued += 1
        sequence = self._issued

        async with self._lock:
            if sequence < self._issued:
                logger.debug("Dropping grid snapshot %d, superseded by %d", sequence, self._issued)
                return False

            await self._send(grid)
            self.last_saved = sequence

        logger.info("Grid snapshot %d saved (%d cells)", sequence, len(grid.cells))
        return True
