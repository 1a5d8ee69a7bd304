"""
Cancellable one-shot timer on the running asyncio loop.
"""

import asyncio
from typing import Awaitable, Callable, Optional


class CancellableTimer:
    """
    Runs a coroutine function once, ``delay`` seconds after the last schedule.

    Scheduling again before the timer fires replaces the pending call.
    Must be used from the thread running the event loop.
    """

    def __init__(self, delay: float):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self.last_task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], Awaitable[None]]) -> None:
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> bool:
        """Cancel the pending call. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self, callback: Callable[[], Awaitable[None]]) -> None:
        self._handle = None
        self.last_task = asyncio.get_running_loop().create_task(callback())
