"""
Session host for the Dash server.

Dash callbacks run on Flask worker threads. Every GridSession lives on one
private asyncio loop running in a background thread; callbacks hand work to
that loop with ``SessionHost.call`` so session state is only ever touched
from a single thread.
"""

import asyncio
import concurrent.futures
import logging
import threading
import uuid
from collections import OrderedDict
from typing import Any, Callable, Optional

from startgrid.client import GridApiClient
from startgrid.config import Config
from startgrid.db.repository import GridRepository
from startgrid.engine.draggable import DraggableGridEngine
from startgrid.layouts.serializer import load_into
from startgrid.persistence import PersistenceGateway
from startgrid.session.grid_session import GridSession

logger = logging.getLogger(__name__)


class SessionExpired(LookupError):
    """The browser tab refers to a session that is gone."""


class SessionHost:
    """Owns the event loop and the GridSession of every open browser tab."""

    def __init__(
        self,
        config: Config,
        grid_repo: GridRepository,
        client: Optional[GridApiClient] = None,
        max_sessions: int = 100,
    ):
        self.config = config
        self.grid_repo = grid_repo
        self.client = client or GridApiClient(config.api_base_url)
        self.gateway = PersistenceGateway(self.client.update_grid)
        self.max_sessions = max_sessions

        self._sessions: "OrderedDict[str, GridSession]" = OrderedDict()
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(
            target=self._run_loop, name="startgrid-sessions", daemon=True
        )

    def start(self) -> None:
        if not self._thread.is_alive():
            self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        if self._thread.is_alive():
            self._loop.call_soon_threadsafe(self._loop.stop)
            self._thread.join(timeout)
        self.client.close()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def call(self, fn: Callable[..., Any], *args: Any, timeout: float = 5.0) -> Any:
        """Run ``fn(*args)`` on the session loop and return its result or raise its error."""
        future: concurrent.futures.Future = concurrent.futures.Future()

        def runner():
            try:
                future.set_result(fn(*args))
            except Exception as e:
                future.set_exception(e)

        self._loop.call_soon_threadsafe(runner)
        return future.result(timeout)

    def open_session(self) -> str:
        """Load the account's grid into a new session and return its id."""
        return self.call(self._open_session)

    def get(self, session_id: Optional[str]) -> Optional[GridSession]:
        """Session for a tab, or None if unknown or evicted."""
        if not session_id:
            return None
        return self.call(self._get, session_id)

    def with_session(self, session_id: Optional[str], fn: Callable[..., Any], *args: Any) -> Any:
        """
        Run ``fn(session, *args)`` on the session loop.

        Raises:
            SessionExpired: If the tab has no live session
        """
        def run():
            session = self._get(session_id) if session_id else None
            if session is None:
                raise SessionExpired(f"No session {session_id!r}")
            return fn(session, *args)

        return self.call(run)

    def _open_session(self) -> str:
        grid = self.grid_repo.get(self.config.account_id)

        engine = DraggableGridEngine(grid.col, grid.row)
        load_into(engine, grid)

        session = GridSession(
            engine,
            self.gateway,
            self.client.search_icons,
            default_color=self.config.default_color,
            search_delay=self.config.search_delay,
            search_limit=self.config.search_limit,
        )

        session_id = uuid.uuid4().hex
        self._sessions[session_id] = session
        while len(self._sessions) > self.max_sessions:
            evicted, _ = self._sessions.popitem(last=False)
            logger.info("Evicted idle session %s", evicted)

        logger.debug("Opened session %s with %d cells", session_id, len(grid.cells))
        return session_id

    def _get(self, session_id: str) -> Optional[GridSession]:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session
