"""Shared fixtures and fakes for the StartGrid test-suite.

The fakes stand in for the HTTP client so sessions can be driven on the
pytest-asyncio event loop without a server.
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from startgrid.engine.draggable import DraggableGridEngine
from startgrid.errors import NetworkError
from startgrid.layouts.cells import Cell, DynamicContent, Grid, LinkContent
from startgrid.layouts.serializer import load_into
from startgrid.persistence import PersistenceGateway
from startgrid.session.grid_session import GridSession


SEARCH_RESPONSE = {
    "si": [{"slug": "github", "title": "GitHub", "hex": "181717"}],
    "fa": [{"name": "house"}],
}


class FakeSearch:
    """Async stand-in for ``GridApiClient.search_icons``.

    Queries listed in ``gates`` block until their event is set.
    """

    def __init__(self, response: Optional[Dict[str, Any]] = None):
        self.response = response if response is not None else SEARCH_RESPONSE
        self.calls: List[tuple] = []
        self.gates: Dict[str, asyncio.Event] = {}
        self.responses: Dict[str, Dict[str, Any]] = {}
        self.error: Optional[NetworkError] = None

    async def __call__(self, query: str, limit: int) -> Dict[str, Any]:
        self.calls.append((query, limit))
        gate = self.gates.get(query)
        if gate is not None:
            await gate.wait()
        if self.error is not None:
            raise self.error
        return self.responses.get(query, self.response)


class FakeSend:
    """Async stand-in for ``GridApiClient.update_grid``."""

    def __init__(self):
        self.sent: List[Grid] = []
        self.error: Optional[NetworkError] = None
        self.gate: Optional[asyncio.Event] = None

    async def __call__(self, grid: Grid) -> None:
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        self.sent.append(grid)


def sample_grid() -> Grid:
    return Grid(
        col=4,
        row=3,
        cells=[
            Cell(w=1, h=1, x=0, y=0, content=LinkContent(
                iconUrl="https://cdn.example.com/github.svg",
                link="https://github.com",
                bgColor="#181717",
            )),
            Cell(w=2, h=2, x=1, y=0, content=DynamicContent(src="/dynamic/weather")),
        ],
    )


@pytest.fixture
def engine() -> DraggableGridEngine:
    engine = DraggableGridEngine(4, 3)
    load_into(engine, sample_grid())
    return engine


@pytest.fixture
def fake_search() -> FakeSearch:
    return FakeSearch()


@pytest.fixture
def fake_send() -> FakeSend:
    return FakeSend()


@pytest.fixture
def session(engine, fake_search, fake_send) -> GridSession:
    return GridSession(
        engine,
        PersistenceGateway(fake_send),
        fake_search,
        search_delay=0.01,
    )
