import asyncio

import pytest

from startgrid.errors import NetworkError
from startgrid.layouts.cells import Grid
from startgrid.persistence import PersistenceGateway

from conftest import FakeSend


@pytest.mark.asyncio
async def test_save_sends_snapshot():
    send = FakeSend()
    gateway = PersistenceGateway(send)

    assert await gateway.save(Grid(col=2, row=2)) is True
    assert send.sent == [Grid(col=2, row=2)]
    assert gateway.last_saved == 1


@pytest.mark.asyncio
async def test_superseded_snapshot_is_dropped():
    send = FakeSend()
    send.gate = asyncio.Event()
    gateway = PersistenceGateway(send)
    loop = asyncio.get_running_loop()

    first = loop.create_task(gateway.save(Grid(col=1, row=1)))
    await asyncio.sleep(0)
    second = loop.create_task(gateway.save(Grid(col=2, row=2)))
    third = loop.create_task(gateway.save(Grid(col=3, row=3)))
    await asyncio.sleep(0)

    send.gate.set()
    results = await asyncio.gather(first, second, third)

    assert results == [True, False, True]
    assert [g.col for g in send.sent] == [1, 3]
    assert gateway.last_saved == 3


@pytest.mark.asyncio
async def test_failure_propagates_and_releases_lock():
    send = FakeSend()
    send.error = NetworkError("down", "/grid/update")
    gateway = PersistenceGateway(send)

    with pytest.raises(NetworkError):
        await gateway.save(Grid(col=1, row=1))

    send.error = None
    assert await gateway.save(Grid(col=1, row=1)) is True
