import asyncio
from unittest.mock import Mock

import pytest

from startgrid.errors import NetworkError
from startgrid.icons.search import (
    BRAND_ICON_URL,
    GENERIC_ICON_URL,
    IconSearchClient,
    build_results,
)
from startgrid.timer import CancellableTimer

from conftest import FakeSearch


def test_build_results_url_templates():
    results = build_results("git", {
        "si": [{"slug": "github", "title": "GitHub", "hex": "181717"}, {"title": "no slug"}],
        "fa": [{"name": "code-branch"}],
    })

    assert [i.url for i in results.brands] == [BRAND_ICON_URL.format(slug="github")]
    assert results.brands[0].hex == "#181717"
    assert results.generics[0].url == GENERIC_ICON_URL.format(name="code-branch")
    assert results.generics[0].hex == "#3e3e3e"
    assert results.generics[0].url.endswith("/svgs/solid/code-branch.svg")


def test_build_results_handles_missing_sections():
    results = build_results("x", {})

    assert results.all() == []


@pytest.mark.asyncio
async def test_keystroke_burst_issues_one_request():
    search = FakeSearch()
    client = IconSearchClient(search, CancellableTimer(0.01), limit=7)

    for text in ["g", "gi", "git", "gith", "github"]:
        client.on_input(text)

    await asyncio.sleep(0.05)
    await client.timer.last_task

    assert search.calls == [("github", 7)]
    assert client.results.query == "github"
    assert client.version == 1


@pytest.mark.asyncio
async def test_stale_response_is_discarded():
    search = FakeSearch()
    search.gates["slow"] = asyncio.Event()
    search.responses["fast"] = {"si": [], "fa": [{"name": "bolt"}]}
    client = IconSearchClient(search, CancellableTimer(0.01))

    slow = asyncio.get_running_loop().create_task(client.run_query("slow"))
    await asyncio.sleep(0)
    await client.run_query("fast")

    search.gates["slow"].set()
    await slow

    assert client.results.query == "fast"
    assert [i.title for i in client.results.all()] == ["bolt"]


@pytest.mark.asyncio
async def test_failure_reports_error():
    search = FakeSearch()
    search.error = NetworkError("boom", "/grid/search_icon", 500)
    on_error = Mock()
    client = IconSearchClient(search, CancellableTimer(0.01), on_error=on_error)

    await client.run_query("git")

    assert client.error is search.error
    on_error.assert_called_once_with(search.error)
    assert client.results.all() == []


@pytest.mark.asyncio
async def test_clear_cancels_pending_and_drops_in_flight():
    search = FakeSearch()
    search.gates["git"] = asyncio.Event()
    client = IconSearchClient(search, CancellableTimer(0.01))

    in_flight = asyncio.get_running_loop().create_task(client.run_query("git"))
    await asyncio.sleep(0)
    client.on_input("gith")
    client.clear()

    search.gates["git"].set()
    await in_flight
    await asyncio.sleep(0.03)

    assert not client.timer.pending
    assert search.calls == [("git", 15)]
    assert client.results.all() == []
    assert client.query == ""


@pytest.mark.asyncio
async def test_find_by_url():
    client = IconSearchClient(FakeSearch(), CancellableTimer(0.01))
    await client.run_query("github")

    icon = client.find(BRAND_ICON_URL.format(slug="github"))

    assert icon is not None and icon.title == "GitHub"
    assert client.find("https://nowhere.example.com/x.svg") is None
