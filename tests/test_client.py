from unittest.mock import Mock

import pytest
import requests

from startgrid.client import SEARCH_PATH, UPDATE_PATH, GridApiClient
from startgrid.errors import NetworkError
from startgrid.layouts.cells import Grid


def make_response(status=200, payload=None):
    response = Mock(spec=requests.Response)
    response.status_code = status
    response.json.return_value = payload
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            f"{status} Error", response=response
        )
    return response


@pytest.fixture
def http():
    return Mock(spec=requests.Session)


@pytest.fixture
def client(http):
    return GridApiClient("http://127.0.0.1:8050/", session=http, timeout=3)


def test_search_sends_query_and_limit(client, http):
    http.get.return_value = make_response(payload={"si": [], "fa": []})

    assert client.search_icons_sync("git", 15) == {"si": [], "fa": []}
    http.get.assert_called_once_with(
        "http://127.0.0.1:8050" + SEARCH_PATH, params={"q": "git", "l": 15}, timeout=3
    )


def test_search_http_error_carries_status(client, http):
    http.get.return_value = make_response(status=502)

    with pytest.raises(NetworkError) as exc_info:
        client.search_icons_sync("git", 15)

    assert exc_info.value.status_code == 502
    assert exc_info.value.endpoint == SEARCH_PATH


def test_search_connection_error(client, http):
    http.get.side_effect = requests.exceptions.ConnectionError("refused")

    with pytest.raises(NetworkError) as exc_info:
        client.search_icons_sync("git", 15)

    assert exc_info.value.status_code is None


def test_search_invalid_json(client, http):
    response = make_response()
    response.json.side_effect = ValueError("Expecting value")
    http.get.return_value = response

    with pytest.raises(NetworkError):
        client.search_icons_sync("git", 15)


def test_search_unexpected_payload(client, http):
    http.get.return_value = make_response(payload=["not", "a", "dict"])

    with pytest.raises(NetworkError):
        client.search_icons_sync("git", 15)


def test_update_puts_full_grid(client, http):
    http.put.return_value = make_response()
    grid = Grid(col=2, row=1)

    client.update_grid_sync(grid)

    http.put.assert_called_once_with(
        "http://127.0.0.1:8050" + UPDATE_PATH, json=grid.to_dict(), timeout=3
    )


def test_update_timeout(client, http):
    http.put.side_effect = requests.exceptions.Timeout("slow")

    with pytest.raises(NetworkError) as exc_info:
        client.update_grid_sync(Grid(col=1, row=1))

    assert exc_info.value.endpoint == UPDATE_PATH


@pytest.mark.asyncio
async def test_async_wrappers_run_in_executor(client, http):
    http.get.return_value = make_response(payload={"si": [], "fa": [{"name": "house"}]})
    http.put.return_value = make_response()

    assert await client.search_icons("house", 5) == {"si": [], "fa": [{"name": "house"}]}
    await client.update_grid(Grid(col=1, row=1))

    assert http.put.call_count == 1


def test_close_closes_session(client, http):
    client.close()
    http.close.assert_called_once_with()
