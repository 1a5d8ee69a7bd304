import pytest
from flask import Flask

from startgrid.api.routes import create_grid_blueprint
from startgrid.config import BUNDLED_ICON_CATALOG
from startgrid.db.repository import GridRepository
from startgrid.db.schema import init_database
from startgrid.icons.catalog import IconCatalog

from conftest import sample_grid


@pytest.fixture
def repo(tmp_path):
    path = tmp_path / "startgrid.db"
    init_database(path, "default").close()
    return GridRepository(path)


@pytest.fixture
def client(repo):
    server = Flask(__name__)
    server.register_blueprint(
        create_grid_blueprint(repo, IconCatalog.load(BUNDLED_ICON_CATALOG), lambda: "default")
    )
    return server.test_client()


def test_update_replaces_grid(client, repo):
    response = client.put("/grid/update", json=sample_grid().to_dict())

    assert response.status_code == 200
    assert response.get_json() == {"ok": True}
    assert repo.get("default") == sample_grid()


def test_update_rejects_non_object(client):
    response = client.put("/grid/update", json=[1, 2, 3])

    assert response.status_code == 400
    assert response.get_json()["ok"] is False


def test_update_rejects_missing_body(client):
    response = client.put("/grid/update", data="nope", content_type="text/plain")

    assert response.status_code == 400


def test_search_icon(client):
    response = client.get("/grid/search_icon", query_string={"q": "git", "l": 2})
    data = response.get_json()

    assert response.status_code == 200
    assert [i["slug"] for i in data["si"]] == ["github", "gitlab"]
    assert all(set(i) == {"slug", "title", "hex"} for i in data["si"])


def test_search_icon_defaults_limit(client):
    data = client.get("/grid/search_icon", query_string={"q": "o"}).get_json()

    assert len(data["si"]) <= 15
    assert len(data["fa"]) <= 15


def test_search_icon_empty_query(client):
    assert client.get("/grid/search_icon").get_json() == {"si": [], "fa": []}
