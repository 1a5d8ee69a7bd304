import json

from startgrid.config import BUNDLED_ICON_CATALOG
from startgrid.icons.catalog import MAX_LIMIT, BrandIcon, IconCatalog


def make_catalog():
    return IconCatalog(
        brands=[
            BrandIcon("googlemaps", "Google Maps", "4285F4"),
            BrandIcon("google", "Google", "4285F4"),
            BrandIcon("gmail", "Gmail", "EA4335"),
        ],
        generics=["magnifying-glass", "map", "map-pin"],
    )


def test_exact_match_ranks_first():
    result = make_catalog().search("google")

    assert [i["slug"] for i in result["si"]] == ["google", "googlemaps"]


def test_search_is_case_insensitive_and_matches_titles():
    result = make_catalog().search("MAPS")

    assert [i["slug"] for i in result["si"]] == ["googlemaps"]


def test_generic_names_match_with_spaces():
    result = make_catalog().search("map")

    assert [i["name"] for i in result["fa"]] == ["map", "map-pin"]
    assert make_catalog().search("map pin")["fa"] == [{"name": "map-pin"}]


def test_limit_is_capped():
    catalog = IconCatalog([], [f"icon-{i}" for i in range(80)])

    assert len(catalog.search("icon", 500)["fa"]) == MAX_LIMIT
    assert catalog.search("icon", 0) == {"si": [], "fa": []}


def test_load_bundled_catalog():
    catalog = IconCatalog.load(BUNDLED_ICON_CATALOG)

    assert catalog.brands and catalog.generics
    assert all(not b.hex.startswith("#") for b in catalog.brands)


def test_load_strips_hash(tmp_path):
    path = tmp_path / "icons.json"
    path.write_text(json.dumps({"si": [{"slug": "x", "hex": "#ABCDEF"}], "fa": ["y"]}), encoding="utf-8")

    catalog = IconCatalog.load(path)

    assert catalog.brands == [BrandIcon("x", "x", "ABCDEF")]
    assert catalog.generics == ["y"]
