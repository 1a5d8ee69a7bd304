from unittest.mock import Mock

import pytest

from startgrid.errors import ValidationError
from startgrid.icons.search import FriendlyIcon
from startgrid.layouts.cells import LinkContent
from startgrid.session.color import ColorSuggestion, PickerState
from startgrid.session.link_cell import BLANK_IMAGE, LinkCellBuilder, is_valid_url


@pytest.fixture
def picker():
    return PickerState("#3e3e3e")


@pytest.fixture
def builder(picker):
    return LinkCellBuilder(ColorSuggestion(picker, "#3e3e3e"), emit=Mock(), close=Mock())


@pytest.mark.parametrize("url", [
    "",
    "example.com",
    "www.example.com",
    "https://example.com",
    "https://example.com/path",
    "http://www.example.com/path?q=1&x=y#frag",
    "https://sub.domain.co.uk/a/b",
])
def test_valid_urls(url):
    assert is_valid_url(url)


@pytest.mark.parametrize("url", [
    "not a url",
    "not-a-url",
    "example",
    "https://",
    "ftp://example.com",
    "https://exa mple.com",
])
def test_invalid_urls(url):
    assert not is_valid_url(url)


def test_select_icon_suggests_color_and_previews(builder, picker):
    icon = FriendlyIcon(title="GitHub", url="https://cdn.example.com/github.svg", hex="#181717")

    builder.select_icon(icon)

    assert builder.preview_image == icon.url
    assert builder.preview_color == "#181717"
    assert builder.preview_light is True
    assert picker.get_hex_string() == "#181717"


def test_user_color_change_updates_preview(builder, picker):
    picker.user_changed("#ffffff")

    assert builder.preview_color == "#ffffff"
    assert builder.preview_light is False


def test_finish_emits_closes_and_resets(builder, picker):
    builder.select_icon(FriendlyIcon("GitHub", "https://cdn.example.com/github.svg", "#181717"))
    builder.set_url("https://github.com")

    cell = builder.finish()

    assert (cell.w, cell.h) == (1, 1)
    assert cell.content == LinkContent(
        iconUrl="https://cdn.example.com/github.svg",
        link="https://github.com",
        bgColor="#181717",
    )
    builder._emit.assert_called_once_with(cell)
    builder._close.assert_called_once_with()
    assert builder.url == ""
    assert builder.preview_image == BLANK_IMAGE
    assert picker.get_hex_string() == "#3e3e3e"


def test_empty_link_is_allowed(builder):
    cell = builder.finish()

    assert cell.content.link == ""
    assert cell.content.iconUrl == BLANK_IMAGE


def test_invalid_link_blocks_finish(builder):
    builder.set_url("not a url")

    with pytest.raises(ValidationError) as exc_info:
        builder.finish()

    assert exc_info.value.field == "link"
    builder._emit.assert_not_called()
    builder._close.assert_not_called()
    assert builder.url == "not a url"


def test_apply_suggestion_after_manual_change(builder, picker):
    builder.select_icon(FriendlyIcon("Reddit", "https://cdn.example.com/reddit.svg", "#ff4500"))
    picker.user_changed("#000000")

    builder.apply_suggestion()

    assert picker.get_hex_string() == "#ff4500"
    assert builder.preview_color == "#ff4500"


def test_reset_clears_icon_search(picker):
    search = Mock()
    builder = LinkCellBuilder(ColorSuggestion(picker, "#3e3e3e"), Mock(), Mock(), icon_search=search)

    builder.reset()

    search.clear.assert_called_once_with()
