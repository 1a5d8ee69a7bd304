from unittest.mock import Mock

import pytest

from startgrid.session.color import ColorSuggestion, PickerState, is_dark, normalize_hex


@pytest.mark.parametrize("color, expected", [
    ("#000000", True),
    ("#ffffff", False),
    ("#3e3e3e", True),
    ("#FF0000", True),
    ("#ffff00", False),
    ("fff", False),
])
def test_is_dark(color, expected):
    assert is_dark(color) is expected


def test_is_dark_is_pure():
    assert [is_dark("#4285f4") for _ in range(3)] == [is_dark("#4285f4")] * 3


def test_normalize_hex_expands_short_form():
    assert normalize_hex("#AbC") == "#aabbcc"


@pytest.mark.parametrize("value", ["", "#12", "blue", "#gggggg", None])
def test_normalize_hex_rejects_invalid(value):
    with pytest.raises(ValueError):
        normalize_hex(value)


def test_picker_set_color_does_not_notify():
    picker = PickerState("#000000")
    handler = Mock()
    picker.on_change(handler)

    picker.set_color("#123456")
    assert picker.get_hex_string() == "#123456"
    handler.assert_not_called()

    picker.user_changed("#ABCDEF")
    handler.assert_called_once_with("#abcdef")


def test_suggestion_moves_picker_and_can_be_reapplied():
    picker = PickerState("#3e3e3e")
    colors = ColorSuggestion(picker, "#3e3e3e")

    colors.suggest("#FF0000")
    picker.user_changed("#00ff00")
    assert colors.current == "#00ff00"

    assert colors.apply_suggestion() == "#ff0000"
    assert colors.current == "#ff0000"


def test_suggestion_reset():
    picker = PickerState("#3e3e3e")
    colors = ColorSuggestion(picker, "#3e3e3e")
    colors.suggest("#ff0000")

    colors.reset()

    assert colors.suggested is None
    assert colors.swatch == "#3e3e3e"
    assert colors.current == "#3e3e3e"
    assert colors.apply_suggestion() is None
