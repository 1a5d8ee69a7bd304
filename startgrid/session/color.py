"""
Color helpers for link cells.

- is_dark: contrast test for icon artwork
- PickerState: mirror of the browser color picker
- ColorSuggestion: tracks the picked color and the color suggested by an icon
"""

import re
from abc import ABC, abstractmethod
from typing import Callable, List, Optional


HEX_PATTERN = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def normalize_hex(value: str) -> str:
    """
    Normalize a hex color to lowercase ``#rrggbb``.

    Raises:
        ValueError: If value is not a 3 or 6 digit hex color
    """
    match = HEX_PATTERN.match((value or "").strip())
    if not match:
        raise ValueError(f"Invalid hex color: {value!r}")

    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return "#" + digits.lower()


def is_dark(hex_color: str) -> bool:
    """Whether artwork drawn over this color should switch to a light rendering."""
    digits = normalize_hex(hex_color)[1:]
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    # YIQ brightness
    return (r * 299 + g * 587 + b * 114) / 1000 < 128


class ColorPicker(ABC):
    """The external color-picker capability."""

    @abstractmethod
    def set_color(self, hex_color: str) -> None:
        ...

    @abstractmethod
    def get_hex_string(self) -> str:
        ...

    @abstractmethod
    def on_change(self, handler: Callable[[str], None]) -> None:
        ...


class PickerState(ColorPicker):
    """
    Server-side mirror of a ``dmc.ColorPicker``.

    ``set_color`` is a programmatic change and, like the browser widget, does
    not notify subscribers. ``user_changed`` reports a change made in the UI.
    """

    def __init__(self, color: str):
        self._color = normalize_hex(color)
        self._handlers: List[Callable[[str], None]] = []

    def set_color(self, hex_color: str) -> None:
        self._color = normalize_hex(hex_color)

    def get_hex_string(self) -> str:
        return self._color

    def on_change(self, handler: Callable[[str], None]) -> None:
        self._handlers.append(handler)

    def user_changed(self, hex_color: str) -> None:
        self._color = normalize_hex(hex_color)
        for handler in list(self._handlers):
            handler(self._color)


class ColorSuggestion:
    """Current picker color plus the swatch suggested by the last chosen icon."""

    def __init__(self, picker: ColorPicker, default_color: str):
        self.picker = picker
        self.default_color = normalize_hex(default_color)
        self.suggested: Optional[str] = None

    @property
    def current(self) -> str:
        return self.picker.get_hex_string()

    @property
    def swatch(self) -> str:
        """Color shown on the suggestion swatch."""
        return self.suggested or self.default_color

    def suggest(self, hex_color: str) -> str:
        """Record an icon's color as the suggestion and move the picker to it."""
        self.suggested = normalize_hex(hex_color)
        self.picker.set_color(self.suggested)
        return self.suggested

    def apply_suggestion(self) -> Optional[str]:
        """Move the picker back to the suggested color, if any."""
        if self.suggested is None:
            return None
        self.picker.set_color(self.suggested)
        return self.suggested

    def reset(self) -> None:
        self.suggested = None
        self.picker.set_color(self.default_color)
