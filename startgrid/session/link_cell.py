"""
Link cell builder.

Composes a link tile from a searched icon, a picked or suggested background
color and a target URL.
"""

import re
from typing import Callable, Optional

from startgrid.errors import ValidationError
from startgrid.icons.search import FriendlyIcon, IconSearchClient
from startgrid.layouts.cells import Cell, LinkContent
from startgrid.session.color import ColorSuggestion, is_dark, normalize_hex


# Transparent 1x1 GIF shown until an icon is chosen
BLANK_IMAGE = "data:image/gif;base64,R0lGODlhAQABAAD/ACwAAAAAAQABAAACADs="

URL_PATTERN = re.compile(
    r"(https?://)?(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
    r"([-a-zA-Z0-9()@:%_+.~#?&/=]*)"
)


def is_valid_url(value: str) -> bool:
    """Empty, or a URL with optional scheme and ``www.``, a domain and an optional path."""
    return value == "" or URL_PATTERN.fullmatch(value) is not None


class LinkCellBuilder:
    """State of the link-cell tab of the add dialog."""

    def __init__(
        self,
        colors: ColorSuggestion,
        emit: Callable[[Cell], None],
        close: Callable[[], None],
        icon_search: Optional[IconSearchClient] = None,
    ):
        self.colors = colors
        self.icon_search = icon_search
        self._emit = emit
        self._close = close

        self.url = ""
        self.url_valid = True
        self.preview_image = BLANK_IMAGE
        self.preview_color = colors.default_color
        self.preview_light = is_dark(colors.default_color)

        colors.picker.on_change(self.change_preview_color)

    def set_url(self, text: str) -> bool:
        """Update the link field and its validation flag."""
        self.url = text or ""
        self.url_valid = is_valid_url(self.url)
        return self.url_valid

    def select_icon(self, icon: FriendlyIcon) -> None:
        """Use a search result: suggest its color and preview its image."""
        color = self.colors.suggest(icon.hex)
        self.preview_image = icon.url
        self.change_preview_color(color)

    def apply_suggestion(self) -> None:
        color = self.colors.apply_suggestion()
        if color:
            self.change_preview_color(color)

    def change_preview_color(self, hex_color: str) -> None:
        self.preview_color = normalize_hex(hex_color)
        self.preview_light = is_dark(self.preview_color)

    def build(self) -> Cell:
        """
        Build the link cell from the current fields.

        Raises:
            ValidationError: If the link is not empty and not a valid URL
        """
        if not self.set_url(self.url):
            raise ValidationError(f"Not a valid link: {self.url}", field="link")

        return Cell(
            w=1,
            h=1,
            content=LinkContent(
                iconUrl=self.preview_image,
                link=self.url,
                bgColor=self.colors.current,
            ),
        )

    def finish(self) -> Cell:
        """Emit the cell, close the dialog and reset the tab."""
        cell = self.build()
        self._emit(cell)
        self._close()
        self.reset()
        return cell

    def reset(self) -> None:
        self.url = ""
        self.url_valid = True
        self.colors.reset()
        self.preview_image = BLANK_IMAGE
        self.change_preview_color(self.colors.default_color)

        if self.icon_search is not None:
            self.icon_search.clear()
