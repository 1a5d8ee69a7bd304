"""
Dynamic cell builder.

Composes an embedded widget from a gallery entry or a custom URL.
"""

from typing import Callable

from startgrid.errors import ValidationError
from startgrid.layouts.cells import Cell, DynamicContent
from startgrid.session.state import SessionState


DYNAMIC_CELL_SIZE = 2


class DynamicCellBuilder:
    """State of the dynamic-cell tab of the add dialog."""

    def __init__(
        self,
        state: SessionState,
        emit: Callable[[Cell], None],
        close: Callable[[], None],
    ):
        self.state = state
        self._emit = emit
        self._close = close

        self.custom_src = ""
        self.preview_src = ""

    def select_gallery(self, src: str) -> None:
        """Pick a built-in widget. Clears the custom field."""
        self.custom_src = ""
        self.state.last_gallery_src = src
        self.preview_src = src

    def set_custom(self, text: str) -> None:
        self.custom_src = (text or "").strip()
        self.preview_src = self.custom_src

    @property
    def src(self) -> str:
        """Custom URL if given, otherwise the last gallery pick."""
        return self.custom_src or self.state.last_gallery_src or ""

    def build(self) -> Cell:
        """
        Raises:
            ValidationError: If neither a gallery entry nor a custom URL is set
        """
        src = self.src
        if not src:
            raise ValidationError("Choose a widget or enter a URL", field="src")

        return Cell(
            w=DYNAMIC_CELL_SIZE,
            h=DYNAMIC_CELL_SIZE,
            content=DynamicContent(src=src),
        )

    def finish(self) -> Cell:
        cell = self.build()
        self._emit(cell)
        self._close()
        self.reset()
        return cell

    def reset(self) -> None:
        self.custom_src = ""
        self.preview_src = ""
        self.state.last_gallery_src = None
