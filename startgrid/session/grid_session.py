"""
Edit-mode state machine for one start-page grid.

Viewing -> Editing: enable the engine and strip placeholders.
Editing -> Viewing: disable the engine, snapshot and save (not awaited),
pad with placeholders again.
"""

import asyncio
import logging
import uuid
from typing import Any, Awaitable, Callable, Dict, Optional

from startgrid.engine.base import EngineItem, GridEngine
from startgrid.errors import NetworkError, ValidationError
from startgrid.icons.search import IconSearchClient
from startgrid.layouts.cells import Cell, Grid
from startgrid.layouts.serializer import (
    fill_placeholders,
    item_from_cell,
    remove_placeholders,
    serialize,
)
from startgrid.persistence import PersistenceGateway
from startgrid.session.color import ColorPicker, ColorSuggestion, PickerState
from startgrid.session.dynamic_cell import DynamicCellBuilder
from startgrid.session.link_cell import LinkCellBuilder
from startgrid.session.state import (
    DYNAMIC_TAB,
    LINK_TAB,
    Mode,
    SaveStatus,
    SessionState,
)
from startgrid.timer import CancellableTimer

logger = logging.getLogger(__name__)


class GridSession:
    """
    One user's editing session over a grid engine.

    Args:
        engine: Grid-layout engine holding the live items
        gateway: Persistence gateway used when editing ends
        search: Coroutine function backing the icon search
        picker: Color picker capability (a PickerState by default)
        default_color: Initial link cell color
        search_delay: Icon search debounce in seconds
        search_limit: Icons requested per search
    """

    def __init__(
        self,
        engine: GridEngine,
        gateway: PersistenceGateway,
        search: Callable[[str, int], Awaitable[Dict[str, Any]]],
        picker: Optional[ColorPicker] = None,
        default_color: str = "#3e3e3e",
        search_delay: float = 0.5,
        search_limit: int = 15,
    ):
        self.engine = engine
        self.gateway = gateway
        self.state = SessionState(search_timer=CancellableTimer(search_delay))
        self._save_seq = 0

        self.icon_search = IconSearchClient(
            search,
            self.state.search_timer,
            limit=search_limit,
            default_color=default_color,
            on_error=self._on_search_error,
        )
        self.picker = picker or PickerState(default_color)
        self.colors = ColorSuggestion(self.picker, default_color)
        self.link_builder = LinkCellBuilder(
            self.colors,
            emit=self.add_cell,
            close=self.close_add_dialog,
            icon_search=self.icon_search,
        )
        self.dynamic_builder = DynamicCellBuilder(
            self.state,
            emit=self.add_cell,
            close=self.close_add_dialog,
        )

        engine.disable()
        fill_placeholders(engine)

    # -------------------------------------------------------------------------
    # Edit mode
    # -------------------------------------------------------------------------

    @property
    def editing(self) -> bool:
        return self.state.editing

    @property
    def affordance(self) -> str:
        """What the toggle control does next: ``save`` while editing, else ``edit``."""
        return "save" if self.editing else "edit"

    @property
    def toggle_title(self) -> str:
        return "Save Cells" if self.editing else "Edit Cells"

    @property
    def border_visible(self) -> bool:
        return self.editing

    def toggle(self) -> Optional[asyncio.Task]:
        """Flip between viewing and editing. Returns the save task when leaving edit mode."""
        if self.editing:
            return self.stop_editing()
        self.start_editing()
        return None

    def start_editing(self) -> None:
        if self.editing:
            return

        self.state.mode = Mode.EDITING
        self.engine.enable()
        removed = remove_placeholders(self.engine)
        logger.debug("Editing started, %d placeholders removed", removed)

    def stop_editing(self) -> Optional[asyncio.Task]:
        """
        Leave edit mode and save.

        The save runs as a task; placeholders and the toggle control are
        restored without waiting for it. Does nothing while not editing.
        """
        if not self.editing:
            return None

        self.engine.disable()
        task = self._schedule_save()
        fill_placeholders(self.engine)
        self.state.mode = Mode.VIEWING
        return task

    # -------------------------------------------------------------------------
    # Saving
    # -------------------------------------------------------------------------

    @property
    def save_status(self) -> SaveStatus:
        return self.state.save_status

    def snapshot(self) -> Grid:
        return serialize(self.engine)

    def retry_save(self) -> asyncio.Task:
        """Save the current layout again, e.g. after a failure notice."""
        return self._schedule_save()

    async def wait_for_save(self) -> Optional[bool]:
        """Wait for the most recent save. Returns its outcome, or None if none ran."""
        task = self.state.save_task
        if task is None:
            return None
        return await task

    def _schedule_save(self) -> asyncio.Task:
        grid = serialize(self.engine)
        self._save_seq += 1
        self.state.save_status = SaveStatus.SAVING
        task = asyncio.get_running_loop().create_task(self._save(grid, self._save_seq))
        self.state.save_task = task
        return task

    async def _save(self, grid: Grid, seq: int) -> bool:
        try:
            sent = await self.gateway.save(grid)
        except NetworkError as e:
            logger.error("Saving grid failed: %s", e)
            self.state.push_notice(
                "Grid not saved",
                f"{e}. Your changes are still here; save again to retry.",
                level="error",
            )
            if seq == self._save_seq:
                self.state.save_status = SaveStatus.FAILED
            return False

        if not sent:
            logger.info("Grid snapshot from this session was superseded before sending")
        if seq == self._save_seq:
            self.state.save_status = SaveStatus.SAVED if sent else SaveStatus.SUPERSEDED
        return sent

    # -------------------------------------------------------------------------
    # Cells
    # -------------------------------------------------------------------------

    def add_cell(self, cell: Cell) -> EngineItem:
        """
        Place a new cell at the first free slot.

        Enters edit mode once a slot is found, so the cell is saved when
        editing ends. A cell that does not fit leaves the mode unchanged.

        Raises:
            ValidationError: If the grid has no room for the cell
        """
        # Placeholders count as free, so the slot holds in either mode
        slot = self.engine.find_free_slot(cell.w, cell.h)
        if slot is None:
            raise ValidationError(f"No room for a {cell.w}x{cell.h} cell", field="size")

        self.start_editing()
        cell.x, cell.y = slot
        item = item_from_cell(cell, f"cell-{uuid.uuid4().hex[:8]}")
        return self.engine.add_widget(item)

    def remove_cell(self, item_id: str) -> bool:
        """Delete a cell while editing. Returns False if nothing was removed."""
        if not self.editing:
            return False

        item = self.engine.get_item(item_id)
        if item is None or item.is_placeholder:
            return False

        self.engine.remove_widget(item)
        return True

    # -------------------------------------------------------------------------
    # Add dialog
    # -------------------------------------------------------------------------

    def open_add_dialog(self, tab: Optional[str] = None) -> None:
        if tab is not None:
            self.select_tab(tab)
        self.state.dialog_open = True

    def close_add_dialog(self) -> None:
        self.state.dialog_open = False

    def select_tab(self, tab: str) -> None:
        if tab not in (LINK_TAB, DYNAMIC_TAB):
            raise ValueError(f"Unknown add-dialog tab: {tab}")
        self.state.active_tab = tab

    # -------------------------------------------------------------------------
    # Search events
    # -------------------------------------------------------------------------

    def _on_search_error(self, error: NetworkError) -> None:
        self.state.push_notice("Icon search failed", str(error), level="error")
