"""
Session-scoped state owned by a GridSession.
"""

import asyncio
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from startgrid.timer import CancellableTimer


LINK_TAB = "link-cell"
DYNAMIC_TAB = "dynamic-cell"


class Mode(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


class SaveStatus(str, Enum):
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    FAILED = "failed"
    # A newer snapshot, e.g. from another tab, replaced this one before it was sent
    SUPERSEDED = "superseded"


@dataclass
class Notice:
    """A non-blocking message for the user."""

    title: str
    message: str
    level: str = "info"
    id: str = field(default_factory=lambda: f"notice-{uuid.uuid4().hex[:8]}")


@dataclass
class SessionState:
    """Everything one editing session tracks between events."""

    search_timer: CancellableTimer
    mode: Mode = Mode.VIEWING
    save_status: SaveStatus = SaveStatus.IDLE
    save_task: Optional[asyncio.Task] = None
    last_gallery_src: Optional[str] = None
    dialog_open: bool = False
    active_tab: str = LINK_TAB
    notices: List[Notice] = field(default_factory=list)

    @property
    def editing(self) -> bool:
        return self.mode is Mode.EDITING

    def push_notice(self, title: str, message: str, level: str = "info") -> Notice:
        notice = Notice(title=title, message=message, level=level)
        self.notices.append(notice)
        return notice

    def drain_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices
