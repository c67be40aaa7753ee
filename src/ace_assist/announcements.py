"""Announcement records and the deduplicating FIFO that buffers them."""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

log = logging.getLogger(__name__)


class Category(Enum):
    DIALOGUE = auto()
    MENU = auto()
    MENU_CHOICE = auto()
    INVESTIGATION = auto()
    SYSTEM_MESSAGE = auto()


# Free-text categories share one dedup slot; the rest keep their own.
_GLOBAL_SCOPE = "global"

_DEDUP_SCOPE: dict[Category, object] = {
    Category.DIALOGUE: Category.DIALOGUE,
    Category.MENU: Category.MENU,
    Category.MENU_CHOICE: Category.MENU_CHOICE,
    Category.INVESTIGATION: _GLOBAL_SCOPE,
    Category.SYSTEM_MESSAGE: _GLOBAL_SCOPE,
}


@dataclass(frozen=True)
class Announcement:
    text: str
    category: Category


class AnnouncementQueue:
    """Ordered single-consumer queue with dedup against the last enqueued text.

    Producers call :meth:`enqueue` from the poll side and the drain loop calls
    :meth:`dequeue`.  A lock guards the deque and the dedup slots because the
    poller and the drain loop run on separate threads.
    """

    def __init__(self, max_backlog: Optional[int] = None):
        if max_backlog is not None and max_backlog < 1:
            raise ValueError("max_backlog must be positive")
        self.max_backlog = max_backlog
        self._items: deque[Announcement] = deque()
        self._last_text: dict[object, str] = {}
        self._lock = threading.Lock()
        self.dropped = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def enqueue(self, text: str, category: Category) -> bool:
        """Append ``text`` unless it is blank or repeats the scope's last text."""
        if not text or not text.strip():
            return False
        scope = _DEDUP_SCOPE[category]
        with self._lock:
            if self._last_text.get(scope) == text:
                return False
            self._last_text[scope] = text
            if self.max_backlog is not None and len(self._items) >= self.max_backlog:
                stale = self._items.popleft()
                self.dropped += 1
                log.warning("Announcement backlog full (%d); dropped %r",
                            self.max_backlog, stale.text)
            self._items.append(Announcement(text, category))
        return True

    def dequeue(self) -> Optional[Announcement]:
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def reset(self, category: Category) -> None:
        """Forget the last text for ``category`` so it may be announced again."""
        with self._lock:
            self._last_text.pop(_DEDUP_SCOPE[category], None)

    def reset_all(self) -> None:
        with self._lock:
            self._last_text.clear()

    def last_text(self, category: Category) -> str:
        with self._lock:
            return self._last_text.get(_DEDUP_SCOPE[category], "")

    def pending(self) -> list[Announcement]:
        with self._lock:
            return list(self._items)
