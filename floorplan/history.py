"""Bounded linear undo/redo history of plan snapshots.

Snapshots hold tuples of immutable entities, so storing one is already an
independent copy of the plan. Recording is debounced: `touch` keeps only the
latest pending snapshot and `poll` commits it once the plan has been quiet
for the debounce interval.
"""
import logging
from contextlib import contextmanager
from typing import NamedTuple

from shared.types import Point, Room, Door, Window, Furniture
from floorplan.constants import MAX_HISTORY, HISTORY_DEBOUNCE

logger = logging.getLogger(__name__)


class Snapshot(NamedTuple):
    rooms: tuple[Room, ...] = ()
    doors: tuple[Door, ...] = ()
    windows: tuple[Window, ...] = ()
    furniture: tuple[Furniture, ...] = ()
    boundary: tuple[Point, ...] = ()


class History:
    def __init__(self, initial: Snapshot, max_size: int = MAX_HISTORY,
                 debounce: float = HISTORY_DEBOUNCE):
        self.max_size = max_size
        self.debounce = debounce
        self._entries = [initial]
        self._index = 0
        self._pending: Snapshot | None = None
        self._deadline = 0.0
        self.replaying = False

    def __len__(self):
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> Snapshot:
        return self._entries[self._index]

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def can_undo(self) -> bool:
        return self._index > 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries)-1

    @contextmanager
    def replay(self):
        """Suppress recording while a restored snapshot is applied."""
        self.replaying = True
        try:
            yield
        finally:
            self.replaying = False

    def record(self, snap: Snapshot) -> bool:
        """Commit *snap* now. Returns False if suppressed or unchanged."""
        if self.replaying or snap == self.current:
            return False
        del self._entries[self._index+1:]
        self._entries.append(snap)
        if len(self._entries) > self.max_size:
            self._entries.pop(0)
        self._index = len(self._entries)-1
        logger.debug("History commit %d/%d", self._index+1, len(self._entries))
        return True

    def touch(self, snap: Snapshot, now: float) -> None:
        """Replace the pending snapshot and restart the quiet period."""
        if self.replaying:
            return
        self._pending = snap
        self._deadline = now+self.debounce

    def poll(self, now: float) -> bool:
        if self._pending is None or now < self._deadline:
            return False
        return self.flush()

    def flush(self) -> bool:
        snap, self._pending = self._pending, None
        return snap is not None and self.record(snap)

    def undo(self) -> Snapshot | None:
        self.flush()
        if not self.can_undo():
            return None
        self._index -= 1
        logger.debug("Undo to %d/%d", self._index+1, len(self._entries))
        return self.current

    def redo(self) -> Snapshot | None:
        self.flush()
        if not self.can_redo():
            return None
        self._index += 1
        logger.debug("Redo to %d/%d", self._index+1, len(self._entries))
        return self.current
