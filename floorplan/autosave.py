"""Debounced, hash-checked autosave through an async persistence callback.

The in-memory plan is authoritative: a failed save is logged and surfaced in
`message`, never rolled back. A newer save supersedes an older one. A save
still waiting out its debounce is cancelled; one already in flight finishes,
but its result no longer updates the saved hash.
"""
import asyncio
import logging
from typing import Awaitable, Callable

from floorplan.constants import AUTOSAVE_DEBOUNCE, MSG_SAVE_FAILED
from floorplan.document import FloorPlanDocument, document_hash, to_dict

logger = logging.getLogger(__name__)

SaveFn = Callable[[dict], Awaitable[bool]]


class AutoSaver:
    def __init__(self, save: SaveFn, delay: float = AUTOSAVE_DEBOUNCE, enabled: bool = True):
        self.save = save
        self.delay = delay
        self.enabled = enabled
        self.last_hash: str | None = None
        self.message: str | None = None
        self._generation = 0
        self._task: asyncio.Task | None = None
        self._waiting = False

    def prime(self, doc: FloorPlanDocument) -> None:
        """Mark *doc* as already saved (initial load)."""
        self.last_hash = document_hash(doc)

    def is_dirty(self, doc: FloorPlanDocument) -> bool:
        return document_hash(doc) != self.last_hash

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self, doc: FloorPlanDocument) -> asyncio.Task | None:
        """Save *doc* after the debounce delay. Must run inside an event loop."""
        if not self.enabled:
            return None
        if self._task is not None and self._waiting:
            self._task.cancel()
        self._generation += 1
        self._waiting = False
        if not self.is_dirty(doc):
            return None
        self._task = asyncio.get_running_loop().create_task(
            self._delayed(self._generation, doc))
        self._waiting = True
        return self._task

    async def _delayed(self, gen: int, doc: FloorPlanDocument) -> bool:
        await asyncio.sleep(self.delay)
        if gen == self._generation:
            self._waiting = False
        return await self._save(gen, doc)

    async def save_now(self, doc: FloorPlanDocument) -> bool:
        """Save immediately, superseding any scheduled save."""
        if self._task is not None and self._waiting:
            self._task.cancel()
            self._waiting = False
        self._generation += 1
        return await self._save(self._generation, doc)

    async def _save(self, gen: int, doc: FloorPlanDocument) -> bool:
        h = document_hash(doc)
        try:
            ok = await self.save(to_dict(doc))
        except Exception as e:
            logger.warning("Save raised %s: %s", type(e).__name__, e)
            ok = False
        if gen != self._generation:
            logger.debug("Discarding superseded save result (gen %d)", gen)
            return ok
        if ok:
            self.last_hash = h
            self.message = None
        else:
            logger.warning(MSG_SAVE_FAILED)
            self.message = MSG_SAVE_FAILED
        return ok

    async def wait(self) -> bool | None:
        """Wait for the current scheduled save, if any."""
        task = self._task
        if task is None:
            return None
        await asyncio.wait({task})
        return None if task.cancelled() else task.result()

    def attach(self, editor) -> Callable[[], None]:
        """Schedule a save after every settled change of *editor*'s plan."""
        self.prime(editor.document())
        if not editor.config.persistence:
            self.enabled = False
        return editor.subscribe(self.schedule)
