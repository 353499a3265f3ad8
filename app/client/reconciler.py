"""Client-side live feed that merges fetched pages with realtime pushes.

The feed list has a single owner: one consumer task applies every change it
receives through an ``asyncio.Queue``. Push notifications only carry an
activity id, so each push starts an independent detail fetch; when a fetch
completes its item is queued and the owner decides, against the list as it
is at that moment, whether the id is already known. This keeps the list free
of duplicates even when fetches finish out of order.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from app.domain.entities import FeedItem, FeedPage

logger = logging.getLogger(__name__)

FetchItem = Callable[[str], Awaitable[FeedItem]]
ErrorCallback = Callable[[Exception], None]


@dataclass(frozen=True)
class _Seed:
    page: FeedPage


@dataclass(frozen=True)
class _Append:
    page: FeedPage


@dataclass(frozen=True)
class _Insert:
    item: FeedItem
    generation: int


@dataclass(frozen=True)
class _Clear:
    pass


class LiveFeedReconciler:
    """In-memory, newest-first feed kept live by realtime pushes."""

    def __init__(self, fetch_item: FetchItem, *, on_error: ErrorCallback | None = None) -> None:
        self._fetch_item = fetch_item
        self._on_error = on_error
        self._queue: asyncio.Queue = asyncio.Queue()
        self._owner: asyncio.Task | None = None
        self._pending: dict[str, asyncio.Task] = {}
        self._generation = 0

        self._items: list[FeedItem] = []
        self._ids: set[str] = set()
        self._total_count = 0
        self._has_more = False
        self._seeded = False

    @property
    def items(self) -> tuple[FeedItem, ...]:
        return tuple(self._items)

    @property
    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def is_seeded(self) -> bool:
        return self._seeded

    def __len__(self) -> int:
        return len(self._items)

    async def __aenter__(self) -> "LiveFeedReconciler":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def start(self) -> None:
        """Start the task that owns the feed list."""

        if self._owner is None or self._owner.done():
            self._owner = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        """Cancel pending fetches and the owner task."""

        self._cancel_pending()
        if self._owner is not None:
            self._owner.cancel()
            await asyncio.gather(self._owner, return_exceptions=True)
            self._owner = None

    def seed(self, page: FeedPage) -> None:
        """Replace the feed with ``page``."""

        self._enqueue(_Seed(page))

    def append(self, page: FeedPage) -> None:
        """Add the items of a following page that are not known yet."""

        self._enqueue(_Append(page))

    def on_push(self, event_id: str) -> None:
        """Handle a realtime notification that ``event_id`` was recorded."""

        if not event_id or event_id in self._pending:
            return
        task = asyncio.get_running_loop().create_task(
            self._fetch_and_queue(event_id, self._generation)
        )
        self._pending[event_id] = task
        task.add_done_callback(functools.partial(self._forget, event_id))

    def clear(self) -> None:
        """Drop every item and any push still being fetched."""

        self._generation += 1
        self._cancel_pending()
        self._enqueue(_Clear())

    async def flush(self) -> None:
        """Wait until every queued change has been applied."""

        await self._queue.join()

    async def drain(self) -> None:
        """Wait for in-flight push fetches and the queued changes they produce."""

        while self._pending:
            await asyncio.gather(*list(self._pending.values()), return_exceptions=True)
        await self.flush()

    async def _fetch_and_queue(self, event_id: str, generation: int) -> None:
        try:
            item = await self._fetch_item(event_id)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Could not fetch pushed activity %s: %s", event_id, exc)
            if self._on_error is not None:
                self._on_error(exc)
            return
        self._enqueue(_Insert(item, generation))

    async def _run(self) -> None:
        while True:
            change = await self._queue.get()
            try:
                self._apply(change)
            finally:
                self._queue.task_done()

    def _apply(self, change: object) -> None:
        if isinstance(change, _Seed):
            self._items = []
            self._ids = set()
            self._extend(change.page.items)
            self._total_count = change.page.total_count
            self._has_more = change.page.has_more
            self._seeded = True
        elif isinstance(change, _Append):
            self._extend(change.page.items)
            self._total_count = change.page.total_count
            self._has_more = change.page.has_more
        elif isinstance(change, _Insert):
            if change.generation != self._generation:
                logger.debug("Dropping push %s fetched before the feed was cleared", change.item.id)
                return
            if change.item.id in self._ids:
                return
            self._items.insert(0, change.item)
            self._ids.add(change.item.id)
            self._total_count += 1
        elif isinstance(change, _Clear):
            self._items = []
            self._ids = set()
            self._total_count = 0
            self._has_more = False
            self._seeded = False

    def _extend(self, items: list[FeedItem]) -> None:
        for item in items:
            if item.id in self._ids:
                continue
            self._items.append(item)
            self._ids.add(item.id)

    def _enqueue(self, change: object) -> None:
        self.start()
        self._queue.put_nowait(change)

    def _forget(self, event_id: str, task: asyncio.Task) -> None:
        if self._pending.get(event_id) is task:
            del self._pending[event_id]

    def _cancel_pending(self) -> None:
        for task in list(self._pending.values()):
            task.cancel()
        self._pending.clear()


__all__ = ["LiveFeedReconciler"]
