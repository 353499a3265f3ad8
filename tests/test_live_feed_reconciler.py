"""Tests for merging realtime pushes into the client-side feed."""

from __future__ import annotations

import asyncio

import pytest

from app.client import LiveFeedReconciler
from app.domain.entities import FeedItem, FeedPage, UserProfile

from conftest import make_event

pytestmark = pytest.mark.anyio


def _item(event_id: str, minutes: int = 0) -> FeedItem:
    event = make_event(event_id, "bob", minutes)
    return FeedItem.from_event(event, UserProfile(id="bob", display_name="Bob"), None)


def _page(*ids: str, total_count: int | None = None, has_more: bool = False) -> FeedPage:
    items = [_item(event_id) for event_id in ids]
    return FeedPage(
        items=items,
        total_count=len(items) if total_count is None else total_count,
        has_more=has_more,
    )


class GatedFetcher:
    """Fetch stub whose calls complete only when released."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.gates: dict[str, asyncio.Event] = {}
        self.errors: dict[str, Exception] = {}

    async def __call__(self, event_id: str) -> FeedItem:
        self.calls.append(event_id)
        gate = self.gates.setdefault(event_id, asyncio.Event())
        await gate.wait()
        if event_id in self.errors:
            raise self.errors[event_id]
        return _item(event_id, minutes=100)

    def release(self, event_id: str) -> None:
        self.gates.setdefault(event_id, asyncio.Event()).set()


async def _instant(event_id: str) -> FeedItem:
    return _item(event_id, minutes=100)


async def test_seed_replaces_contents():
    async with LiveFeedReconciler(_instant) as feed:
        feed.seed(_page("b", "a", total_count=5, has_more=True))
        await feed.flush()

        assert feed.ids == ["b", "a"]
        assert feed.total_count == 5
        assert feed.has_more is True
        assert feed.is_seeded is True

        feed.seed(_page("c"))
        await feed.flush()

        assert feed.ids == ["c"]
        assert feed.has_more is False


async def test_push_is_prepended_once():
    async with LiveFeedReconciler(_instant) as feed:
        feed.seed(_page("b", "a"))
        feed.on_push("c")
        await feed.drain()
        feed.on_push("c")
        await feed.drain()

        assert feed.ids == ["c", "b", "a"]
        assert feed.total_count == 3


async def test_push_for_known_item_is_ignored():
    async with LiveFeedReconciler(_instant) as feed:
        feed.seed(_page("b", "a"))
        await feed.flush()
        feed.on_push("a")
        await feed.drain()

        assert feed.ids == ["b", "a"]
        assert feed.total_count == 2


async def test_concurrent_pushes_for_same_id_fetch_once():
    fetcher = GatedFetcher()
    async with LiveFeedReconciler(fetcher) as feed:
        feed.seed(_page("a"))
        feed.on_push("x")
        feed.on_push("x")
        await asyncio.sleep(0)
        fetcher.release("x")
        await feed.drain()

        assert fetcher.calls == ["x"]
        assert feed.ids == ["x", "a"]


async def test_out_of_order_completion_keeps_single_copies():
    fetcher = GatedFetcher()
    async with LiveFeedReconciler(fetcher) as feed:
        feed.seed(_page("a"))
        feed.on_push("x")
        feed.on_push("y")
        await asyncio.sleep(0)

        fetcher.release("y")
        await asyncio.sleep(0.01)
        feed.on_push("y")
        fetcher.release("x")
        await feed.drain()

        assert sorted(feed.ids) == ["a", "x", "y"]
        assert len(feed) == 3
        assert feed.ids[-1] == "a"


async def test_clear_discards_in_flight_pushes():
    fetcher = GatedFetcher()
    async with LiveFeedReconciler(fetcher) as feed:
        feed.seed(_page("a"))
        feed.on_push("x")
        await asyncio.sleep(0)

        feed.clear()
        fetcher.release("x")
        await feed.drain()

        assert feed.ids == []
        assert feed.total_count == 0
        assert feed.is_seeded is False


async def test_push_before_seed_is_replaced_by_seed():
    async with LiveFeedReconciler(_instant) as feed:
        feed.on_push("x")
        await feed.drain()
        assert feed.ids == ["x"]

        feed.seed(_page("b", "a"))
        await feed.flush()

        assert feed.ids == ["b", "a"]


async def test_append_skips_items_already_present():
    async with LiveFeedReconciler(_instant) as feed:
        feed.seed(_page("c", "b", total_count=4, has_more=True))
        feed.on_push("n")
        await feed.drain()

        feed.append(_page("b", "a", total_count=5, has_more=False))
        await feed.flush()

        assert feed.ids == ["n", "c", "b", "a"]
        assert feed.total_count == 5
        assert feed.has_more is False


async def test_failed_fetch_reports_error_and_leaves_feed_untouched():
    errors: list[Exception] = []
    fetcher = GatedFetcher()
    fetcher.errors["x"] = RuntimeError("offline")

    async with LiveFeedReconciler(fetcher, on_error=errors.append) as feed:
        feed.seed(_page("a"))
        feed.on_push("x")
        await asyncio.sleep(0)
        fetcher.release("x")
        await feed.drain()

        assert feed.ids == ["a"]
        assert len(errors) == 1
        assert str(errors[0]) == "offline"

        fetcher.errors.clear()
        feed.on_push("x")
        await feed.drain()

        assert feed.ids == ["x", "a"]


async def test_empty_push_id_is_ignored():
    fetcher = GatedFetcher()
    async with LiveFeedReconciler(fetcher) as feed:
        feed.on_push("")
        await feed.drain()

        assert fetcher.calls == []
