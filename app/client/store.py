"""Screen-level state for the activity feed."""

from __future__ import annotations

import logging

from .api import ActivityApiClient, ActivityApiError
from .reconciler import LiveFeedReconciler
from .subscription import ActivityFeedSubscription

logger = logging.getLogger(__name__)


class ActivityFeedStore:
    """Load, page and keep live the feed shown to the user.

    Errors from the API are kept in :attr:`error` so the screen can offer a
    retry; :attr:`retryable` tells whether retrying can help.
    """

    def __init__(
        self,
        client: ActivityApiClient,
        *,
        reconciler: LiveFeedReconciler | None = None,
    ) -> None:
        self.client = client
        self.feed = reconciler or LiveFeedReconciler(client.get_activity_item)
        self.is_loading = False
        self.error: str | None = None
        self.retryable = False
        self._subscription: ActivityFeedSubscription | None = None

    async def fetch_feed(self, limit: int | None = None) -> None:
        """Load the first page, replacing whatever is shown."""

        self._begin()
        try:
            page = await self.client.get_feed(limit=limit, offset=0)
        except ActivityApiError as exc:
            self._fail(exc)
            return
        finally:
            self.is_loading = False
        self.feed.seed(page)
        await self.feed.flush()

    async def load_more(self) -> None:
        """Load the page following the items already shown."""

        await self.feed.flush()
        if not self.feed.has_more or self.is_loading:
            return
        self._begin()
        try:
            page = await self.client.get_feed(offset=len(self.feed))
        except ActivityApiError as exc:
            self._fail(exc)
            return
        finally:
            self.is_loading = False
        self.feed.append(page)
        await self.feed.flush()

    def subscribe(self, ws_url: str, token: str, **kwargs) -> ActivityFeedSubscription:
        """Start receiving realtime pushes into the feed."""

        if self._subscription is None:
            self._subscription = ActivityFeedSubscription(
                ws_url, token, self.feed.on_push, **kwargs
            )
        self._subscription.subscribe()
        return self._subscription

    async def close(self) -> None:
        """Tear down the subscription and forget the feed."""

        if self._subscription is not None:
            await self._subscription.unsubscribe()
            self._subscription = None
        self.feed.clear()
        await self.feed.flush()
        await self.feed.stop()

    def _begin(self) -> None:
        self.is_loading = True
        self.error = None
        self.retryable = False

    def _fail(self, exc: ActivityApiError) -> None:
        logger.warning("Activity feed request failed: %s", exc)
        self.error = str(exc)
        self.retryable = exc.retryable


__all__ = ["ActivityFeedStore"]
