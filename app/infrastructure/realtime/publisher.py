"""Push newly recorded activity ids to the sockets of the users who can see them."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from typing import Any

from anyio import from_thread

from app.domain.entities import ACTIVITY_CREATED

from .manager import ActivityConnectionRegistry, activity_connections

logger = logging.getLogger(__name__)


class RealtimeEventPublisher:
    """Fan realtime messages out through an :class:`ActivityConnectionRegistry`.

    Publishing never blocks the caller: from the event loop the delivery is
    scheduled as a task, from an anyio worker thread it is handed back to the
    loop. Delivery is best effort and recipients without an open socket are
    only logged.
    """

    def __init__(self, registry: ActivityConnectionRegistry) -> None:
        self._registry = registry

    async def deliver(self, recipients: Iterable[str], message: dict[str, Any]) -> dict[str, int]:
        """Send ``message`` to each distinct recipient and return the socket counts."""

        counts: dict[str, int] = {}
        for user_id in recipients:
            if not user_id or user_id in counts:
                continue
            counts[user_id] = await self._registry.send_to_user(user_id, message)

        offline = sorted(user_id for user_id, count in counts.items() if count == 0)
        if offline:
            logger.debug("%s not delivered to offline users %s", message.get("type"), offline)
        return counts

    def publish(self, recipients: Iterable[str], *, event_type: str, payload: dict[str, Any]) -> None:
        """Schedule delivery of an ``event_type`` message to ``recipients``."""

        message = {"type": event_type, "data": dict(payload)}
        recipients = list(recipients)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Called from a worker thread started by anyio.
            try:
                from_thread.run(self.deliver, recipients, message)
            except RuntimeError:
                logger.debug("No event loop to publish %s to %s", event_type, recipients)
        else:
            loop.create_task(self.deliver(recipients, message))


realtime_event_publisher = RealtimeEventPublisher(activity_connections)


def dispatch_activity_created(activity_id: str, recipients: Iterable[str]) -> None:
    """Signal ``recipients`` that ``activity_id`` was recorded.

    Only the identifier travels on the channel; subscribers fetch the detail.
    """

    realtime_event_publisher.publish(
        recipients, event_type=ACTIVITY_CREATED, payload={"id": activity_id}
    )


__all__ = [
    "RealtimeEventPublisher",
    "dispatch_activity_created",
    "realtime_event_publisher",
]
