"""Realtime subscription to newly recorded activities."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any
from urllib.parse import urlencode

from websockets.asyncio.client import connect as websocket_connect

from app.domain.entities import ACTIVITY_CREATED

logger = logging.getLogger(__name__)


def parse_push(raw: str | bytes) -> str | None:
    """Return the activity id announced by ``raw`` or ``None``."""

    try:
        message = json.loads(raw)
    except ValueError:
        return None
    if not isinstance(message, dict) or message.get("type") != ACTIVITY_CREATED:
        return None
    data = message.get("data")
    if not isinstance(data, dict):
        return None
    activity_id = data.get("id")
    if isinstance(activity_id, str) and activity_id:
        return activity_id
    return None


class ActivityFeedSubscription:
    """Listen to the activity websocket and report pushed ids.

    ``on_push`` is called with each announced activity id until
    :meth:`unsubscribe` is awaited; no call happens after that.
    """

    def __init__(
        self,
        ws_url: str,
        token: str,
        on_push: Callable[[str], Any],
        *,
        on_error: Callable[[Exception], Any] | None = None,
        connect: Callable[[str], Any] = websocket_connect,
    ) -> None:
        self._url = f"{ws_url.rstrip('/')}/activity/ws?{urlencode({'token': token})}"
        self._on_push = on_push
        self._on_error = on_error
        self._connect = connect
        self._task: asyncio.Task | None = None
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def subscribe(self) -> None:
        """Open the connection in a background task."""

        if self._task is not None and not self._task.done():
            return
        self._active = True
        self._task = asyncio.get_running_loop().create_task(self._listen())

    async def unsubscribe(self) -> None:
        """Close the connection; pending messages are discarded."""

        self._active = False
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None

    async def _listen(self) -> None:
        try:
            async with self._connect(self._url) as websocket:
                async for raw in websocket:
                    if not self._active:
                        break
                    activity_id = parse_push(raw)
                    if activity_id is not None:
                        self._on_push(activity_id)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("Activity subscription closed: %s", exc)
            if self._on_error is not None:
                self._on_error(exc)
        finally:
            self._active = False


__all__ = ["ActivityFeedSubscription", "parse_push"]
