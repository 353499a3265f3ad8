"""Registry of the activity websockets opened by each user."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ActivityConnectionRegistry:
    """Track open activity sockets per user id and fan messages out to them.

    A user may hold several sockets at once (phone and web dashboard); each
    receives every message addressed to that user.
    """

    def __init__(self) -> None:
        self._sockets: dict[str, set[WebSocket]] = {}

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets.setdefault(user_id, set()).add(websocket)
        logger.debug("Activity socket opened for %s (%s open)", user_id, len(self._sockets[user_id]))

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        sockets = self._sockets.get(user_id)
        if not sockets:
            return
        sockets.discard(websocket)
        if not sockets:
            del self._sockets[user_id]

    async def send_to_user(self, user_id: str, message: dict[str, Any]) -> int:
        """Send ``message`` to ``user_id`` and return how many sockets got it.

        Sockets that fail to send are unregistered and not counted.
        """

        delivered = 0
        for websocket in tuple(self._sockets.get(user_id, ())):
            try:
                await websocket.send_json(message)
            except Exception as exc:  # pragma: no cover - dropped connection
                logger.debug("Dropping activity socket of %s: %s", user_id, exc)
                self.disconnect(user_id, websocket)
            else:
                delivered += 1
        return delivered


activity_connections = ActivityConnectionRegistry()


__all__ = ["ActivityConnectionRegistry", "activity_connections"]
