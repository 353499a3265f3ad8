"""Endpoints and websocket handler for the social activity feed."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, WebSocket, WebSocketDisconnect, status

from app.application.use_cases.activity import ActivityFeedService
from app.domain.exceptions import (
    ActivityNotFoundError,
    InvalidArgumentError,
    UpstreamUnavailableError,
)
from app.infrastructure.realtime import activity_connections
from app.interfaces.api.dependencies import (
    get_activity_feed_service,
    get_current_user_id,
    resolve_current_user_id,
)
from app.interfaces.api.schemas import ActivityFeedRead, ActivityItemRead

router = APIRouter(prefix="/activity", tags=["activity"])
logger = logging.getLogger(__name__)

_UPSTREAM_DETAIL = "The activity feed is temporarily unavailable. Please retry."


@router.get("/feed", response_model=ActivityFeedRead)
async def read_activity_feed(
    limit: int = Query(20, description="Maximum number of items (clamped to 1..100)"),
    offset: int = Query(0, description="Number of items to skip"),
    user_id: str = Depends(get_current_user_id),
    service: ActivityFeedService = Depends(get_activity_feed_service),
) -> ActivityFeedRead:
    """Return the activity of the current user and their friends, newest first."""

    try:
        page = await service.get_feed(user_id, limit, offset)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        logger.warning("Feed for user %s unavailable: %s", user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_UPSTREAM_DETAIL
        ) from exc
    return ActivityFeedRead.from_page(page)


@router.websocket("/ws")
async def activity_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that pushes new activity ids to the authenticated user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    try:
        user_id = resolve_current_user_id(token)
    except HTTPException:
        await websocket.close(code=1008)
        return

    await activity_connections.connect(user_id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        activity_connections.disconnect(user_id, websocket)
    except Exception:  # pragma: no cover - unexpected transport failure
        activity_connections.disconnect(user_id, websocket)
        raise


@router.get("/{activity_id}", response_model=ActivityItemRead)
async def read_activity_item(
    activity_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ActivityFeedService = Depends(get_activity_feed_service),
) -> ActivityItemRead:
    """Return a single activity item, used to expand realtime pushes."""

    try:
        item = await service.get_item(user_id, activity_id)
    except InvalidArgumentError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except ActivityNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except UpstreamUnavailableError as exc:
        logger.warning("Activity %s unavailable for user %s: %s", activity_id, user_id, exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_UPSTREAM_DETAIL
        ) from exc
    return ActivityItemRead.from_item(item)


__all__ = ["router"]
