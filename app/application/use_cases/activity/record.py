"""Use case other features call to append an activity to the feed."""

from __future__ import annotations

import logging
from typing import Any
from uuid import uuid4

from sqlalchemy.orm import Session

from app.domain.entities import ActivityEvent, ActivityEventType, ParsedMetadata
from app.domain.exceptions import InvalidArgumentError
from app.infrastructure.realtime import dispatch_activity_created
from app.infrastructure.repositories import ActivityRepository, FriendshipRepository
from app.utils import now_in_app_timezone

from .friends import resolve_friend_ids

logger = logging.getLogger(__name__)


def record_activity(
    session: Session,
    *,
    author_id: str,
    event_type: ActivityEventType | str,
    message: str,
    metadata: dict[str, Any] | None = None,
    related_user_id: str | None = None,
    related_group_id: str | None = None,
) -> ActivityEvent:
    """Persist a new activity and push its id to everyone who can see it.

    The recipients are the author and the author's accepted friends, which
    mirrors the author set used when paging the feed.
    """

    if not author_id:
        raise InvalidArgumentError("User ID cannot be empty.")

    event = ActivityEvent(
        id=str(uuid4()),
        author_id=author_id,
        event_type=ActivityEventType.parse(event_type),
        message=message,
        created_at=now_in_app_timezone(),
        metadata=ParsedMetadata(dict(metadata)) if metadata is not None else None,
        related_user_id=related_user_id,
        related_group_id=related_group_id,
    )
    saved = ActivityRepository(session).create(event)

    recipients = {author_id, *resolve_friend_ids(FriendshipRepository(session), author_id)}
    dispatch_activity_created(saved.id, recipients)
    logger.debug("Recorded activity %s for %s recipients", saved.id, len(recipients))
    return saved


__all__ = ["record_activity"]
