"""Read models produced by the activity feed."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from .activity_event import ActivityEvent, ActivityEventType
from .user import UserProfile


@dataclass(frozen=True)
class FeedItem:
    """An activity event joined with its author's display information."""

    id: str
    author_id: str
    author_display_name: str
    author_avatar_url: str | None
    event_type: ActivityEventType
    message: str
    created_at: datetime
    metadata: dict[str, Any] | None = None
    related_user_id: str | None = None
    related_group_id: str | None = None

    @classmethod
    def from_event(
        cls,
        event: ActivityEvent,
        author: UserProfile,
        metadata: dict[str, Any] | None,
    ) -> "FeedItem":
        return cls(
            id=event.id,
            author_id=event.author_id,
            author_display_name=author.display_name,
            author_avatar_url=author.avatar_url,
            event_type=event.event_type,
            message=event.message,
            created_at=event.created_at,
            metadata=metadata,
            related_user_id=event.related_user_id,
            related_group_id=event.related_group_id,
        )


@dataclass(frozen=True)
class FeedPage:
    """One window of the feed, newest first."""

    items: list[FeedItem] = field(default_factory=list)
    total_count: int = 0
    has_more: bool = False


__all__ = ["FeedItem", "FeedPage"]
