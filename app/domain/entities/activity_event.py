"""Domain entity describing an item of recorded activity."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .metadata import Metadata

# Realtime message type announcing a newly recorded activity id.
ACTIVITY_CREATED = "activity.created"


class ActivityEventType(str, Enum):
    """Vocabulary of activity kinds rendered by the feed."""

    STEPS_RECORDED = "steps_recorded"
    FRIEND_ADDED = "friend_added"
    GROUP_INVITE = "group_invite"
    GROUP_JOINED = "group_joined"
    GOAL_ACHIEVED = "goal_achieved"
    MILESTONE_REACHED = "milestone_reached"
    GENERAL = "general"

    @classmethod
    def parse(cls, value: object) -> "ActivityEventType":
        """Return the matching member, or ``GENERAL`` for unknown values."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.GENERAL


@dataclass(frozen=True)
class ActivityEvent:
    """Immutable fact about something a user did.

    ``id`` is the identity shared by the paginated and the realtime paths and
    ``created_at`` is the ordering key. Instances are never mutated once read.
    """

    id: str
    author_id: str
    event_type: ActivityEventType
    message: str
    created_at: datetime
    metadata: Metadata = None
    related_user_id: str | None = None
    related_group_id: str | None = None

    def sort_key(self) -> tuple[datetime, str]:
        """Key for newest-first ordering when used with ``reverse=True``."""

        return (self.created_at, self.id)


__all__ = ["ACTIVITY_CREATED", "ActivityEvent", "ActivityEventType"]
