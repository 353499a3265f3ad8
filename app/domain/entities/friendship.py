"""Domain entity representing a relationship between two users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class FriendshipStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    BLOCKED = "blocked"


@dataclass(frozen=True)
class Friendship:
    """Friend request sent by ``requester_id`` to ``addressee_id``."""

    id: str
    requester_id: str
    addressee_id: str
    status: FriendshipStatus
    created_at: datetime | None = None
    accepted_at: datetime | None = None

    def involves(self, user_id: str) -> bool:
        return user_id in (self.requester_id, self.addressee_id)

    def other_party(self, user_id: str) -> str:
        """Return the participant that is not ``user_id``."""

        if self.requester_id == user_id:
            return self.addressee_id
        return self.requester_id


__all__ = ["Friendship", "FriendshipStatus"]
