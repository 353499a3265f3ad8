"""Shared fixtures for the test-suite."""

from __future__ import annotations

import os
import sys
import tempfile
import time
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "walking-feed-test.db"
os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("SECRET_KEY", "test-secret")

from app.domain.entities import (  # noqa: E402
    ActivityEvent,
    ActivityEventType,
    Friendship,
    FriendshipStatus,
    UserProfile,
    to_metadata,
)

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend():
    return "asyncio"


def make_event(
    event_id: str,
    author_id: str,
    minutes: int,
    *,
    event_type: str = "steps_recorded",
    metadata: object = None,
    message: str | None = None,
) -> ActivityEvent:
    """Build an event created ``minutes`` after :data:`BASE_TIME`."""

    return ActivityEvent(
        id=event_id,
        author_id=author_id,
        event_type=ActivityEventType.parse(event_type),
        message=message or f"{author_id} did {event_id}",
        created_at=BASE_TIME + timedelta(minutes=minutes),
        metadata=to_metadata(metadata),
    )


def accepted(requester: str, addressee: str) -> Friendship:
    return Friendship(
        id=f"{requester}-{addressee}",
        requester_id=requester,
        addressee_id=addressee,
        status=FriendshipStatus.ACCEPTED,
    )


class FakeActivityRepository:
    def __init__(self, events=(), *, delay: float = 0.0, error: Exception | None = None):
        self.events = list(events)
        self.delay = delay
        self.error = error
        self.page_calls: list[tuple[frozenset, int, int]] = []
        self.count_calls: list[frozenset] = []

    def list_for_authors(self, author_ids, *, limit, offset):
        self.page_calls.append((frozenset(author_ids), limit, offset))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        matching = sorted(
            (event for event in self.events if event.author_id in author_ids),
            key=ActivityEvent.sort_key,
            reverse=True,
        )
        return matching[offset : offset + limit]

    def count_for_authors(self, author_ids):
        self.count_calls.append(frozenset(author_ids))
        return sum(1 for event in self.events if event.author_id in author_ids)

    def get(self, activity_id):
        return next((event for event in self.events if event.id == activity_id), None)


class FakeFriendshipRepository:
    def __init__(self, friendships=(), *, error: Exception | None = None):
        self.friendships = list(friendships)
        self.error = error
        self.calls: list[str] = []

    def list_accepted_for_user(self, user_id):
        self.calls.append(user_id)
        if self.error is not None:
            raise self.error
        return [
            friendship
            for friendship in self.friendships
            if friendship.involves(user_id)
            and friendship.status is FriendshipStatus.ACCEPTED
        ]


class FakeUserRepository:
    def __init__(self, profiles=(), *, delay: float = 0.0):
        self.profiles = {profile.id: profile for profile in profiles}
        self.delay = delay
        self.calls: list[list[str]] = []

    def get_by_ids(self, user_ids):
        self.calls.append(list(user_ids))
        if self.delay:
            time.sleep(self.delay)
        return [self.profiles[user_id] for user_id in user_ids if user_id in self.profiles]


@pytest.fixture
def profiles():
    return [
        UserProfile(id="alice", display_name="Alice", avatar_url="https://cdn/alice.png"),
        UserProfile(id="bob", display_name="Bob", avatar_url=None),
        UserProfile(id="carol", display_name="Carol", avatar_url="https://cdn/carol.png"),
        UserProfile(id="dave", display_name="Dave", avatar_url=None),
    ]
