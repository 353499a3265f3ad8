"""Tests for running feed lookups on per-call database sessions."""

from __future__ import annotations

import threading
import time

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.application.use_cases.activity import ActivityFeedService, build_activity_feed_service
from app.config import get_settings
from app.domain.entities import UserProfile
from app.domain.exceptions import UpstreamUnavailableError
from app.infrastructure import models  # noqa: F401
from app.infrastructure.database import Base
from app.infrastructure.repositories import (
    ActivityRepository,
    ScopedRepository,
    UserRepository,
)

from conftest import FakeFriendshipRepository, FakeUserRepository, make_event


class RecordingSession:
    """Session stand-in that records whether it was closed."""

    opened: list["RecordingSession"] = []

    def __init__(self) -> None:
        self.closed = threading.Event()
        RecordingSession.opened.append(self)

    def __enter__(self) -> "RecordingSession":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.closed.set()


class SlowRepository:
    def __init__(self, session: RecordingSession) -> None:
        self.session = session

    def lookup(self, value):
        return self.session, value

    def list_for_authors(self, author_ids, *, limit, offset):
        time.sleep(0.3)
        return []

    def count_for_authors(self, author_ids):
        return 0


@pytest.fixture(autouse=True)
def reset_sessions():
    RecordingSession.opened = []
    yield


def test_each_call_opens_and_closes_its_own_session():
    repository = ScopedRepository(SlowRepository, RecordingSession)

    first_session, first = repository.lookup(1)
    second_session, second = repository.lookup(value=2)

    assert (first, second) == (1, 2)
    assert first_session is not second_session
    assert all(session.closed.is_set() for session in RecordingSession.opened)


def test_private_attributes_are_not_proxied():
    repository = ScopedRepository(SlowRepository, RecordingSession)

    with pytest.raises(AttributeError):
        repository._hidden

    assert RecordingSession.opened == []


@pytest.mark.anyio
async def test_abandoned_lookup_closes_its_session_when_it_finishes():
    service = ActivityFeedService(
        ScopedRepository(SlowRepository, RecordingSession),
        FakeFriendshipRepository(),
        FakeUserRepository(),
        timeout=0.05,
    )

    with pytest.raises(UpstreamUnavailableError):
        await service.get_feed("alice")

    assert len(RecordingSession.opened) == 1
    assert RecordingSession.opened[0].closed.wait(timeout=2)


@pytest.mark.anyio
async def test_service_built_over_a_session_factory_reads_the_database():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as session:
        UserRepository(session).create(UserProfile(id="alice", display_name="Alice"))
        ActivityRepository(session).create(make_event("a1", "alice", 0))

    service = build_activity_feed_service(factory, settings=get_settings())
    page = await service.get_feed("alice")

    assert [item.id for item in page.items] == ["a1"]
    assert page.items[0].author_display_name == "Alice"
    assert page.total_count == 1
    engine.dispose()
