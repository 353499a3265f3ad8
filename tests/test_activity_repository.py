"""Tests for the SQLAlchemy repositories backing the feed."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.domain.entities import (
    ActivityEventType,
    Friendship,
    FriendshipStatus,
    ParsedMetadata,
    RawMetadata,
    UserProfile,
    metadata_document,
)
from app.infrastructure import models  # noqa: F401
from app.infrastructure.database import Base
from app.infrastructure.repositories import (
    ActivityRepository,
    FriendshipRepository,
    UserRepository,
)

from conftest import BASE_TIME, make_event


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = factory()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def activities(session):
    repository = ActivityRepository(session)
    for event in [
        make_event("a1", "alice", 0),
        make_event("b1", "bob", 10),
        make_event("b2", "bob", 10),
        make_event("c1", "carol", 20),
        make_event("d1", "dave", 30),
    ]:
        repository.create(event)
    return repository


def test_page_is_newest_first_with_id_tie_break(activities):
    page = activities.list_for_authors({"alice", "bob", "carol"}, limit=10, offset=0)

    assert [event.id for event in page] == ["c1", "b2", "b1", "a1"]


def test_offset_and_limit_window(activities):
    authors = {"alice", "bob", "carol"}

    assert [e.id for e in activities.list_for_authors(authors, limit=2, offset=1)] == ["b2", "b1"]
    assert activities.list_for_authors(authors, limit=2, offset=10) == []
    assert activities.count_for_authors(authors) == 4


def test_no_authors_returns_nothing(activities):
    assert activities.list_for_authors(set(), limit=10, offset=0) == []
    assert activities.count_for_authors(set()) == 0


def test_stored_event_round_trips(session):
    repository = ActivityRepository(session)
    created = repository.create(
        make_event("m1", "alice", 5, event_type="milestone_reached", metadata={"km": 100})
    )

    loaded = repository.get("m1")

    assert loaded == created
    assert loaded.event_type is ActivityEventType.MILESTONE_REACHED
    assert loaded.created_at == BASE_TIME.replace(minute=5)
    assert isinstance(loaded.metadata, RawMetadata)
    assert metadata_document(loaded.metadata) == {"km": 100}
    assert repository.get("missing") is None


def test_malformed_metadata_is_kept_raw(session):
    repository = ActivityRepository(session)
    repository.create(make_event("m2", "alice", 5, metadata="{oops"))

    loaded = repository.get("m2")

    assert loaded.metadata == RawMetadata(b"{oops")
    assert metadata_document(loaded.metadata) is None


def test_parsed_metadata_is_encoded(session):
    repository = ActivityRepository(session)
    event = make_event("m3", "alice", 5)
    repository.create(
        type(event)(
            id=event.id,
            author_id=event.author_id,
            event_type=event.event_type,
            message=event.message,
            created_at=event.created_at,
            metadata=ParsedMetadata({"steps": 5000}),
        )
    )

    assert metadata_document(repository.get("m3").metadata) == {"steps": 5000}


def test_accepted_friendships_in_either_direction(session):
    repository = FriendshipRepository(session)
    for requester, addressee, status in [
        ("alice", "bob", FriendshipStatus.ACCEPTED),
        ("carol", "alice", FriendshipStatus.ACCEPTED),
        ("alice", "dave", FriendshipStatus.PENDING),
        ("erin", "alice", FriendshipStatus.BLOCKED),
        ("bob", "carol", FriendshipStatus.ACCEPTED),
    ]:
        repository.create(
            Friendship(id="", requester_id=requester, addressee_id=addressee, status=status)
        )

    friendships = repository.list_accepted_for_user("alice")

    assert {friendship.other_party("alice") for friendship in friendships} == {"bob", "carol"}
    assert all(friendship.status is FriendshipStatus.ACCEPTED for friendship in friendships)


def test_profiles_are_loaded_in_one_batch(session):
    repository = UserRepository(session)
    repository.create(UserProfile(id="alice", display_name="Alice", avatar_url="https://cdn/a.png"))
    repository.create(UserProfile(id="bob", display_name="Bob"))

    profiles = repository.get_by_ids(["bob", "alice", "ghost", ""])

    assert sorted(profile.id for profile in profiles) == ["alice", "bob"]
    assert repository.get_by_ids([]) == []
    assert [profile.avatar_url for profile in repository.get_by_ids(["alice"])] == ["https://cdn/a.png"]
