"""Tests for resolving the friend set used to build a feed."""

import pytest

from app.application.use_cases.activity import friend_ids_from, resolve_friend_ids
from app.domain.entities import Friendship, FriendshipStatus
from app.domain.exceptions import InvalidArgumentError

from conftest import FakeFriendshipRepository, accepted


def _friendship(requester, addressee, status):
    return Friendship(
        id=f"{requester}-{addressee}",
        requester_id=requester,
        addressee_id=addressee,
        status=status,
    )


def test_both_directions_count_as_friends():
    friendships = [accepted("alice", "bob"), accepted("carol", "alice")]

    assert friend_ids_from(friendships, "alice") == {"bob", "carol"}


def test_only_accepted_friendships_are_used():
    friendships = [
        accepted("alice", "bob"),
        _friendship("alice", "carol", FriendshipStatus.PENDING),
        _friendship("dave", "alice", FriendshipStatus.BLOCKED),
        _friendship("erin", "alice", FriendshipStatus.REJECTED),
    ]

    assert friend_ids_from(friendships, "alice") == {"bob"}


def test_duplicates_and_self_are_removed():
    friendships = [
        accepted("alice", "bob"),
        accepted("bob", "alice"),
        accepted("alice", "alice"),
        accepted("carol", "dave"),
    ]

    assert friend_ids_from(friendships, "alice") == {"bob"}


def test_no_friends_is_an_empty_set():
    assert resolve_friend_ids(FakeFriendshipRepository(), "alice") == set()


def test_empty_user_id_is_rejected():
    repository = FakeFriendshipRepository()

    with pytest.raises(InvalidArgumentError):
        resolve_friend_ids(repository, "")
    assert repository.calls == []
