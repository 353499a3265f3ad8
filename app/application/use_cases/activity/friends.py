"""Resolve the friends whose activity a user may see."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.entities import Friendship, FriendshipStatus
from app.domain.exceptions import InvalidArgumentError
from app.infrastructure.repositories import FriendshipRepository


def friend_ids_from(friendships: Iterable[Friendship], user_id: str) -> set[str]:
    """Return the other party of every accepted friendship of ``user_id``.

    Requests count in both directions. ``user_id`` itself is never part of
    the result.
    """

    friend_ids: set[str] = set()
    for friendship in friendships:
        if friendship.status is not FriendshipStatus.ACCEPTED:
            continue
        if not friendship.involves(user_id):
            continue
        other = friendship.other_party(user_id)
        if other and other != user_id:
            friend_ids.add(other)
    return friend_ids


def resolve_friend_ids(repository: FriendshipRepository, user_id: str) -> set[str]:
    """Return the accepted friend ids of ``user_id``."""

    if not user_id:
        raise InvalidArgumentError("User ID cannot be empty.")
    return friend_ids_from(repository.list_accepted_for_user(user_id), user_id)


__all__ = ["friend_ids_from", "resolve_friend_ids"]
