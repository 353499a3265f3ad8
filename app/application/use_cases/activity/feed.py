"""Use cases for building the social activity feed.

The feed of a user merges their own activity with the activity of their
accepted friends, newest first. Every request recomputes the author set so
that friendship changes are visible immediately.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, TypeVar

import anyio
from sqlalchemy.orm import Session

from app.config import Settings, get_settings
from app.domain.entities import (
    ActivityEvent,
    FeedItem,
    FeedPage,
    UserProfile,
    metadata_document,
)
from app.domain.exceptions import (
    ActivityNotFoundError,
    FeedError,
    InvalidArgumentError,
    UpstreamUnavailableError,
)
from app.infrastructure.database import SessionLocal
from app.infrastructure.repositories import (
    ActivityRepository,
    FriendshipRepository,
    ScopedRepository,
    UserRepository,
)

from .friends import resolve_friend_ids

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 20
MAX_LIMIT = 100

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow:
    limit: int
    offset: int


def normalize_pagination(
    limit: int | None,
    offset: int | None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageWindow:
    """Clamp the requested window instead of rejecting it.

    A limit below 1 (or missing) becomes ``default_limit`` and anything above
    ``max_limit`` is capped. Negative offsets start from the beginning.
    """

    if limit is None or limit < 1:
        limit = default_limit
    limit = min(limit, max_limit)
    offset = max(offset or 0, 0)
    return PageWindow(limit=limit, offset=offset)


def compute_has_more(offset: int, returned: int, total_count: int) -> bool:
    """Whether items exist beyond the page that was actually returned."""

    return offset + returned < total_count


def build_feed_item(event: ActivityEvent, profiles: dict[str, UserProfile]) -> FeedItem:
    """Project ``event`` into a response item, degrading instead of failing."""

    author = profiles.get(event.author_id)
    if author is None:
        logger.info("No profile found for activity author %s", event.author_id)
        author = UserProfile.unknown(event.author_id)
    return FeedItem.from_event(event, author, metadata_document(event.metadata))


class ActivityFeedService:
    """Aggregate a user's and their friends' activity into feed pages.

    The service is stateless; every collaborator call runs in a worker
    thread bounded by ``timeout`` seconds. Failures and timeouts of the
    friendship, activity or profile lookups surface as
    :class:`UpstreamUnavailableError`.
    """

    def __init__(
        self,
        activities: ActivityRepository,
        friendships: FriendshipRepository,
        users: UserRepository,
        *,
        timeout: float | None = None,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: int = MAX_LIMIT,
    ) -> None:
        self._activities = activities
        self._friendships = friendships
        self._users = users
        self._timeout = timeout
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def get_feed(
        self, user_id: str, limit: int | None = None, offset: int | None = 0
    ) -> FeedPage:
        """Return one page of the feed visible to ``user_id``."""

        _require_id(user_id, "User ID")
        window = normalize_pagination(
            limit,
            offset,
            default_limit=self._default_limit,
            max_limit=self._max_limit,
        )

        author_ids = await self.author_set(user_id)
        events, total_count = await self.fetch_page(author_ids, window.limit, window.offset)
        profiles = await self.enrich({event.author_id for event in events})

        items = [build_feed_item(event, profiles) for event in events]
        return FeedPage(
            items=items,
            total_count=total_count,
            has_more=compute_has_more(window.offset, len(items), total_count),
        )

    async def get_item(self, user_id: str, activity_id: str) -> FeedItem:
        """Return the enriched detail of one activity visible to ``user_id``.

        Activities outside the caller's author set are reported as missing.
        """

        _require_id(user_id, "User ID")
        _require_id(activity_id, "Activity ID")

        event = await self._call("activity store", self._activities.get, activity_id)
        if event is None:
            raise ActivityNotFoundError(activity_id)
        if event.author_id not in await self.author_set(user_id):
            raise ActivityNotFoundError(activity_id)

        profiles = await self.enrich({event.author_id})
        return build_feed_item(event, profiles)

    async def author_set(self, user_id: str) -> set[str]:
        """Return ``user_id`` together with their accepted friends."""

        friend_ids = await self._call(
            "friendship provider", resolve_friend_ids, self._friendships, user_id
        )
        return {user_id, *friend_ids}

    async def fetch_page(
        self, author_ids: set[str], limit: int, offset: int
    ) -> tuple[list[ActivityEvent], int]:
        """Fetch a page of events and the total matching the same authors."""

        events = await self._call(
            "activity store",
            functools.partial(
                self._activities.list_for_authors, author_ids, limit=limit, offset=offset
            ),
        )
        total_count = await self._call(
            "activity store", self._activities.count_for_authors, author_ids
        )
        ordered = sorted(events, key=ActivityEvent.sort_key, reverse=True)
        return ordered, int(total_count)

    async def enrich(self, author_ids: set[str]) -> dict[str, UserProfile]:
        """Resolve display information for ``author_ids`` in one lookup."""

        if not author_ids:
            return {}
        profiles: Sequence[UserProfile] = await self._call(
            "profile lookup", self._users.get_by_ids, sorted(author_ids)
        )
        return {profile.id: profile for profile in profiles}

    async def _call(self, collaborator: str, func: Callable[..., T], *args: Any) -> T:
        try:
            with anyio.fail_after(self._timeout):
                return await anyio.to_thread.run_sync(
                    functools.partial(func, *args), abandon_on_cancel=True
                )
        except TimeoutError as exc:
            logger.warning("%s timed out after %ss", collaborator, self._timeout)
            raise UpstreamUnavailableError(
                collaborator, f"{collaborator} timed out after {self._timeout}s"
            ) from exc
        except FeedError:
            raise
        except Exception as exc:
            logger.warning("%s failed: %s", collaborator, exc)
            raise UpstreamUnavailableError(collaborator) from exc


def _require_id(value: str | None, label: str) -> None:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(f"{label} cannot be empty.")


def build_activity_feed_service(
    session_factory: Callable[[], Session] | None = None,
    *,
    settings: Settings | None = None,
) -> ActivityFeedService:
    """Wire an :class:`ActivityFeedService` over the configured database.

    Each lookup opens its own session from ``session_factory``, so a lookup
    abandoned after a timeout never shares a session with the next one.
    """

    session_factory = session_factory or SessionLocal
    settings = settings or get_settings()
    return ActivityFeedService(
        ScopedRepository(ActivityRepository, session_factory),
        ScopedRepository(FriendshipRepository, session_factory),
        ScopedRepository(UserRepository, session_factory),
        timeout=settings.upstream_timeout_seconds,
        default_limit=settings.feed_default_limit,
        max_limit=settings.feed_max_limit,
    )


__all__ = [
    "ActivityFeedService",
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "PageWindow",
    "build_activity_feed_service",
    "build_feed_item",
    "compute_has_more",
    "normalize_pagination",
]
