"""Activity feed use cases."""

from .feed import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    ActivityFeedService,
    PageWindow,
    build_activity_feed_service,
    build_feed_item,
    compute_has_more,
    normalize_pagination,
)
from .friends import friend_ids_from, resolve_friend_ids
from .record import record_activity

__all__ = [
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "ActivityFeedService",
    "PageWindow",
    "build_activity_feed_service",
    "build_feed_item",
    "compute_has_more",
    "normalize_pagination",
    "friend_ids_from",
    "resolve_friend_ids",
    "record_activity",
]
