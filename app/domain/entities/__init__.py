"""Domain entities exposed by the application."""

from .activity_event import ACTIVITY_CREATED, ActivityEvent, ActivityEventType
from .feed import FeedItem, FeedPage
from .friendship import Friendship, FriendshipStatus
from .metadata import (
    Metadata,
    ParsedMetadata,
    RawMetadata,
    decode_metadata,
    encode_metadata,
    metadata_document,
    to_metadata,
)
from .user import UNKNOWN_USER_DISPLAY_NAME, UserProfile

__all__ = [
    "ACTIVITY_CREATED",
    "ActivityEvent",
    "ActivityEventType",
    "FeedItem",
    "FeedPage",
    "Friendship",
    "FriendshipStatus",
    "Metadata",
    "ParsedMetadata",
    "RawMetadata",
    "decode_metadata",
    "encode_metadata",
    "metadata_document",
    "to_metadata",
    "UNKNOWN_USER_DISPLAY_NAME",
    "UserProfile",
]
