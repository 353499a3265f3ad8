"""Aggregate application use cases."""

from .activity import build_activity_feed_service, record_activity

__all__ = [
    "build_activity_feed_service",
    "record_activity",
]
