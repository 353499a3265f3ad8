"""Realtime activity delivery for the infrastructure layer."""

from .manager import ActivityConnectionRegistry, activity_connections
from .publisher import (
    RealtimeEventPublisher,
    dispatch_activity_created,
    realtime_event_publisher,
)

__all__ = [
    "ActivityConnectionRegistry",
    "activity_connections",
    "RealtimeEventPublisher",
    "dispatch_activity_created",
    "realtime_event_publisher",
]
