"""Client-side access to the activity feed."""

from .api import ActivityApiClient, ActivityApiError
from .reconciler import LiveFeedReconciler
from .store import ActivityFeedStore
from .subscription import ActivityFeedSubscription, parse_push

__all__ = [
    "ActivityApiClient",
    "ActivityApiError",
    "ActivityFeedStore",
    "ActivityFeedSubscription",
    "LiveFeedReconciler",
    "parse_push",
]
