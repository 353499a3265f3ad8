from .activity import ActivityFeedRead, ActivityItemRead

__all__ = [
    "ActivityFeedRead",
    "ActivityItemRead",
]
