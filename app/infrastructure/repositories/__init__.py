"""Repository implementations for infrastructure layer."""

from .activity_repository import ActivityRepository
from .friendship_repository import FriendshipRepository
from .scoped import ScopedRepository
from .user_repository import UserRepository

__all__ = [
    "ActivityRepository",
    "FriendshipRepository",
    "ScopedRepository",
    "UserRepository",
]
