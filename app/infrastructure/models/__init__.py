"""ORM models used by the application infrastructure."""

from .activity import ActivityModel
from .friendship import FriendshipModel
from .user import UserModel

__all__ = [
    "ActivityModel",
    "FriendshipModel",
    "UserModel",
]
