"""Domain entity exposing the public identity of a user."""

from __future__ import annotations

from dataclasses import dataclass

UNKNOWN_USER_DISPLAY_NAME = "Unknown User"


@dataclass(frozen=True)
class UserProfile:
    """Display information shown next to a user's activity."""

    id: str
    display_name: str
    avatar_url: str | None = None

    @classmethod
    def unknown(cls, user_id: str) -> "UserProfile":
        """Placeholder used when no profile can be resolved for ``user_id``."""

        return cls(id=user_id, display_name=UNKNOWN_USER_DISPLAY_NAME, avatar_url=None)


__all__ = ["UNKNOWN_USER_DISPLAY_NAME", "UserProfile"]
