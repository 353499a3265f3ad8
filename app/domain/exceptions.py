"""Errors raised by the activity feed core."""

from __future__ import annotations


class FeedError(Exception):
    """Base class for activity feed failures."""


class InvalidArgumentError(FeedError, ValueError):
    """A required identifier was missing or empty."""


class UpstreamUnavailableError(FeedError):
    """A collaborator lookup failed or did not answer in time."""

    def __init__(self, collaborator: str, message: str | None = None) -> None:
        self.collaborator = collaborator
        super().__init__(message or f"{collaborator} is unavailable")


class ActivityNotFoundError(FeedError, LookupError):
    """No activity exists with the requested identifier."""

    def __init__(self, activity_id: str) -> None:
        self.activity_id = activity_id
        super().__init__(f"Activity not found: {activity_id}")


__all__ = [
    "ActivityNotFoundError",
    "FeedError",
    "InvalidArgumentError",
    "UpstreamUnavailableError",
]
