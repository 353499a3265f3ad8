"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.application.use_cases.activity import (
    ActivityFeedService,
    build_activity_feed_service,
)
from app.infrastructure.security import resolve_user_id

bearer_scheme = HTTPBearer(auto_error=False)


def resolve_current_user_id(token: str) -> str:
    """Resolve the authenticated user id for the provided token."""

    try:
        return resolve_user_id(token)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Return the caller's user id from the bearer token."""

    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User is not authenticated.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return resolve_current_user_id(credentials.credentials)


def get_activity_feed_service() -> ActivityFeedService:
    """Return the feed service; its lookups open their own sessions."""

    return build_activity_feed_service()
