"""Helpers for verifying the identity provider access tokens."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from app.config import get_settings

settings = get_settings()


def create_access_token(
    user_id: str, *, expires_delta: timedelta | None = None, extra_claims: dict | None = None
) -> str:
    """Mint a token for ``user_id`` signed with the configured secret.

    The identity provider issues tokens in production; this is used by local
    tooling and the test-suite.
    """

    expire = datetime.now(tz=timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    claims = {**(extra_claims or {}), "sub": user_id, "exp": expire}
    if settings.jwt_audience:
        claims.setdefault("aud", settings.jwt_audience)
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            options={"verify_aud": bool(settings.jwt_audience)},
        )
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def resolve_user_id(token: str) -> str:
    """Return the ``sub`` claim of a valid token."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject.strip():
        raise ValueError("Token does not identify a user")
    return subject
