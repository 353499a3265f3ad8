"""HTTP client for the activity feed endpoints."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from app.domain.entities import FeedItem, FeedPage
from app.interfaces.api.schemas import ActivityFeedRead, ActivityItemRead


class ActivityApiError(Exception):
    """The activity API could not be reached or answered with an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)

    @property
    def retryable(self) -> bool:
        return self.status_code is None or self.status_code >= 500


class ActivityApiClient:
    """Fetch feed pages and single activities from the backend."""

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def __aenter__(self) -> "ActivityApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def get_feed(self, limit: int | None = None, offset: int | None = None) -> FeedPage:
        """Fetch one page of the current user's feed."""

        params: dict[str, int] = {}
        if limit is not None:
            params["limit"] = limit
        if offset is not None:
            params["offset"] = offset
        payload = await self._get("/activity/feed", params=params)
        try:
            return ActivityFeedRead.model_validate(payload).to_page()
        except ValidationError as exc:
            raise ActivityApiError(f"Unexpected feed payload: {exc}") from exc

    async def get_activity_item(self, activity_id: str) -> FeedItem:
        """Fetch the full detail of a single activity."""

        payload = await self._get(f"/activity/{activity_id}")
        try:
            return ActivityItemRead.model_validate(payload).to_item()
        except ValidationError as exc:
            raise ActivityApiError(f"Unexpected activity payload: {exc}") from exc

    async def _get(self, path: str, *, params: dict[str, int] | None = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await self._client.get(url, params=params, headers=self._headers)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ActivityApiError(f"Request to {path} timed out") from exc
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            raise ActivityApiError(
                f"{path} returned status {status_code}", status_code=status_code
            ) from exc
        except httpx.HTTPError as exc:
            raise ActivityApiError(f"Cannot reach {self.base_url}: {exc}") from exc
        return response.json()


__all__ = ["ActivityApiClient", "ActivityApiError"]
