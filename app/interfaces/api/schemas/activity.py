"""Pydantic schemas for activity feed endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities import ActivityEventType, FeedItem, FeedPage


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class ActivityItemRead(_CamelModel):
    id: str = Field(..., description="Unique identifier of the activity")
    author_id: str = Field(..., description="User who generated the activity")
    author_display_name: str = Field(..., description="Display name of the author")
    author_avatar_url: str | None = Field(default=None, description="Avatar of the author")
    event_type: str = Field(..., description="Kind of activity, e.g. steps_recorded")
    message: str = Field(..., description="Human readable summary")
    metadata: dict[str, Any] | None = Field(
        default=None, description="Structured details, null when unavailable"
    )
    created_at: datetime = Field(..., description="When the activity happened")
    related_user_id: str | None = None
    related_group_id: str | None = None

    @classmethod
    def from_item(cls, item: FeedItem) -> "ActivityItemRead":
        return cls(
            id=item.id,
            author_id=item.author_id,
            author_display_name=item.author_display_name,
            author_avatar_url=item.author_avatar_url,
            event_type=item.event_type.value,
            message=item.message,
            metadata=item.metadata,
            created_at=item.created_at,
            related_user_id=item.related_user_id,
            related_group_id=item.related_group_id,
        )

    def to_item(self) -> FeedItem:
        return FeedItem(
            id=self.id,
            author_id=self.author_id,
            author_display_name=self.author_display_name,
            author_avatar_url=self.author_avatar_url,
            event_type=ActivityEventType.parse(self.event_type),
            message=self.message,
            created_at=self.created_at,
            metadata=self.metadata,
            related_user_id=self.related_user_id,
            related_group_id=self.related_group_id,
        )


class ActivityFeedRead(_CamelModel):
    items: list[ActivityItemRead] = Field(default_factory=list)
    total_count: int = Field(..., ge=0, description="Activities matching the feed filter")
    has_more: bool = Field(..., description="Whether a following page exists")

    @classmethod
    def from_page(cls, page: FeedPage) -> "ActivityFeedRead":
        return cls(
            items=[ActivityItemRead.from_item(item) for item in page.items],
            total_count=page.total_count,
            has_more=page.has_more,
        )

    def to_page(self) -> FeedPage:
        return FeedPage(
            items=[item.to_item() for item in self.items],
            total_count=self.total_count,
            has_more=self.has_more,
        )


__all__ = ["ActivityFeedRead", "ActivityItemRead"]
