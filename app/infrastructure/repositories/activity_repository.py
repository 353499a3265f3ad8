"""Persistence helpers for activity feed entries."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from uuid import uuid4

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.domain.entities import (
    ActivityEvent,
    ActivityEventType,
    ParsedMetadata,
    RawMetadata,
    encode_metadata,
    to_metadata,
)
from app.infrastructure.models import ActivityModel
from app.utils import ensure_app_timezone, ensure_utc_naive_datetime, utc_now_naive


class ActivityRepository:
    """Read and append :class:`ActivityEvent` rows."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_authors(
        self, author_ids: Collection[str], *, limit: int, offset: int
    ) -> Sequence[ActivityEvent]:
        """Return one page of events written by ``author_ids``, newest first."""

        if not author_ids:
            return []
        query = (
            self._authored_by(author_ids)
            .order_by(ActivityModel.created_at.desc(), ActivityModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count_for_authors(self, author_ids: Collection[str]) -> int:
        """Return how many events ``list_for_authors`` can page through."""

        if not author_ids:
            return 0
        query = self._authored_by(author_ids).with_entities(func.count(ActivityModel.id))
        return int(query.scalar() or 0)

    def get(self, activity_id: str) -> ActivityEvent | None:
        model = self.session.get(ActivityModel, activity_id)
        return self._to_entity(model) if model else None

    def create(self, event: ActivityEvent) -> ActivityEvent:
        model = ActivityModel(
            id=event.id or str(uuid4()),
            user_id=event.author_id,
            type=event.event_type.value,
            message=event.message,
            metadata_json=self._metadata_to_column(event),
            created_at=ensure_utc_naive_datetime(event.created_at) or utc_now_naive(),
            related_user_id=event.related_user_id,
            related_group_id=event.related_group_id,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _authored_by(self, author_ids: Collection[str]):
        return self.session.query(ActivityModel).filter(
            ActivityModel.user_id.in_(sorted(set(author_ids)))
        )

    @staticmethod
    def _metadata_to_column(event: ActivityEvent) -> str | None:
        metadata = event.metadata
        if metadata is None:
            return None
        if isinstance(metadata, RawMetadata):
            return metadata.data.decode("utf-8", errors="replace")
        if isinstance(metadata, ParsedMetadata):
            return encode_metadata(metadata.document)
        return None

    @staticmethod
    def _to_entity(model: ActivityModel) -> ActivityEvent:
        return ActivityEvent(
            id=model.id,
            author_id=model.user_id,
            event_type=ActivityEventType.parse(model.type),
            message=model.message or "",
            created_at=ensure_app_timezone(model.created_at),
            metadata=to_metadata(model.metadata_json),
            related_user_id=model.related_user_id,
            related_group_id=model.related_group_id,
        )


__all__ = ["ActivityRepository"]
