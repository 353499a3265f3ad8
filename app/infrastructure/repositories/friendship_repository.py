"""Persistence helpers for friendships."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import uuid4

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.domain.entities import Friendship, FriendshipStatus
from app.infrastructure.models import FriendshipModel
from app.utils import ensure_app_timezone, ensure_utc_naive_datetime, utc_now_naive


class FriendshipRepository:
    """Query friendships regardless of who sent the request."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_accepted_for_user(self, user_id: str) -> Sequence[Friendship]:
        """Return accepted friendships where ``user_id`` is either party."""

        query = (
            self.session.query(FriendshipModel)
            .filter(
                or_(
                    FriendshipModel.requester_id == user_id,
                    FriendshipModel.addressee_id == user_id,
                )
            )
            .filter(FriendshipModel.status == FriendshipStatus.ACCEPTED.value)
        )
        return [self._to_entity(model) for model in query.all()]

    def create(self, friendship: Friendship) -> Friendship:
        model = FriendshipModel(
            id=friendship.id or str(uuid4()),
            requester_id=friendship.requester_id,
            addressee_id=friendship.addressee_id,
            status=friendship.status.value,
            created_at=ensure_utc_naive_datetime(friendship.created_at) or utc_now_naive(),
            accepted_at=ensure_utc_naive_datetime(friendship.accepted_at),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: FriendshipModel) -> Friendship:
        try:
            status = FriendshipStatus(model.status)
        except ValueError:
            status = FriendshipStatus.PENDING
        return Friendship(
            id=model.id,
            requester_id=model.requester_id,
            addressee_id=model.addressee_id,
            status=status,
            created_at=ensure_app_timezone(model.created_at),
            accepted_at=ensure_app_timezone(model.accepted_at),
        )


__all__ = ["FriendshipRepository"]
