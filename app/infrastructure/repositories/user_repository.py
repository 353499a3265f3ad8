"""Persistence layer for user profiles."""

from __future__ import annotations

from collections.abc import Collection, Sequence

from sqlalchemy.orm import Session

from app.domain.entities import UserProfile
from app.infrastructure.models import UserModel


class UserRepository:
    """Provide lookups for :class:`UserProfile` entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_ids(self, user_ids: Collection[str]) -> Sequence[UserProfile]:
        """Return the profiles found for ``user_ids`` in a single query."""

        ids = sorted({user_id for user_id in user_ids if user_id})
        if not ids:
            return []
        query = self.session.query(UserModel).filter(UserModel.id.in_(ids))
        return [self._to_entity(model) for model in query.all()]

    def create(self, profile: UserProfile) -> UserProfile:
        model = UserModel(
            id=profile.id,
            display_name=profile.display_name,
            avatar_url=profile.avatar_url,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> UserProfile:
        return UserProfile(
            id=model.id,
            display_name=model.display_name,
            avatar_url=model.avatar_url,
        )


__all__ = ["UserRepository"]
