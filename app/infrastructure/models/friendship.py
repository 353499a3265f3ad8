"""SQLAlchemy model for friendships between users."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class FriendshipModel(Base):
    """Friend request and its current status."""

    __tablename__ = "friendships"
    __table_args__ = (
        Index("ix_friendships_requester_status", "requester_id", "status"),
        Index("ix_friendships_addressee_status", "addressee_id", "status"),
    )

    id = Column(String(36), primary_key=True)
    requester_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    addressee_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    status = Column(String(20), nullable=False, default="pending")
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    accepted_at = Column(DateTime, nullable=True)


__all__ = ["FriendshipModel"]
