"""SQLAlchemy model for the activity feed table."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class ActivityModel(Base):
    """Database representation of an activity feed entry."""

    __tablename__ = "activity_feed"
    __table_args__ = (Index("ix_activity_feed_user_created", "user_id", "created_at"),)

    id = Column(String(36), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    type = Column(String(50), nullable=False, default="general")
    message = Column(Text, nullable=False)
    # ``metadata`` is reserved on declarative classes.
    metadata_json = Column("metadata", Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    related_user_id = Column(String(36), nullable=True)
    related_group_id = Column(String(36), nullable=True)


__all__ = ["ActivityModel"]
