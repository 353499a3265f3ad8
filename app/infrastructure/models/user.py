"""SQLAlchemy model for the users table."""

from sqlalchemy import Column, DateTime, String

from app.infrastructure.database import Base
from app.utils import utc_now_naive


class UserModel(Base):
    """Public profile of a registered walker."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    display_name = Column(String(100), nullable=False)
    avatar_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now_naive)
    updated_at = Column(DateTime, nullable=True, onupdate=utc_now_naive)


__all__ = ["UserModel"]
