"""Database configuration and session management."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from app.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)

_POSTGRES_DRIVER = "postgresql+psycopg"


def normalize_database_url(raw_url: str) -> str:
    """Return ``raw_url`` pointing at the psycopg 3 driver for Postgres URLs.

    Managed Postgres providers hand out ``postgres://`` or ``postgresql://``
    connection strings which SQLAlchemy would otherwise map to psycopg2.
    """

    url = make_url(raw_url)
    if url.drivername in ("postgres", "postgresql"):
        url = url.set(drivername=_POSTGRES_DRIVER)
    return url.render_as_string(hide_password=False)


def build_engine(raw_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``raw_url``."""

    database_url = normalize_database_url(raw_url)
    if database_url.startswith("sqlite"):
        # Repository calls are executed from worker threads.
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database() -> None:
    """Ensure all ORM models have corresponding database tables."""

    from app.infrastructure import models  # noqa: F401  # ensure models are imported

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.debug("Database schema ensured for %s", engine.url.render_as_string())
