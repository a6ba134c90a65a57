"""
SQLAlchemy declarative base and shared column mixins.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase


def utcnow() -> datetime:
    """Timezone-aware current time used for every timestamp column."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class TimestampMixin:
    """created_at is written once; updated_at is refreshed by every mutation."""

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
