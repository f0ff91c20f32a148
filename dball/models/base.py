"""SQLAlchemy declarative base and shared columns."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    """Declarative base for ORM models."""

    pass


class AuditTimestamps:
    """`created_time` / `modified_time` columns (naive UTC)."""

    created_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    modified_time: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
