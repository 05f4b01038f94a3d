"""Mixins for SQLAlchemy models."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, String, func


def generate_id() -> str:
    """Return a new opaque record id."""
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(UTC)


class IdMixin:
    """Mixin to add an opaque string primary key."""

    id = Column(String(32), primary_key=True, default=generate_id)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns."""

    # Python-side defaults keep sub-second ordering on SQLite
    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
