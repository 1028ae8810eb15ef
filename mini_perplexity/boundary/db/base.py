"""
Declarative base and column mixins for the conversation store.

Tables: sessions, messages, message_sources, search_analytics, users.
Every row is keyed by a UUID v4 generated client-side, so ids are known
before the INSERT is flushed. Timestamps are timezone-aware UTC.

Column types are the generic SQLAlchemy ones (Uuid, DateTime, JSON): they
map to native UUID/TIMESTAMPTZ/JSONB-compatible columns on PostgreSQL and
still work on the SQLite database used by the test suite.

Dependencies: sqlalchemy
System role: Foundation for all database models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, MetaData, Uuid
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Deterministic names for constraints the models leave unnamed
NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Registry of all mapped tables; Base.metadata drives create_tables."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={getattr(self, 'id', None)}>"


class UUIDMixin:
    """UUID v4 primary key `id`, assigned when the row is constructed or flushed."""

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )


class CreatedAtMixin:
    """`created_at` for rows that are written once (messages, sources, analytics)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )


class TimestampMixin(CreatedAtMixin):
    """
    Adds `updated_at` for mutable rows (sessions, users).

    ORM updates refresh it through onupdate. Bulk UPDATE statements that
    must move it (appending a message to a session) set it explicitly.
    """

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )
