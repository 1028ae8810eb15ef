"""
Session ORM model.

A session is one conversation: an ordered list of messages under a title.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.base
System role: Session persistence
"""

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mini_perplexity.boundary.db.base import Base, TimestampMixin, UUIDMixin

DEFAULT_TITLE = "New Chat"


class SessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Session ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        title: Display title, "New Chat" until derived or renamed
        user_id: Optional owner identifier
        is_active: Soft-delete flag; inactive sessions are hidden from lists
        message_count: Number of messages, kept in step with appends
        session_metadata: Free-form JSON mapping (column "metadata")
        tags: JSON list of strings
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC), bumped on every append

    Relationships:
        messages: One-to-many with MessageModel ordered by sequence_number
    """

    __tablename__ = "sessions"

    title: Mapped[str] = mapped_column(String(255), nullable=False, default=DEFAULT_TITLE)
    user_id: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    message_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    session_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSON,
        nullable=False,
        default=dict,
        doc="Flexible session metadata",
    )
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    messages = relationship(
        "MessageModel",
        back_populates="session",
        order_by="MessageModel.sequence_number",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
