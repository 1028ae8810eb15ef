"""
Message ORM model.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.base
System role: Message persistence with per-session ordering
"""

from uuid import UUID

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mini_perplexity.boundary.db.base import Base, CreatedAtMixin, UUIDMixin

SEQUENCE_CONSTRAINT = "uq_messages_session_sequence"


class MessageType:
    """Message roles as stored."""

    USER = "user"
    ASSISTANT = "assistant"

    ALL = (USER, ASSISTANT)


class MessageModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Message ORM model.

    Within a session, sequence_number runs 1..N without gaps; the unique
    constraint on (session_id, sequence_number) rejects concurrent writers
    that computed the same number. Rows are immutable apart from the
    feedback fields and sources_count.

    Attributes:
        session_id: Parent session
        type: "user" or "assistant"
        content: Message text
        sequence_number: 1-based position in the session
        model_used, tokens_used, response_time_ms, search_query: Generation details
        sources_count: Number of attached sources
        feedback_rating, feedback_text, is_helpful: User feedback
        message_metadata: Free-form JSON mapping (column "metadata")
    """

    __tablename__ = "messages"
    __table_args__ = (
        UniqueConstraint("session_id", "sequence_number", name=SEQUENCE_CONSTRAINT),
    )

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    sequence_number: Mapped[int] = mapped_column(Integer, nullable=False)

    model_used: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tokens_used: Mapped[int | None] = mapped_column(Integer, nullable=True)
    response_time_ms: Mapped[int | None] = mapped_column(Integer, nullable=True)
    search_query: Mapped[str | None] = mapped_column(Text, nullable=True)
    sources_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    feedback_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    feedback_text: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_helpful: Mapped[bool | None] = mapped_column(Boolean, nullable=True)

    message_metadata: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)

    session = relationship("SessionModel", back_populates="messages")
    sources = relationship(
        "MessageSourceModel",
        back_populates="message",
        order_by="MessageSourceModel.display_order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
