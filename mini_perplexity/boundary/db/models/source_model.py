"""
Message source ORM model.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.base
System role: Citation persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import JSON, DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mini_perplexity.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class MessageSourceModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Citation attached to an assistant message.

    display_order is the 1-based position in the list the citations were
    attached with, contiguous per message.
    """

    __tablename__ = "message_sources"
    __table_args__ = (
        UniqueConstraint("message_id", "display_order", name="uq_message_sources_order"),
    )

    message_id: Mapped[UUID] = mapped_column(
        ForeignKey("messages.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    snippet: Mapped[str] = mapped_column(Text, nullable=False, default="")
    domain: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    favicon_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    published_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    relevance_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    display_order: Mapped[int] = mapped_column(Integer, nullable=False)
    content_type: Mapped[str | None] = mapped_column(String(50), nullable=True)
    word_count: Mapped[int | None] = mapped_column(Integer, nullable=True)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default="en")
    click_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_clicked_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    source_metadata: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)

    message = relationship("MessageModel", back_populates="sources")
