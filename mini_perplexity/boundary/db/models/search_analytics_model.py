"""
Search analytics ORM model.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.base
System role: One row per web search run for a session
"""

from uuid import UUID

from sqlalchemy import JSON, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mini_perplexity.boundary.db.base import Base, CreatedAtMixin, UUIDMixin


class SearchAnalyticsModel(Base, UUIDMixin, CreatedAtMixin):
    """
    Search run record.

    Attributes:
        session_id: Session the question was asked in
        query: Question sent to the search vendor
        results_count: Results the vendor returned (0 when it failed)
        search_duration_ms: Wall time of the search call
        provider: "tavily" or "mock"
        provider_metadata: Free-form vendor details
    """

    __tablename__ = "search_analytics"

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    query: Mapped[str] = mapped_column(Text, nullable=False)
    results_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    search_duration_ms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    provider: Mapped[str] = mapped_column(String(50), nullable=False)
    provider_metadata: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
