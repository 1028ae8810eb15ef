"""
Message source CRUD operations.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.models
System role: Citation persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.boundary.db.base import utcnow
from mini_perplexity.boundary.db.CRUD.base_crud import BaseCRUD
from mini_perplexity.boundary.db.models.source_model import MessageSourceModel
from mini_perplexity.core.source_normalizer import NormalizedSource


class SourceCRUD(BaseCRUD[MessageSourceModel]):
    """CRUD operations for MessageSourceModel."""

    def __init__(self) -> None:
        """Initialize SourceCRUD with MessageSourceModel."""
        super().__init__(MessageSourceModel)

    async def bulk_create(
        self,
        session: AsyncSession,
        message_id: UUID,
        sources: Sequence[NormalizedSource],
    ) -> list[MessageSourceModel]:
        """
        Insert a batch of normalized sources for one message.

        Args:
            session: Async database session
            message_id: Owning message UUID
            sources: Normalized sources carrying their display_order

        Returns:
            list[MessageSourceModel]: Flushed rows in display order
        """
        rows = [
            MessageSourceModel(
                message_id=message_id,
                title=source.title,
                url=source.url,
                snippet=source.snippet,
                domain=source.domain,
                favicon_url=source.favicon_url,
                published_date=source.published_date,
                relevance_score=source.relevance_score,
                display_order=source.display_order,
                content_type=source.content_type,
                word_count=source.word_count,
                language=source.language,
                source_metadata=source.metadata,
            )
            for source in sources
        ]
        session.add_all(rows)
        await session.flush()
        return rows

    async def increment_click(self, session: AsyncSession, id: UUID) -> MessageSourceModel | None:
        """
        Record one click on a source.

        Args:
            session: Async database session
            id: Source UUID

        Returns:
            Updated MessageSourceModel if found, None otherwise
        """
        stmt = (
            update(MessageSourceModel)
            .where(MessageSourceModel.id == id)
            .values(click_count=MessageSourceModel.click_count + 1, last_clicked_at=utcnow())
            .returning(MessageSourceModel)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()


source_crud = SourceCRUD()
