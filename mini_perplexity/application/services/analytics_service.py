"""
Search analytics service.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.CRUD
System role: Search run tracking and usage aggregates
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.boundary.db.CRUD.message_crud import message_crud
from mini_perplexity.boundary.db.CRUD.search_analytics_crud import search_analytics_crud
from mini_perplexity.boundary.db.CRUD.session_crud import session_crud
from mini_perplexity.boundary.db.models.search_analytics_model import SearchAnalyticsModel

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Records search runs and reports totals."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def track_search(
        self,
        session_id: UUID,
        query: str,
        results_count: int,
        search_duration_ms: int,
        provider: str,
        provider_metadata: dict | None = None,
    ) -> SearchAnalyticsModel:
        """
        Record one search run for a session.

        Args:
            session_id: Session the question was asked in
            query: Search query
            results_count: Vendor results (0 on failure)
            search_duration_ms: Search wall time
            provider: Search provider name
            provider_metadata: Free-form details

        Returns:
            SearchAnalyticsModel: Stored record
        """
        try:
            record = await search_analytics_crud.create(
                self.db,
                session_id=session_id,
                query=query,
                results_count=results_count,
                search_duration_ms=search_duration_ms,
                provider=provider,
                provider_metadata=provider_metadata or {},
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        logger.debug(f"{__name__}:track_search - Recorded {provider} search for session {session_id}")
        return record

    async def summary(self) -> dict:
        """
        Usage totals.

        Returns:
            dict: total_sessions, total_messages, total_searches,
            avg_search_duration_ms, avg_response_time_ms
        """
        return {
            "total_sessions": await session_crud.count(self.db),
            "total_messages": await message_crud.count(self.db),
            "total_searches": await search_analytics_crud.count(self.db),
            "avg_search_duration_ms": await search_analytics_crud.average_duration(self.db),
            "avg_response_time_ms": await message_crud.average_response_time(self.db),
        }
