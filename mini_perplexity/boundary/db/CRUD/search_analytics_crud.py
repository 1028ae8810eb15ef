"""
Search analytics CRUD operations.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.models
System role: Search run persistence and aggregates
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.boundary.db.CRUD.base_crud import BaseCRUD
from mini_perplexity.boundary.db.models.search_analytics_model import SearchAnalyticsModel


class SearchAnalyticsCRUD(BaseCRUD[SearchAnalyticsModel]):
    """CRUD operations for SearchAnalyticsModel."""

    def __init__(self) -> None:
        """Initialize SearchAnalyticsCRUD with SearchAnalyticsModel."""
        super().__init__(SearchAnalyticsModel)

    async def average_duration(self, session: AsyncSession) -> float | None:
        """Mean search_duration_ms over all recorded searches."""
        result = await session.execute(select(func.avg(SearchAnalyticsModel.search_duration_ms)))
        value = result.scalar_one_or_none()
        return float(value) if value is not None else None


search_analytics_crud = SearchAnalyticsCRUD()
