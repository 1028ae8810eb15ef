"""
Analytics API endpoints.

Routes: GET /analytics/summary

Dependencies: mini_perplexity.application.services.analytics_service
System role: Usage reporting HTTP API
"""

from fastapi import APIRouter, Depends

from mini_perplexity.api.deps import get_analytics_service
from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.application.services.analytics_service import AnalyticsService
from mini_perplexity.models.analytics import AnalyticsSummaryResponse

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/summary", response_model=AnalyticsSummaryResponse)
@handle_api_errors
async def summary(
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> AnalyticsSummaryResponse:
    """Usage totals across sessions, messages and searches."""
    return AnalyticsSummaryResponse(**await analytics.summary())
