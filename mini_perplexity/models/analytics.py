"""
Analytics schemas.

Dependencies: pydantic
System role: Usage reporting API contracts
"""

from pydantic import BaseModel


class AnalyticsSummaryResponse(BaseModel):
    """Usage totals across all sessions."""

    total_sessions: int
    total_messages: int
    total_searches: int
    avg_search_duration_ms: float | None = None
    avg_response_time_ms: float | None = None
