"""
Liveness and storage checks.

Routes: GET /health, GET /health/db

/health never touches storage or the vendors; it reports which search
provider the process was started with (tavily or mock) when the app was
built through the lifespan. /health/db runs SELECT 1 and maps an
unreachable database to 503 like every other storage failure.

Dependencies: fastapi, sqlalchemy
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.boundary.db import get_async_db
from mini_perplexity.models.common import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse, response_model_exclude_none=True)
async def health_check(request: Request) -> HealthResponse:
    pipeline = getattr(request.app.state, "chat_pipeline", None)
    return HealthResponse(
        status="healthy",
        message="Server Healthy",
        search_provider=pipeline.provider if pipeline is not None else None,
    )


@router.get("/db", response_model=HealthResponse, response_model_exclude_none=True)
@handle_api_errors
async def health_check_db(db: AsyncSession = Depends(get_async_db)) -> HealthResponse:
    """Round trip to the database; 503 when it cannot be reached."""
    await db.execute(text("SELECT 1"))
    return HealthResponse(status="healthy", message="Database connection OK")
