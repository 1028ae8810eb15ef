"""
Fixtures for HTTP endpoint tests.

Provides: Application with every router under /api, async HTTP clients
with the database dependency bound to the in-memory test session
Dependencies: fastapi, httpx
System role: API test infrastructure
"""

import httpx
import pytest
from fastapi import FastAPI

from mini_perplexity.api.routers import (
    analytics_router,
    auth_router,
    chat_router,
    health_router,
    messages_router,
    sessions_router,
    sources_router,
)
from mini_perplexity.boundary.db import get_async_db


@pytest.fixture
def app() -> FastAPI:
    """Routers mounted like create_app() does, without lifespan or middleware."""
    app = FastAPI()
    for router in (
        health_router,
        sessions_router,
        messages_router,
        sources_router,
        chat_router,
        auth_router,
        analytics_router,
    ):
        app.include_router(router, prefix="/api")
    return app


@pytest.fixture
async def client(app):
    """Async client bound to the app (dependencies overridden per test)."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def db_app(app, test_async_db) -> FastAPI:
    """App whose request-scoped database session is the in-memory test session."""

    async def override_get_async_db():
        yield test_async_db

    app.dependency_overrides[get_async_db] = override_get_async_db
    return app
