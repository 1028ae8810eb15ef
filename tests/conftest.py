"""
Fixtures shared by the whole suite.

Database tests run against a private in-memory SQLite database per test.
StaticPool keeps the single aiosqlite connection alive for the engine's
lifetime, otherwise every checkout would see an empty database.

Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from mini_perplexity.boundary.db import models  # noqa: F401  (registers tables)
from mini_perplexity.boundary.db.base import Base

MEMORY_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def test_engine():
    """Engine over a fresh in-memory schema, disposed after the test."""
    engine = create_async_engine(
        MEMORY_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_async_db(test_engine):
    """
    AsyncSession configured like the application's session factory.

    Services commit through it; whatever is still pending at the end is
    rolled back.
    """
    factory = async_sessionmaker(test_engine, autoflush=False, expire_on_commit=False)
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_chat_service():
    """ChatService stand-in for router tests; every method is an AsyncMock."""
    service = AsyncMock()
    service.db = MagicMock()
    return service


@pytest.fixture
def session_id():
    return uuid.uuid4()


@pytest.fixture
def message_id():
    return uuid.uuid4()
