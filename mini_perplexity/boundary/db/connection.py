"""
Database connection management.

Provides SQLAlchemy engines, session factories, and the FastAPI dependency
for database session injection. The async engine and session factory are
built once by the application lifespan and kept on app.state.

Dependencies: sqlalchemy, asyncpg, psycopg, mini_perplexity.configs
System role: Database connection lifecycle management
"""

from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from mini_perplexity.configs import get_settings
from mini_perplexity.configs.database import DatabaseSettings


def get_engine(db_config: DatabaseSettings | None = None) -> Engine:
    """
    Create synchronous SQLAlchemy engine (used for schema creation).

    pool_pre_ping=True verifies connections before use to detect
    stale/broken connections early.

    Args:
        db_config: Database settings, defaults to the application settings

    Returns:
        Engine: Configured SQLAlchemy engine

    Raises:
        ArgumentError: If database URL is invalid or engine creation fails
    """
    db_config = db_config or get_settings().database

    if db_config.is_sqlite:
        return create_engine(db_config.database_url, echo=db_config.echo_sql)

    return create_engine(
        db_config.database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
        connect_args={"connect_timeout": db_config.connect_timeout},
    )


def get_async_engine(db_config: DatabaseSettings | None = None) -> AsyncEngine:
    """
    Create async SQLAlchemy engine with connection pooling.

    Connection establishment and individual statements are bounded by
    asyncpg's timeout and command_timeout, pool checkout by pool_timeout.

    Args:
        db_config: Database settings, defaults to the application settings

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine

    Usage:
        engine = get_async_engine()
        async with engine.connect() as conn:
            result = await conn.execute(text("SELECT 1"))
    """
    db_config = db_config or get_settings().database

    if db_config.is_sqlite:
        return create_async_engine(db_config.async_database_url, echo=db_config.echo_sql)

    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
        connect_args={
            "timeout": db_config.connect_timeout,
            "command_timeout": db_config.command_timeout,
        },
    )


def get_async_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Create async session factory bound to an engine.

    autoflush=False and expire_on_commit=False give explicit transaction
    control and keep returned rows readable after commit.

    Args:
        engine: Async engine built at startup

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory(engine)
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency for async database session injection with automatic cleanup.

    Opens one session per request from the factory stored on app.state
    and closes it after the route completes, even if exceptions occur.

    Yields:
        AsyncSession: Async SQLAlchemy database session (scoped to request lifetime)
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        yield session
