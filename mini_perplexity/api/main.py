"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, mini_perplexity.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mini_perplexity.application.services.auth_service import build_password_context
from mini_perplexity.boundary.db import get_async_engine, get_async_session_factory
from mini_perplexity.configs import get_settings
from mini_perplexity.core.search.chat_pipeline import build_chat_pipeline
from mini_perplexity.observability import configure_logging
from mini_perplexity.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    analytics_router,
    auth_router,
    chat_router,
    health_router,
    messages_router,
    sessions_router,
    sources_router,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the process-wide collaborators once at startup and stores them
    on app.state; disposes the engine on shutdown.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    engine = get_async_engine(settings.database)
    app.state.engine = engine
    app.state.session_factory = get_async_session_factory(engine)
    app.state.chat_pipeline = build_chat_pipeline(settings)
    app.state.pwd_context = build_password_context(settings.auth)
    logger.info(
        f"{__name__}:lifespan - Started ({settings.environment}) with search provider "
        f"{app.state.chat_pipeline.provider}"
    )

    yield

    await engine.dispose()
    logger.info(f"{__name__}:lifespan - Database engine disposed")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()

    app = FastAPI(
        title="Mini Perplexity API",
        description="Web search answers with cited sources and persisted chat sessions",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.include_router(health_router, prefix="/api")
    app.include_router(sessions_router, prefix="/api")
    app.include_router(messages_router, prefix="/api")
    app.include_router(sources_router, prefix="/api")
    app.include_router(chat_router, prefix="/api")
    app.include_router(auth_router, prefix="/api")
    app.include_router(analytics_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "mini_perplexity.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
