"""
Dependency injection container.

Factory functions for FastAPI dependencies. Long-lived collaborators
(session factory, chat pipeline, password context) are built once by the
application lifespan and read from app.state; services are constructed
per request around the request's database session.

Dependencies: mini_perplexity.configs, mini_perplexity.application, mini_perplexity.boundary
System role: DI container for service injection
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.application.services import AnalyticsService, AuthService, ChatService
from mini_perplexity.boundary.db import get_async_db
from mini_perplexity.configs import Settings, get_settings
from mini_perplexity.core.search.chat_pipeline import ChatPipeline


def get_chat_pipeline(request: Request) -> ChatPipeline:
    """
    Get the search + generation pipeline built at startup.

    Returns:
        ChatPipeline: Pipeline stored on app.state
    """
    return request.app.state.chat_pipeline


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
) -> ChatService:
    """
    Get chat service instance.

    Args:
        db: Request-scoped async database session
        settings: Application settings

    Returns:
        ChatService: Chat persistence facade
    """
    return ChatService(db=db, settings=settings.chat)


def get_auth_service(
    request: Request,
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings),
) -> AuthService:
    """
    Get auth service instance.

    Returns:
        AuthService: Signup/login service sharing the startup password context
    """
    return AuthService(db=db, settings=settings.auth, pwd_context=request.app.state.pwd_context)


def get_analytics_service(db: AsyncSession = Depends(get_async_db)) -> AnalyticsService:
    """
    Get analytics service instance.

    Returns:
        AnalyticsService: Search tracking service
    """
    return AnalyticsService(db=db)
