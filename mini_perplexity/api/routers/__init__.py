"""API routers."""

from .analytics import router as analytics_router
from .auth import router as auth_router
from .chat import router as chat_router
from .health import router as health_router
from .messages import router as messages_router
from .sessions import router as sessions_router
from .sources import router as sources_router

__all__ = [
    "analytics_router",
    "auth_router",
    "chat_router",
    "health_router",
    "messages_router",
    "sessions_router",
    "sources_router",
]
