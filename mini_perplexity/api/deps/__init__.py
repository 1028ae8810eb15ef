"""FastAPI dependency providers."""

from mini_perplexity.api.deps.dependencies import (
    get_analytics_service,
    get_auth_service,
    get_chat_pipeline,
    get_chat_service,
)

__all__ = [
    "get_chat_pipeline",
    "get_chat_service",
    "get_auth_service",
    "get_analytics_service",
]
