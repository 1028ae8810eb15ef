"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from mini_perplexity.configs.auth import AuthSettings
from mini_perplexity.configs.base import settings_config
from mini_perplexity.configs.chat import ChatSettings
from mini_perplexity.configs.database import DatabaseSettings
from mini_perplexity.configs.generation import GenerationSettings
from mini_perplexity.configs.search import SearchSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    model_config = settings_config()

    environment: str = Field(default="development", description="Deployment name")
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    generation: GenerationSettings = Field(default_factory=GenerationSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from mini_perplexity.configs import get_settings
        settings = get_settings()
    """
    return Settings()
