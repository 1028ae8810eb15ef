"""
Chat persistence configuration settings.

Dependencies: pydantic_settings
System role: Tunables for session/message persistence
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from mini_perplexity.configs.base import settings_config


class ChatSettings(BaseSettings):
    """Session and message persistence tunables."""

    model_config = settings_config("CHAT_")

    default_title: str = Field(default="New Chat", description="Title of untitled sessions")
    title_max_length: int = Field(default=50, description="Characters kept from the first question")
    recent_sessions_limit: int = Field(default=20, description="Page size of the session list")
    max_sessions_limit: int = Field(default=100, description="Upper bound for requested page size")
    context_window_size: int = Field(default=10, description="Messages fed back to the model")
    append_max_attempts: int = Field(
        default=5,
        description="Attempts at claiming a sequence number before giving up",
    )
