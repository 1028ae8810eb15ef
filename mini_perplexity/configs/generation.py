"""
Answer generation configuration settings.

Settings for the Google Gemini chat model used to write answers.

Dependencies: pydantic_settings
System role: Generation vendor configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from mini_perplexity.configs.base import settings_config


class GenerationSettings(BaseSettings):
    """Gemini configuration."""

    model_config = settings_config("GEMINI_")

    api_key: str | None = Field(default=None, description="Google Generative Language API key")
    model: str = Field(default="gemini-2.0-flash", description="Gemini model identifier")
    temperature: float = Field(default=0.3, description="Sampling temperature")
    timeout_seconds: float = Field(default=30.0, description="Timeout for one generation call")
