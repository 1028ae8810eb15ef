"""
Authentication configuration settings.

Dependencies: pydantic_settings
System role: Credential policy configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from mini_perplexity.configs.base import settings_config


class AuthSettings(BaseSettings):
    """Credential policy."""

    model_config = settings_config("AUTH_")

    password_min_length: int = Field(default=6, description="Minimum password length")
    bcrypt_rounds: int = Field(default=10, description="bcrypt cost factor")
