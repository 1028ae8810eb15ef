"""
Web search configuration settings.

Settings for the Tavily search API. Without an API key the application
serves canned mock results instead of calling the vendor.

Dependencies: pydantic_settings
System role: Search vendor configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from mini_perplexity.configs.base import settings_config


class SearchSettings(BaseSettings):
    """Tavily search configuration."""

    model_config = settings_config("TAVILY_")

    api_key: str | None = Field(default=None, description="Tavily API key (mock search when unset)")
    api_url: str = Field(
        default="https://api.tavily.com/search",
        description="Tavily search endpoint",
    )
    max_results: int = Field(default=6, description="Maximum results per search")
    search_depth: str = Field(default="advanced", description="Tavily search depth")
    days: int = Field(default=30, description="Only return content from the last N days")
    include_domains: list[str] = Field(
        default=[
            "reuters.com",
            "bbc.com",
            "cnn.com",
            "npr.org",
            "apnews.com",
            "techcrunch.com",
            "theverge.com",
        ],
        description="Domains to prefer",
    )
    exclude_domains: list[str] = Field(
        default=["pinterest.com", "instagram.com", "facebook.com", "twitter.com"],
        description="Domains to exclude",
    )
    timeout_seconds: float = Field(default=10.0, description="HTTP timeout for one search call")
    max_attempts: int = Field(default=2, description="Attempts for transient network failures")
