"""
Database configuration settings.

Manages PostgreSQL connection parameters for SQLAlchemy. A full connection
string (POSTGRES_URL, e.g. a hosted Supabase database) overrides the
individual host/user/password fields.

Dependencies: pydantic, pydantic_settings
System role: Database connection configuration for ORM
"""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from pydantic import Field
from pydantic_settings import BaseSettings

from mini_perplexity.configs.base import settings_config


class DatabaseSettings(BaseSettings):
    """PostgreSQL database configuration."""

    model_config = settings_config("POSTGRES_")

    url: str | None = Field(
        default=None,
        description="Full connection string; takes precedence over host/port/user fields",
    )
    host: str = Field(default="localhost", description="PostgreSQL host")
    port: int = Field(default=5432, description="PostgreSQL port")
    user: str = Field(default="postgres", description="PostgreSQL user")
    password: str = Field(default="postgres", description="PostgreSQL password")
    db: str = Field(default="miniperplexity", description="PostgreSQL database name")

    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=20, description="Maximum overflow connections")
    pool_timeout: int = Field(default=30, description="Connection pool timeout in seconds")
    connect_timeout: int = Field(default=10, description="Connection establishment timeout in seconds")
    command_timeout: int = Field(default=30, description="Per-statement timeout in seconds")
    echo_sql: bool = Field(default=False, description="Echo SQL statements to logs")

    sslmode: str = Field(default="require", description="SSL mode for hosted connections")

    @property
    def is_sqlite(self) -> bool:
        """Whether the configured URL points at a SQLite database."""
        return bool(self.url) and self.url.startswith("sqlite")

    @property
    def database_url(self) -> str:
        """
        Construct synchronous connection URL (psycopg 3 driver).

        Returns:
            str: SQLAlchemy-compatible database URL
        """
        if self.url:
            if self.is_sqlite:
                return self.url.replace("sqlite+aiosqlite://", "sqlite://", 1)
            return _with_driver(self.url, "postgresql+psycopg")
        return (
            f"postgresql+psycopg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}?sslmode={self.sslmode}"
        )

    @property
    def async_database_url(self) -> str:
        """
        Construct async connection URL.

        Returns:
            str: SQLAlchemy async-compatible database URL (asyncpg uses 'ssl' param)
        """
        if self.url:
            if self.is_sqlite:
                if self.url.startswith("sqlite+aiosqlite://"):
                    return self.url
                return self.url.replace("sqlite://", "sqlite+aiosqlite://", 1)
            return _asyncpg_query(_with_driver(self.url, "postgresql+asyncpg"))
        ssl_param = "ssl=require" if self.sslmode == "require" else ""
        return (
            f"postgresql+asyncpg://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.db}?{ssl_param}"
        )


def _with_driver(url: str, scheme: str) -> str:
    """Swap the scheme of a postgres:// style URL for an explicit driver."""
    parts = urlsplit(url)
    return urlunsplit((scheme, parts.netloc, parts.path, parts.query, parts.fragment))


def _asyncpg_query(url: str) -> str:
    """Translate libpq's sslmode query parameter into asyncpg's ssl parameter."""
    parts = urlsplit(url)
    params = []
    for key, value in parse_qsl(parts.query):
        if key == "sslmode":
            if value in ("require", "verify-ca", "verify-full"):
                params.append(("ssl", "require"))
            continue
        params.append((key, value))
    return urlunsplit(
        (parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment)
    )
