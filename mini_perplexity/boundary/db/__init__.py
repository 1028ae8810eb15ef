"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin, CreatedAtMixin: Model building blocks
  - get_engine(): Sync engine for schema management
  - get_async_engine(), get_async_session_factory(), get_async_db(): Async connection management
  - SessionModel, MessageModel, MessageSourceModel, UserModel, SearchAnalyticsModel
  - session_crud, message_crud, source_crud, user_crud, search_analytics_crud

Dependencies: sqlalchemy, mini_perplexity.configs
System role: Relational storage of sessions, messages, sources, users and search runs
"""

from mini_perplexity.boundary.db.base import Base, CreatedAtMixin, TimestampMixin, UUIDMixin
from mini_perplexity.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    get_engine,
)
from mini_perplexity.boundary.db.models import (
    MessageModel,
    MessageSourceModel,
    MessageType,
    SearchAnalyticsModel,
    SessionModel,
    UserModel,
)
from mini_perplexity.boundary.db.CRUD import (
    BaseCRUD,
    message_crud,
    search_analytics_crud,
    session_crud,
    source_crud,
    user_crud,
)

__all__ = [
    # Base classes
    "Base",
    "CreatedAtMixin",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_engine",
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "SessionModel",
    "MessageModel",
    "MessageType",
    "MessageSourceModel",
    "UserModel",
    "SearchAnalyticsModel",
    # CRUD
    "BaseCRUD",
    "session_crud",
    "message_crud",
    "source_crud",
    "user_crud",
    "search_analytics_crud",
]
