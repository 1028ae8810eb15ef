"""
CRUD operations package.

Exports:
  - BaseCRUD: Generic CRUD base class
  - SessionCRUD, MessageCRUD, SourceCRUD, UserCRUD, SearchAnalyticsCRUD
  - session_crud, message_crud, source_crud, user_crud, search_analytics_crud:
    Module-level singletons

Dependencies: sqlalchemy, mini_perplexity.boundary.db.models
System role: Database operation abstraction layer
"""

from mini_perplexity.boundary.db.CRUD.base_crud import BaseCRUD
from mini_perplexity.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from mini_perplexity.boundary.db.CRUD.search_analytics_crud import (
    SearchAnalyticsCRUD,
    search_analytics_crud,
)
from mini_perplexity.boundary.db.CRUD.session_crud import SessionCRUD, session_crud
from mini_perplexity.boundary.db.CRUD.source_crud import SourceCRUD, source_crud
from mini_perplexity.boundary.db.CRUD.user_crud import UserCRUD, user_crud

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "MessageCRUD",
    "SourceCRUD",
    "UserCRUD",
    "SearchAnalyticsCRUD",
    "session_crud",
    "message_crud",
    "source_crud",
    "user_crud",
    "search_analytics_crud",
]
