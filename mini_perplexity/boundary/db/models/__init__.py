"""
Database models package.

Exports:
  - SessionModel: Conversation
  - MessageModel, MessageType: Ordered message and its roles
  - MessageSourceModel: Citation attached to a message
  - UserModel: Registered account
  - SearchAnalyticsModel: Search run record

Dependencies: sqlalchemy, mini_perplexity.boundary.db.base
System role: Database model definitions for domain entities
"""

from mini_perplexity.boundary.db.models.message_model import MessageModel, MessageType
from mini_perplexity.boundary.db.models.search_analytics_model import SearchAnalyticsModel
from mini_perplexity.boundary.db.models.session_model import SessionModel
from mini_perplexity.boundary.db.models.source_model import MessageSourceModel
from mini_perplexity.boundary.db.models.user_model import UserModel

__all__ = [
    "SessionModel",
    "MessageModel",
    "MessageType",
    "MessageSourceModel",
    "UserModel",
    "SearchAnalyticsModel",
]
