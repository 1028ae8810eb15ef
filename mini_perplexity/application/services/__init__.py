"""
Application services.

Exports:
  - ChatService: Session, message and source persistence facade
  - AuthService: Signup and login
  - AnalyticsService: Search tracking and usage totals
"""

from mini_perplexity.application.services.analytics_service import AnalyticsService
from mini_perplexity.application.services.auth_service import AuthService
from mini_perplexity.application.services.chat_service import ChatService

__all__ = ["ChatService", "AuthService", "AnalyticsService"]
