"""
Web search and answer generation.

Dependencies: requests, tenacity, langchain_core, langchain_google_genai
System role: Question answering pipeline behind POST /api/chat
"""

from mini_perplexity.core.search.chat_pipeline import ChatAnswer, ChatPipeline, build_chat_pipeline
from mini_perplexity.core.search.search_schema import SearchResult

__all__ = ["ChatAnswer", "ChatPipeline", "SearchResult", "build_chat_pipeline"]
