"""
Search + generation pipeline behind POST /api/chat.

Masking contract: callers never see a vendor error. A failed search
degrades to fallback suggestion links, an empty search to a single
"no specific results" link, and a failed generation to an apology string
with no sources. The `error` field of ChatAnswer says what was masked.

Dependencies: mini_perplexity.core.search
System role: Question answering orchestration
"""

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from mini_perplexity.configs.settings import Settings
from mini_perplexity.core.exceptions import VendorUnavailableError
from mini_perplexity.core.search.answer_generator import NOT_CONFIGURED, GeminiAnswerGenerator
from mini_perplexity.core.search.mock_search import (
    MockSearchClient,
    build_empty_fallback,
    build_error_fallback,
)
from mini_perplexity.core.search.search_client import TavilySearchClient
from mini_perplexity.core.search.search_schema import SearchClient, SearchResult

logger = logging.getLogger(__name__)

NOT_CONFIGURED_REPLY = (
    "I apologize, but the AI service is not properly configured. "
    "Please check the API key configuration."
)
FAILURE_REPLY = (
    "I apologize, but I encountered an error while processing your request. "
    "Please try again."
)


@dataclass
class ChatAnswer:
    """Outcome of one question, always renderable."""

    response: str
    sources: list[SearchResult] = field(default_factory=list)
    provider: str = ""
    search_duration_ms: int = 0
    results_count: int = 0
    error: str | None = None


class ChatPipeline:
    """Search the web, then write an answer grounded on the results."""

    def __init__(self, search_client: SearchClient, generator: GeminiAnswerGenerator) -> None:
        self._search_client = search_client
        self._generator = generator

    @property
    def provider(self) -> str:
        return self._search_client.provider

    async def _search(self, question: str) -> tuple[list[SearchResult], int, int]:
        started = time.perf_counter()
        try:
            results = await self._search_client.asearch(question)
        except VendorUnavailableError as e:
            logger.warning(f"{__name__}:_search - Search failed, serving fallback: {e}")
            results = build_error_fallback(question)
            real_count = 0
        else:
            real_count = len(results)
            if not results:
                results = build_empty_fallback(question)
        duration_ms = int((time.perf_counter() - started) * 1000)
        return results, real_count, duration_ms

    async def answer(
        self,
        question: str,
        history: Sequence[tuple[str, str]] = (),
    ) -> ChatAnswer:
        """
        Answer a question.

        Args:
            question: Non-blank user question
            history: Prior (role, content) turns, oldest first

        Returns:
            ChatAnswer: Response text plus the sources shown with it
        """
        results, real_count, duration_ms = await self._search(question)

        try:
            text = await self._generator.agenerate(question, results, history)
        except VendorUnavailableError as e:
            not_configured = e.details.get("reason") == NOT_CONFIGURED
            logger.error(f"{__name__}:answer - Generation masked: {e}")
            return ChatAnswer(
                response=NOT_CONFIGURED_REPLY if not_configured else FAILURE_REPLY,
                sources=[],
                provider=self.provider,
                search_duration_ms=duration_ms,
                results_count=real_count,
                error="Generation service not configured" if not_configured else "Internal server error",
            )

        return ChatAnswer(
            response=text,
            sources=results,
            provider=self.provider,
            search_duration_ms=duration_ms,
            results_count=real_count,
        )


def build_chat_pipeline(settings: Settings) -> ChatPipeline:
    """
    Build the pipeline for the configured vendors.

    Args:
        settings: Application settings

    Returns:
        ChatPipeline: Tavily-backed when a key is set, mock search otherwise
    """
    if settings.search.api_key:
        search_client: SearchClient = TavilySearchClient(settings.search)
    else:
        logger.warning(f"{__name__}:build_chat_pipeline - TAVILY_API_KEY not set, using mock search")
        search_client = MockSearchClient()
    generator = GeminiAnswerGenerator(settings.generation)
    return ChatPipeline(search_client, generator)
