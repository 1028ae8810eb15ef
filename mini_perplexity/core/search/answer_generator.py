"""
Gemini answer generator.

Writes a search-grounded answer with ChatGoogleGenerativeAI. Every failure
(missing key, timeout, vendor error) surfaces as VendorUnavailableError.

Dependencies: langchain_google_genai, langchain_core
System role: Generation vendor boundary
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from mini_perplexity.configs.generation import GenerationSettings
from mini_perplexity.core.exceptions import VendorUnavailableError
from mini_perplexity.core.search.chat_prompt import (
    CHAT_PROMPT,
    format_chat_history,
    format_search_context,
)
from mini_perplexity.core.search.search_schema import SearchResult

logger = logging.getLogger(__name__)

EMPTY_ANSWER = "I apologize, but I couldn't generate a response at this time."
NOT_CONFIGURED = "not_configured"


def _message_text(message: Any) -> str:
    """Extract plain text from a chat model reply (str or content blocks)."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type", "text") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


class GeminiAnswerGenerator:
    """
    Search-grounded answer writer.

    The chat model is built once at startup. Without an API key the
    generator still constructs, and every call reports the vendor as
    not configured.
    """

    vendor = "gemini"

    def __init__(self, settings: GenerationSettings, model: BaseChatModel | None = None) -> None:
        """
        Initialize generator.

        Args:
            settings: Generation configuration
            model: Optional pre-built chat model, injected in tests
        """
        self._timeout = settings.timeout_seconds
        self._model_name = settings.model
        if model is None and settings.api_key:
            model = ChatGoogleGenerativeAI(
                model=settings.model,
                temperature=settings.temperature,
                google_api_key=settings.api_key,
            )
        self._chain = CHAT_PROMPT | model if model is not None else None

    @property
    def model_name(self) -> str:
        return self._model_name

    async def agenerate(
        self,
        question: str,
        results: Sequence[SearchResult],
        history: Sequence[tuple[str, str]] = (),
    ) -> str:
        """
        Write an answer to the question from the search results.

        Args:
            question: User question
            results: Search results used as context
            history: Prior (role, content) turns, oldest first

        Returns:
            str: Answer text

        Raises:
            VendorUnavailableError: If the model is not configured, times out or fails
        """
        if self._chain is None:
            raise VendorUnavailableError(
                "Gemini API key not configured",
                vendor=self.vendor,
                details={"reason": NOT_CONFIGURED},
            )

        inputs = {
            "chat_history": format_chat_history(history),
            "context": format_search_context(results),
            "question": question,
        }
        try:
            reply = await asyncio.wait_for(self._chain.ainvoke(inputs), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:agenerate - Gemini timed out after {self._timeout}s")
            raise VendorUnavailableError(
                "Generation vendor timed out",
                vendor=self.vendor,
                details={"reason": "timeout"},
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:agenerate - Gemini call failed: {type(e).__name__}: {e}")
            raise VendorUnavailableError(
                "Generation vendor failed",
                vendor=self.vendor,
                details={"reason": type(e).__name__},
            ) from e

        return _message_text(reply).strip() or EMPTY_ANSWER
