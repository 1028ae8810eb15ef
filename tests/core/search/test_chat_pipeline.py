"""
Test suite for ChatPipeline.

Search and generation are faked so each masking path can be forced.

System role: Verification of question answering orchestration
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from mini_perplexity.configs.generation import GenerationSettings
from mini_perplexity.configs.search import SearchSettings
from mini_perplexity.configs.settings import Settings
from mini_perplexity.core.exceptions import VendorUnavailableError
from mini_perplexity.core.search.answer_generator import NOT_CONFIGURED, GeminiAnswerGenerator
from mini_perplexity.core.search.chat_pipeline import (
    FAILURE_REPLY,
    NOT_CONFIGURED_REPLY,
    ChatPipeline,
    build_chat_pipeline,
)
from mini_perplexity.core.search.mock_search import MockSearchClient
from mini_perplexity.core.search.search_client import TavilySearchClient
from mini_perplexity.core.search.search_schema import SearchResult

RESULTS = [
    SearchResult(title="A", url="https://a.example", snippet="first", score=0.9),
    SearchResult(title="B", url="https://b.example", snippet="second", score=0.8),
]


class FakeSearchClient:
    """Search client returning fixed results or raising."""

    provider = "fake"

    def __init__(self, results=None, error: Exception | None = None) -> None:
        self.results = results or []
        self.error = error
        self.queries = []

    async def asearch(self, query: str) -> list[SearchResult]:
        self.queries.append(query)
        if self.error:
            raise self.error
        return list(self.results)


def _generator(**behaviour) -> MagicMock:
    generator = MagicMock(spec=GeminiAnswerGenerator)
    generator.agenerate = AsyncMock(**behaviour)
    return generator


class TestChatPipelineAnswer:
    """Test suite for ChatPipeline.answer."""

    @pytest.mark.asyncio
    async def test_answer_should_return_text_and_search_results(self) -> None:
        # Arrange
        search = FakeSearchClient(results=RESULTS)
        generator = _generator(return_value="Grounded answer")
        pipeline = ChatPipeline(search, generator)
        history = [("user", "earlier"), ("assistant", "reply")]

        # Act
        answer = await pipeline.answer("What now?", history=history)

        # Assert
        assert answer.response == "Grounded answer"
        assert answer.sources == RESULTS
        assert answer.results_count == 2
        assert answer.provider == "fake"
        assert answer.error is None
        assert answer.search_duration_ms >= 0
        generator.agenerate.assert_awaited_once_with("What now?", RESULTS, history)

    @pytest.mark.asyncio
    async def test_search_failure_should_fall_back_to_suggestion_links(self) -> None:
        # Arrange
        search = FakeSearchClient(error=VendorUnavailableError("down", vendor="tavily"))
        generator = _generator(return_value="Answer from fallback")
        pipeline = ChatPipeline(search, generator)

        # Act
        answer = await pipeline.answer("quantum dots")

        # Assert
        assert answer.response == "Answer from fallback"
        assert [s.title for s in answer.sources] == [
            'Search "quantum dots" on Google',
            "Wikipedia - quantum dots",
        ]
        assert answer.results_count == 0
        assert answer.error is None

    @pytest.mark.asyncio
    async def test_empty_search_should_fall_back_to_single_link(self) -> None:
        # Arrange
        pipeline = ChatPipeline(FakeSearchClient(results=[]), _generator(return_value="Answer"))

        # Act
        answer = await pipeline.answer("obscure thing")

        # Assert
        assert [s.title for s in answer.sources] == ['No specific results found for "obscure thing"']
        assert answer.results_count == 0

    @pytest.mark.asyncio
    async def test_unconfigured_generation_should_mask_with_apology(self) -> None:
        # Arrange
        error = VendorUnavailableError("no key", vendor="gemini", details={"reason": NOT_CONFIGURED})
        pipeline = ChatPipeline(FakeSearchClient(results=RESULTS), _generator(side_effect=error))

        # Act
        answer = await pipeline.answer("question")

        # Assert
        assert answer.response == NOT_CONFIGURED_REPLY
        assert answer.sources == []
        assert answer.error == "Generation service not configured"
        assert answer.results_count == 2

    @pytest.mark.asyncio
    async def test_failed_generation_should_mask_with_apology(self) -> None:
        # Arrange
        error = VendorUnavailableError("boom", vendor="gemini", details={"reason": "timeout"})
        pipeline = ChatPipeline(FakeSearchClient(results=RESULTS), _generator(side_effect=error))

        # Act
        answer = await pipeline.answer("question")

        # Assert
        assert answer.response == FAILURE_REPLY
        assert answer.sources == []
        assert answer.error == "Internal server error"

    @pytest.mark.asyncio
    async def test_mock_search_without_gemini_key_should_still_answer(self) -> None:
        # Arrange
        pipeline = ChatPipeline(
            MockSearchClient(),
            GeminiAnswerGenerator(GenerationSettings(api_key=None)),
        )

        # Act
        answer = await pipeline.answer("What is AI?")

        # Assert
        assert answer.response == NOT_CONFIGURED_REPLY
        assert answer.sources == []
        assert answer.provider == "mock"
        assert answer.results_count == 2


class TestBuildChatPipeline:
    """Test suite for vendor selection."""

    def test_without_tavily_key_should_use_mock_search(self) -> None:
        settings = Settings(
            search=SearchSettings(api_key=None),
            generation=GenerationSettings(api_key=None),
        )
        pipeline = build_chat_pipeline(settings)
        assert pipeline.provider == MockSearchClient.provider

    def test_with_tavily_key_should_use_tavily(self) -> None:
        settings = Settings(
            search=SearchSettings(api_key="tvly-test"),
            generation=GenerationSettings(api_key=None),
        )
        pipeline = build_chat_pipeline(settings)
        assert pipeline.provider == TavilySearchClient.provider
