"""
Offline search results and fallback suggestions.

MockSearchClient serves canned results when no Tavily key is configured.
The fallback builders produce the suggestion links shown when a real
search fails or finds nothing.

Dependencies: None beyond the search schema
System role: Search degradation paths
"""

import re
from urllib.parse import quote

from mini_perplexity.core.search.search_schema import SearchResult

_AI_PATTERN = re.compile(r"\bai\b|artificial intelligence", re.IGNORECASE)
_TECH_PATTERN = re.compile(r"\btech\b|technology", re.IGNORECASE)


def _google_url(query: str) -> str:
    return f"https://www.google.com/search?q={quote(query, safe='')}"


def _wikipedia_url(query: str) -> str:
    return f"https://en.wikipedia.org/wiki/{quote(query, safe='')}"


class MockSearchClient:
    """Keyword-driven canned results for development without an API key."""

    provider = "mock"

    def search(self, query: str) -> list[SearchResult]:
        if _AI_PATTERN.search(query):
            return [
                SearchResult(
                    title="OpenAI - Artificial Intelligence Research",
                    url="https://openai.com",
                    snippet=(
                        "OpenAI is an AI research and deployment company. Our mission is to "
                        "ensure that artificial general intelligence benefits all of humanity."
                    ),
                    score=0.95,
                ),
                SearchResult(
                    title="Google AI - Machine Learning Research",
                    url="https://ai.google",
                    snippet=(
                        "Google AI is advancing the state of the art in machine learning "
                        "and making AI helpful for everyone."
                    ),
                    score=0.90,
                ),
            ]
        if _TECH_PATTERN.search(query):
            return [
                SearchResult(
                    title="TechCrunch - Latest Technology News",
                    url="https://techcrunch.com",
                    snippet=(
                        "TechCrunch is a leading technology media property, dedicated to "
                        "profiling startups, reviewing new Internet products, and breaking tech news."
                    ),
                    score=0.92,
                ),
                SearchResult(
                    title="Wired - Technology, Science, Culture",
                    url="https://wired.com",
                    snippet=(
                        "WIRED is where tomorrow is realized. It is the essential source of "
                        "information and ideas that make sense of a world in constant transformation."
                    ),
                    score=0.88,
                ),
            ]
        return [
            SearchResult(
                title=f"Wikipedia - {query}",
                url=_wikipedia_url(query),
                snippet=f'Wikipedia article about "{query}" with comprehensive information from reliable sources.',
                score=0.85,
            ),
            SearchResult(
                title=f"Latest News about {query}",
                url=f"https://news.google.com/search?q={quote(query, safe='')}",
                snippet=f'Recent news articles and updates about "{query}" from various news sources.',
                score=0.80,
            ),
        ]

    async def asearch(self, query: str) -> list[SearchResult]:
        return self.search(query)


def build_empty_fallback(query: str) -> list[SearchResult]:
    """Single suggestion shown when the search found nothing."""
    return [
        SearchResult(
            title=f'No specific results found for "{query}"',
            url=_google_url(query),
            snippet=(
                "No specific results were found. You can try searching on Google "
                f'for more information about "{query}".'
            ),
            score=0.3,
        )
    ]


def build_error_fallback(query: str) -> list[SearchResult]:
    """Suggestions shown when the search vendor failed."""
    return [
        SearchResult(
            title=f'Search "{query}" on Google',
            url=_google_url(query),
            snippet=(
                f'I encountered an issue while searching. You can search for "{query}" '
                "on Google for the latest information."
            ),
            score=0.4,
        ),
        SearchResult(
            title=f"Wikipedia - {query}",
            url=_wikipedia_url(query),
            snippet=f'Check Wikipedia for comprehensive information about "{query}".',
            score=0.3,
        ),
    ]
