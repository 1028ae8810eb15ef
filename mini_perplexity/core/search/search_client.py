"""
Tavily web search client.

Calls the Tavily search API over HTTP. Transient network failures are
retried; anything else surfaces as VendorUnavailableError so callers can
degrade to fallback suggestions.

Dependencies: requests, tenacity, fastapi.concurrency
System role: Search vendor boundary
"""

import logging
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

import pydantic
import requests
from fastapi.concurrency import run_in_threadpool
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from mini_perplexity.configs.search import SearchSettings
from mini_perplexity.core.exceptions import VendorUnavailableError
from mini_perplexity.core.search.search_schema import SearchResult

logger = logging.getLogger(__name__)

DEFAULT_SNIPPET = "No content available"
DEFAULT_SCORE = 0.5

_DATETIME = pydantic.TypeAdapter(datetime)


def _parse_published_date(value: Any) -> datetime | None:
    """ISO 8601 or RFC 2822 date, None when missing or unreadable."""
    if not value:
        return None
    try:
        return _DATETIME.validate_python(value)
    except pydantic.ValidationError:
        pass
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None


class TavilySearchClient:
    """
    Search client for the Tavily API.

    The HTTP call is blocking and is executed in the threadpool from
    asearch() so it does not stall the event loop.
    """

    provider = "tavily"

    def __init__(self, settings: SearchSettings, session: requests.Session | None = None) -> None:
        """
        Initialize client.

        Args:
            settings: Search configuration (must carry an API key)
            session: Optional requests session, injected in tests
        """
        if not settings.api_key:
            raise ValueError("TavilySearchClient requires TAVILY_API_KEY")
        self._settings = settings
        self._http = session or requests.Session()

    def _build_payload(self, query: str) -> dict[str, Any]:
        return {
            "query": query,
            "search_depth": self._settings.search_depth,
            "include_answer": True,
            "include_raw_content": True,
            "max_results": self._settings.max_results,
            "include_domains": self._settings.include_domains,
            "exclude_domains": self._settings.exclude_domains,
            "include_images": False,
            "days": self._settings.days,
        }

    def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._http.post(
            self._settings.api_url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self._settings.api_key}",
            },
            timeout=self._settings.timeout_seconds,
        )
        response.raise_for_status()
        return response.json()

    def search(self, query: str) -> list[SearchResult]:
        """
        Run one web search.

        Args:
            query: User question

        Returns:
            list[SearchResult]: Results in vendor relevance order (may be empty)

        Raises:
            VendorUnavailableError: If the vendor errors, times out or is unreachable
        """
        retrying = Retrying(
            retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
            stop=stop_after_attempt(self._settings.max_attempts),
            wait=wait_exponential_jitter(initial=0.5, max=4, jitter=0.5),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:search - Retry {retry_state.attempt_number}/"
                f"{self._settings.max_attempts} after network error"
            ),
            reraise=True,
        )
        try:
            data = retrying(self._post, self._build_payload(query))
        except requests.RequestException as e:
            logger.error(f"{__name__}:search - Tavily request failed: {type(e).__name__}: {e}")
            raise VendorUnavailableError(
                "Search vendor unavailable",
                vendor=self.provider,
                details={"error": type(e).__name__},
            ) from e
        except ValueError as e:
            # Non-JSON body
            raise VendorUnavailableError(
                "Search vendor returned an unreadable response",
                vendor=self.provider,
            ) from e

        try:
            results = [self._to_result(item) for item in data.get("results") or []]
        except (pydantic.ValidationError, AttributeError, TypeError) as e:
            raise VendorUnavailableError(
                "Search vendor returned malformed results",
                vendor=self.provider,
            ) from e
        logger.info(f"{__name__}:search - Tavily returned {len(results)} results")
        return results

    async def asearch(self, query: str) -> list[SearchResult]:
        """Async wrapper running search() in the threadpool."""
        return await run_in_threadpool(self.search, query)

    @staticmethod
    def _to_result(item: dict[str, Any]) -> SearchResult:
        return SearchResult(
            title=item.get("title") or item.get("url") or "",
            url=item.get("url") or "",
            snippet=item.get("content") or item.get("snippet") or DEFAULT_SNIPPET,
            score=item.get("score") or DEFAULT_SCORE,
            published_date=_parse_published_date(item.get("published_date")),
        )
