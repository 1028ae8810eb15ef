"""
Source normalization.

Maps loosely shaped citation payloads (search vendor results, client
echoes of them) onto the canonical record stored in message_sources.
Every derivation is total: any RawSource yields a NormalizedSource.

Dependencies: pydantic
System role: Citation normalization business logic
"""

from datetime import datetime
from typing import Any
from urllib.parse import urlsplit

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

DEFAULT_LANGUAGE = "en"


class RawSource(BaseModel):
    """Citation as received from a vendor or client; every field optional."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    url: str | None = None
    snippet: str | None = Field(default=None, validation_alias=AliasChoices("snippet", "content"))
    domain: str | None = Field(default=None, max_length=255)
    favicon_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("favicon_url", "favicon"),
    )
    published_date: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("published_date", "publishedDate"),
    )
    relevance_score: float | None = Field(
        default=None,
        validation_alias=AliasChoices("relevance_score", "score"),
    )
    content_type: str | None = Field(default=None, max_length=50)
    word_count: int | None = Field(default=None, ge=0, le=2**31 - 1)
    language: str | None = Field(default=None, max_length=10)
    metadata: dict[str, Any] = Field(default_factory=dict)


class NormalizedSource(BaseModel):
    """Canonical citation ready for insertion."""

    title: str
    url: str
    snippet: str
    domain: str
    favicon_url: str
    display_order: int
    published_date: datetime | None = None
    relevance_score: float | None = None
    content_type: str | None = None
    word_count: int | None = None
    language: str = DEFAULT_LANGUAGE
    metadata: dict[str, Any] = Field(default_factory=dict)


def derive_domain(url: str | None) -> str:
    """
    Hostname of a URL, or "" when it has none.

    Args:
        url: Absolute URL

    Returns:
        str: Lowercase hostname without port
    """
    if not url:
        return ""
    try:
        return urlsplit(url).hostname or ""
    except ValueError:
        return ""


def derive_favicon_url(url: str | None) -> str:
    """
    Conventional favicon location for a URL's origin.

    Args:
        url: Absolute URL

    Returns:
        str: "{scheme}://{netloc}/favicon.ico", or "" without a host
    """
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        return ""
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}/favicon.ico"


def normalize_source(raw: RawSource, display_order: int) -> NormalizedSource:
    """
    Map one raw citation to its canonical form.

    Args:
        raw: Citation with optional fields
        display_order: 1-based position in the caller's list

    Returns:
        NormalizedSource: Citation with derived domain, favicon and language
    """
    url = raw.url or ""
    return NormalizedSource(
        title=raw.title or url,
        url=url,
        snippet=raw.snippet or "",
        domain=raw.domain or derive_domain(url),
        favicon_url=raw.favicon_url or derive_favicon_url(url),
        display_order=display_order,
        published_date=raw.published_date,
        relevance_score=raw.relevance_score,
        content_type=raw.content_type,
        word_count=raw.word_count,
        language=raw.language or DEFAULT_LANGUAGE,
        metadata=raw.metadata,
    )


def normalize_sources(sources: list[RawSource | dict[str, Any]]) -> list[NormalizedSource]:
    """
    Normalize a citation list, numbering it in the order given.

    The caller's ordering is the relevance ordering and is never re-sorted.

    Args:
        sources: Raw citations (models or plain dicts)

    Returns:
        list[NormalizedSource]: Citations with display_order 1..K
    """
    normalized = []
    for index, source in enumerate(sources, start=1):
        raw = source if isinstance(source, RawSource) else RawSource.model_validate(source)
        normalized.append(normalize_source(raw, display_order=index))
    return normalized
