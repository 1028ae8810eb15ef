"""
Test suite for source normalization.

System role: Verification of citation canonicalization
"""

from datetime import datetime, timezone

import pydantic
import pytest

from mini_perplexity.core.source_normalizer import (
    RawSource,
    derive_domain,
    derive_favicon_url,
    normalize_source,
    normalize_sources,
)


class TestDeriveDomain:
    """Test suite for hostname extraction."""

    @pytest.mark.parametrize("url,expected", [
        ("https://en.wikipedia.org/wiki/Qubit", "en.wikipedia.org"),
        ("http://Example.COM:8080/path?q=1", "example.com"),
        ("https://user:pw@host.example.net/", "host.example.net"),
        ("not a url", ""),
        ("", ""),
        (None, ""),
    ])
    def test_derive_domain(self, url, expected) -> None:
        assert derive_domain(url) == expected


class TestDeriveFaviconUrl:
    """Test suite for favicon derivation."""

    @pytest.mark.parametrize("url,expected", [
        ("https://www.ibm.com/topics/quantum", "https://www.ibm.com/favicon.ico"),
        ("http://example.com:8080/a/b", "http://example.com:8080/favicon.ico"),
        ("example.com/no-scheme", ""),
        ("", ""),
        (None, ""),
    ])
    def test_derive_favicon_url(self, url, expected) -> None:
        assert derive_favicon_url(url) == expected


class TestNormalizeSource:
    """Test suite for single-source normalization."""

    def test_normalize_source_should_fill_derived_fields(self) -> None:
        # Arrange
        raw = RawSource(title="Qubit", url="https://en.wikipedia.org/wiki/Qubit")

        # Act
        normalized = normalize_source(raw, display_order=1)

        # Assert
        assert normalized.domain == "en.wikipedia.org"
        assert normalized.favicon_url == "https://en.wikipedia.org/favicon.ico"
        assert normalized.language == "en"
        assert normalized.snippet == ""
        assert normalized.display_order == 1

    def test_normalize_source_should_keep_given_values(self) -> None:
        # Arrange
        raw = RawSource(
            title="Qubit",
            url="https://en.wikipedia.org/wiki/Qubit",
            domain="wikipedia.org",
            favicon_url="https://static.example/w.ico",
            language="fr",
        )

        # Act
        normalized = normalize_source(raw, display_order=2)

        # Assert
        assert normalized.domain == "wikipedia.org"
        assert normalized.favicon_url == "https://static.example/w.ico"
        assert normalized.language == "fr"

    def test_normalize_source_without_title_should_use_url(self) -> None:
        raw = RawSource(url="https://example.com/page")
        assert normalize_source(raw, display_order=1).title == "https://example.com/page"

    def test_normalize_source_without_url_should_yield_empty_derivations(self) -> None:
        # Act
        normalized = normalize_source(RawSource(), display_order=1)

        # Assert
        assert normalized.url == ""
        assert normalized.title == ""
        assert normalized.domain == ""
        assert normalized.favicon_url == ""


class TestRawSourceAliases:
    """Test suite for the accepted input spellings."""

    def test_search_result_spelling_should_be_accepted(self) -> None:
        # Act
        raw = RawSource.model_validate({
            "title": "T",
            "url": "https://example.com",
            "content": "Body",
            "favicon": "https://example.com/f.png",
            "publishedDate": "2024-05-01T10:00:00Z",
            "score": 0.8,
            "unknown_field": "ignored",
        })

        # Assert
        assert raw.snippet == "Body"
        assert raw.favicon_url == "https://example.com/f.png"
        assert raw.published_date == datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)
        assert raw.relevance_score == 0.8

    def test_unreadable_date_should_fail_validation(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RawSource.model_validate({"url": "https://example.com", "published_date": "yesterday-ish"})


class TestNormalizeSources:
    """Test suite for list normalization."""

    def test_normalize_sources_should_number_in_input_order(self) -> None:
        # Arrange
        sources = [
            {"title": "low", "url": "https://a.example", "score": 0.1},
            RawSource(title="high", url="https://b.example", relevance_score=0.9),
            {"title": "mid", "url": "https://c.example", "score": 0.5},
        ]

        # Act
        normalized = normalize_sources(sources)

        # Assert
        assert [s.title for s in normalized] == ["low", "high", "mid"]
        assert [s.display_order for s in normalized] == [1, 2, 3]

    def test_normalize_sources_with_empty_list_should_return_empty(self) -> None:
        assert normalize_sources([]) == []

    @pytest.mark.parametrize("field,value", [
        ("language", "x" * 11),
        ("content_type", "x" * 51),
        ("domain", "d" * 256),
        ("word_count", -1),
    ])
    def test_values_beyond_column_limits_should_fail_validation(self, field, value) -> None:
        with pytest.raises(pydantic.ValidationError):
            normalize_sources([{"url": "https://a.example", field: value}])
