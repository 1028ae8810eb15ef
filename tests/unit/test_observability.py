"""
Test suite for logging helpers and correlation middleware.

System role: Verification of request tracing
"""

import logging

import httpx
import pytest
from fastapi import FastAPI
from pydantic import BaseModel

from mini_perplexity.observability.correlation import (
    CorrelationIdFilter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
)
from mini_perplexity.observability.log_utils import log_exception_with_context, safe_log_value
from mini_perplexity.observability.logger import configure_logging
from mini_perplexity.observability.middleware import (
    CORRELATION_HEADER,
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)


class TestCorrelationId:
    """Test suite for correlation ID context."""

    def test_set_without_value_should_generate_id(self) -> None:
        value = set_correlation_id()
        try:
            assert value
            assert get_correlation_id() == value
        finally:
            clear_correlation_id()
        assert get_correlation_id() == ""

    def test_filter_should_stamp_records(self) -> None:
        # Arrange
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        set_correlation_id("req-1")

        # Act
        try:
            CorrelationIdFilter().filter(record)
        finally:
            clear_correlation_id()

        # Assert
        assert record.correlation_id == "req-1"

    def test_filter_outside_request_should_use_dash(self) -> None:
        record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)
        CorrelationIdFilter().filter(record)
        assert record.correlation_id == "-"


class TestSafeLogValue:
    """Test suite for safe_log_value."""

    @pytest.mark.parametrize("value,expected", [
        (None, "None"),
        ("text", "text"),
        ([1, 2, 3], "list(3 items)"),
        ({"a": 1}, "dict(1 keys)"),
        (42, "42"),
    ])
    def test_safe_log_value(self, value, expected) -> None:
        assert safe_log_value(value) == expected

    def test_long_values_should_be_truncated(self) -> None:
        logged = safe_log_value("x" * 20, max_length=5)
        assert logged == "xxxxx... (truncated, 20 total)"

    def test_models_should_log_class_name_only(self) -> None:
        class Secret(BaseModel):
            text: str

        assert safe_log_value(Secret(text="private question")) == "<Secret>"

    def test_exception_context_should_be_attached(self, caplog) -> None:
        logger = logging.getLogger("tests.log_utils")

        with caplog.at_level(logging.ERROR, logger="tests.log_utils"):
            log_exception_with_context(logger, "lookup failed", KeyError("k"), sources=[1, 2])

        record = caplog.records[-1]
        assert record.error_type == "KeyError"
        assert record.sources == "list(2 items)"
        assert record.exc_info is not None


class TestConfigureLogging:
    """Test suite for root logger setup."""

    @pytest.fixture(autouse=True)
    def restore_root(self):
        root = logging.getLogger()
        handlers, level = list(root.handlers), root.level
        yield
        for handler in list(root.handlers):
            root.removeHandler(handler)
        for handler in handlers:
            root.addHandler(handler)
        root.setLevel(level)

    def test_repeated_calls_should_keep_one_handler(self) -> None:
        configure_logging("debug")
        configure_logging("warning")

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.WARNING


class TestMiddleware:
    """Test suite for the request middleware stack."""

    @pytest.fixture
    def traced_app(self) -> FastAPI:
        app = FastAPI()
        app.add_middleware(RequestLoggingMiddleware)
        app.add_middleware(CorrelationMiddleware)

        @app.get("/ping")
        async def ping():
            return {"correlation_id": get_correlation_id()}

        return app

    @pytest.mark.asyncio
    async def test_middleware_should_echo_incoming_correlation_id(self, traced_app) -> None:
        # Arrange
        transport = httpx.ASGITransport(app=traced_app)

        # Act
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ping", headers={CORRELATION_HEADER: "abc-123"})

        # Assert
        assert response.headers[CORRELATION_HEADER] == "abc-123"
        assert response.json() == {"correlation_id": "abc-123"}

    @pytest.mark.asyncio
    async def test_middleware_should_generate_correlation_id(self, traced_app) -> None:
        transport = httpx.ASGITransport(app=traced_app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/ping")
        assert response.headers[CORRELATION_HEADER] == response.json()["correlation_id"]
        assert response.headers[CORRELATION_HEADER]
