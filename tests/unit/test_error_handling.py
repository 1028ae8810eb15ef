"""
Test suite for the endpoint error decorator.

System role: Verification of exception to status code mapping
"""

import uuid

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import DataError, IntegrityError, OperationalError

from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.core.exceptions import (
    AuthenticationError,
    SequenceConflictError,
    SessionNotFoundError,
    StorageUnavailableError,
    UserAlreadyExistsError,
    ValidationError,
)


def _raising(error: BaseException):
    @handle_api_errors
    async def endpoint():
        raise error

    return endpoint


class TestHandleApiErrors:
    """Test suite for handle_api_errors."""

    @pytest.mark.asyncio
    async def test_successful_call_should_pass_result_through(self) -> None:
        @handle_api_errors
        async def endpoint(value: int) -> int:
            return value * 2

        assert await endpoint(21) == 42

    @pytest.mark.asyncio
    async def test_wrapped_endpoint_should_keep_its_name(self) -> None:
        @handle_api_errors
        async def list_things():
            return []

        assert list_things.__name__ == "list_things"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error,status_code,detail", [
        (ValidationError("Message content must not be empty"), 400, "Message content must not be empty"),
        (UserAlreadyExistsError("a@b.co"), 400, "Email already in use"),
        (AuthenticationError(), 401, "Invalid credentials"),
        (SequenceConflictError("s", 2), 503, "Could not save message, please retry"),
        (StorageUnavailableError("down"), 503, "Storage temporarily unavailable"),
        (OperationalError("SELECT 1", {}, ConnectionError("refused")), 503, "Storage temporarily unavailable"),
        (TimeoutError(), 503, "Storage temporarily unavailable"),
        (DataError("INSERT", {}, Exception("value too long")), 400, "A field value is too long or out of range"),
        (IntegrityError("INSERT", {}, Exception("fk")), 500, "An internal error occurred"),
        (RuntimeError("secret internals"), 500, "An internal error occurred"),
    ])
    async def test_exception_should_map_to_status(self, error, status_code, detail) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await _raising(error)()
        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail == detail

    @pytest.mark.asyncio
    async def test_not_found_should_map_to_404_with_message(self) -> None:
        session_id = uuid.uuid4()
        with pytest.raises(HTTPException) as exc_info:
            await _raising(SessionNotFoundError(session_id))()
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == f"Session not found: {session_id}"

    @pytest.mark.asyncio
    async def test_http_exception_should_pass_through(self) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await _raising(HTTPException(status_code=418, detail="teapot"))()
        assert exc_info.value.status_code == 418
