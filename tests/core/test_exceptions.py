"""
Test suite for the exception hierarchy.

System role: Verification of error messages and context
"""

import uuid

from mini_perplexity.core.exceptions import (
    AuthenticationError,
    MessageNotFoundError,
    MiniPerplexityException,
    ResourceNotFoundError,
    SequenceConflictError,
    SessionNotFoundError,
    SourceNotFoundError,
    UserAlreadyExistsError,
    ValidationError,
    VendorUnavailableError,
)


class TestExceptions:
    """Test suite for exception construction."""

    def test_str_should_include_details(self) -> None:
        error = MiniPerplexityException("Boom", details={"a": 1})
        assert str(error) == "Boom | Details: {'a': 1}"

    def test_str_without_details_should_be_message(self) -> None:
        assert str(MiniPerplexityException("Boom")) == "Boom"

    def test_validation_error_should_record_field(self) -> None:
        error = ValidationError("Bad", field="content")
        assert error.field == "content"
        assert error.details == {"field": "content"}

    def test_not_found_errors_should_name_resource(self) -> None:
        # Arrange
        resource_id = uuid.uuid4()

        # Act
        errors = [
            SessionNotFoundError(resource_id),
            MessageNotFoundError(resource_id),
            SourceNotFoundError(resource_id),
        ]

        # Assert
        assert [e.message for e in errors] == [
            f"Session not found: {resource_id}",
            f"Message not found: {resource_id}",
            f"Source not found: {resource_id}",
        ]
        assert all(isinstance(e, ResourceNotFoundError) for e in errors)
        assert errors[0].details == {"session_id": str(resource_id)}

    def test_sequence_conflict_should_carry_position(self) -> None:
        session_id = uuid.uuid4()
        error = SequenceConflictError(session_id, 3)
        assert error.session_id == session_id
        assert error.sequence_number == 3

    def test_vendor_error_should_carry_vendor(self) -> None:
        error = VendorUnavailableError("down", vendor="tavily")
        assert error.vendor == "tavily"
        assert isinstance(error, MiniPerplexityException)

    def test_account_errors_should_use_fixed_messages(self) -> None:
        assert UserAlreadyExistsError("a@b.co").message == "Email already in use"
        assert AuthenticationError().message == "Invalid credentials"
