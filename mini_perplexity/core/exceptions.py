"""
Exception hierarchy for Mini Perplexity.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class MiniPerplexityException(Exception):
    """Base exception for all Mini Perplexity application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(MiniPerplexityException):
    """Raised when input validation fails, before any side effect."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize validation error.

        Args:
            message: Error message
            field: Field name that failed validation
            details: Additional context
        """
        details = details or {}
        if field:
            details["field"] = field
        self.field = field
        super().__init__(message, details)


class ResourceNotFoundError(MiniPerplexityException):
    """Base class for identifiers that do not resolve to a stored row."""

    resource = "Resource"

    def __init__(self, resource_id: Any, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details[f"{self.resource.lower()}_id"] = str(resource_id)
        self.resource_id = resource_id
        super().__init__(f"{self.resource} not found: {resource_id}", details)


class SessionNotFoundError(ResourceNotFoundError):
    """Raised when a session cannot be found."""

    resource = "Session"


class MessageNotFoundError(ResourceNotFoundError):
    """Raised when a message cannot be found."""

    resource = "Message"


class SourceNotFoundError(ResourceNotFoundError):
    """Raised when a message source cannot be found."""

    resource = "Source"


class SequenceConflictError(MiniPerplexityException):
    """Raised when a concurrent writer already claimed a sequence number."""

    def __init__(
        self,
        session_id: Any,
        sequence_number: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize sequence conflict error.

        Args:
            session_id: Session whose sequence was contended
            sequence_number: Number that could not be claimed
            details: Additional context
        """
        details = details or {}
        details.update({"session_id": str(session_id), "sequence_number": sequence_number})
        self.session_id = session_id
        self.sequence_number = sequence_number
        super().__init__(
            f"Sequence number {sequence_number} already taken in session {session_id}",
            details,
        )


class VendorUnavailableError(MiniPerplexityException):
    """Raised when the search or generation vendor fails or times out."""

    def __init__(
        self,
        message: str,
        vendor: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vendor error.

        Args:
            message: Error message
            vendor: Vendor name (tavily, gemini)
            details: Additional context
        """
        details = details or {}
        details["vendor"] = vendor
        self.vendor = vendor
        super().__init__(message, details)


class StorageUnavailableError(MiniPerplexityException):
    """Raised when the database cannot be reached or times out."""

    pass


class UserAlreadyExistsError(MiniPerplexityException):
    """Raised on signup with an email that is already registered."""

    def __init__(self, email: str) -> None:
        super().__init__("Email already in use", {"email": email})


class AuthenticationError(MiniPerplexityException):
    """Raised when credentials do not match a stored user."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")
