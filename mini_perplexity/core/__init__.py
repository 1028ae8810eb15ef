"""
Core domain logic: exceptions, citation normalization, title derivation
and the search + generation pipeline.
"""

from mini_perplexity.core.exceptions import (
    AuthenticationError,
    MessageNotFoundError,
    MiniPerplexityException,
    ResourceNotFoundError,
    SequenceConflictError,
    SessionNotFoundError,
    SourceNotFoundError,
    StorageUnavailableError,
    UserAlreadyExistsError,
    ValidationError,
    VendorUnavailableError,
)

__all__ = [
    "MiniPerplexityException",
    "ValidationError",
    "ResourceNotFoundError",
    "SessionNotFoundError",
    "MessageNotFoundError",
    "SourceNotFoundError",
    "SequenceConflictError",
    "VendorUnavailableError",
    "StorageUnavailableError",
    "UserAlreadyExistsError",
    "AuthenticationError",
]
