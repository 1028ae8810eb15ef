"""
API error handling utilities.

Provides a decorator for consistent error handling across endpoints:
domain exceptions and storage failures are logged with context and
mapped to HTTP status codes in one place.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status
from sqlalchemy.exc import DataError, DBAPIError, IntegrityError

from mini_perplexity.core.exceptions import (
    AuthenticationError,
    ResourceNotFoundError,
    SequenceConflictError,
    StorageUnavailableError,
    UserAlreadyExistsError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

STORAGE_UNAVAILABLE = "Storage temporarily unavailable"


def handle_api_errors(func: F) -> F:
    """
    Decorator to transform application errors into HTTPExceptions.

    This centralizes:
    - Logging of errors with context (operation, details)
    - Mapping specific exceptions to HTTP status codes
    - Keeping internal error text out of 5xx responses
    """
    operation = func.__name__

    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except (ValidationError, UserAlreadyExistsError) as e:
            logger.warning(
                "Invalid request",
                extra={"operation": operation, "error": str(e)},
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)

        except AuthenticationError as e:
            logger.info("Authentication failed", extra={"operation": operation})
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)

        except ResourceNotFoundError as e:
            logger.warning(
                "Resource not found",
                extra={"operation": operation, "error": str(e)},
            )
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)

        except SequenceConflictError as e:
            logger.error(
                "Sequence conflict persisted after retries",
                extra={"operation": operation, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Could not save message, please retry",
            )

        except DataError as e:
            # Value rejected by a column type or length limit
            logger.warning(
                "Value rejected by storage",
                extra={"operation": operation, "error": str(e.orig)},
            )
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A field value is too long or out of range",
            )

        except IntegrityError as e:
            logger.exception(
                "Integrity violation",
                extra={"operation": operation, "error": str(e.orig)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

        except (StorageUnavailableError, DBAPIError, TimeoutError, OSError) as e:
            logger.error(
                "Storage unavailable",
                extra={"operation": operation, "error": f"{type(e).__name__}: {e}"},
            )
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=STORAGE_UNAVAILABLE,
            )

        except Exception as e:
            logger.exception(
                "Unexpected failure",
                extra={"operation": operation, "error": str(e)},
            )
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
