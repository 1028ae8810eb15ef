"""
Shared response schemas.

Dependencies: pydantic
System role: Generic API contracts
"""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Acknowledgement of a write."""

    success: bool = True


class HealthResponse(BaseModel):
    """Health check result; search_provider is only known once the lifespan ran."""

    status: str
    message: str
    search_provider: str | None = None
