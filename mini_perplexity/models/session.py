"""
Session domain models and schemas.

Request/response schemas for session operations.

Dependencies: pydantic
System role: Session API contracts
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from mini_perplexity.models.message import MessageResponse

# sessions.title is VARCHAR(255)
TITLE_MAX_LENGTH = 255


class CreateSessionRequest(BaseModel):
    """Request schema for creating a new session."""

    title: str | None = Field(
        default=None,
        max_length=TITLE_MAX_LENGTH,
        description="Optional title, defaults to New Chat",
    )
    user_id: str | None = Field(default=None, max_length=255, description="Optional owner")
    metadata: dict = Field(default_factory=dict, description="Optional session metadata")
    tags: list[str] = Field(default_factory=list, description="Optional labels")


class UpdateSessionRequest(BaseModel):
    """Request schema for renaming a session."""

    title: str | None = Field(default=None, max_length=TITLE_MAX_LENGTH)


class SessionResponse(BaseModel):
    """Response schema for session operations."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    title: str
    user_id: str | None
    created_at: datetime
    updated_at: datetime
    is_active: bool
    message_count: int
    # session_metadata first: ORM models also expose the class-level MetaData as .metadata
    metadata: dict = Field(
        default_factory=dict,
        validation_alias=AliasChoices("session_metadata", "metadata"),
    )
    tags: list[str] = Field(default_factory=list)


class SessionDetailResponse(SessionResponse):
    """Session with its ordered messages and sources."""

    messages: list[MessageResponse] = Field(default_factory=list)


class SessionEnvelope(BaseModel):
    session: SessionResponse


class SessionDetailEnvelope(BaseModel):
    session: SessionDetailResponse


class SessionListResponse(BaseModel):
    sessions: list[SessionResponse]


class TitleResponse(BaseModel):
    title: str
