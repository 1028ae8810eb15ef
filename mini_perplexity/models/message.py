"""
Message domain models and schemas.

Request/response schemas for message operations.

Dependencies: pydantic
System role: Message API contracts
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from mini_perplexity.models.source import SourceResponse

# Upper bound of the INTEGER columns
INT4_MAX = 2**31 - 1


class SaveMessageRequest(BaseModel):
    """
    Request schema for saving one turn.

    type and content are checked by the service so that a blank or
    unknown value yields 400 rather than a schema error.
    """

    model_config = ConfigDict(protected_namespaces=())

    session_id: uuid.UUID = Field(..., description="Owning session")
    type: str | None = Field(default=None, description="user or assistant (legacy: ai)")
    content: str | None = Field(default=None, description="Message text")
    model_used: str | None = Field(default=None, max_length=100)
    tokens_used: int | None = Field(default=None, ge=0, le=INT4_MAX)
    response_time_ms: int | None = Field(default=None, ge=0, le=INT4_MAX)
    search_query: str | None = None
    metadata: dict = Field(default_factory=dict)
    sources: list[dict[str, Any]] | None = Field(
        default=None,
        description="Citations in relevance order (search result or source shape)",
    )


class FeedbackRequest(BaseModel):
    """Request schema for message feedback."""

    feedback_rating: int | None = Field(default=None, description="1-5")
    feedback_text: str | None = None
    is_helpful: bool | None = None


class MessageSummary(BaseModel):
    """Message without its sources."""

    model_config = ConfigDict(from_attributes=True, protected_namespaces=())

    id: uuid.UUID
    session_id: uuid.UUID
    type: str
    content: str
    sequence_number: int
    created_at: datetime
    model_used: str | None = None
    tokens_used: int | None = None
    response_time_ms: int | None = None
    search_query: str | None = None
    sources_count: int = 0
    feedback_rating: int | None = None
    feedback_text: str | None = None
    is_helpful: bool | None = None
    metadata: dict = Field(
        default_factory=dict,
        validation_alias=AliasChoices("message_metadata", "metadata"),
    )


class MessageResponse(MessageSummary):
    """Message with its sources in display order."""

    sources: list[SourceResponse] = Field(default_factory=list)


class MessageEnvelope(BaseModel):
    message: MessageResponse


class MessageSummaryEnvelope(BaseModel):
    message: MessageSummary


class ContextResponse(BaseModel):
    """Last messages of a session, oldest first."""

    messages: list[MessageSummary]
