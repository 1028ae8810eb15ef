"""
Chat endpoint schemas.

Dependencies: pydantic
System role: Question answering API contracts
"""

import uuid

from pydantic import BaseModel, ConfigDict, Field

from mini_perplexity.core.search.search_schema import SearchResult


class ChatRequest(BaseModel):
    """Question sent to POST /api/chat."""

    model_config = ConfigDict(populate_by_name=True)

    message: str | None = Field(default=None, description="User question")
    session_id: uuid.UUID | None = Field(
        default=None,
        alias="sessionId",
        description="Session whose history is used as context",
    )


class ChatResponse(BaseModel):
    """
    Answer to a question.

    Vendor failures are reported through `response` (an apology) and
    `error`, never through the HTTP status.
    """

    model_config = ConfigDict(populate_by_name=True)

    response: str
    sources: list[SearchResult] = Field(default_factory=list)
    session_id: uuid.UUID | None = Field(default=None, alias="sessionId")
    error: str | None = None
