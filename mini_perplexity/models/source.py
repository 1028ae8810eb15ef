"""
Message source schemas.

Dependencies: pydantic
System role: Citation API contracts
"""

import uuid
from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SourceResponse(BaseModel):
    """Persisted citation."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    message_id: uuid.UUID
    title: str
    url: str
    snippet: str
    domain: str
    favicon_url: str
    published_date: datetime | None = None
    relevance_score: float | None = None
    display_order: int
    content_type: str | None = None
    word_count: int | None = None
    language: str
    click_count: int
    last_clicked_at: datetime | None = None
    metadata: dict = Field(
        default_factory=dict,
        validation_alias=AliasChoices("source_metadata", "metadata"),
    )


class SourceClickResponse(BaseModel):
    """Result of recording a click."""

    success: bool = True
    click_count: int
    last_clicked_at: datetime | None
