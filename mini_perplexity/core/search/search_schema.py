"""
Search result schema.

Shape of one web search hit as returned to the client by POST /api/chat.
The client echoes these back to POST /api/messages, where they are read
as RawSource.

Dependencies: pydantic
System role: Search result data contract
"""

from datetime import datetime
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class SearchResult(BaseModel):
    """One web search hit."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., description="Page title")
    url: str = Field(..., description="Page URL")
    snippet: str = Field(default="", description="Relevant excerpt")
    score: float | None = Field(default=None, description="Vendor relevance score")
    published_date: datetime | None = Field(
        default=None,
        alias="publishedDate",
        description="Publication date when the vendor reports one",
    )


class SearchClient(Protocol):
    """Anything that turns a question into ranked search results."""

    provider: str

    async def asearch(self, query: str) -> list[SearchResult]: ...
