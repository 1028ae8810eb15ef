"""
Source API endpoints.

Routes: POST /sources/{id}/click

Dependencies: mini_perplexity.application.services.chat_service
System role: Citation click tracking HTTP API
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from mini_perplexity.api.deps import get_chat_service
from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.application.services.chat_service import ChatService
from mini_perplexity.models.source import SourceClickResponse

router = APIRouter(prefix="/sources", tags=["sources"])


@router.post("/{source_id}/click", response_model=SourceClickResponse)
@handle_api_errors
async def track_click(
    source_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> SourceClickResponse:
    """Count one click on a citation; 404 if it does not exist."""
    source = await chat_service.track_source_click(source_id)
    return SourceClickResponse(click_count=source.click_count, last_clicked_at=source.last_clicked_at)
