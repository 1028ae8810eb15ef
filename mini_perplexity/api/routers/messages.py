"""
Message API endpoints.

Routes:
- POST /messages - Save a message with its sources
- PATCH /messages/{id}/feedback - Record user feedback

Dependencies: mini_perplexity.application.services.chat_service, mini_perplexity.models
System role: Message persistence HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends

from mini_perplexity.api.deps import get_chat_service
from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.application.services.chat_service import ChatService
from mini_perplexity.models.message import (
    FeedbackRequest,
    MessageEnvelope,
    MessageResponse,
    MessageSummary,
    MessageSummaryEnvelope,
    SaveMessageRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageEnvelope)
@handle_api_errors
async def save_message(
    request: SaveMessageRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> MessageEnvelope:
    """
    Save one message at the next sequence number, with optional sources.

    Args:
        request: SaveMessageRequest
        chat_service: Injected ChatService

    Returns:
        MessageEnvelope: {"message": message with persisted sources}

    Raises:
        HTTPException(400): Blank content, unknown type or unreadable sources
        HTTPException(404): Session not found
        HTTPException(503): Storage unavailable or sequence contention persisted
    """
    message = await chat_service.save_message(
        request.session_id,
        request.type,
        request.content,
        sources=request.sources,
        model_used=request.model_used,
        tokens_used=request.tokens_used,
        response_time_ms=request.response_time_ms,
        search_query=request.search_query,
        metadata=request.metadata,
    )
    return MessageEnvelope(message=MessageResponse.model_validate(message))


@router.patch("/{message_id}/feedback", response_model=MessageSummaryEnvelope)
@handle_api_errors
async def record_feedback(
    message_id: UUID,
    request: FeedbackRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> MessageSummaryEnvelope:
    """
    Record rating, comment or helpfulness on a message.

    Raises:
        HTTPException(400): Rating outside 1-5 or empty body
        HTTPException(404): Message not found
    """
    message = await chat_service.record_feedback(
        message_id,
        feedback_rating=request.feedback_rating,
        feedback_text=request.feedback_text,
        is_helpful=request.is_helpful,
    )
    return MessageSummaryEnvelope(message=MessageSummary.model_validate(message))
