"""
Session API endpoints.

Routes:
- POST /sessions - Create new session
- GET /sessions - List recent sessions
- GET /sessions/{id} - Load session with messages and sources
- PUT /sessions/{id} - Rename session
- DELETE /sessions/{id} - Delete session
- POST /sessions/{id}/title - Derive title from the first question
- GET /sessions/{id}/context - Last messages for conversation context

Dependencies: mini_perplexity.application.services.chat_service, mini_perplexity.models
System role: Session management HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from mini_perplexity.api.deps import get_chat_service
from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.application.services.chat_service import ChatService
from mini_perplexity.models.common import SuccessResponse
from mini_perplexity.models.message import ContextResponse, MessageSummary
from mini_perplexity.models.session import (
    CreateSessionRequest,
    SessionDetailEnvelope,
    SessionDetailResponse,
    SessionEnvelope,
    SessionListResponse,
    SessionResponse,
    TitleResponse,
    UpdateSessionRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionEnvelope)
@handle_api_errors
async def create_session(
    request: CreateSessionRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SessionEnvelope:
    """
    Create new session.

    Args:
        request: CreateSessionRequest with optional title, owner, metadata, tags
        chat_service: Injected ChatService

    Returns:
        SessionEnvelope: {"session": created session}
    """
    session = await chat_service.create_session(
        title=request.title,
        user_id=request.user_id,
        metadata=request.metadata,
        tags=request.tags,
    )
    return SessionEnvelope(session=SessionResponse.model_validate(session))


@router.get("", response_model=SessionListResponse)
@handle_api_errors
async def list_sessions(
    limit: int | None = Query(default=None, ge=1, description="Page size (default 20, max 100)"),
    user_id: str | None = Query(default=None, description="Restrict to one owner"),
    chat_service: ChatService = Depends(get_chat_service),
) -> SessionListResponse:
    """
    List active sessions, most recently updated first.

    Returns:
        SessionListResponse: {"sessions": [...]}
    """
    sessions = await chat_service.get_recent_sessions(limit=limit, user_id=user_id)
    return SessionListResponse(sessions=[SessionResponse.model_validate(s) for s in sessions])


@router.get("/{session_id}", response_model=SessionDetailEnvelope)
@handle_api_errors
async def get_session(
    session_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> SessionDetailEnvelope:
    """
    Load a session with its messages and sources.

    Raises:
        HTTPException(404): Session not found
    """
    session = await chat_service.load_session(session_id)
    return SessionDetailEnvelope(session=SessionDetailResponse.model_validate(session))


@router.put("/{session_id}", response_model=SuccessResponse)
@handle_api_errors
async def update_session(
    session_id: UUID,
    request: UpdateSessionRequest,
    chat_service: ChatService = Depends(get_chat_service),
) -> SuccessResponse:
    """
    Rename a session.

    Raises:
        HTTPException(400): Blank title
        HTTPException(404): Session not found
    """
    await chat_service.rename_session(session_id, request.title)
    return SuccessResponse()


@router.delete("/{session_id}", response_model=SuccessResponse)
@handle_api_errors
async def delete_session(
    session_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> SuccessResponse:
    """Delete a session and everything it owns. Missing sessions are not an error."""
    await chat_service.delete_session(session_id)
    return SuccessResponse()


@router.post("/{session_id}/title", response_model=TitleResponse)
@handle_api_errors
async def generate_title(
    session_id: UUID,
    chat_service: ChatService = Depends(get_chat_service),
) -> TitleResponse:
    """Derive the title from the first user message."""
    title = await chat_service.auto_generate_title(session_id)
    return TitleResponse(title=title)


@router.get("/{session_id}/context", response_model=ContextResponse)
@handle_api_errors
async def get_context(
    session_id: UUID,
    limit: int | None = Query(default=None, ge=1, le=100),
    chat_service: ChatService = Depends(get_chat_service),
) -> ContextResponse:
    """Last messages of a session in chronological order."""
    messages = await chat_service.get_conversation_context(session_id, limit=limit)
    return ContextResponse(messages=[MessageSummary.model_validate(m) for m in messages])
