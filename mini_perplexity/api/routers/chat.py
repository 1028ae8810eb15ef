"""
Chat API endpoint.

Routes: POST /chat

Searches the web, writes an answer grounded on the results and returns
both. Vendor failures never change the status code: the response carries
an apology and the sources that could be offered (see ChatPipeline).
Storage is only used for optional conversation history and search
tracking; failures there are logged and ignored.

Dependencies: mini_perplexity.core.search, mini_perplexity.application.services
System role: Question answering HTTP API
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from mini_perplexity.api.deps import get_analytics_service, get_chat_pipeline, get_chat_service
from mini_perplexity.api.errors import handle_api_errors
from mini_perplexity.application.services.analytics_service import AnalyticsService
from mini_perplexity.application.services.chat_service import ChatService
from mini_perplexity.core.exceptions import MiniPerplexityException, ValidationError
from mini_perplexity.core.search.chat_pipeline import ChatAnswer, ChatPipeline
from mini_perplexity.models.chat import ChatRequest, ChatResponse
from mini_perplexity.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])

BEST_EFFORT_ERRORS = (SQLAlchemyError, OSError, MiniPerplexityException)


async def _load_history(chat_service: ChatService, session_id: UUID) -> list[tuple[str, str]]:
    try:
        messages = await chat_service.get_conversation_context(session_id)
    except BEST_EFFORT_ERRORS as e:
        log_exception_with_context(
            logger,
            "Conversation history unavailable, answering without it",
            e,
            session_id=session_id,
        )
        return []
    return [(message.type, message.content) for message in messages]


async def _track_search(
    analytics: AnalyticsService,
    session_id: UUID,
    question: str,
    answer: ChatAnswer,
) -> None:
    try:
        await analytics.track_search(
            session_id=session_id,
            query=question,
            results_count=answer.results_count,
            search_duration_ms=answer.search_duration_ms,
            provider=answer.provider,
            provider_metadata={"error": answer.error} if answer.error else {},
        )
    except BEST_EFFORT_ERRORS as e:
        log_exception_with_context(logger, "Search tracking failed", e, session_id=session_id)


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
@handle_api_errors
async def chat(
    request: ChatRequest,
    pipeline: ChatPipeline = Depends(get_chat_pipeline),
    chat_service: ChatService = Depends(get_chat_service),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> ChatResponse:
    """
    Answer a question with web sources.

    Args:
        request: ChatRequest with message and optional sessionId
        pipeline: Injected search + generation pipeline
        chat_service: Injected ChatService (history lookup)
        analytics: Injected AnalyticsService (search tracking)

    Returns:
        ChatResponse: {"response", "sources", "sessionId"?}

    Raises:
        HTTPException(400): Missing or blank message
    """
    if request.message is None or not request.message.strip():
        raise ValidationError("Message is required", field="message")
    question = request.message.strip()

    history: list[tuple[str, str]] = []
    if request.session_id is not None:
        history = await _load_history(chat_service, request.session_id)

    answer = await pipeline.answer(question, history)

    if request.session_id is not None:
        await _track_search(analytics, request.session_id, question, answer)

    log_with_context(
        logger,
        logging.INFO,
        "Answer served",
        session_id=request.session_id,
        provider=answer.provider,
        sources=answer.sources,
        error=answer.error,
    )

    return ChatResponse(
        response=answer.response,
        sources=answer.sources,
        session_id=request.session_id,
        error=answer.error,
    )
