"""
Chat service facade.

Single entry point for session, message and source persistence used by
the HTTP layer. Each public method is one unit of work: it validates
input before touching storage, then commits or rolls back as a whole.

Dependencies: sqlalchemy, tenacity, mini_perplexity.boundary.db.CRUD
System role: Conversation persistence orchestration
"""

import logging
from typing import Any, Sequence
from uuid import UUID

import pydantic
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from mini_perplexity.boundary.db.CRUD.message_crud import message_crud
from mini_perplexity.boundary.db.CRUD.session_crud import session_crud
from mini_perplexity.boundary.db.CRUD.source_crud import source_crud
from mini_perplexity.boundary.db.models.message_model import MessageModel, MessageType
from mini_perplexity.boundary.db.models.session_model import SessionModel
from mini_perplexity.boundary.db.models.source_model import MessageSourceModel
from mini_perplexity.configs.chat import ChatSettings
from mini_perplexity.core.exceptions import (
    MessageNotFoundError,
    SequenceConflictError,
    SessionNotFoundError,
    SourceNotFoundError,
    ValidationError,
)
from mini_perplexity.core.session_title import derive_title
from mini_perplexity.core.source_normalizer import NormalizedSource, RawSource, normalize_sources

logger = logging.getLogger(__name__)

ROLE_ALIASES = {"ai": MessageType.ASSISTANT}


def normalize_role(role: str | None) -> str:
    """
    Canonical spelling of a message role.

    Args:
        role: "user", "assistant" or the legacy "ai"

    Returns:
        str: "user" or "assistant"

    Raises:
        ValidationError: If the role is missing or unknown
    """
    value = (role or "").strip().lower()
    value = ROLE_ALIASES.get(value, value)
    if value not in MessageType.ALL:
        raise ValidationError(f"Unknown message type: {role!r}", field="type")
    return value


def _require_content(content: str | None) -> str:
    if content is None or not content.strip():
        raise ValidationError("Message content must not be empty", field="content")
    return content


def _prepare_sources(sources: Sequence[RawSource | dict[str, Any]]) -> list[NormalizedSource]:
    try:
        return normalize_sources(list(sources))
    except pydantic.ValidationError as e:
        raise ValidationError(
            "Invalid source payload",
            field="sources",
            details={"errors": e.error_count()},
        ) from e


def _message_fields(
    model_used: str | None = None,
    tokens_used: int | None = None,
    response_time_ms: int | None = None,
    search_query: str | None = None,
    metadata: dict | None = None,
) -> dict[str, Any]:
    return {
        "model_used": model_used,
        "tokens_used": tokens_used,
        "response_time_ms": response_time_ms,
        "search_query": search_query,
        "message_metadata": metadata or {},
    }


class ChatService:
    """
    Chat service facade.

    Sequence numbers are claimed optimistically and the unique constraint
    arbitrates between concurrent writers; a losing writer rolls back and
    retries the whole read-compute-insert cycle.
    """

    def __init__(self, db: AsyncSession, settings: ChatSettings | None = None) -> None:
        """
        Initialize chat service with async database session.

        Args:
            db: Async SQLAlchemy session (one per request)
            settings: Chat tunables, defaults from environment
        """
        self.db = db
        self.settings = settings or ChatSettings()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    async def create_session(
        self,
        title: str | None = None,
        user_id: str | None = None,
        metadata: dict | None = None,
        tags: list[str] | None = None,
    ) -> SessionModel:
        """
        Create an empty session.

        Args:
            title: Optional title, "New Chat" when blank
            user_id: Optional owner
            metadata: Free-form mapping
            tags: List of labels

        Returns:
            SessionModel: Created session
        """
        title = title.strip() if title else ""
        try:
            session = await session_crud.create(
                self.db,
                title=title or self.settings.default_title,
                user_id=user_id,
                session_metadata=metadata or {},
                tags=tags or [],
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        logger.info(f"{__name__}:create_session - Created session {session.id}")
        return session

    async def load_session(self, session_id: UUID) -> SessionModel:
        """
        Load a session with its ordered messages and their ordered sources.

        Args:
            session_id: Session UUID

        Returns:
            SessionModel: Session with messages and sources loaded

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        session = await session_crud.get_with_messages(self.db, session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    async def get_recent_sessions(
        self,
        limit: int | None = None,
        user_id: str | None = None,
    ) -> Sequence[SessionModel]:
        """
        Active sessions, most recently updated first.

        Args:
            limit: Page size, clamped to 1..max_sessions_limit
            user_id: Restrict to one owner when given

        Returns:
            Sequence[SessionModel]: Sessions without messages
        """
        limit = limit or self.settings.recent_sessions_limit
        limit = max(1, min(limit, self.settings.max_sessions_limit))
        return await session_crud.get_recent(self.db, limit=limit, user_id=user_id)

    async def rename_session(self, session_id: UUID, title: str | None) -> SessionModel:
        """
        Set a session title explicitly.

        Args:
            session_id: Session UUID
            title: New non-blank title

        Returns:
            SessionModel: Updated session

        Raises:
            ValidationError: If the title is blank
            SessionNotFoundError: If the session does not exist
        """
        if title is None or not title.strip():
            raise ValidationError("Title must not be empty", field="title")
        try:
            session = await session_crud.update_title(self.db, session_id, title.strip())
            if session is None:
                raise SessionNotFoundError(session_id)
            await self.db.commit()
        except (SQLAlchemyError, SessionNotFoundError):
            await self.db.rollback()
            raise
        return session

    async def delete_session(self, session_id: UUID) -> bool:
        """
        Delete a session with all messages, sources and search records.

        Deleting a session that does not exist is not an error.

        Args:
            session_id: Session UUID

        Returns:
            bool: True if a session was removed, False if there was none
        """
        try:
            deleted = await session_crud.delete_cascade(self.db, session_id)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        logger.info(f"{__name__}:delete_session - Session {session_id} deleted={deleted}")
        return deleted

    async def auto_generate_title(self, session_id: UUID) -> str:
        """
        Derive the session title from its first user message.

        Args:
            session_id: Session UUID

        Returns:
            str: The derived title, or the default title when the session
            has no user message yet (storage untouched in that case)

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        if not await session_crud.exists(self.db, session_id):
            raise SessionNotFoundError(session_id)

        first = await message_crud.get_first_user_message(self.db, session_id)
        if first is None:
            return self.settings.default_title

        title = derive_title(first.content, self.settings.title_max_length)
        try:
            await session_crud.update_title(self.db, session_id, title)
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return title

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def _append_once(
        self,
        session_id: UUID,
        role: str,
        content: str,
        fields: dict[str, Any],
        sources: list[NormalizedSource],
    ) -> tuple[MessageModel, list[MessageSourceModel]]:
        try:
            sequence_number = await message_crud.next_sequence_number(self.db, session_id)
            message = await message_crud.create_at_sequence(
                self.db,
                session_id,
                sequence_number,
                type=role,
                content=content,
                sources_count=len(sources),
                **fields,
            )
            rows = await source_crud.bulk_create(self.db, message.id, sources) if sources else []
            await session_crud.increment_message_count(self.db, session_id)
            await self.db.commit()
        except SequenceConflictError as e:
            await self.db.rollback()
            logger.warning(f"{__name__}:append_message - {e.message}, retrying")
            raise
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return message, rows

    async def _append_turn(
        self,
        session_id: UUID,
        role: str,
        content: str,
        fields: dict[str, Any],
        sources: list[NormalizedSource],
    ) -> MessageModel:
        """Write a message and its sources as one unit, retrying lost sequence races."""
        if not await session_crud.exists(self.db, session_id):
            raise SessionNotFoundError(session_id)

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(SequenceConflictError),
            stop=stop_after_attempt(self.settings.append_max_attempts),
            wait=wait_exponential_jitter(initial=0.01, max=0.5, jitter=0.05),
            reraise=True,
        ):
            with attempt:
                message, rows = await self._append_once(session_id, role, content, fields, sources)

        set_committed_value(message, "sources", rows)
        logger.info(
            f"{__name__}:append_message - Appended {role} message "
            f"#{message.sequence_number} with {len(rows)} sources to session {session_id}"
        )
        return message

    async def append_message(
        self,
        session_id: UUID,
        role: str,
        content: str,
        model_used: str | None = None,
        tokens_used: int | None = None,
        response_time_ms: int | None = None,
        search_query: str | None = None,
        metadata: dict | None = None,
    ) -> MessageModel:
        """
        Append a message at the next sequence number of a session.

        Args:
            session_id: Session UUID
            role: "user" or "assistant" ("ai" accepted)
            content: Non-blank message text
            model_used: Generating model, for assistant messages
            tokens_used: Token count reported by the model
            response_time_ms: Generation latency
            search_query: Query the answer was grounded on
            metadata: Free-form mapping

        Returns:
            MessageModel: Committed message

        Raises:
            ValidationError: If role or content is invalid (nothing written)
            SessionNotFoundError: If the session does not exist
            SequenceConflictError: If every attempt lost the race
        """
        fields = _message_fields(
            model_used=model_used,
            tokens_used=tokens_used,
            response_time_ms=response_time_ms,
            search_query=search_query,
            metadata=metadata,
        )
        return await self._append_turn(
            session_id,
            normalize_role(role),
            _require_content(content),
            fields,
            sources=[],
        )

    async def _attach_normalized(
        self,
        message: MessageModel,
        normalized: list[NormalizedSource],
    ) -> list[MessageSourceModel]:
        message_id = message.id
        try:
            rows = await source_crud.bulk_create(self.db, message_id, normalized)
            await message_crud.set_sources_count(self.db, message_id, len(rows))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.error(
                f"{__name__}:attach_sources - Rolled back {len(normalized)} sources "
                f"for message {message_id}"
            )
            raise

        set_committed_value(message, "sources_count", len(rows))
        set_committed_value(message, "sources", rows)
        return rows

    async def attach_sources(
        self,
        message_id: UUID,
        sources: Sequence[RawSource | dict[str, Any]],
    ) -> list[MessageSourceModel]:
        """
        Attach citations to a message in the order given.

        display_order follows the input order. All rows and the message's
        sources_count are written in one transaction; on failure nothing is
        kept and the count keeps its prior value. An empty list inserts
        nothing and sets the count to 0.

        Args:
            message_id: Persisted message UUID
            sources: Raw citations in relevance order

        Returns:
            list[MessageSourceModel]: Persisted rows, display_order 1..K

        Raises:
            ValidationError: If a source payload cannot be read
            MessageNotFoundError: If the message does not exist
        """
        normalized = _prepare_sources(sources)
        message = await message_crud.get_by_id(self.db, message_id)
        if message is None:
            raise MessageNotFoundError(message_id)
        return await self._attach_normalized(message, normalized)

    async def save_message(
        self,
        session_id: UUID,
        role: str,
        content: str,
        sources: Sequence[RawSource | dict[str, Any]] | None = None,
        **meta: Any,
    ) -> MessageModel:
        """
        Save one turn: the message and, when given, its citations.

        Every input (role, content, sources) is validated before the
        first write. The message, its sources and the session counter
        are committed together, so a storage failure leaves no partial
        turn behind for a client retry to duplicate.

        Args:
            session_id: Session UUID
            role: "user" or "assistant" ("ai" accepted)
            content: Non-blank message text
            sources: Optional raw citations in relevance order
            **meta: Generation details, as accepted by append_message()

        Returns:
            MessageModel: Message with its persisted sources loaded
        """
        role = normalize_role(role)
        content = _require_content(content)
        normalized = _prepare_sources(sources or [])
        fields = _message_fields(**meta)

        return await self._append_turn(session_id, role, content, fields, normalized)

    async def get_conversation_context(
        self,
        session_id: UUID,
        limit: int | None = None,
    ) -> list[MessageModel]:
        """
        Last messages of a session, oldest first.

        Args:
            session_id: Session UUID
            limit: Number of messages, defaults to context_window_size

        Returns:
            list[MessageModel]: Messages in sequence order

        Raises:
            SessionNotFoundError: If the session does not exist
        """
        if not await session_crud.exists(self.db, session_id):
            raise SessionNotFoundError(session_id)
        limit = limit or self.settings.context_window_size
        return await message_crud.get_recent_for_context(self.db, session_id, limit)

    async def record_feedback(
        self,
        message_id: UUID,
        feedback_rating: int | None = None,
        feedback_text: str | None = None,
        is_helpful: bool | None = None,
    ) -> MessageModel:
        """
        Update the feedback fields of a message.

        Only the fields passed are written.

        Raises:
            ValidationError: If the rating is outside 1..5 or nothing is given
            MessageNotFoundError: If the message does not exist
        """
        if feedback_rating is not None and not 1 <= feedback_rating <= 5:
            raise ValidationError("Rating must be between 1 and 5", field="feedback_rating")
        values = {
            key: value
            for key, value in {
                "feedback_rating": feedback_rating,
                "feedback_text": feedback_text,
                "is_helpful": is_helpful,
            }.items()
            if value is not None
        }
        if not values:
            raise ValidationError("No feedback given", field="feedback_rating")

        try:
            message = await message_crud.update_feedback(self.db, message_id, **values)
            if message is None:
                raise MessageNotFoundError(message_id)
            await self.db.commit()
        except (SQLAlchemyError, MessageNotFoundError):
            await self.db.rollback()
            raise
        return message

    async def track_source_click(self, source_id: UUID) -> MessageSourceModel:
        """
        Count one click on a citation.

        Raises:
            SourceNotFoundError: If the source does not exist
        """
        try:
            source = await source_crud.increment_click(self.db, source_id)
            if source is None:
                raise SourceNotFoundError(source_id)
            await self.db.commit()
        except (SQLAlchemyError, SourceNotFoundError):
            await self.db.rollback()
            raise
        return source
