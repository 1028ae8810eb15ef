"""
Message CRUD operations.

Sequence numbers are claimed optimistically: read max + 1, insert, and
let the (session_id, sequence_number) unique constraint reject a writer
that lost the race.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.models
System role: Message persistence operations
"""

from typing import Any
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.boundary.db.CRUD.base_crud import BaseCRUD
from mini_perplexity.boundary.db.models.message_model import (
    SEQUENCE_CONSTRAINT,
    MessageModel,
    MessageType,
)
from mini_perplexity.core.exceptions import SequenceConflictError


def _is_sequence_conflict(error: IntegrityError) -> bool:
    # PostgreSQL names the constraint, SQLite lists the columns
    text = str(error.orig)
    return SEQUENCE_CONSTRAINT in text or "messages.sequence_number" in text


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def next_sequence_number(self, session: AsyncSession, session_id: UUID) -> int:
        """
        Next free sequence number in a session.

        Args:
            session: Async database session
            session_id: Session UUID

        Returns:
            int: max(sequence_number) + 1, or 1 for an empty session
        """
        stmt = select(func.coalesce(func.max(MessageModel.sequence_number), 0)).where(
            MessageModel.session_id == session_id
        )
        result = await session.execute(stmt)
        return result.scalar_one() + 1

    async def create_at_sequence(
        self,
        session: AsyncSession,
        session_id: UUID,
        sequence_number: int,
        **fields: Any,
    ) -> MessageModel:
        """
        Insert a message at a given position.

        Args:
            session: Async database session
            session_id: Session UUID
            sequence_number: Position claimed by the caller
            **fields: Remaining MessageModel column values

        Returns:
            MessageModel: Flushed message

        Raises:
            SequenceConflictError: If another writer already holds the position
        """
        message = MessageModel(session_id=session_id, sequence_number=sequence_number, **fields)
        session.add(message)
        try:
            await session.flush()
        except IntegrityError as e:
            if _is_sequence_conflict(e):
                raise SequenceConflictError(session_id, sequence_number) from e
            raise
        return message

    async def get_first_user_message(
        self,
        session: AsyncSession,
        session_id: UUID,
    ) -> MessageModel | None:
        """
        Earliest user message of a session by sequence number.

        Args:
            session: Async database session
            session_id: Session UUID

        Returns:
            MessageModel or None when the session has no user message
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id, MessageModel.type == MessageType.USER)
            .order_by(MessageModel.sequence_number.asc())
            .limit(1)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_recent_for_context(
        self,
        session: AsyncSession,
        session_id: UUID,
        limit: int,
    ) -> list[MessageModel]:
        """
        Last messages of a session in chronological order.

        Args:
            session: Async database session
            session_id: Session UUID
            limit: Maximum number of messages

        Returns:
            list[MessageModel]: Oldest first
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id)
            .order_by(MessageModel.sequence_number.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def set_sources_count(self, session: AsyncSession, id: UUID, count: int) -> None:
        """Record how many sources are attached to a message."""
        stmt = (
            update(MessageModel)
            .where(MessageModel.id == id)
            .values(sources_count=count)
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    async def update_feedback(
        self,
        session: AsyncSession,
        id: UUID,
        **feedback: Any,
    ) -> MessageModel | None:
        """
        Update feedback fields of a message.

        Args:
            session: Async database session
            id: Message UUID
            **feedback: Any of feedback_rating, feedback_text, is_helpful

        Returns:
            Updated MessageModel if found, None otherwise
        """
        return await self.update_by_id(session, id, **feedback)

    async def average_response_time(self, session: AsyncSession) -> float | None:
        """Mean response_time_ms over assistant messages that report one."""
        stmt = select(func.avg(MessageModel.response_time_ms)).where(
            MessageModel.type == MessageType.ASSISTANT,
            MessageModel.response_time_ms.is_not(None),
        )
        result = await session.execute(stmt)
        value = result.scalar_one_or_none()
        return float(value) if value is not None else None


message_crud = MessageCRUD()
