"""
Session CRUD operations.

Provides Create, Read, Update, Delete operations for SessionModel
with session-specific query methods.

Dependencies: sqlalchemy, mini_perplexity.boundary.db.models
System role: Session persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mini_perplexity.boundary.db.base import utcnow
from mini_perplexity.boundary.db.CRUD.base_crud import BaseCRUD
from mini_perplexity.boundary.db.CRUD.message_crud import message_crud
from mini_perplexity.boundary.db.CRUD.search_analytics_crud import search_analytics_crud
from mini_perplexity.boundary.db.CRUD.source_crud import source_crud
from mini_perplexity.boundary.db.models.message_model import MessageModel
from mini_perplexity.boundary.db.models.search_analytics_model import SearchAnalyticsModel
from mini_perplexity.boundary.db.models.session_model import SessionModel
from mini_perplexity.boundary.db.models.source_model import MessageSourceModel


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Extends BaseCRUD with conversation loading, the recent-session list
    and the explicit cascading delete.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_with_messages(
        self,
        session: AsyncSession,
        id: UUID,
    ) -> SessionModel | None:
        """
        Retrieve session with eagerly loaded messages and their sources.

        selectinload issues one extra query per level instead of a join,
        so a message with several sources appears exactly once.

        Args:
            session: Async database session
            id: Session UUID

        Returns:
            SessionModel with messages (by sequence_number) and sources
            (by display_order) loaded, None if not found
        """
        stmt = (
            select(SessionModel)
            .where(SessionModel.id == id)
            .options(selectinload(SessionModel.messages).selectinload(MessageModel.sources))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_recent(
        self,
        session: AsyncSession,
        limit: int,
        user_id: str | None = None,
    ) -> Sequence[SessionModel]:
        """
        Retrieve active sessions, most recently updated first.

        Args:
            session: Async database session
            limit: Maximum number of sessions to return
            user_id: Restrict to one owner when given

        Returns:
            Sequence of SessionModels without messages
        """
        stmt = select(SessionModel).where(SessionModel.is_active.is_(True))
        if user_id is not None:
            stmt = stmt.where(SessionModel.user_id == user_id)
        stmt = stmt.order_by(SessionModel.updated_at.desc()).limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_title(
        self,
        session: AsyncSession,
        id: UUID,
        title: str,
    ) -> SessionModel | None:
        """
        Update session title.

        Args:
            session: Async database session
            id: Session UUID
            title: New title

        Returns:
            Updated SessionModel if found, None otherwise
        """
        return await self.update_by_id(session, id, title=title)

    async def increment_message_count(self, session: AsyncSession, id: UUID) -> None:
        """
        Count one more message and bump updated_at.

        Args:
            session: Async database session
            id: Session UUID
        """
        stmt = (
            update(SessionModel)
            .where(SessionModel.id == id)
            .values(message_count=SessionModel.message_count + 1, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        await session.execute(stmt)

    async def delete_cascade(self, session: AsyncSession, id: UUID) -> bool:
        """
        Delete a session together with its messages, sources and analytics.

        Children are deleted explicitly, so the result is the same whether
        or not the backend enforces ON DELETE CASCADE.

        Args:
            session: Async database session
            id: Session UUID

        Returns:
            True if the session existed, False otherwise
        """
        message_ids = select(MessageModel.id).where(MessageModel.session_id == id)
        await source_crud.delete_where(session, MessageSourceModel.message_id.in_(message_ids))
        await message_crud.delete_where(session, MessageModel.session_id == id)
        await search_analytics_crud.delete_where(session, SearchAnalyticsModel.session_id == id)
        return await self.delete_by_id(session, id)


session_crud = SessionCRUD()
