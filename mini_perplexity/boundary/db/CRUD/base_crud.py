"""
Shared persistence helpers for the conversation tables.

Every table in the store is keyed by a UUID `id`. BaseCRUD covers the
primary-key operations plus filtered listing, counting and bulk deletes
built from SQLAlchemy criteria, so the table-specific classes only add
the queries that carry domain rules (sequencing, click tracking, the
cascading session delete).

Nothing here commits. ChatService and the other services own the
transaction and decide when a unit of work is durable.

Dependencies: sqlalchemy
System role: Foundation for all database CRUD operations
"""

from typing import Any, Generic, Sequence, TypeVar
from uuid import UUID

from sqlalchemy import ColumnElement, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.boundary.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseCRUD(Generic[ModelT]):
    """
    Table gateway for one UUID-keyed model.

    Attributes:
        model: Mapped class the statements are built against
    """

    def __init__(self, model: type[ModelT]) -> None:
        self.model = model

    async def create(self, session: AsyncSession, **fields: Any) -> ModelT:
        """
        Insert one row and read back server defaults.

        Args:
            session: Async database session
            **fields: Column values

        Returns:
            The flushed instance with id and timestamps populated
        """
        row = self.model(**fields)
        session.add(row)
        await session.flush()
        await session.refresh(row)
        return row

    async def get_by_id(self, session: AsyncSession, id: UUID) -> ModelT | None:
        result = await session.execute(select(self.model).where(self.model.id == id))
        return result.scalar_one_or_none()

    async def find(
        self,
        session: AsyncSession,
        *criteria: ColumnElement[bool],
        order_by: Any = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[ModelT]:
        """
        Rows matching all criteria.

        Args:
            session: Async database session
            *criteria: WHERE clauses joined with AND
            order_by: Column or ordering expression
            limit: Page size, None for no limit
            offset: Rows to skip

        Returns:
            Matching instances in the requested order
        """
        stmt = select(self.model).where(*criteria)
        if order_by is not None:
            stmt = stmt.order_by(order_by)
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def update_by_id(self, session: AsyncSession, id: UUID, **values: Any) -> ModelT | None:
        """
        Apply column values to one row.

        The identity map is synchronized, so an instance already loaded in
        this session sees the new values.

        Returns:
            Updated instance, None when the id is unknown
        """
        stmt = update(self.model).where(self.model.id == id).values(**values).returning(self.model)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_where(self, session: AsyncSession, *criteria: ColumnElement[bool]) -> int:
        """
        Bulk delete rows matching all criteria.

        Loaded instances are left untouched in the session; callers that
        delete children should not read them afterwards.

        Returns:
            int: Number of rows removed
        """
        stmt = delete(self.model).where(*criteria).execution_options(synchronize_session=False)
        result = await session.execute(stmt)
        return result.rowcount

    async def delete_by_id(self, session: AsyncSession, id: UUID) -> bool:
        """True when a row with this id existed and is now gone."""
        return await self.delete_where(session, self.model.id == id) > 0

    async def exists(self, session: AsyncSession, id: UUID) -> bool:
        result = await session.execute(select(self.model.id).where(self.model.id == id))
        return result.scalar_one_or_none() is not None

    async def count(self, session: AsyncSession, *criteria: ColumnElement[bool]) -> int:
        """Number of rows matching all criteria, or the whole table."""
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await session.execute(stmt)
        return result.scalar_one()
