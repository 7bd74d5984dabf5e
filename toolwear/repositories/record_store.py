"""Tool Record Store: async CRUD access to the tool wear tables."""

from __future__ import annotations

import uuid
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from toolwear.core.database import Base
from toolwear.models import MoldComment, ProductionEntry, ScrapEntry, SwapEvent, Tool

__all__ = [
    "BaseRepository",
    "ToolRecordStore",
]

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Generic create/read/update/delete primitives for one model.

    Parameters
    ----------
    session : AsyncSession
        Request-scoped database session
    model_class : type[T]
        ORM model class
    """

    def __init__(self, session: AsyncSession, model_class: Type[T]) -> None:
        self.session = session
        self.model_class = model_class

    async def get(self, id_value: Any) -> Optional[T]:
        return await self.session.get(self.model_class, id_value)

    async def list(self, **filters: Any) -> List[T]:
        """
        List entities matching field=value filters.

        Examples
        --------
        >>> tools = await repo.list(mold_id="MOLDE-A", is_active=True)
        """
        stmt = select(self.model_class)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model_class, key) == value)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add(self, obj: T) -> T:
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def update(self, obj: T) -> T:
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def delete(self, obj: T) -> None:
        await self.session.delete(obj)
        await self.session.flush()

    async def delete_where(self, **filters: Any) -> int:
        """Bulk delete rows matching field=value filters; returns the row count."""
        stmt = delete(self.model_class)
        for key, value in filters.items():
            stmt = stmt.where(getattr(self.model_class, key) == value)
        result = await self.session.execute(stmt)
        return result.rowcount or 0


class ToolRecordStore:
    """
    Durable storage of tools, production entries, swap events, mold
    comments and scrap entries.

    The engine reaches storage only through this class. Transactions are
    owned by the caller: nothing here commits.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.tools = BaseRepository(session, Tool)
        self.production = BaseRepository(session, ProductionEntry)
        self.swaps = BaseRepository(session, SwapEvent)
        self.comments = BaseRepository(session, MoldComment)
        self.scrap = BaseRepository(session, ScrapEntry)

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    async def get_tool(
        self,
        record_id: uuid.UUID,
        *,
        with_history: bool = False,
        for_update: bool = False,
    ) -> Optional[Tool]:
        """
        Fetch one tool by record id, refreshing any copy already in the session.

        ``for_update`` takes a row lock on databases that support it.
        """
        stmt = select(Tool).where(Tool.id == record_id)
        if with_history:
            stmt = stmt.options(selectinload(Tool.production_entries))
        if for_update:
            stmt = stmt.with_for_update()
        stmt = stmt.execution_options(populate_existing=True)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_active_tools(self) -> List[Tool]:
        """Active tools with their production history, ordered by mold then tool label."""
        stmt = (
            select(Tool)
            .where(Tool.is_active.is_(True))
            .options(selectinload(Tool.production_entries))
            .order_by(Tool.mold_id, Tool.tool_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_active_tool(self, mold_id: str, tool_id: str) -> Optional[Tool]:
        stmt = select(Tool).where(
            Tool.mold_id == mold_id,
            Tool.tool_id == tool_id,
            Tool.is_active.is_(True),
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_tools(self) -> int:
        result = await self.session.execute(select(func.count(Tool.id)))
        return result.scalar() or 0

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    async def purge_production(self, record_id: uuid.UUID) -> int:
        return await self.production.delete_where(tool_pk=record_id)

    async def list_swap_history(self) -> List[SwapEvent]:
        """All swap events, most recent first."""
        stmt = select(SwapEvent).order_by(SwapEvent.swap_timestamp.desc(), SwapEvent.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_comments(self, mold_id: str) -> List[MoldComment]:
        """Comments of one mold, newest first."""
        stmt = (
            select(MoldComment)
            .where(MoldComment.mold_id == mold_id)
            .order_by(MoldComment.created_at.desc(), MoldComment.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_scrap(self, mold_id: str, month_start) -> Optional[ScrapEntry]:
        stmt = select(ScrapEntry).where(
            ScrapEntry.mold_id == mold_id,
            ScrapEntry.month_start == month_start,
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_scrap(self) -> List[ScrapEntry]:
        """All scrap entries, newest month first, then by mold."""
        stmt = select(ScrapEntry).order_by(ScrapEntry.month_start.desc(), ScrapEntry.mold_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
