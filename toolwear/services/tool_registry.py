"""
Tool registry

Creation, listing, retirement and deletion of tools.
"""

import uuid
from typing import List, Optional, Union

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.core.errors import ConflictError, InvalidInputError, NotFoundError
from toolwear.core.locks import tool_locks
from toolwear.core.logging import get_logger
from toolwear.models import Tool, ToolCondition
from toolwear.repositories import ToolRecordStore
from toolwear.services.production_ledger import coerce_record_id, require_positive_int
from toolwear.utils.dates import utcnow

logger = get_logger(__name__)


def _required_text(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidInputError(f"{field} is required")
    return str(value).strip()


class ToolRegistry:
    """Lifecycle of tool records"""

    def __init__(self, session: AsyncSession):
        self.store = ToolRecordStore(session)

    async def list_active_tools(self) -> List[Tool]:
        """Active tools with production history, ordered by mold and tool label."""
        return await self.store.list_active_tools()

    async def create_tool(
        self,
        mold_id: str,
        tool_id: str,
        useful_life: int,
        notes: Optional[str] = "",
    ) -> Tool:
        """
        Register a new tool with zero production.

        Raises:
            InvalidInputError: missing labels or non-positive useful life
            ConflictError: an active tool already uses (mold_id, tool_id)
        """
        mold_id = _required_text(mold_id, "moldId")
        tool_id = _required_text(tool_id, "toolId")
        require_positive_int(useful_life, "usefulLife")

        async with tool_locks.hold(f"pair:{mold_id}\x1f{tool_id}"):
            if await self.store.find_active_tool(mold_id, tool_id) is not None:
                raise ConflictError(
                    f"An active tool {tool_id} already exists on mold {mold_id}"
                )

            now = utcnow()
            tool = Tool(
                mold_id=mold_id,
                tool_id=tool_id,
                useful_life=useful_life,
                accumulated_production=0,
                condition=ToolCondition.OK,
                warning=False,
                notes=notes or "",
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            try:
                await self.store.tools.add(tool)
                await self.store.commit()
            except IntegrityError as exc:
                # Another worker process inserted the pair after the check above
                await self.store.rollback()
                logger.warning("Duplicate active tool rejected", mold_id=mold_id, tool_id=tool_id)
                raise ConflictError(
                    f"An active tool {tool_id} already exists on mold {mold_id}"
                ) from exc

        logger.info(
            "Tool created",
            tool_pk=str(tool.id),
            mold_id=mold_id,
            tool_id=tool_id,
            useful_life=useful_life,
        )
        return await self.store.get_tool(tool.id, with_history=True)

    async def retire_tool(self, record_id: Union[uuid.UUID, str]) -> Tool:
        """
        Mark an active tool inactive.

        The record and its history stay in storage for audit but drop out of
        every active-tool query, freeing its (mold_id, tool_id) pair.

        Raises:
            NotFoundError: tool does not exist or is already inactive
        """
        record_id = coerce_record_id(record_id)

        async with tool_locks.hold(f"tool:{record_id}"):
            tool = await self.store.get_tool(record_id, for_update=True)
            if tool is None or not tool.is_active:
                raise NotFoundError(f"Tool not found or inactive: {record_id}")

            tool.is_active = False
            tool.updated_at = utcnow()
            await self.store.commit()

        logger.info("Tool retired", tool_pk=str(record_id), mold_id=tool.mold_id, tool_id=tool.tool_id)
        return await self.store.get_tool(record_id, with_history=True)

    async def delete_tool(self, record_id: Union[uuid.UUID, str]) -> None:
        """
        Hard-delete a tool and its production entries, active or not.

        Swap events for the tool's mold and label are left untouched.

        Raises:
            NotFoundError: tool does not exist
        """
        record_id = coerce_record_id(record_id)

        async with tool_locks.hold(f"tool:{record_id}"):
            tool = await self.store.get_tool(record_id, with_history=True, for_update=True)
            if tool is None:
                raise NotFoundError(f"Tool not found: {record_id}")

            # ORM cascade removes the loaded production entries with the tool
            purged = len(tool.production_entries)
            await self.store.tools.delete(tool)
            await self.store.commit()

        logger.info(
            "Tool deleted",
            tool_pk=str(record_id),
            mold_id=tool.mold_id,
            tool_id=tool.tool_id,
            purged_entries=purged,
        )
