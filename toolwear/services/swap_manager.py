"""
Swap manager

A swap is the physical replacement of a tool's wearing part: the current
run is closed out as an immutable SwapEvent and the tool starts over from a
fresh state with an empty production ledger.
"""

import uuid
from typing import List, Union

from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.core.errors import NotFoundError
from toolwear.core.locks import tool_locks
from toolwear.core.logging import get_logger
from toolwear.models import SwapEvent, Tool
from toolwear.repositories import ToolRecordStore
from toolwear.services.production_ledger import apply_classification, coerce_record_id
from toolwear.utils.dates import utcnow

logger = get_logger(__name__)


class SwapManager:
    """Swaps tools and serves the swap history"""

    def __init__(self, session: AsyncSession):
        self.store = ToolRecordStore(session)

    async def swap_tool(self, record_id: Union[uuid.UUID, str]) -> Tool:
        """
        Swap an active tool.

        Emits one SwapEvent with the pre-swap production, resets the counter
        to 0 (condition OK, warning cleared) and purges the production ledger,
        all in one transaction.

        Raises:
            NotFoundError: tool does not exist or is inactive
        """
        record_id = coerce_record_id(record_id)

        async with tool_locks.hold(f"tool:{record_id}"):
            tool = await self.store.get_tool(record_id, for_update=True)
            if tool is None or not tool.is_active:
                raise NotFoundError(f"Tool not found or inactive: {record_id}")

            production_before_swap = tool.accumulated_production
            now = utcnow()

            await self.store.swaps.add(
                SwapEvent(
                    mold_id=tool.mold_id,
                    tool_id=tool.tool_id,
                    production_before_swap=production_before_swap,
                    swap_timestamp=now,
                )
            )

            tool.accumulated_production = 0
            apply_classification(tool)
            tool.updated_at = now

            purged = await self.store.purge_production(tool.id)
            await self.store.commit()

            logger.info(
                "Tool swapped",
                tool_pk=str(tool.id),
                mold_id=tool.mold_id,
                tool_id=tool.tool_id,
                production_before_swap=production_before_swap,
                purged_entries=purged,
            )

            return await self.store.get_tool(record_id, with_history=True)

    async def list_swap_history(self) -> List[SwapEvent]:
        """Every swap ever recorded, most recent first."""
        return await self.store.list_swap_history()
