"""
Production ledger

Appends dated production entries to a tool and reclassifies its wear.
"""

import uuid
from datetime import date, datetime
from typing import List, Union

from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.core.errors import InvalidInputError, NotFoundError
from toolwear.core.locks import tool_locks
from toolwear.core.logging import get_logger
from toolwear.models import ProductionEntry, Tool
from toolwear.repositories import ToolRecordStore
from toolwear.services.wear_classifier import classify_with_warning
from toolwear.utils.dates import utcnow

logger = get_logger(__name__)


def coerce_record_id(value: Union[uuid.UUID, str]) -> uuid.UUID:
    """Tool record id as UUID; text that is not a UUID cannot name a tool."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise NotFoundError(f"Tool not found: {value}")


def require_positive_int(value, field: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInputError(f"{field} must be a positive integer, got {value!r}")
    return value


def production_history(tool: Tool) -> List[ProductionEntry]:
    """
    Production entries of a tool in call order.

    Rows that cannot be part of a valid ledger (missing date, non-positive
    pieces) are logged and skipped so one corrupt row does not fail the read.
    """
    history = []
    for entry in tool.production_entries:
        if entry.production_date is None or entry.pieces is None or entry.pieces <= 0:
            logger.warning(
                "Skipping malformed production history entry",
                tool_pk=str(tool.id),
                entry_id=entry.id,
                pieces=entry.pieces,
                production_date=str(entry.production_date),
            )
            continue
        history.append(entry)
    return history


def apply_classification(tool: Tool) -> None:
    """Rewrite the cached condition and warning flag from the tool's counters."""
    tool.condition, tool.warning = classify_with_warning(
        tool.accumulated_production, tool.useful_life
    )


class ProductionLedger:
    """Records production against active tools"""

    def __init__(self, session: AsyncSession):
        self.store = ToolRecordStore(session)

    async def record_production(
        self,
        record_id: Union[uuid.UUID, str],
        pieces: int,
        production_date: date,
    ) -> Tool:
        """
        Add produced pieces to a tool.

        Args:
            record_id: tool record id
            pieces: positive number of pieces produced
            production_date: production day (plant local time)

        Returns:
            Tool: the updated tool with its full production history loaded

        Raises:
            InvalidInputError: pieces is not a positive integer or the date is missing
            NotFoundError: tool does not exist or is inactive
        """
        require_positive_int(pieces, "pieces")
        if not isinstance(production_date, date):
            raise InvalidInputError("production date is required")
        if isinstance(production_date, datetime):
            production_date = production_date.date()
        record_id = coerce_record_id(record_id)

        async with tool_locks.hold(f"tool:{record_id}"):
            tool = await self.store.get_tool(record_id, for_update=True)
            if tool is None or not tool.is_active:
                raise NotFoundError(f"Tool not found or inactive: {record_id}")

            tool.accumulated_production += pieces
            apply_classification(tool)
            tool.updated_at = utcnow()

            await self.store.production.add(
                ProductionEntry(tool_pk=tool.id, pieces=pieces, production_date=production_date)
            )
            await self.store.commit()

            logger.info(
                "Production recorded",
                tool_pk=str(tool.id),
                mold_id=tool.mold_id,
                tool_id=tool.tool_id,
                pieces=pieces,
                accumulated_production=tool.accumulated_production,
                condition=tool.condition.value,
            )

            return await self.store.get_tool(record_id, with_history=True)
