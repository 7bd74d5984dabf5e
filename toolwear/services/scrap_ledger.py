"""
Scrap ledger

Monthly rejected-unit counts per mold. A submission for a (mold, month)
that already has a count replaces it; nothing is ever summed on write.
"""

from collections import OrderedDict
from datetime import date
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.core.errors import InvalidInputError
from toolwear.core.locks import scrap_locks
from toolwear.core.logging import get_logger
from toolwear.models import ScrapEntry
from toolwear.repositories import ToolRecordStore
from toolwear.services.production_ledger import require_positive_int
from toolwear.utils.dates import format_month_year, parse_month_year, utcnow

logger = get_logger(__name__)


def group_scrap_by_month(entries) -> Dict[str, Dict[str, int]]:
    """{"MM/YYYY": {mold_id: quantity}} in the order the entries are given."""
    grouped: Dict[str, Dict[str, int]] = OrderedDict()
    for entry in entries:
        month_key = format_month_year(entry.month_start)
        grouped.setdefault(month_key, OrderedDict())[entry.mold_id] = entry.quantity
    return grouped


class ScrapLedger:
    """Records and reads scrap per mold and month"""

    def __init__(self, session: AsyncSession):
        self.store = ToolRecordStore(session)

    async def record_scrap(self, mold_id: str, month_year: str, quantity: int) -> ScrapEntry:
        """
        Upsert the scrap count of a mold for one month.

        Args:
            mold_id: mold the scrap is attributed to
            month_year: "MM/YYYY"
            quantity: positive number of rejected units

        Raises:
            InvalidInputError: empty mold, malformed month or non-positive quantity
        """
        if not mold_id or not str(mold_id).strip():
            raise InvalidInputError("moldId is required")
        mold_id = str(mold_id).strip()
        month_start = parse_month_year(month_year)
        require_positive_int(quantity, "quantity")

        async with scrap_locks.hold(f"{mold_id}:{month_start.isoformat()}"):
            created = None
            entry = await self.store.get_scrap(mold_id, month_start)
            if entry is None:
                created = await self._insert_month(mold_id, month_start, quantity)
                if created is None:
                    entry = await self.store.get_scrap(mold_id, month_start)

            if created is not None:
                entry, previous, action = created, None, "created"
            else:
                previous = entry.quantity
                entry.quantity = quantity
                entry.updated_at = utcnow()
                await self.store.scrap.update(entry)
                await self.store.commit()
                action = "replaced"

        logger.info(
            "Scrap recorded",
            mold_id=mold_id,
            month_year=format_month_year(month_start),
            quantity=quantity,
            action=action,
            previous_quantity=previous,
        )
        return entry

    async def _insert_month(self, mold_id: str, month_start: date, quantity: int) -> Optional[ScrapEntry]:
        """Insert the first count of a month; None when another worker process got there first."""
        try:
            entry = await self.store.scrap.add(
                ScrapEntry(mold_id=mold_id, month_start=month_start, quantity=quantity)
            )
            await self.store.commit()
        except IntegrityError:
            await self.store.rollback()
            logger.info("Scrap month already created elsewhere", mold_id=mold_id, month_start=month_start.isoformat())
            return None
        return entry

    async def scrap_by_month(self) -> Dict[str, Dict[str, int]]:
        """All scrap grouped by month (newest first), then by mold."""
        return group_scrap_by_month(await self.store.list_scrap())
