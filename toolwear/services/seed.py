"""
Demo data

Loads a small plant (five molds, six tools) with swap, comment and scrap
history so the dashboard has something to show on a fresh database.
Only runs against an empty tools table.
"""

from datetime import date, datetime, timezone, tzinfo

from sqlalchemy.ext.asyncio import AsyncSession

from toolwear.core.logging import get_logger
from toolwear.models import MoldComment, ProductionEntry, ScrapEntry, SwapEvent, Tool
from toolwear.repositories import ToolRecordStore
from toolwear.services.production_ledger import apply_classification
from toolwear.utils.dates import local_today

logger = get_logger(__name__)

DEMO_TOOLS = [
    {"mold_id": "MOLDE-A", "tool_id": "FER-A1", "useful_life": 100000, "accumulated_production": 85000, "notes": "Ferramenta de precisão."},
    {"mold_id": "MOLDE-A", "tool_id": "FER-A2", "useful_life": 150000, "accumulated_production": 30000, "notes": ""},
    {"mold_id": "MOLDE-B", "tool_id": "FER-B1", "useful_life": 200000, "accumulated_production": 144000, "notes": "Verificar desgaste a cada 10k peças."},
    {"mold_id": "MOLDE-C", "tool_id": "FER-C1", "useful_life": 120000, "accumulated_production": 12000, "notes": ""},
    {"mold_id": "MOLDE-D", "tool_id": "FER-D1", "useful_life": 120000, "accumulated_production": 115000, "notes": ""},
    {"mold_id": "MOLDE-E", "tool_id": "FER-E1", "useful_life": 100000, "accumulated_production": 95000, "notes": "Urgente!"},
]

DEMO_SWAPS = [
    ("MOLDE-B", "FER-B1-OLD", 200000, datetime(2025, 7, 15, 10, 30, tzinfo=timezone.utc)),
    ("MOLDE-A", "FER-A1-OLD", 100000, datetime(2025, 8, 1, 14, 0, tzinfo=timezone.utc)),
    ("MOLDE-A", "FER-A2-OLD", 150000, datetime(2025, 8, 10, 8, 0, tzinfo=timezone.utc)),
    ("MOLDE-E", "FER-E1-OLD", 100000, datetime(2025, 8, 12, 9, 0, tzinfo=timezone.utc)),
    ("MOLDE-B", "FER-B1-NEW", 180000, datetime(2025, 8, 20, 11, 0, tzinfo=timezone.utc)),
]

DEMO_COMMENTS = [
    ("MOLDE-A", "Início de produção com lote novo de matéria-prima.", date(2025, 8, 20)),
    ("MOLDE-A", "Pequeno ajuste de pressão realizado às 14h.", date(2025, 8, 21)),
    ("MOLDE-A", "Verificar rebarba nas próximas 1000 peças.", date(2025, 8, 21)),
    ("MOLDE-B", "Manutenção preventiva realizada.", date(2025, 7, 22)),
]

DEMO_SCRAP = [
    ("MOLDE-B", date(2025, 7, 1), 1200),
    ("MOLDE-A", date(2025, 8, 1), 550),
    ("MOLDE-E", date(2025, 8, 1), 250),
]


async def seed_demo_data(session: AsyncSession, tz: tzinfo) -> bool:
    """
    Insert the demo data set if no tool exists yet.

    Returns:
        bool: True if data was inserted
    """
    store = ToolRecordStore(session)
    if await store.count_tools() > 0:
        return False

    today = local_today(tz)
    for row in DEMO_TOOLS:
        tool = Tool(**row, is_active=True)
        apply_classification(tool)
        await store.tools.add(tool)
        await store.production.add(
            ProductionEntry(tool_pk=tool.id, pieces=row["accumulated_production"], production_date=today)
        )

    for mold_id, tool_id, production, swapped_at in DEMO_SWAPS:
        await store.swaps.add(
            SwapEvent(mold_id=mold_id, tool_id=tool_id, production_before_swap=production, swap_timestamp=swapped_at)
        )

    for mold_id, text, comment_date in DEMO_COMMENTS:
        await store.comments.add(MoldComment(mold_id=mold_id, comment=text, comment_date=comment_date))

    for mold_id, month_start, quantity in DEMO_SCRAP:
        await store.scrap.add(ScrapEntry(mold_id=mold_id, month_start=month_start, quantity=quantity))

    await store.commit()
    logger.info(
        "Demo data seeded",
        tools=len(DEMO_TOOLS),
        swaps=len(DEMO_SWAPS),
        comments=len(DEMO_COMMENTS),
        scrap_entries=len(DEMO_SCRAP),
    )
    return True
