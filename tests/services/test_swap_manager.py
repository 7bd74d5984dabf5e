import uuid
from datetime import date, datetime, timezone

import pytest

from toolwear.core.errors import NotFoundError
from toolwear.models import ToolCondition
from toolwear.services import ProductionLedger, SwapManager, ToolRegistry


@pytest.fixture
async def worn_tool(db_session):
    tool = await ToolRegistry(db_session).create_tool("MOLDE-B", "FER-B1", 100000)
    ledger = ProductionLedger(db_session)
    await ledger.record_production(tool.id, 60000, date(2025, 8, 20))
    return await ledger.record_production(tool.id, 25000, date(2025, 8, 21))


@pytest.mark.asyncio
async def test_swap_resets_tool_and_records_event(db_session, worn_tool):
    assert worn_tool.condition is ToolCondition.REPLACE
    manager = SwapManager(db_session)

    tool = await manager.swap_tool(worn_tool.id)

    assert tool.accumulated_production == 0
    assert tool.condition is ToolCondition.OK
    assert tool.warning is False
    assert tool.production_entries == []

    history = await manager.list_swap_history()
    assert len(history) == 1
    assert history[0].mold_id == "MOLDE-B"
    assert history[0].tool_id == "FER-B1"
    assert history[0].production_before_swap == 85000
    assert history[0].swap_timestamp is not None


@pytest.mark.asyncio
async def test_swap_is_idempotent_on_state_not_on_history(db_session, worn_tool):
    manager = SwapManager(db_session)

    await manager.swap_tool(worn_tool.id)
    tool = await manager.swap_tool(worn_tool.id)

    assert tool.accumulated_production == 0
    history = await manager.list_swap_history()
    assert len(history) == 2
    assert [event.production_before_swap for event in history] == [0, 85000]


@pytest.mark.asyncio
async def test_swap_purges_only_the_swapped_tools_ledger(db_session, worn_tool):
    other = await ToolRegistry(db_session).create_tool("MOLDE-B", "FER-B2", 100000)
    await ProductionLedger(db_session).record_production(other.id, 500, date(2025, 8, 21))

    await SwapManager(db_session).swap_tool(worn_tool.id)

    other = await SwapManager(db_session).store.get_tool(other.id, with_history=True)
    assert other.accumulated_production == 500
    assert len(other.production_entries) == 1


@pytest.mark.asyncio
async def test_production_after_swap_starts_a_new_ledger(db_session, worn_tool):
    await SwapManager(db_session).swap_tool(worn_tool.id)

    tool = await ProductionLedger(db_session).record_production(worn_tool.id, 10, date(2025, 8, 22))

    assert tool.accumulated_production == 10
    assert [entry.pieces for entry in tool.production_entries] == [10]


@pytest.mark.asyncio
async def test_swap_unknown_or_inactive_tool(db_session, worn_tool):
    manager = SwapManager(db_session)

    with pytest.raises(NotFoundError):
        await manager.swap_tool(uuid.uuid4())

    await ToolRegistry(db_session).retire_tool(worn_tool.id)
    with pytest.raises(NotFoundError):
        await manager.swap_tool(worn_tool.id)
    assert await manager.list_swap_history() == []


@pytest.mark.asyncio
async def test_swap_history_is_most_recent_first(db_session, factory):
    store = SwapManager(db_session).store
    await store.swaps.add(factory.swap_event(tool_id="OLD", swap_timestamp=datetime(2025, 7, 1, tzinfo=timezone.utc)))
    await store.swaps.add(factory.swap_event(tool_id="NEW", swap_timestamp=datetime(2025, 8, 1, tzinfo=timezone.utc)))
    await store.swaps.add(factory.swap_event(tool_id="MID", swap_timestamp=datetime(2025, 7, 15, tzinfo=timezone.utc)))
    await store.commit()

    history = await SwapManager(db_session).list_swap_history()

    assert [event.tool_id for event in history] == ["NEW", "MID", "OLD"]
