import uuid
from datetime import date, datetime

import pytest

from toolwear.core.errors import InvalidInputError, NotFoundError
from toolwear.models import ToolCondition
from toolwear.services import ProductionLedger, ToolRegistry, production_history


async def _new_tool(db_session, useful_life=100000, mold_id="MOLDE-A", tool_id="FER-A1"):
    return await ToolRegistry(db_session).create_tool(mold_id, tool_id, useful_life)


@pytest.mark.asyncio
async def test_wear_scenario_warn_then_replace(db_session):
    tool = await _new_tool(db_session)
    ledger = ProductionLedger(db_session)

    tool = await ledger.record_production(tool.id, 75000, date(2025, 8, 20))
    assert tool.accumulated_production == 75000
    assert tool.condition is ToolCondition.WARN
    assert tool.warning is True

    tool = await ledger.record_production(tool.id, 10000, date(2025, 8, 21))
    assert tool.accumulated_production == 85000
    assert tool.condition is ToolCondition.REPLACE
    assert tool.warning is True


@pytest.mark.asyncio
async def test_production_is_additive_and_keeps_call_order(db_session):
    tool = await _new_tool(db_session, useful_life=1000000)
    ledger = ProductionLedger(db_session)
    calls = [
        (500, date(2025, 8, 21)),
        (120, date(2025, 8, 19)),
        (300, date(2025, 8, 21)),
        (80, date(2025, 7, 31)),
    ]

    for pieces, day in calls:
        tool = await ledger.record_production(str(tool.id), pieces, day)

    assert tool.accumulated_production == sum(p for p, _ in calls)
    history = production_history(tool)
    assert [(e.pieces, e.production_date) for e in history] == calls


@pytest.mark.asyncio
async def test_same_day_entries_stay_distinct(db_session):
    tool = await _new_tool(db_session)
    ledger = ProductionLedger(db_session)

    await ledger.record_production(tool.id, 100, date(2025, 8, 21))
    tool = await ledger.record_production(tool.id, 100, date(2025, 8, 21))

    assert len(tool.production_entries) == 2


@pytest.mark.asyncio
async def test_datetime_is_reduced_to_its_day(db_session):
    tool = await _new_tool(db_session)

    tool = await ProductionLedger(db_session).record_production(tool.id, 10, datetime(2025, 8, 21, 15, 30))

    assert tool.production_entries[0].production_date == date(2025, 8, 21)


@pytest.mark.asyncio
@pytest.mark.parametrize("pieces", [0, -5, 2.5, "10", True, None])
async def test_rejects_invalid_pieces(db_session, pieces):
    tool = await _new_tool(db_session)

    with pytest.raises(InvalidInputError) as exc:
        await ProductionLedger(db_session).record_production(tool.id, pieces, date(2025, 8, 21))
    assert exc.value.code == "E_INVALID_INPUT"


@pytest.mark.asyncio
async def test_rejects_missing_date(db_session):
    tool = await _new_tool(db_session)

    with pytest.raises(InvalidInputError):
        await ProductionLedger(db_session).record_production(tool.id, 10, None)


@pytest.mark.asyncio
async def test_unknown_tool_is_not_found(db_session):
    ledger = ProductionLedger(db_session)

    with pytest.raises(NotFoundError):
        await ledger.record_production(uuid.uuid4(), 10, date(2025, 8, 21))
    with pytest.raises(NotFoundError):
        await ledger.record_production("not-a-uuid", 10, date(2025, 8, 21))


@pytest.mark.asyncio
async def test_inactive_tool_is_not_found(db_session):
    tool = await _new_tool(db_session)
    await ToolRegistry(db_session).retire_tool(tool.id)

    with pytest.raises(NotFoundError):
        await ProductionLedger(db_session).record_production(tool.id, 10, date(2025, 8, 21))


@pytest.mark.asyncio
async def test_failed_call_leaves_tool_unchanged(db_session):
    tool = await _new_tool(db_session)
    ledger = ProductionLedger(db_session)
    await ledger.record_production(tool.id, 100, date(2025, 8, 21))

    with pytest.raises(InvalidInputError):
        await ledger.record_production(tool.id, -1, date(2025, 8, 21))

    tool = await ledger.store.get_tool(tool.id, with_history=True)
    assert tool.accumulated_production == 100
    assert len(tool.production_entries) == 1


def test_production_history_skips_malformed_entries(factory):
    tool = factory.tool()
    good = factory.production_entry(tool, pieces=10)
    factory.production_entry(tool, pieces=0)
    bad_date = factory.production_entry(tool, pieces=5)
    bad_date.production_date = None

    assert production_history(tool) == [good]
