import asyncio

import pytest

from toolwear.core.locks import KeyedLock


@pytest.mark.asyncio
async def test_same_key_is_serialised():
    locks = KeyedLock()
    events = []

    async def writer(name):
        async with locks.hold("tool:1"):
            events.append(f"{name}-in")
            await asyncio.sleep(0.01)
            events.append(f"{name}-out")

    await asyncio.gather(writer("a"), writer("b"))

    assert events in (["a-in", "a-out", "b-in", "b-out"], ["b-in", "b-out", "a-in", "a-out"])


@pytest.mark.asyncio
async def test_different_keys_run_in_parallel():
    locks = KeyedLock()
    entered = asyncio.Event()

    async def first():
        async with locks.hold("tool:1"):
            await asyncio.wait_for(entered.wait(), timeout=1)

    async def second():
        async with locks.hold("tool:2"):
            entered.set()

    await asyncio.gather(first(), second())


@pytest.mark.asyncio
async def test_entries_are_released():
    locks = KeyedLock()

    async with locks.hold("tool:1"):
        assert "tool:1" in locks
        assert len(locks) == 1

    assert "tool:1" not in locks
    assert len(locks) == 0


@pytest.mark.asyncio
async def test_entry_released_when_body_raises():
    locks = KeyedLock()

    with pytest.raises(RuntimeError):
        async with locks.hold("tool:1"):
            raise RuntimeError("boom")

    assert len(locks) == 0
