import asyncio
from unittest.mock import AsyncMock

import pytest

from ipldblock.utils.async_helpers import OnceCell


def test_prefilled_and_empty():
    empty = OnceCell(name="data")
    assert not empty.is_set
    assert empty.peek() is None

    filled = OnceCell(b"bytes")
    assert filled.is_set
    assert filled.peek() == b"bytes"


@pytest.mark.asyncio
async def test_prefilled_cell_skips_factory():
    factory = AsyncMock(return_value="new")
    cell = OnceCell("old")
    assert await cell.get_or_init(factory) == "old"
    factory.assert_not_called()


@pytest.mark.asyncio
async def test_factory_runs_once():
    factory = AsyncMock(return_value="value")
    cell = OnceCell()
    assert await cell.get_or_init(factory) == "value"
    assert await cell.get_or_init(factory) == "value"
    assert factory.call_count == 1


@pytest.mark.asyncio
async def test_concurrent_callers_share_computation():
    calls = 0

    async def factory():
        nonlocal calls
        calls += 1
        await asyncio.sleep(0.01)
        return object()

    cell = OnceCell()
    results = await asyncio.gather(*(cell.get_or_init(factory) for _ in range(10)))

    assert calls == 1
    assert all(r is results[0] for r in results)


@pytest.mark.asyncio
async def test_failure_leaves_cell_empty():
    factory = AsyncMock(side_effect=[RuntimeError("boom"), "recovered"])
    cell = OnceCell()

    with pytest.raises(RuntimeError):
        await cell.get_or_init(factory)
    assert not cell.is_set

    assert await cell.get_or_init(factory) == "recovered"
    assert factory.call_count == 2
