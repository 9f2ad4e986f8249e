import asyncio

import pytest

from keyedlock.aio import KeyedLock


@pytest.mark.asyncio
@pytest.mark.parametrize("keys", [[1], [1, 2], ["a", "b", "c"]])
async def test_registry_tracks_held_keys(keys):
    keyed_lock = KeyedLock()
    assert len(keyed_lock) == 0
    guards = [await keyed_lock.lock(key) for key in keys]
    assert [guard.key for guard in guards] == keys
    assert len(keyed_lock) == len(keys)
    for remaining, guard in zip(reversed(range(len(keys))), guards):
        guard.release()
        assert guard.released
        assert len(keyed_lock) == remaining


@pytest.mark.asyncio
@pytest.mark.parametrize("use_async", [True, False])
async def test_context_manager_unlock(use_async):
    keyed_lock = KeyedLock()
    for _ in range(2):
        guard = await keyed_lock.lock(1)
        if use_async:
            async with guard as entered:
                assert entered is guard
                assert len(keyed_lock) == 1
        else:
            with guard as entered:
                assert entered is guard
                assert len(keyed_lock) == 1
        assert guard.released
    assert len(keyed_lock) == 0


@pytest.mark.asyncio
async def test_lock_contention():
    keyed_lock = KeyedLock()
    guard1 = await keyed_lock.lock(1)

    async def contender():
        async with await keyed_lock.lock(1):
            pass

    task = asyncio.create_task(contender())
    await asyncio.sleep(0.01)
    assert not task.done()

    guard1.release()
    await asyncio.sleep(0.01)
    assert task.done()
    assert task.exception() is None
    assert len(keyed_lock) == 0


@pytest.mark.asyncio
async def test_mutual_exclusion_many_tasks():
    keyed_lock = KeyedLock()
    inside = 0
    max_inside = 0

    async def work():
        nonlocal inside, max_inside
        async with await keyed_lock.lock("k"):
            inside += 1
            max_inside = max(max_inside, inside)
            await asyncio.sleep(0.001)
            inside -= 1

    await asyncio.gather(*(work() for _ in range(10)))
    assert max_inside == 1
    assert len(keyed_lock) == 0


@pytest.mark.asyncio
async def test_cancelled_waiter_is_cleaned_up():
    keyed_lock = KeyedLock()
    guard = await keyed_lock.lock(1)
    task = asyncio.create_task(keyed_lock.lock(1))
    await asyncio.sleep(0.01)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    assert len(keyed_lock) == 1
    guard.release()
    assert len(keyed_lock) == 0


@pytest.mark.asyncio
async def test_double_release_raises():
    keyed_lock = KeyedLock()
    guard = await keyed_lock.lock("a")
    guard.release()
    with pytest.raises(RuntimeError):
        guard.release()
    assert len(keyed_lock) == 0