# keyedlock

A keyed lock: mutually exclusive access to a resource identified by a key.
Locks for different keys never block each other; two holders of the same key
take turns. A key's entry is kept only while someone holds or is waiting for
it, so the registry does not grow with every key ever used.

Two flavours are provided:

- `keyedlock.threaded.KeyedLock` for threads
- `keyedlock.aio.KeyedLock` for asyncio tasks

Keys may be any hashable value. The locks are not reentrant: locking a key
you already hold waits forever.

## Installation

```
pip install keyedlock
```

## Threads

`KeyedLock.lock(key)` blocks until the key is free and returns a `Guard`.
The guard is a context manager; leaving the `with` block releases it.

```python
from keyedlock.threaded import KeyedLock

locks = KeyedLock()

def update(user_id):
    with locks.lock(user_id):
        ...  # only one thread at a time per user_id

guard = locks.lock("report")
try:
    ...
finally:
    guard.release()

print(len(locks))  # number of keys currently held or waited on
```

## asyncio

`KeyedLock.lock(key)` is a coroutine: await it to get a `Guard`. The guard
can be used with `async with` (or a plain `with`), or released by hand.

```python
from keyedlock.aio import KeyedLock

locks = KeyedLock()

async def update(user_id):
    async with await locks.lock(user_id):
        ...  # only one task at a time per user_id

async def other():
    guard = await locks.lock("report")
    try:
        ...
    finally:
        guard.release()
```

If a task is cancelled while waiting for a key, its claim on the key is
withdrawn and the registry entry is dropped when no one else uses it.

## Guards

Both flavours return a `Guard` with:

- `key`: the key it holds
- `released`: whether it has been released
- `release()`: free the key; calling it a second time raises `RuntimeError`

Leaving a `with` / `async with` block releases the guard unless it was
already released by hand.

## Running the tests

```
pip install -e ".[test]"
pytest
```