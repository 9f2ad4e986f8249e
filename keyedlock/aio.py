"""A keyed lock for asyncio tasks: one mutex per key, created on demand."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)


@dataclass
class _Entry:
    mutex: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class Guard(Generic[K]):
    """A held lock for one key; releasing it frees the key for other tasks."""

    __slots__ = ("_key", "_entry", "_owner", "_released")

    def __init__(self, owner: "KeyedLock[K]", key: K, entry: _Entry) -> None:
        self._owner = owner
        self._key = key
        self._entry = entry
        self._released = False

    @property
    def key(self) -> K:
        """The key this guard holds."""
        return self._key

    @property
    def released(self) -> bool:
        """Whether the guard has already been released."""
        return self._released

    def release(self) -> None:
        """Release the lock for the key, dropping the registry entry if unused."""
        if self._released:
            raise RuntimeError(f"lock for key {self._key!r} already released")
        self._released = True
        self._owner._forget(self._key, self._entry)
        self._entry.mutex.release()

    def __enter__(self) -> "Guard[K]":
        return self

    def __exit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if not self._released:
            self.release()

    async def __aenter__(self) -> "Guard[K]":
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, tb: Any) -> None:
        if not self._released:
            self.release()

    def __repr__(self) -> str:
        state = "released" if self._released else "held"
        return f"Guard(key={self._key!r}, {state})"


class KeyedLock(Generic[K]):
    """Mutually exclusive access, across tasks, to resources identified by a key."""

    def __init__(self) -> None:
        self._registry: Dict[K, _Entry] = {}

    async def lock(self, key: K) -> Guard[K]:
        """Wait until the lock for ``key`` is free, then take it."""
        entry = self._registry.get(key)
        if entry is None:
            entry = _Entry()
            self._registry[key] = entry
        entry.users += 1
        try:
            await entry.mutex.acquire()
        except BaseException:
            self._forget(key, entry)
            raise
        return Guard(self, key, entry)

    def _forget(self, key: K, entry: _Entry) -> None:
        entry.users -= 1
        if entry.users == 0 and self._registry.get(key) is entry:
            del self._registry[key]

    def __len__(self) -> int:
        """Number of keys currently held or waited on."""
        return len(self._registry)

    def __repr__(self) -> str:
        return f"KeyedLock(keys={len(self)})"