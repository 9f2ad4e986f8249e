"""Per-key mutual exclusion: ``threaded`` for threads, ``aio`` for asyncio tasks."""

__version__ = "0.2.3"
__all__ = ["threaded", "aio"]