"""Thread-local scratch buffer pool used while rendering statements."""

import io
import threading
from collections.abc import Iterator
from contextlib import contextmanager

from mypy_extensions import mypyc_attr

from sqlchain.core.config import get_global_config

__all__ = ("BufferPool", "get_buffer_pool")


_thread_local = threading.local()


@mypyc_attr(allow_interpreted_subclasses=False)
class BufferPool:
    """Reusable ``StringIO`` pool with reset-instead-of-recreate semantics."""

    __slots__ = ("_max_size", "_pool")

    def __init__(self, max_size: int = 100) -> None:
        self._pool: list[io.StringIO] = []
        self._max_size = max_size

    def __len__(self) -> int:
        return len(self._pool)

    @property
    def max_size(self) -> int:
        return self._max_size

    def acquire(self) -> io.StringIO:
        if self._pool:
            return self._pool.pop()
        return io.StringIO()

    def release(self, buffer: io.StringIO) -> None:
        buffer.seek(0)
        buffer.truncate(0)
        if len(self._pool) < self._max_size:
            self._pool.append(buffer)

    @contextmanager
    def buffer(self) -> Iterator[io.StringIO]:
        """Lend an empty buffer for the duration of the block.

        Yields:
            An empty ``StringIO`` that is returned to the pool on exit.
        """
        buffer = self.acquire()
        try:
            yield buffer
        finally:
            self.release(buffer)


def get_buffer_pool() -> BufferPool:
    """Return the calling thread's buffer pool, creating it on first use."""
    pool = getattr(_thread_local, "buffer_pool", None)
    if pool is None:
        pool = BufferPool(max_size=get_global_config().buffer_pool_size)
        _thread_local.buffer_pool = pool
    return pool
