"""Async stream wrapper that stops after a fixed number of bytes."""

from __future__ import annotations

from typing import AsyncIterator, Protocol

from dirshare.errors import StreamIOFailed

DEFAULT_CHUNK_SIZE = 8 * 1024  # 8 KiB


class AsyncByteSource(Protocol):
    async def read(self, size: int = -1) -> bytes: ...


class BoundedReader:
    """Expose at most ``remaining`` bytes of an already-positioned source.

    Never asks the source for more than what is left of the budget, so the
    source is not read ahead past the slice.
    """

    def __init__(self, source: AsyncByteSource, remaining: int, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if remaining < 0:
            raise ValueError("remaining must not be negative")
        self._source = source
        self._remaining = remaining
        self._chunk_size = chunk_size

    @property
    def remaining(self) -> int:
        return self._remaining

    async def read(self, size: int = -1) -> bytes:
        """Read up to ``size`` bytes (all that is left if negative); b"" at end."""
        if self._remaining <= 0:
            return b""
        want = self._remaining if size is None or size < 0 else min(size, self._remaining)
        if want == 0:
            return b""
        data = await self._source.read(want)
        self._remaining -= len(data)
        return data

    async def __aiter__(self) -> AsyncIterator[bytes]:
        """Yield chunks until the budget is spent.

        A source that ends early is an error: the caller has already
        promised the full length to the client.
        """
        while self._remaining > 0:
            chunk = await self.read(self._chunk_size)
            if not chunk:
                raise StreamIOFailed(f"Source ended with {self._remaining} bytes still expected")
            yield chunk
