"""Byte stream helpers for draining and replaying bodies.

Two directions:
- Chunk iterables (sync or async) are adapted to the read(size) byte
  source protocols so the request guard can bound its reads.
- ReplayStream is a fresh stream view over an owned buffer, handed back
  after a one-shot body has been drained so the message stays usable.
"""

from __future__ import annotations

from collections.abc import AsyncIterable, AsyncIterator, Iterable, Iterator

from digest_headers.application.ports.byte_source import (
    AsyncByteSourceProtocol,
    ByteSourceProtocol,
)
from digest_headers.domain.errors.digest import BodyReadError, ShortReadError

# Chunk size used when replaying a drained body
DEFAULT_CHUNK_SIZE = 64 * 1024


class IterableByteSource:
    """Blocking byte source over an iterable of byte chunks.

    Chunks are pulled lazily; at most one chunk beyond what the caller
    asked for is ever held in memory.
    """

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._pending = b""
        self._exhausted = False

    def read(self, size: int = -1, /) -> bytes:
        if size < 0:
            parts = [self._pending, *self._chunks]
            self._pending = b""
            self._exhausted = True
            return b"".join(parts)

        while len(self._pending) < size and not self._exhausted:
            chunk = next(self._chunks, None)
            if chunk is None:
                self._exhausted = True
            else:
                self._pending += chunk

        data, self._pending = self._pending[:size], self._pending[size:]
        return data


class AsyncIterableByteSource:
    """Asyncio byte source over an async iterable of byte chunks.

    Framework-specific exceptions listed in translate (client disconnects,
    "stream consumed" errors) are re-raised as BodyReadError.
    """

    def __init__(
        self,
        chunks: AsyncIterable[bytes],
        translate: tuple[type[Exception], ...] = (),
    ) -> None:
        self._chunks: AsyncIterator[bytes] = aiter(chunks)
        self._translate = translate
        self._pending = b""
        self._exhausted = False

    async def _next_chunk(self) -> bytes | None:
        try:
            return await anext(self._chunks)
        except StopAsyncIteration:
            return None
        except self._translate as exc:
            raise BodyReadError(f"Unable to read request body: {exc}") from exc

    async def read(self, size: int = -1, /) -> bytes:
        while (size < 0 or len(self._pending) < size) and not self._exhausted:
            chunk = await self._next_chunk()
            if chunk is None:
                self._exhausted = True
            else:
                self._pending += chunk

        if size < 0:
            data, self._pending = self._pending, b""
        else:
            data, self._pending = self._pending[:size], self._pending[size:]
        return data


class ReplayStream:
    """Fresh, re-iterable stream over an already drained body.

    Iterates (sync or async) in chunks of chunk_size. An empty body
    yields nothing.

    Attributes:
        body: The owned bytes being replayed.
    """

    def __init__(self, body: bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.body = bytes(body)
        self._chunk_size = chunk_size

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[bytes]:
        for start in range(0, len(self.body), self._chunk_size):
            yield self.body[start : start + self._chunk_size]

    async def __aiter__(self) -> AsyncIterator[bytes]:
        for chunk in self:
            yield chunk


def read_exact(source: ByteSourceProtocol, size: int) -> bytes:
    """Read exactly size bytes from a blocking byte source.

    Never asks the source for more than the bytes still missing.

    Raises:
        ShortReadError: If the source ends early.
        BodyReadError / OSError: Propagated from the source.
    """
    parts: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = source.read(remaining)[:remaining]
        if not chunk:
            raise ShortReadError(expected=size, received=size - remaining)
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


async def aread_exact(source: AsyncByteSourceProtocol, size: int) -> bytes:
    """Asyncio counterpart of read_exact()."""
    parts: list[bytes] = []
    remaining = size
    while remaining > 0:
        chunk = (await source.read(remaining))[:remaining]
        if not chunk:
            raise ShortReadError(expected=size, received=size - remaining)
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)
