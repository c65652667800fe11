"""Byte source ports for bounded body reads.

The request guard never reads "until end of stream". It asks a byte source
for at most N bytes at a time, where N is bounded by the declared length.
These protocols describe that contract for blocking and asyncio callers.

Implementations:
- Any binary file object (io.BytesIO, socket files) satisfies
  ByteSourceProtocol directly.
- application.services.byte_streams wraps chunk iterables and async
  iterables (Starlette request streams).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Protocol


class ByteSourceProtocol(Protocol):
    """Blocking byte source.

    read(size) returns at most size bytes, and b"" once the source is
    exhausted. Transport failures are raised as BodyReadError or OSError.
    """

    def read(self, size: int = -1, /) -> bytes:
        """Read at most size bytes (all remaining bytes if size < 0)."""
        ...


class AsyncByteSourceProtocol(Protocol):
    """Asyncio byte source with the same contract as ByteSourceProtocol."""

    async def read(self, size: int = -1, /) -> bytes:
        """Read at most size bytes (all remaining bytes if size < 0)."""
        ...


# Header maps: dict, starlette.datastructures.Headers, httpx.Headers
HeaderLookup = Mapping[str, str]
