"""Digestible message ports.

A message is "digestible" if it can give up its body bytes, be rebuilt
around replacement bytes, and take a header. That is all the body digest
service needs to implement "digest this request" and "attach a Digest
header to this request" once, generically, instead of per framework.

Draining is destructive for streamed bodies (a Starlette request stream
or an httpx generator body can only be consumed once). Callers must
continue with the message returned by with_body(), never the original.

Implementations:
- infrastructure.adapters.memory.InMemoryMessage
- infrastructure.adapters.httpx_adapter.HttpxRequestMessage
- infrastructure.adapters.starlette_adapter.StarletteRequestMessage (async)
"""

from __future__ import annotations

from typing import Protocol, Self


class DigestibleProtocol(Protocol):
    """Message whose body can be drained synchronously."""

    def drain_body(self) -> bytes:
        """Read the whole body into memory.

        Raises:
            BodyReadError: If the underlying transport fails.
        """
        ...

    def with_body(self, body: bytes) -> Self:
        """Return an equivalent message whose body is the given bytes."""
        ...

    def with_header(self, name: str, value: str) -> Self:
        """Return an equivalent message with header name set to value."""
        ...


class AsyncDigestibleProtocol(Protocol):
    """Message whose body must be drained from an asyncio stream."""

    async def drain_body(self) -> bytes:
        """Read the whole body into memory.

        Raises:
            BodyReadError: If the underlying transport fails.
        """
        ...

    def with_body(self, body: bytes) -> Self:
        """Return an equivalent message whose body is the given bytes."""
        ...

    def with_header(self, name: str, value: str) -> Self:
        """Return an equivalent message with header name set to value."""
        ...
