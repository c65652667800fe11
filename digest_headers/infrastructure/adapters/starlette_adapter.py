"""Starlette request adapter.

Bridges Starlette (and therefore FastAPI) requests to the byte source and
digestible ports.

A Starlette request body arrives through the ASGI receive channel and can
only be consumed once. StarletteRequestMessage.with_body() builds a new
Request over the same scope whose receive channel replays the drained
bytes first, then defers to the original channel for disconnect events.
"""

from __future__ import annotations

from typing import Self

from starlette.requests import ClientDisconnect, Request
from starlette.types import Message, Receive

from digest_headers.application.services.byte_streams import AsyncIterableByteSource
from digest_headers.application.services.request_guard_service import RequestGuard
from digest_headers.config.digest_config import DigestGuardConfig
from digest_headers.domain.errors.digest import BodyReadError
from digest_headers.domain.models.guard_outcome import GuardOutcome

# Raised by Request.stream() on disconnect or when the stream was consumed
STREAM_ERRORS: tuple[type[Exception], ...] = (ClientDisconnect, RuntimeError)


def replay_receive(body: bytes, receive: Receive) -> Receive:
    """Return an ASGI receive channel that yields body, then delegates."""
    sent = False

    async def _receive() -> Message:
        nonlocal sent
        if not sent:
            sent = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return _receive


def byte_source(request: Request) -> AsyncIterableByteSource:
    """Expose a request body as an AsyncByteSourceProtocol."""
    return AsyncIterableByteSource(request.stream(), translate=STREAM_ERRORS)


async def guard_request(
    request: Request, config: DigestGuardConfig | None = None
) -> GuardOutcome:
    """Run the request guard over a Starlette request.

    Consumes at most the declared number of body bytes.
    """
    return await RequestGuard(config).check_async(request.headers, byte_source(request))


class StarletteRequestMessage:
    """AsyncDigestibleProtocol adapter over a Starlette request."""

    def __init__(self, request: Request) -> None:
        self.request = request

    async def drain_body(self) -> bytes:
        chunks: list[bytes] = []
        try:
            async for chunk in self.request.stream():
                chunks.append(chunk)
        except STREAM_ERRORS as exc:
            raise BodyReadError(f"Unable to read request body: {exc}") from exc
        return b"".join(chunks)

    def with_body(self, body: bytes) -> Self:
        scope = dict(self.request.scope)
        return type(self)(Request(scope, receive=replay_receive(body, self.request.receive)))

    def with_header(self, name: str, value: str) -> Self:
        key = name.lower().encode("latin-1")
        headers = [(k, v) for k, v in self.request.scope["headers"] if k != key]
        headers.append((key, value.encode("latin-1")))
        scope = {**self.request.scope, "headers": headers}
        return type(self)(Request(scope, receive=self.request.receive))
