"""httpx client adapter.

Attaches Digest headers to outgoing httpx requests and verifies them on
responses.

Usage:
    import httpx
    from digest_headers.infrastructure.adapters.httpx_adapter import (
        DigestHeaderAuth,
        verify_response,
    )

    with httpx.Client(auth=DigestHeaderAuth()) as client:
        response = client.post(url, json={"Library": "httpx"})
        verify_response(response)

DigestHeaderAuth plugs into httpx's auth flow with requires_request_body,
so httpx drains and buffers the body before the flow runs. Streamed
(generator) bodies are therefore safe to sign: the request that goes on
the wire replays the buffered bytes.
"""

from __future__ import annotations

from collections.abc import Generator
from typing import Self

import httpx
import structlog

from digest_headers.application.services.body_digest_service import (
    attach_digest,
    attach_digest_async,
    extract_digest,
)
from digest_headers.config.digest_config import DIGEST_HEADER
from digest_headers.domain.errors.digest import BodyReadError
from digest_headers.domain.models.digest import Digest
from digest_headers.domain.models.hash_variant import HashVariant

log = structlog.get_logger()


class _HttpxMessage:
    """Shared rebuild logic for the sync and async httpx adapters."""

    def __init__(self, request: httpx.Request) -> None:
        self.request = request

    def _rebuild(self, body: bytes, headers: httpx.Headers) -> httpx.Request:
        headers = httpx.Headers(headers)
        if "Transfer-Encoding" in headers:
            del headers["Transfer-Encoding"]
        if body or "Content-Length" in headers:
            headers["Content-Length"] = str(len(body))
        return httpx.Request(
            self.request.method,
            self.request.url,
            headers=headers,
            content=body,
            extensions=self.request.extensions,
        )

    def with_body(self, body: bytes) -> Self:
        return type(self)(self._rebuild(body, self.request.headers))

    def with_header(self, name: str, value: str) -> Self:
        """Set a header on a copy of an already-read request.

        Raises:
            httpx.RequestNotRead: If the body has not been drained yet.
        """
        headers = httpx.Headers(self.request.headers)
        headers[name] = value
        return type(self)(self._rebuild(self.request.content, headers))


class HttpxRequestMessage(_HttpxMessage):
    """DigestibleProtocol adapter over a blocking httpx.Request."""

    def drain_body(self) -> bytes:
        try:
            return self.request.read()
        except (httpx.StreamError, OSError) as exc:
            raise BodyReadError(f"Unable to read request body: {exc}") from exc


class AsyncHttpxRequestMessage(_HttpxMessage):
    """AsyncDigestibleProtocol adapter over an httpx.Request with an async body."""

    async def drain_body(self) -> bytes:
        try:
            return await self.request.aread()
        except (httpx.StreamError, OSError) as exc:
            raise BodyReadError(f"Unable to read request body: {exc}") from exc


def with_digest(
    request: httpx.Request,
    variant: HashVariant = HashVariant.SHA256,
    header: str = DIGEST_HEADER,
) -> httpx.Request:
    """Return a copy of request carrying a Digest header for its body.

    The original request's stream is consumed; send the returned one.
    """
    return attach_digest(HttpxRequestMessage(request), variant, header).request


async def with_digest_async(
    request: httpx.Request,
    variant: HashVariant = HashVariant.SHA256,
    header: str = DIGEST_HEADER,
) -> httpx.Request:
    """Asyncio counterpart of with_digest()."""
    message = await attach_digest_async(AsyncHttpxRequestMessage(request), variant, header)
    return message.request


class DigestHeaderAuth(httpx.Auth):
    """httpx auth flow that adds a Digest header to every request.

    Not to be confused with httpx.DigestAuth (RFC 7616 challenge-response
    authentication). This flow only declares a hash of the body.

    Attributes:
        variant: Hash variant used for outgoing digests.
        header: Header name to set.
    """

    requires_request_body = True

    def __init__(
        self,
        variant: HashVariant = HashVariant.SHA256,
        header: str = DIGEST_HEADER,
    ) -> None:
        self.variant = variant
        self.header = header

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        digest = Digest.compute(request.content, self.variant)
        request.headers[self.header] = digest.format()
        log.debug(
            "digest_attached",
            method=request.method,
            url=str(request.url),
            variant=self.variant.wire_name,
            body_bytes=len(request.content),
        )
        yield request


def verify_response(response: httpx.Response, header: str = DIGEST_HEADER) -> Digest:
    """Check a response body against its Digest header.

    Reads the response body if it has not been read yet.

    Returns:
        The verified Digest.

    Raises:
        MissingHeaderError / MalformedHeaderError: Header absent or repeated.
        MalformedDigestError / UnknownVariantError: Header unparsable.
        DigestMismatchError: Body does not match.
    """
    body = response.read()
    digest = extract_digest(response.headers, header)
    digest.verify(body)
    return digest


async def averify_response(
    response: httpx.Response, header: str = DIGEST_HEADER
) -> Digest:
    """Asyncio counterpart of verify_response()."""
    body = await response.aread()
    digest = extract_digest(response.headers, header)
    digest.verify(body)
    return digest
