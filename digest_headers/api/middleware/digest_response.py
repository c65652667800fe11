"""Digest response middleware.

Attaches a Digest header to every response body passing through, so
clients can verify what they received (see httpx_adapter.verify_response).

The response body from call_next is a one-shot stream. The middleware
drains it, hashes it, and swaps in a replay stream over the same bytes;
status, headers (Content-Length included) and body are otherwise
untouched.

Usage:
    app.add_middleware(DigestResponseMiddleware, variant=HashVariant.SHA512)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from digest_headers.application.services.body_digest_service import digest_of_async
from digest_headers.config.digest_config import DIGEST_HEADER
from digest_headers.domain.models.hash_variant import HashVariant
from digest_headers.infrastructure.observability.logging import get_logger_for_component

log = get_logger_for_component("digest_response")

# Responses that never carry a body
BODYLESS_STATUS_CODES = frozenset({204, 304})


class DigestResponseMiddleware(BaseHTTPMiddleware):
    """Middleware adding a Digest header to response bodies.

    HEAD responses and 1xx/204/304 responses are passed through unchanged.

    Attributes:
        _variant: Hash variant for outgoing digests.
        _header: Header name to set.
    """

    def __init__(
        self,
        app: ASGIApp,
        variant: HashVariant = HashVariant.SHA256,
        header: str = DIGEST_HEADER,
    ) -> None:
        """Initialize DigestResponseMiddleware.

        Args:
            app: The ASGI app to wrap.
            variant: Hash variant for outgoing digests.
            header: Header name to set.
        """
        super().__init__(app)
        self._variant = variant
        self._header = header

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)

        if (
            request.method == "HEAD"
            or response.status_code < 200
            or response.status_code in BODYLESS_STATUS_CODES
        ):
            return response

        replay, digest = await digest_of_async(
            response.body_iterator,  # type: ignore[attr-defined]
            self._variant,
        )
        response.body_iterator = replay  # type: ignore[attr-defined]
        response.headers[self._header] = digest.format()

        log.debug(
            "digest_attached",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            body_bytes=len(replay),
        )
        return response
