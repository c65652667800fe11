"""Application services for digest_headers."""

from digest_headers.application.services.body_digest_service import (
    attach_digest,
    attach_digest_async,
    digest_message,
    digest_message_async,
    digest_of,
    digest_of_async,
    extract_digest,
)
from digest_headers.application.services.byte_streams import (
    AsyncIterableByteSource,
    IterableByteSource,
    ReplayStream,
)
from digest_headers.application.services.request_guard_service import (
    RequestGuard,
    parse_declared_length,
)

__all__: list[str] = [
    "AsyncIterableByteSource",
    "IterableByteSource",
    "ReplayStream",
    "RequestGuard",
    "attach_digest",
    "attach_digest_async",
    "digest_message",
    "digest_message_async",
    "digest_of",
    "digest_of_async",
    "extract_digest",
    "parse_declared_length",
]
