"""Application ports (protocols implemented by framework adapters)."""

from digest_headers.application.ports.byte_source import (
    AsyncByteSourceProtocol,
    ByteSourceProtocol,
    HeaderLookup,
)
from digest_headers.application.ports.digestible import (
    AsyncDigestibleProtocol,
    DigestibleProtocol,
)

__all__: list[str] = [
    "AsyncByteSourceProtocol",
    "AsyncDigestibleProtocol",
    "ByteSourceProtocol",
    "DigestibleProtocol",
    "HeaderLookup",
]
