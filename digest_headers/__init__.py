"""
Digest Headers - HTTP body integrity via the Digest header

Computes, parses and verifies `Digest: SHA-256=<base64>` style headers,
attaches them to outgoing requests and guards inbound requests against
tampered or oversized bodies.

This library does not establish identity. It only checks that a body
matches the hash its sender declared. Pair it with HTTP signatures when
authenticity matters.
"""

from digest_headers.domain.errors.digest import (
    DigestMismatchError,
    DigestParseError,
    MalformedDigestError,
    UnknownVariantError,
)
from digest_headers.domain.exceptions import DigestHeadersError
from digest_headers.domain.models.digest import Digest, verify_digest
from digest_headers.domain.models.hash_variant import HashVariant

__version__ = "0.1.0"
__all__ = [
    "Digest",
    "DigestHeadersError",
    "DigestMismatchError",
    "DigestParseError",
    "HashVariant",
    "MalformedDigestError",
    "UnknownVariantError",
    "__version__",
    "verify_digest",
]
