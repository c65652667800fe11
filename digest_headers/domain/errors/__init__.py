"""Domain errors for digest_headers.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from DigestHeadersError.
"""

from digest_headers.domain.errors.digest import (
    BodyReadError,
    BodyTooLargeError,
    DigestMismatchError,
    DigestParseError,
    HeaderError,
    MalformedDigestError,
    MalformedHeaderError,
    MissingHeaderError,
    ShortReadError,
    UnknownVariantError,
)
from digest_headers.domain.errors.guard import DigestGuardError

__all__: list[str] = [
    "BodyReadError",
    "BodyTooLargeError",
    "DigestGuardError",
    "DigestMismatchError",
    "DigestParseError",
    "HeaderError",
    "MalformedDigestError",
    "MalformedHeaderError",
    "MissingHeaderError",
    "ShortReadError",
    "UnknownVariantError",
]
