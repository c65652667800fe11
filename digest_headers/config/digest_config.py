"""Digest guard configuration.

This module defines the request guard's body-size ceiling and default hash
variant, with environment variable overrides for production tuning.

The ceiling is the core denial-of-service defense: the guard compares the
declared length against it before reading a single body byte. 2 MiB is
still generous for most JSON APIs; lower it where bodies are small.

Environment Variables:
- DIGEST_MAX_BODY_BYTES: Largest body the guard will read (default: 2097152)
- DIGEST_DEFAULT_VARIANT: Variant for outgoing digests (default: SHA-256)
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from digest_headers.domain.errors.digest import UnknownVariantError
from digest_headers.domain.models.hash_variant import HashVariant

DEFAULT_MAX_BODY_BYTES = 2 * 1024 * 1024
DIGEST_HEADER = "Digest"
CONTENT_LENGTH_HEADER = "Content-Length"


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_variant_env(key: str, default: HashVariant) -> HashVariant:
    """Get HashVariant environment variable with default."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return HashVariant.parse(value)
    except UnknownVariantError:
        return default


@dataclass(frozen=True)
class DigestGuardConfig:
    """Configuration for the inbound request guard and outgoing digests.

    Attributes:
        max_body_bytes: Ceiling on the declared body length. Bodies
                        declaring more are rejected before any read.
                        Default: 2 MiB.
        default_variant: Variant used when attaching digests.
                         Default: SHA-256.
        digest_header: Header carrying the digest. Default: "Digest".
        length_header: Header carrying the declared length.
                       Default: "Content-Length".
    """

    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    default_variant: HashVariant = HashVariant.SHA256
    digest_header: str = DIGEST_HEADER
    length_header: str = CONTENT_LENGTH_HEADER

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_body_bytes < 0:
            raise ValueError(
                f"max_body_bytes must be non-negative, got {self.max_body_bytes}"
            )
        if not isinstance(self.default_variant, HashVariant):
            raise ValueError(
                f"default_variant must be a HashVariant, got {self.default_variant!r}"
            )
        if not self.digest_header:
            raise ValueError("digest_header must not be empty")
        if not self.length_header:
            raise ValueError("length_header must not be empty")

    @classmethod
    def from_environment(cls) -> DigestGuardConfig:
        """Create config from environment variables with defaults.

        Environment Variables:
            DIGEST_MAX_BODY_BYTES: Body ceiling in bytes (default: 2097152)
            DIGEST_DEFAULT_VARIANT: Outgoing variant (default: SHA-256)

        Invalid values fall back to the defaults.

        Returns:
            DigestGuardConfig with environment overrides applied.
        """
        max_body_bytes = _get_int_env("DIGEST_MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)
        if max_body_bytes < 0:
            max_body_bytes = DEFAULT_MAX_BODY_BYTES
        return cls(
            max_body_bytes=max_body_bytes,
            default_variant=_get_variant_env("DIGEST_DEFAULT_VARIANT", HashVariant.SHA256),
        )


# Default configuration instance
DEFAULT_DIGEST_GUARD_CONFIG = DigestGuardConfig()
