"""Configuration module for digest_headers.

Available Configurations:
- DigestGuardConfig: Request guard ceiling and default hash variant
"""

from digest_headers.config.digest_config import (
    CONTENT_LENGTH_HEADER,
    DEFAULT_DIGEST_GUARD_CONFIG,
    DEFAULT_MAX_BODY_BYTES,
    DIGEST_HEADER,
    DigestGuardConfig,
)

__all__ = [
    "DigestGuardConfig",
    "DEFAULT_DIGEST_GUARD_CONFIG",
    "DEFAULT_MAX_BODY_BYTES",
    "DIGEST_HEADER",
    "CONTENT_LENGTH_HEADER",
]
