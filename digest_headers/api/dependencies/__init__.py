"""API dependencies for dependency injection."""

from digest_headers.api.dependencies.digest import (
    get_content_length,
    get_digest_header,
    get_guard_config,
    rejection,
    require_verified_body,
    require_verified_outcome,
    set_guard_config,
)

__all__: list[str] = [
    "get_content_length",
    "get_digest_header",
    "get_guard_config",
    "rejection",
    "require_verified_body",
    "require_verified_outcome",
    "set_guard_config",
]
