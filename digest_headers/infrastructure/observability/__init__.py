"""Observability infrastructure for structured logging.

Usage:
    from digest_headers.infrastructure.observability import configure_structlog

    # At startup
    configure_structlog(environment="production")
"""

from digest_headers.infrastructure.observability.logging import (
    configure_structlog,
    get_logger_for_component,
)

__all__: list[str] = [
    "configure_structlog",
    "get_logger_for_component",
]
