"""Digest request guard dependencies for FastAPI endpoints.

Three dependencies, from narrowest to widest:
- get_digest_header: the parsed Digest header (400 if missing/invalid)
- get_content_length: the declared length (400 if missing/invalid)
- require_verified_body: the full guard; returns exactly the verified bytes

Status Mapping:
    HEADER_ERROR     -> 400 Bad Request
    DIGEST_MISMATCH  -> 400 Bad Request
    TOO_LARGE        -> 413 Content Too Large
    READ_FAILED      -> 500 Internal Server Error

Usage:
    from fastapi import Depends
    from digest_headers.api.dependencies.digest import require_verified_body

    @router.post("/upload")
    async def upload(body: bytes = Depends(require_verified_body)) -> dict:
        return {"size": len(body)}
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from digest_headers.api.models.digest import DigestErrorResponse
from digest_headers.application.services.body_digest_service import (
    extract_digest,
    single_header,
)
from digest_headers.application.services.request_guard_service import (
    parse_declared_length,
)
from digest_headers.config.digest_config import DigestGuardConfig
from digest_headers.domain.errors.digest import DigestParseError, HeaderError
from digest_headers.domain.models.digest import Digest
from digest_headers.domain.models.guard_outcome import GuardOutcome, GuardState
from digest_headers.infrastructure.adapters.starlette_adapter import guard_request
from digest_headers.infrastructure.observability.logging import get_logger_for_component

log = get_logger_for_component("digest_guard")

STATUS_BY_STATE: dict[GuardState, int] = {
    GuardState.HEADER_ERROR: 400,
    GuardState.DIGEST_MISMATCH: 400,
    GuardState.TOO_LARGE: 413,
    GuardState.READ_FAILED: 500,
}

# Global config (replaced in production or tests)
_guard_config: DigestGuardConfig | None = None


def get_guard_config() -> DigestGuardConfig:
    """Get the guard configuration, loading it from the environment once.

    Override in tests with app.dependency_overrides or set_guard_config().
    """
    global _guard_config
    if _guard_config is None:
        _guard_config = DigestGuardConfig.from_environment()
    return _guard_config


def set_guard_config(config: DigestGuardConfig | None) -> None:
    """Set the guard configuration (None reloads from environment)."""
    global _guard_config
    _guard_config = config


def rejection(outcome: GuardOutcome) -> HTTPException:
    """Translate a rejected outcome into an HTTPException.

    Raises:
        ValueError: If outcome is VERIFIED.
    """
    if outcome.is_verified:
        raise ValueError("Cannot build a rejection from a verified outcome")

    detail = DigestErrorResponse(
        error=outcome.state.value,
        message=outcome.reason,
        header=outcome.header,
        declared_length=outcome.declared_length,
        max_body_bytes=outcome.max_body_bytes,
    )
    return HTTPException(
        status_code=STATUS_BY_STATE[outcome.state],
        detail=detail.model_dump(exclude_none=True),
    )


def _reject(request: Request, outcome: GuardOutcome) -> HTTPException:
    log.warning(
        "digest_rejected",
        method=request.method,
        path=request.url.path,
        state=outcome.state.value,
        header=outcome.header,
        declared_length=outcome.declared_length,
        reason=outcome.reason,
    )
    return rejection(outcome)


async def get_digest_header(
    request: Request,
    config: DigestGuardConfig = Depends(get_guard_config),
) -> Digest:
    """Dependency returning the parsed Digest header.

    Raises:
        HTTPException: 400 if the header is missing, repeated or invalid.
    """
    try:
        return extract_digest(request.headers, config.digest_header)
    except (HeaderError, DigestParseError) as exc:
        raise _reject(
            request, GuardOutcome.header_error(config.digest_header, str(exc))
        ) from exc


async def get_content_length(
    request: Request,
    config: DigestGuardConfig = Depends(get_guard_config),
) -> int:
    """Dependency returning the declared body length.

    Raises:
        HTTPException: 400 if the header is missing, repeated or invalid.
    """
    try:
        return parse_declared_length(
            single_header(request.headers, config.length_header),
            config.length_header,
        )
    except HeaderError as exc:
        raise _reject(
            request, GuardOutcome.header_error(config.length_header, str(exc))
        ) from exc


async def require_verified_outcome(
    request: Request,
    config: DigestGuardConfig = Depends(get_guard_config),
) -> GuardOutcome:
    """Dependency running the full request guard.

    Returns:
        The VERIFIED outcome (body and digest populated).

    Raises:
        HTTPException: Mapped from the terminal state (see module docs).
    """
    outcome = await guard_request(request, config)
    if not outcome.is_verified:
        raise _reject(request, outcome)
    return outcome


async def require_verified_body(
    outcome: GuardOutcome = Depends(require_verified_outcome),
) -> bytes:
    """Dependency returning exactly the verified body bytes."""
    return outcome.unwrap()
