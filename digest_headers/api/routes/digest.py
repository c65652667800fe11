"""Digest verification endpoints.

POST /verify only reaches the handler once the request guard has checked
the Digest header, bounded the read by Content-Length and matched the
body. The handler echoes what was verified.
"""

from fastapi import APIRouter, Depends

from digest_headers.api.dependencies.digest import require_verified_outcome
from digest_headers.api.models.digest import DigestErrorResponse, VerifiedBodyResponse
from digest_headers.domain.models.guard_outcome import GuardOutcome

router = APIRouter(tags=["digest"])


@router.post(
    "/verify",
    response_model=VerifiedBodyResponse,
    responses={
        400: {"model": DigestErrorResponse},
        413: {"model": DigestErrorResponse},
        500: {"model": DigestErrorResponse},
    },
)
async def verify_body(
    outcome: GuardOutcome = Depends(require_verified_outcome),
) -> VerifiedBodyResponse:
    """Echo a digest-verified request body.

    Returns:
        The verified digest, body length and body text.
    """
    body = outcome.unwrap()
    return VerifiedBodyResponse(
        digest=str(outcome.digest),
        length=len(body),
        body=body.decode("utf-8", errors="replace"),
    )
