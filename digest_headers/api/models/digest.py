"""API models for digest verification endpoints.

Pydantic models for the error payload returned when the request guard
rejects a request, and for the demo echo route.
"""

from pydantic import BaseModel, Field


class DigestErrorResponse(BaseModel):
    """Error payload for a rejected request (HTTPException detail).

    Attributes:
        error: Terminal guard state, e.g. "digest_mismatch".
        message: Human-readable explanation.
        header: Offending header for header errors.
        declared_length: Declared body length, when it was parsed.
        max_body_bytes: Ceiling in force, for oversized requests.
    """

    error: str = Field(..., description="Terminal guard state")
    message: str = Field(..., description="Human-readable explanation")
    header: str | None = Field(default=None, description="Offending header")
    declared_length: int | None = Field(default=None, ge=0)
    max_body_bytes: int | None = Field(default=None, ge=0)


class VerifiedBodyResponse(BaseModel):
    """Echo of a body that passed digest verification.

    Attributes:
        digest: The verified Digest header value.
        length: Number of body bytes read.
        body: Body decoded as UTF-8 (undecodable bytes replaced).
    """

    digest: str
    length: int = Field(..., ge=0)
    body: str
