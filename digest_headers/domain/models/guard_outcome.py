"""Request guard outcome model.

The request guard is a single linear pass:

    ExtractDigest -> ExtractLength -> BoundCheck -> BoundedRead -> Verify

Each step either advances or stops in a terminal state. GuardOutcome is the
tagged result of that pass: VERIFIED with the bytes that were read, or one
of the rejection states with enough context for the caller to respond.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from digest_headers.domain.errors.digest import BodyTooLargeError
from digest_headers.domain.errors.guard import DigestGuardError
from digest_headers.domain.models.digest import Digest


class GuardState(str, Enum):
    """Terminal state of a request guard pass.

    Values:
        VERIFIED: Body read in full and matches its Digest header.
        HEADER_ERROR: Digest or length header missing or unparsable.
        TOO_LARGE: Declared length exceeds the ceiling; nothing was read.
        READ_FAILED: Short read or transport error while reading the body.
        DIGEST_MISMATCH: Body read in full but does not match.
    """

    VERIFIED = "verified"
    HEADER_ERROR = "header_error"
    TOO_LARGE = "too_large"
    READ_FAILED = "read_failed"
    DIGEST_MISMATCH = "digest_mismatch"


@dataclass(frozen=True)
class GuardOutcome:
    """Result of running the request guard over one request.

    Attributes:
        state: Terminal state reached.
        body: The verified bytes (VERIFIED only).
        digest: The claimed digest, once it has been parsed.
        header: Name of the offending header (HEADER_ERROR only).
        declared_length: The declared body length, once parsed.
        max_body_bytes: The ceiling in force (TOO_LARGE only).
        reason: Human-readable explanation for rejections.
    """

    state: GuardState
    body: bytes | None = None
    digest: Digest | None = None
    header: str | None = None
    declared_length: int | None = None
    max_body_bytes: int | None = None
    reason: str = ""

    @classmethod
    def verified(cls, body: bytes, digest: Digest) -> GuardOutcome:
        return cls(
            state=GuardState.VERIFIED,
            body=body,
            digest=digest,
            declared_length=len(body),
        )

    @classmethod
    def header_error(cls, header: str, reason: str) -> GuardOutcome:
        return cls(state=GuardState.HEADER_ERROR, header=header, reason=reason)

    @classmethod
    def too_large(
        cls, digest: Digest, declared_length: int | None, max_body_bytes: int
    ) -> GuardOutcome:
        return cls(
            state=GuardState.TOO_LARGE,
            digest=digest,
            declared_length=declared_length,
            max_body_bytes=max_body_bytes,
            reason=str(BodyTooLargeError(declared_length, max_body_bytes)),
        )

    @classmethod
    def read_failed(
        cls, digest: Digest, declared_length: int, reason: str
    ) -> GuardOutcome:
        return cls(
            state=GuardState.READ_FAILED,
            digest=digest,
            declared_length=declared_length,
            reason=reason,
        )

    @classmethod
    def digest_mismatch(cls, digest: Digest, declared_length: int) -> GuardOutcome:
        return cls(
            state=GuardState.DIGEST_MISMATCH,
            digest=digest,
            declared_length=declared_length,
            reason="The provided digest does not match the body",
        )

    @property
    def is_verified(self) -> bool:
        return self.state is GuardState.VERIFIED

    def unwrap(self) -> bytes:
        """Return the verified body.

        Raises:
            DigestGuardError: If the outcome is a rejection.
        """
        if self.state is not GuardState.VERIFIED or self.body is None:
            raise DigestGuardError(self)
        return self.body
