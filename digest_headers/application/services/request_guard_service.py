"""Request guard service.

Validates an inbound message against its own attacker-controlled headers
in one linear pass, with no retries and no step revisited:

    ExtractDigest -> ExtractLength -> BoundCheck -> BoundedRead -> Verify

Developer Golden Rules:
1. BOUND BEFORE READ - The ceiling is checked before a single body byte
   is read; oversized requests cost nothing but header parsing
2. DECLARED LENGTH ONLY - Exactly Content-Length bytes are read, never
   "until end of stream"
3. OUTCOMES, NOT EXCEPTIONS - Every rejection is a GuardOutcome; the
   calling framework decides how to respond
4. NO LOGGING - Rejections are reported to the caller, who logs them
"""

from __future__ import annotations

import sys

from digest_headers.application.ports.byte_source import (
    AsyncByteSourceProtocol,
    ByteSourceProtocol,
    HeaderLookup,
)
from digest_headers.application.services.body_digest_service import (
    extract_digest,
    single_header,
)
from digest_headers.application.services.byte_streams import aread_exact, read_exact
from digest_headers.config.digest_config import (
    DEFAULT_DIGEST_GUARD_CONFIG,
    DigestGuardConfig,
)
from digest_headers.domain.errors.digest import (
    BodyReadError,
    DigestParseError,
    HeaderError,
    MalformedHeaderError,
)
from digest_headers.domain.models.digest import Digest
from digest_headers.domain.models.guard_outcome import GuardOutcome


def _length_digits(value: str, header: str) -> str:
    """Validate a declared length and return its digits without leading zeros."""
    if not (value and value.isascii() and value.isdigit()):
        raise MalformedHeaderError(header, f"not a non-negative integer: {value!r}")
    return value.lstrip("0") or "0"


def _digits_to_int(digits: str) -> int | None:
    """Convert digits to an int, or None past the interpreter's digit limit."""
    limit = sys.get_int_max_str_digits()
    if limit and len(digits) > limit:
        return None
    return int(digits)


def parse_declared_length(value: str, header: str = "Content-Length") -> int:
    """Parse a declared body length.

    Only an ASCII run of decimal digits is accepted: no sign, no
    whitespace, no underscores. Leading zeros are ignored.

    Raises:
        MalformedHeaderError: If value is not a non-negative integer, or
            has more digits than the interpreter converts.
    """
    declared_length = _digits_to_int(_length_digits(value, header))
    if declared_length is None:
        raise MalformedHeaderError(header, f"too many digits: {len(value)}")
    return declared_length


class RequestGuard:
    """Inbound request guard.

    Stateless apart from its configuration; one instance may serve any
    number of concurrent requests.

    Attributes:
        config: Ceiling and header names in force.
    """

    def __init__(self, config: DigestGuardConfig | None = None) -> None:
        self.config = config or DEFAULT_DIGEST_GUARD_CONFIG

    def _preflight(self, headers: HeaderLookup) -> tuple[Digest, int] | GuardOutcome:
        """Run ExtractDigest, ExtractLength and BoundCheck."""
        digest_header = self.config.digest_header
        try:
            digest = extract_digest(headers, digest_header)
        except (HeaderError, DigestParseError) as exc:
            return GuardOutcome.header_error(digest_header, str(exc))

        length_header = self.config.length_header
        try:
            digits = _length_digits(
                single_header(headers, length_header), length_header
            )
        except HeaderError as exc:
            return GuardOutcome.header_error(length_header, str(exc))

        # More digits than the ceiling is over it; decide before int().
        max_body_bytes = self.config.max_body_bytes
        if len(digits) > len(str(max_body_bytes)):
            return GuardOutcome.too_large(
                digest, _digits_to_int(digits), max_body_bytes
            )

        declared_length = int(digits)
        if declared_length > max_body_bytes:
            return GuardOutcome.too_large(digest, declared_length, max_body_bytes)

        return digest, declared_length

    @staticmethod
    def _verify(digest: Digest, body: bytes) -> GuardOutcome:
        if not digest.matches(body):
            return GuardOutcome.digest_mismatch(digest, len(body))
        return GuardOutcome.verified(body, digest)

    def check(self, headers: HeaderLookup, source: ByteSourceProtocol) -> GuardOutcome:
        """Run the guard against a blocking byte source.

        Args:
            headers: Request headers (dict or framework header map).
            source: Body byte source; read at most declared-length bytes.

        Returns:
            GuardOutcome in a terminal state.
        """
        preflight = self._preflight(headers)
        if isinstance(preflight, GuardOutcome):
            return preflight
        digest, declared_length = preflight

        try:
            body = read_exact(source, declared_length)
        except (BodyReadError, OSError) as exc:
            return GuardOutcome.read_failed(digest, declared_length, str(exc))

        return self._verify(digest, body)

    async def check_async(
        self, headers: HeaderLookup, source: AsyncByteSourceProtocol
    ) -> GuardOutcome:
        """Run the guard against an asyncio byte source.

        Args:
            headers: Request headers (dict or framework header map).
            source: Async body byte source.

        Returns:
            GuardOutcome in a terminal state.
        """
        preflight = self._preflight(headers)
        if isinstance(preflight, GuardOutcome):
            return preflight
        digest, declared_length = preflight

        try:
            body = await aread_exact(source, declared_length)
        except (BodyReadError, OSError) as exc:
            return GuardOutcome.read_failed(digest, declared_length, str(exc))

        return self._verify(digest, body)
