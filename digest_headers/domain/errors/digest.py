"""Digest parsing, verification and body errors.

Provides specific exception classes for each way a Digest header or the
body it describes can fail. All exceptions inherit from DigestHeadersError.

None of these errors are transient. A caller that retries a mismatch with
the same bytes will get the same mismatch.
"""

from __future__ import annotations

from digest_headers.domain.exceptions import DigestHeadersError


class DigestParseError(DigestHeadersError, ValueError):
    """Base class for errors parsing a Digest or a HashVariant.

    Also a ValueError, matching how the standard library reports
    unparsable text.
    """

    pass


class MalformedDigestError(DigestParseError):
    """Error when a Digest header value cannot be parsed.

    Raised when the value has no `=` delimiter or is not text at all.

    Attributes:
        value: The rejected header value (repr-safe).
    """

    def __init__(self, value: object, reason: str = "missing '=' delimiter") -> None:
        """Initialize the error.

        Args:
            value: The rejected header value.
            reason: Short description of what was wrong.
        """
        self.value = value
        self.reason = reason
        super().__init__(f"Failed to parse Digest {value!r}: {reason}")


class UnknownVariantError(MalformedDigestError):
    """Error when a hash algorithm name is outside SHA-256/384/512.

    Subclasses MalformedDigestError because an unknown algorithm also makes
    the enclosing Digest header unparsable.

    Attributes:
        variant_name: The algorithm name that did not match.
    """

    def __init__(self, variant_name: object) -> None:
        """Initialize the error.

        Args:
            variant_name: The algorithm name that did not match.
        """
        self.variant_name = variant_name
        super().__init__(variant_name, reason="unknown hash variant")


class DigestMismatchError(DigestHeadersError):
    """Error when a recomputed digest differs from the claimed one.

    Indicates body corruption, tampering, or a caller passing the wrong
    body. Never a transient condition.

    Attributes:
        expected: The claimed digest in header form.
        actual: The digest recomputed from the body, in header form.
    """

    def __init__(self, expected: str, actual: str) -> None:
        """Initialize the error.

        Args:
            expected: The claimed digest in header form.
            actual: The recomputed digest in header form.
        """
        self.expected = expected
        self.actual = actual
        super().__init__("Digest does not match body")


class HeaderError(DigestHeadersError):
    """Base class for a required header that is missing or malformed.

    Attributes:
        header: Name of the offending header.
    """

    def __init__(self, header: str, message: str) -> None:
        self.header = header
        super().__init__(message)


class MissingHeaderError(HeaderError):
    """Error when a required header is absent."""

    def __init__(self, header: str) -> None:
        super().__init__(header, f"Expected exactly one {header} header, found none")


class MalformedHeaderError(HeaderError):
    """Error when a header is repeated or fails its own format parse."""

    def __init__(self, header: str, reason: str) -> None:
        self.reason = reason
        super().__init__(header, f"Invalid {header} header: {reason}")


class BodyReadError(DigestHeadersError):
    """Error when the transport fails while a body is being drained.

    Adapters translate framework-specific disconnect or I/O errors into
    this class so the guard can report a read failure without knowing
    which framework is underneath.
    """

    pass


class ShortReadError(BodyReadError):
    """Error when a body ends before the declared length was read.

    Attributes:
        expected: Number of bytes that were declared.
        received: Number of bytes actually available.
    """

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(
            f"Body ended after {received} of {expected} declared bytes"
        )


class BodyTooLargeError(DigestHeadersError):
    """Error when a declared body length exceeds the configured ceiling.

    Attributes:
        declared_length: Length claimed by the client, or None when it has
            too many digits to convert.
        max_body_bytes: The configured ceiling.
    """

    def __init__(self, declared_length: int | None, max_body_bytes: int) -> None:
        self.declared_length = declared_length
        self.max_body_bytes = max_body_bytes
        declared = "too many" if declared_length is None else declared_length
        super().__init__(
            f"Request too big to process: {declared} bytes declared, "
            f"limit is {max_body_bytes}"
        )
