"""Base exception classes for the digest_headers domain layer."""


class DigestHeadersError(Exception):
    """Base exception for all digest_headers errors.

    Every exception raised by this package inherits from this class so
    integrating frameworks can catch the whole family in one place.
    """

    def __init__(self, message: str = "") -> None:
        """Initialize the exception with an optional message.

        Args:
            message: Human-readable error description.
        """
        super().__init__(message)
