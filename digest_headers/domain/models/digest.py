"""Digest value object for HTTP body integrity.

A Digest asserts "this exact byte sequence, hashed with this algorithm,
produced this value". It is created either by hashing a body
(Digest.compute) or by parsing a header value (Digest.parse), and is never
mutated afterwards.

Header Format:
    {variant}={base64}

    Digest: SHA-256=bFp1K/TT36l9YQ8frlh/cVGuWuFEy1rCUNpGwQCSEow=

Only the FIRST `=` is a delimiter. Base64 padding after it belongs to the
value.

Developer Golden Rules:
1. OPAQUE - The encoded value is never base64-decoded, only compared
2. RECOMPUTE - verify() always re-hashes; nothing is cached
3. TOTAL PARSE - Arbitrary attacker input yields a typed error, never a crash
"""

from __future__ import annotations

import base64
import hmac
from dataclasses import dataclass
from typing import ClassVar

from digest_headers.domain.errors.digest import (
    DigestMismatchError,
    MalformedDigestError,
)
from digest_headers.domain.models.hash_variant import HashVariant


@dataclass(frozen=True)
class Digest:
    """Value object holding a base64 hash and the variant that produced it.

    Two digests are equal iff both variant and encoded string are equal.
    Encodings of the same bytes that differ in padding or casing are
    different digests.

    Attributes:
        encoded: Base64 encoding of the raw hash output.
        variant: HashVariant used to produce it.
    """

    encoded: str
    variant: HashVariant

    DELIMITER: ClassVar[str] = "="

    @classmethod
    def compute(
        cls, body: bytes, variant: HashVariant = HashVariant.SHA256
    ) -> Digest:
        """Hash a body and wrap the base64 result.

        Args:
            body: Raw body bytes (may be empty).
            variant: Hash algorithm to use.

        Returns:
            Digest of body under variant.
        """
        hasher = variant.new_hash()
        hasher.update(body)
        encoded = base64.b64encode(hasher.digest()).decode("ascii")
        return cls(encoded=encoded, variant=variant)

    @classmethod
    def from_base64(cls, encoded: str, variant: HashVariant) -> Digest:
        """Wrap an already base64-encoded hash without checking it."""
        return cls(encoded=encoded, variant=variant)

    def format(self) -> str:
        """Render the header value, e.g. "SHA-256=<base64>"."""
        return f"{self.variant.wire_name}{self.DELIMITER}{self.encoded}"

    def __str__(self) -> str:
        return self.format()

    @classmethod
    def parse(cls, value: str) -> Digest:
        """Parse a Digest header value.

        Splits on the first `=`. The prefix must be a canonical variant
        name; the remainder is kept verbatim, further `=` included.

        Args:
            value: Header value such as "SHA-512=abc==".

        Returns:
            The parsed Digest.

        Raises:
            MalformedDigestError: If value is not a string or has no `=`.
            UnknownVariantError: If the prefix is not a known variant.
        """
        if not isinstance(value, str):
            raise MalformedDigestError(value, reason="not a string")

        name, delimiter, encoded = value.partition(cls.DELIMITER)
        if not delimiter:
            raise MalformedDigestError(value)

        return cls(encoded=encoded, variant=HashVariant.parse(name))

    def matches(self, body: bytes) -> bool:
        """Return True if body hashes to this digest."""
        return self._same_as(Digest.compute(body, self.variant))

    def verify(self, body: bytes) -> None:
        """Check body against this digest.

        Args:
            body: The bytes that were supposedly hashed.

        Raises:
            DigestMismatchError: If the recomputed digest differs.
        """
        actual = Digest.compute(body, self.variant)
        if not self._same_as(actual):
            raise DigestMismatchError(expected=self.format(), actual=actual.format())

    def _same_as(self, other: Digest) -> bool:
        """Constant-time value equality."""
        if other.variant is not self.variant:
            return False
        # surrogatepass keeps arbitrary parsed text encodable
        return hmac.compare_digest(
            other.encoded.encode("utf-8", "surrogatepass"),
            self.encoded.encode("utf-8", "surrogatepass"),
        )


def verify_digest(header_value: str, body: bytes) -> Digest:
    """Parse a Digest header value and verify body against it.

    Args:
        header_value: The raw Digest header value.
        body: The received body.

    Returns:
        The parsed (and now verified) Digest.

    Raises:
        MalformedDigestError: If the header cannot be parsed.
        UnknownVariantError: If it names an unsupported algorithm.
        DigestMismatchError: If the body does not match.
    """
    digest = Digest.parse(header_value)
    digest.verify(body)
    return digest
