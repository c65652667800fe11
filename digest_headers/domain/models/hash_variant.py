"""Hash variant value object.

Enumerates the three SHA sizes a Digest header may name. The Digest header
is an integrity check, not an identity proof, so the strength trade-off is
left to the caller; 256, 384 and 512 bit variants are offered.

Developer Golden Rules:
1. EXACT NAMES - "SHA-256", "SHA-384", "SHA-512"; no case folding, no trimming
2. CLOSED SET - Any other name is an UnknownVariantError
3. FRESH HASHERS - new_hash() never shares state between callers
"""

from __future__ import annotations

import hashlib
from enum import Enum

from digest_headers.domain.errors.digest import UnknownVariantError


class HashVariant(str, Enum):
    """SHA variant used to produce a Digest.

    The enum value is the canonical wire name used both for display and
    for parsing.

    Values:
        SHA256: "SHA-256"
        SHA384: "SHA-384"
        SHA512: "SHA-512"
    """

    SHA256 = "SHA-256"
    SHA384 = "SHA-384"
    SHA512 = "SHA-512"

    def __str__(self) -> str:
        return self.value

    @property
    def wire_name(self) -> str:
        """Canonical name as it appears in a Digest header."""
        return self.value

    @property
    def hashlib_name(self) -> str:
        """Algorithm name understood by hashlib.new()."""
        return _HASHLIB_NAMES[self]

    def new_hash(self):
        """Return a fresh hashlib object for this variant."""
        return hashlib.new(self.hashlib_name)

    @classmethod
    def parse(cls, value: str) -> HashVariant:
        """Parse a canonical wire name into a HashVariant.

        Args:
            value: The algorithm name, e.g. "SHA-256".

        Returns:
            The matching HashVariant.

        Raises:
            UnknownVariantError: If value is not exactly one of the three
                canonical names.
        """
        if not isinstance(value, str):
            raise UnknownVariantError(value)
        variant = _BY_WIRE_NAME.get(value)
        if variant is None:
            raise UnknownVariantError(value)
        return variant


_HASHLIB_NAMES: dict[HashVariant, str] = {
    HashVariant.SHA256: "sha256",
    HashVariant.SHA384: "sha384",
    HashVariant.SHA512: "sha512",
}

_BY_WIRE_NAME: dict[str, HashVariant] = {variant.value: variant for variant in HashVariant}
