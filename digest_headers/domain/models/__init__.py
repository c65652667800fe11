"""Domain models for digest_headers."""

from digest_headers.domain.models.digest import Digest, verify_digest
from digest_headers.domain.models.guard_outcome import GuardOutcome, GuardState
from digest_headers.domain.models.hash_variant import HashVariant

__all__: list[str] = [
    "Digest",
    "GuardOutcome",
    "GuardState",
    "HashVariant",
    "verify_digest",
]
