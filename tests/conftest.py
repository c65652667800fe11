"""
Pytest configuration and shared fixtures for digest_headers tests.

Testing Standards:
- Async tests run under pytest-asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/<layer>/
- Integration tests go in tests/integration/
"""

import pytest

from digest_headers.domain.models.digest import Digest
from digest_headers.domain.models.hash_variant import HashVariant

SOME_BODY = b"The content of a thing"

# Known digests of SOME_BODY
KNOWN_DIGESTS = {
    HashVariant.SHA256: "bFp1K/TT36l9YQ8frlh/cVGuWuFEy1rCUNpGwQCSEow=",
    HashVariant.SHA384: "wOx5d657W3O8k2P7SW18Y/Kj/Rqm02pzgFVBInHOj7hbc0IrYGVXwzid3vTH82um",
    HashVariant.SHA512: (
        "t13li71PxOlxHbZRB3ICZxjwBkYxhellKbMEQjT2udmQRP1fzIrmT49EGy9zNdTS5/JKjxqidsIQBO3i+9DBDQ=="
    ),
}


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from digest_headers import __version__

    return __version__


@pytest.fixture
def some_body() -> bytes:
    """The reference body used across digest tests."""
    return SOME_BODY


@pytest.fixture
def sha256_digest() -> Digest:
    """Digest of the reference body under SHA-256."""
    return Digest.from_base64(KNOWN_DIGESTS[HashVariant.SHA256], HashVariant.SHA256)


@pytest.fixture
def known_digests() -> dict[HashVariant, str]:
    """Known base64 digests of the reference body, per variant."""
    return dict(KNOWN_DIGESTS)
