"""Unit tests for the body digest service.

Tests draining one-shot bodies, handing back usable replacements, and
reading Digest headers out of header maps.
"""

import io

import pytest

from digest_headers.application.services.body_digest_service import (
    attach_digest,
    attach_digest_async,
    digest_message,
    digest_of,
    digest_of_async,
    extract_digest,
    header_values,
    single_header,
)
from digest_headers.domain.errors.digest import (
    BodyReadError,
    MalformedHeaderError,
    MissingHeaderError,
    UnknownVariantError,
)
from digest_headers.domain.models.digest import Digest
from digest_headers.domain.models.hash_variant import HashVariant
from digest_headers.infrastructure.adapters.memory import InMemoryMessage


class _OneShotStream:
    """File-like body that can only be read once."""

    def __init__(self, body: bytes) -> None:
        self._body = body
        self.consumed = False

    def read(self, size: int = -1, /) -> bytes:
        if self.consumed:
            raise AssertionError("stream read twice")
        self.consumed = True
        return self._body


class _BrokenStream:
    def read(self, size: int = -1, /) -> bytes:
        raise ConnectionResetError("peer reset")


class _AsyncMessage:
    """Minimal AsyncDigestibleProtocol implementation."""

    def __init__(self, body: bytes, headers: dict[str, str] | None = None) -> None:
        self.body = body
        self.headers = dict(headers or {})

    async def drain_body(self) -> bytes:
        return self.body

    def with_body(self, body: bytes) -> "_AsyncMessage":
        return _AsyncMessage(body, self.headers)

    def with_header(self, name: str, value: str) -> "_AsyncMessage":
        return _AsyncMessage(self.body, {**self.headers, name: value})


class TestDigestOf:
    """Tests for digest_of() and digest_of_async()."""

    def test_returns_fresh_stream_and_digest(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """The replacement stream holds the same bytes that were hashed."""
        # Given: A one-shot body stream
        original = _OneShotStream(some_body)

        # When: The body is digested
        replacement, digest = digest_of(original)

        # Then: The original is spent, the replacement is intact
        assert original.consumed
        assert digest == sha256_digest
        assert replacement.read() == some_body

    def test_accepts_chunk_iterable(self, some_body: bytes) -> None:
        chunks = [some_body[:5], some_body[5:]]

        replacement, digest = digest_of(iter(chunks), HashVariant.SHA512)

        assert replacement.getvalue() == some_body
        assert digest == Digest.compute(some_body, HashVariant.SHA512)

    def test_empty_stream(self) -> None:
        replacement, digest = digest_of(io.BytesIO(b""))

        assert replacement.read() == b""
        assert digest == Digest.compute(b"")

    def test_read_failure_raises_body_read_error(self) -> None:
        with pytest.raises(BodyReadError):
            digest_of(_BrokenStream())  # type: ignore[arg-type]

    @pytest.mark.asyncio
    async def test_async_stream(self, some_body: bytes, sha256_digest: Digest) -> None:
        async def chunks():
            yield some_body[:3]
            yield some_body[3:]

        replay, digest = await digest_of_async(chunks())

        assert digest == sha256_digest
        assert replay.body == some_body
        assert b"".join([chunk async for chunk in replay]) == some_body

    @pytest.mark.asyncio
    async def test_async_read_failure(self) -> None:
        async def chunks():
            yield b"abc"
            raise ConnectionResetError("peer reset")

        with pytest.raises(BodyReadError):
            await digest_of_async(chunks())


class TestDigestMessage:
    """Tests for digest_message() and attach_digest()."""

    def test_digest_message_rebuilds_body(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """Segmented bodies are hashed as their concatenation."""
        message = InMemoryMessage(segments=(some_body[:4], some_body[4:]))

        rebuilt, digest = digest_message(message)

        assert digest == sha256_digest
        assert rebuilt.segments == (some_body,)

    def test_attach_digest_sets_header(self, some_body: bytes) -> None:
        message = InMemoryMessage.from_bytes(some_body, {"Content-Type": "text/plain"})

        signed = attach_digest(message, HashVariant.SHA384)

        assert signed.headers["Digest"] == Digest.compute(
            some_body, HashVariant.SHA384
        ).format()
        assert signed.headers["Content-Type"] == "text/plain"
        assert signed.body == some_body

    def test_attach_digest_replaces_existing_header(self, some_body: bytes) -> None:
        """A stale digest under any casing is replaced."""
        message = InMemoryMessage.from_bytes(some_body, {"digest": "SHA-256=stale"})

        signed = attach_digest(message)

        assert "digest" not in signed.headers
        assert Digest.parse(signed.headers["Digest"]).matches(some_body)

    def test_attach_digest_custom_header(self, some_body: bytes) -> None:
        signed = attach_digest(InMemoryMessage.from_bytes(some_body), header="X-Digest")

        assert "Digest" not in signed.headers
        assert Digest.parse(signed.headers["X-Digest"]).matches(some_body)

    @pytest.mark.asyncio
    async def test_attach_digest_async(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        signed = await attach_digest_async(_AsyncMessage(some_body))

        assert signed.headers["Digest"] == sha256_digest.format()
        assert signed.body == some_body


class TestHeaderLookup:
    """Tests for header_values(), single_header() and extract_digest()."""

    def test_plain_dict_is_case_insensitive(self) -> None:
        assert header_values({"dIgEsT": "a", "Other": "b"}, "Digest") == ["a"]

    def test_multi_value_accessor_is_used(self) -> None:
        class MultiHeaders(dict):
            def getlist(self, name: str) -> list[str]:
                return ["one", "two"]

        assert header_values(MultiHeaders(), "Digest") == ["one", "two"]

    def test_single_header_missing(self) -> None:
        with pytest.raises(MissingHeaderError) as exc_info:
            single_header({}, "Digest")

        assert exc_info.value.header == "Digest"

    def test_single_header_repeated(self) -> None:
        with pytest.raises(MalformedHeaderError):
            single_header({"Digest": "a", "digest": "b"}, "Digest")

    def test_extract_digest(self, sha256_digest: Digest) -> None:
        headers = {"digest": sha256_digest.format()}

        assert extract_digest(headers) == sha256_digest

    def test_extract_digest_unknown_variant(self) -> None:
        with pytest.raises(UnknownVariantError):
            extract_digest({"Digest": "SHA-420=abc"})
