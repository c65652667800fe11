"""Unit tests for the Digest value object.

Tests computation against known values, header formatting and parsing,
and verification of bodies against a claimed digest.
"""

import base64
import hashlib

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from digest_headers.domain.errors.digest import (
    DigestMismatchError,
    MalformedDigestError,
    UnknownVariantError,
)
from digest_headers.domain.models.digest import Digest, verify_digest
from digest_headers.domain.models.hash_variant import HashVariant


class TestDigestCompute:
    """Tests for Digest.compute()."""

    @pytest.mark.parametrize("variant", list(HashVariant))
    def test_compute_known_values(
        self,
        some_body: bytes,
        known_digests: dict[HashVariant, str],
        variant: HashVariant,
    ) -> None:
        """Computed digests match independently known values."""
        digest = Digest.compute(some_body, variant)

        assert digest.encoded == known_digests[variant]
        assert digest.variant is variant

    def test_compute_defaults_to_sha256(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """SHA-256 is the default variant."""
        assert Digest.compute(some_body) == sha256_digest

    def test_compute_empty_body(self) -> None:
        """An empty body has a well-defined digest."""
        digest = Digest.compute(b"")

        expected = base64.b64encode(hashlib.sha256(b"").digest()).decode("ascii")
        assert digest.encoded == expected
        assert digest.encoded == "47DEQpj8HBSa+/TImW+5JCeuQeRkm5NMpJWZG3hSuFU="

    def test_compute_is_deterministic(self, some_body: bytes) -> None:
        """Same bytes and variant always give an equal digest."""
        assert Digest.compute(some_body, HashVariant.SHA512) == Digest.compute(
            some_body, HashVariant.SHA512
        )

    def test_compute_handles_large_body(self) -> None:
        """Bodies well beyond a single read chunk hash correctly."""
        body = bytes(range(256)) * 8192

        digest = Digest.compute(body, HashVariant.SHA384)

        expected = base64.b64encode(hashlib.sha384(body).digest()).decode("ascii")
        assert digest.encoded == expected


class TestDigestFormat:
    """Tests for header rendering."""

    def test_format_matches_header_syntax(self, sha256_digest: Digest) -> None:
        """format() renders '{variant}={base64}'."""
        assert (
            sha256_digest.format()
            == "SHA-256=bFp1K/TT36l9YQ8frlh/cVGuWuFEy1rCUNpGwQCSEow="
        )
        assert str(sha256_digest) == sha256_digest.format()

    def test_from_base64_keeps_value_verbatim(self) -> None:
        """from_base64 does not validate or normalize the value."""
        digest = Digest.from_base64("not base64 at all", HashVariant.SHA512)

        assert digest.format() == "SHA-512=not base64 at all"

    def test_digest_is_immutable(self, sha256_digest: Digest) -> None:
        """Digest fields cannot be reassigned."""
        with pytest.raises(AttributeError):
            sha256_digest.encoded = "other"  # type: ignore[misc]


class TestDigestParse:
    """Tests for Digest.parse()."""

    @pytest.mark.parametrize("variant", list(HashVariant))
    def test_parse_round_trip(self, some_body: bytes, variant: HashVariant) -> None:
        """parse(format(d)) == d for every variant."""
        digest = Digest.compute(some_body, variant)

        assert Digest.parse(digest.format()) == digest

    def test_parse_splits_on_first_delimiter_only(self) -> None:
        """Base64 padding after the first '=' belongs to the value."""
        digest = Digest.parse("SHA-512=abc==")

        assert digest.variant is HashVariant.SHA512
        assert digest.encoded == "abc=="

    def test_parse_accepts_empty_value(self) -> None:
        """A name followed by '=' alone parses with an empty value."""
        digest = Digest.parse("SHA-256=")

        assert digest.encoded == ""
        assert not digest.matches(b"")

    def test_parse_unknown_variant(self) -> None:
        """An unsupported algorithm name fails with UnknownVariantError."""
        with pytest.raises(UnknownVariantError) as exc_info:
            Digest.parse("SHA-420=abc")

        assert exc_info.value.variant_name == "SHA-420"

    @pytest.mark.parametrize("value", ["", "SHA-256", "bFp1K/TT36l9YQ8", "   "])
    def test_parse_missing_delimiter(self, value: str) -> None:
        """Values without '=' are malformed."""
        with pytest.raises(MalformedDigestError) as exc_info:
            Digest.parse(value)

        assert not isinstance(exc_info.value, UnknownVariantError)
        assert exc_info.value.value == value

    @pytest.mark.parametrize(
        "value",
        ["=abc", "sha-256=abc", " SHA-256=abc", "SHA-256 =abc", "md5=abc", "\x00=\xff"],
    )
    def test_parse_garbage_prefix(self, value: str) -> None:
        """Any non-canonical prefix is rejected as an unknown variant."""
        with pytest.raises(UnknownVariantError):
            Digest.parse(value)

    @pytest.mark.parametrize("value", [None, b"SHA-256=abc", 42])
    def test_parse_non_string(self, value: object) -> None:
        """Non-text input yields a typed error, never a crash."""
        with pytest.raises(MalformedDigestError):
            Digest.parse(value)  # type: ignore[arg-type]


class TestDigestVerify:
    """Tests for Digest.verify() and Digest.matches()."""

    def test_verify_accepts_matching_body(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """The known SHA-256 header verifies the reference body."""
        # Given: A header parsed from the wire
        digest = Digest.parse("SHA-256=bFp1K/TT36l9YQ8frlh/cVGuWuFEy1rCUNpGwQCSEow=")

        # When/Then: Verification succeeds
        digest.verify(some_body)
        assert digest == sha256_digest
        assert digest.matches(some_body)

    def test_verify_is_repeatable(self, some_body: bytes, sha256_digest: Digest) -> None:
        """Verifying the same body twice succeeds twice."""
        sha256_digest.verify(some_body)
        sha256_digest.verify(some_body)

    def test_verify_rejects_different_body(self, sha256_digest: Digest) -> None:
        """A different body fails verification."""
        with pytest.raises(DigestMismatchError) as exc_info:
            sha256_digest.verify(b"Some other content")

        assert exc_info.value.expected == sha256_digest.format()
        assert exc_info.value.actual == Digest.compute(b"Some other content").format()

    def test_verify_detects_single_bit_flip(self, some_body: bytes) -> None:
        """Flipping one bit anywhere in the body is detected."""
        digest = Digest.compute(some_body, HashVariant.SHA384)

        for index in range(len(some_body)):
            tampered = bytearray(some_body)
            tampered[index] ^= 0x01
            assert not digest.matches(bytes(tampered))

    def test_verify_detects_truncation_and_extension(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """Dropping or appending bytes is detected."""
        assert not sha256_digest.matches(some_body[:-1])
        assert not sha256_digest.matches(some_body + b"\x00")

    def test_verify_is_variant_sensitive(
        self, some_body: bytes, known_digests: dict[HashVariant, str]
    ) -> None:
        """A correct value under the wrong variant never verifies."""
        # Given: The SHA-256 value labelled as SHA-512
        digest = Digest.from_base64(known_digests[HashVariant.SHA256], HashVariant.SHA512)

        # Then: It does not verify the body it was computed from
        assert not digest.matches(some_body)
        with pytest.raises(DigestMismatchError):
            digest.verify(some_body)

    def test_verify_compares_encoding_literally(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """An encoding without its padding is a different digest."""
        unpadded = Digest.from_base64(sha256_digest.encoded.rstrip("="), HashVariant.SHA256)

        assert not unpadded.matches(some_body)

    def test_verify_handles_non_ascii_claimed_value(self, some_body: bytes) -> None:
        """Arbitrary text in a parsed value is rejected, not crashed on."""
        digest = Digest.parse("SHA-256=\udcffé")

        assert not digest.matches(some_body)


class TestVerifyDigest:
    """Tests for the verify_digest() convenience function."""

    def test_returns_parsed_digest_on_match(
        self, some_body: bytes, sha256_digest: Digest
    ) -> None:
        """verify_digest returns the parsed digest when the body matches."""
        assert verify_digest(sha256_digest.format(), some_body) == sha256_digest

    def test_raises_on_mismatch(self, sha256_digest: Digest) -> None:
        """verify_digest raises DigestMismatchError for a wrong body."""
        with pytest.raises(DigestMismatchError):
            verify_digest(sha256_digest.format(), b"Some other content")

    def test_raises_on_unparsable_header(self, some_body: bytes) -> None:
        """verify_digest raises parse errors before hashing anything."""
        with pytest.raises(UnknownVariantError):
            verify_digest("SHA-420=abc", some_body)
        with pytest.raises(MalformedDigestError):
            verify_digest("no delimiter", some_body)


class TestDigestProperties:
    """Property tests over arbitrary bodies and every variant."""

    @given(st.binary(), st.sampled_from(HashVariant))
    def test_format_parse_round_trip(self, body: bytes, variant: HashVariant) -> None:
        digest = Digest.compute(body, variant)

        assert Digest.parse(digest.format()) == digest

    @given(st.binary(), st.sampled_from(HashVariant))
    def test_verify_is_repeatable(self, body: bytes, variant: HashVariant) -> None:
        digest = Digest.compute(body, variant)

        digest.verify(body)
        digest.verify(body)
        assert digest.matches(body)

    @given(st.binary(), st.binary(), st.sampled_from(HashVariant))
    def test_other_body_never_matches(
        self, body: bytes, other: bytes, variant: HashVariant
    ) -> None:
        assume(body != other)
        digest = Digest.compute(body, variant)

        assert not digest.matches(other)
        with pytest.raises(DigestMismatchError):
            digest.verify(other)

    @given(st.binary(), st.sampled_from(HashVariant), st.sampled_from(HashVariant))
    def test_encoding_under_other_variant_never_matches(
        self, body: bytes, variant: HashVariant, other: HashVariant
    ) -> None:
        assume(variant is not other)
        relabelled = Digest.from_base64(Digest.compute(body, variant).encoded, other)

        assert not relabelled.matches(body)
