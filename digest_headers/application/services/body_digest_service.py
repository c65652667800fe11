"""Body digest service.

Digests bodies that are only exposed as one-shot streams, and attaches or
extracts Digest headers on messages that satisfy the digestible ports.

A one-shot body cannot be peeked. The service therefore:
1. Drains the whole body into an owned buffer
2. Hashes the buffer (there is no incremental mode)
3. Hands back a fresh stream or message over the same bytes

After any of these calls the caller holds an intact body to send or
forward, and the original stream must no longer be used. This is the only
place in the package that buffers a full body in memory.
"""

from __future__ import annotations

import io
from collections.abc import AsyncIterable, Iterable
from typing import BinaryIO, TypeVar

from digest_headers.application.ports.byte_source import HeaderLookup
from digest_headers.application.ports.digestible import (
    AsyncDigestibleProtocol,
    DigestibleProtocol,
)
from digest_headers.application.services.byte_streams import ReplayStream
from digest_headers.config.digest_config import DIGEST_HEADER
from digest_headers.domain.errors.digest import (
    BodyReadError,
    MalformedHeaderError,
    MissingHeaderError,
)
from digest_headers.domain.models.digest import Digest
from digest_headers.domain.models.hash_variant import HashVariant

M = TypeVar("M", bound=DigestibleProtocol)
A = TypeVar("A", bound=AsyncDigestibleProtocol)


def _drain(stream: BinaryIO | Iterable[bytes]) -> bytes:
    """Read a file-like object or chunk iterable to completion."""
    try:
        if hasattr(stream, "read"):
            return bytes(stream.read())  # type: ignore[union-attr]
        return b"".join(stream)  # type: ignore[arg-type]
    except OSError as exc:
        raise BodyReadError(f"Unable to read body: {exc}") from exc


async def _adrain(stream: AsyncIterable[bytes]) -> bytes:
    parts: list[bytes] = []
    try:
        async for chunk in stream:
            parts.append(bytes(chunk))
    except OSError as exc:
        raise BodyReadError(f"Unable to read body: {exc}") from exc
    return b"".join(parts)


def digest_of(
    stream: BinaryIO | Iterable[bytes],
    variant: HashVariant = HashVariant.SHA256,
) -> tuple[io.BytesIO, Digest]:
    """Drain a blocking stream, digest it, and return a replacement stream.

    Args:
        stream: Binary file object or iterable of byte chunks.
        variant: Hash variant to use.

    Returns:
        Tuple of (fresh BytesIO positioned at 0, Digest of the bytes).

    Raises:
        BodyReadError: If the stream fails while being drained.
    """
    body = _drain(stream)
    return io.BytesIO(body), Digest.compute(body, variant)


async def digest_of_async(
    stream: AsyncIterable[bytes],
    variant: HashVariant = HashVariant.SHA256,
) -> tuple[ReplayStream, Digest]:
    """Drain an async chunk stream, digest it, and return a replay stream.

    Raises:
        BodyReadError: If the stream fails while being drained.
    """
    body = await _adrain(stream)
    return ReplayStream(body), Digest.compute(body, variant)


def digest_message(message: M, variant: HashVariant = HashVariant.SHA256) -> tuple[M, Digest]:
    """Digest a message body, returning the rebuilt message and its Digest.

    Args:
        message: Digestible message. Unusable after this call.
        variant: Hash variant to use.

    Returns:
        Tuple of (equivalent message over the drained bytes, Digest).

    Raises:
        BodyReadError: If draining fails.
    """
    body = message.drain_body()
    return message.with_body(body), Digest.compute(body, variant)


async def digest_message_async(
    message: A, variant: HashVariant = HashVariant.SHA256
) -> tuple[A, Digest]:
    """Asyncio counterpart of digest_message()."""
    body = await message.drain_body()
    return message.with_body(body), Digest.compute(body, variant)


def attach_digest(
    message: M,
    variant: HashVariant = HashVariant.SHA256,
    header: str = DIGEST_HEADER,
) -> M:
    """Return a rebuilt message carrying a Digest header for its body.

    Raises:
        BodyReadError: If draining fails.
    """
    rebuilt, digest = digest_message(message, variant)
    return rebuilt.with_header(header, digest.format())


async def attach_digest_async(
    message: A,
    variant: HashVariant = HashVariant.SHA256,
    header: str = DIGEST_HEADER,
) -> A:
    """Asyncio counterpart of attach_digest()."""
    rebuilt, digest = await digest_message_async(message, variant)
    return rebuilt.with_header(header, digest.format())


def header_values(headers: HeaderLookup, name: str) -> list[str]:
    """Return every value of a header, matching the name case-insensitively.

    Uses the multi-value accessor of starlette (getlist) or httpx
    (get_list) header objects when present, so repeated headers are seen.
    """
    for accessor in ("getlist", "get_list"):
        getter = getattr(headers, accessor, None)
        if callable(getter):
            return list(getter(name))

    wanted = name.lower()
    return [value for key, value in headers.items() if key.lower() == wanted]


def single_header(headers: HeaderLookup, name: str) -> str:
    """Return the only value of a header.

    Raises:
        MissingHeaderError: If the header is absent.
        MalformedHeaderError: If it appears more than once.
    """
    values = header_values(headers, name)
    if not values:
        raise MissingHeaderError(name)
    if len(values) > 1:
        raise MalformedHeaderError(name, f"expected exactly one, found {len(values)}")
    return values[0]


def extract_digest(headers: HeaderLookup, name: str = DIGEST_HEADER) -> Digest:
    """Parse the Digest header out of a header map.

    Raises:
        MissingHeaderError: If the header is absent.
        MalformedHeaderError: If it appears more than once.
        MalformedDigestError / UnknownVariantError: If its value is unparsable.
    """
    return Digest.parse(single_header(headers, name))
