"""In-memory digestible message.

The simplest DigestibleProtocol implementation: a body held as one or more
byte segments plus a header dict. Useful for tests and for callers that
assemble bodies themselves before handing them to a transport.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class InMemoryMessage:
    """Message whose body is a sequence of byte segments.

    Draining concatenates the segments; the rebuilt message holds a
    single segment.

    Attributes:
        segments: Body parts in order.
        headers: Header name to value.
    """

    segments: tuple[bytes, ...] = ()
    headers: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_bytes(
        cls, body: bytes, headers: Mapping[str, str] | None = None
    ) -> InMemoryMessage:
        return cls(segments=(body,), headers=dict(headers or {}))

    @property
    def body(self) -> bytes:
        return b"".join(self.segments)

    def drain_body(self) -> bytes:
        return self.body

    def with_body(self, body: bytes) -> InMemoryMessage:
        return replace(self, segments=(body,))

    def with_header(self, name: str, value: str) -> InMemoryMessage:
        # Drop any existing spelling of the same header
        headers = {k: v for k, v in self.headers.items() if k.lower() != name.lower()}
        headers[name] = value
        return replace(self, headers=headers)
