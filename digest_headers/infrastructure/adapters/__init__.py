"""Framework adapters implementing the digestible and byte source ports."""

from digest_headers.infrastructure.adapters.memory import InMemoryMessage

__all__: list[str] = ["InMemoryMessage"]
