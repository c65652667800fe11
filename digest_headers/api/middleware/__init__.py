"""API middleware components."""

from digest_headers.api.middleware.digest_response import DigestResponseMiddleware

__all__: list[str] = ["DigestResponseMiddleware"]
