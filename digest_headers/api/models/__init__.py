"""API request/response models."""

from digest_headers.api.models.digest import DigestErrorResponse, VerifiedBodyResponse

__all__: list[str] = ["DigestErrorResponse", "VerifiedBodyResponse"]
