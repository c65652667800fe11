"""
API routes for digest_headers.

Available routers:
- digest: Digest verification demo endpoints
"""

from digest_headers.api.routes.digest import router as digest_router

__all__: list[str] = ["digest_router"]
