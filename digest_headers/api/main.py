"""FastAPI application entry point for the digest verification demo."""

import os

from fastapi import FastAPI

from digest_headers import __version__
from digest_headers.api.dependencies.digest import get_guard_config
from digest_headers.api.middleware.digest_response import DigestResponseMiddleware
from digest_headers.api.routes.digest import router as digest_router
from digest_headers.config.digest_config import DigestGuardConfig
from digest_headers.infrastructure.observability.logging import configure_structlog


def create_app(config: DigestGuardConfig | None = None) -> FastAPI:
    """Build the demo application.

    Args:
        config: Guard configuration. Defaults to DigestGuardConfig.from_environment().

    Returns:
        FastAPI app verifying request digests and signing response bodies.
    """
    configure_structlog(environment=os.getenv("ENVIRONMENT", "production"))
    config = config or DigestGuardConfig.from_environment()

    app = FastAPI(
        title="Digest Headers",
        description="HTTP body integrity via the Digest header",
        version=__version__,
    )
    app.dependency_overrides[get_guard_config] = lambda: config
    app.add_middleware(DigestResponseMiddleware, variant=config.default_variant)
    app.include_router(digest_router)
    return app


app = create_app()
