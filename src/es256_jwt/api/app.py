"""
es256_jwt.api.app

FastAPI app factory for the token service.

Responsibilities:
- Build the FastAPI application and register routers.
- Load key material once and stash it on `app.state` for dependencies.
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from fastapi import FastAPI

from es256_jwt import __version__
from es256_jwt.api.routers.health import router as health_router
from es256_jwt.api.routers.tokens import router as tokens_router
from es256_jwt.crypto.provider import (
    PrivateKey,
    PublicKey,
    derive_public_key,
    load_private_key,
    load_public_key,
)
from es256_jwt.observability.logging import configure_logging, get_logger
from es256_jwt.settings import Settings

log = get_logger(__name__)


def create_app(
    *,
    settings: Settings,
    private_key: PrivateKey | None = None,
    public_key: PublicKey | None = None,
) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="ES256 Token Service",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
    )

    # Explicit keys win (tests); otherwise fall back to the configured PEM paths.
    if private_key is None and settings.private_key_path is not None:
        private_key = load_private_key(settings.private_key_path)
    if public_key is None and settings.public_key_path is not None:
        public_key = load_public_key(settings.public_key_path)
    if public_key is None and private_key is not None:
        public_key = derive_public_key(private_key)

    app.state.settings = settings
    app.state.signing_key = private_key
    app.state.verification_key = public_key

    app.include_router(health_router, tags=["health"])
    app.include_router(tokens_router)

    log.info(
        "app_created",
        env=settings.env,
        can_sign=private_key is not None,
        can_verify=public_key is not None,
    )
    return app


# --- Module Notes -----------------------------------------------------------
# Business logic stays in `es256_jwt.tokens`; this module only wires keys and routes.
