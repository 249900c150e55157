"""
es256_jwt.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide settings and key material stashed on `app.state` by `create_app`.
"""

from __future__ import annotations

from fastapi import HTTPException, Request
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE

from es256_jwt.crypto.provider import PrivateKey, PublicKey
from es256_jwt.settings import Settings


def settings_dep(request: Request) -> Settings:
    return request.app.state.settings  # type: ignore[attr-defined]


def signing_key(request: Request) -> PrivateKey:
    key = getattr(request.app.state, "signing_key", None)
    if key is None:
        raise HTTPException(status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Signing key not configured")
    return key


def verification_key(request: Request) -> PublicKey:
    key = getattr(request.app.state, "verification_key", None)
    if key is None:
        raise HTTPException(
            status_code=HTTP_503_SERVICE_UNAVAILABLE, detail="Verification key not configured"
        )
    return key
