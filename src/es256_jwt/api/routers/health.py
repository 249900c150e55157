"""
es256_jwt.api.routers.health

Liveness endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    # Liveness: process is up and serving HTTP.
    return {"status": "ok"}
