from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from es256_jwt.api.deps import settings_dep, signing_key, verification_key
from es256_jwt.auth.deps import get_principal
from es256_jwt.auth.models import Principal
from es256_jwt.codec import canonicalize
from es256_jwt.crypto.provider import PrivateKey, PublicKey, signer, verifier
from es256_jwt.errors import ConfigError, FormatError, TokenError
from es256_jwt.observability.logging import get_logger
from es256_jwt.settings import Settings, token_config
from es256_jwt.tokens.builder import build_token
from es256_jwt.tokens.verifier import verify_token

log = get_logger(__name__)

router = APIRouter(prefix="/v1", tags=["tokens"])


class IssueTokenRequest(BaseModel):
    header: dict[str, Any] | None = None
    # Omit to get the generated batch payload (iss/sub/iat/exp/jti/kid).
    payload: dict[str, Any] | None = None


class IssueTokenResponse(BaseModel):
    token: str


class VerifyTokenRequest(BaseModel):
    token: str = Field(min_length=1)


class VerifyTokenResponse(BaseModel):
    header: dict[str, Any]
    payload: dict[str, Any]


class WhoAmIResponse(BaseModel):
    subject: str
    issuer: str
    kid: str


@router.post("/tokens", response_model=IssueTokenResponse)
async def issue_token(
    body: IssueTokenRequest,
    settings: Settings = Depends(settings_dep),
    private_key: PrivateKey = Depends(signing_key),
) -> IssueTokenResponse:
    try:
        # Caller-supplied fields must serialize; failures past this point are server-side.
        canonicalize(body.header or {})
        canonicalize(body.payload or {})
    except FormatError as e:
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e

    try:
        token = build_token(
            body.header,
            body.payload,
            signer(private_key),
            config=token_config(settings),
        )
    except ConfigError as e:
        # Missing issuer: the caller can still send an explicit payload.
        raise HTTPException(status_code=HTTP_400_BAD_REQUEST, detail=str(e)) from e
    except TokenError as e:
        log.error("token_issue_failed", error=type(e).__name__, detail=str(e))
        raise HTTPException(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR, detail="Token signing failed"
        ) from e
    return IssueTokenResponse(token=token)


@router.post("/tokens/verify", response_model=VerifyTokenResponse)
async def verify(
    body: VerifyTokenRequest,
    public_key: PublicKey = Depends(verification_key),
) -> VerifyTokenResponse:
    try:
        claims = verify_token(body.token, verifier(public_key))
    except TokenError as e:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token") from e
    return VerifyTokenResponse(header=claims.header, payload=claims.payload)


@router.get("/whoami", response_model=WhoAmIResponse)
async def whoami(principal: Principal = Depends(get_principal)) -> WhoAmIResponse:
    return WhoAmIResponse(subject=principal.subject, issuer=principal.issuer, kid=principal.kid)
