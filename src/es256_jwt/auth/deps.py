"""
es256_jwt.auth.deps

FastAPI dependency functions for bearer-token authentication.

Responsibilities:
- Verify an ES256 bearer token against the service's public key.
- Convert verified claims into a `Principal`.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED

from es256_jwt.api.deps import verification_key
from es256_jwt.auth.models import Principal
from es256_jwt.crypto.provider import PublicKey, verifier
from es256_jwt.errors import TokenError
from es256_jwt.tokens.verifier import verify_token

_bearer = HTTPBearer(auto_error=False)


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    public_key: PublicKey = Depends(verification_key),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        claims = verify_token(creds.credentials, verifier(public_key))
    except TokenError as e:
        # Same detail for every failure kind; the specific kind is in the verifier logs.
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token") from e

    principal = Principal.from_claims(claims)
    if not principal.subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    return principal


# --- Module Notes -----------------------------------------------------------
# Issuer/audience allow-lists are deliberately absent: only alg, signature and exp
# are enforced for these tokens.
