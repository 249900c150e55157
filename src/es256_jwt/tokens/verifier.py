"""
es256_jwt.tokens.verifier

ES256 token validation.

Responsibilities:
- Split and decode the token, rejecting anything but a strict three-segment form.
- Enforce `alg == ES256` before any signature work.
- Rebuild the DER signature, delegate to the crypto provider, then check `exp`.

Note:
- The signing input is the received `segment1.segment2` text, never re-serialized JSON.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

from es256_jwt.codec import b64url_decode, parse_object, raw_to_der
from es256_jwt.errors import (
    AlgorithmMismatch,
    FormatError,
    ParseError,
    SignatureInvalid,
    TokenError,
    TokenExpired,
    VerificationError,
)
from es256_jwt.observability.logging import get_logger
from es256_jwt.tokens.claims import ALGORITHM, Claims

log = get_logger(__name__)

VerifyFn = Callable[[bytes, bytes], bool]

RAW_SIGNATURE_SIZE = 64


def _split(token: str) -> tuple[str, str, str]:
    parts = token.strip().split(".")
    if len(parts) != 3 or not all(parts):
        raise ParseError("invalid token format")
    return parts[0], parts[1], parts[2]


def _decode_object(segment: str, name: str) -> dict[str, Any]:
    try:
        return parse_object(b64url_decode(segment))
    except FormatError as e:
        raise ParseError(f"invalid {name} segment: {e}") from e


def _check_expiry(payload: dict[str, Any], now: datetime | None, leeway: int) -> None:
    if "exp" not in payload:
        return
    exp = payload["exp"]
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        raise ParseError("exp claim must be a finite number")
    # 1e999 parses to inf; NaN compares false against every clock.
    if isinstance(exp, float) and not math.isfinite(exp):
        raise ParseError("exp claim must be a finite number")
    current = (now or datetime.now(tz=UTC)).timestamp()
    if current >= exp + leeway:
        raise TokenExpired("token has expired")


def _verify(token: str, verify: VerifyFn, now: datetime | None, leeway: int) -> Claims:
    h64, p64, s64 = _split(token)
    header = _decode_object(h64, "header")
    payload = _decode_object(p64, "payload")

    alg = header.get("alg")
    if alg != ALGORITHM:
        raise AlgorithmMismatch(f"alg is not {ALGORITHM} (got: {alg!r})")

    raw = b64url_decode(s64)
    if len(raw) != RAW_SIGNATURE_SIZE:
        raise FormatError(f"invalid JOSE signature length (expect {RAW_SIGNATURE_SIZE} bytes)")

    try:
        der = raw_to_der(raw)
    except FormatError as e:
        # Do not expose DER details past this boundary.
        raise SignatureInvalid("signature invalid") from e

    message = f"{h64}.{p64}".encode("ascii")
    try:
        ok = verify(message, der)
    except TokenError:
        raise
    except Exception as e:
        raise VerificationError("signature verification failed") from e
    if not ok:
        raise SignatureInvalid("signature invalid")

    _check_expiry(payload, now, leeway)
    return Claims(header=header, payload=payload)


def verify_token(
    token: str,
    verify: VerifyFn,
    *,
    now: datetime | None = None,
    leeway: int = 0,
) -> Claims:
    try:
        claims = _verify(token, verify, now, leeway)
    except TokenError as e:
        # Detailed kind goes to logs only; callers see the taxonomy.
        log.info("token_rejected", error=type(e).__name__, detail=str(e))
        raise
    log.debug("token_verified", kid=claims.kid, jti=claims.payload.get("jti"))
    return claims


# --- Module Notes -----------------------------------------------------------
# Ordering matters: alg is checked before the signature (algorithm substitution),
# and expiry only after the signature (never trust claims from unsigned data).
