"""
es256_jwt.tokens.builder

ES256 token issuing.

Responsibilities:
- Force the fixed header fields (`alg`, `typ`) and the payload `kid`.
- Produce the signing input from canonical JSON and sign it via the crypto provider.
- Convert the provider's DER signature into the JOSE `r || s` segment.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime
from typing import Any

from es256_jwt.codec import b64url_encode, canonicalize, der_to_raw
from es256_jwt.errors import SigningError, TokenError
from es256_jwt.observability.logging import get_logger
from es256_jwt.tokens.claims import ALGORITHM, DEFAULT_TYPE, TokenConfig, auto_payload

log = get_logger(__name__)

SignFn = Callable[[bytes], bytes]


def _or_default(value: Any, default: str) -> Any:
    # jq `//` semantics: only null and false count as missing.
    if value is None or value is False:
        return default
    return value


def _header(fields: Mapping[str, Any] | None) -> dict[str, Any]:
    header = dict(fields or {})
    header["alg"] = ALGORITHM
    header["typ"] = _or_default(header.get("typ"), DEFAULT_TYPE)
    return header


def _payload(fields: Mapping[str, Any]) -> dict[str, Any]:
    payload = dict(fields)
    payload["kid"] = _or_default(payload.get("kid"), "")
    return payload


def signing_input(header: Mapping[str, Any], payload: Mapping[str, Any]) -> bytes:
    h64 = b64url_encode(canonicalize(header))
    p64 = b64url_encode(canonicalize(payload))
    return f"{h64}.{p64}".encode("ascii")


def build_token(
    header_fields: Mapping[str, Any] | None,
    payload_fields: Mapping[str, Any] | None,
    sign: SignFn,
    *,
    config: TokenConfig | None = None,
    now: datetime | None = None,
) -> str:
    """
    Build `<header64>.<payload64>.<sig64>`.

    `payload_fields=None` selects the generated payload from `config`; `sign` receives
    the signing input and must return a DER ECDSA signature. Signing is attempted once.
    """

    if payload_fields is None:
        payload_fields = auto_payload(config or TokenConfig(), now=now)

    header = _header(header_fields)
    payload = _payload(payload_fields)
    message = signing_input(header, payload)

    try:
        der = sign(message)
    except TokenError:
        raise
    except Exception as e:
        raise SigningError(f"signing failed: {e}") from e

    raw = der_to_raw(bytes(der))
    token = f"{message.decode('ascii')}.{b64url_encode(raw)}"
    log.debug("token_built", kid=payload["kid"], jti=payload.get("jti"))
    return token


# --- Module Notes -----------------------------------------------------------
# Both explicit and generated payloads flow through the same path so the header
# and `kid` rules can never diverge between the two modes.
