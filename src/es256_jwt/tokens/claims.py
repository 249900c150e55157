"""
es256_jwt.tokens.claims

Token data types and the generated-payload strategy.

Responsibilities:
- Define `TokenConfig` (explicit issuance settings) and `Claims` (verification result).
- Generate the batch payload (iss/sub/iat/exp/jti/kid) when the caller supplies none.
"""

from __future__ import annotations

import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from es256_jwt.errors import ConfigError

ALGORITHM = "ES256"
DEFAULT_TYPE = "JWT"
BATCH_SUBJECT = "batch_user"


@dataclass(frozen=True, slots=True)
class TokenConfig:
    # Issuer is mandatory for generated payloads; there is no safe default.
    issuer: str | None = None
    expiry_hours: int = 1
    subject: str = BATCH_SUBJECT


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Decoded contents of a verified token.
    """

    header: dict[str, Any]
    payload: dict[str, Any]

    @property
    def kid(self) -> str:
        return str(self.payload.get("kid", ""))


def auto_payload(
    cfg: TokenConfig,
    *,
    now: datetime | None = None,
    jti_factory: Callable[[], str] | None = None,
) -> dict[str, Any]:
    if not cfg.issuer:
        raise ConfigError("issuer is required to generate a payload")
    hours = cfg.expiry_hours
    if isinstance(hours, bool) or not isinstance(hours, int) or hours < 0:
        raise ConfigError(f"expiry_hours must be a non-negative integer, got {hours!r}")

    iat = int((now or datetime.now(tz=UTC)).timestamp())
    return {
        "iss": cfg.issuer,
        "sub": cfg.subject,
        "iat": iat,
        "exp": iat + hours * 3600,
        # Best-effort uniqueness only; not a security property.
        "jti": (jti_factory or _random_jti)(),
        "kid": "",
    }


def _random_jti() -> str:
    return str(uuid.uuid4())


# --- Module Notes -----------------------------------------------------------
# `kid` is always part of the payload (not only the header); verifiers downstream
# rely on finding it there.
