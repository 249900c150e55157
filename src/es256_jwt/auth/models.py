"""
es256_jwt.auth.models

Auth domain models.
"""

from __future__ import annotations

from dataclasses import dataclass

from es256_jwt.tokens.claims import Claims


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, taken from verified token claims.
    """

    subject: str
    issuer: str
    kid: str

    @classmethod
    def from_claims(cls, claims: Claims) -> Principal:
        payload = claims.payload
        return cls(
            subject=str(payload.get("sub", "")),
            issuer=str(payload.get("iss", "")),
            kid=claims.kid,
        )
