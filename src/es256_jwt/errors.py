"""
es256_jwt.errors

Error taxonomy shared by codecs, token building and verification.

Responsibilities:
- Give every failure a specific, non-retryable kind.
- Let boundaries (CLI, HTTP) catch `TokenError` once and map it to an exit code/status.
"""

from __future__ import annotations


class TokenError(Exception):
    pass


class ConfigError(TokenError):
    """Required external input (issuer, key file, expiry) is missing or invalid."""


class FormatError(TokenError, ValueError):
    """Malformed base64url/JSON input or a byte-length mismatch."""


class ParseError(TokenError, ValueError):
    """Malformed DER signature or token structure."""


class AlgorithmMismatch(TokenError):
    pass


class SignatureInvalid(TokenError):
    pass


class VerificationError(SignatureInvalid):
    """The crypto provider failed while verifying; treated as an invalid signature."""


class TokenExpired(TokenError):
    pass


class SigningError(TokenError):
    pass


# --- Module Notes -----------------------------------------------------------
# Callers that only need "is this token acceptable?" should catch `TokenError`.
# The specific subclasses are for logs and tests, not for end-user messages.
