"""
es256_jwt.tokens

ES256 token assembly and verification.

Responsibilities:
- Build signed tokens from header/payload mappings (`builder`).
- Verify tokens and apply claim checks (`verifier`).
- Generated payload strategy and result types (`claims`).
"""

from es256_jwt.tokens.builder import build_token, signing_input
from es256_jwt.tokens.claims import ALGORITHM, Claims, TokenConfig, auto_payload
from es256_jwt.tokens.verifier import verify_token

__all__ = [
    "ALGORITHM",
    "Claims",
    "TokenConfig",
    "auto_payload",
    "build_token",
    "signing_input",
    "verify_token",
]
