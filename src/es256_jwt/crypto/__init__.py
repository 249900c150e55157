"""
es256_jwt.crypto

Crypto provider boundary (ECDSA P-256 / SHA-256 via `cryptography`).
"""

# Package marker.
