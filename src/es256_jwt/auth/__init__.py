"""
es256_jwt.auth

FastAPI authentication helpers built on the ES256 verifier.

Responsibilities:
- Turn a bearer token into a typed `Principal`.
"""

# Package marker.
