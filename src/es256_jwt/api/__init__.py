"""
es256_jwt.api

HTTP API package (FastAPI).
"""

# Package marker.
