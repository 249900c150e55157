"""
es256_jwt.observability

Observability package (structured logging).
"""

# Package marker.
