"""
es256_jwt.codec

Pure byte/text codecs used by the token layer.

Responsibilities:
- Big-integer width conversions and the DER <-> JOSE signature bridge.
- Unpadded base64url and canonical JSON.
"""

from es256_jwt.codec.b64url import b64url_decode, b64url_encode
from es256_jwt.codec.bigint import to_fixed_width, to_minimal_signed
from es256_jwt.codec.canonical_json import canonicalize, parse_object
from es256_jwt.codec.der import der_to_raw, raw_to_der

__all__ = [
    "b64url_decode",
    "b64url_encode",
    "canonicalize",
    "der_to_raw",
    "parse_object",
    "raw_to_der",
    "to_fixed_width",
    "to_minimal_signed",
]
