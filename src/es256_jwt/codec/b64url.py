"""
es256_jwt.codec.b64url

Unpadded base64url (RFC 4648 section 5) as used by JWS segments.
"""

from __future__ import annotations

import base64
import binascii
import re

from es256_jwt.errors import FormatError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str | bytes) -> bytes:
    if isinstance(text, bytes):
        try:
            text = text.decode("ascii")
        except UnicodeDecodeError as e:
            raise FormatError("base64url input is not ASCII") from e

    if not _ALPHABET.fullmatch(text):
        raise FormatError("invalid base64url character")
    if len(text) % 4 == 1:
        raise FormatError("invalid base64url length")

    try:
        data = base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))
    except binascii.Error as e:
        raise FormatError(f"invalid base64url: {e}") from e

    # Reject encodings with stray trailing bits so every encoded bit is significant.
    if b64url_encode(data) != text:
        raise FormatError("non-canonical base64url")
    return data
