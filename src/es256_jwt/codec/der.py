"""
es256_jwt.codec.der

ECDSA signature bridge between ASN.1 DER and the fixed-width JOSE form.

Responsibilities:
- Parse `SEQUENCE { INTEGER r, INTEGER s }` strictly and emit `r || s`.
- Build minimal DER from `r || s` for crypto libraries that only accept DER.

Note:
- Crypto libraries sign/verify with DER; the token carries 2*width raw bytes.
  A DER INTEGER whose high bit is set carries a 0x00 pad byte that must not
  leak into the raw form (it would make a half 33 bytes long).
"""

from __future__ import annotations

from es256_jwt.codec.bigint import to_fixed_width, to_minimal_signed
from es256_jwt.errors import FormatError, ParseError

P256_WIDTH = 32

_SEQUENCE = 0x30
_INTEGER = 0x02
_SHORT_FORM_MAX = 0x7F


def _read_length(buf: bytes, pos: int) -> tuple[int, int]:
    if pos >= len(buf):
        raise ParseError("truncated DER length")
    first = buf[pos]
    pos += 1
    if first <= _SHORT_FORM_MAX:
        return first, pos

    count = first & 0x7F
    if count == 0 or count > 2:
        raise ParseError("unsupported DER length form")
    if pos + count > len(buf):
        raise ParseError("truncated DER length")
    length = int.from_bytes(buf[pos : pos + count], "big")
    # DER requires the shortest length form.
    if length <= _SHORT_FORM_MAX or buf[pos] == 0:
        raise ParseError("non-minimal DER length")
    return length, pos + count


def _read_integer(buf: bytes, pos: int) -> tuple[bytes, int]:
    if pos >= len(buf) or buf[pos] != _INTEGER:
        raise ParseError("expected DER INTEGER")
    length, pos = _read_length(buf, pos + 1)
    if length == 0:
        raise ParseError("empty DER INTEGER")
    end = pos + length
    if end > len(buf):
        raise ParseError("DER INTEGER length exceeds buffer")
    body = buf[pos:end]
    if body[0] & 0x80:
        raise ParseError("negative DER INTEGER")
    return body, end


def der_to_raw(der: bytes, width: int = P256_WIDTH) -> bytes:
    """
    Decode a DER ECDSA signature into `r || s`, each half exactly `width` bytes.
    """

    if not der or der[0] != _SEQUENCE:
        raise ParseError("expected DER SEQUENCE")
    length, pos = _read_length(der, 1)
    if pos + length != len(der):
        raise ParseError("DER SEQUENCE length does not match buffer")

    r, pos = _read_integer(der, pos)
    s, pos = _read_integer(der, pos)
    if pos != len(der):
        raise ParseError("unexpected trailing DER elements")

    # FormatError here means the value cannot fit the curve: a corrupted signature.
    return to_fixed_width(r, width) + to_fixed_width(s, width)


def _encode_integer(value: bytes) -> bytes:
    body = to_minimal_signed(value)
    if len(body) > _SHORT_FORM_MAX:
        raise FormatError("DER INTEGER too long for short-form length")
    return bytes((_INTEGER, len(body))) + body


def raw_to_der(raw: bytes, width: int = P256_WIDTH) -> bytes:
    """
    Encode `r || s` (2*width bytes) as a minimal DER ECDSA signature.
    """

    if len(raw) != 2 * width:
        raise FormatError(f"raw signature must be {2 * width} bytes, got {len(raw)}")

    content = _encode_integer(raw[:width]) + _encode_integer(raw[width:])
    if len(content) > _SHORT_FORM_MAX:
        raise FormatError("DER SEQUENCE too long for short-form length")
    return bytes((_SEQUENCE, len(content))) + content


# --- Module Notes -----------------------------------------------------------
# The encoder only emits short-form lengths (always enough for P-256); the decoder
# also accepts minimal long-form lengths so signatures from wider curves parse
# cleanly and then fail width checks with a FormatError.
