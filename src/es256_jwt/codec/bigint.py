"""
es256_jwt.codec.bigint

Big-endian unsigned integer width helpers.

Responsibilities:
- Normalize an integer to a fixed width (JOSE r/s halves).
- Normalize an integer to its minimal non-negative DER INTEGER body.
"""

from __future__ import annotations

from es256_jwt.errors import FormatError


def to_fixed_width(value: bytes, width: int) -> bytes:
    # Leading zeros carry no value (including the DER sign pad); drop them before padding.
    significant = value.lstrip(b"\x00")
    if len(significant) > width:
        raise FormatError(f"integer needs {len(significant)} bytes, exceeds width {width}")
    return significant.rjust(width, b"\x00")


def to_minimal_signed(value: bytes) -> bytes:
    minimal = value.lstrip(b"\x00") or b"\x00"
    # High bit set would read as negative in two's complement.
    if minimal[0] & 0x80:
        minimal = b"\x00" + minimal
    return minimal
