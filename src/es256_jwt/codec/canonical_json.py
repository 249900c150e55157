"""
es256_jwt.codec.canonical_json

Deterministic JSON serialization for signed token segments.

Responsibilities:
- Serialize JSON values with sorted keys and no insignificant whitespace.
- Parse caller-supplied JSON text into an object (mapping) or fail with FormatError.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from es256_jwt.errors import FormatError


def _check_keys(value: Any) -> None:
    # json.dumps silently stringifies int/float/bool keys; signed bytes must not depend on that.
    if isinstance(value, Mapping):
        for key, item in value.items():
            if not isinstance(key, str):
                raise FormatError(f"JSON object keys must be strings, got {type(key).__name__}")
            _check_keys(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_keys(item)


def canonicalize(value: Any) -> bytes:
    _check_keys(value)
    try:
        text = json.dumps(
            value,
            sort_keys=True,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        )
    except (TypeError, ValueError) as e:
        raise FormatError(f"value is not canonical JSON: {e}") from e
    return text.encode("utf-8")


def _reject_constant(name: str) -> Any:
    raise FormatError(f"{name} is not valid JSON")


def parse_object(text: str | bytes) -> dict[str, Any]:
    try:
        if isinstance(text, bytes):
            # JSON text is UTF-8 only; json.loads would also sniff UTF-16/32.
            text = text.decode("utf-8")
        value = json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        # Also covers UnicodeDecodeError and the NaN/Infinity literals.
        raise FormatError(f"invalid JSON: {e}") from e
    if not isinstance(value, dict):
        raise FormatError("JSON value must be an object")
    return value


# --- Module Notes -----------------------------------------------------------
# Output matches `jq -cS .`: UTF-8 text, sorted keys, compact separators.
