"""
tests.test_builder

Token issuing: forced header/kid rules, generated payloads, signing failures.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest
from cryptography.hazmat.primitives.asymmetric import ec

from es256_jwt.codec import b64url_decode, der_to_raw, raw_to_der
from es256_jwt.crypto.provider import signer, verify
from es256_jwt.errors import ConfigError, FormatError, ParseError, SigningError
from es256_jwt.tokens.builder import build_token, signing_input
from es256_jwt.tokens.claims import TokenConfig, auto_payload

NOW = datetime(2026, 1, 1, tzinfo=UTC)


def _segments(token: str) -> tuple[dict, dict, bytes]:
    h64, p64, s64 = token.split(".")
    return json.loads(b64url_decode(h64)), json.loads(b64url_decode(p64)), b64url_decode(s64)


def test_header_alg_and_typ_are_forced(private_key: ec.EllipticCurvePrivateKey) -> None:
    token = build_token({"alg": "none", "kid": "hdr-key"}, {"sub": "x"}, signer(private_key))
    header, _, _ = _segments(token)
    assert header == {"alg": "ES256", "typ": "JWT", "kid": "hdr-key"}


def test_caller_typ_is_kept(private_key: ec.EllipticCurvePrivateKey) -> None:
    token = build_token({"typ": "at+jwt"}, {"sub": "x"}, signer(private_key))
    header, _, _ = _segments(token)
    assert header["typ"] == "at+jwt"


def test_payload_kid_defaults_to_empty(private_key: ec.EllipticCurvePrivateKey) -> None:
    token = build_token(None, {"sub": "x"}, signer(private_key))
    _, payload, _ = _segments(token)
    assert payload == {"sub": "x", "kid": ""}


def test_payload_kid_is_never_overwritten(private_key: ec.EllipticCurvePrivateKey) -> None:
    token = build_token(None, {"sub": "x", "kid": "k1"}, signer(private_key))
    _, payload, _ = _segments(token)
    assert payload["kid"] == "k1"


def test_caller_mappings_are_not_mutated(private_key: ec.EllipticCurvePrivateKey) -> None:
    header = {"alg": "HS256"}
    payload = {"sub": "x"}
    build_token(header, payload, signer(private_key))
    assert header == {"alg": "HS256"}
    assert payload == {"sub": "x"}


def test_segments_are_canonical_json(private_key: ec.EllipticCurvePrivateKey) -> None:
    token = build_token(None, {"z": 1, "a": {"y": 2, "b": 3}}, signer(private_key))
    h64, p64, _ = token.split(".")
    assert b64url_decode(h64) == b'{"alg":"ES256","typ":"JWT"}'
    assert b64url_decode(p64) == b'{"a":{"b":3,"y":2},"kid":"","z":1}'


def test_signature_segment_is_raw_jose_over_signing_input(
    private_key: ec.EllipticCurvePrivateKey,
) -> None:
    token = build_token(None, {"sub": "x"}, signer(private_key))
    h64, p64, _ = token.split(".")
    _, _, raw = _segments(token)

    assert len(raw) == 64
    assert verify(f"{h64}.{p64}".encode(), raw_to_der(raw), private_key.public_key())


def test_signing_input_matches_token_prefix(private_key: ec.EllipticCurvePrivateKey) -> None:
    token = build_token(None, {"sub": "x"}, signer(private_key))
    expected = signing_input({"alg": "ES256", "typ": "JWT"}, {"sub": "x", "kid": ""})
    assert token.rsplit(".", 1)[0].encode() == expected


def test_sign_receives_exact_signing_input() -> None:
    seen: list[bytes] = []
    der = raw_to_der(b"\x80" * 64)

    def fake_sign(message: bytes) -> bytes:
        seen.append(message)
        return der

    token = build_token(None, {"sub": "x"}, fake_sign)

    assert seen == [token.rsplit(".", 1)[0].encode()]
    assert b64url_decode(token.rsplit(".", 1)[1]) == der_to_raw(der)


def test_generated_payload(private_key: ec.EllipticCurvePrivateKey) -> None:
    cfg = TokenConfig(issuer="batch-issuer", expiry_hours=2)
    token = build_token(None, None, signer(private_key), config=cfg, now=NOW)
    _, payload, _ = _segments(token)

    iat = int(NOW.timestamp())
    assert payload["iss"] == "batch-issuer"
    assert payload["sub"] == "batch_user"
    assert payload["iat"] == iat
    assert payload["exp"] == iat + 2 * 3600
    assert payload["kid"] == ""
    assert isinstance(payload["jti"], str) and payload["jti"]


def test_generated_payload_requires_issuer(private_key: ec.EllipticCurvePrivateKey) -> None:
    with pytest.raises(ConfigError):
        build_token(None, None, signer(private_key))


@pytest.mark.parametrize("hours", [-1, 1.5, True, "1"])
def test_generated_payload_rejects_bad_expiry(hours: object) -> None:
    with pytest.raises(ConfigError):
        auto_payload(TokenConfig(issuer="i", expiry_hours=hours))  # type: ignore[arg-type]


def test_generated_payload_jti_varies() -> None:
    cfg = TokenConfig(issuer="i")
    assert auto_payload(cfg)["jti"] != auto_payload(cfg)["jti"]


def test_generated_payload_zero_hours() -> None:
    payload = auto_payload(TokenConfig(issuer="i", expiry_hours=0), now=NOW, jti_factory=lambda: "j")
    assert payload["exp"] == payload["iat"]
    assert payload["jti"] == "j"


def test_sign_failure_becomes_signing_error() -> None:
    def broken(_: bytes) -> bytes:
        raise RuntimeError("hsm offline")

    with pytest.raises(SigningError) as exc_info:
        build_token(None, {"sub": "x"}, broken)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_sign_returning_garbage_is_a_parse_error() -> None:
    with pytest.raises(ParseError):
        build_token(None, {"sub": "x"}, lambda _: b"not-der")


def test_unserializable_payload_is_a_format_error() -> None:
    with pytest.raises(FormatError):
        build_token(None, {"sub": object()}, lambda _: b"")


@pytest.mark.parametrize(
    ("kid", "expected"),
    [(None, ""), (False, ""), ("", ""), (0, 0), ("k1", "k1")],
)
def test_payload_kid_follows_jq_alternative(
    private_key: ec.EllipticCurvePrivateKey, kid: object, expected: object
) -> None:
    token = build_token(None, {"sub": "x", "kid": kid}, signer(private_key))
    _, payload, _ = _segments(token)
    assert payload["kid"] == expected
    assert type(payload["kid"]) is type(expected)


@pytest.mark.parametrize(
    ("typ", "expected"),
    [(None, "JWT"), (False, "JWT"), ("", ""), (0, 0)],
)
def test_header_typ_follows_jq_alternative(
    private_key: ec.EllipticCurvePrivateKey, typ: object, expected: object
) -> None:
    token = build_token({"typ": typ}, {"sub": "x"}, signer(private_key))
    header, _, _ = _segments(token)
    assert header["typ"] == expected
    assert type(header["typ"]) is type(expected)
