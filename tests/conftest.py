"""
tests.conftest

Shared fixtures: deterministic and random P-256 keys, PEM files, logging, settings cache.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from es256_jwt.observability.logging import configure_logging
from es256_jwt.settings import get_settings

# RFC 6979 A.2.5 P-256 private scalar; any fixed valid scalar works as a known test key.
KNOWN_P256_SCALAR = int("C9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721", 16)


@pytest.fixture(scope="session", autouse=True)
def _logging() -> None:
    configure_logging(service_name="es256-jwt-test", level="DEBUG", stream=sys.stderr)


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    for name in ("ISSUER", "EXPIRY_HOURS", "PRIVATE_KEY_PATH", "PUBLIC_KEY_PATH"):
        monkeypatch.delenv(f"ES256_JWT_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def private_key() -> ec.EllipticCurvePrivateKey:
    return ec.derive_private_key(KNOWN_P256_SCALAR, ec.SECP256R1())


@pytest.fixture
def public_key(private_key: ec.EllipticCurvePrivateKey) -> ec.EllipticCurvePublicKey:
    return private_key.public_key()


@pytest.fixture
def other_private_key() -> ec.EllipticCurvePrivateKey:
    return ec.generate_private_key(ec.SECP256R1())


def _write(path: Path, data: bytes) -> Path:
    path.write_bytes(data)
    return path


@pytest.fixture
def private_pem(tmp_path: Path, private_key: ec.EllipticCurvePrivateKey) -> Path:
    return _write(
        tmp_path / "ec_private.pem",
        private_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        ),
    )


@pytest.fixture
def public_pem(tmp_path: Path, public_key: ec.EllipticCurvePublicKey) -> Path:
    return _write(
        tmp_path / "ec_public.pem",
        public_key.public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ),
    )


@pytest.fixture
def other_public_pem(tmp_path: Path, other_private_key: ec.EllipticCurvePrivateKey) -> Path:
    return _write(
        tmp_path / "other_public.pem",
        other_private_key.public_key().public_bytes(
            serialization.Encoding.PEM,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        ),
    )
