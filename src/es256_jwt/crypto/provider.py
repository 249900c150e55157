"""
es256_jwt.crypto.provider

ECDSA P-256 + SHA-256 primitives and PEM key loading.

Responsibilities:
- Sign/verify raw messages, producing and consuming DER signatures.
- Load PEM keys from disk, zeroing the file buffer on every exit path.
- Derive a public key when verification is handed a private key.
"""

from __future__ import annotations

from pathlib import Path
from typing import TypeAlias

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec

from es256_jwt.errors import ConfigError
from es256_jwt.observability.logging import get_logger
from es256_jwt.tokens.builder import SignFn
from es256_jwt.tokens.verifier import VerifyFn

log = get_logger(__name__)

PrivateKey: TypeAlias = ec.EllipticCurvePrivateKey
PublicKey: TypeAlias = ec.EllipticCurvePublicKey

_ES256 = ec.ECDSA(hashes.SHA256())


def sign(message: bytes, private_key: PrivateKey) -> bytes:
    return private_key.sign(message, _ES256)


def verify(message: bytes, signature: bytes, public_key: PublicKey) -> bool:
    try:
        public_key.verify(signature, message, _ES256)
    except InvalidSignature:
        return False
    return True


def derive_public_key(key: PrivateKey | PublicKey) -> PublicKey:
    if isinstance(key, ec.EllipticCurvePrivateKey):
        return key.public_key()
    return key


def signer(private_key: PrivateKey) -> SignFn:
    def _sign(message: bytes) -> bytes:
        return sign(message, private_key)

    return _sign


def verifier(key: PrivateKey | PublicKey) -> VerifyFn:
    public_key = derive_public_key(key)

    def _verify(message: bytes, signature: bytes) -> bool:
        return verify(message, signature, public_key)

    return _verify


def _read_pem(path: Path) -> bytearray:
    try:
        size = path.stat().st_size
        buf = bytearray(size)
        with path.open("rb") as fh:
            n = fh.readinto(buf)
    except OSError as e:
        raise ConfigError(f"cannot read key file {path}: {e}") from e
    del buf[n:]
    return buf


def _zero(buf: bytearray) -> None:
    buf[:] = b"\x00" * len(buf)


def _check_curve(key: PrivateKey | PublicKey, path: Path) -> None:
    if not isinstance(key.curve, ec.SECP256R1):
        # Same policy as before: warn, signing will then fail loudly on width checks.
        log.warning("key_curve_mismatch", path=str(path), curve=key.curve.name)


def load_private_key(path: Path, password: bytes | None = None) -> PrivateKey:
    buf = _read_pem(path)
    try:
        key = serialization.load_pem_private_key(buf, password=password)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ConfigError(f"cannot load private key from {path}: {e}") from e
    finally:
        _zero(buf)

    if not isinstance(key, ec.EllipticCurvePrivateKey):
        raise ConfigError(f"{path} is not an EC private key")
    _check_curve(key, path)
    return key


def load_public_key(path: Path) -> PublicKey:
    """
    Load a public key; a private-key PEM is accepted and its public half is used.
    """

    buf = _read_pem(path)
    try:
        try:
            key = serialization.load_pem_public_key(buf)
        except ValueError:
            key = derive_public_key(serialization.load_pem_private_key(buf, password=None))
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise ConfigError(f"cannot load key from {path}: {e}") from e
    finally:
        _zero(buf)

    if not isinstance(key, ec.EllipticCurvePublicKey):
        raise ConfigError(f"{path} is not an EC key")
    _check_curve(key, path)
    return key


# --- Module Notes -----------------------------------------------------------
# Key objects are owned by the caller and passed per call; nothing here caches keys.
