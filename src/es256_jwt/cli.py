"""
es256_jwt.cli

Command-line entrypoint: `es256-jwt sign` / `es256-jwt verify`.

Exit codes:
- 0: token issued / signature valid
- 1: verification failed or runtime error
- 2: usage or configuration error
- 127: crypto backend (`cryptography`) not installed
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from es256_jwt.codec import parse_object
from es256_jwt.errors import ConfigError, FormatError, TokenError
from es256_jwt.observability.logging import configure_logging, get_logger
from es256_jwt.settings import Settings, get_settings, token_config

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_MISSING_DEPENDENCY = 127

log = get_logger("es256_jwt.cli")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="es256-jwt", description="Issue and verify ES256 JWTs.")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("sign", help="Create a signed token")
    s.add_argument("-k", "--key", type=Path, required=True, help="EC P-256 private key (PEM)")
    s.add_argument(
        "-p",
        "--payload",
        default=None,
        help="Payload JSON object; omit to generate iss/sub/iat/exp/jti from settings",
    )
    s.add_argument("-H", "--header", default=None, help="Extra header JSON object")

    v = sub.add_parser("verify", help="Verify a token")
    v.add_argument("-k", "--key", type=Path, required=True, help="EC P-256 public or private key (PEM)")
    v.add_argument("-j", "--jwt", default=None, help="Token; read from stdin when omitted")
    v.add_argument("-q", "--quiet", action="store_true", help="Only set the exit code")
    return p


def _compact(value: object) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def cmd_sign(key_path: Path, payload: str | None, header: str | None, settings: Settings) -> int:
    from es256_jwt.crypto.provider import load_private_key, signer
    from es256_jwt.tokens.builder import build_token

    try:
        header_fields = parse_object(header) if header is not None else None
        payload_fields = parse_object(payload) if payload is not None else None
    except FormatError as e:
        print(f"invalid JSON argument: {e}", file=sys.stderr)
        return EXIT_USAGE

    private_key = load_private_key(key_path)
    token = build_token(
        header_fields,
        payload_fields,
        signer(private_key),
        config=token_config(settings),
    )
    print(token)
    return EXIT_OK


def cmd_verify(key_path: Path, token: str | None, quiet: bool) -> int:
    from es256_jwt.crypto.provider import load_public_key, verifier
    from es256_jwt.tokens.verifier import verify_token

    if token is None:
        token = sys.stdin.readline()
    if not token.strip():
        print("missing JWT (use -j or pipe)", file=sys.stderr)
        return EXIT_USAGE

    public_key = load_public_key(key_path)
    try:
        claims = verify_token(token, verifier(public_key))
    except TokenError as e:
        if not quiet:
            print(f"NG: {type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_FAILED

    if not quiet:
        print("OK: signature valid")
        print(f"header:  {_compact(claims.header)}")
        print(f"payload: {_compact(claims.payload)}")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return EXIT_USAGE
    configure_logging(service_name=settings.service_name, level=settings.log_level, stream=sys.stderr)

    try:
        import cryptography  # noqa: F401
    except ImportError:
        print("missing: cryptography", file=sys.stderr)
        return EXIT_MISSING_DEPENDENCY

    try:
        if args.cmd == "sign":
            return cmd_sign(args.key, args.payload, args.header, settings)
        return cmd_verify(args.key, args.jwt, args.quiet)
    except ConfigError as e:
        log.error("config_error", error=str(e))
        print(f"error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except TokenError as e:
        log.error("command_failed", cmd=args.cmd, error=type(e).__name__)
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
