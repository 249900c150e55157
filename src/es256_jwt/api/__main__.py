"""
es256_jwt.api.__main__

Serve the token issue/verify API: `python -m es256_jwt.api` or `es256-jwt-api`.

Signing and verification keys come from `ES256_JWT_PRIVATE_KEY_PATH` /
`ES256_JWT_PUBLIC_KEY_PATH`; a bad setting or unreadable key stops startup with
exit code 2 instead of serving 503s.
"""

from __future__ import annotations

import sys

import uvicorn
from pydantic import ValidationError

from es256_jwt.api.app import create_app
from es256_jwt.errors import ConfigError
from es256_jwt.settings import get_settings


def main() -> int:
    try:
        settings = get_settings()
        app = create_app(settings=settings)
    except (ValidationError, ConfigError) as e:
        print(f"cannot start token service: {e}", file=sys.stderr)
        return 2

    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
