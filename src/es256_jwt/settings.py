"""
es256_jwt.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the CLI and HTTP API.
- Bridge env settings into the explicit `TokenConfig` the builder consumes.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from es256_jwt.tokens.claims import TokenConfig


class Settings(BaseSettings):
    """
    - Strict env-driven configuration (`ES256_JWT_*`)
    - Defaults safe for local dev
    - Single settings object injected across layers
    """

    model_config = SettingsConfigDict(env_prefix="ES256_JWT_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "es256-jwt"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auto payload
    issuer: str | None = None
    expiry_hours: int = Field(default=1, ge=0)

    # Keys (PEM). The public key path may also point at a private key.
    private_key_path: Path | None = None
    public_key_path: Path | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


def token_config(settings: Settings) -> TokenConfig:
    return TokenConfig(issuer=settings.issuer, expiry_hours=settings.expiry_hours)


# --- Module Notes -----------------------------------------------------------
# Only the composition roots (`cli`, `api.app`) read settings; the token layer
# receives `TokenConfig` explicitly and never touches the environment.
