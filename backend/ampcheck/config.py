"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Fetch defaults: 11s total, zero retries
    - Timeouts are strictly positive; retries never negative

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - validator_js left unset by default: the CLI fetches its bundled ruleset source
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Outbound fetch
    fetch_timeout_seconds: float = 11.0
    fetch_retries: int = 0
    fetch_user_agent: str = "amp-checker/1.0"

    # AMP validator (amphtml-validator CLI)
    validator_executable: str = "amphtml-validator"
    validator_js: str | None = None
    validator_timeout_seconds: float = 30.0

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("fetch_timeout_seconds", "validator_timeout_seconds")
    @classmethod
    def require_positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    @field_validator("fetch_retries")
    @classmethod
    def require_non_negative_retries(cls, v: int) -> int:
        if v < 0:
            raise ValueError("retries must be >= 0")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
