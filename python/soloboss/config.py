"""Runtime configuration, read from the environment (and .env when present).

| Variable                     | Default | Notes                                   |
|------------------------------|---------|-----------------------------------------|
| SOLOBOSS_ENV                 | local   | local, test, staging or prod            |
| DATABASE_URL                 | -       | required                                |
| SUPABASE_JWKS_URL            | -       | required                                |
| SUPABASE_ISSUER              | -       | required; trailing slash ignored        |
| SUPABASE_AUDIENCES           | -       | required; comma-separated               |
| SOLOBOSS_INTERNAL_SECRET     | none    | required in staging and prod            |
| CORS_ALLOWED_ORIGINS         | none    | comma-separated; CORS off when unset    |
| LOG_JSON                     | true    | false switches to console rendering     |
| RECENT_ACTIVITY_WINDOW_DAYS  | 7       | dashboard lookback, at least 1          |
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    LOCAL = "local"
    TEST = "test"
    STAGING = "staging"
    PROD = "prod"


# Environments reachable only through the gateway that injects the internal secret
DEPLOYED_ENVIRONMENTS = frozenset({Environment.STAGING, Environment.PROD})

_SUPABASE_FIELDS = {
    "supabase_jwks_url": "SUPABASE_JWKS_URL",
    "supabase_issuer": "SUPABASE_ISSUER",
    "supabase_audiences": "SUPABASE_AUDIENCES",
}


def _split_csv(value: str | None) -> list[str]:
    return [part.strip() for part in (value or "").split(",") if part.strip()]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    soloboss_env: Environment = Field(default=Environment.LOCAL, alias="SOLOBOSS_ENV")
    database_url: str = Field(alias="DATABASE_URL")
    soloboss_internal_secret: str | None = Field(default=None, alias="SOLOBOSS_INTERNAL_SECRET")

    supabase_jwks_url: str | None = Field(default=None, alias="SUPABASE_JWKS_URL")
    supabase_issuer: str | None = Field(default=None, alias="SUPABASE_ISSUER")
    supabase_audiences: str | None = Field(default=None, alias="SUPABASE_AUDIENCES")

    cors_allowed_origins: str | None = Field(default=None, alias="CORS_ALLOWED_ORIGINS")
    log_json: bool = Field(default=True, alias="LOG_JSON")
    recent_activity_window_days: int = Field(default=7, ge=1, alias="RECENT_ACTIVITY_WINDOW_DAYS")

    @model_validator(mode="after")
    def check_required_settings(self) -> "Settings":
        missing = [env for attr, env in _SUPABASE_FIELDS.items() if not getattr(self, attr)]
        if missing:
            raise ValueError(
                f"Missing required Supabase auth settings: {', '.join(missing)}. "
                "Point them at your Supabase project (or Supabase local)."
            )
        if self.requires_internal_header and not self.soloboss_internal_secret:
            raise ValueError(
                f"SOLOBOSS_INTERNAL_SECRET is required for SOLOBOSS_ENV={self.soloboss_env.value}"
            )
        return self

    @property
    def requires_internal_header(self) -> bool:
        return self.soloboss_env in DEPLOYED_ENVIRONMENTS

    @property
    def audience_list(self) -> list[str]:
        return _split_csv(self.supabase_audiences)

    @property
    def cors_origin_list(self) -> list[str]:
        return _split_csv(self.cors_allowed_origins)

    @property
    def normalized_issuer(self) -> str | None:
        """Issuer without its trailing slash, matching the iss claim Supabase mints."""
        return self.supabase_issuer.rstrip("/") if self.supabase_issuer else None


@lru_cache
def get_settings() -> Settings:
    """Settings for this process, parsed once.

    Raises:
        ValidationError: If a required variable is missing or a value is invalid.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Forget the parsed settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
