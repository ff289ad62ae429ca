"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from soloboss.config import Environment, Settings, get_settings


def _make_settings(**overrides) -> Settings:
    """Build a Settings instance with test defaults + overrides."""
    defaults = {
        "DATABASE_URL": "postgresql+psycopg://localhost/test",
        "SOLOBOSS_ENV": "test",
        "SUPABASE_JWKS_URL": "http://localhost:54321/auth/v1/.well-known/jwks.json",
        "SUPABASE_ISSUER": "http://localhost:54321/auth/v1/",
        "SUPABASE_AUDIENCES": "authenticated, anon ,",
    }
    defaults.update(overrides)
    return Settings(**defaults)


class TestSettings:
    def test_parsed_properties(self):
        s = _make_settings(CORS_ALLOWED_ORIGINS="http://localhost:3000,https://app.example.com")

        assert s.soloboss_env == Environment.TEST
        assert s.normalized_issuer == "http://localhost:54321/auth/v1"
        assert s.audience_list == ["authenticated", "anon"]
        assert s.cors_origin_list == ["http://localhost:3000", "https://app.example.com"]

    def test_defaults(self):
        s = _make_settings()

        assert s.recent_activity_window_days == 7
        assert s.log_json is True
        assert s.cors_origin_list == []
        assert s.requires_internal_header is False

    def test_window_must_be_positive(self):
        with pytest.raises(ValidationError):
            _make_settings(RECENT_ACTIVITY_WINDOW_DAYS=0)

    def test_missing_auth_settings_rejected(self):
        with pytest.raises(ValidationError, match="SUPABASE_ISSUER"):
            _make_settings(SUPABASE_ISSUER="")

    @pytest.mark.parametrize("env", ["staging", "prod"])
    def test_deployed_envs_require_internal_secret(self, env):
        with pytest.raises(ValidationError, match="SOLOBOSS_INTERNAL_SECRET"):
            _make_settings(SOLOBOSS_ENV=env)

    def test_deployed_env_requires_internal_header(self):
        s = _make_settings(SOLOBOSS_ENV="staging", SOLOBOSS_INTERNAL_SECRET="s3cret")

        assert s.requires_internal_header is True

    def test_invalid_env_rejected(self):
        with pytest.raises(ValidationError):
            _make_settings(SOLOBOSS_ENV="qa")


class TestGetSettings:
    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RECENT_ACTIVITY_WINDOW_DAYS", "14")

        assert get_settings().recent_activity_window_days == 14

    def test_cached_until_cleared(self):
        assert get_settings() is get_settings()
