"""
Tests for environment settings.
"""

import pytest

from ..config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for key in (
            "AETHERGRID_ENV",
            "AETHERGRID_SESSION_TTL_SECONDS",
            "AETHERGRID_COMMITMENT_MODE",
            "AETHERGRID_OUTCOME_POLICY",
            "AETHERGRID_VERIFIER_COMMAND",
            "ALLOWED_ORIGINS",
        ):
            monkeypatch.delenv(key, raising=False)

        settings = Settings.from_env()

        assert settings.environment == "development"
        assert settings.session_ttl_seconds == 30 * 24 * 3600
        assert settings.commitment_mode == "supplied"
        assert settings.outcome_policy == "cost"
        assert settings.verifier_command is None
        assert settings.allowed_origins == ["*"]
        assert not settings.is_production

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("AETHERGRID_ENV", "production")
        monkeypatch.setenv("AETHERGRID_SESSION_TTL_SECONDS", "60")
        monkeypatch.setenv("AETHERGRID_COMMITMENT_MODE", "derived")
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example,https://b.example")

        settings = Settings.from_env()

        assert settings.is_production
        assert settings.session_ttl_seconds == 60
        assert settings.commitment_mode == "derived"
        assert settings.allowed_origins == ["https://a.example", "https://b.example"]

    def test_invalid_int_falls_back(self, monkeypatch):
        monkeypatch.setenv("AETHERGRID_SESSION_TTL_SECONDS", "soon")
        assert Settings.from_env().session_ttl_seconds == 30 * 24 * 3600

    @pytest.mark.parametrize("value", ["0", "-60"])
    def test_non_positive_ttl_env_falls_back(self, monkeypatch, value):
        monkeypatch.setenv("AETHERGRID_SESSION_TTL_SECONDS", value)
        assert Settings.from_env().session_ttl_seconds == 30 * 24 * 3600

    def test_non_positive_ttl_rejected(self):
        with pytest.raises(ValueError):
            Settings(session_ttl_seconds=0)
