"""Unit tests for settings loading."""

import pytest
from pydantic import ValidationError

from trip_planner.config import Settings


class TestJwtSecret:
    def test_missing_secret_refuses_to_load(self, monkeypatch):
        monkeypatch.delenv("JWT_SECRET", raising=False)

        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None)
        assert "jwt_secret" in str(exc_info.value)

    def test_short_secret_is_rejected(self, monkeypatch):
        monkeypatch.setenv("JWT_SECRET", "too-short")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_secret_from_environment(self, monkeypatch):
        secret = "a-perfectly-long-secret-value-for-signing"
        monkeypatch.setenv("JWT_SECRET", secret)

        settings = Settings(_env_file=None)
        assert settings.jwt_secret == secret
        assert settings.session_lifetime_days == 7
        assert settings.position_gap == 10000.0
