"""Tests for configuration settings."""
import pytest
from pydantic import ValidationError

from mealie_nodes.config.settings import Settings, get_settings, reset_settings


class TestSettings:
    """Test Settings configuration."""

    def test_settings_default_values(self, monkeypatch):
        """Test default values are set correctly."""
        monkeypatch.delenv("MEALIE_URL", raising=False)
        monkeypatch.delenv("MEALIE_API_TOKEN", raising=False)

        settings = Settings()

        # Note: env is set to 'test' in conftest.py
        assert settings.env == "test"
        assert settings.log_level == "INFO"
        assert settings.url is None
        assert settings.api_token is None
        assert settings.timeout_s == 5.0
        assert settings.stale_max_inactivity_s == 3600.0
        assert settings.stale_cleanup_interval_s == 1800.0
        assert settings.close_wait_timeout_s == 5.0

    def test_settings_from_env(self, monkeypatch):
        """Test MEALIE_* environment variables are loaded."""
        monkeypatch.setenv("MEALIE_URL", "https://mealie.example.com")
        monkeypatch.setenv("MEALIE_API_TOKEN", "secret-token")
        monkeypatch.setenv("MEALIE_TIMEOUT_S", "2.5")

        settings = Settings()

        assert settings.url == "https://mealie.example.com"
        assert settings.api_token.get_secret_value() == "secret-token"
        assert settings.timeout_s == 2.5

    def test_token_is_masked(self, monkeypatch):
        monkeypatch.setenv("MEALIE_API_TOKEN", "secret-token")

        settings = Settings()

        assert "secret-token" not in repr(settings)

    @pytest.mark.parametrize(
        "field",
        ["timeout_s", "stale_max_inactivity_s", "stale_cleanup_interval_s", "close_wait_timeout_s"],
    )
    def test_durations_must_be_positive(self, field):
        with pytest.raises(ValidationError, match="duration settings must be positive"):
            Settings(**{field: 0})

    def test_reaper_disabled_under_test(self):
        assert Settings().reaper_enabled is False
        assert Settings(env="production").reaper_enabled is True


class TestGetSettings:

    def test_cached_instance(self):
        assert get_settings() is get_settings()

    def test_reset_settings(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("MEALIE_LOG_LEVEL", "DEBUG")

        reset_settings()
        second = get_settings()

        assert second is not first
        assert second.log_level == "DEBUG"
