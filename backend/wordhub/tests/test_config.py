import pytest

from wordhub import config
from wordhub.config import Settings, get_settings, reset_settings, validate_config


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.api_port == 5000
        assert settings.fallback_to_all_sources is True
        assert settings.delay_range("v1") == (settings.v1_min_delay, settings.v1_max_delay)
        assert settings.delay_range("v2") == (settings.v2_min_delay, settings.v2_max_delay)

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "5050")
        monkeypatch.setenv("FALLBACK_TO_ALL_SOURCES", "false")
        settings = Settings()
        assert settings.api_port == 5050
        assert settings.fallback_to_all_sources is False

    def test_get_settings_is_cached(self, monkeypatch):
        monkeypatch.setattr(config, "_settings", None)
        first = get_settings()
        assert get_settings() is first
        reset_settings()
        assert get_settings() is not first


class TestValidateConfig:

    def test_valid(self):
        validate_config(Settings())

    def test_reports_every_problem(self):
        settings = Settings(v1_min_delay=5.0, v1_max_delay=1.0, api_port=0, request_timeout=0)
        with pytest.raises(ValueError) as excinfo:
            validate_config(settings)
        message = str(excinfo.value)
        assert "v1_min_delay must not exceed v1_max_delay" in message
        assert "api_port must be between 1 and 65535" in message
        assert "timeouts must be positive" in message

    def test_negative_delay(self):
        with pytest.raises(ValueError, match="v2 request delays must not be negative"):
            validate_config(Settings(v2_min_delay=-1.0))
