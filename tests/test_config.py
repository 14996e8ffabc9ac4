import pytest
from pydantic import ValidationError

from epress.config import Config, ConfigurationError, MISSING_API_KEY, NewsClientSettings


class TestConfig:

    @pytest.fixture
    def clean_env(self, monkeypatch):
        for name in (
            "NEWS_API_KEY", "NEWS_API_BASE_URL", "NEWS_COUNTRY", "NEWS_LANGUAGE", "NEWS_REQUEST_TIMEOUT",
            "HTTP_LOG_LEVEL", "REFRESH_INDICATOR_SECONDS", "REFRESH_REFETCH",
        ):
            monkeypatch.delenv(name, raising=False)
        return monkeypatch

    def test_defaults(self, clean_env):
        settings = NewsClientSettings.from_config(Config())

        assert settings.api_key == MISSING_API_KEY
        assert settings.base_url == "https://gnews.io/api/v4/"
        assert settings.country == "gb"
        assert settings.language == "en"
        assert settings.timeout == 10.0
        assert settings.http_log_level == "basic"
        assert settings.refresh_indicator_seconds == 1.0
        assert settings.refresh_refetch is False

    def test_environment_overrides(self, clean_env):
        clean_env.setenv("NEWS_API_KEY", "abc123")
        clean_env.setenv("NEWS_COUNTRY", "us")
        clean_env.setenv("NEWS_LANGUAGE", "fr")
        clean_env.setenv("NEWS_REQUEST_TIMEOUT", "2.5")
        clean_env.setenv("HTTP_LOG_LEVEL", "BODY")
        clean_env.setenv("REFRESH_REFETCH", "true")

        settings = NewsClientSettings.from_config(Config())

        assert settings.api_key == "abc123"
        assert settings.country == "us"
        assert settings.language == "fr"
        assert settings.timeout == 2.5
        assert settings.http_log_level == "body"
        assert settings.refresh_refetch is True

    def test_empty_key_falls_back_to_placeholder(self, clean_env):
        clean_env.setenv("NEWS_API_KEY", "")
        assert Config().NEWS_API_KEY == MISSING_API_KEY

    def test_invalid_http_log_level_is_rejected(self, clean_env):
        clean_env.setenv("HTTP_LOG_LEVEL", "verbose")
        with pytest.raises(ValidationError):
            NewsClientSettings.from_config(Config())


class TestNewsClientSettings:

    @pytest.mark.parametrize("api_key", [MISSING_API_KEY, "", "   "])
    def test_require_api_key_rejects_placeholder(self, api_key):
        settings = NewsClientSettings(api_key=api_key)

        assert not settings.has_api_key
        with pytest.raises(ConfigurationError):
            settings.require_api_key()

    def test_require_api_key_returns_key(self):
        assert NewsClientSettings(api_key="real").require_api_key() == "real"

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            NewsClientSettings(timeout=0)
