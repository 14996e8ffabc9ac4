from typing import Literal, Optional
import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


MISSING_API_KEY = "MISSING_KEY"

HttpLogLevel = Literal["none", "basic", "body"]


class ConfigurationError(Exception):
    pass


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """configuration class for environment variable"""

    # Logging
    @property
    def LOG_LEVEL(self) -> str:
        return os.getenv('LOG_LEVEL', 'info')

    @property
    def HTTP_LOG_LEVEL(self) -> str:
        return os.getenv('HTTP_LOG_LEVEL', 'basic').lower()

    # News API Settings
    @property
    def NEWS_API_KEY(self) -> str:
        # An absent key degrades to the placeholder; the provider rejects it server-side
        return os.getenv('NEWS_API_KEY') or MISSING_API_KEY

    @property
    def NEWS_API_BASE_URL(self) -> str:
        return os.getenv('NEWS_API_BASE_URL', 'https://gnews.io/api/v4/')

    @property
    def NEWS_COUNTRY(self) -> str:
        return os.getenv('NEWS_COUNTRY', 'gb')

    @property
    def NEWS_LANGUAGE(self) -> str:
        return os.getenv('NEWS_LANGUAGE', 'en')

    @property
    def NEWS_REQUEST_TIMEOUT(self) -> float:
        return float(os.getenv('NEWS_REQUEST_TIMEOUT', '10'))

    # View Settings
    @property
    def REFRESH_INDICATOR_SECONDS(self) -> float:
        return float(os.getenv('REFRESH_INDICATOR_SECONDS', '1.0'))

    @property
    def REFRESH_REFETCH(self) -> bool:
        return _env_flag('REFRESH_REFETCH', 'false')


CONFIG = Config()


class NewsClientSettings(BaseModel):
    """Explicit settings handed to the fetch orchestrator and the presentation shell."""
    api_key: str = Field(default=MISSING_API_KEY, description="GNews API token")
    base_url: str = Field(default="https://gnews.io/api/v4/", description="Base URL of the GNews v4 API")
    country: str = Field(default="gb", description="Country code for top headlines")
    language: str = Field(default="en", description="Language code for top headlines")
    timeout: float = Field(default=10.0, gt=0, description="Total request timeout in seconds")
    http_log_level: HttpLogLevel = Field(default="basic", description="Transport logging detail: none, basic or body")
    refresh_indicator_seconds: float = Field(default=1.0, ge=0, description="How long the refresh indicator stays visible")
    refresh_refetch: bool = Field(default=False, description="Whether pull-to-refresh re-fetches the active page")

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "NewsClientSettings":
        config = config or CONFIG
        return cls(
            api_key=config.NEWS_API_KEY,
            base_url=config.NEWS_API_BASE_URL,
            country=config.NEWS_COUNTRY,
            language=config.NEWS_LANGUAGE,
            timeout=config.NEWS_REQUEST_TIMEOUT,
            http_log_level=config.HTTP_LOG_LEVEL,
            refresh_indicator_seconds=config.REFRESH_INDICATOR_SECONDS,
            refresh_refetch=config.REFRESH_REFETCH,
        )

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip()) and self.api_key != MISSING_API_KEY

    def require_api_key(self) -> str:
        """Return the API key, or raise ConfigurationError when only the placeholder is set."""
        if not self.has_api_key:
            raise ConfigurationError(
                "NEWS_API_KEY is not set. Add it to your environment or .env file."
            )
        return self.api_key


__all__ = ["CONFIG", "Config", "ConfigurationError", "MISSING_API_KEY", "NewsClientSettings"]
