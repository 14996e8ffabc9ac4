import asyncio
import json
from typing import List, Optional, Union
from urllib.parse import urlencode

import aiohttp
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from epress.logging_config import create_logger


DEFAULT_BASE_URL = "https://gnews.io/api/v4/"
DEFAULT_TIMEOUT = 10.0
BODY_LOG_LIMIT = 2000

logger = create_logger("news.source.gnews")


class TransportError(Exception):
    """A top-headlines call failed: network error, non-2xx status or unreadable body."""

    def __init__(self, message: str, status: Optional[int] = None, url: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.url = url


class GNewsParam(BaseModel):
    """Localisation parameters for GNews top headlines."""
    country: str = Field(default="gb", description="Country code for news (e.g., 'gb', 'us', 'fr')")
    language: str = Field(default="en", description="Language code for news (e.g., 'en', 'fr', 'de')")


class GNewsSource(BaseModel):
    name: Optional[str] = None
    url: Optional[str] = None


class GNewsArticle(BaseModel):
    """Article record exactly as returned by the provider."""
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: Optional[str] = None
    published_at: str = Field(alias="publishedAt")
    url: str
    image: Optional[str] = None
    source: GNewsSource = Field(default_factory=GNewsSource)

    @field_validator("source", mode="before")
    @classmethod
    def _null_source(cls, value):
        return GNewsSource() if value is None else value


class GNewsResponse(BaseModel):
    articles: List[GNewsArticle] = Field(default_factory=list)


def get_top_headlines_url(base_url: str = DEFAULT_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/top-headlines"


def build_query_params(category: str, api_key: str, param: GNewsParam) -> dict:
    return {
        "category": category,
        "country": param.country,
        "lang": param.language,
        "token": api_key,
    }


def describe_request(url: str, params: dict) -> str:
    """Request line for logs and errors, with the token masked."""
    safe_params = {**params, "token": "***"} if "token" in params else params
    return f"{url}?{urlencode(safe_params)}"


def parse_top_headlines(body: Union[str, bytes], charset: str = "utf-8") -> List[GNewsArticle]:
    """Decode a top-headlines body into wire records; raises ValueError, LookupError or ValidationError."""
    if isinstance(body, bytes):
        body = body.decode(charset)
    payload = json.loads(body)
    return GNewsResponse.model_validate(payload).articles


async def fetch_top_headlines(
    category: str,
    api_key: str,
    country: str = "gb",
    language: str = "en",
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[aiohttp.ClientSession] = None,
    http_log_level: str = "basic",
) -> List[GNewsArticle]:
    """
    Fetch top headlines for one category with a single GET request.

    Args:
        category: lower-cased category name sent as-is on the wire
        api_key: GNews token; an empty or placeholder token is sent anyway
        country: country code, defaults to "gb"
        language: language code, defaults to "en"
        session: optional shared aiohttp session; one is opened per call otherwise
        http_log_level: "none", "basic" (request/status lines) or "body" (also the response body)

    Returns:
        The raw article records in the order the provider returned them.

    Raises:
        TransportError: on network failure, non-2xx status or a malformed body.
    """
    url = get_top_headlines_url(base_url)
    params = build_query_params(category, api_key, GNewsParam(country=country, language=language))
    request_line = describe_request(url, params)
    client_timeout = aiohttp.ClientTimeout(total=timeout)

    if http_log_level != "none":
        logger.debug(f"--> GET {request_line}")

    try:
        if session is None:
            async with aiohttp.ClientSession(timeout=client_timeout) as own_session:
                status, charset, payload = await _get(own_session, url, params, client_timeout)
        else:
            status, charset, payload = await _get(session, url, params, client_timeout)
    except asyncio.TimeoutError as e:
        raise TransportError(f"Timed out after {timeout}s: {request_line}", url=request_line) from e
    except aiohttp.ClientError as e:
        raise TransportError(f"Network error for {request_line}: {e}", url=request_line) from e

    # Lenient copy for logs and error messages; parsing below decodes strictly
    body = payload.decode("utf-8", errors="replace")

    if http_log_level != "none":
        logger.debug(f"<-- {status} {request_line} ({len(payload)} bytes)")
    if http_log_level == "body":
        logger.debug(body[:BODY_LOG_LIMIT])

    if not 200 <= status < 300:
        raise TransportError(f"HTTP {status} from {request_line}: {body[:200]}", status=status, url=request_line)

    try:
        articles = parse_top_headlines(payload, charset)
    except (ValueError, LookupError, ValidationError) as e:
        raise TransportError(f"Malformed response from {request_line}: {e}", status=status, url=request_line) from e

    logger.debug(f"Parsed {len(articles)} articles for category '{category}'")
    return articles


async def _get(session: aiohttp.ClientSession, url: str, params: dict, timeout: aiohttp.ClientTimeout):
    async with session.get(url, params=params, timeout=timeout) as response:
        payload = await response.read()
        return response.status, response.charset or "utf-8", payload
