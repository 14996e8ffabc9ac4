from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

import aiohttp

from epress.config import NewsClientSettings
from epress.logging_config import create_logger
from epress.news.mapper import to_articles
from epress.news.model import Article
from epress.news.source.gnews import GNewsArticle, TransportError, fetch_top_headlines


HeadlineSource = Callable[..., Awaitable[List[GNewsArticle]]]


@dataclass
class FetchOutcome:
    """Result of one category fetch. A failed fetch carries its error and no articles."""
    category: str
    articles: List[Article] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class NewsFetcher:
    """
    Fetches and maps top headlines for a category.

    `fetch_articles` never raises: any failure from the headline source is logged
    and resolves to an empty list, so "no articles" and "fetch failed" look the same
    to its callers. Use `fetch` when the difference matters.
    """

    def __init__(
        self,
        settings: Optional[NewsClientSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
        source: HeadlineSource = fetch_top_headlines,
    ):
        self.settings = settings or NewsClientSettings.from_config()
        self._session = session
        self._owns_session = False
        self._source = source
        self.logger = create_logger("NewsFetcher")

        if not self.settings.has_api_key:
            self.logger.warning("NEWS_API_KEY is missing; the news provider will reject requests")

    async def __aenter__(self) -> "NewsFetcher":
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None
            self._owns_session = False

    async def fetch(self, category: str) -> FetchOutcome:
        """Fetch one category and report the articles together with any failure."""
        normalized = category.strip().lower()
        try:
            raw_articles = await self._source(
                normalized,
                self.settings.api_key,
                self.settings.country,
                self.settings.language,
                base_url=self.settings.base_url,
                timeout=self.settings.timeout,
                session=self._session,
                http_log_level=self.settings.http_log_level,
            )
        except TransportError as e:
            self.logger.error(f"Failed to load '{normalized}' articles from GNews: {e}")
            return FetchOutcome(category=normalized, error=e)
        except Exception as e:
            self.logger.exception(f"Unexpected error while loading '{normalized}' articles: {e}")
            return FetchOutcome(category=normalized, error=e)

        articles = to_articles(raw_articles)
        self.logger.info(f"Successfully fetched {len(articles)} articles for category: {normalized}")
        return FetchOutcome(category=normalized, articles=articles)

    async def fetch_articles(self, category: str) -> List[Article]:
        """Fetch one category; resolves to [] on any failure."""
        outcome = await self.fetch(category)
        return outcome.articles
