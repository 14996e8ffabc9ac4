from typing import Iterable, List

from epress.news.model import Article, UNKNOWN_SOURCE
from epress.news.source.gnews import GNewsArticle


def to_article(raw: GNewsArticle) -> Article:
    """Convert a provider record into an Article. Never raises for a parsed record."""
    source_name = raw.source.name if raw.source and raw.source.name and raw.source.name.strip() else UNKNOWN_SOURCE
    return Article(
        headline=raw.title,
        summary=raw.description or "",
        date=raw.published_at,
        link=raw.url,
        image_url=raw.image or "",
        source=source_name,
    )


def to_articles(raws: Iterable[GNewsArticle]) -> List[Article]:
    return [to_article(raw) for raw in raws]
