from .model import Article, Category, CATEGORIES, UNKNOWN_SOURCE
from .mapper import to_article, to_articles
from .fetcher import FetchOutcome, NewsFetcher
from .source import TransportError

__all__ = [
    "Article",
    "Category",
    "CATEGORIES",
    "UNKNOWN_SOURCE",
    "to_article",
    "to_articles",
    "FetchOutcome",
    "NewsFetcher",
    "TransportError",
]
