from .gnews import (
    GNewsArticle,
    GNewsParam,
    GNewsResponse,
    GNewsSource,
    TransportError,
    fetch_top_headlines,
)

__all__ = [
    "GNewsArticle",
    "GNewsParam",
    "GNewsResponse",
    "GNewsSource",
    "TransportError",
    "fetch_top_headlines",
]
