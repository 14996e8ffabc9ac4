from typing import List, Optional, Tuple

from epress.news.model import Article


class BookmarkStore:
    """
    Session-scoped bookmarks: insertion ordered, no duplicates under Article equality.

    Un-bookmarking and then re-bookmarking the same article with no other toggle in
    between puts it back in its old slot, so two consecutive toggles leave the list
    exactly as it was. Any other newly bookmarked article is appended.
    """

    def __init__(self):
        self._articles: List[Article] = []
        self._last_removed: Optional[Tuple[Article, int]] = None

    def bookmarked_articles(self) -> List[Article]:
        return list(self._articles)

    def is_bookmarked(self, article: Article) -> bool:
        return article in self._articles

    def toggle_bookmark(self, article: Article) -> bool:
        """Remove the article if bookmarked, add it otherwise. Returns whether it is now bookmarked."""
        if article in self._articles:
            index = self._articles.index(article)
            del self._articles[index]
            self._last_removed = (article, index)
            return False

        if self._last_removed is not None and self._last_removed[0] == article:
            self._articles.insert(min(self._last_removed[1], len(self._articles)), article)
        else:
            self._articles.append(article)
        self._last_removed = None
        return True

    def __len__(self) -> int:
        return len(self._articles)
