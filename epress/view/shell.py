import asyncio
from typing import Callable, Dict, Iterable, List, Optional, Union

from epress.config import NewsClientSettings
from epress.logging_config import create_logger
from epress.news.fetcher import NewsFetcher
from epress.news.model import Article, Category, CATEGORIES
from epress.view.bookmarks import BookmarkStore
from epress.view.state import (
    Action,
    DismissArticle,
    FetchCancelled,
    FetchCompleted,
    FetchStarted,
    PageState,
    RefreshFinished,
    RefreshStarted,
    SelectArticle,
    SelectCategory,
    ToggleBookmarksScreen,
    ViewState,
    initial_state,
    reduce,
    visible_articles,
)


StateListener = Callable[[ViewState], None]


class PresentationShell:
    """
    Headless news reader screen: one page per category, a bookmark screen and an article dialog.

    Every fetch gets a per-category sequence number. Starting a fetch cancels the
    category's previous in-flight fetch, and the reducer drops any result older than
    the one already displayed.
    """

    def __init__(
        self,
        fetcher: NewsFetcher,
        bookmarks: Optional[BookmarkStore] = None,
        settings: Optional[NewsClientSettings] = None,
        categories: Iterable[Category] = CATEGORIES,
        on_change: Optional[StateListener] = None,
    ):
        self.fetcher = fetcher
        self.bookmarks = bookmarks or BookmarkStore()
        self.settings = settings or fetcher.settings
        self.state = initial_state(categories)
        self.on_change = on_change
        self.logger = create_logger("PresentationShell")
        self._tasks: Dict[Category, asyncio.Task] = {}
        self._seq: Dict[Category, int] = {}

    def dispatch(self, action: Action) -> ViewState:
        self.state = reduce(self.state, action)
        if self.on_change is not None:
            self.on_change(self.state)
        return self.state

    async def start(self) -> PageState:
        """Load the initially active page."""
        category = self.state.active_page.category
        await asyncio.wait([self.load_page(category)])
        return self.state.page(category)

    async def select_category(self, category: Union[Category, str]) -> PageState:
        """Activate a category page and wait for its fetch. Re-selecting the active page does not fetch."""
        if not isinstance(category, Category):
            category = Category.parse(category)

        if category == self.state.active_page.category and not self.state.show_bookmarks:
            return self.state.page(category)

        self.dispatch(SelectCategory(category))
        await asyncio.wait([self.load_page(category)])
        return self.state.page(category)

    async def swipe(self, offset: int) -> PageState:
        """Move to a neighbouring page, clamped to the first and last page."""
        target = min(max(self.state.active_index + offset, 0), len(self.state.pages) - 1)
        return await self.select_category(self.state.pages[target].category)

    def load_page(self, category: Category) -> asyncio.Task:
        """Start a fetch for a page, cancelling that page's previous fetch if still running."""
        previous = self._tasks.get(category)
        if previous is not None and not previous.done():
            self.logger.debug(f"Cancelling in-flight fetch for {category.value}")
            previous.cancel()

        seq = self._seq.get(category, 0) + 1
        self._seq[category] = seq
        self.dispatch(FetchStarted(category=category, seq=seq))

        task = asyncio.create_task(self._run_fetch(category, seq))
        self._tasks[category] = task
        return task

    async def _run_fetch(self, category: Category, seq: int) -> None:
        outcome = await self.fetcher.fetch(category.value)
        error = str(outcome.error) if outcome.failed else None
        self.dispatch(FetchCompleted(category=category, seq=seq, articles=tuple(outcome.articles), error=error))

    async def refresh(self) -> PageState:
        """
        Pull-to-refresh on the active page.

        Shows the refresh indicator for the configured duration. The page is only
        fetched again when `refresh_refetch` is enabled.
        """
        category = self.state.active_page.category
        self.dispatch(RefreshStarted(category=category))
        try:
            if self.settings.refresh_refetch:
                await asyncio.gather(
                    asyncio.sleep(self.settings.refresh_indicator_seconds),
                    asyncio.wait([self.load_page(category)]),
                )
            else:
                await asyncio.sleep(self.settings.refresh_indicator_seconds)
        finally:
            self.dispatch(RefreshFinished(category=category))
        return self.state.page(category)

    def toggle_bookmark(self, article: Article) -> bool:
        return self.bookmarks.toggle_bookmark(article)

    def toggle_bookmarks_screen(self) -> ViewState:
        return self.dispatch(ToggleBookmarksScreen())

    def open_article(self, article: Article) -> ViewState:
        return self.dispatch(SelectArticle(article=article))

    def dismiss_article(self) -> ViewState:
        return self.dispatch(DismissArticle())

    def share(self, article: Article) -> str:
        return article.share_text()

    def visible_articles(self) -> List[Article]:
        return visible_articles(self.state, self.bookmarks.bookmarked_articles())

    async def close(self) -> None:
        """Cancel every page fetch that is still running and mark those pages as no longer loading."""
        pending = []
        for category, task in self._tasks.items():
            if task.done():
                continue
            task.cancel()
            pending.append(task)
            self.dispatch(FetchCancelled(category=category, seq=self._seq[category]))
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
        self._tasks.clear()
