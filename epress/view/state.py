from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from epress.news.model import Article, Category, CATEGORIES


@dataclass(frozen=True)
class PageState:
    """Displayed data for one category page."""
    category: Category
    articles: Tuple[Article, ...] = ()
    error: Optional[str] = None
    loading: bool = False
    refreshing: bool = False
    dispatched_seq: int = 0  # newest fetch started for this page
    applied_seq: int = 0  # fetch whose result is currently displayed


@dataclass(frozen=True)
class ViewState:
    pages: Tuple[PageState, ...]
    active_index: int = 0
    show_bookmarks: bool = False
    selected_article: Optional[Article] = None

    @property
    def active_page(self) -> PageState:
        return self.pages[self.active_index]

    @property
    def categories(self) -> List[Category]:
        return [page.category for page in self.pages]

    def page(self, category: Category) -> PageState:
        return self.pages[self.index_of(category)]

    def index_of(self, category: Category) -> int:
        for index, page in enumerate(self.pages):
            if page.category == category:
                return index
        raise ValueError(f"Category {category.value} has no page")


@dataclass(frozen=True)
class SelectCategory:
    category: Category


@dataclass(frozen=True)
class FetchStarted:
    category: Category
    seq: int


@dataclass(frozen=True)
class FetchCompleted:
    category: Category
    seq: int
    articles: Tuple[Article, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class FetchCancelled:
    category: Category
    seq: int


@dataclass(frozen=True)
class RefreshStarted:
    category: Category


@dataclass(frozen=True)
class RefreshFinished:
    category: Category


@dataclass(frozen=True)
class ToggleBookmarksScreen:
    pass


@dataclass(frozen=True)
class SelectArticle:
    article: Article


@dataclass(frozen=True)
class DismissArticle:
    pass


Action = Union[
    SelectCategory,
    FetchStarted,
    FetchCompleted,
    FetchCancelled,
    RefreshStarted,
    RefreshFinished,
    ToggleBookmarksScreen,
    SelectArticle,
    DismissArticle,
]


def initial_state(categories: Iterable[Category] = CATEGORIES) -> ViewState:
    pages = tuple(PageState(category=category) for category in categories)
    if not pages:
        raise ValueError("At least one category page is required")
    return ViewState(pages=pages)


def _replace_page(state: ViewState, page: PageState) -> ViewState:
    index = state.index_of(page.category)
    pages = state.pages[:index] + (page,) + state.pages[index + 1:]
    return replace(state, pages=pages)


def reduce(state: ViewState, action: Action) -> ViewState:
    """Apply one action and return the next state. Unknown actions leave the state untouched."""
    if isinstance(action, SelectCategory):
        return replace(state, active_index=state.index_of(action.category), show_bookmarks=False)

    if isinstance(action, FetchStarted):
        page = state.page(action.category)
        return _replace_page(state, replace(page, loading=True, dispatched_seq=max(page.dispatched_seq, action.seq)))

    if isinstance(action, FetchCompleted):
        page = state.page(action.category)
        # A result older than the one on screen is stale
        if action.seq <= page.applied_seq:
            return state
        return _replace_page(state, replace(
            page,
            articles=tuple(action.articles),
            error=action.error,
            applied_seq=action.seq,
            loading=action.seq < page.dispatched_seq,
        ))

    if isinstance(action, FetchCancelled):
        page = state.page(action.category)
        # Only the newest fetch decides whether the page is still loading
        if action.seq != page.dispatched_seq:
            return state
        return _replace_page(state, replace(page, loading=False))

    if isinstance(action, RefreshStarted):
        return _replace_page(state, replace(state.page(action.category), refreshing=True))

    if isinstance(action, RefreshFinished):
        return _replace_page(state, replace(state.page(action.category), refreshing=False))

    if isinstance(action, ToggleBookmarksScreen):
        return replace(state, show_bookmarks=not state.show_bookmarks)

    if isinstance(action, SelectArticle):
        return replace(state, selected_article=action.article)

    if isinstance(action, DismissArticle):
        return replace(state, selected_article=None)

    return state


def visible_articles(state: ViewState, bookmarks: Sequence[Article]) -> List[Article]:
    """Articles the current screen shows: the bookmark list or the active page."""
    if state.show_bookmarks:
        return list(bookmarks)
    return list(state.active_page.articles)


def page_status(page: PageState) -> Optional[str]:
    """Status line for a page, or None when it has articles to show."""
    if page.articles:
        return None
    if page.loading:
        return "Loading..."
    if page.error is not None:
        return "Could not load articles"
    return "No articles"
