from .bookmarks import BookmarkStore
from .state import PageState, ViewState, initial_state, reduce, page_status, visible_articles
from .shell import PresentationShell

__all__ = [
    "BookmarkStore",
    "PageState",
    "ViewState",
    "initial_state",
    "reduce",
    "page_status",
    "visible_articles",
    "PresentationShell",
]
