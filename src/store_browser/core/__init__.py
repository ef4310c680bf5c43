"""Core domain layer."""

from store_browser.core.entities import (
    DEFAULT_PAGE_SIZE,
    FilterSnapshot,
    Item,
    LoaderState,
    QueryCursor,
    SortField,
    SortOrder,
    Status,
)
from store_browser.core.errors import (
    BookmarkStoreError,
    FetchFailure,
    InvalidFilterError,
    StoreBrowserError,
)
from store_browser.core.filter_state import FilterStateController
from store_browser.core.interfaces import BookmarkStore, CategorySource, ListingSource, Navigator
from store_browser.core.loader import PaginatedLoader

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "FilterSnapshot",
    "Item",
    "LoaderState",
    "QueryCursor",
    "SortField",
    "SortOrder",
    "Status",
    "StoreBrowserError",
    "FetchFailure",
    "BookmarkStoreError",
    "InvalidFilterError",
    "ListingSource",
    "CategorySource",
    "Navigator",
    "BookmarkStore",
    "FilterStateController",
    "PaginatedLoader",
]
