"""Core interfaces for adapters."""

from abc import ABC, abstractmethod
from typing import Callable

from store_browser.core.entities import FilterSnapshot, Item

QueryListener = Callable[[str], None]
Unsubscribe = Callable[[], None]


class ListingSource(ABC):
    """Interface for the paginated listing endpoint."""

    @abstractmethod
    async def fetch_page(self, snapshot: FilterSnapshot, page: int, limit: int) -> list[Item]:
        """Fetch one page of items matching the snapshot.

        Raises:
            FetchFailure: On transport, HTTP status or payload errors
        """
        pass


class CategorySource(ABC):
    """Interface for fetching the category list."""

    @abstractmethod
    async def fetch_categories(self) -> list[Item]:
        """Fetch all categories, without duplicates."""
        pass


class Navigator(ABC):
    """Interface for the address bar the filter state is mirrored in."""

    @abstractmethod
    def current_query(self) -> str:
        """Return the current query string (without leading '?')."""
        pass

    @abstractmethod
    def navigate(self, query: str) -> None:
        """Move to a new query string and notify listeners."""
        pass

    @abstractmethod
    def listen(self, callback: QueryListener) -> Unsubscribe:
        """Register a callback for query changes."""
        pass


class BookmarkStore(ABC):
    """Interface for persisted bookmarks."""

    @abstractmethod
    def get(self) -> list[Item]:
        """Return the current bookmark set."""
        pass

    @abstractmethod
    def put(self, items: list[Item]) -> None:
        """Replace the bookmark set."""
        pass
