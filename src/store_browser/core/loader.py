"""Chunked loading of the listing for the active filter snapshot."""

import asyncio
import itertools
from typing import Optional

from store_browser.core.entities import (
    DEFAULT_PAGE_SIZE,
    FilterSnapshot,
    Item,
    LoaderState,
    QueryCursor,
)
from store_browser.core.errors import BookmarkStoreError, FetchFailure
from store_browser.core.interfaces import BookmarkStore, ListingSource
from store_browser.core.query_codec import dedupe_by_id


class PaginatedLoader:
    """Loads successive pages of one snapshot into a cursor.

    Every fetch is stamped with a request id stored on the cursor. A
    response is applied only if its id still matches the current cursor,
    so a ``reset`` while a fetch is in flight makes that fetch's result
    be dropped when it arrives.
    """

    def __init__(
        self,
        source: ListingSource,
        bookmark_store: Optional[BookmarkStore] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        self.source = source
        self.bookmark_store = bookmark_store
        self.page_size = page_size
        self.cursor = QueryCursor(page_size=page_size)
        self.state = LoaderState.IDLE
        self.error: Optional[FetchFailure] = None
        self._snapshot: Optional[FilterSnapshot] = None
        self._request_ids = itertools.count(1)
        self._pending: Optional[asyncio.Task] = None

    @property
    def snapshot(self) -> Optional[FilterSnapshot]:
        return self._snapshot

    @property
    def items(self) -> list[Item]:
        return list(self.cursor.items)

    @property
    def has_more(self) -> bool:
        return self.cursor.has_more

    @property
    def page_index(self) -> int:
        return self.cursor.page_index

    @property
    def is_loading(self) -> bool:
        return self.cursor.in_flight_request_id is not None

    @property
    def pending(self) -> Optional[asyncio.Task]:
        """The scheduled or running load, if any."""
        if self._pending is None or self._pending.done():
            return None
        return self._pending

    @property
    def can_load_more(self) -> bool:
        return (
            self._snapshot is not None
            and self.cursor.has_more
            and not self.is_loading
            and self.state is not LoaderState.ERROR
        )

    def reset(self, snapshot: FilterSnapshot) -> asyncio.Task:
        """Start over for a new snapshot and schedule its first chunk.

        Must be called from a running event loop.
        """
        self._snapshot = snapshot
        self.cursor = QueryCursor(page_size=self.page_size)
        self.state = LoaderState.IDLE
        self.error = None
        self._pending = None
        return self._schedule_load()

    def clear(self) -> None:
        """Drop the snapshot and cursor when the consuming view goes away."""
        self._snapshot = None
        self.cursor = QueryCursor(page_size=self.page_size)
        self.state = LoaderState.IDLE
        self.error = None
        self._pending = None

    async def load_next_chunk(self) -> bool:
        """Fetch and append the next page.

        Returns:
            True if a page was applied, False if nothing was loaded
        """
        return await self._load(self.cursor)

    async def _load(self, cursor: QueryCursor) -> bool:
        # A load scheduled for a cursor that has since been replaced does nothing
        if cursor is not self.cursor or not self.can_load_more:
            return False

        snapshot = self._snapshot
        request_id = next(self._request_ids)
        cursor.in_flight_request_id = request_id
        self.state = LoaderState.LOADING

        try:
            page = await self.source.fetch_page(snapshot, cursor.page_index, cursor.page_size)
        except FetchFailure as e:
            if not self._is_current(request_id):
                return False
            cursor.in_flight_request_id = None
            self.state = LoaderState.ERROR
            self.error = e
            return False

        if not self._is_current(request_id):
            return False

        seen = {item.key for item in cursor.items}
        cursor.items.extend(dedupe_by_id(page, seen))
        cursor.has_more = len(page) == cursor.page_size
        cursor.page_index += 1
        cursor.in_flight_request_id = None
        self.state = LoaderState.IDLE
        return True

    async def retry(self) -> bool:
        """Leave the error state and load the chunk that failed."""
        if self.state is not LoaderState.ERROR:
            return False
        self.state = LoaderState.IDLE
        self.error = None
        return await self.load_next_chunk()

    def request_more_if_near_end(self, near_end: bool) -> Optional[asyncio.Task]:
        """Handle a proximity signal from the end of the loaded items.

        Repeated signals while a load is scheduled or running return the
        same task; at most one fetch is in flight at a time.
        """
        if not near_end:
            return None
        if self.pending is not None:
            return self.pending
        if not self.can_load_more:
            return None
        return self._schedule_load()

    def toggle_bookmark(self, item: Item) -> bool:
        """Add the item to the bookmarks, or remove it if already there.

        Returns:
            True if the item is bookmarked after the call

        Raises:
            BookmarkStoreError: If the store cannot be read or written
        """
        store = self._require_store()
        bookmarks = store.get()
        remaining = [b for b in bookmarks if b.key != item.key]

        if len(remaining) == len(bookmarks):
            store.put(bookmarks + [item])
            return True

        store.put(remaining)
        return False

    def is_bookmarked(self, item: Item) -> bool:
        return any(b.key == item.key for b in self._require_store().get())

    def _require_store(self) -> BookmarkStore:
        if self.bookmark_store is None:
            raise BookmarkStoreError("No bookmark store configured")
        return self.bookmark_store

    def _schedule_load(self) -> asyncio.Task:
        self._pending = asyncio.get_running_loop().create_task(self._load(self.cursor))
        return self._pending

    def _is_current(self, request_id: int) -> bool:
        return self.cursor.in_flight_request_id == request_id
