"""Shared fakes for the store browser tests."""

import asyncio
from typing import Union

import pytest

from store_browser.core import (
    BookmarkStore,
    BookmarkStoreError,
    FetchFailure,
    FilterSnapshot,
    Item,
    ListingSource,
)

PageKey = Union[int, tuple[FilterSnapshot, int]]


def make_items(start: int, count: int, prefix: str = "store") -> list[Item]:
    """Build items with sequential ids."""
    return [
        Item(id=i, data={"id": i, "name": f"{prefix}-{i}", "cashback": "5%"})
        for i in range(start, start + count)
    ]


class FakeListingSource(ListingSource):
    """Listing source answering from a dict of pages.

    ``pages`` is keyed by ``(snapshot, page)`` or just ``page``.
    ``gates`` holds events that block the n-th call (1-based) until set,
    ``failures`` holds exceptions raised by the n-th call.
    """

    def __init__(self) -> None:
        self.pages: dict[PageKey, list[Item]] = {}
        self.gates: dict[int, asyncio.Event] = {}
        self.failures: dict[int, Exception] = {}
        self.calls: list[tuple[FilterSnapshot, int, int]] = []

    async def fetch_page(self, snapshot: FilterSnapshot, page: int, limit: int) -> list[Item]:
        self.calls.append((snapshot, page, limit))
        call_no = len(self.calls)

        gate = self.gates.get(call_no)
        if gate is not None:
            await gate.wait()

        if call_no in self.failures:
            raise self.failures[call_no]

        if (snapshot, page) in self.pages:
            return list(self.pages[(snapshot, page)])
        return list(self.pages.get(page, []))


class MemoryBookmarkStore(BookmarkStore):
    """Bookmark store kept in a list, counting writes."""

    def __init__(self) -> None:
        self.saved: list[Item] = []
        self.writes = 0

    def get(self) -> list[Item]:
        return list(self.saved)

    def put(self, items: list[Item]) -> None:
        self.writes += 1
        self.saved = list(items)


class BrokenBookmarkStore(BookmarkStore):
    """Bookmark store whose storage is unavailable."""

    def get(self) -> list[Item]:
        raise BookmarkStoreError("storage unavailable")

    def put(self, items: list[Item]) -> None:
        raise BookmarkStoreError("storage unavailable")


@pytest.fixture
def source() -> FakeListingSource:
    return FakeListingSource()


@pytest.fixture
def bookmark_store() -> MemoryBookmarkStore:
    return MemoryBookmarkStore()


@pytest.fixture
def fetch_failure() -> FetchFailure:
    return FetchFailure("HTTP 500 from http://test/stores", status_code=500)


@pytest.fixture
def broken_store() -> BrokenBookmarkStore:
    return BrokenBookmarkStore()


@pytest.fixture(name="make_items")
def make_items_fixture():
    return make_items
