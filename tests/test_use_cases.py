"""Tests for use cases."""

import asyncio

import pytest

from store_browser.adapters.navigation import MemoryNavigator
from store_browser.core import (
    FilterSnapshot,
    FilterStateController,
    LoaderState,
    PaginatedLoader,
    Status,
)
from store_browser.use_cases import BrowseSession


def make_session(source, query: str = "") -> tuple[BrowseSession, MemoryNavigator]:
    navigator = MemoryNavigator(query)
    session = BrowseSession(FilterStateController(navigator), PaginatedLoader(source))
    return session, navigator


@pytest.mark.asyncio
async def test_open_loads_current_query(source, make_items) -> None:
    """Test that opening a session loads page one of the address."""
    source.pages[1] = make_items(1, 20)
    session, _ = make_session(source, "status=draft")

    session.open()
    await session.wait_idle()

    assert session.snapshot == FilterSnapshot(status=Status.DRAFT)
    assert len(session.items) == 20
    assert source.calls == [(FilterSnapshot(status=Status.DRAFT), 1, 20)]


@pytest.mark.asyncio
async def test_filter_edit_resets_loader(source, make_items) -> None:
    """Test that an edit restarts loading from page one for the new filters."""
    source.pages[1] = make_items(1, 20)
    source.pages[2] = make_items(21, 20)
    session, navigator = make_session(source)
    session.open()
    await session.wait_idle()
    await session.load_more()
    assert len(session.items) == 40

    session.controller.set_filter("is_promoted", True)

    # Reset happens synchronously, before the new page arrives
    assert session.items == []
    assert session.loader.page_index == 1
    await session.wait_idle()

    promoted = FilterSnapshot(is_promoted=True)
    assert navigator.current_query() == "is_promoted=1"
    assert source.calls[-1] == (promoted, 1, 20)
    assert session.loader.snapshot == promoted
    assert len(session.items) == 20


@pytest.mark.asyncio
async def test_edits_while_loading_keep_latest(source, make_items) -> None:
    """Test that quick successive edits end with the last snapshot's items."""
    first = FilterSnapshot(search="a")
    second = FilterSnapshot(search="b")
    source.pages[(first, 1)] = make_items(1, 20, prefix="a")
    source.pages[(second, 1)] = make_items(50, 3, prefix="b")
    source.gates[2] = asyncio.Event()
    session, _ = make_session(source)
    session.open()
    await session.wait_idle()

    session.controller.set_filter("search", "a")
    await asyncio.sleep(0)
    session.controller.set_filter("search", "b")
    await session.wait_idle()
    source.gates[2].set()
    await asyncio.sleep(0)

    assert [item.name for item in session.items] == ["b-50", "b-51", "b-52"]
    assert session.loader.has_more is False


@pytest.mark.asyncio
async def test_load_more_leaves_error_on_loader(source, make_items, fetch_failure, capsys) -> None:
    """Test that a failed chunk is kept on the loader and not printed."""
    source.pages[1] = make_items(1, 20)
    source.failures[2] = fetch_failure
    session, _ = make_session(source)
    session.open()
    await session.wait_idle()

    assert await session.load_more() is False

    assert session.loader.state is LoaderState.ERROR
    assert len(session.items) == 20
    assert session.loader.error is fetch_failure
    assert capsys.readouterr().out == ""


@pytest.mark.asyncio
async def test_close_stops_following(source, make_items) -> None:
    """Test that a closed session ignores navigation and drops its items."""
    source.pages[1] = make_items(1, 20)
    session, navigator = make_session(source)
    session.open()
    await session.wait_idle()

    session.close()
    navigator.navigate("status=trash")

    assert not session.is_open
    assert session.items == []
    assert session.loader.snapshot is None
    assert len(source.calls) == 1
    assert await session.load_more() is False
