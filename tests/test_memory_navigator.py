"""Tests for the in-process navigator."""

from store_browser.adapters.navigation import MemoryNavigator


def test_navigate_notifies_listeners() -> None:
    """Test that listeners see every new query."""
    navigator = MemoryNavigator()
    seen: list[str] = []
    navigator.listen(seen.append)

    navigator.navigate("?status=draft")
    navigator.navigate("")

    assert seen == ["status=draft", ""]
    assert navigator.history == ["", "status=draft", ""]


def test_url_renders_path_and_query() -> None:
    navigator = MemoryNavigator("_sort=clicks", path="/stores")

    assert navigator.url == "/stores?_sort=clicks"

    navigator.navigate("")
    assert navigator.url == "/stores"


def test_back() -> None:
    """Test stepping back through history."""
    navigator = MemoryNavigator("a=1")
    seen: list[str] = []
    navigator.listen(seen.append)

    assert navigator.back() is False

    navigator.navigate("a=2")
    assert navigator.back() is True
    assert navigator.current_query() == "a=1"
    assert seen == ["a=2", "a=1"]


def test_unsubscribe() -> None:
    navigator = MemoryNavigator()
    seen: list[str] = []
    unsubscribe = navigator.listen(seen.append)

    unsubscribe()
    unsubscribe()
    navigator.navigate("a=1")

    assert seen == []
