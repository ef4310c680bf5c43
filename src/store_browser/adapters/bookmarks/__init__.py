"""Bookmark store adapters."""

from store_browser.adapters.bookmarks.yaml_store import YamlBookmarkStore

__all__ = ["YamlBookmarkStore"]
