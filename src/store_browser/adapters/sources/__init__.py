"""Source adapters for fetching stores and categories."""

from store_browser.adapters.sources.json_server_source import JsonServerSource

__all__ = ["JsonServerSource"]
