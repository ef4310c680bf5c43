"""Adapters for the store directory API, navigation and bookmarks."""
