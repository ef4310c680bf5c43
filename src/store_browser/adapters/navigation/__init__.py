"""Navigation adapters."""

from store_browser.adapters.navigation.memory_navigator import MemoryNavigator

__all__ = ["MemoryNavigator"]
