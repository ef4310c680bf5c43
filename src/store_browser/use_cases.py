"""Browsing use cases."""

from typing import Callable, Optional

from store_browser.core import (
    FilterSnapshot,
    FilterStateController,
    Item,
    PaginatedLoader,
)


class BrowseSession:
    """One open listing view: filter state wired to a paginated loader."""

    def __init__(self, controller: FilterStateController, loader: PaginatedLoader) -> None:
        self.controller = controller
        self.loader = loader
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    @property
    def items(self) -> list[Item]:
        return self.loader.items

    @property
    def snapshot(self) -> Optional[FilterSnapshot]:
        return self.controller.snapshot

    def open(self) -> None:
        """Follow the navigator and start loading its current query."""
        if self.is_open:
            return
        self._unsubscribe = self.controller.subscribe(self._on_snapshot)
        self.controller.mount()

    def close(self) -> None:
        """Stop following navigation and drop the loaded items."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.controller.unmount()
        self.loader.clear()

    async def wait_idle(self) -> None:
        """Wait until no load is scheduled or running."""
        while self.loader.pending is not None:
            await self.loader.pending

    async def load_more(self) -> bool:
        """Signal the end of the list and wait for the resulting chunk.

        Returns:
            True if a chunk was applied; a failure is left on the loader
        """
        await self.wait_idle()
        task = self.loader.request_more_if_near_end(True)
        if task is None:
            return False
        return await task

    def _on_snapshot(self, snapshot: FilterSnapshot) -> None:
        self.loader.reset(snapshot)
