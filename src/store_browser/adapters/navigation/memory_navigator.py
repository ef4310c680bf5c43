"""In-process address bar."""

from store_browser.core.interfaces import Navigator, QueryListener, Unsubscribe


class MemoryNavigator(Navigator):
    """Keep the current query string and its history in memory.

    Listeners are called synchronously from ``navigate`` and ``back``.
    """

    def __init__(self, initial: str = "", path: str = "/stores") -> None:
        self.path = path
        self.history: list[str] = [self._normalize(initial)]
        self._listeners: list[QueryListener] = []

    @staticmethod
    def _normalize(query: str) -> str:
        return (query or "").lstrip("?")

    @property
    def url(self) -> str:
        """Address for the current query, e.g. ``/stores?status=draft``."""
        query = self.current_query()
        return f"{self.path}?{query}" if query else self.path

    def current_query(self) -> str:
        return self.history[-1]

    def navigate(self, query: str) -> None:
        self.history.append(self._normalize(query))
        self._notify()

    def back(self) -> bool:
        """Return to the previous query.

        Returns:
            False if there is no earlier entry
        """
        if len(self.history) < 2:
            return False
        self.history.pop()
        self._notify()
        return True

    def listen(self, callback: QueryListener) -> Unsubscribe:
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        query = self.current_query()
        for listener in list(self._listeners):
            listener(query)
