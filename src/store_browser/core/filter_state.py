"""Filter state kept in agreement with the address bar."""

import dataclasses
from typing import Any, Callable, Optional

from store_browser.core import query_codec
from store_browser.core.entities import FilterSnapshot
from store_browser.core.errors import InvalidFilterError
from store_browser.core.interfaces import Navigator, Unsubscribe

SnapshotListener = Callable[[FilterSnapshot], None]

STRING_FIELDS = {"search", "category"}
FLAG_FIELDS = {"cashback_enabled", "is_promoted", "is_sharable"}


class FilterStateController:
    """Owns the active filter snapshot.

    The navigator's query string is the single source of truth: edits are
    encoded and sent to the navigator, and the snapshot is only replaced
    when the resulting navigation comes back through
    ``on_external_navigation``.
    """

    def __init__(self, navigator: Navigator) -> None:
        self.navigator = navigator
        self._snapshot: Optional[FilterSnapshot] = None
        self._listeners: list[SnapshotListener] = []
        self._detach: Optional[Unsubscribe] = None

    @property
    def snapshot(self) -> Optional[FilterSnapshot]:
        return self._snapshot

    def subscribe(self, callback: SnapshotListener) -> Unsubscribe:
        """Register a callback for snapshot changes."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def mount(self) -> None:
        """Start following the navigator and process its current query."""
        if self._detach is None:
            self._detach = self.navigator.listen(self.on_external_navigation)
        self.on_external_navigation(self.navigator.current_query())

    def unmount(self) -> None:
        if self._detach is not None:
            self._detach()
            self._detach = None

    def on_external_navigation(self, query: str) -> bool:
        """Adopt the snapshot encoded in a query string.

        Returns:
            True if the snapshot changed and listeners were notified
        """
        decoded = query_codec.decode(query)
        if self._snapshot is not None and decoded == self._snapshot:
            return False

        self._snapshot = decoded
        for listener in list(self._listeners):
            listener(decoded)
        return True

    def set_filter(self, key: str, value: Any) -> None:
        """Change one field and navigate to the resulting query.

        Search and alphabet filter exclude each other: setting one clears
        the other before encoding.

        Raises:
            InvalidFilterError: If the key or value is not valid
        """
        current = self._snapshot or FilterSnapshot()
        changes = {key: self._coerce(key, value)}

        if key == "search" and changes["search"]:
            changes["alphabet_filter"] = None
        elif key == "alphabet_filter" and changes["alphabet_filter"]:
            changes["search"] = ""

        try:
            candidate = dataclasses.replace(current, **changes)
        except ValueError as e:
            raise InvalidFilterError(key, value, str(e)) from e

        self.navigator.navigate(query_codec.encode(candidate))

    def clear_all(self) -> None:
        """Drop every filter by navigating to the bare listing address."""
        self.navigator.navigate("")

    def share_query(self) -> str:
        """Return the query string for the current snapshot."""
        return query_codec.encode(self._snapshot or FilterSnapshot())

    def _coerce(self, key: str, value: Any) -> Any:
        """Convert a raw filter value to the snapshot field type."""
        if key in STRING_FIELDS:
            text = "" if value is None else str(value).strip()
            if key == "category":
                return text or None
            return text

        if key in FLAG_FIELDS:
            if isinstance(value, str):
                return value.strip().lower() in ("1", "true", "yes", "on")
            return bool(value)

        if key == "alphabet_filter":
            if value is None or value == "":
                return None
            letter = query_codec.parse_alphabet(value)
            if letter is None:
                raise InvalidFilterError(key, value, "expected a single letter")
            return letter

        parsers = {
            "status": query_codec.parse_status,
            "sort_by": query_codec.parse_sort_field,
            "sort_order": query_codec.parse_sort_order,
        }
        if key not in parsers:
            raise InvalidFilterError(key, value, "unknown filter")

        if value is None or value == "":
            # An emptied select falls back to the field default
            return getattr(FilterSnapshot(), key)

        parsed = parsers[key](value)
        if parsed is None:
            raise InvalidFilterError(key, value)
        return parsed
