"""Error types raised by the store browser."""

from typing import Any, Optional


class StoreBrowserError(Exception):
    """Base exception for all store browser errors."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class FetchFailure(StoreBrowserError):
    """Raised when a listing or category request cannot be completed."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message, original_error)
        self.status_code = status_code


class BookmarkStoreError(StoreBrowserError):
    """Raised when the bookmark store cannot be read or written."""


class InvalidFilterError(StoreBrowserError, ValueError):
    """Raised when a filter edit names an unknown field or an invalid value."""

    def __init__(self, key: str, value: Any, reason: str = "") -> None:
        msg = f"Invalid filter {key}={value!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.key = key
        self.value = value
