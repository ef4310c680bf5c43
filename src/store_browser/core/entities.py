"""Core domain entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

DEFAULT_PAGE_SIZE = 20


class Status(str, Enum):
    """Publication status of a store."""

    ANY = ""
    PUBLISHED = "published"
    DRAFT = "draft"
    TRASH = "trash"


class SortField(str, Enum):
    """Field the listing is ordered by."""

    NAME = "name"
    CLICKS = "clicks"
    FEATURED = "featured"
    CASHBACK = "cashback"


class SortOrder(str, Enum):
    """Direction of the listing order."""

    ASC = "asc"
    DESC = "desc"


class LoaderState(str, Enum):
    """State of the paginated loader."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


def is_alphabet_letter(value: str) -> bool:
    """Check if value is a single lowercase ASCII letter."""
    return len(value) == 1 and "a" <= value <= "z"


def _require_utf8(name: str, value: Optional[str]) -> None:
    """Reject text that cannot appear in a URL, such as lone surrogates."""
    if not value:
        return
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValueError(f"{name} is not valid UTF-8 text") from e


@dataclass(frozen=True)
class FilterSnapshot:
    """One complete, immutable set of filter and sort criteria."""

    search: str = ""
    category: Optional[str] = None
    status: Status = Status.ANY
    alphabet_filter: Optional[str] = None
    cashback_enabled: bool = False
    is_promoted: bool = False
    is_sharable: bool = False
    sort_by: SortField = SortField.NAME
    sort_order: SortOrder = SortOrder.ASC

    def __post_init__(self) -> None:
        if not isinstance(self.status, Status):
            raise ValueError(f"Unknown status: {self.status!r}")
        if not isinstance(self.sort_by, SortField):
            raise ValueError(f"Unknown sort field: {self.sort_by!r}")
        if not isinstance(self.sort_order, SortOrder):
            raise ValueError(f"Unknown sort order: {self.sort_order!r}")
        if self.alphabet_filter is not None and not is_alphabet_letter(self.alphabet_filter):
            raise ValueError("Alphabet filter must be a single lowercase letter")
        for name in ("search", "category"):
            _require_utf8(name, getattr(self, name))
        if self.search and self.alphabet_filter:
            raise ValueError("Search and alphabet filter cannot both be active")
        if self.category == "":
            object.__setattr__(self, "category", None)

    @property
    def is_default(self) -> bool:
        return self == FilterSnapshot()


@dataclass
class Item:
    """Record returned by the listing source.

    Only ``id`` is interpreted; the full JSON record is kept in ``data``.
    """

    id: Any
    data: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.id is None or str(self.id) == "":
            raise ValueError("Item id cannot be empty")

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Item":
        """Build an item from a JSON object."""
        if not isinstance(record, dict):
            raise ValueError(f"Expected a JSON object, got {type(record).__name__}")
        return cls(id=record.get("id"), data=dict(record))

    @property
    def key(self) -> str:
        """Identity used for de-duplication and bookmark lookup."""
        return str(self.id)

    @property
    def name(self) -> str:
        return str(self.data.get("name", ""))


@dataclass
class QueryCursor:
    """Pagination position and accumulated items for one snapshot."""

    page_index: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    has_more: bool = True
    items: list[Item] = field(default_factory=list)
    in_flight_request_id: Optional[int] = None

    def __post_init__(self) -> None:
        if self.page_index < 1:
            raise ValueError("Page index starts at 1")
        if self.page_size < 1:
            raise ValueError("Page size must be positive")
