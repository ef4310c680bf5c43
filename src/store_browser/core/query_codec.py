"""Conversion between filter snapshots and URL query strings."""

from typing import Any, Iterable, Optional

import httpx

from store_browser.core.entities import (
    FilterSnapshot,
    Item,
    SortField,
    SortOrder,
    Status,
    is_alphabet_letter,
)

# Query keys, in the order they are emitted
SEARCH_KEY = "name_like"
CATEGORY_KEY = "cats"
STATUS_KEY = "status"
ALPHABET_KEY = "alphabet"
CASHBACK_KEY = "cashback_enabled"
PROMOTED_KEY = "is_promoted"
SHARABLE_KEY = "is_sharable"
SORT_KEY = "_sort"
ORDER_KEY = "_order"

PAGE_KEY = "_page"
LIMIT_KEY = "_limit"

FLAG_KEYS = {
    "cashback_enabled": CASHBACK_KEY,
    "is_promoted": PROMOTED_KEY,
    "is_sharable": SHARABLE_KEY,
}

# The listing API spells the published status "publish"
STATUS_TO_WIRE = {
    Status.ANY: "",
    Status.PUBLISHED: "publish",
    Status.DRAFT: "draft",
    Status.TRASH: "trash",
}
WIRE_TO_STATUS = {wire: status for status, wire in STATUS_TO_WIRE.items()}
WIRE_TO_STATUS["published"] = Status.PUBLISHED


def parse_status(value: Any) -> Optional[Status]:
    """Map a status given as enum member, name or wire value to a Status."""
    if isinstance(value, Status):
        return value
    if value is None:
        return Status.ANY
    return WIRE_TO_STATUS.get(str(value).strip().lower())


def parse_sort_field(value: Any) -> Optional[SortField]:
    if isinstance(value, SortField):
        return value
    try:
        return SortField(str(value).strip().lower())
    except ValueError:
        return None


def parse_sort_order(value: Any) -> Optional[SortOrder]:
    if isinstance(value, SortOrder):
        return value
    try:
        return SortOrder(str(value).strip().lower())
    except ValueError:
        return None


def parse_alphabet(value: Any) -> Optional[str]:
    """Return the lowercase letter for a single ASCII letter, else None."""
    if value is None:
        return None
    letter = str(value).strip().lower()
    return letter if is_alphabet_letter(letter) else None


def decode(query: Optional[str]) -> FilterSnapshot:
    """Decode a query string into a snapshot.

    Unknown keys are ignored and unrecognized values fall back to their
    defaults. Never raises: anything that cannot be parsed yields the
    default snapshot.
    """
    if not query or not isinstance(query, str):
        return FilterSnapshot()

    try:
        params = httpx.QueryParams(query.lstrip("?"))

        search = params.get(SEARCH_KEY, "")
        alphabet = parse_alphabet(params.get(ALPHABET_KEY))
        if search:
            # Search and alphabet share the name filter; the typed search wins
            alphabet = None

        return FilterSnapshot(
            search=search,
            category=params.get(CATEGORY_KEY) or None,
            status=parse_status(params.get(STATUS_KEY, "")) or Status.ANY,
            alphabet_filter=alphabet,
            cashback_enabled=params.get(CASHBACK_KEY) == "1",
            is_promoted=params.get(PROMOTED_KEY) == "1",
            is_sharable=params.get(SHARABLE_KEY) == "1",
            sort_by=parse_sort_field(params.get(SORT_KEY, "")) or SortField.NAME,
            sort_order=parse_sort_order(params.get(ORDER_KEY, "")) or SortOrder.ASC,
        )
    except (ValueError, TypeError, UnicodeError):
        return FilterSnapshot()


def _query_items(snapshot: FilterSnapshot) -> list[tuple[str, str]]:
    """Key/value pairs for the non-default fields of a snapshot."""
    items: list[tuple[str, str]] = []

    if snapshot.search:
        items.append((SEARCH_KEY, snapshot.search))
    if snapshot.category:
        items.append((CATEGORY_KEY, snapshot.category))
    if snapshot.status is not Status.ANY:
        items.append((STATUS_KEY, STATUS_TO_WIRE[snapshot.status]))
    if snapshot.alphabet_filter:
        items.append((ALPHABET_KEY, snapshot.alphabet_filter))
    for attr, key in FLAG_KEYS.items():
        if getattr(snapshot, attr):
            items.append((key, "1"))
    if snapshot.sort_by is not SortField.NAME:
        items.append((SORT_KEY, snapshot.sort_by.value))
    if snapshot.sort_order is not SortOrder.ASC:
        items.append((ORDER_KEY, snapshot.sort_order.value))

    return items


def encode(snapshot: FilterSnapshot) -> str:
    """Encode a snapshot as a minimal query string (defaults omitted)."""
    return str(httpx.QueryParams(_query_items(snapshot)))


def listing_params(snapshot: FilterSnapshot, page: int, limit: int) -> dict[str, str]:
    """Build the request parameters for one page of the listing endpoint.

    The alphabet letter is sent as a prefix-anchored name match, and the
    sort keys are always present.
    """
    params = dict(_query_items(snapshot))
    params.pop(ALPHABET_KEY, None)
    if snapshot.alphabet_filter:
        params[SEARCH_KEY] = f"^{snapshot.alphabet_filter}"

    params[SORT_KEY] = snapshot.sort_by.value
    params[ORDER_KEY] = snapshot.sort_order.value
    params[PAGE_KEY] = str(page)
    params[LIMIT_KEY] = str(limit)
    return params


def dedupe_by_id(items: Iterable[Item], seen: Optional[set[str]] = None) -> list[Item]:
    """Drop items whose id was already seen, keeping first arrival order.

    Args:
        items: Items in arrival order
        seen: Keys already present downstream; updated in place
    """
    seen = seen if seen is not None else set()
    unique: list[Item] = []

    for item in items:
        if item.key in seen:
            continue
        seen.add(item.key)
        unique.append(item)

    return unique
