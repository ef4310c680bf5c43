"""REST source for a json-server style store directory."""

from typing import Any

import httpx

from store_browser.core import CategorySource, FetchFailure, FilterSnapshot, Item, ListingSource
from store_browser.core.query_codec import dedupe_by_id, listing_params


class JsonServerSource(ListingSource, CategorySource):
    """Fetch stores and categories from a paginated JSON API."""

    name = "Store directory API"

    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        collection: str = "stores",
        categories_collection: str = "categories",
        timeout: float = 30.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.collection = collection.strip("/")
        self.categories_collection = categories_collection.strip("/")
        self.timeout = timeout

    async def fetch_page(self, snapshot: FilterSnapshot, page: int, limit: int) -> list[Item]:
        """Fetch one page of stores matching the snapshot."""
        params = listing_params(snapshot, page, limit)
        records = await self._get_records(f"{self.base_url}/{self.collection}", params)
        return self._to_items(records)

    async def fetch_categories(self) -> list[Item]:
        """Fetch the category list, dropping repeated ids."""
        records = await self._get_records(f"{self.base_url}/{self.categories_collection}")
        return dedupe_by_id(self._to_items(records))

    async def _get_records(self, url: str, params: dict[str, str] | None = None) -> list[Any]:
        """GET a URL and return its JSON array body."""
        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            try:
                response = await client.get(url, params=params)
            except httpx.HTTPError as e:
                raise FetchFailure(f"Request to {url} failed: {e}", original_error=e) from e

            if response.status_code != 200:
                raise FetchFailure(
                    f"HTTP {response.status_code} from {url}",
                    status_code=response.status_code,
                )

            try:
                data = response.json()
            except ValueError as e:
                raise FetchFailure(f"Invalid JSON from {url}", original_error=e) from e

        if not isinstance(data, list):
            raise FetchFailure(f"Expected a JSON array from {url}, got {type(data).__name__}")
        return data

    def _to_items(self, records: list[Any]) -> list[Item]:
        items: list[Item] = []

        for record in records:
            try:
                items.append(Item.from_record(record))
            except ValueError as e:
                raise FetchFailure(f"Malformed record in response: {e}", original_error=e) from e

        return items
