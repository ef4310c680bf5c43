"""Bookmarks persisted as a YAML file."""

from pathlib import Path

import yaml

from store_browser.core import BookmarkStore, BookmarkStoreError, Item


class YamlBookmarkStore(BookmarkStore):
    """Store bookmarked stores as a YAML list of their records."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def get(self) -> list[Item]:
        """Read all bookmarks. A missing file is an empty set."""
        if not self.path.exists():
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or []
        except (OSError, yaml.YAMLError) as e:
            raise BookmarkStoreError(f"Could not read bookmarks from {self.path}", e) from e

        if not isinstance(data, list):
            raise BookmarkStoreError(f"Bookmarks file {self.path} does not contain a list")

        try:
            return [Item.from_record(record) for record in data]
        except ValueError as e:
            raise BookmarkStoreError(f"Malformed bookmark in {self.path}: {e}", e) from e

    def put(self, items: list[Item]) -> None:
        """Replace the stored bookmarks."""
        records = [{"id": item.id, **item.data} for item in items]

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.dump(records, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
        except (OSError, yaml.YAMLError) as e:
            raise BookmarkStoreError(f"Could not write bookmarks to {self.path}", e) from e
