"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from store_browser.core import DEFAULT_PAGE_SIZE


@dataclass
class ApiConfig:
    """Store directory API settings."""
    base_url: str = "http://localhost:3001"
    collection: str = "stores"
    categories_collection: str = "categories"
    timeout: float = 30.0


@dataclass
class ListingConfig:
    """Listing settings."""
    page_size: int = DEFAULT_PAGE_SIZE
    listing_path: str = "/stores"


@dataclass
class PathsConfig:
    """Path settings."""
    bookmarks_file: Path = Path("bookmarks.yaml")


@dataclass
class Settings:
    """Application settings."""

    api: ApiConfig = field(default_factory=ApiConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)

    @property
    def api_base_url(self) -> str:
        return self.api.base_url

    @property
    def page_size(self) -> int:
        return self.listing.page_size

    @property
    def bookmarks_file(self) -> Path:
        return self.paths.bookmarks_file


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)
    settings = Settings()

    if "api" in config:
        for key, value in config["api"].items():
            setattr(settings.api, key, value)

    if "listing" in config:
        for key, value in config["listing"].items():
            setattr(settings.listing, key, value)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    # Environment wins over the file
    api_url = os.getenv("STORE_BROWSER_API_URL")
    if api_url:
        settings.api.base_url = api_url

    return settings
