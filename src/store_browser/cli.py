"""CLI entry point for the store browser."""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from store_browser.adapters.bookmarks import YamlBookmarkStore
from store_browser.adapters.navigation import MemoryNavigator
from store_browser.adapters.sources import JsonServerSource
from store_browser.config import Settings, get_settings
from store_browser.core import (
    BookmarkStoreError,
    FetchFailure,
    FilterStateController,
    InvalidFilterError,
    Item,
    LoaderState,
    PaginatedLoader,
)
from store_browser.use_cases import BrowseSession

app = typer.Typer(help="Browse the cashback store directory.", no_args_is_help=True)


def build_source(settings: Settings) -> JsonServerSource:
    return JsonServerSource(
        base_url=settings.api.base_url,
        collection=settings.api.collection,
        categories_collection=settings.api.categories_collection,
        timeout=settings.api.timeout,
    )


def parse_filter(expression: str) -> tuple[str, str]:
    """Split a ``key=value`` filter option."""
    key, sep, value = expression.partition("=")
    if not sep or not key.strip():
        raise typer.BadParameter(f"Expected key=value, got {expression!r}")
    return key.strip(), value


def format_item(item: Item, bookmarked: bool) -> str:
    mark = "★" if bookmarked else " "
    cashback = item.data.get("cashback")
    visits = item.data.get("visits") or item.data.get("clicks") or 0
    line = f"  {mark} [{item.id}] {item.name or '—'}"
    if cashback is not None:
        line += f" · кэшбэк {cashback}"
    return f"{line} · визитов {visits}"


@app.command()
def browse(
    query: str = typer.Argument("", help="Query string, e.g. 'status=publish&_sort=cashback'"),
    filters: Optional[list[str]] = typer.Option(
        None, "--filter", "-f", help="Filter edit as key=value (repeatable)"
    ),
    clear: bool = typer.Option(False, "--clear", help="Drop all filters"),
    pages: int = typer.Option(1, "--pages", "-p", min=1, help="Number of chunks to load"),
    toggle: Optional[str] = typer.Option(None, "--toggle", help="Toggle bookmark for a loaded id"),
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Config file"),
) -> None:
    """List stores matching a query, loading chunk by chunk."""
    settings = get_settings(config)
    edits = [parse_filter(f) for f in filters or []]
    exit_code = asyncio.run(async_browse(settings, query, edits, clear, pages, toggle))
    if exit_code:
        raise typer.Exit(exit_code)


async def async_browse(
    settings: Settings,
    query: str,
    edits: list[tuple[str, str]],
    clear: bool,
    pages: int,
    toggle: Optional[str],
) -> int:
    """Async implementation of the browse command."""
    navigator = MemoryNavigator(query, path=settings.listing.listing_path)
    controller = FilterStateController(navigator)
    store = YamlBookmarkStore(settings.bookmarks_file)
    loader = PaginatedLoader(build_source(settings), store, page_size=settings.page_size)
    session = BrowseSession(controller, loader)

    print(f"\n🛍️  Источник: {settings.api_base_url}/{settings.api.collection}")
    session.open()
    if navigator.current_query() != controller.share_query():
        # Replace the typed query by its canonical form
        navigator.navigate(controller.share_query())

    try:
        if clear:
            controller.clear_all()
        for key, value in edits:
            try:
                controller.set_filter(key, value)
            except InvalidFilterError as e:
                print(f"  └─ ❌ {e.message}")
                return 2

        print(f"🔗 Адрес: {navigator.url}")

        await session.wait_idle()
        while loader.page_index <= pages and loader.has_more:
            if not await session.load_more():
                break

        if loader.state is LoaderState.ERROR:
            print(f"  └─ ❌ Ошибка: {loader.error}")
            return 1

        if toggle is not None:
            matches = [item for item in loader.items if item.key == toggle]
            if not matches:
                print(f"  └─ ⚠️  Магазин {toggle} не загружен")
            else:
                try:
                    added = loader.toggle_bookmark(matches[0])
                    print(f"  └─ {'★ Добавлен в закладки' if added else '☆ Удалён из закладок'}: {matches[0].name}")
                except BookmarkStoreError as e:
                    print(f"  └─ ⚠️  Закладки недоступны: {e.message}")

        try:
            bookmarked = {b.key for b in store.get()}
        except BookmarkStoreError as e:
            print(f"  └─ ⚠️  Закладки недоступны: {e.message}")
            bookmarked = set()

        print(f"\n✓ Загружено: {len(loader.items)} (страниц: {loader.page_index - 1})")
        for item in loader.items:
            print(format_item(item, item.key in bookmarked))
        if loader.has_more:
            print("  … есть ещё, увеличьте --pages")
        return 0
    finally:
        session.close()


@app.command()
def categories(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Config file"),
) -> None:
    """List store categories."""
    settings = get_settings(config)

    try:
        items = asyncio.run(build_source(settings).fetch_categories())
    except FetchFailure as e:
        print(f"  └─ ❌ Ошибка: {e.message}")
        raise typer.Exit(1)

    print(f"\n📂 Категорий: {len(items)}")
    for item in items:
        print(f"  • [{item.id}] {item.name}")


@app.command()
def bookmarks(
    config: Path = typer.Option(Path("config.yaml"), "--config", help="Config file"),
) -> None:
    """List bookmarked stores."""
    settings = get_settings(config)

    try:
        items = YamlBookmarkStore(settings.bookmarks_file).get()
    except BookmarkStoreError as e:
        print(f"  └─ ❌ {e.message}")
        raise typer.Exit(1)

    print(f"\n★ Закладок: {len(items)}")
    for item in items:
        print(format_item(item, True))


if __name__ == "__main__":
    app()
