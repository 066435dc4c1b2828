# src/devchart_db/query/api.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from devchart_db.cache.store import CacheStore
from devchart_db.models import Entry, Options
from devchart_db.query.filters import filter_entries, sort_entries, strip_name
from devchart_db.scrapers.common.http import Fetcher
from devchart_db.util.paths import get_cache_root


@dataclass
class DevchartAPI:
    """Query helpers over the cached Massive Dev Chart."""

    store: CacheStore
    _options: Options | None = field(default=None, init=False, repr=False)
    _by_stripped: dict[str, str] = field(default_factory=dict, init=False, repr=False)

    def options(self) -> Options:
        """Developer/stock listing, loaded from the cache once per API instance."""
        if self._options is None:
            opts = self.store.get_options().value
            self._by_stripped = {strip_name(k): k for k in (*opts.developers, *opts.stocks)}
            self._options = opts
        return self._options

    def list_developers(self) -> list[str]:
        return list(self.options().developers)

    def list_stocks(self) -> list[str]:
        return list(self.options().stocks)

    def get_entries(self, developer: str) -> list[Entry]:
        """All entries for a developer exactly as published (raises NoSuchDeveloper)."""
        return self.store.get_entries(developer).value

    def resolve_developer(self, query: str) -> tuple[str, bool]:
        """
        Map a compact name ("hc110") back to the published one ("HC-110").

        Returns (name, found). Unknown names come back unchanged with found=False.
        """
        self.options()
        name = self._by_stripped.get(strip_name(query))
        if name is None:
            return query, False
        return name, True

    def find_entries(self, developer: str, *, stock: str = "", iso: str = "", ratio: str = "") -> list[Entry]:
        """Entries of a developer filtered by stock pattern, ISO and dilution, sorted for display."""
        name, _ = self.resolve_developer(developer)
        return sort_entries(filter_entries(self.get_entries(name), stock=stock, iso=iso, ratio=ratio))


def open_default_api(*, cache_dir: Path | str | None = None, fetch: Fetcher | None = None) -> DevchartAPI:
    """DevchartAPI over the default cache root (DEVCHART_DB_CACHE_DIR or the user cache dir)."""
    return DevchartAPI(store=CacheStore(get_cache_root(cache_dir), fetch=fetch))
