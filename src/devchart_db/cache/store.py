# src/devchart_db/cache/store.py
from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Generic, TypeVar

from devchart_db.errors import CacheError
from devchart_db.models import Entry, Options
from devchart_db.scrapers.common.http import Fetcher, HttpFetcher
from devchart_db.scrapers.common.ids import cache_key
from devchart_db.scrapers.mdc.fetch_devchart import fetch_entries, fetch_options
from devchart_db.util.fileio import write_atomic
from devchart_db.util.paths import CacheRoot

log = logging.getLogger(__name__)

# Bump when the on-disk layout changes; blobs of any other format read as a miss.
CACHE_FORMAT = 1

OPTIONS_QUERY = "options"

KIND_OPTIONS = "options"
KIND_ENTRIES = "entries"

T = TypeVar("T")


class Freshness(Enum):
    HIT = "hit"
    MISS = "miss"


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """A cached value and whether it came from disk (hit) or the network (miss)."""

    value: T
    freshness: Freshness

    @property
    def from_cache(self) -> bool:
        return self.freshness is Freshness.HIT


class _StaleFormat(Exception):
    pass


def _encode(kind: str, query: str, data: Any) -> bytes:
    envelope = {"format": CACHE_FORMAT, "kind": kind, "query": query, "data": data}
    return (json.dumps(envelope, indent=2, sort_keys=True, ensure_ascii=False) + "\n").encode("utf-8")


def _decode(path: Path, raw: bytes, kind: str) -> Any:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CacheError(path, f"corrupt cache entry ({e})") from e

    if not isinstance(obj, dict):
        raise CacheError(path, "corrupt cache entry (not an object)")
    if obj.get("format") != CACHE_FORMAT:
        raise _StaleFormat(obj.get("format"))
    if obj.get("kind") != kind:
        raise CacheError(path, f"cache entry holds {obj.get('kind')!r}, expected {kind!r}")
    return obj.get("data")


class CacheStore:
    """
    Durable local cache of chart data, one file per query.

    - Hit: the stored value is returned as-is; entries never expire.
    - Miss: the data is fetched, normalized and written atomically
      (temp file + fsync + rename), so a crash never leaves a partial entry.
    - Unreadable or corrupt entries raise CacheError; they are not refetched.
    """

    def __init__(self, root: CacheRoot, *, fetch: Fetcher | None = None) -> None:
        self.root = root
        self.fetch: Fetcher = fetch or HttpFetcher()

    def entries_path(self, developer: str) -> Path:
        return self.root.entries_path(cache_key(developer))

    def get(self, query: str) -> CacheResult[Any]:
        """Options for the "options" query, else the entry list of a developer."""
        if query == OPTIONS_QUERY:
            return self.get_options()
        return self.get_entries(query)

    def get_options(self) -> CacheResult[Options]:
        return self._get_or_acquire(
            path=self.root.options_path,
            kind=KIND_OPTIONS,
            query=OPTIONS_QUERY,
            acquire=lambda: fetch_options(self.fetch),
            dump=lambda o: o.to_dict(),
            load=Options.from_dict,
        )

    def get_entries(self, developer: str) -> CacheResult[list[Entry]]:
        return self._get_or_acquire(
            path=self.entries_path(developer),
            kind=KIND_ENTRIES,
            query=developer,
            acquire=lambda: fetch_entries(developer, self.fetch),
            dump=lambda es: [e.to_dict() for e in es],
            load=lambda data: [Entry.from_dict(d) for d in data],
        )

    def _read(self, path: Path, kind: str, load: Callable[[Any], T]) -> T | None:
        """Cached value, or None on a miss."""
        try:
            raw = path.read_bytes()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheError(path, f"cannot read cache entry ({e})") from e

        try:
            data = _decode(path, raw, kind)
        except _StaleFormat as e:
            log.info("Ignoring cache entry %s written in format %s", path, e)
            return None

        try:
            return load(data)
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            raise CacheError(path, f"corrupt cache entry ({e!r})") from e

    def _write(self, path: Path, blob: bytes) -> None:
        try:
            write_atomic(path, blob)
        except OSError as e:
            raise CacheError(path, f"cannot write cache entry ({e})") from e

    def _get_or_acquire(
        self,
        *,
        path: Path,
        kind: str,
        query: str,
        acquire: Callable[[], T],
        dump: Callable[[T], Any],
        load: Callable[[Any], T],
    ) -> CacheResult[T]:
        cached = self._read(path, kind, load)
        if cached is not None:
            log.debug("Cache hit %s -> %s", query, path)
            return CacheResult(cached, Freshness.HIT)

        log.debug("Cache miss %s -> %s", query, path)
        value = acquire()
        self._write(path, _encode(kind, query, dump(value)))
        return CacheResult(value, Freshness.MISS)
