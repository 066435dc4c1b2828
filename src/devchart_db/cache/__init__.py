from __future__ import annotations

from devchart_db.cache.store import CacheResult, CacheStore, Freshness

__all__ = ["CacheResult", "CacheStore", "Freshness"]
