"""devchart_db package.

Devchart-DB is a local-first cache + query API over the Massive Dev Chart
(digitaltruth.com), which is only published as HTML pages.

Key ideas:
- Acquisition pipeline: fetch → tokenize → extract (state machines) → normalize → cache (atomic JSON files)
- One cache file per developer query plus one for the developer/stock listing; entries never expire

Public API:
- devchart_db.query.open_default_api
- devchart_db.query.api.DevchartAPI
- Convenience helpers:
  - devchart_db.list_developers
  - devchart_db.list_stocks
  - devchart_db.get_entries
"""

from __future__ import annotations

from devchart_db.models import Entry, Options
from devchart_db.query import open_default_api

__all__ = [
    "__version__",
    "Entry",
    "Options",
    "get_entries",
    "list_developers",
    "list_stocks",
]

__version__ = "0.1.0"


def list_developers() -> list[str]:
    return open_default_api().list_developers()


def list_stocks() -> list[str]:
    return open_default_api().list_stocks()


def get_entries(developer: str) -> list[Entry]:
    """Entries for a developer as published on the chart (cached after the first call)."""
    return open_default_api().get_entries(developer)
