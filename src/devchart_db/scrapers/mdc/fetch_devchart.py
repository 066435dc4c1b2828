# src/devchart_db/scrapers/mdc/fetch_devchart.py
from __future__ import annotations

import logging
from urllib.parse import urlencode

from devchart_db.models import Entry, Options
from devchart_db.scrapers.common.http import Fetcher
from devchart_db.scrapers.mdc.extract import extract_notes, extract_options, extract_table_rows
from devchart_db.scrapers.mdc.normalize import normalize_rows
from devchart_db.scrapers.mdc.tokens import iter_tokens

log = logging.getLogger(__name__)

DEVCHART_BASE_URL = "https://www.digitaltruth.com"
DEVCHART_URL = f"{DEVCHART_BASE_URL}/devchart.php"


def build_search_params(developer: str) -> dict[str, str]:
    """Query parameters of the chart's search form: every film for one developer, Celsius, decimal minutes."""
    return {
        "Film": "",
        "Developer": developer,
        "mdc": "Search",
        "TempUnits": "C",
        "TimeUnits": "D",
    }


def search_url(developer: str) -> str:
    return f"{DEVCHART_URL}?{urlencode(sorted(build_search_params(developer).items()))}"


def fetch_options(fetch: Fetcher) -> Options:
    """Fetch the search form and list its developers and film stocks."""
    opts = extract_options(iter_tokens(fetch(DEVCHART_URL)))
    if not opts.developers and not opts.stocks:
        log.warning("No developers or stocks found on %s", DEVCHART_URL)
    log.debug("Options: %d developers, %d stocks", len(opts.developers), len(opts.stocks))
    return opts


def fetch_notes(url: str, fetch: Fetcher) -> tuple[str, ...]:
    """Fetch a footnote popup page and return its note lines."""
    return extract_notes(iter_tokens(fetch(url)))


def fetch_entries(developer: str, fetch: Fetcher) -> list[Entry]:
    """
    Fetch and normalize the result table for one developer.

    Raises:
        TransportError: the search page could not be fetched.
        NoSuchDeveloper: the page held no usable rows.
    """
    body = fetch(search_url(developer))
    rows = extract_table_rows(iter_tokens(body), DEVCHART_BASE_URL)
    log.debug("%s: %d raw table rows", developer, len(rows))
    return normalize_rows(rows, developer, lambda u: fetch_notes(u, fetch))
