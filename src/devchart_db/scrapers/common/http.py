from __future__ import annotations

import logging
import time
from collections.abc import Callable

import requests

from devchart_db.errors import TransportError

log = logging.getLogger(__name__)

Fetcher = Callable[[str], bytes]
"""fetch(absolute_url) -> response body; raises TransportError."""

DEFAULT_USER_AGENT = "devchart-db/0.1.0 (personal darkroom reference; contact via repo issues)"


class HttpFetcher:
    """requests-backed Fetcher.

    Args:
        session: Optional requests session (one is created otherwise).
        timeout_s: Requests timeout.
        polite_delay_s: Sleep duration after every network fetch.
        user_agent: User-Agent header.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        timeout_s: float = 60.0,
        polite_delay_s: float = 0.2,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self.session = session or requests.Session()
        self.timeout_s = timeout_s
        self.polite_delay_s = polite_delay_s
        self.user_agent = user_agent

    def __call__(self, url: str) -> bytes:
        log.debug("GET %s", url)
        try:
            resp = self.session.get(url, headers={"User-Agent": self.user_agent}, timeout=self.timeout_s)
        except requests.RequestException as e:
            raise TransportError(url, f"request failed: {e}") from e

        # be polite only when we actually hit the network
        if self.polite_delay_s > 0:
            time.sleep(self.polite_delay_s)

        if not 200 <= resp.status_code < 300:
            raise TransportError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
        return resp.content


if __name__ == "__main__":
    body = HttpFetcher()("https://example.com")
    print("Fetched bytes:", len(body))
