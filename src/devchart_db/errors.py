from __future__ import annotations

from pathlib import Path


class DevchartError(Exception):
    """Base class for all devchart-db errors."""


class TransportError(DevchartError):
    """Network or HTTP failure while fetching a page."""

    def __init__(self, url: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{message} ({url})")
        self.url = url
        self.status_code = status_code


class MalformedURL(DevchartError):
    """A hyperlink could not be parsed as a URL reference."""

    def __init__(self, href: str, reason: str = "") -> None:
        msg = f"malformed URL: {href!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
        self.href = href


class NoSuchDeveloper(DevchartError):
    """A developer query produced zero usable rows."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no such developer: '{name}'")
        self.name = name


class CacheError(DevchartError):
    """Local cache read/write/rename failure."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path
