from __future__ import annotations

import posixpath
import re
from urllib.parse import urlsplit, urlunsplit

from devchart_db.errors import MalformedURL

_ABS_URL_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_CTL_RE = re.compile(r"[\x00-\x1f\x7f]")


def _parse(href: str):
    if _CTL_RE.search(href):
        raise MalformedURL(href, "invalid control character")
    if _BAD_ESCAPE_RE.search(href):
        raise MalformedURL(href, "invalid percent escape")
    try:
        parts = urlsplit(href)
        parts.port  # noqa: B018 - raises ValueError on a bad port
    except ValueError as e:
        raise MalformedURL(href, str(e)) from e
    return parts


def _clean_path(p: str) -> str:
    """Remove dot segments; '..' never climbs above the root."""
    if not p:
        return "/"
    trailing = p.endswith("/") or p.endswith("/.") or p.endswith("/..")
    out = posixpath.normpath("/" + p.lstrip("/"))
    if trailing and not out.endswith("/"):
        out += "/"
    return out


def resolve(base: str, href: str) -> str:
    """
    Resolve a hyperlink found on a page against that page's base URL.

    - "" returns base unchanged.
    - "scheme:..." or "//host/...": absolute. A link to another host is
      returned verbatim; a same-host link without a scheme gets base's scheme.
    - "/path?q": base's scheme and host, href's path and query.
    - anything else: joined onto base's directory, href's query.

    Raises:
        MalformedURL: href is not a parseable URL reference.
    """
    if href == "":
        return base

    b = urlsplit(base)
    p = _parse(href)

    if _ABS_URL_RE.match(href) or href.startswith("//"):
        if p.netloc.lower() != b.netloc.lower():
            return href
        scheme = p.scheme or b.scheme
        return urlunsplit((scheme, p.netloc, p.path, p.query, p.fragment))

    if href.startswith("/"):
        return urlunsplit((b.scheme, b.netloc, p.path, p.query, ""))

    if not p.path:
        return urlunsplit((b.scheme, b.netloc, b.path or "/", p.query, ""))

    base_dir = b.path if b.path.endswith("/") else posixpath.dirname(b.path)
    joined = _clean_path(posixpath.join(base_dir or "/", p.path))
    return urlunsplit((b.scheme, b.netloc, joined, p.query, ""))
