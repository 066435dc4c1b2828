from __future__ import annotations

import hashlib
import re

_UNSAFE_RE = re.compile(r"[^a-z0-9._-]+")


def short_hash(text: str, n: int = 8) -> str:
    """Return a short stable hex hash of text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()[:n]


def slugify(text: str) -> str:
    """Lowercase text and collapse runs of filesystem-unsafe characters to '-'."""
    return _UNSAFE_RE.sub("-", text.lower()).strip("-")


def cache_key(query: str) -> str:
    """
    Stable, filesystem-safe cache filename for a query.

    The fingerprint is taken from the raw query, so "Ilford ID-11" and
    "ilford id 11" share a slug but never a key.
    """
    return f"{slugify(query)}-{short_hash(query)}"


if __name__ == "__main__":
    print(cache_key("Kodak HC-110"))
