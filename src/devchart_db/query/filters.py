from __future__ import annotations

from collections.abc import Iterable
from datetime import timedelta

from devchart_db.mixing import scale_parts, scale_string
from devchart_db.models import Entry


def strip_name(name: str) -> str:
    """Compact lookup form of a published name: "Kodak HC-110" -> "kodakhc110"."""
    s = name.lower().replace(" ", "").replace("-", "")
    return s.rstrip("%")


def wildcard_parts(query: str) -> list[str]:
    return query.lower().split("*")


def wildcard_match(parts: list[str], target: str) -> bool:
    """
    Match target against a "*" pattern split by wildcard_parts().

    Without a "*" the match is exact; otherwise the first part must be a
    prefix, the last a suffix and the middle parts substrings.
    """
    lc = target.lower()
    if len(parts) == 1:
        return lc == parts[0]

    for i, p in enumerate(parts):
        if not p:
            continue
        if i == 0:
            ok = lc.startswith(p)
        elif i == len(parts) - 1:
            ok = lc.endswith(p)
        else:
            ok = p in lc
        if not ok:
            return False
    return True


def filter_entries(
    entries: Iterable[Entry],
    *,
    stock: str = "",
    iso: str = "",
    ratio: str = "",
) -> list[Entry]:
    """Keep entries matching a stock pattern (stripped names, "*" wildcards), an exact ISO and a dilution."""
    stock_parts = wildcard_parts(strip_name(stock)) if stock else None
    want_ratio = scale_string(scale_parts(ratio)) if ratio else ""

    out: list[Entry] = []
    for e in entries:
        if iso and e.iso != iso:
            continue
        if want_ratio and e.dilution != want_ratio:
            continue
        if stock_parts is not None and not wildcard_match(stock_parts, strip_name(e.name)):
            continue
        out.append(e)
    return out


def _iso_key(iso: str) -> tuple[int, int, str]:
    try:
        return (0, int(iso), "")
    except ValueError:
        return (1, 0, iso)


def sort_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Order by developer, film, numeric ISO (non-numeric last), dilution, temperature."""
    return sorted(entries, key=lambda e: (e.developer, e.name, _iso_key(e.iso), e.dilution, e.temperature))


def format_duration(d: timedelta) -> str:
    """Compact duration: 450s -> "7m30s", 3720s -> "1h2m"."""
    s = int(d.total_seconds())
    out = []
    if s >= 3600:
        out.append(f"{s // 3600}h")
        s %= 3600
    if s >= 60:
        out.append(f"{s // 60}m")
        s %= 60
    if s:
        out.append(f"{s}s")
    return "".join(out)
