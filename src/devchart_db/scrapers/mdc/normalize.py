from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from datetime import timedelta

from devchart_db.errors import DevchartError, NoSuchDeveloper
from devchart_db.mixing import scale_parts, scale_string
from devchart_db.models import Entry

log = logging.getLogger(__name__)

ROW_FIELDS = 9

# Column order of the chart's result table
COL_NAME, COL_DEVELOPER, COL_DILUTION, COL_ISO, COL_135, COL_120, COL_SHEET, COL_TEMP, COL_NOTES = range(ROW_FIELDS)

STOCK_DILUTION = "1+0"

# Kodak HC-110 and Ilford Ilfotec publish lettered dilutions
LETTER_CODED_PREFIXES = ("HC-110", "Ilfotec")
LETTER_DILUTIONS: dict[str, str] = {
    "A": "1+15",
    "B": "1+31",
    "C": "1+19",
    "D": "1+39",
    "E": "1+47",
    "F": "1+79",
    "G": "1+119",
    "H": "1+63",
    "J": "1+150",
}

NotesFetcher = Callable[[str], tuple[str, ...]]


def _safe_float(s: str) -> float | None:
    try:
        v = float(s.strip())
    except ValueError:
        return None
    return v if math.isfinite(v) else None


def normalize_dilution(raw: str, developer: str) -> str | None:
    """
    Canonical "int+int" dilution for a published value, or None if there is none.

    - "stock" -> "1+0"
    - HC-110 / Ilfotec letter codes -> their "1+N" ratio
    - "1+9", "1:9", "1/9" -> "1+9"
    """
    s = raw.strip()
    if s.lower() == "stock":
        return STOCK_DILUTION
    if developer.startswith(LETTER_CODED_PREFIXES) and s in LETTER_DILUTIONS:
        return LETTER_DILUTIONS[s]
    if not any(sep in s for sep in "+:/"):
        return None
    try:
        return scale_string(scale_parts(s))
    except ValueError:
        return None


def parse_minutes(s: str) -> timedelta:
    """Decimal minutes ("8.5") as a duration; zero (not applicable) when unparseable."""
    v = _safe_float(s)
    if v is None:
        return timedelta(0)
    try:
        return timedelta(minutes=v)
    except OverflowError:
        return timedelta(0)


def parse_temperature(s: str) -> float:
    """Degrees from "20C"/"20c"/"20"; 0.0 when missing or unparseable."""
    t = s.strip()
    if t[-1:] in ("c", "C"):
        t = t[:-1]
    v = _safe_float(t)
    return 0.0 if v is None else v


def _notes_for(url: str, fetch_notes: NotesFetcher) -> tuple[str, ...]:
    try:
        return fetch_notes(url)
    except DevchartError as e:
        log.warning("Footnotes unavailable for %s: %s", url, e)
        return ()


def normalize_row(row: Sequence[str], developer: str, fetch_notes: NotesFetcher) -> Entry | None:
    """Build an Entry from one raw 9-field table row; None if the row is unusable."""
    if len(row) != ROW_FIELDS:
        return None
    r = [c.strip() for c in row]

    dilution = normalize_dilution(r[COL_DILUTION], developer)
    if dilution is None:
        log.warning("Dropping %s / %s row with unrecognized dilution %r", r[COL_NAME], r[COL_DEVELOPER], r[COL_DILUTION])
        return None

    notes: tuple[str, ...] = ()
    if r[COL_NOTES]:
        notes = _notes_for(r[COL_NOTES], fetch_notes)

    return Entry(
        name=r[COL_NAME],
        developer=r[COL_DEVELOPER],
        dilution=dilution,
        iso=r[COL_ISO],
        time_135=parse_minutes(r[COL_135]),
        time_120=parse_minutes(r[COL_120]),
        time_sheet=parse_minutes(r[COL_SHEET]),
        temperature=parse_temperature(r[COL_TEMP]),
        notes=notes,
    )


def normalize_rows(rows: Sequence[Sequence[str]], developer: str, fetch_notes: NotesFetcher) -> list[Entry]:
    """
    Normalize raw result-table rows for a developer query.

    Rows of the wrong width (headers, footers, layout rows) and rows with an
    unusable dilution are skipped. Footnotes are fetched one row at a time.

    Raises:
        NoSuchDeveloper: no row survived.
    """
    entries: list[Entry] = []
    for row in rows:
        e = normalize_row(row, developer, fetch_notes)
        if e is not None:
            entries.append(e)

    if not entries:
        raise NoSuchDeveloper(developer)
    return entries
