"""Token-stream extractors for the Massive Dev Chart pages.

Three single-pass state machines, one per page shape:

- option lists: the <select> dropdowns of the search form (developers, film stocks)
- table rows: the dilution/time result table, with hyperlinks captured per cell
- footnotes: the popup page linked from a row's notes cell ("notenote" table)

Each machine has an explicit Enum state type and a transition table keyed by
(token kind, tag name). A transition missing from the table leaves the state
unchanged. Side effects (emitting values, starting records) are applied by the
extractor classes around the pure ``next_*_state`` functions.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from enum import Enum

from devchart_db.errors import MalformedURL
from devchart_db.models import Options
from devchart_db.scrapers.mdc.tokens import End, EndTag, StartTag, Text, Token
from devchart_db.scrapers.mdc.urls import resolve

log = logging.getLogger(__name__)

SEARCHBOX_SENTINEL = "searchbox"
NOTE_TABLE_CLASS = "notenote"
_NOTE_MARKER_RE = re.compile(r"note.*\[.*]$", flags=re.IGNORECASE)

_START = "start"
_END = "end"


def _event(tok: Token) -> tuple[str, str] | None:
    if isinstance(tok, StartTag):
        return (_START, tok.name.lower())
    if isinstance(tok, EndTag):
        return (_END, tok.name.lower())
    return None


# --------------------------------------------------------------------------
# Option lists
# --------------------------------------------------------------------------


class OptionGroup(Enum):
    NONE = "none"
    DEVELOPERS = "developers"
    STOCKS = "stocks"


_GROUP_BY_NAME: dict[str, OptionGroup] = {
    "developer": OptionGroup.DEVELOPERS,
    "film": OptionGroup.STOCKS,
}


def _select_group(tok: StartTag) -> OptionGroup:
    for key in ("name", "id"):
        group = _GROUP_BY_NAME.get((tok.attr(key) or "").strip().lower())
        if group is not None:
            return group
    return OptionGroup.NONE


def next_option_state(state: OptionGroup, tok: Token) -> OptionGroup:
    if isinstance(tok, StartTag) and tok.name.lower() == "select":
        return _select_group(tok)
    if _event(tok) == (_END, "select"):
        return OptionGroup.NONE
    return state


def _option_value(tok: StartTag) -> str | None:
    v = tok.attr("value")
    if not v or v.lower() == SEARCHBOX_SENTINEL:
        return None
    return v


def extract_options(tokens: Iterable[Token]) -> Options:
    """Collect developer and film stock names from the search form's dropdowns."""
    found: dict[OptionGroup, list[str]] = {OptionGroup.DEVELOPERS: [], OptionGroup.STOCKS: []}
    state = OptionGroup.NONE
    for tok in tokens:
        if isinstance(tok, End):
            break
        if state is not OptionGroup.NONE and isinstance(tok, StartTag) and tok.name.lower() == "option":
            v = _option_value(tok)
            if v is not None:
                found[state].append(v)
            continue
        state = next_option_state(state, tok)

    return Options(
        developers=tuple(found[OptionGroup.DEVELOPERS]),
        stocks=tuple(found[OptionGroup.STOCKS]),
    )


# --------------------------------------------------------------------------
# Result table
# --------------------------------------------------------------------------


class TableState(Enum):
    OUTSIDE = "outside"
    IN_TABLE = "in_table"
    IN_ROW = "in_row"
    IN_CELL = "in_cell"


_T = TableState

_TABLE_TRANSITIONS: dict[tuple[str, str], dict[TableState, TableState]] = {
    (_START, "table"): {s: _T.IN_TABLE for s in TableState},
    (_START, "tr"): {_T.IN_TABLE: _T.IN_ROW, _T.IN_ROW: _T.IN_ROW, _T.IN_CELL: _T.IN_ROW},
    (_START, "td"): {_T.IN_ROW: _T.IN_CELL, _T.IN_CELL: _T.IN_CELL},
    (_END, "td"): {_T.IN_CELL: _T.IN_ROW},
    (_END, "tr"): {_T.IN_ROW: _T.IN_TABLE, _T.IN_CELL: _T.IN_TABLE},
    (_END, "table"): {s: _T.OUTSIDE for s in TableState},
}


def next_table_state(state: TableState, tok: Token) -> TableState:
    ev = _event(tok)
    if ev is None:
        return state
    return _TABLE_TRANSITIONS.get(ev, {}).get(state, state)


class TableExtractor:
    """Rebuild table rows (lists of cell strings) from a token stream.

    A cell's value is its last text run, unless the cell holds a hyperlink, in
    which case it is the link resolved against ``base_url``. Rows are emitted
    on </tr>, or on the next <tr> or </table> when the end tag is missing. A
    row still open when the stream ends is discarded. A row with an
    unresolvable link is dropped.
    """

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.state = TableState.OUTSIDE
        self.rows: list[list[str]] = []
        self._row: list[str] | None = None
        self._row_bad = False
        self._text = ""
        self._linked = False

    def _commit_cell(self) -> None:
        if self._row is not None and self._row and not self._linked:
            self._row[-1] = self._text
        self._text = ""
        self._linked = False

    def _commit_row(self) -> None:
        if self._row is not None and not self._row_bad:
            self.rows.append(self._row)
        self._row = None
        self._row_bad = False

    def feed(self, tok: Token) -> None:
        old = self.state

        if isinstance(tok, Text):
            if old is TableState.IN_CELL:
                self._text = tok.data
            return

        if isinstance(tok, StartTag) and tok.name.lower() == "a":
            if old is TableState.IN_CELL:
                self._capture_link(tok)
            return

        new = next_table_state(old, tok)
        ev = _event(tok)

        # leaving a cell (close, sibling cell, row or table end) commits its text
        if old is TableState.IN_CELL and ev in {(_END, "td"), (_START, "td"), (_END, "tr"), (_START, "tr"), (_END, "table")}:
            self._commit_cell()

        # a row left open by a missing </tr> is complete once the next row or the table end arrives
        if old in {TableState.IN_ROW, TableState.IN_CELL} and ev in {(_START, "tr"), (_END, "table")}:
            self._commit_row()

        if ev == (_START, "table") or ev == (_END, "table"):
            self._row = None
            self._row_bad = False
            self._text = ""
            self._linked = False
        elif ev == (_START, "tr") and new is TableState.IN_ROW:
            self._row = []
            self._row_bad = False
        elif ev == (_START, "td") and new is TableState.IN_CELL and self._row is not None:
            self._row.append("")
        elif ev == (_END, "tr") and old in {TableState.IN_ROW, TableState.IN_CELL}:
            self._commit_row()

        self.state = new

    def _capture_link(self, tok: StartTag) -> None:
        href = tok.attr("href")
        if href is None or self._row is None or not self._row:
            return
        try:
            url = resolve(self.base_url, href)
        except MalformedURL as e:
            log.warning("Dropping table row: %s", e)
            self._row_bad = True
            return
        self._row[-1] = url
        self._linked = True


def extract_table_rows(tokens: Iterable[Token], base_url: str) -> list[list[str]]:
    """Return every complete table row on the page as a list of cell values."""
    ex = TableExtractor(base_url)
    for tok in tokens:
        if isinstance(tok, End):
            break
        ex.feed(tok)
    return ex.rows


# --------------------------------------------------------------------------
# Footnote popup
# --------------------------------------------------------------------------


class NoteState(Enum):
    OUTSIDE = "outside"
    IN_NOTE_TABLE = "in_note_table"
    IN_NOTE_ROW = "in_note_row"


_N = NoteState

_NOTE_TRANSITIONS: dict[tuple[str, str], dict[NoteState, NoteState]] = {
    (_START, "tr"): {_N.IN_NOTE_TABLE: _N.IN_NOTE_ROW},
    (_END, "tr"): {_N.IN_NOTE_ROW: _N.IN_NOTE_TABLE},
    (_END, "table"): {s: _N.OUTSIDE for s in NoteState},
}


def _is_note_table(tok: StartTag) -> bool:
    classes = (tok.attr("class") or "").lower().split()
    return NOTE_TABLE_CLASS in classes


def next_note_state(state: NoteState, tok: Token) -> NoteState:
    if isinstance(tok, StartTag) and tok.name.lower() == "table":
        return NoteState.IN_NOTE_TABLE if _is_note_table(tok) else NoteState.OUTSIDE
    ev = _event(tok)
    if ev is None:
        return state
    return _NOTE_TRANSITIONS.get(ev, {}).get(state, state)


def keep_note_line(text: str) -> str | None:
    """Trimmed footnote line, or None for blanks and "Note N [close]" markers."""
    s = text.strip()
    if not s or _NOTE_MARKER_RE.search(s):
        return None
    return s


def extract_notes(tokens: Iterable[Token]) -> tuple[str, ...]:
    """Footnote lines of a popup page; empty when the note table is missing.

    A note row normally carries one text run; when it has several, each
    surviving run becomes its own line.
    """
    lines: list[str] = []
    state = NoteState.OUTSIDE
    for tok in tokens:
        if isinstance(tok, End):
            break
        if isinstance(tok, Text):
            if state is NoteState.IN_NOTE_ROW:
                line = keep_note_line(tok.data)
                if line is not None:
                    lines.append(line)
            continue
        state = next_note_state(state, tok)
    return tuple(lines)
