from __future__ import annotations

from datetime import timedelta

import pytest

from devchart_db.errors import NoSuchDeveloper, TransportError
from devchart_db.scrapers.mdc.normalize import (
    normalize_dilution,
    normalize_row,
    normalize_rows,
    parse_minutes,
    parse_temperature,
)

NOTE = "https://www.digitaltruth.com/notes.php?id=42"
TMAX_ROW = ["TMax 400", "Kodak", "1+4", "400", "8.5", "", "", "20C", NOTE]


def _notes(url: str) -> tuple[str, ...]:
    return {NOTE: ("Agitate gently.",)}[url]


def _no_notes(url: str) -> tuple[str, ...]:
    raise AssertionError(f"unexpected footnote fetch: {url}")


def test_normalize_dilution_stock_and_plain_ratios() -> None:
    assert normalize_dilution("stock", "D-76") == "1+0"
    assert normalize_dilution("Stock", "D-76") == "1+0"
    assert normalize_dilution("1+9", "Rodinal") == "1+9"
    assert normalize_dilution("1:50", "Rodinal") == "1+50"
    assert normalize_dilution("1/25", "Rodinal") == "1+25"


@pytest.mark.parametrize(
    "code,expected",
    [("A", "1+15"), ("B", "1+31"), ("C", "1+19"), ("D", "1+39"), ("E", "1+47"), ("F", "1+79"), ("G", "1+119"), ("H", "1+63"), ("J", "1+150")],
)
def test_letter_codes_for_hc110_family(code: str, expected: str) -> None:
    assert normalize_dilution(code, "HC-110") == expected
    assert normalize_dilution(code, "Ilfotec DD-X") == expected


def test_letter_codes_rejected_outside_family_or_table() -> None:
    assert normalize_dilution("B", "Rodinal") is None
    assert normalize_dilution("K", "HC-110") is None
    assert normalize_dilution("1+1+100", "Rodinal") is None
    assert normalize_dilution("", "Rodinal") is None


def test_parse_minutes() -> None:
    assert parse_minutes("8.5") == timedelta(minutes=8, seconds=30)
    assert parse_minutes(" 11 ") == timedelta(minutes=11)
    assert parse_minutes("") == timedelta(0)
    assert parse_minutes("n/a") == timedelta(0)
    assert parse_minutes("nan") == timedelta(0)
    assert parse_minutes("1e20") == timedelta(0)


def test_parse_temperature() -> None:
    assert parse_temperature("20C") == 20.0
    assert parse_temperature("20.5c") == 20.5
    assert parse_temperature("24") == 24.0
    assert parse_temperature("") == 0.0
    assert parse_temperature("C") == 0.0
    assert parse_temperature("warm") == 0.0


def test_tmax_row_scenario() -> None:
    e = normalize_row(TMAX_ROW, "Kodak", _notes)
    assert e is not None
    assert e.name == "TMax 400"
    assert e.developer == "Kodak"
    assert e.dilution == "1+4"
    assert e.iso == "400"
    assert e.time_135 == timedelta(minutes=8.5)
    assert e.time_120 == timedelta(0)
    assert e.time_sheet == timedelta(0)
    assert e.temperature == 20.0
    assert e.notes == ("Agitate gently.",)


@pytest.mark.parametrize("width", [8, 10])
def test_rows_of_other_widths_are_dropped(width: int) -> None:
    row = (TMAX_ROW + ["extra"])[:width]
    assert normalize_row(row, "Kodak", _no_notes) is None


def test_footnote_failure_only_empties_that_rows_notes() -> None:
    def failing(url: str) -> tuple[str, ...]:
        raise TransportError(url, "HTTP 500", status_code=500)

    entries = normalize_rows([TMAX_ROW, TMAX_ROW[:8] + [""]], "Kodak", failing)
    assert [e.notes for e in entries] == [(), ()]


def test_zero_usable_rows_raises_no_such_developer() -> None:
    rows = [[], ["Film", "Developer"], ["only", "three", "cells"]]
    with pytest.raises(NoSuchDeveloper) as ei:
        normalize_rows(rows, "Nonexistent", _no_notes)
    assert "Nonexistent" in str(ei.value)


def test_unmapped_letter_rows_are_dropped_not_emitted() -> None:
    rows = [
        ["Tri-X 400", "Kodak HC-110", "B", "400", "6", "", "", "20C", ""],
        ["HP5+", "Kodak HC-110", "K", "400", "5", "", "", "20C", ""],
    ]
    entries = normalize_rows(rows, "HC-110", _no_notes)
    assert [(e.name, e.dilution) for e in entries] == [("Tri-X 400", "1+31")]


def test_out_of_range_duration_degrades_to_zero() -> None:
    row = ["TMax 400", "Kodak", "1+4", "400", "1e20", "9", "", "20C", ""]
    entries = normalize_rows([row], "Kodak", _no_notes)
    assert entries[0].time_135 == timedelta(0)
    assert entries[0].time_120 == timedelta(minutes=9)
