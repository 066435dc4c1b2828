from __future__ import annotations

import sys
from pathlib import Path
from urllib.parse import parse_qs, urlsplit

import pytest


def pytest_sessionstart(session) -> None:
    """Ensure repo root and src/ are on sys.path so tests can import local modules."""
    repo_root = Path(__file__).resolve().parents[1]
    src_dir = repo_root / "src"

    # Prefer src/ (uninstalled package) over any globally installed devchart_db.
    for p in [src_dir, repo_root]:
        ps = str(p)
        if ps not in sys.path:
            sys.path.insert(0, ps)


OPTIONS_HTML = """\
<html><body>
<form action="devchart.php" method="get">
  <select name="Film">
    <option value="">All films</option>
    <option value="Tri-X 400">Tri-X 400</option>
    <option value="HP5+">HP5+</option>
  </select>
  <select id="Developer" name="Developer">
    <option value="searchbox">Type to search</option>
    <option value="Rodinal">Rodinal</option>
    <option value="HC-110">HC-110</option>
  </select>
  <select name="TempUnits"><option value="C">Celsius</option></select>
</form>
</body></html>
"""

RODINAL_HTML = """\
<html><body>
<table class="layout"><tr><td>
<table class="mdctable">
<tr><th>Film</th><th>Developer</th><th>Dilution</th><th>ASA/ISO</th><th>35mm</th><th>120</th><th>Sheet</th><th>Temp</th><th>Notes</th></tr>
<tr><td>Tri-X 400</td><td>Rodinal</td><td>1+50</td><td>400</td><td>11</td><td>11</td><td></td><td>20C</td><td><a href="/notes.php?id=7"><img src="note.gif"></a></td></tr>
<tr><td>HP5+</td><td>Rodinal</td><td>1+25</td><td>400</td><td>6</td><td>6</td><td>6.5</td><td>20C</td><td></td></tr>
<tr><td colspan="9">Click a note icon for details</td></tr>
</table>
</td></tr></table>
</body></html>
"""

HC110_HTML = """\
<html><body>
<table>
<tr><td>Tri-X 400</td><td>Kodak HC-110</td><td>B</td><td>400</td><td>6</td><td>6</td><td></td><td>20C</td><td></td></tr>
<tr><td>HP5+</td><td>Kodak HC-110</td><td>K</td><td>400</td><td>5</td><td></td><td></td><td>20C</td><td></td></tr>
</table>
</body></html>
"""

EMPTY_RESULT_HTML = "<html><body><p>No results</p></body></html>"

NOTE_URL = "https://www.digitaltruth.com/notes.php?id=7"

NOTE_HTML = """\
<html><body>
<table class="notenote">
<tr><td>Note 7 [close]</td></tr>
<tr><td>  Agitate 10s every minute.  </td></tr>
<tr><td>Use fresh developer.</td></tr>
</table>
</body></html>
"""


class FakeChart:
    """Stand-in for the chart website: maps URLs to canned pages and records every fetch."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.tables = {"Rodinal": RODINAL_HTML, "HC-110": HC110_HTML}
        self.notes = {NOTE_URL: NOTE_HTML}

    def __call__(self, url: str) -> bytes:
        from devchart_db.errors import TransportError
        from devchart_db.scrapers.mdc.fetch_devchart import DEVCHART_URL

        self.calls.append(url)
        if url == DEVCHART_URL:
            return OPTIONS_HTML.encode("utf-8")
        if url.startswith(DEVCHART_URL + "?"):
            dev = parse_qs(urlsplit(url).query, keep_blank_values=True)["Developer"][0]
            return self.tables.get(dev, EMPTY_RESULT_HTML).encode("utf-8")
        if url in self.notes:
            return self.notes[url].encode("utf-8")
        raise TransportError(url, "HTTP 404", status_code=404)


@pytest.fixture
def fake_chart() -> FakeChart:
    return FakeChart()
