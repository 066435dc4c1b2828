from __future__ import annotations

import pytest

from devchart_db.errors import MalformedURL
from devchart_db.scrapers.mdc.urls import resolve

BASE = "https://www.digitaltruth.com"


@pytest.mark.parametrize("base", [BASE, "https://www.digitaltruth.com/devchart.php?Developer=Rodinal", "http://example.org/a/b/"])
def test_empty_href_returns_base(base: str) -> None:
    assert resolve(base, "") == base


@pytest.mark.parametrize(
    "href",
    [
        "https://other.example.org/notes?id=1",
        "http://cdn.example.net/x.gif",
        "//other.example.org/a/b",
        "mailto:someone@example.org",
    ],
)
def test_cross_origin_links_pass_through_verbatim(href: str) -> None:
    assert resolve(BASE, href) == href


def test_same_host_scheme_relative_gets_base_scheme() -> None:
    assert resolve(BASE, "//www.digitaltruth.com/notes.php?id=3") == "https://www.digitaltruth.com/notes.php?id=3"


def test_same_host_absolute_keeps_its_own_scheme() -> None:
    assert resolve(BASE, "http://www.digitaltruth.com/notes.php") == "http://www.digitaltruth.com/notes.php"


@pytest.mark.parametrize("base", [BASE, "https://www.digitaltruth.com/data/devchart.php?Developer=D-76"])
def test_root_relative_takes_href_path_and_query(base: str) -> None:
    assert resolve(base, "/x/y?q=1") == "https://www.digitaltruth.com/x/y?q=1"


def test_relative_joins_onto_base_directory() -> None:
    base = "https://www.digitaltruth.com/data/devchart.php?Developer=D-76"
    assert resolve(base, "notes/n.php?id=4") == "https://www.digitaltruth.com/data/notes/n.php?id=4"
    assert resolve("https://www.digitaltruth.com/dir/", "x.php") == "https://www.digitaltruth.com/dir/x.php"
    assert resolve(BASE, "note.php?id=1") == "https://www.digitaltruth.com/note.php?id=1"


def test_relative_dot_segments_never_climb_above_root() -> None:
    assert resolve("https://www.digitaltruth.com/a/b.php", "../../../x.php") == "https://www.digitaltruth.com/x.php"
    assert resolve("https://www.digitaltruth.com/a/b/c.php", "./../d.php") == "https://www.digitaltruth.com/a/d.php"


def test_query_only_href_keeps_base_path() -> None:
    assert resolve("https://www.digitaltruth.com/devchart.php?a=1", "?b=2") == "https://www.digitaltruth.com/devchart.php?b=2"


@pytest.mark.parametrize("href", ["http://[::1", "/notes%zz.php", "/notes.php?id=1\x00", "http://www.digitaltruth.com:port/"])
def test_unparseable_href_raises_malformed_url(href: str) -> None:
    with pytest.raises(MalformedURL):
        resolve(BASE, href)
