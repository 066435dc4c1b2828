from __future__ import annotations

from pathlib import Path

import pytest

from devchart_db.aliases import Alias, aliases_path, load_aliases, parse_density, save_aliases


def test_parse_density() -> None:
    assert parse_density("0.7") == (0.7, 1.0)
    assert parse_density("280/200") == (280.0, 200.0)
    with pytest.raises(ValueError):
        parse_density("heavy")


def test_alias_density() -> None:
    assert Alias("adonal", "rodinal", (280.0, 200.0)).density() == pytest.approx(1.4)
    assert Alias("r", "rodinal").density() == 0.0


def test_save_then_load_keeps_last_definition(tmp_path: Path) -> None:
    path = aliases_path(tmp_path)
    save_aliases(
        path,
        [
            Alias("adonal", "rodinal", (280.0, 200.0)),
            Alias("dd", "ilfotecddx"),
            Alias("adonal", "rodinal", (1.2, 1.0)),
        ],
    )
    assert path.read_text(encoding="utf-8") == "adonal rodinal 1.2/1\ndd ilfotecddx 0/0\n"
    loaded = load_aliases(path)
    assert [a.alias for a in loaded] == ["adonal", "dd"]
    assert loaded[0].density() == pytest.approx(1.2)
    assert list(tmp_path.glob("*.tmp")) == []


def test_missing_file_is_empty(tmp_path: Path) -> None:
    assert load_aliases(tmp_path / "nope") == []


@pytest.mark.parametrize("content", ["adonal rodinal\n", "a rodinal 1/1\na xtol 1/1\n", "a rodinal x/1\n"])
def test_malformed_alias_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "aliases"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_aliases(path)


def test_aliases_path_uses_config_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DEVCHART_DB_CONFIG_DIR", str(tmp_path / "cfg"))
    assert aliases_path() == (tmp_path / "cfg" / "aliases").resolve()
