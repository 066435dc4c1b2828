from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from devchart_db.util.fileio import write_atomic
from devchart_db.util.paths import get_config_dir

ALIASES_FILENAME = "aliases"


@dataclass(frozen=True)
class Alias:
    """A personal name for a chart developer, optionally with its density as a fraction (g / ml)."""

    alias: str
    developer: str
    density_parts: tuple[float, float] = (0.0, 0.0)

    def density(self) -> float:
        num, den = self.density_parts
        if den == 0:
            return 0.0
        return num / den


def aliases_path(config_dir: Path | None = None) -> Path:
    return (config_dir or get_config_dir()) / ALIASES_FILENAME


def parse_density(text: str) -> tuple[float, float]:
    """Density as (num, den): 1.4 -> (1.4, 1.0), 280/200 -> (280.0, 200.0)."""
    num, _, den = text.partition("/")
    try:
        return float(num), float(den) if den else 1.0
    except ValueError:
        raise ValueError(f"invalid decimal number: {text!r}") from None


def _fmt(x: float) -> str:
    return repr(x).removesuffix(".0")


def load_aliases(path: Path) -> list[Alias]:
    """
    Read "<alias> <developer> <num>/<den>" lines. A missing file is an empty list.

    Raises:
        ValueError: a malformed line or a duplicate alias.
    """
    if not path.exists():
        return []

    out: list[Alias] = []
    seen: set[str] = set()
    for line in path.read_text(encoding="utf-8").splitlines():
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 3:
            raise ValueError(f"invalid line {line!r} in {path}")
        alias, developer, density = fields
        if alias in seen:
            raise ValueError(f"duplicate alias {alias!r} in {path}")
        seen.add(alias)
        out.append(Alias(alias=alias, developer=developer, density_parts=parse_density(density)))
    return out


def save_aliases(path: Path, aliases: list[Alias]) -> None:
    """Write aliases atomically; for a repeated alias the last definition wins, in its first position."""
    latest: dict[str, Alias] = {}
    for a in aliases:
        latest[a.alias] = a

    lines = [f"{a.alias} {a.developer} {_fmt(a.density_parts[0])}/{_fmt(a.density_parts[1])}\n" for a in latest.values()]
    write_atomic(path, "".join(lines).encode("utf-8"))
