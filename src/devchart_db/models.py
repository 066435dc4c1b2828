from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

_US = timedelta(microseconds=1)


def _td_to_us(td: timedelta) -> int:
    return td // _US


@dataclass(frozen=True)
class Entry:
    """One row of a Massive Dev Chart dilution/time table."""

    name: str
    developer: str
    dilution: str
    iso: str
    time_135: timedelta = timedelta(0)
    time_120: timedelta = timedelta(0)
    time_sheet: timedelta = timedelta(0)
    temperature: float = 0.0
    notes: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        # durations as integer microseconds so a cache round trip is exact
        return {
            "name": self.name,
            "developer": self.developer,
            "dilution": self.dilution,
            "iso": self.iso,
            "time_135_us": _td_to_us(self.time_135),
            "time_120_us": _td_to_us(self.time_120),
            "time_sheet_us": _td_to_us(self.time_sheet),
            "temperature": self.temperature,
            "notes": list(self.notes),
        }

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Entry:
        return cls(
            name=str(d["name"]),
            developer=str(d["developer"]),
            dilution=str(d["dilution"]),
            iso=str(d["iso"]),
            time_135=timedelta(microseconds=int(d["time_135_us"])),
            time_120=timedelta(microseconds=int(d["time_120_us"])),
            time_sheet=timedelta(microseconds=int(d["time_sheet_us"])),
            temperature=float(d["temperature"]),
            notes=tuple(str(n) for n in d.get("notes") or []),
        )


@dataclass(frozen=True)
class Options:
    """Developers and film stocks listed on the chart's search form, in page order."""

    developers: tuple[str, ...] = ()
    stocks: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"developers": list(self.developers), "stocks": list(self.stocks)}

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Options:
        return cls(
            developers=tuple(str(x) for x in d["developers"]),
            stocks=tuple(str(x) for x in d["stocks"]),
        )
