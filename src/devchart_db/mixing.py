"""Dilution arithmetic: how much concentrate and water make up a working solution."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Protocol

_SEP_RE = re.compile(r"[+:/]")


def scale_parts(scale: str) -> tuple[int, int]:
    """
    Split a dilution like "1+9", "1:9" or "1/9" into (chem, water) parts.

    A bare number "n" is (n, 0).

    Raises:
        ValueError: more than two parts, or a part that is not an integer.
    """
    parts = [p for p in _SEP_RE.split(scale.strip()) if p != ""]
    if not parts or len(parts) > 2:
        raise ValueError(f"invalid dilution: {scale!r}")
    nums = [int(p.strip()) for p in parts]
    if len(nums) == 1:
        nums.append(0)
    return nums[0], nums[1]


def scale_ratio(scale: str) -> float:
    """Fraction of the working solution that is concentrate ("1+9" -> 0.1)."""
    a, b = scale_parts(scale)
    if a + b == 0:
        raise ValueError(f"invalid dilution: {scale!r}")
    return a / (a + b)


def scale_string(parts: tuple[int, int]) -> str:
    return f"{parts[0]}+{parts[1]}"


class Chem(Protocol):
    def density(self) -> float: ...

    def volume(self, total: float) -> float: ...


@dataclass(frozen=True)
class SimpleChem:
    """A concentrate with a fixed density (g/ml, 0 if unknown) used at a fixed ratio."""

    density_g_ml: float
    ratio: float

    def density(self) -> float:
        return self.density_g_ml

    def volume(self, total: float) -> float:
        return self.ratio * total


@dataclass(frozen=True)
class MixResult:
    chem_volume: float
    chem_weight: float
    water_volume: float

    def __str__(self) -> str:
        total = self.chem_volume + self.water_volume
        if self.chem_weight == 0 and self.chem_volume != 0:
            return f"{self.chem_volume:.2f}ml + {self.water_volume:.2f}ml = {total:.2f}ml"
        return (
            f"{self.chem_volume:.2f}ml ({self.chem_weight:.2f}g) + {self.water_volume:.2f}ml"
            f" = {total:.2f}ml ({self.chem_weight + self.water_volume:.2f}g)"
        )


def calc(chem: Chem, volume: float) -> MixResult:
    """Split a total volume (ml) into concentrate and water for the given chemical."""
    chem_volume = chem.volume(volume)
    return MixResult(
        chem_volume=chem_volume,
        chem_weight=chem_volume * chem.density(),
        water_volume=volume - chem_volume,
    )
