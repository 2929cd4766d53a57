"""Terrain vector and delta models plus the scoring constants they share."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Mapping


# ---------------------------------------------------------------------------
# Axis definitions (used by the scoring engine and drift detector)
# ---------------------------------------------------------------------------

AXIS_NAMES = [
    "cold_heat",
    "def_excess",
    "damp_dry",
    "qi_stagnation",
    "shen_unsettled",
]

# Bipolar axes span [-10, 10]; the two intensity axes never go negative.
AXIS_RANGES: dict[str, tuple[int, int]] = {
    "cold_heat": (-10, 10),
    "def_excess": (-10, 10),
    "damp_dry": (-10, 10),
    "qi_stagnation": (0, 10),
    "shen_unsettled": (0, 10),
}

# ---------------------------------------------------------------------------
# Classification thresholds
# ---------------------------------------------------------------------------

COLD_HEAT_COLD = -3           # cold_heat <= -3 -> cold
COLD_HEAT_WARM = 3            # cold_heat >= 3  -> warm
DEF_EXCESS_DEFICIENT = -3     # def_excess <= -3 -> deficient
DEF_EXCESS_EXCESS = 3         # def_excess >= 3  -> excess
DAMP_DRY_DAMP = -3            # damp_dry <= -3 -> damp modifier
DAMP_DRY_DRY = 3              # damp_dry >= 3  -> dry modifier
QI_STAGNATION_HIGH = 4        # qi_stagnation >= 4 -> stagnation modifier
SHEN_UNSETTLED_HIGH = 4       # shen_unsettled >= 4 -> shen modifier


def _clamp(value: int, lo: int, hi: int) -> int:
    """Clamp an integer to [lo, hi]."""
    return max(lo, min(hi, value))


def _clamp_axis(axis: str, value: int) -> int:
    lo, hi = AXIS_RANGES[axis]
    return _clamp(int(value), lo, hi)


# ---------------------------------------------------------------------------
# Delta
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TerrainDelta:
    """Signed, unclamped contribution of one quiz option to a vector."""

    cold_heat: int = 0
    def_excess: int = 0
    damp_dry: int = 0
    qi_stagnation: int = 0
    shen_unsettled: int = 0

    def weighted(self, weight: float) -> TerrainDelta:
        """Scale every axis by ``weight``, truncating toward zero.

        ``int()`` truncates, so ``-1 * 0.6`` becomes ``0`` rather than ``-1``.
        """
        return TerrainDelta(
            cold_heat=int(self.cold_heat * weight),
            def_excess=int(self.def_excess * weight),
            damp_dry=int(self.damp_dry * weight),
            qi_stagnation=int(self.qi_stagnation * weight),
            shen_unsettled=int(self.shen_unsettled * weight),
        )

    def as_dict(self) -> dict[str, int]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Vector
# ---------------------------------------------------------------------------

@dataclass
class TerrainVector:
    """Five-axis constitutional state. Every axis is kept inside its range.

    Every axis assignment is clamped, whether it comes from construction,
    :meth:`add` or a direct attribute write, so a long run of extreme
    answers cannot bank excess that a later opposite answer would release.
    """

    cold_heat: int = 0
    def_excess: int = 0
    damp_dry: int = 0
    qi_stagnation: int = 0
    shen_unsettled: int = 0

    def __setattr__(self, name: str, value: int) -> None:
        if name in AXIS_RANGES:
            value = _clamp_axis(name, value)
        super().__setattr__(name, value)

    @classmethod
    def zero(cls) -> TerrainVector:
        return cls()

    @classmethod
    def from_axis_values(cls, values: Mapping[str, int]) -> TerrainVector:
        """Build a vector from a partial ``{axis_name: value}`` mapping.

        Missing axes default to 0. Unknown axis names raise ``ValueError``.
        """
        unknown = set(values) - set(AXIS_NAMES)
        if unknown:
            raise ValueError(f"Unknown terrain axis: {sorted(unknown)!r}")
        return cls(**dict(values))

    def add(self, delta: TerrainDelta) -> None:
        """Add ``delta`` in place, clamping each axis after the addition."""
        for axis in AXIS_NAMES:
            setattr(self, axis, getattr(self, axis) + getattr(delta, axis))

    def copy(self) -> TerrainVector:
        return replace(self)

    def as_dict(self) -> dict[str, int]:
        """Return the axes in AXIS_NAMES order."""
        return {axis: getattr(self, axis) for axis in AXIS_NAMES}
