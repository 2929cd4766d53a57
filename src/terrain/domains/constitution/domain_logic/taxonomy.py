"""Closed classification taxonomy for terrain scoring.

The enum values are stable identifiers: profile storage and content lookup
tables key off these exact strings. Display copy is kept in separate lookup
tables so the classifier stays free of presentation concerns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Identifiers
# ---------------------------------------------------------------------------

class PrimaryType(str, Enum):
    """The 8 primary terrain types (cold/neutral/warm x deficient/balanced/excess).

    Cold + Excess has no member of its own; it classifies as COLD_BALANCED.
    """

    COLD_DEFICIENT = "cold_deficient_low_flame"
    COLD_BALANCED = "cold_balanced_cool_core"
    NEUTRAL_DEFICIENT = "neutral_deficient_low_battery"
    NEUTRAL_BALANCED = "neutral_balanced_steady_core"
    NEUTRAL_EXCESS = "neutral_excess_busy_mind"
    WARM_BALANCED = "warm_balanced_high_flame"
    WARM_EXCESS = "warm_excess_overclocked"
    WARM_DEFICIENT = "warm_deficient_bright_but_thin"

    @property
    def terrain_profile_id(self) -> str:
        return self.value


class Modifier(str, Enum):
    """Secondary pattern overlay. At most one is surfaced per classification."""

    SHEN = "shen"
    STAGNATION = "stagnation"
    DAMP = "damp"
    DRY = "dry"
    NONE = "none"


class QuizFlag(str, Enum):
    """Boolean signals collected verbatim from selected quiz options."""

    REFLUX = "reflux"
    LOOSE_STOOL = "loose_stool"
    CONSTIPATION = "constipation"
    STICKY_STOOL = "sticky_stool"
    NIGHT_SWEATS = "night_sweats"
    WAKE_THIRSTY_HOT = "wake_thirsty_hot"


class Goal(str, Enum):
    """User goals; a quiz question may be gated on one of these."""

    SLEEP = "sleep"
    DIGESTION = "digestion"
    ENERGY = "energy"
    STRESS = "stress"
    SKIN = "skin"
    MENSTRUAL_COMFORT = "menstrual_comfort"


class DriftRecommendation(str, Enum):
    NO_CHANGE = "no_change"
    MINOR_SHIFT = "minor_shift"
    SIGNIFICANT_DRIFT = "significant_drift"


class ColdHeat(str, Enum):
    COLD = "cold"
    NEUTRAL = "neutral"
    WARM = "warm"


class DefExcess(str, Enum):
    DEFICIENT = "deficient"
    BALANCED = "balanced"
    EXCESS = "excess"


# ---------------------------------------------------------------------------
# Decision table and tie-break priority
# ---------------------------------------------------------------------------

PRIMARY_TYPE_TABLE: dict[tuple[ColdHeat, DefExcess], PrimaryType] = {
    (ColdHeat.COLD, DefExcess.DEFICIENT): PrimaryType.COLD_DEFICIENT,
    (ColdHeat.COLD, DefExcess.BALANCED): PrimaryType.COLD_BALANCED,
    # Cold + Excess is rare; it deliberately shares Cold + Balanced.
    (ColdHeat.COLD, DefExcess.EXCESS): PrimaryType.COLD_BALANCED,
    (ColdHeat.NEUTRAL, DefExcess.DEFICIENT): PrimaryType.NEUTRAL_DEFICIENT,
    (ColdHeat.NEUTRAL, DefExcess.BALANCED): PrimaryType.NEUTRAL_BALANCED,
    (ColdHeat.NEUTRAL, DefExcess.EXCESS): PrimaryType.NEUTRAL_EXCESS,
    (ColdHeat.WARM, DefExcess.DEFICIENT): PrimaryType.WARM_DEFICIENT,
    (ColdHeat.WARM, DefExcess.BALANCED): PrimaryType.WARM_BALANCED,
    (ColdHeat.WARM, DefExcess.EXCESS): PrimaryType.WARM_EXCESS,
}

# Lower rank wins when two candidates have the same magnitude.
MODIFIER_PRIORITY: dict[Modifier, int] = {
    Modifier.SHEN: 0,
    Modifier.STAGNATION: 1,
    Modifier.DAMP: 2,
    Modifier.DRY: 2,
    Modifier.NONE: 999,
}

DEFAULT_PRIMARY_TYPE = PrimaryType.NEUTRAL_BALANCED
DEFAULT_MODIFIER = Modifier.NONE


# ---------------------------------------------------------------------------
# Display metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TypeDisplay:
    label: str
    nickname: str


PRIMARY_TYPE_DISPLAY: dict[PrimaryType, TypeDisplay] = {
    PrimaryType.COLD_DEFICIENT: TypeDisplay("Cold + Deficient", "Low Flame"),
    PrimaryType.COLD_BALANCED: TypeDisplay("Cold + Balanced", "Cool Core"),
    PrimaryType.NEUTRAL_DEFICIENT: TypeDisplay("Neutral + Deficient", "Low Battery"),
    PrimaryType.NEUTRAL_BALANCED: TypeDisplay("Neutral + Balanced", "Steady Core"),
    PrimaryType.NEUTRAL_EXCESS: TypeDisplay("Neutral + Excess", "Busy Mind"),
    PrimaryType.WARM_BALANCED: TypeDisplay("Warm + Balanced", "High Flame"),
    PrimaryType.WARM_EXCESS: TypeDisplay("Warm + Excess", "Overclocked"),
    PrimaryType.WARM_DEFICIENT: TypeDisplay("Warm + Deficient", "Bright but Thin"),
}

MODIFIER_DISPLAY_NAMES: dict[Modifier, str] = {
    Modifier.SHEN: "Shen (Restless)",
    Modifier.STAGNATION: "Stagnation (Stuck)",
    Modifier.DAMP: "Damp (Heavy)",
    Modifier.DRY: "Dry (Thirsty)",
    Modifier.NONE: "",
}


def full_display_label(primary_type: PrimaryType, modifier: Modifier) -> str:
    """Render e.g. ``"Cold + Deficient (Low Flame) • Damp (Heavy)"``."""
    display = PRIMARY_TYPE_DISPLAY[primary_type]
    text = f"{display.label} ({display.nickname})"
    if modifier is not Modifier.NONE:
        text += f" • {MODIFIER_DISPLAY_NAMES[modifier]}"
    return text


# ---------------------------------------------------------------------------
# Tolerant parsing of stored identifiers
# ---------------------------------------------------------------------------

def parse_primary_type(raw: Any) -> PrimaryType:
    """Parse a stored type id; anything unrecognised yields the default."""
    try:
        return PrimaryType(raw)
    except (ValueError, TypeError):
        logger.info("Unrecognised terrain type id %r; using %s", raw, DEFAULT_PRIMARY_TYPE.value)
        return DEFAULT_PRIMARY_TYPE


def parse_modifier(raw: Any) -> Modifier:
    """Parse a stored modifier id; None, empty or unknown yields ``none``."""
    if raw is None or raw == "":
        return DEFAULT_MODIFIER
    try:
        return Modifier(raw)
    except (ValueError, TypeError):
        logger.info("Unrecognised terrain modifier %r; using %s", raw, DEFAULT_MODIFIER.value)
        return DEFAULT_MODIFIER
