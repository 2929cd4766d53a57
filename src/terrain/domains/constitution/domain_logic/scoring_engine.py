"""Deterministic terrain scoring: quiz responses -> vector -> type + modifier.

Each response resolves to an option delta from the injected question
catalog. Deltas are folded into a fresh vector (clamped after every step),
and the final vector is classified by the pure functions below. The same
functions back the drift detector, so a pulse check-in and the full quiz
can never disagree on how a vector is read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, NamedTuple

from terrain.domains.constitution.catalog.models import QuestionCatalog
from terrain.domains.constitution.domain_logic.taxonomy import (
    MODIFIER_DISPLAY_NAMES,
    MODIFIER_PRIORITY,
    PRIMARY_TYPE_DISPLAY,
    PRIMARY_TYPE_TABLE,
    ColdHeat,
    DefExcess,
    Modifier,
    PrimaryType,
    QuizFlag,
    full_display_label,
)
from terrain.domains.constitution.domain_logic.terrain_models import (
    COLD_HEAT_COLD,
    COLD_HEAT_WARM,
    DAMP_DRY_DAMP,
    DAMP_DRY_DRY,
    DEF_EXCESS_DEFICIENT,
    DEF_EXCESS_EXCESS,
    QI_STAGNATION_HIGH,
    SHEN_UNSETTLED_HIGH,
    TerrainVector,
)

logger = logging.getLogger(__name__)


class QuizResponse(NamedTuple):
    """One answered quiz question."""

    question_id: str
    option_id: str


@dataclass(frozen=True)
class ScoringResult:
    """Outcome of a scoring pass.

    ``vector`` is a private copy taken at classification time, so later
    changes to the caller's vector cannot contradict ``primary_type``.
    """

    vector: TerrainVector
    primary_type: PrimaryType
    modifier: Modifier
    flags: frozenset[QuizFlag] = frozenset()

    # TerrainVector is mutable, so results compare by value but are unhashable.
    __hash__ = None

    @property
    def terrain_profile_id(self) -> str:
        return self.primary_type.terrain_profile_id

    def to_dict(self) -> dict[str, Any]:
        display = PRIMARY_TYPE_DISPLAY[self.primary_type]
        return {
            "terrain_profile_id": self.terrain_profile_id,
            "primary_type": self.primary_type.value,
            "label": display.label,
            "nickname": display.nickname,
            "modifier": self.modifier.value,
            "modifier_display": MODIFIER_DISPLAY_NAMES[self.modifier],
            "display_label": full_display_label(self.primary_type, self.modifier),
            "vector": self.vector.as_dict(),
            "flags": sorted(f.value for f in self.flags),
        }


# ---------------------------------------------------------------------------
# Classification (pure functions)
# ---------------------------------------------------------------------------

def classify_cold_heat(value: int) -> ColdHeat:
    if value <= COLD_HEAT_COLD:
        return ColdHeat.COLD
    if value >= COLD_HEAT_WARM:
        return ColdHeat.WARM
    return ColdHeat.NEUTRAL


def classify_def_excess(value: int) -> DefExcess:
    if value <= DEF_EXCESS_DEFICIENT:
        return DefExcess.DEFICIENT
    if value >= DEF_EXCESS_EXCESS:
        return DefExcess.EXCESS
    return DefExcess.BALANCED


def determine_primary_type(vector: TerrainVector) -> PrimaryType:
    """Look up the primary type from the cold/heat and def/excess bands."""
    key = (classify_cold_heat(vector.cold_heat), classify_def_excess(vector.def_excess))
    return PRIMARY_TYPE_TABLE[key]


def determine_modifier(vector: TerrainVector) -> Modifier:
    """Pick at most one secondary pattern.

    Candidates above threshold are ranked by magnitude (descending); only an
    exact magnitude tie falls back to priority shen > stagnation > damp/dry.
    """
    candidates: list[tuple[Modifier, int]] = []

    if vector.shen_unsettled >= SHEN_UNSETTLED_HIGH:
        candidates.append((Modifier.SHEN, vector.shen_unsettled))

    if vector.qi_stagnation >= QI_STAGNATION_HIGH:
        candidates.append((Modifier.STAGNATION, vector.qi_stagnation))

    # Same axis, opposite signs: at most one of damp/dry qualifies.
    if vector.damp_dry <= DAMP_DRY_DAMP:
        candidates.append((Modifier.DAMP, abs(vector.damp_dry)))
    elif vector.damp_dry >= DAMP_DRY_DRY:
        candidates.append((Modifier.DRY, vector.damp_dry))

    if not candidates:
        return Modifier.NONE

    candidates.sort(key=lambda c: (-c[1], MODIFIER_PRIORITY[c[0]]))
    return candidates[0][0]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class TerrainScoringEngine:
    """Folds quiz responses into a terrain classification.

    The engine holds only a reference to an immutable question catalog, so a
    single instance can be shared across threads.

    Usage::

        engine = TerrainScoringEngine(default_question_catalog())
        result = engine.calculate_terrain([QuizResponse("q1_run_temp", "always_cold")])
        result.terrain_profile_id  # "cold_balanced_cool_core"
    """

    def __init__(self, catalog: QuestionCatalog) -> None:
        assert catalog is not None, "TerrainScoringEngine requires a question catalog"
        self._catalog = catalog

    @property
    def catalog(self) -> QuestionCatalog:
        return self._catalog

    def calculate_terrain(self, responses: Iterable[QuizResponse | tuple[str, str]]) -> ScoringResult:
        """Score a sequence of (question_id, option_id) responses.

        Unknown question or option ids contribute nothing and never raise.
        """
        vector = TerrainVector.zero()
        flags: set[QuizFlag] = set()
        skipped = 0

        for raw in responses:
            response = QuizResponse(*raw)
            match = self._catalog.find_option(response.question_id, response.option_id)
            if match is None:
                skipped += 1
                logger.warning(
                    "Skipping unresolvable quiz response: question=%r option=%r",
                    response.question_id,
                    response.option_id,
                )
                continue

            question, option = match
            delta = option.delta if question.weight == 1.0 else option.delta.weighted(question.weight)
            vector.add(delta)
            flags.update(option.flags)

        result = self.calculate_terrain_from_vector(vector, flags=frozenset(flags))
        logger.debug(
            "Scored terrain %s/%s (skipped %d responses)",
            result.primary_type.value,
            result.modifier.value,
            skipped,
        )
        return result

    def calculate_terrain_from_vector(
        self,
        vector: TerrainVector,
        *,
        flags: frozenset[QuizFlag] = frozenset(),
    ) -> ScoringResult:
        """Classify a vector directly (pulse check-ins, tests)."""
        return ScoringResult(
            vector=vector.copy(),
            primary_type=determine_primary_type(vector),
            modifier=determine_modifier(vector),
            flags=flags,
        )
