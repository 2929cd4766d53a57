"""Terrain drift detection from the 5-question pulse check-in.

The pulse answers are written straight onto a short-lived vector (one value
per axis, not accumulated) and classified with the scoring engine, then
compared with the user's stored type and modifier. The stored profile is
never touched; callers decide what to do with the result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from terrain.domains.constitution.catalog.loader import (
    default_pulse_catalog,
    default_question_catalog,
)
from terrain.domains.constitution.catalog.models import PulseCatalog
from terrain.domains.constitution.domain_logic.scoring_engine import TerrainScoringEngine
from terrain.domains.constitution.domain_logic.taxonomy import (
    MODIFIER_DISPLAY_NAMES,
    DriftRecommendation,
    Modifier,
    PrimaryType,
    parse_modifier,
    parse_primary_type,
)
from terrain.domains.constitution.domain_logic.terrain_models import TerrainVector

logger = logging.getLogger(__name__)

SUMMARY_SIGNIFICANT = "Your body may have shifted. Consider retaking the full assessment."
SUMMARY_SECONDARY_CHANGED = "A secondary pattern may have changed."
SUMMARY_STABLE = "Your terrain profile is stable."


@dataclass(frozen=True)
class TerrainDriftResult:
    current_type: PrimaryType
    current_modifier: Modifier
    pulse_type: PrimaryType
    pulse_modifier: Modifier
    has_drifted: bool
    drift_summary: str
    recommendation: DriftRecommendation

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_type": self.current_type.value,
            "current_modifier": self.current_modifier.value,
            "pulse_type": self.pulse_type.value,
            "pulse_modifier": self.pulse_modifier.value,
            "has_drifted": self.has_drifted,
            "drift_summary": self.drift_summary,
            "recommendation": self.recommendation.value,
        }


class TerrainDriftDetector:
    """Compares a pulse check-in against a stored terrain classification."""

    def __init__(
        self,
        pulse_catalog: PulseCatalog | None = None,
        engine: TerrainScoringEngine | None = None,
    ) -> None:
        self._pulse_catalog = pulse_catalog if pulse_catalog is not None else default_pulse_catalog()
        self._engine = engine if engine is not None else TerrainScoringEngine(default_question_catalog())

    def build_pulse_vector(self, answers: Mapping[int, int]) -> TerrainVector:
        """Write each answered pulse question's value onto its axis.

        Answers for ids outside the pulse catalog are ignored; unanswered
        axes stay at 0.
        """
        axis_values: dict[str, int] = {}
        for question in self._pulse_catalog:
            if question.id in answers:
                axis_values[question.axis] = answers[question.id]
        return TerrainVector.from_axis_values(axis_values)

    def detect_drift(
        self,
        answers: Mapping[int, int],
        current_terrain_id: str | None,
        current_modifier: str | None = None,
    ) -> TerrainDriftResult:
        """Classify the pulse answers and diff them against the stored profile.

        Args:
            answers: Pulse question id -> selected option value.
            current_terrain_id: Stored PrimaryType identifier. Unknown or
                malformed ids fall back to neutral-balanced.
            current_modifier: Stored Modifier identifier; None, empty or
                unknown means ``none``.
        """
        pulse = self._engine.calculate_terrain_from_vector(self.build_pulse_vector(answers))

        current_type = parse_primary_type(current_terrain_id)
        current_mod = parse_modifier(current_modifier)

        type_changed = pulse.primary_type is not current_type
        modifier_changed = pulse.modifier is not current_mod

        if type_changed:
            recommendation = DriftRecommendation.SIGNIFICANT_DRIFT
            summary = SUMMARY_SIGNIFICANT
        elif modifier_changed:
            recommendation = DriftRecommendation.MINOR_SHIFT
            modifier_name = MODIFIER_DISPLAY_NAMES[pulse.modifier]
            summary = (
                f"Your {modifier_name} pattern may have changed."
                if modifier_name
                else SUMMARY_SECONDARY_CHANGED
            )
        else:
            recommendation = DriftRecommendation.NO_CHANGE
            summary = SUMMARY_STABLE

        logger.debug(
            "Pulse drift check: %s/%s -> %s/%s (%s)",
            current_type.value,
            current_mod.value,
            pulse.primary_type.value,
            pulse.modifier.value,
            recommendation.value,
        )

        return TerrainDriftResult(
            current_type=current_type,
            current_modifier=current_mod,
            pulse_type=pulse.primary_type,
            pulse_modifier=pulse.modifier,
            has_drifted=type_changed or modifier_changed,
            drift_summary=summary,
            recommendation=recommendation,
        )
