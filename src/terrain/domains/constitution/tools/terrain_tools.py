"""MCP tools for terrain scoring and pulse drift detection.

These are thin adapters: argument validation happens here, all scoring is
delegated to the deterministic engine and drift detector.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastmcp import FastMCP

if TYPE_CHECKING:
    from terrain.domains.constitution.catalog.models import PulseCatalog
    from terrain.domains.constitution.domain_logic.drift_detector import TerrainDriftDetector
    from terrain.domains.constitution.domain_logic.scoring_engine import TerrainScoringEngine

from terrain.domains.constitution.domain_logic.scoring_engine import QuizResponse
from terrain.domains.constitution.domain_logic.taxonomy import Goal

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _parse_goals(values: list[str] | None) -> list[Goal]:
    goals = []
    for value in values or []:
        try:
            goals.append(Goal(value))
        except ValueError:
            valid = " | ".join(g.value for g in Goal)
            raise ValueError(f"Unknown goal {value!r}; expected one of: {valid}") from None
    return goals


def _parse_responses(responses: list[dict[str, str]]) -> list[QuizResponse]:
    parsed = []
    for item in responses:
        if "question_id" not in item or "option_id" not in item:
            raise ValueError("Each response needs 'question_id' and 'option_id'")
        parsed.append(QuizResponse(str(item["question_id"]), str(item["option_id"])))
    return parsed


def _parse_pulse_answers(answers: dict[str, int]) -> dict[int, int]:
    parsed = {}
    for key, value in answers.items():
        try:
            parsed[int(key)] = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Pulse answer keys must be question ids (integers), got {key!r}") from None
    return parsed


def register_terrain_tools(
    mcp: FastMCP,
    engine: TerrainScoringEngine,
    detector: TerrainDriftDetector,
    pulse_catalog: PulseCatalog,
) -> None:
    """Register terrain scoring tools on the MCP server."""

    @mcp.tool
    def list_quiz_questions(goals: list[str] | None = None) -> str:
        """List the onboarding quiz questions for the selected goals.

        Args:
            goals: Selected goal ids (sleep, digestion, energy, stress, skin,
                menstrual_comfort). Gated questions appear only for their goal.
        """
        selected = _parse_goals(goals)
        questions = engine.catalog.questions_for_goals(selected)
        return json.dumps({
            "goals": [g.value for g in selected],
            "question_count": len(questions),
            "questions": [
                {
                    "id": q.id,
                    "title": q.title,
                    "goal_requirement": q.goal_requirement.value if q.goal_requirement else None,
                    "options": [{"id": o.id, "label": o.label} for o in q.options],
                }
                for q in questions
            ],
        })

    @mcp.tool
    def calculate_terrain(responses: list[dict[str, str]]) -> str:
        """Score quiz answers into a terrain type and modifier.

        Args:
            responses: Answered questions, each ``{"question_id": ..., "option_id": ...}``.
                Unknown ids are skipped.
        """
        parsed = _parse_responses(responses)
        result = engine.calculate_terrain(parsed)
        logger.info(
            "calculate_terrain: %d responses -> %s/%s",
            len(parsed),
            result.primary_type.value,
            result.modifier.value,
        )
        return json.dumps(result.to_dict())

    @mcp.tool
    def list_pulse_questions() -> str:
        """List the 5-question pulse check-in used for drift detection."""
        return json.dumps({
            "question_count": len(pulse_catalog),
            "questions": [
                {
                    "id": q.id,
                    "text": q.text,
                    "axis": q.axis,
                    "options": [{"id": o.id, "text": o.text, "value": o.value} for o in q.options],
                }
                for q in pulse_catalog
            ],
        })

    @mcp.tool
    def check_terrain_drift(
        answers: dict[str, int],
        current_terrain_id: str,
        current_modifier: str | None = None,
    ) -> str:
        """Compare a pulse check-in against the stored terrain profile.

        Args:
            answers: Pulse question id -> selected option value, e.g. ``{"1": -3, "2": 0}``.
            current_terrain_id: Stored primary type id (e.g. 'cold_deficient_low_flame').
            current_modifier: Stored modifier id ('shen', 'stagnation', 'damp', 'dry', 'none').
        """
        result = detector.detect_drift(
            _parse_pulse_answers(answers),
            current_terrain_id,
            current_modifier,
        )
        logger.info("check_terrain_drift: %s", result.recommendation.value)
        return json.dumps(result.to_dict())
