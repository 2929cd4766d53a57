"""Shared test fixtures for Terrain scoring tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Allow running tests without `pip install -e .` by making `src/` importable.
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_SRC_DIR = _PROJECT_ROOT / "src"
if str(_SRC_DIR) not in sys.path:
    sys.path.insert(0, str(_SRC_DIR))

from terrain.domains.constitution.catalog.loader import (  # noqa: E402
    default_pulse_catalog,
    default_question_catalog,
)
from terrain.domains.constitution.catalog.models import (  # noqa: E402
    PulseCatalog,
    QuestionCatalog,
    QuizOption,
    QuizQuestion,
)
from terrain.domains.constitution.domain_logic.drift_detector import (  # noqa: E402
    TerrainDriftDetector,
)
from terrain.domains.constitution.domain_logic.scoring_engine import (  # noqa: E402
    TerrainScoringEngine,
)
from terrain.domains.constitution.domain_logic.taxonomy import Goal, QuizFlag  # noqa: E402
from terrain.domains.constitution.domain_logic.terrain_models import TerrainDelta  # noqa: E402


# ---------------------------------------------------------------------------
# Test hermeticity
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _force_hermetic_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUESTION_CATALOG_PATH", "")
    monkeypatch.setenv("PULSE_CATALOG_PATH", "")


# ---------------------------------------------------------------------------
# Catalog helpers
# ---------------------------------------------------------------------------

def make_question(
    id: str,
    options: dict[str, TerrainDelta],
    *,
    weight: float = 1.0,
    goal: Goal | None = None,
    flags: dict[str, set[QuizFlag]] | None = None,
) -> QuizQuestion:
    """Build a quiz question from an ``{option_id: delta}`` mapping."""
    flags = flags or {}
    return QuizQuestion(
        id=id,
        title=f"Test question {id}",
        options=tuple(
            QuizOption(
                id=option_id,
                label=option_id.replace("_", " "),
                delta=delta,
                flags=frozenset(flags.get(option_id, set())),
            )
            for option_id, delta in options.items()
        ),
        weight=weight,
        goal_requirement=goal,
    )


@pytest.fixture
def question_factory():
    """Expose make_question to test modules."""
    return make_question


@pytest.fixture
def question_catalog() -> QuestionCatalog:
    """The packaged 12-question quiz."""
    return default_question_catalog()


@pytest.fixture
def pulse_catalog() -> PulseCatalog:
    """The packaged 5-question pulse check-in."""
    return default_pulse_catalog()


@pytest.fixture
def gated_catalog() -> QuestionCatalog:
    """Small catalog with one ungated and two goal-gated questions."""
    return QuestionCatalog([
        make_question("temp", {"cold": TerrainDelta(cold_heat=-4), "hot": TerrainDelta(cold_heat=4)}),
        make_question(
            "sleep_depth",
            {"light": TerrainDelta(shen_unsettled=3), "deep": TerrainDelta()},
            goal=Goal.SLEEP,
        ),
        make_question(
            "skin_feel",
            {"dry": TerrainDelta(damp_dry=3), "oily": TerrainDelta(damp_dry=-3)},
            goal=Goal.SKIN,
        ),
    ])


@pytest.fixture
def engine(question_catalog: QuestionCatalog) -> TerrainScoringEngine:
    """Scoring engine over the packaged quiz."""
    return TerrainScoringEngine(question_catalog)


@pytest.fixture
def detector(pulse_catalog: PulseCatalog, engine: TerrainScoringEngine) -> TerrainDriftDetector:
    """Drift detector over the packaged pulse check-in."""
    return TerrainDriftDetector(pulse_catalog, engine)
