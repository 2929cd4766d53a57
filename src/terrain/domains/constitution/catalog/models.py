"""Data models for the quiz and pulse check-in question catalogs.

Catalogs are immutable snapshots: they are built once (usually from the
packaged YAML) and passed by reference into the scoring engine and drift
detector.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from terrain.domains.constitution.domain_logic.taxonomy import Goal, QuizFlag
from terrain.domains.constitution.domain_logic.terrain_models import (
    AXIS_NAMES,
    TerrainDelta,
)


class CatalogError(ValueError):
    """Raised when catalog data is malformed."""


# ---------------------------------------------------------------------------
# Full quiz
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuizOption:
    id: str
    label: str
    delta: TerrainDelta = field(default_factory=TerrainDelta)
    flags: frozenset[QuizFlag] = frozenset()


@dataclass(frozen=True)
class QuizQuestion:
    """A single-select quiz question.

    ``weight`` scales every option delta; ``goal_requirement`` gates the
    question so it is only asked when the user picked that goal.
    """

    id: str
    title: str
    options: tuple[QuizOption, ...]
    weight: float = 1.0
    goal_requirement: Goal | None = None

    def option(self, option_id: str) -> QuizOption | None:
        for opt in self.options:
            if opt.id == option_id:
                return opt
        return None


class QuestionCatalog:
    """Ordered, read-only lookup table of quiz questions."""

    def __init__(self, questions: Iterable[QuizQuestion]) -> None:
        self._questions: tuple[QuizQuestion, ...] = tuple(questions)
        self._by_id: dict[str, QuizQuestion] = {}
        for question in self._questions:
            if question.id in self._by_id:
                raise CatalogError(f"Duplicate question id: {question.id!r}")
            option_ids = [o.id for o in question.options]
            if len(option_ids) != len(set(option_ids)):
                raise CatalogError(f"Duplicate option id in question {question.id!r}")
            self._by_id[question.id] = question

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    @property
    def questions(self) -> tuple[QuizQuestion, ...]:
        return self._questions

    def get(self, question_id: str) -> QuizQuestion | None:
        return self._by_id.get(question_id)

    def find_option(self, question_id: str, option_id: str) -> tuple[QuizQuestion, QuizOption] | None:
        """Resolve a (question, option) pair, or None if either id is unknown."""
        question = self._by_id.get(question_id)
        if question is None:
            return None
        option = question.option(option_id)
        if option is None:
            return None
        return question, option

    def questions_for_goals(self, goals: Iterable[Goal]) -> list[QuizQuestion]:
        """Ungated questions plus those gated on one of ``goals``, in catalog order."""
        selected = set(goals)
        return [
            q for q in self._questions
            if q.goal_requirement is None or q.goal_requirement in selected
        ]


# ---------------------------------------------------------------------------
# Pulse check-in
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PulseOption:
    id: int
    text: str
    value: int  # written directly onto the question's axis


@dataclass(frozen=True)
class PulseQuestion:
    id: int
    text: str
    axis: str
    options: tuple[PulseOption, ...]

    def __post_init__(self) -> None:
        if self.axis not in AXIS_NAMES:
            raise CatalogError(f"Pulse question {self.id} has unknown axis {self.axis!r}")


class PulseCatalog:
    """The short single-answer-per-axis check-in used for drift detection."""

    def __init__(self, questions: Iterable[PulseQuestion]) -> None:
        self._questions: tuple[PulseQuestion, ...] = tuple(questions)
        self._by_id: dict[int, PulseQuestion] = {}
        for question in self._questions:
            if question.id in self._by_id:
                raise CatalogError(f"Duplicate pulse question id: {question.id!r}")
            self._by_id[question.id] = question

    def __len__(self) -> int:
        return len(self._questions)

    def __iter__(self):
        return iter(self._questions)

    @property
    def questions(self) -> tuple[PulseQuestion, ...]:
        return self._questions

    def get(self, question_id: int) -> PulseQuestion | None:
        return self._by_id.get(question_id)

    def axis_for(self, question_id: int) -> str | None:
        question = self._by_id.get(question_id)
        return question.axis if question else None
