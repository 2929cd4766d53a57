"""Catalog loader: reads quiz and pulse check-in definitions from YAML."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from terrain.domains.constitution.catalog.models import (
    CatalogError,
    PulseCatalog,
    PulseOption,
    PulseQuestion,
    QuestionCatalog,
    QuizOption,
    QuizQuestion,
)
from terrain.domains.constitution.domain_logic.taxonomy import Goal, QuizFlag
from terrain.domains.constitution.domain_logic.terrain_models import (
    AXIS_NAMES,
    TerrainDelta,
)

logger = logging.getLogger(__name__)

# Packaged catalogs live under src/terrain/domains/constitution/catalog/data/
DATA_DIR = Path(__file__).resolve().parent / "data"
QUIZ_CATALOG_PATH = DATA_DIR / "quiz_questions.yaml"
PULSE_CATALOG_PATH = DATA_DIR / "pulse_checkin.yaml"


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise CatalogError(f"Cannot read catalog {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in catalog {path}: {exc}") from exc
    if not isinstance(data, dict) or not isinstance(data.get("questions"), list):
        raise CatalogError(f"Catalog {path} must define a 'questions' list")
    return data


def _parse_delta(raw: dict[str, Any] | None) -> TerrainDelta:
    raw = raw or {}
    unknown = set(raw) - set(AXIS_NAMES)
    if unknown:
        raise CatalogError(f"Unknown axis in delta: {sorted(unknown)!r}")
    return TerrainDelta(**{axis: int(value) for axis, value in raw.items()})


def _parse_quiz_option(data: dict[str, Any]) -> QuizOption:
    try:
        flags = frozenset(QuizFlag(f) for f in data.get("flags", []))
    except ValueError as exc:
        raise CatalogError(f"Option {data.get('id')!r}: {exc}") from exc
    return QuizOption(
        id=str(data["id"]),
        label=str(data.get("label", "")),
        delta=_parse_delta(data.get("delta")),
        flags=flags,
    )


def _parse_quiz_question(data: dict[str, Any]) -> QuizQuestion:
    goal_raw = data.get("goal")
    try:
        goal = Goal(goal_raw) if goal_raw is not None else None
    except ValueError as exc:
        raise CatalogError(f"Question {data.get('id')!r}: {exc}") from exc
    return QuizQuestion(
        id=str(data["id"]),
        title=str(data.get("title", "")).strip(),
        options=tuple(_parse_quiz_option(o) for o in data["options"]),
        weight=float(data.get("weight", 1.0)),
        goal_requirement=goal,
    )


def load_question_catalog(path: str | Path = QUIZ_CATALOG_PATH) -> QuestionCatalog:
    """Parse a quiz YAML file into a QuestionCatalog.

    Raises:
        CatalogError: if the file is missing, unparseable or malformed.
    """
    path = Path(path)
    data = _read_yaml(path)
    try:
        catalog = QuestionCatalog(_parse_quiz_question(q) for q in data["questions"])
    except CatalogError as exc:
        raise CatalogError(f"{path}: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed question in {path}: missing or invalid {exc}") from exc
    logger.info("Loaded quiz catalog: %d questions (v%s) from %s", len(catalog), data.get("version", "?"), path)
    return catalog


def load_pulse_catalog(path: str | Path = PULSE_CATALOG_PATH) -> PulseCatalog:
    """Parse a pulse check-in YAML file into a PulseCatalog."""
    path = Path(path)
    data = _read_yaml(path)
    try:
        catalog = PulseCatalog(
            PulseQuestion(
                id=int(q["id"]),
                text=str(q.get("text", "")).strip(),
                axis=q["axis"],
                options=tuple(
                    PulseOption(id=int(o["id"]), text=str(o.get("text", "")), value=int(o["value"]))
                    for o in q["options"]
                ),
            )
            for q in data["questions"]
        )
    except CatalogError as exc:
        raise CatalogError(f"{path}: {exc}") from exc
    except (KeyError, TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed pulse question in {path}: missing or invalid {exc}") from exc
    logger.info("Loaded pulse catalog: %d questions (v%s) from %s", len(catalog), data.get("version", "?"), path)
    return catalog


@lru_cache(maxsize=1)
def default_question_catalog() -> QuestionCatalog:
    """The packaged quiz catalog, loaded once per process."""
    return load_question_catalog(QUIZ_CATALOG_PATH)


@lru_cache(maxsize=1)
def default_pulse_catalog() -> PulseCatalog:
    """The packaged pulse catalog, loaded once per process."""
    return load_pulse_catalog(PULSE_CATALOG_PATH)
