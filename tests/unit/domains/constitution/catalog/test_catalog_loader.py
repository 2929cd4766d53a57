"""Tests for catalog models and the YAML catalog loader."""

from __future__ import annotations

import pytest

from terrain.domains.constitution.catalog.loader import (
    default_pulse_catalog,
    default_question_catalog,
    load_pulse_catalog,
    load_question_catalog,
)
from terrain.domains.constitution.catalog.models import (
    CatalogError,
    PulseOption,
    PulseQuestion,
    QuestionCatalog,
)
from terrain.domains.constitution.domain_logic.taxonomy import Goal, QuizFlag
from terrain.domains.constitution.domain_logic.terrain_models import AXIS_NAMES, TerrainDelta


# ===========================================================================
# Packaged catalogs
# ===========================================================================

class TestPackagedQuiz:
    def test_twelve_questions_in_order(self, question_catalog):
        ids = [q.id for q in question_catalog]
        assert len(ids) == 12
        assert ids[0] == "q1_run_temp"
        assert ids[-1] == "q12_sleep"

    def test_every_question_has_five_options(self, question_catalog):
        assert all(len(q.options) == 5 for q in question_catalog)

    def test_only_cravings_is_weighted(self, question_catalog):
        weighted = {q.id: q.weight for q in question_catalog if q.weight != 1.0}
        assert weighted == {"q8_cravings": 0.6}

    def test_deltas_parsed(self, question_catalog):
        _, option = question_catalog.find_option("q5_stress_response", "gets_hot_irritable")
        assert option.delta == TerrainDelta(cold_heat=2, def_excess=1, qi_stagnation=2)

    def test_omitted_delta_is_zero(self, question_catalog):
        _, option = question_catalog.find_option("q1_run_temp", "neutral")
        assert option.delta == TerrainDelta()

    def test_flags_parsed(self, question_catalog):
        _, option = question_catalog.find_option("q3_sweat_night", "wake_thirsty_hot")
        assert option.flags == {QuizFlag.WAKE_THIRSTY_HOT}

    def test_every_flag_is_reachable(self, question_catalog):
        reachable = {f for q in question_catalog for o in q.options for f in o.flags}
        assert reachable == set(QuizFlag)

    def test_packaged_quiz_is_ungated(self, question_catalog):
        assert question_catalog.questions_for_goals([]) == list(question_catalog.questions)

    def test_default_is_cached(self):
        assert default_question_catalog() is default_question_catalog()


class TestPackagedPulse:
    def test_one_question_per_axis(self, pulse_catalog):
        assert [q.id for q in pulse_catalog] == [1, 2, 3, 4, 5]
        assert [q.axis for q in pulse_catalog] == AXIS_NAMES

    def test_option_values(self, pulse_catalog):
        assert [o.value for o in pulse_catalog.get(1).options] == [-3, 0, 3]
        assert [o.value for o in pulse_catalog.get(5).options] == [0, 2, 4]

    def test_axis_for(self, pulse_catalog):
        assert pulse_catalog.axis_for(3) == "damp_dry"
        assert pulse_catalog.axis_for(99) is None

    def test_default_is_cached(self):
        assert default_pulse_catalog() is default_pulse_catalog()


# ===========================================================================
# Catalog model behaviour
# ===========================================================================

class TestQuestionCatalog:
    def test_lookup_misses_return_none(self, question_catalog):
        assert question_catalog.get("nope") is None
        assert question_catalog.find_option("nope", "x") is None
        assert question_catalog.find_option("q1_run_temp", "x") is None

    def test_duplicate_question_id_rejected(self, question_factory):
        q = question_factory("dup", {"a": TerrainDelta()})
        with pytest.raises(CatalogError, match="Duplicate question id"):
            QuestionCatalog([q, q])

    def test_duplicate_option_id_rejected(self, question_factory):
        q = question_factory("q", {"a": TerrainDelta()})
        bad = type(q)(id="q2", title="", options=q.options + q.options)
        with pytest.raises(CatalogError, match="Duplicate option id"):
            QuestionCatalog([bad])


class TestQuestionsForGoals:
    def test_no_goals_returns_ungated_only(self, gated_catalog):
        assert [q.id for q in gated_catalog.questions_for_goals([])] == ["temp"]

    def test_matching_goal_includes_gated(self, gated_catalog):
        ids = [q.id for q in gated_catalog.questions_for_goals([Goal.SLEEP])]
        assert ids == ["temp", "sleep_depth"]

    def test_multiple_goals_keep_catalog_order(self, gated_catalog):
        ids = [q.id for q in gated_catalog.questions_for_goals({Goal.SKIN, Goal.SLEEP})]
        assert ids == ["temp", "sleep_depth", "skin_feel"]

    def test_unrelated_goal_excludes_gated(self, gated_catalog):
        ids = [q.id for q in gated_catalog.questions_for_goals([Goal.ENERGY])]
        assert ids == ["temp"]


class TestPulseQuestion:
    def test_unknown_axis_rejected(self):
        with pytest.raises(CatalogError, match="unknown axis"):
            PulseQuestion(id=1, text="?", axis="yin_yang", options=(PulseOption(1, "x", 0),))


# ===========================================================================
# Loading from disk
# ===========================================================================

class TestLoadQuestionCatalog:
    def test_loads_goal_gated_question(self, tmp_path):
        path = tmp_path / "quiz.yaml"
        path.write_text(
            """
questions:
  - id: q_cycle
    title: Cycle comfort
    goal: menstrual_comfort
    weight: 0.5
    options:
      - {id: crampy, label: Crampy, delta: {qi_stagnation: 4}, flags: [reflux]}
      - {id: fine, label: Fine}
""",
            encoding="utf-8",
        )
        catalog = load_question_catalog(path)
        question = catalog.get("q_cycle")
        assert question.goal_requirement is Goal.MENSTRUAL_COMFORT
        assert question.weight == 0.5
        assert question.option("crampy").delta.qi_stagnation == 4

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read catalog"):
            load_question_catalog(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("questions: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid YAML"):
            load_question_catalog(path)

    def test_missing_questions_list(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("version: '1'\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="'questions' list"):
            load_question_catalog(path)

    def test_unknown_flag(self, tmp_path):
        path = tmp_path / "quiz.yaml"
        path.write_text(
            "questions:\n  - id: q\n    options:\n      - {id: a, flags: [hiccups]}\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError, match="hiccups"):
            load_question_catalog(path)

    def test_unknown_axis(self, tmp_path):
        path = tmp_path / "quiz.yaml"
        path.write_text(
            "questions:\n  - id: q\n    options:\n      - {id: a, delta: {yin: 2}}\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError, match="Unknown axis"):
            load_question_catalog(path)

    def test_unknown_goal(self, tmp_path):
        path = tmp_path / "quiz.yaml"
        path.write_text(
            "questions:\n  - id: q\n    goal: flying\n    options:\n      - {id: a}\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError, match="flying"):
            load_question_catalog(path)

    def test_missing_options(self, tmp_path):
        path = tmp_path / "quiz.yaml"
        path.write_text("questions:\n  - id: q\n", encoding="utf-8")
        with pytest.raises(CatalogError, match="Malformed question"):
            load_question_catalog(path)


class TestLoadPulseCatalog:
    def test_loads_custom_file(self, tmp_path):
        path = tmp_path / "pulse.yaml"
        path.write_text(
            "questions:\n  - id: 7\n    text: Warmth?\n    axis: cold_heat\n"
            "    options:\n      - {id: 1, text: Hot, value: 5}\n",
            encoding="utf-8",
        )
        catalog = load_pulse_catalog(path)
        assert catalog.axis_for(7) == "cold_heat"
        assert catalog.get(7).options[0].value == 5

    def test_bad_axis_names_file(self, tmp_path):
        path = tmp_path / "pulse.yaml"
        path.write_text(
            "questions:\n  - id: 1\n    axis: nope\n    options: []\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError, match="pulse.yaml"):
            load_pulse_catalog(path)

    def test_non_integer_value(self, tmp_path):
        path = tmp_path / "pulse.yaml"
        path.write_text(
            "questions:\n  - id: 1\n    axis: damp_dry\n    options:\n      - {id: 1, value: lots}\n",
            encoding="utf-8",
        )
        with pytest.raises(CatalogError, match="Malformed pulse question"):
            load_pulse_catalog(path)
