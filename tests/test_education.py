from __future__ import annotations

import pytest

from lifesim.core import config
from lifesim.education.programs import (
    can_enroll,
    enroll_in_program,
    get_program,
    pay_education_cost,
    process_education_year,
)

from conftest import ScriptedRng, make_engine


@pytest.mark.parametrize("age,level", [(5, "Primary"), (13, "Secondary"), (17, "High School")])
def test_school_milestones(state, age: int, level: str) -> None:
    state.age = age
    state.education.level = "None"
    process_education_year(state, ScriptedRng())
    assert state.education.level == level
    assert state.history[-1].category == config.HISTORY_PRIMARY


def test_enrollment_rules(state) -> None:
    bachelor = get_program("prelaw_bachelor")
    master = get_program("engineering_master")
    assert can_enroll(state, bachelor)
    assert not can_enroll(state, master)

    assert enroll_in_program(state, "prelaw_bachelor").success
    assert state.education.program_name == "B.A. Pre-Law"
    assert not enroll_in_program(state, "engineering_bachelor").success
    assert not enroll_in_program(state, "astrology_phd").success


def test_shortfall_becomes_student_debt(state) -> None:
    state.finances.cash = 1000
    pay_education_cost(state, 5000)
    assert state.finances.cash == 0
    assert state.finances.debt == 4000
    assert state.education.student_debt == 4000


def test_final_year_graduates(state) -> None:
    enroll_in_program(state, "prelaw_bachelor")
    state.education.program_years_completed = 3

    process_education_year(state, ScriptedRng(0.99))

    edu = state.education
    assert edu.level == "Bachelor"
    assert edu.major == "Pre-Law"
    assert not edu.in_program
    assert edu.gpa == pytest.approx(2.45)
    assert state.finances.debt == 16000
    assert state.history[-1].text == "You graduated with B.A. Pre-Law."


def test_low_gpa_can_end_in_dismissal(state) -> None:
    enroll_in_program(state, "prelaw_bachelor")
    state.education.gpa = 1.0
    process_education_year(state, ScriptedRng(0.0))
    assert not state.education.in_program
    assert state.education.level == "High School"
    assert "dismissed" in state.history[-1].text


def _law_graduate():
    engine = make_engine(ScriptedRng(0.1))
    edu = engine.state.education
    edu.level = "Doctorate"
    edu.major = "Law"
    edu.gpa = 3.5
    engine.state.stats.smarts = 90
    engine.state.stats.willpower = 80
    engine.state.finances.cash = 10000
    return engine


def test_passing_the_bar_ends_retakes() -> None:
    engine = _law_graduate()

    result = engine.perform_action("take_bar_exam")

    assert result.success
    assert engine.state.flags["license_bar"] is True
    assert engine.state.finances.cash == 10000 - config.BAR_EXAM_COST
    assert "take_bar_exam" not in [a.id for a in engine.available_actions()]


def test_failed_bar_can_be_retaken_next_year() -> None:
    engine = _law_graduate()
    engine.rng = ScriptedRng(0.95)

    engine.perform_action("take_bar_exam")
    assert "license_bar" not in engine.state.flags
    assert "take_bar_exam" not in [a.id for a in engine.available_actions()]

    engine.state.year += 1
    assert "take_bar_exam" in [a.id for a in engine.available_actions()]


def test_study_hard_only_at_school() -> None:
    engine = make_engine()
    engine.state.age = 10
    assert "study_hard" not in [a.id for a in engine.available_actions()]
    engine.perform_action("go_to_school")
    assert engine.perform_action("study_hard").success
    assert engine.state.education.study_effort == 1
