from __future__ import annotations

import pytest

from lifesim.career.catalog import can_apply, career_action_location
from lifesim.career.jobs import apply_for_career, hire_chance, process_career_year
from lifesim.core import config
from lifesim.simulation.actions import CAREER

from conftest import ScriptedRng, make_engine


def test_requirements(state, office_career) -> None:
    assert can_apply(state, office_career)
    state.stats.smarts = 20
    assert not can_apply(state, office_career)
    state.stats.smarts = 50
    state.education.level = "Secondary"
    assert not can_apply(state, office_career)


def test_law_experience_requirements(state, office_career) -> None:
    office_career.required_majors = ["Law"]
    office_career.required_flags_all = ["license_bar"]
    office_career.required_licensed_law_years = 8
    state.education.major = "Law"
    state.flags["license_bar"] = True
    state.career.licensed_law_years_experience = 7
    assert not can_apply(state, office_career)
    state.career.licensed_law_years_experience = 8
    assert can_apply(state, office_career)


def test_hire_chance_is_bounded(state, office_career) -> None:
    state.stats.smarts = 100
    state.stats.willpower = 100
    state.education.gpa = 4.0
    assert hire_chance(state, office_career) == config.HIRE_CHANCE_MAX
    state.stats.smarts = 0
    state.stats.willpower = 0
    state.education.gpa = 0.0
    assert hire_chance(state, office_career) == config.HIRE_CHANCE_MIN


def test_hired(state, careers) -> None:
    result = apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))

    assert result.success
    assert result.category == config.HISTORY_PRIMARY
    assert state.career.id == "office_clerk"
    assert state.career.title == "Office Clerk"
    assert state.career.level == 1
    assert state.career.performance == config.STARTING_PERFORMANCE
    assert state.finances.salary == 30000


def test_rejected(state, careers) -> None:
    result = apply_for_career(state, careers, "office_clerk", ScriptedRng(0.99))
    assert result.success
    assert "rejected" in result.message
    assert state.career.id is None
    assert state.career.rejections == 1


def test_cannot_hold_two_jobs(state, careers) -> None:
    apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))
    assert not apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0)).success


def test_apply_actions_follow_employment(careers) -> None:
    engine = make_engine(ScriptedRng(0.0), careers=careers)
    assert [a.id for a in engine.available_actions(CAREER) if a.id.startswith("apply_")] == ["apply_office_clerk"]
    assert [c.id for c in engine.eligible_careers()] == ["office_clerk"]

    engine.perform_action("apply_office_clerk")

    assert engine.state.career.id == "office_clerk"
    assert not [a for a in engine.available_actions(CAREER) if a.id.startswith("apply_")]
    assert engine.eligible_careers() == []


@pytest.mark.parametrize(
    "action_id,field,expected",
    [
        ("apply_judge", "Law", None),
        ("wrestling_tryout", None, config.ARENA),
        ("serial_hunt", "Business", None),
        ("unlock_serial_path", "Business", None),
        ("work_hard", "Wrestling", config.ARENA),
        ("work_hard", "Law", config.COURT),
        ("work_hard", "Engineering", config.OFFICE),
        ("work_hard", None, None),
    ],
)
def test_career_action_location(state, action_id: str, field, expected) -> None:
    state.career.field = field
    assert career_action_location(action_id, state) == expected


def test_work_hard_happens_at_the_workplace(careers) -> None:
    engine = make_engine(ScriptedRng(0.0), careers=careers)
    engine.perform_action("apply_office_clerk")
    assert "work_hard" not in [a.id for a in engine.available_actions()]

    engine.perform_action("go_to_office")
    assert engine.perform_action("work_hard").success
    assert engine.state.career.performance == config.STARTING_PERFORMANCE + 6


def _employ(state, careers, performance: int, years_in_role: int = 0) -> None:
    apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))
    state.career.performance = performance
    state.career.years_in_role = years_in_role


def test_good_year_brings_raise_and_promotion(state, careers) -> None:
    _employ(state, careers, performance=90, years_in_role=1)

    process_career_year(state, careers, ScriptedRng(0.5))

    job = state.career
    assert job.level == 2
    assert job.title == "Office Supervisor"
    assert job.total_years_experience == 1
    assert state.finances.salary == 34608


def test_poor_performance_can_get_you_fired(state, careers) -> None:
    _employ(state, careers, performance=20)

    process_career_year(state, careers, ScriptedRng(0.0))

    assert state.career.id is None
    assert state.finances.salary == 0
    assert state.career.total_years_experience == 1
    assert "fired" in state.history[-1].text


def test_law_years_count_license_separately(state, careers, office_career) -> None:
    _employ(state, careers, performance=50)
    state.career.field = "Law"
    process_career_year(state, careers, ScriptedRng(0.5))
    state.flags["license_bar"] = True
    process_career_year(state, careers, ScriptedRng(0.5))

    assert state.career.law_years_experience == 2
    assert state.career.licensed_law_years_experience == 1


def test_founder_path(careers) -> None:
    engine = make_engine(ScriptedRng(0.0), careers=careers)
    state = engine.state
    _employ(state, careers, performance=60)
    state.age = 30
    state.career.field = "Engineering"
    state.career.level = 2
    state.finances.cash = 50000
    engine.perform_action("go_to_office")

    assert engine.perform_action("start_engineering_startup").success
    assert state.career.id == config.FOUNDER_CAREER_ID
    assert state.finances.cash == 50000 - config.STARTUP_COST

    process_career_year(state, careers, ScriptedRng(0.5))
    assert state.career.years_in_role == 1
    assert state.finances.salary >= config.FOUNDER_MIN_SALARY
