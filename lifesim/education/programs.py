"""Schooling milestones, degree programs, tuition and the bar exam."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from numpy.random import Generator

from lifesim.core.config import (
    BAR_EXAM_COST,
    BAR_PASS_MAX,
    BAR_PASS_MIN,
    BAR_SCORE_PIVOT,
    BAR_SCORE_SCALE,
    COMPULSORY_SCHOOL_MAX_AGE,
    DISMISSAL_CHANCE,
    DISMISSAL_GPA,
    GPA_DELTA_MAX,
    GPA_DELTA_MIN,
    GPA_EFFORT_WEIGHT,
    GPA_MAX,
    GPA_TARGET,
    HISTORY_PRIMARY,
    SCHOLARSHIP_CHANCE_MAX,
    SCHOLARSHIP_EFFORT_BONUS,
    SCHOLARSHIP_MIN_SHARE,
    SCHOLARSHIP_SHARE_SPREAD,
    SCHOLARSHIP_SMARTS_PIVOT,
    SCHOOL,
    SCHOOL_MILESTONES,
    SCHOOL_START_AGE,
)
from lifesim.core.state import WorldState, add_history, clamp, has_education
from lifesim.simulation.actions import EDUCATION, Action, ActionRegistry, ActionResult


@dataclass(frozen=True)
class DegreeProgram:
    id: str
    name: str
    major_awarded: str
    level_awarded: str
    years_required: int
    annual_tuition: int
    min_age: int
    requires_level: str


PROGRAMS: tuple[DegreeProgram, ...] = (
    DegreeProgram("prelaw_bachelor", "B.A. Pre-Law", "Pre-Law", "Bachelor", 4, 16000, 18, "High School"),
    DegreeProgram("engineering_bachelor", "B.Sc. Engineering", "Engineering", "Bachelor", 4, 18000, 18, "High School"),
    DegreeProgram("engineering_master", "M.Eng.", "Engineering", "Master", 2, 24000, 22, "Bachelor"),
    DegreeProgram("law_jd", "Juris Doctor (J.D.)", "Law", "Doctorate", 3, 34000, 21, "Bachelor"),
)


def get_program(program_id: Optional[str]) -> Optional[DegreeProgram]:
    for program in PROGRAMS:
        if program.id == program_id:
            return program
    return None


def pay_education_cost(state: WorldState, amount: int) -> None:
    """Pay from cash; any shortfall becomes (student) debt."""
    if amount <= 0:
        return
    if state.finances.cash >= amount:
        state.finances.cash -= amount
        return
    shortfall = amount - state.finances.cash
    state.finances.cash = 0
    state.finances.debt += shortfall
    state.education.student_debt += shortfall


def _leave_program(state: WorldState) -> None:
    edu = state.education
    edu.in_program = False
    edu.program_id = None
    edu.program_name = None
    edu.program_years_completed = 0


def can_enroll(state: WorldState, program: DegreeProgram) -> bool:
    return (
        not state.education.in_program
        and state.age >= program.min_age
        and has_education(state, program.requires_level)
        and not has_education(state, program.level_awarded)
    )


def enroll_in_program(state: WorldState, program_id: str) -> ActionResult:
    program = get_program(program_id)
    if program is None:
        return ActionResult(False, f"Unknown program: {program_id}", None)
    if not can_enroll(state, program):
        return ActionResult(False, f"You cannot enroll in {program.name}.", None)

    edu = state.education
    edu.in_program = True
    edu.program_id = program.id
    edu.program_name = program.name
    edu.program_years_completed = 0
    edu.study_effort = 0
    return ActionResult(True, f"You enrolled in {program.name}.", HISTORY_PRIMARY)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def _can_study(state: WorldState) -> bool:
    return state.age >= SCHOOL_START_AGE and (
        state.age <= COMPULSORY_SCHOOL_MAX_AGE or state.education.in_program
    )


def _study_hard(state: WorldState, rng: Generator) -> ActionResult:
    state.education.study_effort += 1
    state.stats.smarts = clamp(state.stats.smarts + int(rng.integers(2, 7)))
    state.stats.willpower = clamp(state.stats.willpower + 1)
    state.stats.happiness = clamp(state.stats.happiness - 1)
    return ActionResult(True, "You studied hard.")


def _can_take_bar(state: WorldState) -> bool:
    return (
        has_education(state, "Doctorate")
        and state.education.major == "Law"
        and state.flags.get("license_bar") is not True
        and state.flags.get("bar_exam_last_attempt_year") != state.year
    )


def take_bar_exam(state: WorldState, rng: Generator) -> ActionResult:
    pay_education_cost(state, BAR_EXAM_COST)

    score = state.stats.smarts * 0.5 + state.stats.willpower * 0.3 + state.education.gpa * 12
    pass_chance = max(
        BAR_PASS_MIN,
        min(BAR_PASS_MAX, (score - BAR_SCORE_PIVOT) / BAR_SCORE_SCALE),
    )
    state.flags["bar_exam_last_attempt_year"] = state.year

    if rng.random() < pass_chance:
        state.flags["license_bar"] = True
        return ActionResult(True, "You passed the bar exam and became a licensed attorney.", HISTORY_PRIMARY)
    return ActionResult(True, "You failed the bar exam. You can attempt it again next year.", HISTORY_PRIMARY)


def _enroll_action(program: DegreeProgram) -> Action:
    return Action(
        id=f"enroll_{program.id}",
        name=f"Enroll: {program.name}",
        category=EDUCATION,
        time_cost=1,
        perform=lambda state, rng: enroll_in_program(state, program.id),
        is_available=lambda state: can_enroll(state, program),
    )


def education_actions() -> list[Action]:
    actions = [
        Action(
            id="study_hard",
            name="Study Hard",
            category=EDUCATION,
            time_cost=2,
            perform=_study_hard,
            location=SCHOOL,
            is_available=_can_study,
        ),
    ]
    actions.extend(_enroll_action(p) for p in PROGRAMS)
    actions.append(Action(
        id="take_bar_exam",
        name="Take Bar Exam",
        category=EDUCATION,
        time_cost=2,
        perform=take_bar_exam,
        is_available=_can_take_bar,
    ))
    return actions


def install_education_actions(registry: ActionRegistry) -> None:
    registry.register_many(education_actions())


# ---------------------------------------------------------------------------
# Annual tick
# ---------------------------------------------------------------------------

def process_education_year(state: WorldState, rng: Generator) -> None:
    edu = state.education

    for age, level, text in SCHOOL_MILESTONES:
        if state.age == age and not has_education(state, level):
            edu.level = level
            add_history(state, text, HISTORY_PRIMARY)

    if edu.in_program:
        program = get_program(edu.program_id)
        if program is None:
            _leave_program(state)
            edu.study_effort = 0
            return

        tuition = program.annual_tuition
        scholarship_chance = max(0.0, min(
            SCHOLARSHIP_CHANCE_MAX,
            (state.stats.smarts - SCHOLARSHIP_SMARTS_PIVOT) / 100
            + edu.study_effort * SCHOLARSHIP_EFFORT_BONUS,
        ))
        if rng.random() < scholarship_chance:
            share = SCHOLARSHIP_MIN_SHARE + rng.random() * SCHOLARSHIP_SHARE_SPREAD
            scholarship = int(program.annual_tuition * share)
            tuition = max(0, tuition - scholarship)
            edu.scholarships += scholarship
            add_history(state, f"You received a scholarship of ${scholarship:,}.")

        pay_education_cost(state, tuition)

        gpa_boost = state.stats.smarts / 100 + edu.study_effort * GPA_EFFORT_WEIGHT
        gpa_delta = max(GPA_DELTA_MIN, min(GPA_DELTA_MAX, (gpa_boost - GPA_TARGET) * 0.5))
        edu.gpa = max(0.0, min(GPA_MAX, round(edu.gpa + gpa_delta, 2)))

        if edu.gpa < DISMISSAL_GPA and rng.random() < DISMISSAL_CHANCE:
            _leave_program(state)
            edu.study_effort = 0
            add_history(state, "You were academically dismissed from your degree program.", HISTORY_PRIMARY)
            return

        edu.program_years_completed += 1
        if edu.program_years_completed >= program.years_required:
            edu.level = program.level_awarded
            edu.major = program.major_awarded
            _leave_program(state)
            add_history(state, f"You graduated with {program.name}.", HISTORY_PRIMARY)

    edu.study_effort = 0
