"""Hiring, the yearly job cycle and the generic career actions."""

from __future__ import annotations

from numpy.random import Generator

from lifesim.core.config import (
    DEFAULT_GPA,
    FIRING_CHANCE,
    FIRING_PERFORMANCE,
    FOUNDER_CAREER_ID,
    FOUNDER_MIN_SALARY,
    FOUNDER_SETBACK_CHANCE,
    FOUNDER_SETBACK_SHARE,
    HIRE_CHANCE_MAX,
    HIRE_CHANCE_MIN,
    HISTORY_PRIMARY,
    PERFORMANCE_DRIFT,
    PROMOTION_CHANCE,
    PROMOTION_MIN_YEARS,
    PROMOTION_PERFORMANCE,
    PROMOTION_RAISE,
    RAISE_PERFORMANCE,
    STARTING_PERFORMANCE,
    STARTUP_COST,
    STARTUP_MIN_AGE,
    STARTUP_MIN_LEVEL,
)
from lifesim.core.state import WorldState, add_history, clamp, clear_career
from lifesim.career.catalog import CareerCatalog, CareerDefinition, can_apply, career_action
from lifesim.career.wrestling import (
    ensure_wrestling_profile,
    is_wrestling_career,
    process_wrestling_year,
    sign_contract,
)
from lifesim.simulation.actions import Action, ActionResult


def with_article(title: str) -> str:
    return f"{'an' if title[:1].lower() in 'aeiou' else 'a'} {title}"


def hire_chance(state: WorldState, career: CareerDefinition) -> float:
    score = (
        (state.stats.smarts - career.min_smarts) * 0.01
        + (state.stats.willpower - career.min_willpower) * 0.007
        + (state.education.gpa - DEFAULT_GPA) * 0.12
        + 0.5
    )
    return max(HIRE_CHANCE_MIN, min(HIRE_CHANCE_MAX, score - career.difficulty * 0.25))


def apply_for_career(state: WorldState, catalog: CareerCatalog, career_id: str, rng: Generator) -> ActionResult:
    career = catalog.get(career_id)
    if career is None:
        return ActionResult(False, f"Unknown career: {career_id}", None)
    if state.career.id:
        return ActionResult(False, "You already have a job.", None)
    if state.serial_killer.mode == "full_time":
        return ActionResult(False, "A full-time predator cannot hold a day job.", None)
    if not can_apply(state, career):
        return ActionResult(False, f"You do not meet the requirements for {career.title}.", None)

    if rng.random() >= hire_chance(state, career):
        state.career.rejections += 1
        return ActionResult(True, f"Your {career.title} application was rejected.")

    job = state.career
    job.id = career.id
    job.title = career.promotion_titles[0] if career.promotion_titles else career.title
    job.field = career.field
    job.specialization = career.specialization
    job.years_in_role = 0
    job.performance = STARTING_PERFORMANCE
    job.level = 1
    state.finances.salary = career.start_salary

    if not career.is_wrestling:
        state.wrestling_contract = None
        return ActionResult(True, f"You got hired as {with_article(career.title)}.", HISTORY_PRIMARY)

    contract = sign_contract(state, career, rng)
    ensure_wrestling_profile(state, rng)
    profile = state.wrestling
    profile.fan_base = clamp(profile.fan_base + 8)
    profile.momentum = clamp(profile.momentum + 10)
    term = max(1, contract.end_year - state.year)
    return ActionResult(
        True,
        f"You signed a {term}-year deal with {contract.promotion_name} as {career.title}, "
        f'debuting under the ring name "{profile.ring_name}".',
        HISTORY_PRIMARY,
    )


# ---------------------------------------------------------------------------
# Annual tick
# ---------------------------------------------------------------------------

def _process_founder_year(state: WorldState, rng: Generator) -> None:
    job = state.career
    job.years_in_role += 1
    job.total_years_experience += 1
    growth = int((state.stats.smarts + job.performance) * (400 + rng.random() * 500))
    state.finances.salary = max(FOUNDER_MIN_SALARY, int(state.finances.salary + growth * 0.08))
    if rng.random() < FOUNDER_SETBACK_CHANCE:
        setback = int(state.finances.salary * FOUNDER_SETBACK_SHARE)
        state.finances.salary = max(FOUNDER_MIN_SALARY, state.finances.salary - setback)
        add_history(state, f"Your startup had a rough year and profits dropped by ${setback:,}.")


def _promotion_chance(state: WorldState, career: CareerDefinition) -> float:
    job = state.career
    if job.performance < PROMOTION_PERFORMANCE:
        return 0.0
    if job.years_in_role < max(PROMOTION_MIN_YEARS, job.level * 2):
        return 0.0
    if job.level >= len(career.promotion_titles):
        return 0.0
    if not is_wrestling_career(state):
        return PROMOTION_CHANCE

    push = state.wrestling.push
    if (push or 0) < min(85, 42 + job.level * 10):
        return 0.0
    return max(0.35, min(0.9, 0.38 + (35 if push is None else push) / 180))


def process_career_year(state: WorldState, catalog: CareerCatalog, rng: Generator) -> None:
    if not state.career.id:
        return

    career = catalog.get(state.career.id)
    if career is None:
        if state.career.id == FOUNDER_CAREER_ID:
            _process_founder_year(state, rng)
        return

    job = state.career
    job.years_in_role += 1
    job.total_years_experience += 1
    if job.field == "Law":
        job.law_years_experience += 1
        if state.flags.get("license_bar") is True:
            job.licensed_law_years_experience += 1

    if is_wrestling_career(state):
        process_wrestling_year(state, rng)
        # A contract expiry or release ends the job for this year
        if not job.id:
            return

    drift = int(rng.integers(-PERFORMANCE_DRIFT, PERFORMANCE_DRIFT + 1))
    job.performance = clamp(job.performance + drift)

    if job.performance >= RAISE_PERFORMANCE:
        raise_amount = int(state.finances.salary * career.annual_raise)
        if raise_amount > 0:
            state.finances.salary += raise_amount
            add_history(state, f"You received a raise of ${raise_amount:,} as {with_article(job.title)}.")

    chance = _promotion_chance(state, career)
    if chance > 0 and rng.random() < chance:
        job.level += 1
        job.title = career.promotion_titles[job.level - 1]
        state.finances.salary += int(state.finances.salary * PROMOTION_RAISE)
        add_history(state, f"You were promoted to {job.title}.", HISTORY_PRIMARY)

    if job.performance <= FIRING_PERFORMANCE and rng.random() < FIRING_CHANCE:
        add_history(state, f"You were fired from your {job.title} role.", HISTORY_PRIMARY)
        clear_career(state)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def _employed(state: WorldState) -> bool:
    return bool(state.career.id)


def _work_hard(state: WorldState, rng: Generator) -> ActionResult:
    state.career.performance = clamp(state.career.performance + int(rng.integers(6, 16)))
    state.stats.happiness = clamp(state.stats.happiness - 2)
    state.stats.smarts = clamp(state.stats.smarts + 1)
    return ActionResult(True, f"You put in extra work as {with_article(state.career.title)}.")


def _resign(state: WorldState, rng: Generator) -> ActionResult:
    title = state.career.title
    clear_career(state)
    return ActionResult(True, f"You resigned from your role as {title}.", HISTORY_PRIMARY)


def _can_start_startup(state: WorldState) -> bool:
    return (
        _employed(state)
        and state.age >= STARTUP_MIN_AGE
        and state.career.level >= STARTUP_MIN_LEVEL
        and state.career.field == "Engineering"
    )


def _start_startup(state: WorldState, rng: Generator) -> ActionResult:
    job = state.career
    specialization = job.specialization or "General"
    job.id = FOUNDER_CAREER_ID
    job.title = f"Founder, {job.specialization or 'Engineering'} Startup"
    job.field = "Engineering"
    job.specialization = specialization
    job.level = 1
    job.performance = 60
    job.years_in_role = 0
    state.finances.salary = int(50000 + rng.random() * 35000)
    return ActionResult(True, f"You launched your own {specialization.lower()} startup.", HISTORY_PRIMARY)


def job_actions() -> list[Action]:
    return [
        career_action("work_hard", "Work Hard", 3, _employed, _work_hard),
        career_action("resign_job", "Resign Job", 1, _employed, _resign),
        career_action(
            "start_engineering_startup", "Start Engineering Startup", 3,
            _can_start_startup, _start_startup, cost=STARTUP_COST,
        ),
    ]


def apply_actions_provider(catalog: CareerCatalog):
    """One ``apply_<career id>`` action per career the unemployed player qualifies for.

    Full-time predators get none.
    """

    def provide(state: WorldState) -> list[Action]:
        if state.career.id or state.serial_killer.mode == "full_time":
            return []
        return [_apply_action(catalog, career) for career in catalog.eligible(state)]

    return provide


def _apply_action(catalog: CareerCatalog, career: CareerDefinition) -> Action:
    return career_action(
        f"apply_{career.id}",
        f"Apply: {career.title}",
        1,
        lambda state: not state.career.id and can_apply(state, career),
        lambda state, rng: apply_for_career(state, catalog, career.id, rng),
    )
