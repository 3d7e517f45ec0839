"""The yearly political tick."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from numpy.random import Generator

from lifesim.core.config import (
    ANNUAL_APPROVAL_DECAY,
    CHARISMA_HIGH,
    CHARISMA_LOW,
    CHARISMA_SWING,
    HISTORY_PRIMARY,
    IMPEACHMENT_CHANCE,
    IMPEACHMENT_CORRUPTION,
    IMPEACHMENT_RISK_THRESHOLD,
    IMPEACHMENT_SCANDALS,
    POLICY_BONUS_CAP,
    REVOLUTION_LEVEL,
    STRONG_ECONOMY_ROLL,
    WEAK_ECONOMY_ROLL,
)
from lifesim.core.state import WorldState, add_history, clamp
from lifesim.politics.catalog import PoliticalCatalog, ScandalDefinition
from lifesim.politics.governance import calculate_revolution_chance
from lifesim.politics.scandals import apply_scandal, check_for_scandal


@dataclass
class PoliticalYearReport:
    """What happened this year; the engine turns it into bus events."""

    processed: bool = False
    approval_delta: int = 0
    scandal: Optional[ScandalDefinition] = None
    impeached: bool = False
    revolution_threat: bool = False


def _approval_drift(state: WorldState, rng: Generator) -> int:
    delta = -ANNUAL_APPROVAL_DECAY
    if state.stats.looks > CHARISMA_HIGH:
        delta += CHARISMA_SWING
    if state.stats.looks < CHARISMA_LOW:
        delta -= CHARISMA_SWING

    economy = rng.random()
    if economy > STRONG_ECONOMY_ROLL:
        delta += int(rng.integers(3, 9))
    elif economy < WEAK_ECONOMY_ROLL:
        delta -= int(rng.integers(5, 16))

    delta += min(POLICY_BONUS_CAP, len(state.politics.policies_enacted))
    return delta


def _impeach(state: WorldState) -> None:
    pol = state.politics
    pol.has_been_impeached = True
    pol.active = False
    pol.current_position = None
    pol.position_title = None
    pol.position_level = 0
    state.finances.salary = 0
    state.career.title = None
    add_history(state, "You were impeached and removed from office in disgrace.", HISTORY_PRIMARY)


def process_political_year(state: WorldState, catalog: PoliticalCatalog, rng: Generator) -> PoliticalYearReport:
    pol = state.politics
    report = PoliticalYearReport()

    if pol.active or pol.has_run_for_office:
        pol.total_political_years += 1
    if not pol.active:
        return report

    report.processed = True
    pol.years_in_office += 1

    report.approval_delta = _approval_drift(state, rng)
    pol.approval_rating = clamp(pol.approval_rating + report.approval_delta)

    position = catalog.get_position(pol.current_position)
    if position is not None and position.term_limit > 0 and pol.terms_served >= position.term_limit:
        pol.is_term_limited = True

    scandal = check_for_scandal(state, catalog, rng)
    if scandal is not None:
        apply_scandal(state, scandal)
        report.scandal = scandal

    if pol.scandals_exposed >= IMPEACHMENT_SCANDALS or pol.corruption_level > IMPEACHMENT_CORRUPTION:
        pol.impeachment_risk = clamp(pol.impeachment_risk + pol.corruption_level // 10)
        if (
            pol.impeachment_risk > IMPEACHMENT_RISK_THRESHOLD
            and rng.random() < IMPEACHMENT_CHANCE
            and pol.government_type == "democracy"
        ):
            _impeach(state)
            report.impeached = True
            return report

    if pol.position_level >= REVOLUTION_LEVEL and rng.random() < calculate_revolution_chance(state):
        report.revolution_threat = True

    return report
