"""Scandal exposure and the player's response to it."""

from __future__ import annotations

from typing import Optional

from numpy.random import Generator

from lifesim.core.config import HISTORY_PRIMARY, SCANDAL_CHANCE_MAX, SCANDAL_IMPEACHMENT_RISK
from lifesim.core.state import WorldState, clamp
from lifesim.politics.catalog import PoliticalCatalog, ScandalDefinition
from lifesim.simulation.actions import ActionResult


def calculate_scandal_exposure_chance(state: WorldState) -> float:
    pol = state.politics
    media_freedom = 100 - pol.media_control
    chance = (
        pol.corruption_level / 100 * 0.3
        + media_freedom / 100 * 0.2
        + pol.opposition_strength / 100 * 0.1
        - pol.media_control / 100 * 0.15
    )
    return max(0.0, min(SCANDAL_CHANCE_MAX, chance))


def check_for_scandal(state: WorldState, catalog: PoliticalCatalog, rng: Generator) -> Optional[ScandalDefinition]:
    if not state.politics.active:
        return None
    if rng.random() > calculate_scandal_exposure_chance(state):
        return None
    eligible = [s for s in catalog.scandals if s.corruption_threshold <= state.politics.corruption_level]
    if not eligible:
        return None
    return eligible[int(rng.integers(len(eligible)))]


def apply_scandal(state: WorldState, scandal: ScandalDefinition) -> None:
    """Immediate fallout, before the player responds."""
    pol = state.politics
    pol.scandals_exposed += 1
    pol.approval_rating = clamp(pol.approval_rating + scandal.approval_hit)
    pol.under_investigation = True
    if scandal.triggers_impeachment:
        pol.impeachment_risk = clamp(pol.impeachment_risk + SCANDAL_IMPEACHMENT_RISK)


def _apply_karma_and_power(state: WorldState, choice) -> None:
    if choice.karma_hit:
        state.stats.karma = clamp(state.stats.karma - choice.karma_hit)
    if choice.karma_gain:
        state.stats.karma = clamp(state.stats.karma + choice.karma_gain)
    if choice.authoritarian_gain:
        state.politics.authoritarian_score = clamp(state.politics.authoritarian_score + choice.authoritarian_gain)


def resolve_scandal_choice(
    state: WorldState,
    scandal: ScandalDefinition,
    index: int,
    rng: Generator,
) -> ActionResult:
    if not 0 <= index < len(scandal.choices):
        return ActionResult(False, "Invalid choice.", None)
    choice = scandal.choices[index]
    pol = state.politics

    if choice.approval_hit is not None:
        pol.approval_rating = clamp(pol.approval_rating + choice.approval_hit)
        if choice.corruption_gain:
            pol.corruption_level = clamp(pol.corruption_level + choice.corruption_gain)
        _apply_karma_and_power(state, choice)
        return ActionResult(True, f"You chose: {choice.text}. Fallout contained.", HISTORY_PRIMARY)

    if choice.success_chance is not None:
        success = rng.random() < choice.success_chance
        if success:
            change = choice.success_approval or 0
        else:
            change = -10 if choice.fail_approval is None else choice.fail_approval
        pol.approval_rating = clamp(pol.approval_rating + change)
        if not success and choice.corruption_gain:
            pol.corruption_level = clamp(pol.corruption_level + choice.corruption_gain)
        _apply_karma_and_power(state, choice)
        if success:
            return ActionResult(True, f"Your gamble paid off. {choice.text} worked.", HISTORY_PRIMARY)
        return ActionResult(False, f"Your strategy backfired. Approval {change}.", HISTORY_PRIMARY)

    return ActionResult(False, "Choice has no defined effect.", None)
