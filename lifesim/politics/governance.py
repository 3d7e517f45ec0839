"""What an office holder can do: speeches, policy, patronage and the slide toward autocracy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from numpy.random import Generator

from lifesim.core import bus as signals
from lifesim.core.config import (
    COUP_CHANCE_CAP,
    COUP_MIN_CRAZINESS,
    COUP_MIN_LEVEL,
    COUP_MIN_MILITARY,
    HISTORY_PRIMARY,
    POLITICS_FIELD,
    REVOLUTION_CHANCE_MAX,
    REVOLUTION_LEVEL,
    SUPREME_LEADER_ID,
    SUPREME_LEADER_SALARY,
    SUPREME_LEADER_TITLE,
)
from lifesim.core.bus import EventBus
from lifesim.core.state import WorldState, clamp
from lifesim.politics.campaign import accept_lobbyist_donation
from lifesim.politics.catalog import PoliticalCatalog, available_policies
from lifesim.simulation.actions import ActionResult


@dataclass
class CoupResult:
    success: bool
    message: str


def give_public_address(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    if rng.random() < state.stats.smarts / 100:
        boost = int(rng.integers(2, 6))
        pol.approval_rating = clamp(pol.approval_rating + boost)
        return ActionResult(True, f"Your speech resonated with the public. Approval +{boost}.")
    pol.approval_rating = clamp(pol.approval_rating - 3)
    return ActionResult(True, "You stumbled over your words. The press had a field day. Approval -3.")


def meet_constituents(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    boost = int(rng.integers(1, 4))
    pol.approval_rating = clamp(pol.approval_rating + boost)
    pol.influence = clamp(pol.influence + 2)
    return ActionResult(True, f"You connected with voters. Approval +{boost}, Influence +2.")


def accept_lobbyist_meeting(state: WorldState, rng: Generator) -> ActionResult:
    return accept_lobbyist_donation(state, int(rng.integers(10000, 60000)))


def appoint_ally(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.party_loyalty = clamp(pol.party_loyalty + 5)
    if rng.random() < 0.15:
        pol.corruption_level = clamp(pol.corruption_level + 8)
        return ActionResult(True, "Your ally was appointed, but critics cried cronyism. Corruption +8.")
    return ActionResult(True, "Your ally is now in office. Party Loyalty +5.")


def veto_bill(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.vetoes += 1
    cheered = rng.random() < 0.5
    pol.approval_rating = clamp(pol.approval_rating + (2 if cheered else -3))
    reaction = "Base supporters cheered." if cheered else "Opposition is furious."
    return ActionResult(True, f"You vetoed the bill. {reaction}")


def investigate_opponent(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    if rng.random() < 0.5:
        pol.influence = clamp(pol.influence + 8)
        return ActionResult(True, "Investigators found damaging info on your rival. Influence +8.")
    pol.corruption_level = clamp(pol.corruption_level + 10)
    pol.approval_rating = clamp(pol.approval_rating - 8)
    return ActionResult(
        True,
        "The investigation backfired and the press leaked your involvement. Corruption +10, Approval -8.",
    )


def declare_state_of_emergency(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.authoritarian_score = clamp(pol.authoritarian_score + 15)
    pol.has_declared_martial_law = True
    rallied = rng.random() < 0.4
    pol.approval_rating = clamp(pol.approval_rating + (5 if rallied else -10))
    reaction = "Some rallied behind you." if rallied else "Civil liberties groups are outraged."
    return ActionResult(
        True,
        f"State of Emergency declared. Authoritarian Score +15. {reaction}",
        HISTORY_PRIMARY,
    )


def control_media(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.media_control = clamp(pol.media_control + 20)
    pol.authoritarian_score = clamp(pol.authoritarian_score + 10)
    pol.approval_rating = clamp(pol.approval_rating - 8)
    state.stats.karma = clamp(state.stats.karma - 10)
    return ActionResult(True, "State media now amplifies your message. Media Control +20, Authoritarian Score +10.")


def purge_rivals(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.opposition_strength = clamp(pol.opposition_strength - 20)
    pol.authoritarian_score = clamp(pol.authoritarian_score + 10)
    pol.military_control = clamp(pol.military_control + 5)
    state.stats.karma = clamp(state.stats.karma - 15)
    return ActionResult(
        True,
        "Your rivals have been removed from power. Opposition -20, Authoritarian Score +10.",
        HISTORY_PRIMARY,
    )


def consolidate_military(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.military_control = clamp(pol.military_control + 20)
    pol.authoritarian_score = clamp(pol.authoritarian_score + 5)
    state.stats.karma = clamp(state.stats.karma - 5)
    return ActionResult(True, "Loyal generals now command the armed forces. Military Control +20.")


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

def enact_policy(
    state: WorldState,
    catalog: PoliticalCatalog,
    policy_id: str,
    bus: Optional[EventBus] = None,
) -> ActionResult:
    pol = state.politics
    if not pol.active:
        return ActionResult(False, "You must be in office to enact policy.", None)
    policy = catalog.get_policy(policy_id)
    if policy is None:
        return ActionResult(False, f"Unknown policy: {policy_id}", None)
    if policy not in available_policies(state, catalog):
        return ActionResult(False, "This policy is not available to you right now.", None)

    pol.policies_enacted.append(policy.id)
    pol.legislative_record += 1
    pol.approval_rating = clamp(pol.approval_rating + policy.net_approval_effect)
    state.stats.karma = clamp(state.stats.karma + policy.karma_effect)
    if policy.media_control_effect:
        pol.media_control = clamp(pol.media_control + policy.media_control_effect)
    if policy.military_control_effect:
        pol.military_control = clamp(pol.military_control + policy.military_control_effect)
    if policy.authoritarian_effect:
        pol.authoritarian_score = clamp(pol.authoritarian_score + policy.authoritarian_effect)
    if policy.corruption_effect:
        pol.corruption_level = clamp(pol.corruption_level + policy.corruption_effect)

    if bus is not None:
        bus.emit(signals.STAT_CHANGED, {"stat": "approval_rating", "value": pol.approval_rating})

    return ActionResult(
        True,
        f"{policy.name} enacted. Approval {policy.net_approval_effect:+d}.",
        HISTORY_PRIMARY,
    )


# ---------------------------------------------------------------------------
# Regime change
# ---------------------------------------------------------------------------

def can_stage_coup(state: WorldState) -> bool:
    pol = state.politics
    return pol.position_level >= COUP_MIN_LEVEL and (
        pol.military_control >= COUP_MIN_MILITARY or state.stats.craziness >= COUP_MIN_CRAZINESS
    )


def stage_coup(state: WorldState, rng: Generator) -> CoupResult:
    pol = state.politics
    if pol.position_level < COUP_MIN_LEVEL:
        return CoupResult(False, "You need to hold at least a state-level office to stage a coup.")
    if not can_stage_coup(state):
        return CoupResult(False, "You lack the military backing or sheer audacity for a coup.")

    # Noise is drawn before the success roll
    chance = (
        pol.military_control / 100 * 0.5
        + (1 - pol.opposition_strength / 100) * 0.3
        + rng.random() * 0.2
    )
    if rng.random() < min(COUP_CHANCE_CAP, chance):
        pol.current_position = SUPREME_LEADER_ID
        pol.position_title = SUPREME_LEADER_TITLE
        pol.position_level = 5
        pol.authoritarian_score = 100
        pol.government_type = "dictatorship"
        pol.has_staged_coup = True
        pol.active = True
        pol.years_in_office = 0
        pol.opposition_strength = clamp(pol.opposition_strength - 40)
        state.stats.karma = clamp(state.stats.karma - 30)
        state.finances.salary = SUPREME_LEADER_SALARY
        state.career.field = POLITICS_FIELD
        state.career.title = SUPREME_LEADER_TITLE
        state.wrestling_contract = None
        return CoupResult(True, "The coup succeeded! You seized absolute power. You are now Supreme Leader.")

    pol.active = False
    pol.current_position = None
    pol.position_title = None
    pol.position_level = 0
    if rng.random() > 0.5:
        state.flags["imprisoned"] = True
        state.flags["political_career_ended"] = True
    else:
        state.is_alive = False
        state.death_cause = "Executed after failed coup attempt"
    return CoupResult(False, "The coup failed. Loyalists arrested you, and your political career is over, or worse.")


def calculate_revolution_chance(state: WorldState) -> float:
    pol = state.politics
    if pol.position_level < REVOLUTION_LEVEL:
        return 0.0
    chance = (
        (100 - pol.approval_rating) / 100 * 0.2
        + pol.opposition_strength / 100 * 0.3
        - pol.military_control / 100 * 0.25
        - pol.media_control / 100 * 0.1
    )
    return max(0.0, min(REVOLUTION_CHANCE_MAX, chance))
