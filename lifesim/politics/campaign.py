"""Running for office: candidacy, campaign funds, win odds and election day."""

from __future__ import annotations

from dataclasses import dataclass

from numpy.random import Generator

from lifesim.core.config import (
    ENDORSEMENT_CAP,
    ENDORSEMENT_VALUE,
    HISTORY_PRIMARY,
    INDEPENDENT,
    INDEPENDENT_BASE_SUPPORT,
    LOBBY_CORRUPTION_BASE,
    LOBBY_CORRUPTION_PER,
    PARTY_BASE_SUPPORT,
    POLITICAL_MAJOR,
    POLITICS_FIELD,
    RALLY_COST,
    RIGGED_BONUS,
    RIGGED_CORRUPTION,
    WIN_APPROVAL_WEIGHT,
    WIN_BASE,
    WIN_CHANCE_MAX,
    WIN_CHANCE_MIN,
    WIN_ENDORSEMENT_WEIGHT,
    WIN_FUNDING_WEIGHT,
    WIN_INCUMBENT_BONUS,
    WIN_LOW_APPROVAL,
    WIN_LOW_APPROVAL_PENALTY,
    WIN_MAJOR_BONUS,
    WIN_NOISE,
    WIN_PARTY_WEIGHT,
    WIN_SCANDAL_PENALTY,
    WIN_STAT_WEIGHT,
)
from lifesim.core.state import WorldState, clamp
from lifesim.politics.catalog import PoliticalCatalog, is_eligible_for_position
from lifesim.simulation.actions import ActionResult


@dataclass
class ElectionResult:
    won: bool
    win_probability: float
    message: str


def declare_candidacy(state: WorldState, catalog: PoliticalCatalog, position_id: str) -> ActionResult:
    position = catalog.get_position(position_id)
    if position is None:
        return ActionResult(False, f"Unknown position: {position_id}", None)
    if not is_eligible_for_position(state, position):
        return ActionResult(False, f"You do not meet the requirements for {position.title}.", None)

    pol = state.politics
    if pol.campaign_active:
        return ActionResult(False, "You are already running for office.", None)
    if state.finances.cash < position.filing_fee:
        return ActionResult(False, f"You need ${position.filing_fee:,} to file.", None)

    state.finances.cash -= position.filing_fee
    pol.campaign_active = True
    pol.target_position = position_id
    pol.campaign_budget = 0
    pol.endorsements = []
    pol.debates_won = 0
    pol.rallies_held = 0
    pol.has_run_for_office = True
    return ActionResult(
        True,
        f"You officially declared your candidacy for {position.title}!",
        HISTORY_PRIMARY,
    )


def fund_campaign(state: WorldState, amount: int) -> ActionResult:
    pol = state.politics
    if not pol.campaign_active:
        return ActionResult(False, "No active campaign.", None)
    if state.finances.cash < amount:
        return ActionResult(False, "Insufficient personal funds.", None)

    state.finances.cash -= amount
    pol.campaign_budget += amount
    pol.campaign_funds += amount
    return ActionResult(True, f"You transferred ${amount:,} to your campaign.")


def hold_rally(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    if not pol.campaign_active:
        return ActionResult(False, "No active campaign.", None)
    if pol.campaign_funds < RALLY_COST:
        return ActionResult(False, "Insufficient campaign funds.", None)

    pol.campaign_funds -= RALLY_COST
    pol.rallies_held += 1
    boost = int(rng.integers(1, 6))
    pol.approval_rating = clamp(pol.approval_rating + boost)
    return ActionResult(True, f"The rally was a success! Approval +{boost}.")


def accept_lobbyist_donation(state: WorldState, amount: int) -> ActionResult:
    corruption_gain = amount // LOBBY_CORRUPTION_PER + LOBBY_CORRUPTION_BASE
    pol = state.politics
    pol.campaign_funds += amount
    pol.corruption_level = clamp(pol.corruption_level + corruption_gain)
    return ActionResult(
        True,
        f"Campaign received ${amount:,} from industry donors. Corruption +{corruption_gain}.",
    )


def calculate_win_probability(
    state: WorldState,
    catalog: PoliticalCatalog,
    position_id: str,
    rng: Generator,
    rigged: bool = False,
) -> float:
    """Chance of winning ``position_id``. Rigging adds corruption as a side effect."""
    position = catalog.get_position(position_id)
    if position is None:
        return 0.0
    pol = state.politics

    opponent_budget = position.base_campaign_cost * (0.6 + rng.random() * 0.8)
    funding_advantage = min(1.0, pol.campaign_funds / max(1.0, opponent_budget))
    party_support = (
        PARTY_BASE_SUPPORT if pol.party and pol.party != INDEPENDENT
        else INDEPENDENT_BASE_SUPPORT
    )
    endorsement_bonus = min(ENDORSEMENT_CAP, len(pol.endorsements) * ENDORSEMENT_VALUE)
    stat_composite = (state.stats.smarts + state.stats.looks + state.stats.willpower) / 3
    incumbent_bonus = WIN_INCUMBENT_BONUS if pol.current_position == position_id else 0.0
    major_bonus = WIN_MAJOR_BONUS if state.education.major == POLITICAL_MAJOR else 0.0

    chance = (
        WIN_BASE
        + pol.approval_rating / 100 * WIN_APPROVAL_WEIGHT
        + funding_advantage * WIN_FUNDING_WEIGHT
        + party_support / 100 * WIN_PARTY_WEIGHT
        + endorsement_bonus * WIN_ENDORSEMENT_WEIGHT
        + stat_composite / 100 * WIN_STAT_WEIGHT
        + incumbent_bonus
        + major_bonus
        + (rng.random() * 2 * WIN_NOISE - WIN_NOISE)
    )

    if pol.scandals_exposed > 0:
        chance -= WIN_SCANDAL_PENALTY
    if rigged:
        chance += RIGGED_BONUS
        pol.corruption_level = clamp(pol.corruption_level + RIGGED_CORRUPTION)
    if pol.approval_rating < WIN_LOW_APPROVAL:
        chance -= WIN_LOW_APPROVAL_PENALTY

    return max(WIN_CHANCE_MIN, min(WIN_CHANCE_MAX, chance))


def resolve_election(
    state: WorldState,
    catalog: PoliticalCatalog,
    rng: Generator,
    rigged: bool = False,
) -> ElectionResult:
    pol = state.politics
    if not pol.campaign_active or not pol.target_position:
        return ElectionResult(False, 0.0, "No active campaign to resolve.")
    position = catalog.get_position(pol.target_position)
    if position is None:
        return ElectionResult(False, 0.0, f"Unknown position: {pol.target_position}")

    win_probability = calculate_win_probability(state, catalog, position.id, rng, rigged)
    won = rng.random() < win_probability

    pol.campaign_active = False
    pol.campaign_budget = 0
    pol.campaign_funds = max(0, pol.campaign_funds - position.base_campaign_cost)

    if not won:
        pol.has_lost_election = True
        state.stats.happiness = clamp(state.stats.happiness - 10)
        return ElectionResult(
            False,
            win_probability,
            f"You lost the election for {position.title}. Better luck next time.",
        )

    pol.current_position = position.id
    pol.position_title = position.title
    pol.position_level = position.level
    pol.years_in_office = 0
    pol.terms_served += 1
    pol.active = True
    pol.approval_rating = int(rng.integers(55, 65))
    pol.influence = clamp(pol.influence + 10)
    pol.party_loyalty = clamp(pol.party_loyalty + 10)
    pol.is_term_limited = position.term_limit > 0 and pol.terms_served >= position.term_limit

    state.career.field = POLITICS_FIELD
    state.career.title = position.title
    # Office replaces the job's field, so a wrestling deal cannot survive it
    state.wrestling_contract = None
    if position.level >= 2:
        # Full-time office replaces any day job salary
        state.finances.salary = position.salary
    else:
        state.finances.salary = max(state.finances.salary, position.salary)

    return ElectionResult(
        True,
        win_probability,
        f"You won the election and are now {position.title}! Approval starts at {pol.approval_rating}%.",
    )
