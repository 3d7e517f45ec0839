"""Political actions for the registry. Every one of them happens at the Office."""

from __future__ import annotations

from typing import Callable

from numpy.random import Generator

from lifesim.core.config import (
    CAMPAIGN_CONTRIBUTION,
    HISTORY_PRIMARY,
    HISTORY_SECONDARY,
    INDEPENDENT,
    OFFICE,
    PARTIES,
    RALLY_COST,
    RIG_MIN_CORRUPTION,
)
from lifesim.core.state import WorldState, clamp
from lifesim.politics.campaign import declare_candidacy, fund_campaign, hold_rally, resolve_election
from lifesim.politics.catalog import (
    PoliticalCatalog,
    PoliticalPosition,
    PolicyDefinition,
    available_policies,
    eligible_positions,
    is_eligible_for_position,
)
from lifesim.politics.governance import (
    accept_lobbyist_meeting,
    appoint_ally,
    can_stage_coup,
    consolidate_military,
    control_media,
    declare_state_of_emergency,
    enact_policy,
    give_public_address,
    investigate_opponent,
    meet_constituents,
    purge_rivals,
    stage_coup,
    veto_bill,
)
from lifesim.simulation.actions import POLITICS, Action, ActionRegistry, ActionResult


def political_action(
    id: str,
    name: str,
    time_cost: int,
    is_available: Callable[[WorldState], bool],
    perform: Callable[[WorldState, Generator], ActionResult],
) -> Action:
    return Action(
        id=id,
        name=name,
        category=POLITICS,
        time_cost=time_cost,
        perform=perform,
        location=OFFICE,
        is_available=is_available,
    )


def _in_office(min_level: int = 0, min_authoritarian: int = 0):
    def check(state: WorldState) -> bool:
        pol = state.politics
        return pol.active and pol.position_level >= min_level and pol.authoritarian_score >= min_authoritarian

    return check


def _out_of_office(state: WorldState) -> bool:
    return not state.politics.active and not state.flags.get("political_career_ended")


# ---------------------------------------------------------------------------
# Before office
# ---------------------------------------------------------------------------

def join_political_party(state: WorldState, rng: Generator) -> ActionResult:
    pol = state.politics
    pol.party = PARTIES[int(rng.integers(len(PARTIES)))]
    pol.party_loyalty = 50
    return ActionResult(True, f"You joined the {pol.party} party!", HISTORY_PRIMARY)


def run_independent(state: WorldState, rng: Generator) -> ActionResult:
    state.politics.party = INDEPENDENT
    state.politics.ideology = INDEPENDENT
    return ActionResult(True, "You registered as an independent candidate.", HISTORY_PRIMARY)


def _gain_experience(state: WorldState, influence: int) -> None:
    state.politics.total_political_years += 1
    state.politics.influence = clamp(state.politics.influence + influence)


def volunteer_campaign(state: WorldState, rng: Generator) -> ActionResult:
    _gain_experience(state, 3)
    return ActionResult(True, "You volunteered for a political campaign. Experience +1 year.")


def intern_city_hall(state: WorldState, rng: Generator) -> ActionResult:
    _gain_experience(state, 5)
    state.stats.smarts = clamp(state.stats.smarts + 2)
    return ActionResult(True, "You interned at City Hall. Political experience +1 year.")


def community_organizing(state: WorldState, rng: Generator) -> ActionResult:
    _gain_experience(state, 4)
    state.stats.karma = clamp(state.stats.karma + 5)
    return ActionResult(True, "You organized your community. Influence +4, Karma +5.")


def pre_office_actions() -> list[Action]:
    no_party = lambda s: not s.politics.party  # noqa: E731
    return [
        political_action(
            "join_political_party", "Join a Political Party", 1,
            lambda s: _out_of_office(s) and s.age >= 16 and no_party(s), join_political_party,
        ),
        political_action(
            "run_independent", "Run as Independent", 1,
            lambda s: _out_of_office(s) and s.age >= 18 and no_party(s), run_independent,
        ),
        political_action(
            "volunteer_campaign", "Volunteer for a Campaign", 2,
            lambda s: _out_of_office(s) and s.age >= 16, volunteer_campaign,
        ),
        political_action(
            "intern_city_hall", "Intern at City Hall", 3,
            lambda s: _out_of_office(s) and 16 <= s.age <= 25, intern_city_hall,
        ),
        political_action(
            "community_organizing", "Community Organizing", 2,
            lambda s: _out_of_office(s) and s.age >= 18, community_organizing,
        ),
    ]


# ---------------------------------------------------------------------------
# In office
# ---------------------------------------------------------------------------

def _coup(state: WorldState, rng: Generator) -> ActionResult:
    result = stage_coup(state, rng)
    # Success or not, a coup attempt is a defining moment
    return ActionResult(True, result.message, HISTORY_PRIMARY)


def governance_actions() -> list[Action]:
    return [
        political_action("give_public_address", "Give Public Address", 1, _in_office(), give_public_address),
        political_action("meet_constituents", "Meet Constituents", 2, _in_office(), meet_constituents),
        political_action("accept_lobbyist_meeting", "Meet with Lobbyists", 1, _in_office(), accept_lobbyist_meeting),
        political_action("appoint_ally", "Appoint an Ally", 1, _in_office(), appoint_ally),
        political_action("veto_bill", "Veto a Bill", 1, _in_office(2), veto_bill),
        political_action("investigate_opponent", "Investigate Political Rival", 2, _in_office(), investigate_opponent),
        political_action(
            "declare_state_of_emergency", "Declare State of Emergency", 1, _in_office(4), declare_state_of_emergency,
        ),
        political_action("control_media", "Control the Press", 2, _in_office(4, 30), control_media),
        political_action("purge_rivals", "Purge Political Rivals", 2, _in_office(4, 40), purge_rivals),
        political_action(
            "consolidate_military", "Consolidate Military Control", 2, _in_office(4, 30), consolidate_military,
        ),
        political_action(
            "stage_coup", "Stage a Coup", 2,
            lambda s: s.politics.active and can_stage_coup(s), _coup,
        ),
    ]


def _policy_action(catalog: PoliticalCatalog, policy: PolicyDefinition) -> Action:
    return political_action(
        f"enact_policy_{policy.id}",
        f"Enact Policy: {policy.name}",
        2,
        lambda s: policy in available_policies(s, catalog),
        lambda s, rng: enact_policy(s, catalog, policy.id),
    )


def policy_provider(catalog: PoliticalCatalog):
    def provide(state: WorldState) -> list[Action]:
        return [_policy_action(catalog, p) for p in available_policies(state, catalog)]

    return provide


# ---------------------------------------------------------------------------
# Campaign
# ---------------------------------------------------------------------------

def _candidacy_action(catalog: PoliticalCatalog, position: PoliticalPosition) -> Action:
    return political_action(
        f"declare_candidacy_{position.id}",
        f"Run for {position.title}",
        1,
        lambda s: (
            not s.politics.campaign_active
            and is_eligible_for_position(s, position)
            and s.finances.cash >= position.filing_fee
        ),
        lambda s, rng: declare_candidacy(s, catalog, position.id),
    )


def _election_action(catalog: PoliticalCatalog, rigged: bool = False) -> Action:
    def perform(state: WorldState, rng: Generator) -> ActionResult:
        result = resolve_election(state, catalog, rng, rigged=rigged)
        return ActionResult(True, result.message, HISTORY_PRIMARY if result.won else HISTORY_SECONDARY)

    if rigged:
        return political_action(
            "resolve_election_rigged", "Rig the Election", 1,
            lambda s: s.politics.campaign_active and s.politics.corruption_level >= RIG_MIN_CORRUPTION,
            perform,
        )
    return political_action("resolve_election", "Resolve Election", 1, lambda s: s.politics.campaign_active, perform)


def campaign_provider(catalog: PoliticalCatalog):
    """Candidacies while idle, campaign trail actions while running."""

    def provide(state: WorldState) -> list[Action]:
        if state.flags.get("political_career_ended"):
            return []
        if not state.politics.campaign_active:
            return [_candidacy_action(catalog, p) for p in eligible_positions(state, catalog)]
        actions = [
            political_action(
                "fund_campaign", "Fund Campaign", 1,
                lambda s: s.politics.campaign_active and s.finances.cash >= CAMPAIGN_CONTRIBUTION,
                lambda s, rng: fund_campaign(s, CAMPAIGN_CONTRIBUTION),
            ),
            political_action(
                "hold_rally", "Hold Campaign Rally", 2,
                lambda s: s.politics.campaign_active and s.politics.campaign_funds >= RALLY_COST,
                hold_rally,
            ),
            _election_action(catalog),
        ]
        if state.politics.corruption_level >= RIG_MIN_CORRUPTION:
            actions.append(_election_action(catalog, rigged=True))
        return actions

    return provide


def install_political_actions(registry: ActionRegistry, catalog: PoliticalCatalog) -> None:
    registry.register_many(pre_office_actions())
    registry.register_many(governance_actions())
    registry.register_provider(POLITICS, policy_provider(catalog))
    registry.register_provider(POLITICS, campaign_provider(catalog))
