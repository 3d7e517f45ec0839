from __future__ import annotations

import pytest

from lifesim.core import bus as signals
from lifesim.core import config
from lifesim.politics.annual import process_political_year
from lifesim.politics.campaign import (
    calculate_win_probability,
    declare_candidacy,
    fund_campaign,
    hold_rally,
    resolve_election,
)
from lifesim.politics.catalog import (
    ScandalChoice,
    ScandalDefinition,
    available_policies,
    eligible_positions,
    is_eligible_for_position,
)
from lifesim.politics.governance import calculate_revolution_chance, enact_policy
from lifesim.politics.scandals import apply_scandal, resolve_scandal_choice

from conftest import ScriptedRng, make_engine


def _seat(state, position_id: str = "city_council", level: int = 1) -> None:
    pol = state.politics
    pol.active = True
    pol.current_position = position_id
    pol.position_level = level
    pol.terms_served = 1


def _scandal(**overrides) -> ScandalDefinition:
    values = dict(
        id="expense_fraud",
        title="Expense Fraud",
        severity="moderate",
        approval_hit=-12,
        corruption_threshold=20,
        choices=[
            ScandalChoice("Issue a public apology", approval_hit=-5, karma_gain=5),
            ScandalChoice("Blame a staffer", success_chance=0.5, success_approval=5, corruption_gain=10),
        ],
    )
    values.update(overrides)
    return ScandalDefinition(**values)


# ---------------------------------------------------------------------------
# Campaign
# ---------------------------------------------------------------------------

def test_win_probability_for_an_unknown_independent(state, politics) -> None:
    assert calculate_win_probability(state, politics, "city_council", ScriptedRng(0.5)) == pytest.approx(0.54)
    assert calculate_win_probability(state, politics, "mayor", ScriptedRng(0.5)) == 0.0


def test_rigging_helps_and_corrupts(state, politics) -> None:
    chance = calculate_win_probability(state, politics, "city_council", ScriptedRng(0.5), rigged=True)
    assert chance == pytest.approx(0.54 + config.RIGGED_BONUS)
    assert state.politics.corruption_level == config.RIGGED_CORRUPTION


def test_win_probability_is_clamped(state, politics) -> None:
    state.politics.approval_rating = 0
    state.politics.scandals_exposed = 1
    for stat in ("smarts", "looks", "willpower"):
        setattr(state.stats, stat, 0)
    assert calculate_win_probability(state, politics, "city_council", ScriptedRng(0.0)) == config.WIN_CHANCE_MIN

    state.politics.approval_rating = 100
    state.politics.scandals_exposed = 0
    state.politics.campaign_funds = 1_000_000
    state.politics.party = "centrist"
    state.politics.endorsements = ["union", "paper", "mayor", "sheriff", "church"]
    for stat in ("smarts", "looks", "willpower"):
        setattr(state.stats, stat, 100)
    assert (
        calculate_win_probability(state, politics, "city_council", ScriptedRng(0.99), rigged=True)
        == config.WIN_CHANCE_MAX
    )


def test_candidacy(state, politics) -> None:
    state.age = 25
    state.finances.cash = 1000
    assert declare_candidacy(state, politics, "city_council").success
    assert state.finances.cash == 500
    assert state.politics.campaign_active
    assert state.politics.has_run_for_office
    assert not declare_candidacy(state, politics, "city_council").success


@pytest.mark.parametrize("age,cash", [(20, 1000), (25, 100)])
def test_candidacy_refused(state, politics, age: int, cash: int) -> None:
    state.age = age
    state.finances.cash = cash
    assert not declare_candidacy(state, politics, "city_council").success
    assert state.finances.cash == cash


def test_winning_an_election(state, politics) -> None:
    state.age = 25
    state.finances.cash = 1000
    state.career.field = "Wrestling"
    declare_candidacy(state, politics, "city_council")

    result = resolve_election(state, politics, ScriptedRng(0.0))

    pol = state.politics
    assert result.won
    assert pol.active
    assert pol.current_position == "city_council"
    assert pol.position_level == 1
    assert pol.approval_rating == 55
    assert not pol.campaign_active
    assert state.career.field == config.POLITICS_FIELD
    assert state.wrestling_contract is None
    assert state.finances.salary == 45000


def test_losing_an_election(state, politics) -> None:
    state.age = 25
    state.finances.cash = 1000
    declare_candidacy(state, politics, "city_council")

    result = resolve_election(state, politics, ScriptedRng(0.99))

    assert not result.won
    assert state.politics.has_lost_election
    assert not state.politics.active
    assert state.stats.happiness == config.DEFAULT_HAPPINESS - 10


def test_rallies_need_campaign_funds(state, politics) -> None:
    state.age = 25
    state.finances.cash = 10000
    declare_candidacy(state, politics, "city_council")
    assert not hold_rally(state, ScriptedRng(0.0)).success

    fund_campaign(state, config.CAMPAIGN_CONTRIBUTION)
    assert hold_rally(state, ScriptedRng(0.0)).success
    assert state.politics.campaign_funds == 0
    assert state.politics.approval_rating == config.DEFAULT_APPROVAL + 1


def test_campaign_through_the_office(politics) -> None:
    engine = make_engine(ScriptedRng(0.0), politics=politics)
    engine.state.age = 25
    engine.state.finances.cash = 1000
    assert "declare_candidacy_city_council" not in [a.id for a in engine.available_actions()]

    engine.perform_action("go_to_office")
    assert engine.perform_action("declare_candidacy_city_council").success
    ids = [a.id for a in engine.available_actions()]
    assert "resolve_election" in ids
    assert "hold_rally" not in ids

    engine.perform_action("resolve_election")
    assert engine.state.politics.active
    assert engine.state.history[-1].category == config.HISTORY_PRIMARY


def test_rigging_needs_a_corrupt_machine(politics) -> None:
    engine = make_engine(ScriptedRng(0.0), politics=politics)
    engine.state.age = 25
    engine.state.finances.cash = 1000
    engine.perform_action("go_to_office")
    engine.perform_action("declare_candidacy_city_council")
    assert "resolve_election_rigged" not in [a.id for a in engine.available_actions()]
    assert not engine.perform_action("resolve_election_rigged").success

    engine.state.politics.corruption_level = config.RIG_MIN_CORRUPTION
    assert "resolve_election_rigged" in [a.id for a in engine.available_actions()]

    assert engine.perform_action("resolve_election_rigged").success
    pol = engine.state.politics
    assert pol.active
    assert not pol.campaign_active
    assert pol.corruption_level == config.RIG_MIN_CORRUPTION + config.RIGGED_CORRUPTION


# ---------------------------------------------------------------------------
# Eligibility
# ---------------------------------------------------------------------------

def test_eligible_positions_skip_the_current_seat(state, politics) -> None:
    state.age = 25
    assert [p.id for p in eligible_positions(state, politics)] == ["city_council"]
    _seat(state)
    assert eligible_positions(state, politics) == []


def test_term_limits_block_only_the_held_seat(state, politics) -> None:
    state.age = 35
    state.politics.total_political_years = 4
    _seat(state)
    state.politics.terms_served = 2
    council, governor = politics.positions
    assert not is_eligible_for_position(state, council)
    assert is_eligible_for_position(state, governor)


# ---------------------------------------------------------------------------
# Policy
# ---------------------------------------------------------------------------

def test_policy_prerequisites_and_conflicts(state, politics) -> None:
    assert available_policies(state, politics) == []
    _seat(state)
    ids = [p.id for p in available_policies(state, politics)]
    assert "martial_law_powers" not in ids
    assert "universal_healthcare" in ids and "privatize_healthcare" in ids

    assert enact_policy(state, politics, "universal_healthcare").success
    assert enact_policy(state, politics, "advanced_surveillance").success
    ids = [p.id for p in available_policies(state, politics)]
    assert "privatize_healthcare" not in ids
    assert "universal_healthcare" not in ids
    assert "martial_law_powers" in ids

    pol = state.politics
    assert pol.media_control == 15
    assert pol.authoritarian_score == 10
    assert pol.legislative_record == 2
    assert not enact_policy(state, politics, "privatize_healthcare").success


def test_policy_requires_office(state, politics) -> None:
    assert not enact_policy(state, politics, "school_lunch_program").success


# ---------------------------------------------------------------------------
# Coups
# ---------------------------------------------------------------------------

def _coup_engine(politics, rng, military: int):
    engine = make_engine(rng, politics=politics)
    _seat(engine.state, "governor", 3)
    engine.state.politics.military_control = military
    engine.perform_action("go_to_office")
    return engine


def test_successful_coup(politics) -> None:
    engine = _coup_engine(politics, ScriptedRng(0.0), military=80)

    assert engine.perform_action("stage_coup").success

    pol = engine.state.politics
    assert pol.current_position == config.SUPREME_LEADER_ID
    assert pol.position_level == 5
    assert pol.government_type == "dictatorship"
    assert engine.state.finances.salary == config.SUPREME_LEADER_SALARY


def test_failed_coup_can_mean_prison(politics) -> None:
    engine = _coup_engine(politics, ScriptedRng(0.99), military=50)
    engine.state.politics.opposition_strength = 100

    engine.perform_action("stage_coup")

    assert engine.state.is_alive
    assert engine.state.flags["imprisoned"] is True
    assert not engine.state.politics.active
    assert "stage_coup" not in [a.id for a in engine.available_actions()]


def test_failed_coup_can_mean_execution(politics) -> None:
    engine = _coup_engine(politics, ScriptedRng(0.99, 0.99, 0.1), military=50)
    engine.state.politics.opposition_strength = 100
    deaths = []
    engine.bus.on(signals.DEATH, deaths.append)

    engine.perform_action("stage_coup")

    assert not engine.state.is_alive
    assert engine.state.death_cause == "Executed after failed coup attempt"
    assert deaths == ["Executed after failed coup attempt"]
    assert engine.available_actions() == []


def test_coup_needs_rank(politics) -> None:
    engine = make_engine(ScriptedRng(0.0), politics=politics)
    _seat(engine.state)
    engine.state.stats.craziness = 90
    engine.perform_action("go_to_office")
    assert "stage_coup" not in [a.id for a in engine.available_actions()]


# ---------------------------------------------------------------------------
# Yearly tick
# ---------------------------------------------------------------------------

def test_corrupt_democrat_gets_impeached(state, politics) -> None:
    _seat(state)
    state.politics.corruption_level = 90
    state.politics.impeachment_risk = 70
    state.finances.salary = 45000

    report = process_political_year(state, politics, ScriptedRng(0.0))

    assert report.impeached
    assert state.politics.has_been_impeached
    assert not state.politics.active
    assert state.finances.salary == 0
    assert state.politics.total_political_years == 1


def test_dictators_are_not_impeached(state, politics) -> None:
    _seat(state)
    state.politics.government_type = "dictatorship"
    state.politics.corruption_level = 90
    state.politics.impeachment_risk = 70

    report = process_political_year(state, politics, ScriptedRng(0.0))

    assert not report.impeached
    assert state.politics.active
    assert state.politics.years_in_office == 1


def test_out_of_office_year_only_counts_experience(state, politics) -> None:
    state.politics.has_run_for_office = True
    report = process_political_year(state, politics, ScriptedRng(0.0))
    assert not report.processed
    assert state.politics.total_political_years == 1


def test_revolution_chance(state) -> None:
    pol = state.politics
    pol.approval_rating = 0
    pol.opposition_strength = 100
    pol.position_level = 4
    assert calculate_revolution_chance(state) == 0.0
    pol.position_level = 5
    assert calculate_revolution_chance(state) == pytest.approx(0.5)
    pol.military_control = 100
    assert calculate_revolution_chance(state) == pytest.approx(0.25)


# ---------------------------------------------------------------------------
# Scandals
# ---------------------------------------------------------------------------

def test_scandal_fallout(state) -> None:
    _seat(state)
    apply_scandal(state, _scandal(triggers_impeachment=True))
    pol = state.politics
    assert pol.scandals_exposed == 1
    assert pol.approval_rating == config.DEFAULT_APPROVAL - 12
    assert pol.under_investigation
    assert pol.impeachment_risk == config.SCANDAL_IMPEACHMENT_RISK


def test_deterministic_scandal_response(state) -> None:
    result = resolve_scandal_choice(state, _scandal(), 0, ScriptedRng())
    assert result.success
    assert state.politics.approval_rating == config.DEFAULT_APPROVAL - 5
    assert state.stats.karma == config.DEFAULT_STAT + 5


def test_gambled_scandal_response(state) -> None:
    assert resolve_scandal_choice(state, _scandal(), 1, ScriptedRng(0.0)).success
    assert state.politics.approval_rating == config.DEFAULT_APPROVAL + 5
    assert state.politics.corruption_level == 0

    result = resolve_scandal_choice(state, _scandal(), 1, ScriptedRng(0.99))
    assert not result.success
    assert state.politics.approval_rating == config.DEFAULT_APPROVAL + 5 - 10
    assert state.politics.corruption_level == 10


def test_invalid_scandal_choice(state) -> None:
    assert not resolve_scandal_choice(state, _scandal(), 5, ScriptedRng()).success
