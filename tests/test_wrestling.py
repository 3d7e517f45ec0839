from __future__ import annotations

import pytest

from lifesim.career.catalog import can_apply
from lifesim.career.jobs import apply_for_career, process_career_year
from lifesim.career.wrestling import (
    infer_promotion_id,
    is_backstage_role,
    maybe_generate_rival_offer,
    process_wrestling_year,
    style_risk_multiplier,
)
from lifesim.core import config

from conftest import ScriptedRng, make_engine


def _sign(state, careers):
    state.stats.athleticism = 80
    result = apply_for_career(state, careers, "aew_tag_wrestler", ScriptedRng(0.0))
    assert result.success
    return state.wrestling_contract


def test_signing_creates_contract_persona_and_locker_room(state, careers) -> None:
    contract = _sign(state, careers)

    assert contract.promotion_id == "aew"
    assert contract.promotion_name == "AEW"
    assert contract.end_year == state.year + config.WRESTLING_CONTRACT_YEARS
    assert state.wrestling.ring_name == config.RING_NAMES[0]
    assert state.wrestling.alignment == "face"
    locker_room = [n for n in state.relationships if config.WRESTLING_TRAIT in n.traits]
    assert len(locker_room) == config.WRESTLING_CONTACTS
    assert all(n.promotion_id == "aew" and n.location == config.ARENA for n in locker_room)


def test_tryout_invitation_lowers_the_bar(state, wrestling_career) -> None:
    state.stats.athleticism = 50
    assert not can_apply(state, wrestling_career)
    state.wrestling.tryout_invited = True
    assert can_apply(state, wrestling_career)


@pytest.mark.parametrize(
    "specialization,expected",
    [("Deathmatch", 1.8), ("Lucha Libre", 1.35), ("Strong Style", 1.45), ("Tag Team", 0.92), ("Technical", 1.0)],
)
def test_style_risk(state, specialization: str, expected: float) -> None:
    state.career.specialization = specialization
    assert style_risk_multiplier(state) == expected


def test_promotion_inference(wrestling_career) -> None:
    assert infer_promotion_id(wrestling_career) == "aew"
    wrestling_career.id = "wrestling_booker"
    assert infer_promotion_id(wrestling_career) == "backstage"
    wrestling_career.id = "local_grappler"
    assert infer_promotion_id(wrestling_career) == "regional"


def test_backstage_roles(state) -> None:
    state.career.title = "Wrestling Booker"
    assert is_backstage_role(state)
    state.career.title = "Tag Team Wrestler"
    assert not is_backstage_role(state)


def test_contract_expiry_ends_the_job(state, careers) -> None:
    contract = _sign(state, careers)
    state.year = contract.end_year

    process_career_year(state, careers, ScriptedRng(0.99))

    assert state.career.id is None
    assert state.wrestling_contract is None
    assert state.finances.salary == 0
    assert "free agent" in state.history[-1].text


def test_injured_wrestler_sits_out_the_year(state, careers) -> None:
    _sign(state, careers)
    state.wrestling.injury_years = 1
    cash = state.finances.cash

    process_wrestling_year(state, ScriptedRng(0.99))

    assert state.wrestling.injury_years == 0
    assert state.finances.cash == cash
    assert "recovering" in state.history[-1].text


def test_rival_offer_can_be_accepted(careers) -> None:
    engine = make_engine(ScriptedRng(0.0), careers=careers)
    _sign(engine.state, careers)
    maybe_generate_rival_offer(engine.state, ScriptedRng(0.0))
    offer = engine.state.wrestling_contract.rival_offer
    assert offer is not None
    assert offer.promotion_id != "aew"

    engine.perform_action("go_to_arena")
    assert engine.perform_action("wrestling_accept_rival_offer").success
    assert engine.state.wrestling_contract.promotion_id == offer.promotion_id
    assert engine.state.wrestling_contract.rival_offer is None
    assert offer.promotion_name in engine.state.history[-1].text


def test_in_ring_actions_need_the_arena(careers) -> None:
    engine = make_engine(ScriptedRng(0.0), careers=careers)
    _sign(engine.state, careers)
    assert "wrestling_cut_promo" not in [a.id for a in engine.available_actions()]
    engine.perform_action("go_to_arena")
    ids = [a.id for a in engine.available_actions()]
    assert "wrestling_cut_promo" in ids
    assert "wrestling_turn_heel" in ids
    assert "wrestling_turn_face" not in ids
    assert "wrestling_backstage_write_show" not in ids
