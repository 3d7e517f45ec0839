from __future__ import annotations

from lifesim.career.catalog import CareerCatalog, SerialContract
from lifesim.career.jobs import apply_for_career
from lifesim.career.shadow import (
    can_unlock,
    choose_contract,
    process_shadow_year,
    set_full_time,
    take_contract,
    unlock_serial_path,
)
from lifesim.core import config

from conftest import ScriptedRng, make_engine


def _dark(state) -> None:
    state.stats.craziness = 80
    state.stats.willpower = 40


def _contracts() -> CareerCatalog:
    catalog = CareerCatalog()
    catalog.register_serial_contracts([
        SerialContract("alley_job", "Alley Job", 18, 0, 4000, 10, 5, 0.2),
        SerialContract("glass_tower", "Glass Tower", 21, 25, 22000, 18, 12, 0.3),
    ])
    return catalog


def test_unlock_requirements(state) -> None:
    assert not can_unlock(state)
    _dark(state)
    assert can_unlock(state)
    state.age = 17
    assert not can_unlock(state)


def test_unemployed_unlock_goes_full_time(state) -> None:
    _dark(state)
    unlock_serial_path(state, ScriptedRng(0.0))
    sk = state.serial_killer
    assert sk.unlocked
    assert sk.mode == "full_time"
    assert sk.alias == config.SERIAL_ALIASES[0]
    assert not can_unlock(state)


def test_employed_unlock_leads_a_double_life(state, careers) -> None:
    apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))
    _dark(state)
    unlock_serial_path(state, ScriptedRng(0.0))
    assert state.serial_killer.mode == "double_life"


def test_full_time_means_no_public_career(state, careers) -> None:
    apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))
    _dark(state)
    unlock_serial_path(state, ScriptedRng(0.0))

    set_full_time(state, ScriptedRng())

    assert state.serial_killer.mode == "full_time"
    assert state.career.id is None
    assert state.finances.salary == 0


def test_contract_choice_respects_notoriety(state) -> None:
    catalog = _contracts()
    assert [c.id for c in catalog.viable_contracts(state)] == ["alley_job"]
    state.age = 25
    state.serial_killer.notoriety = 30
    assert choose_contract(state, catalog, ScriptedRng(0.99)).id == "glass_tower"
    assert choose_contract(state, catalog, ScriptedRng(0.0)).id == "alley_job"


def test_completed_and_botched_contracts(state) -> None:
    catalog = _contracts()
    _dark(state)
    unlock_serial_path(state, ScriptedRng(0.0))

    take_contract(state, catalog, ScriptedRng(0.0, 0.9))
    sk = state.serial_killer
    assert sk.kills == 1
    assert sk.contracts_completed == 1
    assert state.finances.cash == 4000
    assert sk.heat == 15

    take_contract(state, catalog, ScriptedRng(0.0, 0.1))
    assert sk.kills == 1
    assert sk.heat == 15 + 10 + config.BOTCHED_CONTRACT_HEAT


def test_heat_decays_and_capture_ends_everything(state, careers) -> None:
    apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))
    _dark(state)
    unlock_serial_path(state, ScriptedRng(0.0))
    sk = state.serial_killer

    sk.heat = 30
    process_shadow_year(state, ScriptedRng(0.0))
    assert sk.heat == 30 - config.HEAT_DECAY_DOUBLE_LIFE
    assert not sk.caught

    sk.heat = 100
    process_shadow_year(state, ScriptedRng(0.0))
    assert sk.caught
    assert sk.mode == "none"
    assert state.flags["serial_caught"] is True
    assert state.career.id is None


def test_shadow_actions_through_the_engine() -> None:
    engine = make_engine(ScriptedRng(0.0), careers=_contracts())
    _dark(engine.state)
    assert engine.perform_action("unlock_serial_path").success

    ids = [a.id for a in engine.available_actions()]
    assert "serial_hunt" in ids
    assert "serial_contract" in ids
    assert "serial_mode_double_life" in ids
    assert "serial_maintain_cover" not in ids

    engine.perform_action("serial_hunt")
    assert engine.state.serial_killer.kills == 1
    assert "serial_hunt" not in [a.id for a in engine.available_actions()]


def test_full_time_predators_cannot_take_a_day_job(careers) -> None:
    engine = make_engine(ScriptedRng(0.0), careers=careers)
    _dark(engine.state)
    engine.perform_action("unlock_serial_path")
    assert engine.state.serial_killer.mode == "full_time"

    assert not [a.id for a in engine.available_actions() if a.id.startswith("apply_")]
    assert not engine.perform_action("apply_office_clerk").success

    result = apply_for_career(engine.state, careers, "office_clerk", ScriptedRng(0.0))
    assert not result.success
    assert engine.state.career.id is None
    assert engine.state.career.rejections == 0
    assert engine.state.finances.salary == 0


def test_double_life_can_still_be_hired(state, careers) -> None:
    _dark(state)
    unlock_serial_path(state, ScriptedRng(0.0))
    state.serial_killer.mode = "double_life"

    result = apply_for_career(state, careers, "office_clerk", ScriptedRng(0.0))

    assert result.success
    assert result.message == "You got hired as an Office Clerk."
    assert state.career.id == "office_clerk"
