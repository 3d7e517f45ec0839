"""Secret shadow-crime path: heat, notoriety, contracts and capture."""

from __future__ import annotations

from typing import Optional

from numpy.random import Generator

from lifesim.core.config import (
    BOTCHED_CONTRACT_HEAT,
    CAPTURE_HEAT,
    CAPTURE_SPREAD,
    HEAT_DECAY_DEFAULT,
    HEAT_DECAY_DOUBLE_LIFE,
    HISTORY_PRIMARY,
    NOTORIETY_DECAY,
    SERIAL_ALIASES,
    SERIAL_UNLOCK_MAX_WILLPOWER,
    SERIAL_UNLOCK_MIN_AGE,
    SERIAL_UNLOCK_MIN_CRAZINESS,
)
from lifesim.core.state import WorldState, add_history, clamp, clear_career
from lifesim.career.catalog import CareerCatalog, SerialContract, career_action
from lifesim.simulation.actions import Action, ActionResult


def is_active(state: WorldState) -> bool:
    return state.serial_killer.unlocked and not state.serial_killer.caught


def _operating(state: WorldState) -> bool:
    return is_active(state) and state.serial_killer.mode != "none"


def can_unlock(state: WorldState) -> bool:
    sk = state.serial_killer
    return (
        not sk.unlocked
        and not sk.caught
        and state.age >= SERIAL_UNLOCK_MIN_AGE
        and state.stats.craziness >= SERIAL_UNLOCK_MIN_CRAZINESS
        and state.stats.willpower <= SERIAL_UNLOCK_MAX_WILLPOWER
    )


def unlock_serial_path(state: WorldState, rng: Generator) -> ActionResult:
    sk = state.serial_killer
    sk.unlocked = True
    sk.mode = "double_life" if state.career.id else "full_time"
    sk.alias = SERIAL_ALIASES[int(rng.integers(len(SERIAL_ALIASES)))]
    sk.notoriety = 5
    sk.heat = 5
    state.stats.karma = clamp(state.stats.karma - 25)
    return ActionResult(
        True,
        f'You embraced a hidden violent identity under the alias "{sk.alias}".',
        HISTORY_PRIMARY,
    )


def set_double_life(state: WorldState, rng: Generator) -> ActionResult:
    state.serial_killer.mode = "double_life"
    return ActionResult(True, "You decided to hide behind a normal day-to-day persona.")


def set_full_time(state: WorldState, rng: Generator) -> ActionResult:
    if state.career.id:
        previous = state.career.title
        clear_career(state)
        add_history(state, f"You abandoned your public role as {previous}.")
    state.serial_killer.mode = "full_time"
    return ActionResult(
        True,
        "You shifted into a full-time shadow career built around contracts and violence.",
        HISTORY_PRIMARY,
    )


def choose_contract(state: WorldState, catalog: CareerCatalog, rng: Generator) -> Optional[SerialContract]:
    """Weighted pick that favours higher-profile jobs."""
    eligible = catalog.viable_contracts(state)
    if not eligible:
        return None

    weights = [max(1, c.min_notoriety + 5) for c in eligible]
    roll = rng.random() * sum(weights)
    for contract, weight in zip(eligible, weights):
        roll -= weight
        if roll <= 0:
            return contract
    return eligible[-1]


def take_contract(state: WorldState, catalog: CareerCatalog, rng: Generator) -> ActionResult:
    contract = choose_contract(state, catalog, rng)
    if contract is None:
        return ActionResult(True, "No viable contracts were available in your network.")

    sk = state.serial_killer
    sk.last_contract_year = state.year
    if rng.random() < contract.risk:
        sk.heat = clamp(sk.heat + contract.heat_gain + BOTCHED_CONTRACT_HEAT)
        sk.notoriety = clamp(sk.notoriety + contract.notoriety_gain // 2)
        return ActionResult(
            True,
            f'Contract "{contract.codename}" went sideways. You escaped, but investigators now have leads.',
            HISTORY_PRIMARY,
        )

    state.finances.cash += contract.payout
    sk.contracts_completed += 1
    sk.kills += 1
    sk.heat = clamp(sk.heat + contract.heat_gain)
    sk.notoriety = clamp(sk.notoriety + contract.notoriety_gain)
    sk.last_kill_year = state.year
    state.stats.karma = clamp(state.stats.karma - 18)
    state.stats.happiness = clamp(state.stats.happiness + 4)
    return ActionResult(
        True,
        f'You completed contract "{contract.codename}" and earned ${contract.payout:,}.',
        HISTORY_PRIMARY,
    )


def hunt(state: WorldState, rng: Generator) -> ActionResult:
    sk = state.serial_killer
    sk.last_kill_year = state.year
    sk.kills += 1
    sk.notoriety = clamp(sk.notoriety + 7)
    sk.heat = clamp(sk.heat + 14)
    state.stats.karma = clamp(state.stats.karma - 20)
    state.stats.happiness = clamp(state.stats.happiness + 3)
    return ActionResult(
        True,
        "You acted on your violent compulsions and left another body in your wake.",
        HISTORY_PRIMARY,
    )


def lay_low(state: WorldState, rng: Generator) -> ActionResult:
    state.serial_killer.heat = clamp(state.serial_killer.heat - 20)
    state.stats.happiness = clamp(state.stats.happiness - 2)
    return ActionResult(True, "You disappeared for a while and erased as many traces as possible.")


def maintain_cover(state: WorldState, rng: Generator) -> ActionResult:
    state.career.performance = clamp(state.career.performance + 6)
    state.serial_killer.heat = clamp(state.serial_killer.heat - 8)
    state.stats.happiness = clamp(state.stats.happiness - 1)
    return ActionResult(True, "You leaned into your public routine and reinforced your facade.")


def process_shadow_year(state: WorldState, rng: Generator) -> None:
    if not is_active(state):
        return

    sk = state.serial_killer
    decay = HEAT_DECAY_DOUBLE_LIFE if sk.mode == "double_life" else HEAT_DECAY_DEFAULT
    sk.heat = clamp(sk.heat - decay)

    if sk.last_kill_year != state.year - 1:
        sk.notoriety = clamp(sk.notoriety - NOTORIETY_DECAY)

    risk = max(0.0, (sk.heat - CAPTURE_HEAT) / CAPTURE_SPREAD)
    if sk.heat >= CAPTURE_HEAT and rng.random() < risk:
        sk.caught = True
        sk.mode = "none"
        state.flags["serial_caught"] = True
        clear_career(state)
        state.stats.happiness = clamp(state.stats.happiness - 35)
        state.stats.karma = clamp(state.stats.karma - 10)
        add_history(
            state,
            "Investigators identified your crimes. You were arrested and your double life ended.",
            HISTORY_PRIMARY,
        )


def shadow_actions(catalog: CareerCatalog) -> list[Action]:
    return [
        career_action("unlock_serial_path", "Indulge Dark Impulses (Secret)", 2, can_unlock, unlock_serial_path),
        career_action(
            "serial_mode_double_life", "Operate as Double Life", 1,
            lambda s: is_active(s) and s.serial_killer.mode != "double_life",
            set_double_life,
        ),
        career_action(
            "serial_mode_full_time", "Go Full-Time Predator", 1,
            lambda s: is_active(s) and s.serial_killer.mode != "full_time",
            set_full_time,
        ),
        career_action(
            "serial_contract", "Take Contract", 3,
            lambda s: (
                _operating(s)
                and s.serial_killer.last_contract_year != s.year
                and bool(catalog.viable_contracts(s))
            ),
            lambda s, rng: take_contract(s, catalog, rng),
        ),
        career_action(
            "serial_hunt", "Hunt Independently", 3,
            lambda s: _operating(s) and s.serial_killer.last_kill_year != s.year,
            hunt,
        ),
        career_action(
            "serial_lay_low", "Lay Low and Scrub Trail", 2,
            lambda s: _operating(s) and s.serial_killer.heat > 0,
            lay_low,
        ),
        career_action(
            "serial_maintain_cover", "Maintain Day-Job Cover", 2,
            lambda s: is_active(s) and s.serial_killer.mode == "double_life" and bool(s.career.id),
            maintain_cover,
        ),
    ]
