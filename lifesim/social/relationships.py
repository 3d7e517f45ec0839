"""Family, NPC aging and who the player can see from where they stand."""

from __future__ import annotations

from numpy.random import Generator

from lifesim.core.config import (
    ARENA,
    BEREAVEMENT_HAPPINESS_LOSS,
    CLOSE_BOND_THRESHOLD,
    FAMILIARITY_DECAY_MIN,
    FAMILIARITY_DECAY_SPREAD,
    HISTORY_PRIMARY,
    HOME,
    MAX_SIBLINGS,
    NON_ROMANCE_TYPES,
    NPC_MORTALITY_AGE,
    NPC_MORTALITY_RATE,
    PARENT_AGE_SPREAD,
    PARENT_MIN_AGE,
    ROMANCE_MIN_AGE,
    SCHOOL,
    SIBLING_AGE_SPREAD,
    SIBLING_BOND,
    WRESTLING_FIELD,
    WRESTLING_TRAIT,
)
from lifesim.core.state import Npc, WorldState, add_history, clamp, next_npc_id


def is_known(npc: Npc) -> bool:
    return npc.familiarity > 0 or npc.relationship_to_player > 0


def is_romance_candidate(state: WorldState, npc: Npc) -> bool:
    return (
        npc.type not in NON_ROMANCE_TYPES
        and state.age >= ROMANCE_MIN_AGE
        and npc.age >= ROMANCE_MIN_AGE
    )


def _school_affiliated(npc: Npc) -> bool:
    return (
        npc.location == SCHOOL
        or npc.workplace == SCHOOL
        or npc.type in ("Teacher", "Classmate")
    )


def is_visible(state: WorldState, npc: Npc) -> bool:
    location = state.current_location
    if location == HOME:
        return npc.location == HOME or npc.relationship_to_player > CLOSE_BOND_THRESHOLD
    if location == SCHOOL:
        return _school_affiliated(npc)
    if location == ARENA and state.career.field == WRESTLING_FIELD:
        if npc.location != ARENA:
            return False
        if WRESTLING_TRAIT in npc.traits and state.wrestling_contract is not None:
            return npc.promotion_id == state.wrestling_contract.promotion_id
        return True
    return npc.location == location


def visible_relationships(state: WorldState) -> list[Npc]:
    return [n for n in state.relationships if n.is_alive and is_known(n) and is_visible(state, n)]


def clear_romance_flags(state: WorldState, npc_id: str) -> None:
    """Drop partner/spouse links if they point at ``npc_id``."""
    if npc_id in (state.flags.get("spouse_id"), state.flags.get("partner_id")):
        for flag in ("spouse_id", "partner_id", "married"):
            state.flags.pop(flag, None)


# ---------------------------------------------------------------------------
# Family
# ---------------------------------------------------------------------------

def _parent(state: WorldState, prefix: str, name: str, type: str, gender: str, trait: str, rng: Generator) -> Npc:
    return Npc(
        id=next_npc_id(state, prefix),
        name=name,
        type=type,
        gender=gender,
        age=int(rng.integers(PARENT_MIN_AGE, PARENT_MIN_AGE + PARENT_AGE_SPREAD)),
        health=int(rng.integers(70, 100)),
        happiness=int(rng.integers(60, 100)),
        smarts=int(rng.integers(50, 100)),
        looks=int(rng.integers(50, 100)),
        relationship_to_player=100,
        familiarity=100,
        location=HOME,
        traits=[trait],
    )


def initialize_family(state: WorldState, last_name: str, rng: Generator) -> None:
    state.relationships.append(_parent(state, "father", f"John {last_name}", "Father", "Male", "Generous", rng))
    state.relationships.append(_parent(state, "mother", f"Jane {last_name}", "Mother", "Female", "Optimist", rng))

    for _ in range(int(rng.integers(MAX_SIBLINGS + 1))):
        brother = rng.random() > 0.5
        state.relationships.append(Npc(
            id=next_npc_id(state, "sibling"),
            name=f"{'Tim' if brother else 'Sarah'} {last_name}",
            type="Brother" if brother else "Sister",
            gender="Male" if brother else "Female",
            age=int(rng.integers(SIBLING_AGE_SPREAD)),
            health=80,
            happiness=80,
            relationship_to_player=SIBLING_BOND,
            familiarity=SIBLING_BOND,
            location=HOME,
        ))


# ---------------------------------------------------------------------------
# Annual tick
# ---------------------------------------------------------------------------

def age_up_npcs(state: WorldState, rng: Generator) -> None:
    for npc in state.relationships:
        if not npc.is_alive:
            continue
        npc.age += 1
        decay = int(rng.integers(FAMILIARITY_DECAY_MIN, FAMILIARITY_DECAY_MIN + FAMILIARITY_DECAY_SPREAD))
        npc.familiarity = max(0, npc.familiarity - decay)

        if npc.age > NPC_MORTALITY_AGE and rng.random() < (npc.age - NPC_MORTALITY_AGE) * NPC_MORTALITY_RATE:
            npc.is_alive = False
            clear_romance_flags(state, npc.id)
            add_history(
                state,
                f"Your {npc.type.lower()} {npc.name} died at the age of {npc.age}.",
                HISTORY_PRIMARY,
            )
            state.stats.happiness = clamp(state.stats.happiness - BEREAVEMENT_HAPPINESS_LOSS)


# ---------------------------------------------------------------------------
# Violence
# ---------------------------------------------------------------------------

def mark_npc_killed_by_player(state: WorldState, npc: Npc, reason: str, rng: Generator) -> None:
    npc.is_alive = False
    npc.health = 0
    clear_romance_flags(state, npc.id)
    add_history(state, f"{reason} {npc.name} is dead.", HISTORY_PRIMARY)

    state.stats.karma = clamp(state.stats.karma - 30)
    state.stats.craziness = clamp(state.stats.craziness + 8)

    sk = state.serial_killer
    if sk.unlocked and not sk.caught:
        sk.kills += 1
        sk.notoriety = clamp(sk.notoriety + 9)
        sk.heat = clamp(sk.heat + 14)
        sk.last_kill_year = state.year
        if sk.mode == "full_time":
            payday = int(rng.integers(4000, 22000))
            state.finances.cash += payday
            add_history(state, f"Your underground network rewarded you ${payday:,} for the hit.")
        return

    state.flags["violent_record"] = True
    if rng.random() < 0.22:
        state.flags["wanted"] = True
        add_history(
            state,
            "Witnesses reported the incident. Authorities are now looking for you.",
            HISTORY_PRIMARY,
        )
