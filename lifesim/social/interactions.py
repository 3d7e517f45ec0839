"""Things the player can do with a specific NPC."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from numpy.random import Generator

from lifesim.core.config import CHILD_NAMES, HISTORY_PRIMARY, HOME
from lifesim.core.bus import STAT_CHANGED, EventBus
from lifesim.core.state import (
    Npc,
    WorldState,
    add_history,
    can_spend_time,
    clamp,
    clamp_stats,
    find_npc,
    next_npc_id,
    spend_time,
)
from lifesim.simulation.actions import ActionResult
from lifesim.social.relationships import (
    is_known,
    is_romance_candidate,
    mark_npc_killed_by_player,
)


@dataclass
class Interaction:
    id: str
    name: str
    perform: Callable[[WorldState, Npc, Generator], None]
    min_age: int = 0
    cost: int = 0
    time_cost: int = 1
    min_relationship: int = 0
    requires_same_location: bool = True
    allowed_types: Optional[tuple[str, ...]] = None
    is_available: Optional[Callable[[WorldState, Npc], bool]] = None


def _roll(rng: Generator, base: int, spread: int) -> int:
    """base + [0, spread)"""
    return base + int(rng.integers(spread))


def _plot_flag(npc: Npc) -> str:
    return f"plot_{npc.id}"


def _has_living_partner(state: WorldState) -> bool:
    return any(n.is_alive and n.type == "Partner" for n in state.relationships)


# ---------------------------------------------------------------------------
# Everyday
# ---------------------------------------------------------------------------

def _converse(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.relationship_to_player += _roll(rng, 0, 5)
    npc.familiarity += _roll(rng, 10, 15)
    state.stats.happiness += _roll(rng, 1, 2)
    add_history(state, f"You had a conversation with {npc.name}.")


def _call(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.relationship_to_player += _roll(rng, 1, 4)
    npc.familiarity += _roll(rng, 3, 7)
    add_history(state, f"You reached out to {npc.name}.")


def _spend_time(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.relationship_to_player += _roll(rng, 2, 10)
    npc.familiarity += _roll(rng, 15, 30)
    state.stats.happiness += _roll(rng, 2, 5)
    add_history(state, f"You spent time with {npc.name}.")


def _argue(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.relationship_to_player -= _roll(rng, 5, 15)
    npc.familiarity += _roll(rng, 5, 10)
    state.stats.happiness -= _roll(rng, 5, 10)
    add_history(state, f"You argued with {npc.name}.")


def _gift(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.relationship_to_player += _roll(rng, 5, 20)
    npc.familiarity += _roll(rng, 10, 20)
    add_history(state, f"You gave a gift to {npc.name}.")


# ---------------------------------------------------------------------------
# Romance and family
# ---------------------------------------------------------------------------

def _flirt(state: WorldState, npc: Npc, rng: Generator) -> None:
    if rng.random() < 0.35 + state.stats.looks / 300 + npc.relationship_to_player / 400:
        npc.relationship_to_player += _roll(rng, 4, 8)
        npc.familiarity += 5
        add_history(state, f"{npc.name} responded positively to your flirting.")
    else:
        npc.relationship_to_player -= _roll(rng, 3, 8)
        add_history(state, f"{npc.name} was not interested in your advances.")


def _ask_out(state: WorldState, npc: Npc, rng: Generator) -> None:
    chance = min(0.9, 0.2 + npc.relationship_to_player / 200 + npc.familiarity / 250 + state.stats.looks / 500)
    if rng.random() < chance:
        npc.type = "Partner"
        npc.relationship_to_player = min(100, npc.relationship_to_player + 15)
        npc.familiarity = min(100, npc.familiarity + 10)
        state.flags["partner_id"] = npc.id
        add_history(state, f"{npc.name} said yes. You started dating.", HISTORY_PRIMARY)
    else:
        npc.relationship_to_player = max(0, npc.relationship_to_player - 12)
        add_history(state, f"{npc.name} rejected your date invitation.", HISTORY_PRIMARY)


def _date(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.relationship_to_player = min(100, npc.relationship_to_player + _roll(rng, 6, 10))
    npc.familiarity = min(100, npc.familiarity + _roll(rng, 8, 12))
    state.stats.happiness += _roll(rng, 3, 6)
    add_history(state, f"You went on a date with {npc.name}.")


def _propose(state: WorldState, npc: Npc, rng: Generator) -> None:
    chance = min(0.95, 0.1 + npc.relationship_to_player / 150 + npc.familiarity / 300)
    if rng.random() < chance:
        state.flags["married"] = True
        state.flags["spouse_id"] = npc.id
        state.flags.pop("partner_id", None)
        add_history(state, f"{npc.name} accepted your proposal. You got married!", HISTORY_PRIMARY)
    else:
        npc.relationship_to_player = max(0, npc.relationship_to_player - 15)
        add_history(state, f"{npc.name} said it was too soon for marriage.", HISTORY_PRIMARY)


def _break_up(state: WorldState, npc: Npc, rng: Generator) -> None:
    was_married = bool(state.flags.get("married")) and state.flags.get("spouse_id") == npc.id
    npc.type = "Friend"
    npc.relationship_to_player = max(0, npc.relationship_to_player - 30)
    npc.familiarity = max(0, npc.familiarity - 10)
    for flag in ("married", "spouse_id", "partner_id"):
        state.flags.pop(flag, None)
    state.stats.happiness -= 20 if was_married else 10
    add_history(
        state,
        f"You divorced {npc.name}." if was_married else f"You broke up with {npc.name}.",
        HISTORY_PRIMARY,
    )


def _try_for_baby(state: WorldState, npc: Npc, rng: Generator) -> None:
    fertility = (state.stats.fertility + npc.health + npc.happiness) / 3
    chance = max(0.08, min(0.9, fertility / 120))
    if rng.random() >= chance:
        add_history(state, f"You and {npc.name} tried for a baby, but it did not happen this year.")
        return

    name = CHILD_NAMES[int(rng.integers(len(CHILD_NAMES)))]
    gender = "Male" if rng.random() > 0.5 else "Female"
    state.relationships.append(Npc(
        id=next_npc_id(state, "child"),
        name=f"{name} {state.character.last_name}",
        type="Child",
        gender=gender,
        age=0,
        health=85,
        happiness=75,
        relationship_to_player=100,
        familiarity=100,
        location=HOME,
    ))
    state.stats.happiness += 15
    add_history(state, f"You and {npc.name} welcomed a child named {name}.", HISTORY_PRIMARY)


def _care_for_child(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.health += _roll(rng, 3, 6)
    npc.happiness += _roll(rng, 4, 8)
    npc.relationship_to_player += _roll(rng, 4, 6)
    npc.familiarity += _roll(rng, 8, 10)
    state.stats.happiness += _roll(rng, 2, 4)
    add_history(state, f"You cared for {npc.name}.")


# ---------------------------------------------------------------------------
# Work
# ---------------------------------------------------------------------------

def _mentor(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.smarts += _roll(rng, 4, 8)
    npc.happiness += _roll(rng, 2, 6)
    npc.relationship_to_player += _roll(rng, 5, 7)
    state.career.performance = clamp(state.career.performance + 1)
    add_history(state, f"You mentored {npc.name} and helped their career growth.")


def _undermine(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.happiness -= _roll(rng, 6, 12)
    npc.relationship_to_player -= _roll(rng, 7, 14)
    state.stats.karma = clamp(state.stats.karma - 6)
    add_history(state, f"You quietly undermined {npc.name}'s standing at work.", HISTORY_PRIMARY)


def _senior_colleague(min_level: int):
    def check(state: WorldState, npc: Npc) -> bool:
        return bool(state.career.id) and state.career.level >= min_level and npc.location == state.current_location

    return check


# ---------------------------------------------------------------------------
# Violence
# ---------------------------------------------------------------------------

def _stalk(state: WorldState, npc: Npc, rng: Generator) -> None:
    npc.familiarity = min(100, npc.familiarity + 8)
    state.serial_killer.heat = clamp(state.serial_killer.heat + 6)
    state.stats.craziness = clamp(state.stats.craziness + 2)
    add_history(state, f"You quietly tracked {npc.name}'s routines.")


def _plot(state: WorldState, npc: Npc, rng: Generator) -> None:
    state.flags[_plot_flag(npc)] = state.year
    state.stats.karma = clamp(state.stats.karma - 8)
    state.stats.craziness = clamp(state.stats.craziness + 4)
    state.serial_killer.heat = clamp(state.serial_killer.heat + 5)
    add_history(state, f"You began planning {npc.name}'s death.", HISTORY_PRIMARY)


def _attempt_kill(state: WorldState, npc: Npc, rng: Generator) -> None:
    plotted = _plot_flag(npc) in state.flags
    chance = max(0.1, min(0.95, (
        0.2
        + state.stats.craziness / 250
        + (100 - npc.relationship_to_player) / 300
        + (0.2 if plotted else 0)
    )))
    if rng.random() < chance:
        state.flags.pop(_plot_flag(npc), None)
        mark_npc_killed_by_player(state, npc, "Your attack succeeded.", rng)
        return

    npc.relationship_to_player = 0
    npc.type = "Enemy"
    state.stats.health = clamp(state.stats.health - _roll(rng, 8, 20))
    state.stats.happiness = clamp(state.stats.happiness - 10)
    state.serial_killer.heat = clamp(state.serial_killer.heat + 20)
    add_history(state, f"You failed to kill {npc.name} and they now see you as an enemy.", HISTORY_PRIMARY)


def _hire_hitman(state: WorldState, npc: Npc, rng: Generator) -> None:
    if rng.random() < 0.62:
        mark_npc_killed_by_player(state, npc, "A hired killer completed the job.", rng)
        return
    state.serial_killer.heat = clamp(state.serial_killer.heat + 18)
    state.flags["wanted"] = rng.random() < 0.35 or state.flags.get("wanted") is True
    add_history(
        state,
        f"The hired killer failed to eliminate {npc.name}, and the operation drew attention.",
        HISTORY_PRIMARY,
    )


# =============================================================================
# Interaction definitions
# =============================================================================

ARGUE_TYPES: tuple[str, ...] = (
    "Father", "Mother", "Brother", "Sister", "Friend", "Enemy", "Partner",
    "Co-worker", "Boss", "Teacher", "Classmate", "Child",
)

INTERACTIONS: dict[str, Interaction] = {
    i.id: i for i in (
        Interaction("converse", "Converse", _converse, min_age=2),
        Interaction("call_message", "Call / Message", _call, min_age=8, requires_same_location=False),
        Interaction("spend_time", "Spend Time", _spend_time, min_age=2, time_cost=2),
        Interaction("argue", "Argue", _argue, min_age=4, allowed_types=ARGUE_TYPES),
        Interaction("gift", "Gift", _gift, min_age=10, cost=20),
        Interaction(
            "flirt", "Flirt", _flirt, min_age=13, min_relationship=15, requires_same_location=False,
            is_available=is_romance_candidate,
        ),
        Interaction(
            "ask_out", "Ask Out", _ask_out, min_age=13, time_cost=2, min_relationship=35,
            requires_same_location=False,
            is_available=lambda s, n: is_romance_candidate(s, n) and not _has_living_partner(s),
        ),
        Interaction("go_on_date", "Go on Date", _date, min_age=13, cost=20, time_cost=2, allowed_types=("Partner",)),
        Interaction("stalk_target", "Stalk Target", _stalk, min_age=14, time_cost=2, requires_same_location=False),
        Interaction(
            "plot_to_kill", "Plot to Kill", _plot, min_age=14, time_cost=2, requires_same_location=False,
            is_available=lambda s, n: n.is_alive and s.flags.get(_plot_flag(n)) != s.year,
        ),
        Interaction(
            "attempt_kill", "Attempt Kill", _attempt_kill, min_age=14, time_cost=3,
            is_available=lambda s, n: n.is_alive and (_plot_flag(n) in s.flags or s.stats.craziness >= 65),
        ),
        Interaction(
            "hire_hitman", "Hire Hitman", _hire_hitman, min_age=18, cost=5000, requires_same_location=False,
            is_available=lambda s, n: n.is_alive,
        ),
        Interaction(
            "propose_marriage", "Propose Marriage", _propose, min_age=18, cost=100, time_cost=2,
            min_relationship=70, allowed_types=("Partner",),
            is_available=lambda s, n: not s.flags.get("married"),
        ),
        Interaction("break_up", "Break Up / Divorce", _break_up, min_age=13, allowed_types=("Partner",)),
        Interaction(
            "try_for_baby", "Try for Baby", _try_for_baby, min_age=18, time_cost=2, min_relationship=55,
            allowed_types=("Partner",), is_available=lambda s, n: bool(s.flags.get("married")),
        ),
        Interaction("care_for_child", "Care for Child", _care_for_child, allowed_types=("Child",)),
        Interaction(
            "mentor_career", "Mentor Career", _mentor, min_age=18, time_cost=2, min_relationship=35,
            allowed_types=("Co-worker",), is_available=_senior_colleague(2),
        ),
        Interaction(
            "undermine_career", "Undermine Career", _undermine, min_age=18, time_cost=2,
            allowed_types=("Co-worker",), is_available=_senior_colleague(3),
        ),
    )
}


# =============================================================================
# Dispatch
# =============================================================================

def _allowed(state: WorldState, npc: Npc, interaction: Interaction) -> bool:
    if state.age < interaction.min_age:
        return False
    if state.finances.cash < interaction.cost:
        return False
    if npc.relationship_to_player < interaction.min_relationship:
        return False
    if interaction.allowed_types is not None and npc.type not in interaction.allowed_types:
        return False
    if interaction.is_available is not None and not interaction.is_available(state, npc):
        return False
    if interaction.requires_same_location and npc.location != state.current_location:
        return False
    return can_spend_time(state, interaction.time_cost)


def _reachable(npc: Optional[Npc]) -> bool:
    return npc is not None and npc.is_alive and is_known(npc)


def available_interactions(
    state: WorldState,
    npc_id: str,
    catalog: Optional[dict[str, Interaction]] = None,
) -> list[Interaction]:
    npc = find_npc(state, npc_id)
    if not _reachable(npc):
        return []
    catalog = INTERACTIONS if catalog is None else catalog
    return [i for i in catalog.values() if _allowed(state, npc, i)]


def _clamp_after(state: WorldState, npc: Npc) -> None:
    for attr in ("relationship_to_player", "familiarity", "health", "happiness", "smarts", "looks"):
        setattr(npc, attr, clamp(getattr(npc, attr)))
    clamp_stats(state)
    state.serial_killer.heat = clamp(state.serial_killer.heat)
    state.serial_killer.notoriety = clamp(state.serial_killer.notoriety)


def interact(
    state: WorldState,
    npc_id: str,
    interaction_id: str,
    rng: Generator,
    bus: Optional[EventBus] = None,
    catalog: Optional[dict[str, Interaction]] = None,
) -> ActionResult:
    interaction = (INTERACTIONS if catalog is None else catalog).get(interaction_id)
    if interaction is None:
        return ActionResult(False, f"Unknown interaction: {interaction_id}", None)
    npc = find_npc(state, npc_id)
    if npc is None:
        return ActionResult(False, f"Unknown person: {npc_id}", None)
    if not _reachable(npc) or not _allowed(state, npc, interaction):
        return ActionResult(False, f"{interaction.name} is not available with {npc.name}.", None)

    spend_time(state, interaction.time_cost)
    state.finances.cash -= interaction.cost
    interaction.perform(state, npc, rng)

    _clamp_after(state, npc)
    if bus is not None:
        bus.emit(STAT_CHANGED)
    # perform() writes its own history
    return ActionResult(True, state.history[-1].text if state.history else "", None)
