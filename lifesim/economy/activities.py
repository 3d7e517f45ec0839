"""Leisure activities and travel between locations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from numpy.random import Generator

from lifesim.core.config import (
    ACTIVITY_EFFICIENCY_CAP,
    ACTIVITY_EXPERIENCE_SCALE,
    ARENA,
    COURT,
    DEFAULT_LOCATION_TIME,
    HOME,
    NATURAL_POTENTIAL_TIERS,
    OFFICE,
    SCHOOL,
    SCHOOL_NPC_MINIMUM,
)
from lifesim.core.state import Npc, WorldState, clamp_stats, next_npc_id
from lifesim.simulation.actions import ACTIVITY, Action, ActionRegistry, ActionResult


@dataclass
class Activity:
    """Something the player can do with spare months."""

    id: str
    name: str
    min_age: int = 0
    cost: int = 0
    time_cost: int = 1
    location: Optional[str] = None
    travel_to: Optional[str] = None
    grants_time: int = 0
    # stat -> (base, spread); base gain is base + [0, spread)
    gains: dict[str, tuple[int, int]] = field(default_factory=dict)
    # applied directly, bypassing experience and potential
    flat_changes: dict[str, int] = field(default_factory=dict)
    message: str = ""

    @property
    def is_travel(self) -> bool:
        return self.travel_to is not None


def natural_potential(current: float) -> float:
    """Training multiplier that shrinks as a stat nears its ceiling."""
    for threshold, multiplier in NATURAL_POTENTIAL_TIERS:
        if current >= threshold:
            return multiplier
    return 1.0


def experience_multiplier(experience: int) -> float:
    return 1 + min(experience / ACTIVITY_EXPERIENCE_SCALE, ACTIVITY_EFFICIENCY_CAP)


# =============================================================================
# Activity definitions
# =============================================================================

ACTIVITIES: dict[str, Activity] = {
    "go_home": Activity(
        id="go_home",
        name="Go Home",
        time_cost=1,
        travel_to=HOME,
        grants_time=10,
        message="You went back home.",
    ),
    "go_to_school": Activity(
        id="go_to_school",
        name="Go to School",
        min_age=5,
        time_cost=2,
        travel_to=SCHOOL,
        grants_time=8,
        message="You went to school.",
    ),
    "go_to_gym": Activity(
        id="go_to_gym",
        name="Go to Gym",
        min_age=14,
        time_cost=1,
        travel_to="Gym",
        grants_time=6,
        message="You traveled to the gym.",
    ),
    "go_to_movies": Activity(
        id="go_to_movies",
        name="Go to Movies",
        min_age=12,
        time_cost=1,
        travel_to="Movies",
        grants_time=4,
        message="You traveled to the movie theater.",
    ),
    # Workplaces; career, wrestling and political actions are performed there
    "go_to_office": Activity(
        id="go_to_office",
        name="Go to Office",
        min_age=16,
        time_cost=1,
        travel_to=OFFICE,
        grants_time=DEFAULT_LOCATION_TIME,
        message="You headed to the office.",
    ),
    "go_to_court": Activity(
        id="go_to_court",
        name="Go to Court",
        min_age=18,
        time_cost=1,
        travel_to=COURT,
        grants_time=DEFAULT_LOCATION_TIME,
        message="You headed to the courthouse.",
    ),
    "go_to_arena": Activity(
        id="go_to_arena",
        name="Go to Arena",
        min_age=16,
        time_cost=1,
        travel_to=ARENA,
        grants_time=DEFAULT_LOCATION_TIME,
        message="You headed to the arena.",
    ),
    "walk": Activity(
        id="walk",
        name="Walk",
        min_age=3,
        time_cost=1,
        location=HOME,
        gains={"health": (1, 0), "happiness": (1, 0), "athleticism": (1, 0)},
        message="You went for a walk outside your house.",
    ),
    "read_book": Activity(
        id="read_book",
        name="Read Book",
        min_age=5,
        time_cost=2,
        location=HOME,
        gains={"smarts": (1, 3)},
        message="You read a book.",
    ),
    "study": Activity(
        id="study",
        name="Study",
        min_age=5,
        time_cost=3,
        location=SCHOOL,
        gains={"smarts": (2, 8)},
        flat_changes={"happiness": -2},
        message="You studied hard at school.",
    ),
    "meditate": Activity(
        id="meditate",
        name="Meditate",
        min_age=8,
        time_cost=1,
        location=HOME,
        gains={"happiness": (2, 5)},
        message="You meditated.",
    ),
    "watch_movie": Activity(
        id="watch_movie",
        name="Watch Movie",
        min_age=12,
        cost=15,
        time_cost=3,
        location="Movies",
        gains={"happiness": (5, 10)},
        message="You watched a movie.",
    ),
    "workout": Activity(
        id="workout",
        name="Workout",
        min_age=14,
        cost=10,
        time_cost=3,
        location="Gym",
        gains={"athleticism": (2, 10), "health": (1, 3), "looks": (0, 3)},
        message="You worked out hard at the gym.",
    ),
}


# =============================================================================
# Behaviour
# =============================================================================

def _seed_school_npcs(state: WorldState) -> None:
    at_school = [n for n in state.relationships if n.location == SCHOOL and n.is_alive]
    if len(at_school) >= SCHOOL_NPC_MINIMUM:
        return
    state.relationships.append(Npc(
        id=next_npc_id(state, "teacher"),
        name="Teacher",
        type="Teacher",
        gender="Non-binary",
        age=state.age + 20,
        health=80, happiness=50, smarts=80, looks=50,
        relationship_to_player=50, familiarity=10,
        location=SCHOOL,
    ))
    state.relationships.append(Npc(
        id=next_npc_id(state, "classmate"),
        name="Classmate",
        type="Classmate",
        gender="Non-binary",
        age=state.age,
        health=80, happiness=50, smarts=80, looks=50,
        relationship_to_player=50, familiarity=10,
        location=SCHOOL,
    ))


def do_activity(state: WorldState, activity: Activity, rng: Generator) -> ActionResult:
    """Apply an activity's effects. Time, cash and movement are handled by the registry."""
    if activity.travel_to == SCHOOL:
        _seed_school_npcs(state)

    experience = state.activities_experience.get(activity.id, 0)
    efficiency = experience_multiplier(experience)

    for stat, (base, spread) in activity.gains.items():
        gain = base + (int(rng.integers(spread)) if spread > 0 else 0)
        current = getattr(state.stats, stat)
        setattr(state.stats, stat, current + gain * efficiency * natural_potential(current))
    for stat, delta in activity.flat_changes.items():
        setattr(state.stats, stat, getattr(state.stats, stat) + delta)

    state.activities_experience[activity.id] = experience + 1
    clamp_stats(state)
    return ActionResult(True, activity.message)


def _travel_allowed(activity: Activity):
    def check(state: WorldState) -> bool:
        if state.age < activity.min_age:
            return False
        if activity.travel_to == HOME:
            return state.current_location != HOME
        # Trips only start from home
        return state.current_location == HOME

    return check


def _age_allowed(activity: Activity):
    return lambda state: state.age >= activity.min_age


def activity_action(activity: Activity) -> Action:
    return Action(
        id=activity.id,
        name=activity.name,
        category=ACTIVITY,
        time_cost=activity.time_cost,
        perform=lambda state, rng: do_activity(state, activity, rng),
        cost=activity.cost,
        location=activity.location,
        is_available=_travel_allowed(activity) if activity.is_travel else _age_allowed(activity),
        travel_to=activity.travel_to,
        grants_time=activity.grants_time,
    )


def install_activity_actions(registry: ActionRegistry) -> None:
    registry.register_many([activity_action(a) for a in ACTIVITIES.values()])
