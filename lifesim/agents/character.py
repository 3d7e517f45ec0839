"""Birth: rolling a new player character and their family."""

from __future__ import annotations

from numpy.random import Generator

from lifesim.core.config import (
    BIRTH_STAT_ROLLS,
    HISTORY_PRIMARY,
    MAX_STARTING_TRAITS,
    PERSONALITY_TRAITS,
    TALENTS,
)
from lifesim.core.state import Character, WorldState, add_history
from lifesim.social.relationships import initialize_family


def roll_traits(rng: Generator) -> list[str]:
    count = int(rng.integers(1, MAX_STARTING_TRAITS + 1))
    picks = rng.choice(len(PERSONALITY_TRAITS), size=count, replace=False)
    return [PERSONALITY_TRAITS[int(i)] for i in picks]


def start_new_life(
    state: WorldState,
    first_name: str,
    last_name: str,
    gender: str,
    country: str,
    rng: Generator,
) -> WorldState:
    """Populate a fresh state in place and return it."""
    state.character = Character(
        first_name=first_name,
        last_name=last_name,
        gender=gender,
        country=country,
        talent=TALENTS[int(rng.integers(len(TALENTS)))],
        traits=roll_traits(rng),
    )

    for stat, (minimum, spread) in BIRTH_STAT_ROLLS.items():
        setattr(state.stats, stat, minimum + int(rng.integers(spread)))

    add_history(state, f"You were born a {gender} named {first_name} {last_name} in {country}.", HISTORY_PRIMARY)
    add_history(state, f"You were born with a special talent in {state.character.talent}!")

    initialize_family(state, last_name, rng)
    return state
