"""Heuristic autoplayer: answers events and spends each year's time budget."""

from __future__ import annotations

from typing import Optional

from numpy.random import Generator

from lifesim.career.catalog import career_action_location
from lifesim.core.config import (
    AUTOPLAY_EXCLUDED,
    AUTOPLAY_IDLE_SPOTS,
    AUTOPLAY_MAX_ACTIONS_PER_YEAR,
    AUTOPLAY_NOISE,
    AUTOPLAY_POLITICAL_INTEREST,
    AUTOPLAY_PRIORITIES,
    COMPULSORY_SCHOOL_MAX_AGE,
    HOME,
    OFFICE,
    SCHOOL,
    TRAVEL_ACTIONS,
)
from lifesim.core.state import WorldState
from lifesim.simulation.actions import Action


def _matches(action_id: str, key: str) -> bool:
    if key.endswith("_"):
        return action_id.startswith(key)
    return action_id == key


def base_priority(action_id: str) -> float:
    for key, weight in AUTOPLAY_PRIORITIES.items():
        if _matches(action_id, key):
            return weight
    return 1.0


def is_excluded(action_id: str) -> bool:
    return any(_matches(action_id, key) for key in AUTOPLAY_EXCLUDED)


class AutoPlayer:
    """Satisficing player: go where the work is, do the most useful thing there, head home."""

    def __init__(self, rng: Generator) -> None:
        self._rng = rng

    def play_year(self, engine: "Engine") -> int:  # noqa: F821
        """Resolve anything pending, then use up the year. Returns actions performed."""
        self.resolve_pending(engine)
        if not engine.state.is_alive:
            return 0

        performed = 0
        destination = self.pick_destination(engine.state)
        if destination is not None and destination != engine.state.current_location:
            if engine.perform_action(TRAVEL_ACTIONS[destination]).success:
                performed += 1

        performed += self._spend_time(engine)

        if engine.state.is_alive and engine.state.current_location != HOME:
            engine.perform_action(TRAVEL_ACTIONS[HOME])
            performed += 1
            performed += self._spend_time(engine)
        return performed

    def resolve_pending(self, engine: "Engine") -> None:  # noqa: F821
        event = engine.pending_event
        if event is not None and event.choices:
            engine.handle_choice(event, int(self._rng.integers(len(event.choices))))
        scandal = engine.pending_scandal
        if scandal is not None and scandal.choices:
            engine.resolve_scandal(int(self._rng.integers(len(scandal.choices))))

    def pick_destination(self, state: WorldState) -> Optional[str]:
        if state.education.in_program or 5 <= state.age <= COMPULSORY_SCHOOL_MAX_AGE:
            return SCHOOL
        if state.career.id is not None:
            workplace = career_action_location("work_hard", state)
            if workplace is not None:
                return workplace
        pol = state.politics
        if pol.active or pol.campaign_active:
            return OFFICE
        if state.age >= 18 and self._rng.random() < AUTOPLAY_POLITICAL_INTEREST:
            return OFFICE
        if state.age >= 14:
            spots = AUTOPLAY_IDLE_SPOTS
            return spots[int(self._rng.integers(len(spots)))]
        return None

    def score(self, action: Action) -> float:
        return base_priority(action.id) + self._rng.random() * AUTOPLAY_NOISE

    def choose(self, options: list[Action]) -> Optional[Action]:
        best: Optional[Action] = None
        best_score = float("-inf")
        for action in options:
            score = self.score(action)
            if score > best_score:
                best, best_score = action, score
        return best

    def _spend_time(self, engine: "Engine") -> int:  # noqa: F821
        performed = 0
        for _ in range(AUTOPLAY_MAX_ACTIONS_PER_YEAR):
            if not engine.state.is_alive:
                break
            options = [
                a for a in engine.available_actions()
                if not a.is_travel and not is_excluded(a.id)
            ]
            action = self.choose(options)
            if action is None:
                break
            if not engine.perform_action(action.id).success:
                break
            performed += 1
        return performed
