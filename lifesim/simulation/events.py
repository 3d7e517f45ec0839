"""Yearly random events: records, eligibility and weighted selection."""

from __future__ import annotations

from dataclasses import field
from typing import Optional

import numpy as np
from pydantic import ConfigDict
from pydantic.dataclasses import dataclass

from lifesim.core.state import WorldState
from lifesim.simulation.conditions import evaluate_conditions


@dataclass(config=ConfigDict(strict=True))
class Outcome:
    chance: float
    description: str
    effects: list[dict] = field(default_factory=list)


@dataclass(config=ConfigDict(strict=True))
class Choice:
    text: str
    effects: list[dict] = field(default_factory=list)
    outcomes: list[Outcome] = field(default_factory=list)


@dataclass(config=ConfigDict(strict=True))
class GameEvent:
    id: str
    title: str
    min_age: int
    max_age: int
    weight: float
    description: str = ""
    category: str = "general"
    cooldown: int = 0
    unique: bool = False
    conditions: list[dict] = field(default_factory=list)
    choices: list[Choice] = field(default_factory=list)


def triggered_flag(event_id: str) -> str:
    return f"event_{event_id}_triggered"


def last_year_flag(event_id: str) -> str:
    return f"event_{event_id}_last_year"


class EventRegistry:
    """Events keyed by id, kept in registration order."""

    def __init__(self) -> None:
        self._events: dict[str, GameEvent] = {}

    def register_event(self, event: GameEvent) -> None:
        self._events[event.id] = event

    def register_events(self, events: list[GameEvent]) -> None:
        for event in events:
            self.register_event(event)

    def get(self, event_id: str) -> Optional[GameEvent]:
        return self._events.get(event_id)

    def all(self) -> list[GameEvent]:
        return list(self._events.values())

    def __len__(self) -> int:
        return len(self._events)

    def _on_cooldown(self, state: WorldState, event: GameEvent) -> bool:
        if event.cooldown <= 0:
            return False
        last_year = state.flags.get(last_year_flag(event.id))
        return last_year is not None and state.year - last_year < event.cooldown

    def eligible_events(self, state: WorldState, rng: np.random.Generator) -> list[GameEvent]:
        eligible = []
        for event in self._events.values():
            if state.age < event.min_age or state.age > event.max_age:
                continue
            if event.unique and state.flags.get(triggered_flag(event.id)):
                continue
            if self._on_cooldown(state, event):
                continue
            if not evaluate_conditions(state, event.conditions, rng):
                continue
            eligible.append(event)
        return eligible

    def select_random_event(self, state: WorldState, rng: np.random.Generator) -> Optional[GameEvent]:
        """Weighted pick among eligible events; None when nothing qualifies."""
        eligible = self.eligible_events(state, rng)
        if not eligible:
            return None

        total_weight = sum(e.weight for e in eligible)
        remaining = rng.random() * total_weight
        for event in eligible:
            remaining -= event.weight
            if remaining <= 0:
                return event
        return eligible[-1]
