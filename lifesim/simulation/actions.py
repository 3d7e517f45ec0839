"""Generic player actions: availability checks, time/cash accounting and dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from lifesim.core.config import DEFAULT_LOCATION_TIME, HISTORY_SECONDARY
from lifesim.core.state import (
    WorldState,
    add_history,
    can_afford,
    can_spend_time,
    modify_cash,
    modify_stat,
    spend_time,
)

ACTIVITY = "activity"
EDUCATION = "education"
CAREER = "career"
POLITICS = "politics"


@dataclass
class ActionResult:
    """Outcome of an action. A successful non-empty message is logged under ``category``.

    ``category=None`` means the action wrote its own history entries.
    """

    success: bool
    message: str = ""
    category: Optional[str] = HISTORY_SECONDARY


def _always(state: WorldState) -> bool:
    return True


@dataclass
class Action:
    id: str
    name: str
    category: str
    time_cost: int
    perform: Callable[[WorldState, np.random.Generator], ActionResult]
    cost: int = 0
    location: Optional[str] = None
    location_for: Optional[Callable[[WorldState], Optional[str]]] = None
    is_available: Callable[[WorldState], bool] = _always
    travel_to: Optional[str] = None
    grants_time: int = 0

    @property
    def is_travel(self) -> bool:
        return self.travel_to is not None

    def required_location(self, state: WorldState) -> Optional[str]:
        if self.location_for is not None:
            return self.location_for(state)
        return self.location


Provider = Callable[[WorldState], list[Action]]


class ActionRegistry:
    """Static actions grouped by category plus per-state dynamic providers."""

    def __init__(self) -> None:
        self._actions: dict[str, dict[str, Action]] = {}
        self._providers: dict[str, list[Provider]] = {}

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, action: Action) -> None:
        self._actions.setdefault(action.category, {})[action.id] = action
        self._providers.setdefault(action.category, [])

    def register_many(self, actions: list[Action]) -> None:
        for action in actions:
            self.register(action)

    def register_provider(self, category: str, provider: Provider) -> None:
        self._actions.setdefault(category, {})
        self._providers.setdefault(category, []).append(provider)

    def categories(self) -> list[str]:
        return list(self._actions)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _candidates(self, state: WorldState, category: Optional[str] = None) -> list[Action]:
        categories = [category] if category is not None else list(self._actions)
        found: list[Action] = []
        for cat in categories:
            found.extend(self._actions.get(cat, {}).values())
            for provider in self._providers.get(cat, ()):
                found.extend(provider(state))
        return found

    def get(self, state: WorldState, action_id: str) -> Optional[Action]:
        for action in self._candidates(state):
            if action.id == action_id:
                return action
        return None

    def is_available(self, state: WorldState, action: Action) -> bool:
        if action.is_travel:
            if state.time_budget < action.time_cost:
                return False
        elif not can_spend_time(state, action.time_cost):
            return False
        if action.cost and not can_afford(state, action.cost):
            return False
        required = action.required_location(state)
        if required and state.current_location != required:
            return False
        return action.is_available(state)

    def available(self, state: WorldState, category: Optional[str] = None) -> list[Action]:
        return [a for a in self._candidates(state, category) if self.is_available(state, a)]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def perform(self, state: WorldState, action_id: str, rng: np.random.Generator) -> ActionResult:
        action = self.get(state, action_id)
        if action is None:
            return ActionResult(False, f"Unknown action: {action_id}", None)
        if not self.is_available(state, action):
            return ActionResult(False, "Action not available", None)

        before = (state.time_budget, state.location_time, state.current_location, state.finances.cash)
        if action.is_travel:
            # Travel always pays from the yearly budget and opens a fresh local budget
            state.time_budget -= action.time_cost
            state.current_location = action.travel_to
            state.location_time = action.grants_time or DEFAULT_LOCATION_TIME
        elif not spend_time(state, action.time_cost):
            return ActionResult(False, "Not enough time", None)

        if action.cost and not modify_cash(state, -action.cost):
            return ActionResult(False, "Not enough money", None)

        result = action.perform(state, rng)
        if not result.success:
            # A refused action costs nothing
            state.time_budget, state.location_time, state.current_location, state.finances.cash = before
            return result
        if result.message and result.category:
            add_history(state, result.message, result.category)
        return result


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------

def simple_action(
    id: str,
    name: str,
    category: str,
    time_cost: int,
    is_available: Callable[[WorldState], bool],
    effect: Callable[[WorldState, np.random.Generator], Optional[ActionResult]],
    cost: int = 0,
    location: Optional[str] = None,
) -> Action:
    """Wrap a plain function; returning None counts as silent success."""

    def perform(state: WorldState, rng: np.random.Generator) -> ActionResult:
        result = effect(state, rng)
        return result if result is not None else ActionResult(True)

    return Action(
        id=id,
        name=name,
        category=category,
        time_cost=time_cost,
        perform=perform,
        cost=cost,
        location=location,
        is_available=is_available,
    )


def stat_modifier_action(
    id: str,
    name: str,
    category: str,
    time_cost: int,
    stat_changes: dict[str, int],
    is_available: Callable[[WorldState], bool] = _always,
    cost: int = 0,
    location: Optional[str] = None,
    message: str = "",
) -> Action:
    def perform(state: WorldState, rng: np.random.Generator) -> ActionResult:
        for stat, delta in stat_changes.items():
            modify_stat(state, stat, delta)
        return ActionResult(True, message)

    return Action(
        id=id,
        name=name,
        category=category,
        time_cost=time_cost,
        perform=perform,
        cost=cost,
        location=location,
        is_available=is_available,
    )
