"""Main simulation loop: the ordered annual tick and the player-facing operations."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Union

import numpy as np
from numpy.random import Generator

from lifesim.agents.character import start_new_life
from lifesim.career.actions import install_career_actions
from lifesim.career.catalog import CareerCatalog, CareerDefinition
from lifesim.career.jobs import process_career_year
from lifesim.career.shadow import process_shadow_year
from lifesim.core import bus as signals
from lifesim.core.config import (
    DEBT_INTEREST_RATE,
    HAPPY_HEAL_AMOUNT,
    HAPPY_HEAL_THRESHOLD,
    HEALTH_DECLINE_AGE,
    HEALTH_DECLINE_MAX,
    HEALTH_LONGEVITY_WEIGHT,
    HISTORY_AGE_UP,
    HISTORY_PRIMARY,
    HOME,
    LOOKS_DECLINE_AGE,
    LOOKS_DECLINE_MAX,
    MAX_LIFESPAN,
    MIN_OLD_AGE_DEATH_CHANCE,
    OLD_AGE_START,
    SMARTS_CREEP_MAX,
    STAT_MAX,
    UNHAPPY_DAMAGE,
    UNHAPPY_THRESHOLD,
    YEARLY_TIME_BUDGET,
)
from lifesim.core.bus import EventBus
from lifesim.core.state import (
    Npc,
    WorldState,
    add_history,
    clamp_stats,
    state_from_dict,
    state_to_dict,
)
from lifesim.economy.activities import install_activity_actions
from lifesim.education.programs import install_education_actions, process_education_year
from lifesim.politics.actions import install_political_actions
from lifesim.politics.annual import process_political_year
from lifesim.politics.catalog import PoliticalCatalog, PoliticalPosition, ScandalDefinition, eligible_positions
from lifesim.politics.scandals import resolve_scandal_choice
from lifesim.simulation.actions import Action, ActionRegistry, ActionResult
from lifesim.simulation.effects import apply_effects
from lifesim.simulation.events import EventRegistry, GameEvent, Outcome, last_year_flag, triggered_flag
from lifesim.social.interactions import INTERACTIONS, Interaction, available_interactions, interact
from lifesim.social.relationships import age_up_npcs, visible_relationships


@dataclass(frozen=True)
class TickStage:
    name: str
    run: Callable[["Engine"], None]


# ---------------------------------------------------------------------------
# Tick stages
# ---------------------------------------------------------------------------

def _calendar(engine: Engine) -> None:
    state = engine.state
    state.age += 1
    state.year += 1
    state.time_budget = YEARLY_TIME_BUDGET


def _passive_stats(engine: Engine) -> None:
    state, rng = engine.state, engine.rng
    if state.age > HEALTH_DECLINE_AGE:
        state.stats.health -= int(rng.integers(HEALTH_DECLINE_MAX))
    if state.age > LOOKS_DECLINE_AGE:
        state.stats.looks -= int(rng.integers(LOOKS_DECLINE_MAX))
    state.stats.smarts += int(rng.integers(SMARTS_CREEP_MAX))


def _education(engine: Engine) -> None:
    process_education_year(engine.state, engine.rng)


def _career(engine: Engine) -> None:
    process_career_year(engine.state, engine.careers, engine.rng)


def _shadow(engine: Engine) -> None:
    process_shadow_year(engine.state, engine.rng)


def _politics(engine: Engine) -> None:
    report = process_political_year(engine.state, engine.politics, engine.rng)
    if report.scandal is not None:
        engine.pending_scandal = report.scandal
        engine.bus.emit(signals.POLITICAL_SCANDAL, report.scandal)
    if report.impeached:
        engine.pending_scandal = None
        engine.bus.emit(signals.POLITICAL_IMPEACHED, engine.state)
        return
    if report.revolution_threat:
        engine.bus.emit(signals.POLITICAL_REVOLUTION_THREAT, engine.state)
    engine.bus.emit(signals.POLITICAL_YEAR_PROCESSED, engine.state)


def _relationships(engine: Engine) -> None:
    age_up_npcs(engine.state, engine.rng)


def _wellbeing(engine: Engine) -> None:
    stats = engine.state.stats
    if stats.happiness > HAPPY_HEAL_THRESHOLD and stats.health < STAT_MAX:
        stats.health += HAPPY_HEAL_AMOUNT
    if stats.happiness < UNHAPPY_THRESHOLD:
        stats.health -= UNHAPPY_DAMAGE


def _finances(engine: Engine) -> None:
    finances = engine.state.finances
    if finances.debt > 0:
        finances.debt += math.floor(finances.debt * DEBT_INTEREST_RATE)
    finances.cash += finances.salary - finances.expenses


def _clamp(engine: Engine) -> None:
    clamp_stats(engine.state)


def _birthday(engine: Engine) -> None:
    state = engine.state
    add_history(state, f"You are now {state.age} years old.", HISTORY_AGE_UP)
    engine.bus.emit(signals.AGE_UP, state.age)


def _random_event(engine: Engine) -> None:
    state = engine.state
    event = engine.events.select_random_event(state, engine.rng)
    if event is None:
        add_history(state, "Nothing much happened this year.", HISTORY_PRIMARY)
        engine.bus.emit(signals.STAT_CHANGED)
        return

    if event.unique:
        state.flags[triggered_flag(event.id)] = True
    if event.cooldown > 0:
        state.flags[last_year_flag(event.id)] = state.year
    engine.pending_event = event
    engine.bus.emit(signals.EVENT_TRIGGERED, event)


def _death(engine: Engine) -> None:
    state = engine.state
    if state.stats.health <= 0:
        engine.kill("Health complications", "You died of Health complications.")
        return
    if state.age < OLD_AGE_START:
        return

    chance = max(
        MIN_OLD_AGE_DEATH_CHANCE,
        (state.age - OLD_AGE_START) / 100 - state.stats.health / 100 * HEALTH_LONGEVITY_WEIGHT,
    )
    if engine.rng.random() < chance or state.age >= MAX_LIFESPAN:
        engine.kill("Old age", "You died peacefully of Old age.")


TICK_STAGES: tuple[TickStage, ...] = (
    TickStage("calendar", _calendar),
    TickStage("passive_stats", _passive_stats),
    TickStage("education", _education),
    TickStage("career", _career),
    TickStage("shadow", _shadow),
    TickStage("politics", _politics),
    TickStage("relationships", _relationships),
    TickStage("wellbeing", _wellbeing),
    TickStage("finances", _finances),
    TickStage("clamp", _clamp),
    TickStage("birthday", _birthday),
    TickStage("random_event", _random_event),
    TickStage("death", _death),
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class Engine:
    """Owns one life and everything needed to advance it."""

    def __init__(
        self,
        seed: Optional[int] = None,
        rng: Optional[Generator] = None,
        events: Optional[EventRegistry] = None,
        careers: Optional[CareerCatalog] = None,
        politics: Optional[PoliticalCatalog] = None,
        bus: Optional[EventBus] = None,
        interactions: Optional[dict[str, Interaction]] = None,
    ) -> None:
        self.rng: Generator = rng if rng is not None else np.random.default_rng(seed)
        self.state = WorldState()

        self.bus = bus if bus is not None else EventBus()
        self.events = events if events is not None else EventRegistry()
        self.careers = careers if careers is not None else CareerCatalog()
        self.politics = politics if politics is not None else PoliticalCatalog()
        self.interactions = interactions if interactions is not None else dict(INTERACTIONS)

        self.actions = ActionRegistry()
        install_activity_actions(self.actions)
        install_education_actions(self.actions)
        install_career_actions(self.actions, self.careers)
        install_political_actions(self.actions, self.politics)

        self.pending_event: Optional[GameEvent] = None
        self.pending_scandal: Optional[ScandalDefinition] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start_new_life(
        self,
        first_name: str,
        last_name: str,
        gender: str = "Male",
        country: str = "United States",
    ) -> WorldState:
        self.state = start_new_life(WorldState(), first_name, last_name, gender, country, self.rng)
        self.pending_event = None
        self.pending_scandal = None
        self.bus.emit(signals.STAT_CHANGED)
        return self.state

    def load_state(self, saved: Union[WorldState, dict]) -> WorldState:
        """Adopt a saved life. Records missing from older saves get their defaults."""
        if isinstance(saved, WorldState):
            saved = state_to_dict(saved)
        self.state = state_from_dict(saved)
        self.pending_event = None
        self.pending_scandal = None
        self.bus.emit(signals.STAT_CHANGED)
        return self.state

    def kill(self, cause: str, text: Optional[str] = None) -> None:
        state = self.state
        state.is_alive = False
        state.death_cause = cause
        if text:
            add_history(state, text, HISTORY_PRIMARY)
        self.bus.emit(signals.DEATH, cause)

    def age_up(self) -> None:
        """Advance one year through every tick stage, in order."""
        state = self.state
        if not state.is_alive:
            return
        if state.current_location != HOME:
            add_history(state, "You must return home before aging up.")
            self.bus.emit(signals.STAT_CHANGED)
            return

        for stage in TICK_STAGES:
            stage.run(self)

    def _announce_death(self) -> None:
        # Actions that kill (a failed coup) set the state directly and wrote their own history
        if not self.state.is_alive:
            self.state.death_cause = self.state.death_cause or "Unknown causes"
            self.bus.emit(signals.DEATH, self.state.death_cause)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_choice(self, event: GameEvent, index: int) -> Optional[Outcome]:
        """Apply a choice and roll its outcome. Returns the outcome that fired, if any."""
        if not 0 <= index < len(event.choices):
            return None
        state = self.state
        choice = event.choices[index]

        apply_effects(state, choice.effects, self.bus)
        add_history(state, f"You chose: {choice.text}")

        fired: Optional[Outcome] = None
        if choice.outcomes:
            roll = self.rng.random()
            cumulative = 0.0
            for outcome in choice.outcomes:
                cumulative += outcome.chance
                if roll <= cumulative:
                    add_history(state, outcome.description, HISTORY_PRIMARY)
                    apply_effects(state, outcome.effects, self.bus)
                    fired = outcome
                    break

        self.pending_event = None
        self.bus.emit(signals.CHOICE_MADE, {"event": event.id, "choice": index})
        return fired

    def resolve_scandal(self, index: int) -> ActionResult:
        scandal = self.pending_scandal
        if scandal is None:
            return ActionResult(False, "There is no scandal to respond to.", None)
        if not 0 <= index < len(scandal.choices):
            return ActionResult(False, "Invalid choice.", None)
        result = resolve_scandal_choice(self.state, scandal, index, self.rng)
        if result.message and result.category:
            add_history(self.state, result.message, result.category)
        self.pending_scandal = None
        self.bus.emit(signals.STAT_CHANGED)
        return result

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def available_actions(self, category: Optional[str] = None) -> list[Action]:
        if not self.state.is_alive:
            return []
        return self.actions.available(self.state, category)

    def perform_action(self, action_id: str) -> ActionResult:
        if not self.state.is_alive:
            return ActionResult(False, "You are no longer alive.", None)
        result = self.actions.perform(self.state, action_id, self.rng)
        if result.success:
            clamp_stats(self.state)
            self.bus.emit(signals.STAT_CHANGED)
        self._announce_death()
        return result

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def visible_relationships(self) -> list[Npc]:
        return visible_relationships(self.state)

    def available_interactions(self, npc_id: str) -> list[Interaction]:
        return available_interactions(self.state, npc_id, self.interactions)

    def interact(self, npc_id: str, interaction_id: str) -> ActionResult:
        if not self.state.is_alive:
            return ActionResult(False, "You are no longer alive.", None)
        result = interact(self.state, npc_id, interaction_id, self.rng, self.bus, self.interactions)
        self._announce_death()
        return result

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def eligible_careers(self) -> list[CareerDefinition]:
        if self.state.career.id is not None:
            return []
        return self.careers.eligible(self.state)

    def eligible_positions(self) -> list[PoliticalPosition]:
        return eligible_positions(self.state, self.politics)
