from __future__ import annotations

from dataclasses import asdict

from lifesim.core import config
from lifesim.core.state import state_to_dict
from lifesim.main import build_engine
from lifesim.simulation.actions import (
    ACTIVITY,
    CAREER,
    Action,
    ActionRegistry,
    ActionResult,
    simple_action,
    stat_modifier_action,
)

from conftest import ScriptedRng, make_engine, make_npc


def test_travel_pays_from_the_yearly_budget() -> None:
    engine = make_engine(ScriptedRng(0.0))
    state = engine.state

    assert engine.perform_action("go_to_gym").success
    assert state.current_location == "Gym"
    assert state.time_budget == config.YEARLY_TIME_BUDGET - 1
    assert state.location_time == 6
    assert state.history[-1].text == "You traveled to the gym."


def test_local_actions_spend_location_time() -> None:
    engine = make_engine(ScriptedRng(0.0))
    state = engine.state
    state.finances.cash = 100
    engine.perform_action("go_to_gym")

    result = engine.perform_action("workout")

    assert result.success
    assert state.location_time == 3
    assert state.time_budget == config.YEARLY_TIME_BUDGET - 1
    assert state.finances.cash == 90
    assert state.stats.athleticism == 52
    assert state.activities_experience["workout"] == 1


def test_going_home_opens_a_fresh_home_budget() -> None:
    engine = make_engine()
    engine.perform_action("go_to_movies")
    assert engine.perform_action("go_home").success
    assert engine.state.current_location == config.HOME
    assert engine.state.time_budget == config.YEARLY_TIME_BUDGET - 2


def test_location_bound_action_unavailable_elsewhere() -> None:
    engine = make_engine()
    result = engine.perform_action("workout")
    assert not result.success
    assert result.message == "Action not available"
    assert "workout" not in [a.id for a in engine.available_actions()]


def test_unaffordable_action_is_unavailable() -> None:
    engine = make_engine()
    engine.perform_action("go_to_movies")
    assert "watch_movie" not in [a.id for a in engine.available_actions(ACTIVITY)]
    engine.state.finances.cash = 15
    assert "watch_movie" in [a.id for a in engine.available_actions(ACTIVITY)]


def test_unknown_action() -> None:
    result = make_engine().perform_action("fly_to_moon")
    assert not result.success
    assert "Unknown action" in result.message


def test_out_of_time() -> None:
    engine = make_engine()
    engine.state.time_budget = 1
    assert not engine.perform_action("read_book").success
    assert engine.state.time_budget == 1


def test_dead_player_cannot_act() -> None:
    engine = make_engine()
    engine.state.is_alive = False
    assert engine.available_actions() == []
    assert not engine.perform_action("walk").success


def test_registry_logs_successful_messages(state) -> None:
    registry = ActionRegistry()
    registry.register_many([
        stat_modifier_action("nap", "Nap", ACTIVITY, 1, {"happiness": 5}, message="You took a nap."),
        simple_action("sulk", "Sulk", ACTIVITY, 1, lambda s: True, lambda s, rng: None),
        Action("quiet", "Quiet", ACTIVITY, 1, lambda s, rng: ActionResult(True, "Shh.", None)),
    ])

    registry.perform(state, "nap", ScriptedRng())
    registry.perform(state, "sulk", ScriptedRng())
    registry.perform(state, "quiet", ScriptedRng())

    assert [h.text for h in state.history] == ["You took a nap."]
    assert state.stats.happiness == config.DEFAULT_HAPPINESS + 5
    assert state.time_budget == config.YEARLY_TIME_BUDGET - 3


def test_providers_supply_actions_per_state(state) -> None:
    registry = ActionRegistry()

    def provide(s):
        if s.age < 18:
            return []
        return [simple_action("vote", "Vote", CAREER, 1, lambda _: True, lambda _s, _r: None)]

    registry.register_provider(CAREER, provide)
    assert registry.categories() == [CAREER]
    assert [a.id for a in registry.available(state)] == ["vote"]
    state.age = 12
    assert registry.get(state, "vote") is None


def test_refused_actions_leave_the_state_untouched() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.perform_action("go_to_movies")
    engine.state.finances.cash = 5
    engine.state.relationships.append(make_npc(location=config.SCHOOL))
    before = state_to_dict(engine.state)

    refusals = [
        engine.perform_action("watch_movie"),
        engine.perform_action("workout"),
        engine.perform_action("apply_office_clerk"),
        engine.perform_action("fly_to_moon"),
        engine.interact("friend_0", "converse"),
        engine.interact("friend_0", "serenade"),
        engine.interact("nobody", "call_message"),
    ]
    engine.state.location_time = 0
    before_time = state_to_dict(engine.state)
    refusals.append(engine.perform_action("watch_movie"))
    refusals.append(engine.interact("friend_0", "call_message"))

    assert not any(r.success for r in refusals)
    assert state_to_dict(engine.state) == before_time
    before_time["location_time"] = before["location_time"]
    assert before_time == before


def test_failed_perform_refunds_time_and_money(state) -> None:
    registry = ActionRegistry()
    registry.register(Action("haggle", "Haggle", ACTIVITY, 2, lambda s, rng: ActionResult(False, "No deal."), cost=10))
    state.finances.cash = 50

    result = registry.perform(state, "haggle", ScriptedRng())

    assert not result.success
    assert state.finances.cash == 50
    assert state.time_budget == config.YEARLY_TIME_BUDGET
    assert state.history == []


def test_stats_stay_in_bounds_over_a_busy_life() -> None:
    engine = build_engine(seed=7)
    engine.start_new_life("Casey", "Rowe")
    engine.state.finances.cash = 100_000

    for _ in range(30):
        for destination in ("go_to_gym", "go_to_school", "go_to_office", "go_home"):
            engine.perform_action(destination)
            for action in engine.available_actions():
                if not action.is_travel:
                    engine.perform_action(action.id)
                for value in asdict(engine.state.stats).values():
                    assert 0 <= value <= 100
        engine.age_up()
        if not engine.state.is_alive:
            break
        if engine.pending_event is not None:
            engine.handle_choice(engine.pending_event, 0)
        for value in asdict(engine.state.stats).values():
            assert 0 <= value <= 100
