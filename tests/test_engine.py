from __future__ import annotations

from lifesim.core import bus as signals
from lifesim.core import config
from lifesim.core.state import WorldState
from lifesim.politics.catalog import ScandalChoice, ScandalDefinition
from lifesim.simulation.engine import TICK_STAGES, Engine
from lifesim.simulation.events import GameEvent, last_year_flag, triggered_flag

from conftest import ScriptedRng, make_engine


def _listen(engine, name: str) -> list:
    received: list = []
    engine.bus.on(name, received.append)
    return received


def test_tick_stage_order() -> None:
    assert [s.name for s in TICK_STAGES] == [
        "calendar", "passive_stats", "education", "career", "shadow", "politics",
        "relationships", "wellbeing", "finances", "clamp", "birthday", "random_event", "death",
    ]


def test_start_new_life() -> None:
    engine = Engine(rng=ScriptedRng(0.0))
    stat_events = _listen(engine, signals.STAT_CHANGED)

    state = engine.start_new_life("Ada", "Lovelace", "Female", "United Kingdom")

    assert state is engine.state
    assert state.age == 0
    assert state.character.talent == config.TALENTS[0]
    assert state.character.traits == [config.PERSONALITY_TRAITS[0]]
    assert state.stats.smarts == config.BIRTH_STAT_ROLLS["smarts"][0]
    assert state.history[0].text == "You were born a Female named Ada Lovelace in United Kingdom."
    assert state.history[0].category == config.HISTORY_PRIMARY
    assert [n.type for n in state.relationships] == ["Father", "Mother"]
    assert len(stat_events) == 1


def test_age_up_runs_a_quiet_year() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.state.time_budget = 0
    ages = _listen(engine, signals.AGE_UP)

    engine.age_up()

    state = engine.state
    assert state.age == 21
    assert state.year == 2026
    assert state.time_budget == config.YEARLY_TIME_BUDGET
    assert ages == [21]
    assert state.history[-2].text == "You are now 21 years old."
    assert state.history[-2].category == config.HISTORY_AGE_UP
    assert state.history[-1].text == "Nothing much happened this year."
    assert state.is_alive


def test_salary_and_debt_interest() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.state.finances.salary = 30000
    engine.state.finances.expenses = 10000
    engine.state.finances.debt = 1000

    engine.age_up()

    assert engine.state.finances.cash == 20000
    assert engine.state.finances.debt == 1050


def test_aging_up_requires_being_home() -> None:
    engine = make_engine()
    engine.perform_action("go_to_gym")

    engine.age_up()

    assert engine.state.age == 20
    assert engine.state.history[-1].text == "You must return home before aging up."


def test_nobody_outlives_the_maximum_lifespan() -> None:
    engine = make_engine(ScriptedRng(0.99))
    engine.state.age = config.MAX_LIFESPAN - 1
    engine.state.stats.health = 100
    deaths = _listen(engine, signals.DEATH)

    engine.age_up()

    assert not engine.state.is_alive
    assert engine.state.death_cause == "Old age"
    assert deaths == ["Old age"]

    engine.age_up()
    assert engine.state.age == config.MAX_LIFESPAN
    assert not engine.perform_action("walk").success


def test_zero_health_is_fatal() -> None:
    engine = make_engine(ScriptedRng(0.99))
    engine.state.stats.health = 0

    engine.age_up()

    assert not engine.state.is_alive
    assert engine.state.death_cause == "Health complications"
    assert engine.state.history[-1].text == "You died of Health complications."


def test_random_event_becomes_pending() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.events.register_event(GameEvent("street_fair", "Street Fair", 0, 100, 1.0, unique=True, cooldown=2))
    triggered = _listen(engine, signals.EVENT_TRIGGERED)

    engine.age_up()

    state = engine.state
    assert engine.pending_event is not None
    assert engine.pending_event.id == "street_fair"
    assert triggered == [engine.pending_event]
    assert state.flags[triggered_flag("street_fair")] is True
    assert state.flags[last_year_flag("street_fair")] == state.year


def test_scandal_response() -> None:
    engine = make_engine()
    assert not engine.resolve_scandal(0).success

    engine.pending_scandal = ScandalDefinition(
        "leaked_memo", "Leaked Memo", "minor", -5, 0,
        choices=[ScandalChoice("Deny everything", approval_hit=-2)],
    )
    assert not engine.resolve_scandal(3).success
    assert engine.pending_scandal is not None

    result = engine.resolve_scandal(0)

    assert result.success
    assert engine.pending_scandal is None
    assert engine.state.politics.approval_rating == config.DEFAULT_APPROVAL - 2
    assert engine.state.history[-1].text == result.message


def test_load_state_migrates_old_saves() -> None:
    engine = Engine(rng=ScriptedRng())
    saved = {
        "age": 34,
        "stats": {"smarts": 71, "charm": 12},
        "flags": {
            "wrestling_ring_name": "The Storm",
            "wrestling_tryout_attempts": "2",
            "wrestling_retired": True,
            "met_mentor": 1,
        },
    }

    state = engine.load_state(saved)

    assert state.version == config.STATE_VERSION
    assert state.age == 34
    assert state.stats.smarts == 71
    assert state.stats.health == config.DEFAULT_HEALTH
    assert state.flags == {"met_mentor": 1}
    assert state.wrestling.ring_name == "The Storm"
    assert state.wrestling.tryout_attempts == 2
    assert state.wrestling.retired is True
    assert state.wrestling_contract is None


def test_load_state_accepts_a_live_state() -> None:
    original = WorldState(age=40)
    original.flags["veteran"] = True
    engine = Engine(rng=ScriptedRng())

    state = engine.load_state(original)

    assert state is not original
    assert state.age == 40
    assert state.flags == {"veteran": True}
