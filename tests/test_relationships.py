from __future__ import annotations

from lifesim.core import config
from lifesim.social.interactions import available_interactions, interact
from lifesim.social.relationships import (
    age_up_npcs,
    initialize_family,
    is_romance_candidate,
    is_visible,
    visible_relationships,
)

from conftest import ScriptedRng, make_engine, make_npc


def _ids(engine, npc_id: str) -> list[str]:
    return [i.id for i in engine.available_interactions(npc_id)]


def test_converse() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.state.relationships.append(make_npc())

    result = engine.interact("friend_0", "converse")

    npc = engine.state.relationships[0]
    assert result.success
    assert result.category is None
    assert result.message == "You had a conversation with Robin Hale."
    assert npc.familiarity == 60
    assert engine.state.stats.happiness == config.DEFAULT_HAPPINESS + 1
    assert engine.state.time_budget == config.YEARLY_TIME_BUDGET - 1


def test_same_location_interactions_need_the_npc_nearby(state) -> None:
    state.relationships.append(make_npc(location=config.SCHOOL))
    ids = [i.id for i in available_interactions(state, "friend_0")]
    assert "converse" not in ids
    assert "call_message" in ids
    assert not interact(state, "friend_0", "converse", ScriptedRng()).success


def test_unknown_npc_or_interaction(state) -> None:
    state.relationships.append(make_npc())
    assert not interact(state, "nobody", "converse", ScriptedRng()).success
    assert not interact(state, "friend_0", "serenade", ScriptedRng()).success


def test_attempt_kill_needs_a_plot_or_a_disturbed_mind() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.state.relationships.append(make_npc())
    assert "attempt_kill" not in _ids(engine, "friend_0")

    engine.interact("friend_0", "plot_to_kill")
    assert engine.state.flags["plot_friend_0"] == engine.state.year
    assert "attempt_kill" in _ids(engine, "friend_0")
    assert "plot_to_kill" not in _ids(engine, "friend_0")

    del engine.state.flags["plot_friend_0"]
    assert "attempt_kill" not in _ids(engine, "friend_0")
    engine.state.stats.craziness = 65
    assert "attempt_kill" in _ids(engine, "friend_0")


def test_plot_then_kill() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.state.stats.craziness = 90
    engine.state.relationships.append(make_npc())
    karma = engine.state.stats.karma

    engine.interact("friend_0", "plot_to_kill")
    engine.interact("friend_0", "attempt_kill")

    npc = engine.state.relationships[0]
    assert not npc.is_alive
    assert engine.state.stats.karma < karma
    assert engine.state.stats.karma == config.DEFAULT_STAT - 8 - 30
    assert engine.state.stats.craziness == 100
    assert "plot_friend_0" not in engine.state.flags
    assert engine.state.flags["violent_record"] is True
    assert engine.state.flags["wanted"] is True
    assert engine.state.serial_killer.kills == 0
    assert any(h.text == "Your attack succeeded. Robin Hale is dead." for h in engine.state.history)
    assert engine.visible_relationships() == []
    assert engine.available_interactions("friend_0") == []


def test_full_time_killer_books_the_kill_and_gets_paid() -> None:
    engine = make_engine(ScriptedRng(0.0))
    state = engine.state
    state.stats.craziness = 90
    state.serial_killer.unlocked = True
    state.serial_killer.mode = "full_time"
    state.relationships.append(make_npc())

    engine.interact("friend_0", "attempt_kill")

    sk = state.serial_killer
    assert not state.relationships[0].is_alive
    assert sk.kills == 1
    assert sk.notoriety == 9
    assert sk.heat == 14
    assert sk.last_kill_year == state.year
    assert state.finances.cash == 4000
    assert state.history[-1].text == "Your underground network rewarded you $4,000 for the hit."
    assert "violent_record" not in state.flags


def test_failed_attack_makes_an_enemy() -> None:
    engine = make_engine(ScriptedRng(0.99))
    engine.state.stats.craziness = 70
    engine.state.relationships.append(make_npc())

    engine.interact("friend_0", "attempt_kill")

    npc = engine.state.relationships[0]
    assert npc.is_alive
    assert npc.type == "Enemy"
    assert npc.relationship_to_player == 0
    assert engine.state.stats.health == config.DEFAULT_HEALTH - 27
    assert engine.state.serial_killer.heat == 20


def test_children_need_a_marriage() -> None:
    engine = make_engine(ScriptedRng(0.0))
    engine.state.character.last_name = "Hale"
    engine.state.relationships.append(make_npc("partner_0", type="Partner", relationship_to_player=60))
    assert "try_for_baby" not in _ids(engine, "partner_0")

    engine.state.flags["married"] = True
    engine.interact("partner_0", "try_for_baby")

    child = engine.state.relationships[-1]
    assert child.type == "Child"
    assert child.name == f"{config.CHILD_NAMES[0]} Hale"
    assert child.age == 0
    assert child.location == config.HOME


def test_npcs_age_and_forget(state) -> None:
    state.relationships.append(make_npc())
    age_up_npcs(state, ScriptedRng(0.0))
    npc = state.relationships[0]
    assert npc.age == 21
    assert npc.familiarity == 50 - config.FAMILIARITY_DECAY_MIN
    assert npc.is_alive


def test_elderly_npcs_can_die(state) -> None:
    state.relationships.append(make_npc("partner_0", type="Partner", age=70))
    state.flags["married"] = True
    state.flags["spouse_id"] = "partner_0"

    age_up_npcs(state, ScriptedRng(0.0))

    assert not state.relationships[0].is_alive
    assert "married" not in state.flags
    assert state.history[-1].text == "Your partner Robin Hale died at the age of 71."
    assert state.stats.happiness == config.DEFAULT_HAPPINESS - config.BEREAVEMENT_HAPPINESS_LOSS


def test_family_without_siblings(state) -> None:
    initialize_family(state, "Hale", ScriptedRng(0.0))
    assert [n.name for n in state.relationships] == ["John Hale", "Jane Hale"]
    assert all(n.relationship_to_player == 100 for n in state.relationships)


def test_family_with_siblings(state) -> None:
    initialize_family(state, "Hale", ScriptedRng(0.99))
    assert [n.type for n in state.relationships] == ["Father", "Mother", "Brother", "Brother"]
    assert len({n.id for n in state.relationships}) == 4


def test_visibility(state) -> None:
    close = make_npc("friend_0", location="Gym", relationship_to_player=90)
    distant = make_npc("friend_1", location="Gym")
    teacher = make_npc("teacher_2", type="Teacher", location=config.HOME)
    stranger = make_npc("friend_3", relationship_to_player=0, familiarity=0)
    state.relationships.extend([close, distant, teacher, stranger])

    assert is_visible(state, close)
    assert not is_visible(state, distant)
    assert [n.id for n in visible_relationships(state)] == ["friend_0", "teacher_2"]

    state.current_location = config.SCHOOL
    assert [n.id for n in visible_relationships(state)] == ["teacher_2"]


def test_romance_excludes_family(state) -> None:
    assert is_romance_candidate(state, make_npc())
    assert not is_romance_candidate(state, make_npc(type="Mother"))
    assert not is_romance_candidate(state, make_npc(age=12))
