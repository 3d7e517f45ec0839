from __future__ import annotations

import math

import pytest

from lifesim.career.catalog import CareerCatalog, CareerDefinition
from lifesim.core.state import Npc, WorldState
from lifesim.politics.catalog import PoliticalCatalog, PoliticalPosition, PolicyDefinition
from lifesim.simulation.engine import Engine


class ScriptedRng:
    """Stand-in for ``numpy.random.Generator`` that replays scripted ``random()`` draws.

    Once the script runs out the last value repeats, so ``ScriptedRng(0.0)`` always rolls
    the minimum and ``ScriptedRng(0.99)`` always rolls near the maximum. ``integers``
    derives its result from the next ``random()`` draw.
    """

    def __init__(self, *values: float, default: float = 0.5) -> None:
        self._values = list(values)
        self._last = default
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        if self._values:
            self._last = self._values.pop(0)
        return self._last

    def integers(self, low: int, high=None) -> int:
        if high is None:
            low, high = 0, low
        return low + int(math.floor(self.random() * (high - low)))

    def uniform(self, low: float = 0.0, high: float = 1.0) -> float:
        return low + self.random() * (high - low)

    def choice(self, a, size=None, replace=True, p=None):
        items = list(range(a)) if isinstance(a, int) else list(a)
        if size is None:
            return items[self.integers(len(items))]
        return items[:size]


@pytest.fixture()
def state() -> WorldState:
    s = WorldState()
    s.age = 20
    s.education.level = "High School"
    return s


@pytest.fixture()
def office_career() -> CareerDefinition:
    return CareerDefinition(
        id="office_clerk",
        title="Office Clerk",
        field="Business",
        specialization="Administration",
        required_education="High School",
        min_age=18,
        min_smarts=35,
        min_willpower=30,
        start_salary=30000,
        annual_raise=0.03,
        difficulty=0.15,
        promotion_titles=["Office Clerk", "Office Supervisor", "Office Manager"],
    )


@pytest.fixture()
def wrestling_career() -> CareerDefinition:
    return CareerDefinition(
        id="aew_tag_wrestler",
        title="AEW Tag Team Wrestler",
        field="Wrestling",
        specialization="Tag Team",
        required_education="None",
        min_age=18,
        min_smarts=20,
        min_willpower=40,
        start_salary=60000,
        annual_raise=0.05,
        difficulty=0.4,
        promotion_titles=["Tag Team Wrestler", "Tag Team Contender", "Tag Team Champion"],
        min_athleticism=60,
    )


@pytest.fixture()
def careers(office_career: CareerDefinition, wrestling_career: CareerDefinition) -> CareerCatalog:
    catalog = CareerCatalog()
    catalog.register_careers([office_career, wrestling_career])
    return catalog


def make_position(id: str = "city_council", level: int = 1, **overrides) -> PoliticalPosition:
    values = dict(
        id=id,
        title=id.replace("_", " ").title(),
        level=level,
        min_age=21,
        required_education="High School",
        min_smarts=40,
        min_willpower=40,
        min_political_years=0,
        salary=45000,
        term_length=4,
        term_limit=2,
        is_elected=True,
        filing_fee=500,
        base_campaign_cost=10000,
        government_types=["democracy"],
    )
    values.update(overrides)
    return PoliticalPosition(**values)


def make_policy(id: str, min_level: int = 1, **overrides) -> PolicyDefinition:
    values = dict(
        id=id,
        name=id.replace("_", " ").title(),
        ideology="center",
        min_level=min_level,
        net_approval_effect=4,
        economy_effect=0,
        karma_effect=2,
    )
    values.update(overrides)
    return PolicyDefinition(**values)


@pytest.fixture()
def politics() -> PoliticalCatalog:
    catalog = PoliticalCatalog()
    catalog.register_positions([
        make_position("city_council", 1),
        make_position("governor", 3, min_age=30, min_political_years=2, salary=150000),
    ])
    catalog.register_policies([
        make_policy("school_lunch_program"),
        make_policy("universal_healthcare", 1, conflicts_policies=["privatize_healthcare"]),
        make_policy("privatize_healthcare", 1, conflicts_policies=["universal_healthcare"]),
        make_policy("advanced_surveillance", 1, authoritarian_effect=10, media_control_effect=15),
        make_policy("martial_law_powers", 1, prerequisite_policies=["advanced_surveillance"]),
    ])
    return catalog


def make_npc(id: str = "friend_0", **overrides) -> Npc:
    values = dict(
        id=id,
        name="Robin Hale",
        type="Friend",
        gender="Female",
        age=20,
        relationship_to_player=50,
        familiarity=50,
    )
    values.update(overrides)
    return Npc(**values)


def make_engine(rng=None, **kwargs) -> Engine:
    """An engine holding a blank 20-year-old at Home."""
    engine = Engine(rng=rng if rng is not None else ScriptedRng(), **kwargs)
    engine.state.age = 20
    engine.state.education.level = "High School"
    return engine
