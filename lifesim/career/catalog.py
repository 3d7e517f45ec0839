"""Career and shadow-contract definitions plus application eligibility."""

from __future__ import annotations

from dataclasses import field
from typing import Callable, Optional

from numpy.random import Generator
from pydantic import ConfigDict
from pydantic.dataclasses import dataclass

from lifesim.core.config import ARENA, COURT, OFFICE, WRESTLING_FIELD, WRESTLING_TRYOUT_BUFFER
from lifesim.core.state import WorldState, has_education
from lifesim.simulation.actions import CAREER, Action, ActionResult


@dataclass(config=ConfigDict(strict=True))
class CareerDefinition:
    id: str
    title: str
    field: str
    specialization: str
    required_education: str
    min_age: int
    min_smarts: int
    min_willpower: int
    start_salary: int
    annual_raise: float
    difficulty: float
    promotion_titles: list[str] = field(default_factory=list)
    required_majors: list[str] = field(default_factory=list)
    required_flags_all: list[str] = field(default_factory=list)
    min_athleticism: Optional[int] = None
    min_looks: Optional[int] = None
    required_total_years_experience: Optional[int] = None
    required_law_years: Optional[int] = None
    required_licensed_law_years: Optional[int] = None

    @property
    def is_wrestling(self) -> bool:
        return self.field == WRESTLING_FIELD


@dataclass(config=ConfigDict(strict=True))
class SerialContract:
    id: str
    codename: str
    min_age: int
    min_notoriety: int
    payout: int
    heat_gain: int
    notoriety_gain: int
    risk: float


def career_action_location(action_id: str, state: WorldState) -> Optional[str]:
    """Where a career action must be performed; None means anywhere."""
    if action_id.startswith("apply_"):
        return None
    if action_id.startswith("wrestling_"):
        return ARENA
    if action_id.startswith("serial_") or action_id == "unlock_serial_path":
        return None

    field_name = state.career.field
    if not field_name:
        return None
    if field_name == WRESTLING_FIELD:
        return ARENA
    if field_name == "Law":
        return COURT
    return OFFICE


def career_action(
    id: str,
    name: str,
    time_cost: int,
    is_available: Callable[[WorldState], bool],
    perform: Callable[[WorldState, Generator], ActionResult],
    cost: int = 0,
) -> Action:
    return Action(
        id=id,
        name=name,
        category=CAREER,
        time_cost=time_cost,
        perform=perform,
        cost=cost,
        location_for=lambda state: career_action_location(id, state),
        is_available=is_available,
    )


def _floor(minimum: int, buffer: int) -> int:
    return max(0, minimum - buffer)


def can_apply(state: WorldState, career: CareerDefinition) -> bool:
    """Entry requirements for a job. Holding a job already is checked by the caller."""
    buffer = WRESTLING_TRYOUT_BUFFER if career.is_wrestling and state.wrestling.tryout_invited else 0
    stats = state.stats
    history = state.career

    if state.age < career.min_age:
        return False
    if not has_education(state, career.required_education):
        return False
    if stats.smarts < _floor(career.min_smarts, buffer):
        return False
    if stats.willpower < _floor(career.min_willpower, buffer):
        return False
    if career.min_athleticism is not None and stats.athleticism < _floor(career.min_athleticism, buffer):
        return False
    if career.min_looks is not None and stats.looks < _floor(career.min_looks, buffer):
        return False
    if (career.required_total_years_experience is not None
            and history.total_years_experience < career.required_total_years_experience):
        return False
    if career.required_majors and state.education.major not in career.required_majors:
        return False
    if any(state.flags.get(flag) is not True for flag in career.required_flags_all):
        return False
    if career.required_law_years is not None and history.law_years_experience < career.required_law_years:
        return False
    if (career.required_licensed_law_years is not None
            and history.licensed_law_years_experience < career.required_licensed_law_years):
        return False
    return True


class CareerCatalog:
    """Registered careers and shadow contracts, in registration order."""

    def __init__(self) -> None:
        self._careers: dict[str, CareerDefinition] = {}
        self.serial_contracts: list[SerialContract] = []

    def register_careers(self, careers: list[CareerDefinition]) -> None:
        for career in careers:
            self._careers[career.id] = career

    def register_serial_contracts(self, contracts: list[SerialContract]) -> None:
        self.serial_contracts.extend(contracts)

    def get(self, career_id: Optional[str]) -> Optional[CareerDefinition]:
        if career_id is None:
            return None
        return self._careers.get(career_id)

    def all_careers(self) -> list[CareerDefinition]:
        return list(self._careers.values())

    def eligible(self, state: WorldState) -> list[CareerDefinition]:
        return [c for c in self._careers.values() if can_apply(state, c)]

    def viable_contracts(self, state: WorldState) -> list[SerialContract]:
        return [
            c for c in self.serial_contracts
            if state.age >= c.min_age and state.serial_killer.notoriety >= c.min_notoriety
        ]
