"""Political content: offices, policies and scandals, plus office eligibility."""

from __future__ import annotations

from dataclasses import field
from typing import Optional

from pydantic import ConfigDict
from pydantic.dataclasses import dataclass

from lifesim.core.state import WorldState, has_education


@dataclass(config=ConfigDict(strict=True))
class PoliticalPosition:
    id: str
    title: str
    level: int
    min_age: int
    required_education: str
    min_smarts: int
    min_willpower: int
    min_political_years: int
    salary: int
    term_length: int
    term_limit: int
    is_elected: bool
    filing_fee: int
    base_campaign_cost: int
    government_types: list[str] = field(default_factory=list)
    next_positions: list[str] = field(default_factory=list)
    required_major: Optional[str] = None
    required_flag: Optional[str] = None
    min_authoritarian_score: Optional[int] = None
    min_military_control: Optional[int] = None


@dataclass(config=ConfigDict(strict=True))
class PolicyDefinition:
    id: str
    name: str
    ideology: str
    min_level: int
    net_approval_effect: int
    economy_effect: int
    karma_effect: int
    description: str = ""
    media_control_effect: int = 0
    military_control_effect: int = 0
    authoritarian_effect: int = 0
    corruption_effect: int = 0
    prerequisite_policies: list[str] = field(default_factory=list)
    conflicts_policies: list[str] = field(default_factory=list)


@dataclass(config=ConfigDict(strict=True))
class ScandalChoice:
    """Either deterministic (``approval_hit`` set) or a gamble (``success_chance`` set)."""

    text: str
    approval_hit: Optional[int] = None
    success_chance: Optional[float] = None
    success_approval: Optional[int] = None
    fail_approval: Optional[int] = None
    corruption_gain: int = 0
    karma_gain: int = 0
    karma_hit: int = 0
    authoritarian_gain: int = 0


@dataclass(config=ConfigDict(strict=True))
class ScandalDefinition:
    id: str
    title: str
    severity: str  # minor | moderate | major | critical
    approval_hit: int
    corruption_threshold: int
    description: str = ""
    triggers_impeachment: bool = False
    choices: list[ScandalChoice] = field(default_factory=list)


class PoliticalCatalog:
    def __init__(self) -> None:
        self.positions: list[PoliticalPosition] = []
        self.policies: list[PolicyDefinition] = []
        self.scandals: list[ScandalDefinition] = []

    def register_positions(self, positions: list[PoliticalPosition]) -> None:
        self.positions.extend(positions)

    def register_policies(self, policies: list[PolicyDefinition]) -> None:
        self.policies.extend(policies)

    def register_scandals(self, scandals: list[ScandalDefinition]) -> None:
        self.scandals.extend(scandals)

    def get_position(self, position_id: Optional[str]) -> Optional[PoliticalPosition]:
        for position in self.positions:
            if position.id == position_id:
                return position
        return None

    def get_policy(self, policy_id: str) -> Optional[PolicyDefinition]:
        for policy in self.policies:
            if policy.id == policy_id:
                return policy
        return None

    def get_scandal(self, scandal_id: str) -> Optional[ScandalDefinition]:
        for scandal in self.scandals:
            if scandal.id == scandal_id:
                return scandal
        return None


def is_eligible_for_position(state: WorldState, position: PoliticalPosition) -> bool:
    """Entry requirements only. Holding the seat already is not checked here."""
    pol = state.politics

    if state.age < position.min_age:
        return False
    if not has_education(state, position.required_education):
        return False
    if state.stats.smarts < position.min_smarts or state.stats.willpower < position.min_willpower:
        return False
    if pol.total_political_years < position.min_political_years:
        return False

    if position.required_major and state.education.major != position.required_major:
        return False
    if position.required_flag and not state.flags.get(position.required_flag):
        return False

    if position.min_authoritarian_score is not None and pol.authoritarian_score < position.min_authoritarian_score:
        return False
    if position.min_military_control is not None and pol.military_control < position.min_military_control:
        return False

    if position.government_types and pol.government_type not in position.government_types:
        return False

    # Term limits only block re-running for the seat already held
    if position.term_limit > 0 and pol.current_position == position.id and pol.terms_served >= position.term_limit:
        return False
    return True


def eligible_positions(state: WorldState, catalog: PoliticalCatalog) -> list[PoliticalPosition]:
    return [
        p for p in catalog.positions
        if is_eligible_for_position(state, p) and p.id != state.politics.current_position
    ]


def available_policies(state: WorldState, catalog: PoliticalCatalog) -> list[PolicyDefinition]:
    pol = state.politics
    if not pol.active:
        return []
    return [
        p for p in catalog.policies
        if p.min_level <= pol.position_level
        and p.id not in pol.policies_enacted
        and all(pre in pol.policies_enacted for pre in p.prerequisite_policies)
        and not any(c in pol.policies_enacted for c in p.conflicts_policies)
    ]
