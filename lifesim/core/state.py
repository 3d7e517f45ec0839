"""World state records, shared mutation helpers, and versioned save handling."""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Optional

from lifesim.core.config import (
    DEFAULT_APPROVAL,
    DEFAULT_GOVERNMENT,
    DEFAULT_GPA,
    DEFAULT_HAPPINESS,
    DEFAULT_HEALTH,
    DEFAULT_LOCATION_TIME,
    DEFAULT_OPPOSITION,
    DEFAULT_PERFORMANCE,
    DEFAULT_STAT,
    EDUCATION_RANK,
    HISTORY_SECONDARY,
    HOME,
    STATE_VERSION,
    STAT_MAX,
    STAT_MIN,
    STAT_NAMES,
    YEARLY_TIME_BUDGET,
)


@dataclass
class Stats:
    health: int = DEFAULT_HEALTH
    happiness: int = DEFAULT_HAPPINESS
    smarts: int = DEFAULT_STAT
    looks: int = DEFAULT_STAT
    karma: int = DEFAULT_STAT
    athleticism: int = DEFAULT_STAT
    craziness: int = DEFAULT_STAT
    willpower: int = DEFAULT_STAT
    fertility: int = DEFAULT_STAT


@dataclass
class Character:
    first_name: str = ""
    last_name: str = ""
    gender: str = "Non-binary"
    country: str = ""
    talent: str = ""
    traits: list[str] = field(default_factory=list)


@dataclass
class Finances:
    cash: int = 0
    salary: int = 0
    expenses: int = 0
    debt: int = 0


@dataclass
class HistoryEntry:
    age: int
    year: int
    text: str
    category: str = HISTORY_SECONDARY


@dataclass
class Npc:
    """A person (or pet) the player knows. Dead NPCs stay in the list."""

    id: str
    name: str
    type: str
    gender: str = "Unknown"
    age: int = 0
    health: int = 80
    happiness: int = 50
    smarts: int = 50
    looks: int = 50
    relationship_to_player: int = 0
    familiarity: int = 0
    location: str = HOME
    is_alive: bool = True
    traits: list[str] = field(default_factory=list)
    workplace: Optional[str] = None
    promotion_id: Optional[str] = None


@dataclass
class Education:
    level: str = "None"
    major: Optional[str] = None
    in_program: bool = False
    program_id: Optional[str] = None
    program_name: Optional[str] = None
    program_years_completed: int = 0
    gpa: float = DEFAULT_GPA
    study_effort: int = 0
    scholarships: int = 0
    student_debt: int = 0


@dataclass
class Career:
    id: Optional[str] = None
    title: Optional[str] = None
    field: Optional[str] = None
    specialization: Optional[str] = None
    years_in_role: int = 0
    total_years_experience: int = 0
    law_years_experience: int = 0
    licensed_law_years_experience: int = 0
    performance: int = DEFAULT_PERFORMANCE
    level: int = 0
    rejections: int = 0


@dataclass
class SerialKiller:
    unlocked: bool = False
    caught: bool = False
    mode: str = "none"  # none | double_life | full_time
    alias: Optional[str] = None
    kills: int = 0
    contracts_completed: int = 0
    notoriety: int = 0
    heat: int = 0
    last_kill_year: Optional[int] = None
    last_contract_year: Optional[int] = None


@dataclass
class Politics:
    active: bool = False
    party: Optional[str] = None
    ideology: Optional[str] = None
    current_position: Optional[str] = None
    position_title: Optional[str] = None
    position_level: int = 0
    years_in_office: int = 0
    terms_served: int = 0
    total_political_years: int = 0
    approval_rating: int = DEFAULT_APPROVAL
    influence: int = 0
    party_loyalty: int = 0
    corruption_level: int = 0
    campaign_active: bool = False
    target_position: Optional[str] = None
    campaign_budget: int = 0
    campaign_funds: int = 0
    endorsements: list[str] = field(default_factory=list)
    debates_won: int = 0
    rallies_held: int = 0
    has_run_for_office: bool = False
    has_lost_election: bool = False
    is_term_limited: bool = False
    policies_enacted: list[str] = field(default_factory=list)
    legislative_record: int = 0
    scandals_exposed: int = 0
    under_investigation: bool = False
    impeachment_risk: int = 0
    authoritarian_score: int = 0
    military_control: int = 0
    media_control: int = 0
    opposition_strength: int = DEFAULT_OPPOSITION
    government_type: str = DEFAULT_GOVERNMENT
    vetoes: int = 0
    has_declared_martial_law: bool = False
    has_staged_coup: bool = False
    has_been_impeached: bool = False


@dataclass
class ContractClauses:
    downside_guarantee: int = 0
    merch_cut_percent: int = 5
    appearance_minimum: int = 12
    non_compete_months: int = 0
    creative_control: bool = False
    injury_protection: bool = False
    travel_covered: bool = False
    exclusivity: str = "exclusive"


@dataclass
class RivalOffer:
    promotion_id: str
    promotion_name: str
    annual_salary: int
    term_years: int
    clauses: ContractClauses = field(default_factory=ContractClauses)


@dataclass
class WrestlingContract:
    promotion_id: str
    promotion_name: str
    start_year: int
    end_year: int
    annual_salary: int
    clauses: ContractClauses = field(default_factory=ContractClauses)
    rival_offer: Optional[RivalOffer] = None


@dataclass
class WrestlingProfile:
    """In-ring persona. ``ring_name is None`` means the persona has not been created yet."""

    ring_name: Optional[str] = None
    fan_base: Optional[int] = None
    momentum: Optional[int] = None
    promo_skill: Optional[int] = None
    alignment: Optional[str] = None
    push: Optional[int] = None
    injury_years: int = 0
    retired: bool = False
    tryout_attempts: int = 0
    tryout_invited: bool = False


@dataclass
class WorldState:
    """Everything about one life. Owned by the engine and mutated in place."""

    version: int = STATE_VERSION
    character: Character = field(default_factory=Character)
    stats: Stats = field(default_factory=Stats)
    flags: dict[str, Any] = field(default_factory=dict)
    history: list[HistoryEntry] = field(default_factory=list)
    age: int = 0
    year: int = 2025
    is_alive: bool = True
    death_cause: Optional[str] = None
    finances: Finances = field(default_factory=Finances)
    relationships: list[Npc] = field(default_factory=list)
    time_budget: int = YEARLY_TIME_BUDGET
    location_time: int = DEFAULT_LOCATION_TIME
    current_location: str = HOME
    activities_experience: dict[str, int] = field(default_factory=dict)
    education: Education = field(default_factory=Education)
    career: Career = field(default_factory=Career)
    serial_killer: SerialKiller = field(default_factory=SerialKiller)
    politics: Politics = field(default_factory=Politics)
    wrestling: WrestlingProfile = field(default_factory=WrestlingProfile)
    wrestling_contract: Optional[WrestlingContract] = None


# ---------------------------------------------------------------------------
# Mutation helpers
# ---------------------------------------------------------------------------

def clamp(value: float, lo: int = STAT_MIN, hi: int = STAT_MAX) -> int:
    """Round half up, then clamp to [lo, hi]."""
    return max(lo, min(hi, int(math.floor(value + 0.5))))


def modify_stat(state: WorldState, stat: str, delta: float) -> None:
    setattr(state.stats, stat, clamp(getattr(state.stats, stat) + delta))


def clamp_stats(state: WorldState) -> None:
    for name in STAT_NAMES:
        setattr(state.stats, name, clamp(getattr(state.stats, name)))


def add_history(state: WorldState, text: str, category: str = HISTORY_SECONDARY) -> None:
    state.history.append(HistoryEntry(age=state.age, year=state.year, text=text, category=category))


def available_time(state: WorldState) -> int:
    if state.current_location == HOME:
        return state.time_budget
    return state.location_time


def can_spend_time(state: WorldState, cost: int) -> bool:
    return available_time(state) >= cost


def spend_time(state: WorldState, cost: int) -> bool:
    """Deduct from whichever budget is active at the current location."""
    if not can_spend_time(state, cost):
        return False
    if state.current_location == HOME:
        state.time_budget -= cost
    else:
        state.location_time -= cost
    return True


def modify_cash(state: WorldState, amount: int) -> bool:
    if state.finances.cash + amount < 0:
        return False
    state.finances.cash += amount
    return True


def can_afford(state: WorldState, cost: int) -> bool:
    return state.finances.cash >= cost


def education_rank(level: Optional[str]) -> int:
    return EDUCATION_RANK.get(level or "None", 0)


def has_education(state: WorldState, required: Optional[str]) -> bool:
    return education_rank(state.education.level) >= education_rank(required)


def clear_career(state: WorldState) -> None:
    """Leave the current job. Accumulated experience is kept."""
    career = state.career
    career.id = None
    career.title = None
    career.field = None
    career.specialization = None
    career.years_in_role = 0
    career.performance = DEFAULT_PERFORMANCE
    career.level = 0
    state.finances.salary = 0
    state.wrestling_contract = None


_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])")


def to_attr(name: str) -> str:
    """Map a content field name (``approvalRating``) to its attribute (``approval_rating``)."""
    return _CAMEL_BOUNDARY.sub(r"_\1", name).lower()


def find_npc(state: WorldState, npc_id: str) -> Optional[Npc]:
    for npc in state.relationships:
        if npc.id == npc_id:
            return npc
    return None


def next_npc_id(state: WorldState, prefix: str) -> str:
    # NPCs are never removed, so list length is a stable counter
    return f"{prefix}_{len(state.relationships)}"


# ---------------------------------------------------------------------------
# Save format
# ---------------------------------------------------------------------------

_V1_WRESTLING_FLAGS = {
    "wrestling_ring_name": "ring_name",
    "wrestling_fan_base": "fan_base",
    "wrestling_momentum": "momentum",
    "wrestling_promo_skill": "promo_skill",
    "wrestling_alignment": "alignment",
    "wrestling_push": "push",
    "wrestling_injury_years": "injury_years",
    "wrestling_retired": "retired",
    "wrestling_tryout_attempts": "tryout_attempts",
    "wrestling_tryout_invited": "tryout_invited",
}


def state_to_dict(state: WorldState) -> dict:
    return asdict(state)


def migrate_v1_to_v2(raw: dict) -> dict:
    """Move the old ``wrestling_*`` flags into the typed wrestling profile."""
    raw = dict(raw)
    flags = dict(raw.get("flags") or {})
    profile = dict(raw.get("wrestling") or {})
    for flag_name, attr in _V1_WRESTLING_FLAGS.items():
        if flag_name in flags:
            value = flags.pop(flag_name)
            if attr == "tryout_attempts":
                value = int(value or 0)
            elif attr in ("retired", "tryout_invited"):
                value = value is True
            profile.setdefault(attr, value)
    raw["flags"] = flags
    raw["wrestling"] = profile
    raw["version"] = 2
    return raw


_MIGRATIONS = {1: migrate_v1_to_v2}


def _record(cls, raw: Optional[dict], **nested):
    """Build a dataclass from a mapping, filling defaults and dropping unknown keys."""
    if raw is None:
        raw = {}
    names = {f.name for f in fields(cls)}
    kwargs = {k: v for k, v in raw.items() if k in names}
    kwargs.update(nested)
    return cls(**kwargs)


def _contract_from_dict(raw: Optional[dict]) -> Optional[WrestlingContract]:
    if not raw:
        return None
    offer_raw = raw.get("rival_offer")
    offer = None
    if offer_raw:
        offer = _record(RivalOffer, offer_raw, clauses=_record(ContractClauses, offer_raw.get("clauses")))
    return _record(
        WrestlingContract,
        raw,
        clauses=_record(ContractClauses, raw.get("clauses")),
        rival_offer=offer,
    )


def state_from_dict(raw: dict) -> WorldState:
    """Rebuild a WorldState from a saved mapping of any known version."""
    version = raw.get("version")
    if not isinstance(version, int):
        version = 1
    while version < STATE_VERSION:
        raw = _MIGRATIONS[version](raw)
        version += 1

    return _record(
        WorldState,
        raw,
        version=STATE_VERSION,
        character=_record(Character, raw.get("character")),
        stats=_record(Stats, raw.get("stats")),
        flags=dict(raw.get("flags") or {}),
        history=[_record(HistoryEntry, h) for h in raw.get("history") or []],
        finances=_record(Finances, raw.get("finances")),
        relationships=[_record(Npc, n) for n in raw.get("relationships") or []],
        activities_experience=dict(raw.get("activities_experience") or {}),
        education=_record(Education, raw.get("education")),
        career=_record(Career, raw.get("career")),
        serial_killer=_record(SerialKiller, raw.get("serial_killer")),
        politics=_record(Politics, raw.get("politics")),
        wrestling=_record(WrestlingProfile, raw.get("wrestling")),
        wrestling_contract=_contract_from_dict(raw.get("wrestling_contract")),
    )
