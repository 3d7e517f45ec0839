"""Professional wrestling: persona, contracts, rival offers and the in-ring year."""

from __future__ import annotations

from typing import Optional

from numpy.random import Generator

from lifesim.core.config import (
    ARENA,
    BACKSTAGE_TITLE_WORDS,
    HISTORY_PRIMARY,
    INJURY_CHANCE_MAX,
    INJURY_CHANCE_MIN,
    PROMOTION_NAMES,
    RING_NAMES,
    RIVAL_PROMOTIONS,
    SEVERE_INJURY_CHANCE,
    WRESTLING_CONTACTS,
    WRESTLING_CONTACT_NAMES,
    WRESTLING_CONTRACT_YEARS,
    WRESTLING_FIELD,
    WRESTLING_RETIREMENT_AGE,
    WRESTLING_STYLE_RISK,
    WRESTLING_TRAIT,
)
from lifesim.core.state import (
    ContractClauses,
    Npc,
    RivalOffer,
    WorldState,
    WrestlingContract,
    add_history,
    clamp,
    clear_career,
    next_npc_id,
)
from lifesim.career.catalog import CareerDefinition, career_action
from lifesim.simulation.actions import Action, ActionResult

FALLBACK_RATING = 30


def is_wrestling_career(state: WorldState) -> bool:
    return state.career.field == WRESTLING_FIELD


def is_backstage_role(state: WorldState) -> bool:
    title = (state.career.title or "").lower()
    specialization = (state.career.specialization or "").lower()
    return "backstage" in specialization or any(w in title for w in BACKSTAGE_TITLE_WORDS)


def style_risk_multiplier(state: WorldState) -> float:
    specialization = (state.career.specialization or "").lower()
    for keywords, multiplier in WRESTLING_STYLE_RISK:
        if any(k in specialization for k in keywords):
            return multiplier
    return 1.0


def infer_promotion_id(career: CareerDefinition) -> str:
    career_id = career.id.lower()
    for promotion_id in ("wwe", "aew", "njpw", "cmll", "global", "indie"):
        if promotion_id in career_id:
            return promotion_id
    if any(w in career_id for w in BACKSTAGE_TITLE_WORDS):
        return "backstage"
    return "regional"


def promotion_name(promotion_id: str) -> str:
    return PROMOTION_NAMES.get(promotion_id, PROMOTION_NAMES["regional"])


def _rating(value: Optional[int], fallback: int = FALLBACK_RATING) -> int:
    return fallback if value is None else value


def _shift(state: WorldState, attr: str, delta: float, fallback: int = FALLBACK_RATING) -> None:
    profile = state.wrestling
    setattr(profile, attr, clamp(_rating(getattr(profile, attr), fallback) + delta))


# ---------------------------------------------------------------------------
# Contracts
# ---------------------------------------------------------------------------

def generate_contract_clauses(base_salary: int, rng: Generator) -> ContractClauses:
    downside = int(base_salary * (0.65 + rng.random() * 0.25))
    merch_cut = clamp(5 + rng.random() * 10, 3, 18)
    appearances = clamp(12 + rng.random() * 18, 8, 42)
    non_compete = clamp(rng.random() * 9, 0, 12)
    creative_control = rng.random() < 0.2
    injury_protection = rng.random() < 0.72
    travel_covered = rng.random() < 0.86
    if rng.random() < 0.7:
        exclusivity = "exclusive"
    elif rng.random() < 0.65:
        exclusivity = "semi-exclusive"
    else:
        exclusivity = "open"
    return ContractClauses(
        downside_guarantee=downside,
        merch_cut_percent=merch_cut,
        appearance_minimum=appearances,
        non_compete_months=non_compete,
        creative_control=creative_control,
        injury_protection=injury_protection,
        travel_covered=travel_covered,
        exclusivity=exclusivity,
    )


def clause_summary(clauses: ContractClauses) -> str:
    control = "creative control" if clauses.creative_control else "standard creative terms"
    injury = "injury protection" if clauses.injury_protection else "limited injury coverage"
    return f"{clauses.exclusivity}, {control}, {injury}, {clauses.merch_cut_percent}% merch"


def sign_contract(
    state: WorldState,
    career: CareerDefinition,
    rng: Generator,
    term_years: int = WRESTLING_CONTRACT_YEARS,
) -> WrestlingContract:
    promotion_id = infer_promotion_id(career)
    salary = max(career.start_salary, state.finances.salary or career.start_salary)
    state.wrestling_contract = WrestlingContract(
        promotion_id=promotion_id,
        promotion_name=promotion_name(promotion_id),
        start_year=state.year,
        end_year=state.year + max(1, term_years),
        annual_salary=salary,
        clauses=generate_contract_clauses(salary, rng),
    )
    return state.wrestling_contract


def maybe_generate_rival_offer(state: WorldState, rng: Generator) -> Optional[RivalOffer]:
    contract = state.wrestling_contract
    if contract is None or is_backstage_role(state) or contract.rival_offer is not None:
        return None

    years_left = contract.end_year - state.year
    momentum = _rating(state.wrestling.momentum)
    fan_base = _rating(state.wrestling.fan_base)
    chance = max(0.05, min(0.55, 0.08 + momentum / 250 + fan_base / 280 + (0.12 if years_left <= 2 else 0)))
    if rng.random() >= chance:
        return None

    others = [p for p in RIVAL_PROMOTIONS if p != contract.promotion_id]
    target = others[int(rng.integers(len(others)))]
    annual_salary = int(contract.annual_salary * (1.06 + rng.random() * 0.38))
    offer = RivalOffer(
        promotion_id=target,
        promotion_name=promotion_name(target),
        annual_salary=annual_salary,
        term_years=int(rng.integers(3, 7)),
        clauses=generate_contract_clauses(annual_salary, rng),
    )
    contract.rival_offer = offer
    add_history(
        state,
        f"{offer.promotion_name} approached you with a {offer.term_years}-year offer worth "
        f"${offer.annual_salary:,}/yr ({clause_summary(offer.clauses)}).",
        HISTORY_PRIMARY,
    )
    return offer


# ---------------------------------------------------------------------------
# Persona and locker room
# ---------------------------------------------------------------------------

def ensure_wrestling_contacts(state: WorldState, rng: Generator) -> None:
    """Top up the locker room of the current promotion to a handful of people."""
    promotion_id = state.wrestling_contract.promotion_id if state.wrestling_contract else "indie"
    locker_room = [
        n for n in state.relationships
        if n.is_alive
        and (n.location == ARENA or WRESTLING_TRAIT in n.traits)
        and (n.promotion_id or promotion_id) == promotion_id
    ]
    roles = ("Co-worker", "Co-worker", "Co-worker", "Boss")
    for _ in range(WRESTLING_CONTACTS - len(locker_room)):
        names = WRESTLING_CONTACT_NAMES
        name = names[int(rng.integers(len(names)))]
        role = roles[int(rng.integers(len(roles)))]
        state.relationships.append(Npc(
            id=next_npc_id(state, "wrestling"),
            name=name,
            type=role,
            gender="Male" if rng.random() < 0.5 else "Female",
            age=max(20, state.age + int(rng.integers(12)) - 5),
            health=int(rng.integers(70, 91)),
            happiness=int(rng.integers(50, 81)),
            smarts=int(rng.integers(45, 81)),
            looks=int(rng.integers(45, 81)),
            relationship_to_player=int(rng.integers(35, 61)),
            familiarity=int(rng.integers(35, 66)),
            location=ARENA,
            workplace=ARENA,
            promotion_id=promotion_id,
            traits=[WRESTLING_TRAIT],
        ))


def ensure_wrestling_profile(state: WorldState, rng: Generator) -> None:
    """Fill in any unset persona fields, then make sure the locker room exists."""
    profile = state.wrestling
    stats = state.stats
    if not profile.ring_name:
        profile.ring_name = RING_NAMES[int(rng.integers(len(RING_NAMES)))]
    if profile.fan_base is None:
        profile.fan_base = clamp(int(rng.integers(22, 38)))
    if profile.momentum is None:
        profile.momentum = clamp(int(rng.integers(28, 44)))
    if profile.promo_skill is None:
        profile.promo_skill = clamp(stats.looks * 0.45 + stats.smarts * 0.35 + stats.willpower * 0.2)
    if not profile.alignment:
        profile.alignment = "face"
    if profile.push is None:
        profile.push = clamp(int(rng.integers(30, 51)))
    ensure_wrestling_contacts(state, rng)


# ---------------------------------------------------------------------------
# Annual tick
# ---------------------------------------------------------------------------

def process_wrestling_year(state: WorldState, rng: Generator) -> None:
    ensure_wrestling_profile(state, rng)
    maybe_generate_rival_offer(state, rng)

    contract = state.wrestling_contract
    if contract is not None and state.year >= contract.end_year:
        add_history(
            state,
            f"Your contract with {contract.promotion_name} expired. You are now a free agent "
            "and can negotiate a new deal or leave wrestling.",
            HISTORY_PRIMARY,
        )
        clear_career(state)
        return

    profile = state.wrestling
    career = state.career
    fan_base = _rating(profile.fan_base)
    momentum = _rating(profile.momentum)
    push = _rating(profile.push)
    promo_skill = _rating(profile.promo_skill, 50)
    backstage = is_backstage_role(state)

    push_delta = (momentum - 50) // 14 + (fan_base - 50) // 18 + int(rng.integers(-2, 3))
    profile.push = clamp(push + push_delta)

    if profile.injury_years > 0 and not backstage:
        profile.injury_years -= 1
        state.stats.health = clamp(state.stats.health + 4)
        career.performance = clamp(career.performance - int(rng.integers(2, 6)))
        profile.momentum = clamp(momentum - 4)
        add_history(state, "You spent most of the year recovering from ring injuries and missed key events.")
        return

    exposure = max(1, career.level)
    merch_bonus = int(
        (fan_base + career.performance + exposure * 8 + push * 0.7 + promo_skill * 0.5)
        * (50 + rng.random() * 80)
    )
    if merch_bonus > 0:
        state.finances.cash += merch_bonus
        add_history(state, f"Merch and appearance bonuses added ${merch_bonus:,} to your income.")

    momentum_shift = (career.performance - 50) // 12 + (push - 45) // 15 + int(rng.integers(-4, 5))
    profile.momentum = clamp(momentum + momentum_shift)
    profile.fan_base = clamp(fan_base + (career.performance - 45) // 15 + int(rng.integers(-2, 5)))

    if not backstage:
        injury_chance = max(
            INJURY_CHANCE_MIN,
            min(INJURY_CHANCE_MAX, (0.07 + (100 - state.stats.health) * 0.0016) * style_risk_multiplier(state)),
        )
        if rng.random() < injury_chance:
            severe = rng.random() < SEVERE_INJURY_CHANCE
            health_loss = int(rng.integers(18, 29)) if severe else int(rng.integers(8, 16))
            profile.injury_years = 2 if severe else 1
            state.stats.health = clamp(state.stats.health - health_loss)
            career.performance = clamp(career.performance - (15 if severe else 8))
            _shift(state, "momentum", -(16 if severe else 8))
            add_history(
                state,
                "A major in-ring injury forced you to the sidelines and stalled your push."
                if severe else "A nagging ring injury slowed your schedule this season.",
                HISTORY_PRIMARY,
            )
    else:
        creative_bonus = int((promo_skill + push + momentum) * (20 + rng.random() * 35))
        state.finances.cash += creative_bonus
        add_history(state, f"Your booking and production bonuses earned an extra ${creative_bonus:,}.")

    if profile.momentum <= 20 and career.performance <= 35 and rng.random() < 0.2:
        add_history(
            state,
            f"Your promotion released you from your {career.title} contract after a cold streak.",
            HISTORY_PRIMARY,
        )
        clear_career(state)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def _employed_wrestler(state: WorldState) -> bool:
    return bool(state.career.id) and is_wrestling_career(state)


def _in_ring(state: WorldState) -> bool:
    return _employed_wrestler(state) and not is_backstage_role(state)


def _backstage(state: WorldState) -> bool:
    return _employed_wrestler(state) and is_backstage_role(state)


def _tryout(state: WorldState, rng: Generator) -> ActionResult:
    stats = state.stats
    profile = state.wrestling
    stats.athleticism = clamp(stats.athleticism + int(rng.integers(3, 8)))
    stats.willpower = clamp(stats.willpower + int(rng.integers(1, 4)))
    stats.looks = clamp(stats.looks + int(rng.integers(2)))

    score = (
        stats.athleticism * 0.4
        + stats.willpower * 0.25
        + stats.looks * 0.15
        + stats.smarts * 0.1
        + (6 if profile.tryout_attempts else 0)
    )
    invite_chance = max(0.18, min(0.92, (score - 38) / 80))
    profile.tryout_attempts += 1

    if rng.random() < invite_chance:
        profile.tryout_invited = True
        return ActionResult(
            True,
            "You impressed scouts at tryouts and earned a development invitation. "
            "Wrestling applications are now easier.",
            HISTORY_PRIMARY,
        )
    return ActionResult(True, "You attended wrestling tryouts and gained experience, but scouts asked you to keep training.")


def _turn_heel(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    state.wrestling.alignment = "heel"
    _shift(state, "momentum", 12)
    _shift(state, "fan_base", -5)
    _shift(state, "push", 8)
    return ActionResult(
        True,
        "You turned heel and leaned into a villain persona. The crowd reaction is loud and polarizing.",
        HISTORY_PRIMARY,
    )


def _turn_face(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    state.wrestling.alignment = "face"
    _shift(state, "momentum", 8)
    _shift(state, "fan_base", 10)
    return ActionResult(True, "You turned face and the audience started rallying behind you.", HISTORY_PRIMARY)


def _cut_promo(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    stats = state.stats
    roll = (stats.looks + stats.smarts + stats.willpower) // 32 + int(rng.integers(-2, 8))
    _shift(state, "promo_skill", roll, 45)
    _shift(state, "momentum", roll // 2)
    _shift(state, "fan_base", max(1, roll // 3))
    state.career.performance = clamp(state.career.performance + max(1, roll // 3))
    return ActionResult(True, "You delivered a strong promo that raised your profile.")


def _house_show(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    profile = state.wrestling
    gate = int((_rating(profile.fan_base) + _rating(profile.push)) * (140 + rng.random() * 140))
    state.finances.cash += gate
    state.career.performance = clamp(state.career.performance + int(rng.integers(4, 10)))
    _shift(state, "momentum", 4)
    _shift(state, "fan_base", 3)

    bump_risk = max(0.04, min(0.3, 0.06 + (100 - state.stats.health) * 0.0014))
    if rng.random() < bump_risk:
        profile.injury_years = max(profile.injury_years, 1)
        state.stats.health = clamp(state.stats.health - int(rng.integers(6, 13)))
        return ActionResult(
            True,
            f"You worked the house show circuit and earned ${gate:,}, but picked up a minor injury.",
            HISTORY_PRIMARY,
        )
    return ActionResult(True, f"You worked the house show circuit and earned ${gate:,}.")


def _sell_merch(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    profile = state.wrestling
    alignment_boost = 1.08 if profile.alignment == "face" else 1.03
    payout = int(
        (_rating(profile.fan_base) + _rating(profile.promo_skill, 50)) * (110 + rng.random() * 170) * alignment_boost
    )
    state.finances.cash += payout
    _shift(state, "push", 3)
    return ActionResult(True, f"Your merch campaign connected with fans and brought in ${payout:,}.")


def _negotiate_push(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    profile = state.wrestling
    leverage = (
        _rating(profile.momentum) * 0.35
        + _rating(profile.fan_base) * 0.35
        + _rating(profile.promo_skill, 45) * 0.2
        + state.career.performance * 0.1
    )
    chance = max(0.18, min(0.86, (leverage - 28) / 85))
    if rng.random() < chance:
        _shift(state, "push", 12)
        _shift(state, "momentum", 8)
        state.career.performance = clamp(state.career.performance + 5)
        return ActionResult(True, "Creative approved a stronger push for your character.", HISTORY_PRIMARY)
    _shift(state, "momentum", -6)
    state.career.performance = clamp(state.career.performance - 3)
    return ActionResult(True, "Your push request was rejected this cycle.")


def _renegotiate(state: WorldState, rng: Generator) -> ActionResult:
    contract = state.wrestling_contract
    ensure_wrestling_profile(state, rng)
    profile = state.wrestling
    leverage = (
        _rating(profile.fan_base) * 0.35
        + _rating(profile.momentum) * 0.25
        + _rating(profile.promo_skill, 45) * 0.2
        + _rating(profile.push) * 0.1
        + state.career.performance * 0.1
    )
    chance = max(0.2, min(0.92, (leverage - 25) / 85))

    if rng.random() < chance:
        increase = int(contract.annual_salary * (0.08 + rng.random() * 0.18))
        extra_years = int(rng.integers(1, 4))
        new_salary = contract.annual_salary + increase
        contract.annual_salary = new_salary
        contract.end_year += extra_years
        clauses = contract.clauses
        clauses.downside_guarantee = int(new_salary * (0.68 + rng.random() * 0.22))
        clauses.merch_cut_percent = min(25, clauses.merch_cut_percent + 1)
        clauses.appearance_minimum = max(8, clauses.appearance_minimum - 1)
        clauses.creative_control = clauses.creative_control or rng.random() < 0.3
        clauses.injury_protection = True
        state.finances.salary = max(state.finances.salary, new_salary)
        return ActionResult(
            True,
            f"You renegotiated successfully: +${increase:,}/yr and a {extra_years}-year extension "
            f"({clause_summary(clauses)}).",
            HISTORY_PRIMARY,
        )

    _shift(state, "momentum", -int(rng.integers(4, 10)))
    return ActionResult(True, "Contract talks stalled. Management cooled on your current push.")


def _has_rival_offer(state: WorldState) -> bool:
    return (
        _employed_wrestler(state)
        and state.wrestling_contract is not None
        and state.wrestling_contract.rival_offer is not None
    )


def _accept_rival_offer(state: WorldState, rng: Generator) -> ActionResult:
    offer = state.wrestling_contract.rival_offer
    state.wrestling_contract = WrestlingContract(
        promotion_id=offer.promotion_id,
        promotion_name=offer.promotion_name,
        start_year=state.year,
        end_year=state.year + offer.term_years,
        annual_salary=offer.annual_salary,
        clauses=offer.clauses,
    )
    state.finances.salary = max(state.finances.salary, offer.annual_salary)
    add_history(
        state,
        f"You signed with {offer.promotion_name} on a {offer.term_years}-year deal at ${offer.annual_salary:,}/yr.",
        HISTORY_PRIMARY,
    )
    ensure_wrestling_contacts(state, rng)
    return ActionResult(True, category=None)


def _decline_rival_offer(state: WorldState, rng: Generator) -> ActionResult:
    name = state.wrestling_contract.rival_offer.promotion_name
    state.wrestling_contract.rival_offer = None
    _shift(state, "push", 2)
    return ActionResult(True, f"You declined an offer from {name} and stayed loyal to your current promotion.")


def _rehab(state: WorldState, rng: Generator) -> ActionResult:
    profile = state.wrestling
    if profile.injury_years > 0:
        profile.injury_years -= 1
    state.stats.health = clamp(state.stats.health + int(rng.integers(10, 16)))
    state.stats.athleticism = clamp(state.stats.athleticism + 2)
    state.career.performance = clamp(state.career.performance + 2)
    return ActionResult(True, "You focused on rehab and conditioning to extend your career.")


def _can_retire(state: WorldState) -> bool:
    return _in_ring(state) and (
        state.age >= WRESTLING_RETIREMENT_AGE
        or state.wrestling.injury_years > 0
        or state.stats.health <= 55
    )


def _retire(state: WorldState, rng: Generator) -> ActionResult:
    state.wrestling.retired = True
    state.wrestling.injury_years = 0
    title = state.career.title
    clear_career(state)
    return ActionResult(
        True,
        f"You retired from in-ring competition after your run as {title}.",
        HISTORY_PRIMARY,
    )


def _write_show(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    gain = int(rng.integers(4, 11))
    _shift(state, "momentum", gain)
    _shift(state, "push", gain // 2)
    state.career.performance = clamp(state.career.performance + gain // 2)
    state.stats.smarts = clamp(state.stats.smarts + 1)
    return ActionResult(True, "You mapped out stories and finishes for the upcoming cards.")


def _produce_match(state: WorldState, rng: Generator) -> ActionResult:
    ensure_wrestling_profile(state, rng)
    if rng.random() < 0.75:
        _shift(state, "momentum", 7)
        _shift(state, "fan_base", 4)
        state.career.performance = clamp(state.career.performance + 5)
        state.finances.cash += int(rng.integers(12000, 30000))
        return ActionResult(True, "The featured match landed perfectly and drew strong fan buzz.", HISTORY_PRIMARY)
    _shift(state, "momentum", -6)
    state.career.performance = clamp(state.career.performance - 3)
    return ActionResult(True, "The produced match underdelivered and drew criticism backstage.")


def wrestling_actions() -> list[Action]:
    return [
        career_action(
            "wrestling_tryout", "Attend Wrestling Tryout", 2,
            lambda s: not s.career.id and s.age >= 16 and s.education.level != "None",
            _tryout,
        ),
        career_action(
            "wrestling_turn_heel", "Turn Heel", 2,
            lambda s: _in_ring(s) and s.wrestling.alignment != "heel",
            _turn_heel,
        ),
        career_action(
            "wrestling_turn_face", "Turn Face", 2,
            lambda s: _in_ring(s) and s.wrestling.alignment != "face",
            _turn_face,
        ),
        career_action("wrestling_cut_promo", "Cut Promo", 2, _employed_wrestler, _cut_promo),
        career_action("wrestling_work_house_show", "Work House Show Loop", 3, _in_ring, _house_show),
        career_action("wrestling_sell_merch", "Push Merch Campaign", 2, _employed_wrestler, _sell_merch),
        career_action("wrestling_negotiate_push", "Negotiate Creative Push", 2, _employed_wrestler, _negotiate_push),
        career_action(
            "wrestling_renegotiate_contract", "Renegotiate Contract", 2,
            lambda s: _employed_wrestler(s) and s.wrestling_contract is not None,
            _renegotiate,
        ),
        career_action("wrestling_accept_rival_offer", "Accept Rival Offer", 1, _has_rival_offer, _accept_rival_offer),
        career_action("wrestling_decline_rival_offer", "Decline Rival Offer", 1, _has_rival_offer, _decline_rival_offer),
        career_action(
            "wrestling_rehab", "Rehab and Conditioning", 2,
            lambda s: _employed_wrestler(s) and (s.wrestling.injury_years > 0 or s.stats.health < 85),
            _rehab,
        ),
        career_action("wrestling_retire", "Retire from In-Ring Competition", 1, _can_retire, _retire),
        career_action("wrestling_backstage_write_show", "Write Weekly Show", 2, _backstage, _write_show),
        career_action("wrestling_backstage_produce_match", "Produce Featured Match", 2, _backstage, _produce_match),
    ]
