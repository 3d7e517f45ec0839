"""Declarative condition records: ``{type, target?, operator?, value?}``."""

from __future__ import annotations

import logging
import operator as _op
from typing import Optional

import numpy as np

from lifesim.core import config
from lifesim.core.errors import ContentError
from lifesim.core.state import WorldState, to_attr

logger = logging.getLogger(__name__)

_COMPARATORS = {
    "eq": _op.eq,
    "neq": _op.ne,
    "gt": _op.gt,
    "gte": _op.ge,
    "lt": _op.lt,
    "lte": _op.le,
}


def compare(left, operator: str, right) -> bool:
    fn = _COMPARATORS.get(operator)
    if fn is None:
        return False
    try:
        return bool(fn(left, right))
    except TypeError:
        # Mismatched types (e.g. None against a number) never satisfy a comparison
        return False


def evaluate_condition(state: WorldState, condition: dict, rng: np.random.Generator) -> bool:
    kind = condition.get("type")
    target = condition.get("target")
    operator = condition.get("operator")
    value = condition.get("value")

    if kind == "stat":
        if not target or not operator or value is None:
            return False
        return compare(getattr(state.stats, to_attr(target), 0), operator, value)

    if kind == "flag":
        if not target or not operator:
            return False
        current = state.flags.get(target)
        if operator == "has":
            return current is not None
        if operator == "not_has":
            return current is None
        return compare(current, operator, value)

    if kind == "age":
        if not operator or value is None:
            return False
        return compare(state.age, operator, value)

    if kind == "random":
        if value is None:
            return False
        return rng.random() <= value

    # Unknown types fail open unless strict
    if config.STRICT_CONTENT:
        raise ContentError(f"Unknown condition type: {kind}", condition)
    logger.warning("Unknown condition type: %s", kind)
    return True


def evaluate_conditions(
    state: WorldState,
    conditions: Optional[list[dict]],
    rng: np.random.Generator,
) -> bool:
    """AND of all conditions. An empty or missing list passes."""
    if not conditions:
        return True
    return all(evaluate_condition(state, c, rng) for c in conditions)
