"""Declarative effect records: ``{type, target?, operation?, value?}``."""

from __future__ import annotations

import logging
from typing import Optional

from lifesim.core import bus as signals
from lifesim.core import config
from lifesim.core.config import STAT_NAMES
from lifesim.core.bus import EventBus
from lifesim.core.errors import ContentError
from lifesim.core.state import WorldState, clamp, to_attr

logger = logging.getLogger(__name__)

# Political fields held to the 0..100 stat range
CLAMPED_POLITICAL_FIELDS = frozenset({
    "approval_rating",
    "influence",
    "party_loyalty",
    "corruption_level",
    "impeachment_risk",
    "authoritarian_score",
    "military_control",
    "media_control",
    "opposition_strength",
})


def _apply_numeric(current, operation: Optional[str], value):
    if operation == "add":
        return current + value
    if operation == "set":
        return value
    if operation == "multiply":
        return current * value
    return current


def _emit(bus: Optional[EventBus], name: str, payload=None) -> None:
    if bus is not None:
        bus.emit(name, payload)


def apply_effect(state: WorldState, effect: dict, bus: Optional[EventBus] = None) -> None:
    kind = effect.get("type")
    target = effect.get("target")
    operation = effect.get("operation")
    value = effect.get("value")

    if kind == "stat":
        if not target or not operation or value is None:
            return
        attr = to_attr(target)
        if attr not in STAT_NAMES:
            logger.warning("Effect targets unknown stat: %s", target)
            return
        new_value = clamp(_apply_numeric(getattr(state.stats, attr), operation, value))
        setattr(state.stats, attr, new_value)
        _emit(bus, signals.STAT_CHANGED, {"stat": attr, "value": new_value})

    elif kind == "flag":
        if not target or not operation:
            return
        if operation == "set":
            state.flags[target] = True if value is None else value
        elif operation == "clear":
            state.flags.pop(target, None)
        elif operation == "toggle":
            state.flags[target] = not state.flags.get(target)

    elif kind == "money":
        if not operation or value is None:
            return
        state.finances.cash = int(_apply_numeric(state.finances.cash, operation, value))

    elif kind == "death":
        state.is_alive = False
        state.death_cause = value or "Unknown causes"
        _emit(bus, signals.DEATH, state.death_cause)

    elif kind == "political":
        _apply_political(state, target, operation, value, bus)

    else:
        if config.STRICT_CONTENT:
            raise ContentError(f"Unknown effect type: {kind}", effect)
        logger.warning("Unknown effect type: %s", kind)


def _apply_political(state: WorldState, target, operation, value, bus: Optional[EventBus]) -> None:
    if not target or not operation:
        return
    attr = to_attr(target)
    if not hasattr(state.politics, attr):
        return
    current = getattr(state.politics, attr)

    if isinstance(current, (int, float)) and not isinstance(current, bool):
        if operation == "multiply":
            new_value = current * (1 if value is None else value)
        else:
            new_value = _apply_numeric(current, operation, 0 if value is None else value)
        if attr in CLAMPED_POLITICAL_FIELDS:
            new_value = clamp(new_value)
        setattr(state.politics, attr, new_value)
    elif operation == "set":
        setattr(state.politics, attr, value)
    elif operation == "add" and isinstance(current, list) and value is not None:
        if value not in current:
            current.append(value)

    _emit(bus, signals.STAT_CHANGED, {"stat": attr, "value": getattr(state.politics, attr)})


def apply_effects(state: WorldState, effects: Optional[list[dict]], bus: Optional[EventBus] = None) -> None:
    """Apply in order. Earlier effects are not rolled back if a later one fails."""
    for effect in effects or ():
        apply_effect(state, effect, bus)
