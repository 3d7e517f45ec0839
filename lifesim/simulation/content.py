"""Load camelCase JSON content records into the registries and catalogs.

The record classes are strict pydantic dataclasses, so building one validates
every field (list items and nested records included). Validation failures
surface as ``ContentError``.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import fields
from typing import Any, Optional

from pydantic import ValidationError

from lifesim.career.catalog import CareerDefinition, SerialContract
from lifesim.core.errors import ContentError
from lifesim.core.state import to_attr
from lifesim.politics.catalog import PolicyDefinition, PoliticalPosition, ScandalChoice, ScandalDefinition
from lifesim.simulation.events import Choice, GameEvent, Outcome

logger = logging.getLogger(__name__)

CONTENT_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "content")


def load_json(path: str) -> list[dict]:
    """Read a content file holding a JSON array of records."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ContentError(f"{path}: expected a list of records, got {type(data).__name__}")
    return data


def build_record(cls, record: Any, **nested):
    """Construct ``cls`` from a camelCase mapping.

    Unknown keys are dropped with a warning. ``nested`` supplies fields the
    caller has already converted.
    """
    if not isinstance(record, dict):
        raise ContentError(f"{cls.__name__}: expected an object, got {record!r}")

    known = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in record.items():
        attr = to_attr(key)
        if attr in nested:
            continue
        if attr not in known:
            logger.warning("%s: ignoring unknown field %r", cls.__name__, key)
            continue
        kwargs[attr] = value
    kwargs.update(nested)

    try:
        return cls(**kwargs)
    except ValidationError as exc:
        raise ContentError(f"{cls.__name__} {record.get('id', '?')}: {exc}") from exc


# ---------------------------------------------------------------------------
# Record converters
# ---------------------------------------------------------------------------

def _records(raw: Any, where: str) -> list:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise ContentError(f"{where}: expected a list, got {raw!r}")
    return raw


def _choice(raw: Any, where: str) -> Choice:
    if not isinstance(raw, dict):
        raise ContentError(f"{where}: choice must be an object")
    outcomes = [build_record(Outcome, o) for o in _records(raw.get("outcomes"), where)]
    return build_record(Choice, raw, outcomes=outcomes)


def events_from_records(records: list[dict]) -> list[GameEvent]:
    result = []
    for record in records:
        if not isinstance(record, dict):
            raise ContentError(f"GameEvent: expected an object, got {record!r}")
        where = f"event {record.get('id', '?')}"
        choices = [_choice(c, where) for c in _records(record.get("choices"), where)]
        result.append(build_record(GameEvent, record, choices=choices))
    return result


def careers_from_records(records: list[dict]) -> list[CareerDefinition]:
    return [build_record(CareerDefinition, r) for r in records]


def serial_contracts_from_records(records: list[dict]) -> list[SerialContract]:
    return [build_record(SerialContract, r) for r in records]


def positions_from_records(records: list[dict]) -> list[PoliticalPosition]:
    return [build_record(PoliticalPosition, r) for r in records]


def policies_from_records(records: list[dict]) -> list[PolicyDefinition]:
    return [build_record(PolicyDefinition, r) for r in records]


def scandals_from_records(records: list[dict]) -> list[ScandalDefinition]:
    result = []
    for record in records:
        if not isinstance(record, dict):
            raise ContentError(f"ScandalDefinition: expected an object, got {record!r}")
        choices = [build_record(ScandalChoice, c) for c in record.get("choices") or []]
        result.append(build_record(ScandalDefinition, record, choices=choices))
    return result


# ---------------------------------------------------------------------------
# Default content
# ---------------------------------------------------------------------------

def load_default_content(engine: "Engine", content_dir: Optional[str] = None) -> None:  # noqa: F821
    """Register every bundled content file with the engine's registries."""
    content_dir = content_dir or CONTENT_DIR

    def read(name: str) -> list[dict]:
        return load_json(os.path.join(content_dir, name))

    engine.events.register_events(events_from_records(read("events.json")))
    engine.careers.register_careers(careers_from_records(read("careers.json")))
    engine.careers.register_serial_contracts(serial_contracts_from_records(read("serial_contracts.json")))
    engine.politics.register_positions(positions_from_records(read("positions.json")))
    engine.politics.register_policies(policies_from_records(read("policies.json")))
    engine.politics.register_scandals(scandals_from_records(read("scandals.json")))

    logger.info(
        "Loaded %d events, %d careers, %d positions from %s",
        len(engine.events),
        len(engine.careers.all_careers()),
        len(engine.politics.positions),
        content_dir,
    )
