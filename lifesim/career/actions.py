"""Wire every career-category action into an ActionRegistry."""

from __future__ import annotations

from lifesim.career.catalog import CareerCatalog
from lifesim.career.jobs import apply_actions_provider, job_actions
from lifesim.career.shadow import shadow_actions
from lifesim.career.wrestling import wrestling_actions
from lifesim.simulation.actions import CAREER, ActionRegistry


def install_career_actions(registry: ActionRegistry, catalog: CareerCatalog) -> None:
    registry.register_many(job_actions())
    registry.register_many(wrestling_actions())
    registry.register_many(shadow_actions(catalog))
    registry.register_provider(CAREER, apply_actions_provider(catalog))
