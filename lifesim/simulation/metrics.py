"""Per-year life snapshots and export."""

from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from typing import Optional

from lifesim.core.state import WorldState


@dataclass
class YearSnapshot:
    """The state of one life at the end of a year."""

    age: int = 0
    year: int = 0
    health: int = 0
    happiness: int = 0
    smarts: int = 0
    looks: int = 0
    karma: int = 0
    cash: int = 0
    salary: int = 0
    debt: int = 0
    career_title: str = ""
    education_level: str = "None"
    political_position: str = ""
    political_level: int = 0
    approval_rating: int = 0
    heat: int = 0
    living_relationships: int = 0


class LifeMetrics:
    """Collects one snapshot per tick."""

    def __init__(self) -> None:
        self.snapshots: list[YearSnapshot] = []

    def record_year(self, state: WorldState) -> YearSnapshot:
        stats = state.stats
        snapshot = YearSnapshot(
            age=state.age,
            year=state.year,
            health=stats.health,
            happiness=stats.happiness,
            smarts=stats.smarts,
            looks=stats.looks,
            karma=stats.karma,
            cash=state.finances.cash,
            salary=state.finances.salary,
            debt=state.finances.debt,
            career_title=state.career.title or "",
            education_level=state.education.level,
            political_position=state.politics.position_title or "",
            political_level=state.politics.position_level,
            approval_rating=state.politics.approval_rating,
            heat=state.serial_killer.heat,
            living_relationships=sum(1 for n in state.relationships if n.is_alive),
        )
        self.snapshots.append(snapshot)
        return snapshot

    def peak_cash(self) -> int:
        return max((s.cash for s in self.snapshots), default=0)

    def titles_held(self) -> list[str]:
        """Distinct career titles in the order they were first held."""
        seen: list[str] = []
        for s in self.snapshots:
            if s.career_title and s.career_title not in seen:
                seen.append(s.career_title)
        return seen

    def export_csv(self, filepath: str) -> None:
        """Export all snapshots to CSV."""
        os.makedirs(os.path.dirname(filepath) if os.path.dirname(filepath) else ".", exist_ok=True)
        with open(filepath, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow([
                "age", "year", "health", "happiness", "smarts", "looks", "karma",
                "cash", "salary", "debt", "career_title", "education_level",
                "political_position", "political_level", "approval_rating", "heat", "living_relationships",
            ])
            for s in self.snapshots:
                writer.writerow([
                    s.age, s.year, s.health, s.happiness, s.smarts, s.looks, s.karma,
                    s.cash, s.salary, s.debt, s.career_title, s.education_level,
                    s.political_position, s.political_level, s.approval_rating, s.heat, s.living_relationships,
                ])

    def summary_report(self, state: Optional[WorldState] = None) -> str:
        """Generate a human-readable summary of the life so far."""
        if not self.snapshots:
            return "No data recorded."

        first = self.snapshots[0]
        last = self.snapshots[-1]
        lines = [
            f"=== Life Summary: Age {first.age} to Age {last.age} ===",
            f"Years recorded: {len(self.snapshots)}",
            f"",
            f"Final Stats:",
            f"  Health: {last.health}/100",
            f"  Happiness: {last.happiness}/100",
            f"  Smarts: {last.smarts}/100",
            f"  Looks: {last.looks}/100",
            f"  Karma: {last.karma}/100",
            f"",
            f"Finances:",
            f"  Final cash: ${last.cash:,}",
            f"  Peak cash: ${self.peak_cash():,}",
            f"  Final debt: ${last.debt:,}",
            f"",
            f"Education: {last.education_level}",
        ]

        titles = self.titles_held()
        if titles:
            lines.append(f"Career path: {' -> '.join(titles)}")

        offices = []
        for s in self.snapshots:
            if s.political_position and s.political_position not in offices:
                offices.append(s.political_position)
        if offices:
            lines.append(f"Offices held: {', '.join(offices)}")

        if state is not None:
            lines.append("")
            if state.is_alive:
                lines.append(f"Still alive at {state.age}.")
            else:
                lines.append(f"Died at {state.age}: {state.death_cause}")
            if state.serial_killer.kills:
                lines.append(f"Secret body count: {state.serial_killer.kills}")

        return "\n".join(lines)
