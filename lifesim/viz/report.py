"""Static matplotlib report of a recorded life."""

from __future__ import annotations

import os

import matplotlib
matplotlib.use("Agg")  # Render to files only
import matplotlib.pyplot as plt
import numpy as np

from lifesim.core.config import REPORT_DPI
from lifesim.simulation.metrics import LifeMetrics


def life_report(metrics: LifeMetrics, output_dir: str, filename: str = "life_report.png") -> str:
    """Draw stats, finances, relationships and heat/approval panels. Returns the PNG path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)

    snapshots = metrics.snapshots
    fig, axes = plt.subplots(2, 2, figsize=(14, 9))
    fig.suptitle("Life Report", fontsize=14)

    if not snapshots:
        for ax in axes.flat:
            ax.text(0.5, 0.5, "No data", ha="center", va="center")
        fig.savefig(path, dpi=REPORT_DPI)
        plt.close(fig)
        return path

    ages = np.array([s.age for s in snapshots])

    # Stats
    ax = axes[0, 0]
    for name in ("health", "happiness", "smarts", "looks", "karma"):
        ax.plot(ages, [getattr(s, name) for s in snapshots], linewidth=1.2, label=name.title())
    ax.set_title("Stats")
    ax.set_xlabel("Age")
    ax.set_ylim(0, 100)
    ax.legend(fontsize=8, loc="lower left")

    # Finances
    ax = axes[0, 1]
    cash = np.array([s.cash for s in snapshots])
    ax.plot(ages, cash, "g-", label="Cash")
    ax.plot(ages, [s.salary for s in snapshots], "b--", label="Salary")
    ax.plot(ages, [-s.debt for s in snapshots], "r:", label="Debt")
    ax.axhline(y=0, color="k", linewidth=0.5)
    ax.set_title("Finances")
    ax.set_xlabel("Age")
    ax.set_ylabel("$")
    ax.legend(fontsize=8, loc="upper left")

    # Relationships
    ax = axes[1, 0]
    ax.step(ages, [s.living_relationships for s in snapshots], where="post", color="purple")
    ax.set_title("Living Relationships")
    ax.set_xlabel("Age")

    # Heat and approval
    ax = axes[1, 1]
    ax.plot(ages, [s.heat for s in snapshots], "r-", label="Heat")
    in_office = [s.approval_rating if s.political_position else np.nan for s in snapshots]
    ax.plot(ages, in_office, "c-", label="Approval (in office)")
    ax.set_title("Heat & Approval")
    ax.set_xlabel("Age")
    ax.set_ylim(0, 100)
    ax.legend(fontsize=8, loc="upper left")

    for ax in axes.flat:
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    fig.savefig(path, dpi=REPORT_DPI)
    plt.close(fig)
    return path
