"""Monte Carlo analysis: autoplay N lives with different seeds, aggregate statistics."""

from __future__ import annotations

import csv
import os
import statistics
import time
from dataclasses import dataclass

import numpy as np

from lifesim.core.config import DEFAULT_MAX_YEARS


@dataclass
class RunResult:
    """Summary of a single life."""
    seed: int
    age_at_death: int
    alive: bool
    death_cause: str
    final_cash: int
    peak_cash: int
    final_title: str
    education_level: str
    max_position_level: int
    kills: int
    children: int
    elapsed_seconds: float


def run_single(seed: int, max_years: int) -> RunResult:
    """Autoplay one life and return its summary."""
    from lifesim.main import build_engine, random_identity, simulate_life
    from lifesim.simulation.metrics import LifeMetrics

    engine = build_engine(seed)
    engine.start_new_life(**random_identity(engine.rng))
    metrics = LifeMetrics()

    t0 = time.time()
    simulate_life(engine, max_years, metrics=metrics)
    elapsed = time.time() - t0

    state = engine.state
    max_level = max((s.political_level for s in metrics.snapshots), default=0)
    titles = metrics.titles_held()

    return RunResult(
        seed=seed,
        age_at_death=state.age,
        alive=state.is_alive,
        death_cause=state.death_cause or "",
        final_cash=state.finances.cash,
        peak_cash=metrics.peak_cash(),
        final_title=titles[-1] if titles else "",
        education_level=state.education.level,
        max_position_level=max_level,
        kills=state.serial_killer.kills,
        children=sum(1 for n in state.relationships if n.type == "Child"),
        elapsed_seconds=elapsed,
    )


def monte_carlo(
    n_runs: int = 20,
    max_years: int = DEFAULT_MAX_YEARS,
    output_dir: str = "results/monte_carlo",
) -> list[RunResult]:
    """Run N lives with generated seeds and report aggregate stats."""

    os.makedirs(output_dir, exist_ok=True)
    results: list[RunResult] = []
    rng = np.random.default_rng(0)
    seeds = [int(s) for s in rng.integers(0, 100_000, size=n_runs)]

    print(f"=== Monte Carlo Life Simulation ===")
    print(f"Runs: {n_runs} | Max years/run: {max_years}")
    print(f"Seeds: {seeds[:5]}{'...' if n_runs > 5 else ''}")
    print()

    total_t0 = time.time()

    for i, seed in enumerate(seeds):
        t0 = time.time()
        result = run_single(seed, max_years)
        results.append(result)
        elapsed = time.time() - t0
        status = "ALIVE" if result.alive else f"DIED ({result.death_cause})"
        print(
            f"  Run {i+1:>3}/{n_runs} | seed={seed:>5} | "
            f"age={result.age_at_death:>3} | "
            f"cash=${result.final_cash:>10,} | "
            f"title={result.final_title or '-':<24} | "
            f"{status} | {elapsed:.2f}s"
        )

    total_elapsed = time.time() - total_t0
    print(f"\nAll {n_runs} runs completed in {total_elapsed:.1f}s "
          f"({total_elapsed/max(n_runs, 1):.2f}s avg)")

    # ── Aggregate Statistics ──────────────────────────────────────────
    print("\n" + "=" * 70)
    print("AGGREGATE RESULTS")
    print("=" * 70)

    def stat_line(label: str, values: list[float], fmt: str = ".1f") -> str:
        if not values:
            return f"  {label}: no data"
        mn = min(values)
        mx = max(values)
        avg = statistics.mean(values)
        med = statistics.median(values)
        std = statistics.stdev(values) if len(values) > 1 else 0
        return f"  {label:<30s}  mean={avg:{fmt}}  median={med:{fmt}}  std={std:{fmt}}  min={mn:{fmt}}  max={mx:{fmt}}"

    # Lifespan
    print("\nLIFESPAN")
    print(stat_line("Age at end", [r.age_at_death for r in results]))
    causes: dict[str, int] = {}
    for r in results:
        key = r.death_cause if not r.alive else "(still alive)"
        causes[key] = causes.get(key, 0) + 1
    for cause, count in sorted(causes.items(), key=lambda x: -x[1]):
        print(f"  '{cause}': {count}/{n_runs} runs ({count/n_runs*100:.0f}%)")

    # Wealth
    print("\nWEALTH")
    print(stat_line("Final cash", [r.final_cash for r in results], ",.0f"))
    print(stat_line("Peak cash", [r.peak_cash for r in results], ",.0f"))

    # Career and education
    print("\nCAREER")
    employed = sum(1 for r in results if r.final_title)
    print(f"  Ever employed: {employed}/{n_runs} ({employed/max(n_runs, 1)*100:.0f}%)")
    edu_freq: dict[str, int] = {}
    for r in results:
        edu_freq[r.education_level] = edu_freq.get(r.education_level, 0) + 1
    for level, count in sorted(edu_freq.items(), key=lambda x: -x[1]):
        print(f"  Education '{level}': {count}/{n_runs} runs ({count/n_runs*100:.0f}%)")

    # Politics
    print("\nPOLITICS")
    held = [r for r in results if r.max_position_level > 0]
    print(f"  Held office: {len(held)}/{n_runs} runs")
    if held:
        print(stat_line("Highest level reached", [r.max_position_level for r in held]))

    # Family and crime
    print("\nFAMILY & CRIME")
    print(stat_line("Children", [r.children for r in results]))
    killers = [r for r in results if r.kills > 0]
    print(f"  Secret killers: {len(killers)}/{n_runs} runs")

    # ── Export CSV ────────────────────────────────────────────────────
    csv_path = os.path.join(output_dir, "monte_carlo_results.csv")
    with open(csv_path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "seed", "age", "alive", "death_cause", "final_cash", "peak_cash",
            "final_title", "education_level", "max_position_level", "kills",
            "children", "elapsed_s",
        ])
        for r in results:
            writer.writerow([
                r.seed, r.age_at_death, r.alive, r.death_cause, r.final_cash,
                r.peak_cash, r.final_title, r.education_level,
                r.max_position_level, r.kills, r.children,
                f"{r.elapsed_seconds:.2f}",
            ])
    print(f"\nResults exported to {csv_path}")

    return results


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Monte Carlo life simulation")
    parser.add_argument("--runs", type=int, default=20, help="Number of lives")
    parser.add_argument("--max-years", type=int, default=DEFAULT_MAX_YEARS, help="Maximum years per life")
    parser.add_argument("--output-dir", type=str, default="results/monte_carlo")
    args = parser.parse_args()

    monte_carlo(
        n_runs=args.runs,
        max_years=args.max_years,
        output_dir=args.output_dir,
    )
