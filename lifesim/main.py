"""Entry point: autoplay one life from birth to death."""

from __future__ import annotations

import argparse
import json
import logging
import os
import time
from typing import Optional

from lifesim.core.config import COUNTRIES, DEFAULT_MAX_YEARS, FIRST_NAMES, GENDERS, LAST_NAMES


def build_engine(seed: int):
    """An engine with the bundled content loaded."""
    from lifesim.simulation.content import load_default_content
    from lifesim.simulation.engine import Engine

    engine = Engine(seed=seed)
    load_default_content(engine)
    return engine


def random_identity(rng) -> dict[str, str]:
    def pick(options: tuple[str, ...]) -> str:
        return options[int(rng.integers(len(options)))]

    return {
        "first_name": pick(FIRST_NAMES),
        "last_name": pick(LAST_NAMES),
        "gender": pick(GENDERS),
        "country": pick(COUNTRIES),
    }


def simulate_life(engine, max_years: int, player=None, logger=None, metrics=None) -> int:
    """Alternate autoplayed years and ticks until death or ``max_years``. Returns years run."""
    from lifesim.agents.autoplay import AutoPlayer

    player = player or AutoPlayer(engine.rng)
    if logger is not None:
        logger.end_year()

    years = 0
    while engine.state.is_alive and years < max_years:
        player.play_year(engine)
        engine.age_up()
        years += 1
        if metrics is not None:
            metrics.record_year(engine.state)
        if logger is not None:
            logger.end_year()
    return years


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(
        description="Life Simulation",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducibility")
    parser.add_argument("--first-name", type=str, default=None, help="First name (random if omitted)")
    parser.add_argument("--last-name", type=str, default=None, help="Last name (random if omitted)")
    parser.add_argument("--gender", type=str, default=None, help="Gender (random if omitted)")
    parser.add_argument("--country", type=str, default=None, help="Country of birth (random if omitted)")
    parser.add_argument("--max-years", type=int, default=DEFAULT_MAX_YEARS, help="Stop after this many years")
    parser.add_argument("--verbosity", type=int, default=1, choices=[0, 1, 2, 3], help="Narrative verbosity level")
    parser.add_argument("--log-file", type=str, default=None, help="Path to narrative log file")
    parser.add_argument("--output-dir", type=str, default="results", help="Output directory for results")
    parser.add_argument("--report", action="store_true", help="Draw a matplotlib life report")

    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    # Import here to allow --help without loading everything
    from lifesim.core.state import state_to_dict
    from lifesim.simulation.metrics import LifeMetrics
    from lifesim.viz.logger import LifeLogger

    engine = build_engine(args.seed)
    identity = random_identity(engine.rng)
    for key in identity:
        chosen = getattr(args, key)
        if chosen:
            identity[key] = chosen

    print(f"=== Life Simulation ===")
    print(f"Seed: {args.seed} | Max years: {args.max_years}")
    print(f"Output: {args.output_dir}")
    print()

    logger = LifeLogger(
        verbosity=args.verbosity,
        log_file=args.log_file or os.path.join(args.output_dir, "life.log"),
        stdout=True,
    )
    logger.attach(engine)
    metrics = LifeMetrics()

    engine.start_new_life(**identity)

    t0 = time.time()
    try:
        years = simulate_life(engine, args.max_years, logger=logger, metrics=metrics)
    except KeyboardInterrupt:
        years = engine.state.age
        print("\nSimulation interrupted by user")
    elapsed = time.time() - t0
    print(f"\nSimulated {years} years in {elapsed:.2f}s")

    # Export results
    os.makedirs(args.output_dir, exist_ok=True)

    csv_path = os.path.join(args.output_dir, "metrics.csv")
    metrics.export_csv(csv_path)
    print(f"Metrics exported to {csv_path}")

    state_path = os.path.join(args.output_dir, "final_state.json")
    with open(state_path, "w", encoding="utf-8") as f:
        json.dump(state_to_dict(engine.state), f, indent=2)

    if args.report:
        from lifesim.viz.report import life_report
        print(f"Report saved to {life_report(metrics, args.output_dir)}")

    print()
    print(metrics.summary_report(engine.state))

    logger.export_json(os.path.join(args.output_dir, "history.json"))
    logger.close()

    print(f"\nAll results saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
