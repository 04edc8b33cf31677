"""Command-line tools: headless simulation and best-score maintenance."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

logger = logging.getLogger(__name__)

_DEFAULT_STORE = "snake_scores.json"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade headless simulation and score tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play headless games with a random policy.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sim_p.add_argument("--games", type=int, default=100)
    sim_p.add_argument(
        "--difficulty", type=str, default=None,
        choices=["easy", "medium", "hard", "impossible"],
    )
    sim_p.add_argument("--grid-size", type=int, default=None)
    sim_p.add_argument("--no-hazards", action="store_true")
    sim_p.add_argument("--turn-probability", type=float, default=0.2)
    sim_p.add_argument("--max-ticks", type=int, default=2_000)
    sim_p.add_argument("--seed", type=int, default=42)
    sim_p.add_argument(
        "--store", type=str, default=None,
        help="JSON store file to persist the best score into.",
    )

    # --- best-score ---
    best_p = sub.add_parser("best-score", help="Show or reset the best score.")
    best_p.add_argument("--store", type=str, default=_DEFAULT_STORE)
    best_p.add_argument("--reset", action="store_true")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_arcade.config import Difficulty, GameConfig
    from snake_arcade.score import ScoreKeeper
    from snake_arcade.simulate import simulate_games
    from snake_arcade.storage import JsonFileStore

    config = GameConfig.load(args.config) if args.config else GameConfig()
    overrides: dict = {}
    if args.difficulty is not None:
        overrides["difficulty"] = Difficulty(args.difficulty)
    if args.grid_size is not None:
        overrides["grid_size"] = args.grid_size
    if args.no_hazards:
        overrides["hazards_enabled"] = False
    if overrides:
        config = replace(config, **overrides)

    store = JsonFileStore(args.store) if args.store else None
    keeper = ScoreKeeper(store, key=config.best_score_key)

    report = simulate_games(
        num_games=args.games,
        config=config,
        scores=keeper,
        turn_probability=args.turn_probability,
        max_ticks=args.max_ticks,
        seed=args.seed,
    )
    print(report.summary())  # noqa: T201
    return 0


def _run_best_score(args: argparse.Namespace) -> int:
    from snake_arcade.score import ScoreKeeper
    from snake_arcade.storage import JsonFileStore

    keeper = ScoreKeeper(JsonFileStore(args.store))
    if args.reset:
        keeper.reset()
        logger.info("Best score reset in %s.", args.store)
    print(f"Best score: {keeper.best}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "best-score": _run_best_score,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
