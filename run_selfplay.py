from __future__ import annotations

import argparse

from arcade_checkers.config import get_config, setup_logging
from arcade_checkers.selfplay import DEFAULT_MAX_PLIES, run_matches
from arcade_checkers.types import Difficulty


def parse_args() -> argparse.Namespace:
    levels = [d.value for d in Difficulty]
    ap = argparse.ArgumentParser(description="Play computer-vs-computer checkers games")
    ap.add_argument("--games", type=int, default=10, help="Number of games to play")
    ap.add_argument("--red", choices=levels, default="medium", help="Difficulty for red")
    ap.add_argument("--black", choices=levels, default="medium", help="Difficulty for black")
    ap.add_argument("--max-plies", type=int, default=DEFAULT_MAX_PLIES, help="Draw after this many plies")
    ap.add_argument("--seed", type=int, default=None, help="Random seed (defaults to CHECKERS_SEED)")
    ap.add_argument("--log-level", default=None, help="Override the configured log level")
    return ap.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)
    config = get_config()
    seed = args.seed if args.seed is not None else config.ai.seed

    tally = run_matches(
        args.red,
        args.black,
        games=args.games,
        max_plies=args.max_plies,
        seed=seed,
        hard_depth=config.ai.hard_depth,
    )
    print(f"red ({args.red}) {tally['red']}  black ({args.black}) {tally['black']}  draws {tally['draw']}")


if __name__ == "__main__":
    main()
