"""Headless ASCII demo for the engine.

Run with: `python -m blockdrop`

Plays a game with seeded random input and prints frames as text.  Useful as a
smoke test that the engine runs end to end without a display.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Optional, Sequence

from .board import COLS, ROWS
from .game_state import TICKS_PER_DROP, Command, GameState
from .utils import render_text


LOGGER = logging.getLogger(__name__)

COMMANDS = list(Command)


def run_game(
    game: GameState,
    *,
    ticks: int,
    input_rng: random.Random,
    every: int = 0,
) -> int:
    """Tick ``game`` with random commands and return how many ticks ran."""

    played = 0
    while played < ticks:
        command = input_rng.choice(COMMANDS)
        played += 1
        if not game.tick(command):
            break
        if every and played % every == 0:
            print(render_text(game))
            print()
    return played


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--rows", type=int, default=ROWS, help="Board height.")
    parser.add_argument("--cols", type=int, default=COLS, help="Board width.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for pieces and input.")
    parser.add_argument(
        "--ticks", type=int, default=20000, help="Stop after this many ticks."
    )
    parser.add_argument(
        "--ticks-per-drop",
        type=int,
        default=TICKS_PER_DROP,
        help="Ticks between gravity steps.",
    )
    parser.add_argument(
        "--every",
        type=int,
        default=0,
        help="Print a frame every N ticks (0 prints only the final frame).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )

    game = GameState(
        args.rows, args.cols, seed=args.seed, ticks_per_drop=args.ticks_per_drop
    )
    played = run_game(
        game, ticks=args.ticks, input_rng=random.Random(args.seed), every=args.every
    )
    LOGGER.info("Finished after %d ticks, %d pieces", played, game.pieces)
    print(render_text(game))


if __name__ == "__main__":
    main()
