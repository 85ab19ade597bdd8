"""Command line entry point: throw dice on a board and print the layout."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence

from dicetable.core.board import DiceBoard
from dicetable.core.die import Die
from dicetable.core.errors import ConfigurationError
from dicetable.core.models import Player
from dicetable.infra.config import load_board_config, load_default_env_files
from dicetable.infra.logging import setup_logging
from dicetable.render.text import render_text

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dicetable", description=__doc__)
    parser.add_argument("--dice", type=int, default=5, help="number of dice to throw")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible throws")
    parser.add_argument(
        "--hold",
        type=int,
        default=0,
        help="hold this many dice after the first throw, then throw again",
    )
    parser.add_argument("--player", default="Player", help="name of the throwing player")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the dice table CLI."""
    args = build_parser().parse_args(argv)
    load_default_env_files()
    setup_logging()
    rng = random.Random(args.seed)
    try:
        board = DiceBoard(load_board_config(), rng=rng)
        for _ in range(args.dice):
            board.add_die(Die(rng=rng))
    except ConfigurationError as exc:
        logger.error("configuration_error %s", exc)
        return 2

    player = Player(name=args.player, color="blue")
    board.throw_dice(player)
    print(render_text(board))
    if args.hold > 0:
        for die in board.dice[: args.hold]:
            die.hold_it(player)
        board.throw_dice(player)
        print()
        print(render_text(board))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
