"""Command line entry point.

Run with: `python -m blockfall`

``--ascii`` prints a single composed frame instead of opening a window,
useful as a smoke test without a display.
"""

from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from .config import PRESETS, GameConfig
from .game_state import Game
from .render import ascii_grid, compose_frame


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="blockfall", description=__doc__.splitlines()[0])
    parser.add_argument("--preset", choices=sorted(PRESETS), default="standard")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece generator")
    parser.add_argument("--ascii", action="store_true", help="Print one frame and exit")
    parser.add_argument("--debug-dump", action="store_true", help="Log the grid on every tick")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")
    config = GameConfig.preset(args.preset)
    if args.debug_dump:
        config = config.with_overrides(debug_dump=True)

    if args.ascii:
        game = Game(config, seed=args.seed)
        print(ascii_grid(compose_frame(game)))
        return

    from .run_pygame import main as run_window

    run_window(config, seed=args.seed)


if __name__ == "__main__":
    main()
