"""Simple ASCII demo for the brick game engines.

Run with: `python -m brickgame --game snake`

This module starts a session, runs a handful of idle ticks and prints the
resulting frame, useful as a minimal smoke test that the engine produces a
populated grid.
"""

from __future__ import annotations

import argparse
import logging

from . import ENGINES, Intent
from .utils import render_ascii


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--game", choices=sorted(ENGINES), default="tetris")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    parser.add_argument("--ticks", type=int, default=3, help="Idle ticks to run after starting.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> str:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    engine = ENGINES[args.game]()
    session = engine.new_session(seed=args.seed)
    session.submit_intent(Intent.START)
    snapshot = engine.tick(session)
    for _ in range(max(0, args.ticks)):
        snapshot = engine.tick(session)
    frame = render_ascii(snapshot)
    print(frame)
    return frame


if __name__ == "__main__":
    main()
