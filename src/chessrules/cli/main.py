from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from ..engine.board import STARTPOS_FEN
from ..engine.game import Game
from ..protocol.text.loop import run_loop


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessrules", description="Chess rules engine speaking a JSON line protocol"
    )
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="Initial position (default: startpos)"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for stderr output (default: WARNING)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    # stdout carries the protocol; logs go to stderr
    logging.basicConfig(level=getattr(logging, args.log_level))
    try:
        game = Game.from_fen(args.fen)
    except ValueError as e:
        raise SystemExit(f"invalid --fen: {e}") from e
    run_loop(game=game)


if __name__ == "__main__":
    main()
