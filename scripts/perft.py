#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import logging
import os
import sys
import time

# Make `chessrules` importable when running `python scripts/perft.py` from a checkout
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessrules.engine.board import STARTPOS_FEN
from chessrules.engine.game import Game
from chessrules.engine.perft import perft, perft_divide


logger = logging.getLogger("perft")


def main() -> None:
    parser = argparse.ArgumentParser(description="Count legal move paths from a position")
    parser.add_argument(
        "--fen", type=str, default=STARTPOS_FEN, help="FEN string (default: startpos)"
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument(
        "--divide", action="store_true", help="Print the node count below each root move"
    )
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)

    try:
        game = Game.from_fen(args.fen)
    except ValueError as e:
        parser.error(f"invalid --fen: {e}")

    start = time.perf_counter()
    if args.divide:
        counts = perft_divide(game.board, game.turn, game.rights, args.depth)
        for uci in sorted(counts):
            print(f"{uci}: {counts[uci]}")
        nodes = sum(counts.values())
    else:
        nodes = perft(game.board, game.turn, game.rights, args.depth)
    dt = time.perf_counter() - start
    logger.info("%s to move, depth %d", game.turn.value, args.depth)
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
