from __future__ import annotations

import logging
import sys
from typing import Callable, Iterable, List, Optional

from pydantic import BaseModel

from ...engine.game import Game
from ...engine.move import parse_uci, str_to_square
from .schemas import ErrorBody, ErrorEnvelope, GameState, SquareMoves


logger = logging.getLogger(__name__)

Writer = Callable[[str], None]


class TextProtocol:
    """Line protocol adapter around a game session.

    Notes:
    - Core remains pure; I/O is isolated here.
    - Command set: new, position, moves, move, undo, state, quit.
    - Every reply is one JSON line; failures reply with an error envelope and
      leave the session unchanged.
    """

    def __init__(self, game: Optional[Game] = None) -> None:
        self.game: Game = game if game is not None else Game.new()

    # ---- Command handlers ----
    def cmd_new(self, write: Writer) -> None:
        self.game = Game.new()
        self._emit(GameState.from_game(self.game), write)

    def cmd_position(self, args: List[str], write: Writer) -> None:
        # position [startpos | fen <FEN>] [moves m1 m2 ...]
        if not args:
            raise ValueError("position needs 'startpos' or 'fen <FEN>'")
        idx = 0
        if args[idx] == "startpos":
            game = Game.new()
            idx += 1
        elif args[idx] == "fen":
            idx += 1
            fen_tokens: List[str] = []
            while idx < len(args) and args[idx] != "moves":
                fen_tokens.append(args[idx])
                idx += 1
            game = Game.from_fen(" ".join(fen_tokens))
        else:
            raise ValueError(f"unknown position source: {args[idx]!r}")

        if idx < len(args) and args[idx] == "moves":
            for uci in args[idx + 1 :]:
                try:
                    game.apply_move(parse_uci(uci))
                except ValueError as e:
                    raise ValueError(f"{uci}: {e}") from e
        # Only replace the session once the whole command succeeded
        self.game = game
        self._emit(GameState.from_game(self.game), write)

    def cmd_moves(self, args: List[str], write: Writer) -> None:
        if len(args) != 1:
            raise ValueError("moves needs exactly one square")
        sq = str_to_square(args[0])
        self._emit(SquareMoves.from_squares(sq, self.game.legal_moves_from(sq)), write)

    def cmd_move(self, args: List[str], write: Writer) -> None:
        if len(args) != 1:
            raise ValueError("move needs exactly one UCI move")
        self.game.apply_move(parse_uci(args[0]))
        self._emit(GameState.from_game(self.game), write)

    def cmd_undo(self, write: Writer) -> None:
        self.game.undo_move()
        self._emit(GameState.from_game(self.game), write)

    def cmd_state(self, write: Writer) -> None:
        self._emit(GameState.from_game(self.game), write)

    # ---- Dispatch ----
    def handle(self, line: str, write: Writer) -> bool:
        """Run one command line; return False when the loop should stop."""
        parts = line.split()
        if not parts:
            return True
        cmd, args = parts[0], parts[1:]
        logger.debug("command %s %s", cmd, args)

        if cmd == "quit":
            return False
        try:
            if cmd == "new":
                self.cmd_new(write)
            elif cmd == "position":
                self.cmd_position(args, write)
            elif cmd == "moves":
                self.cmd_moves(args, write)
            elif cmd == "move":
                self.cmd_move(args, write)
            elif cmd == "undo":
                self.cmd_undo(write)
            elif cmd == "state":
                self.cmd_state(write)
            else:
                logger.info("unknown command %r", cmd)
                self._error("unknown_command", f"unknown command: {cmd}", write)
        except ValueError as e:
            logger.info("rejected %r: %s", line, e)
            self._error("bad_request", str(e), write)
        return True

    def _emit(self, model: BaseModel, write: Writer) -> None:
        write(model.model_dump_json())

    def _error(self, code: str, message: str, write: Writer) -> None:
        self._emit(ErrorEnvelope(error=ErrorBody(code=code, message=message)), write)


def _default_writer(line: str) -> None:
    # Ensure newline termination and immediate flush
    sys.stdout.write(line + "\n")
    sys.stdout.flush()


def run_loop(
    lines: Optional[Iterable[str]] = None,
    write: Writer = _default_writer,
    game: Optional[Game] = None,
) -> None:
    proto = TextProtocol(game)
    for raw in lines if lines is not None else sys.stdin:
        if not proto.handle(raw.strip(), write):
            break
