from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple

from .apply import apply_move
from .attacks import is_in_check
from .board import STARTPOS_FEN, Board, Color, PieceKind, Square
from .castling import CastlingRights
from .legality import legal_moves
from .move import Move, classify_move, square_to_str, str_to_square
from .outcome import GameOutcome, all_legal_moves, classify


logger = logging.getLogger(__name__)

_SIDE_TO_COLOR = {"w": Color.WHITE, "b": Color.BLACK}
_COLOR_TO_SIDE = {v: k for k, v in _SIDE_TO_COLOR.items()}


class _Snapshot(NamedTuple):
    board: Board
    turn: Color
    rights: CastlingRights
    halfmove_clock: int
    fullmove_number: int


@dataclass
class Game:
    """Game session around an immutable board.

    Responsibility: own board, side to move and castling rights, expose legal
    moves, commit moves, undo them.
    """

    board: Board
    turn: Color = Color.WHITE
    rights: CastlingRights = field(default_factory=CastlingRights)
    halfmove_clock: int = 0
    fullmove_number: int = 1
    move_stack: List[Move] = field(default_factory=list)
    _undo: List[_Snapshot] = field(default_factory=list, repr=False)

    @classmethod
    def new(cls) -> "Game":
        return cls(board=Board.startpos())

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        """Create a session from a Forsyth-Edwards Notation (FEN) string.

        Args:
            fen (str): Six-field FEN string.

        Returns:
            Game: Session positioned as described, with empty history.

        Raises:
            ValueError: If ``fen`` is empty, has the wrong number of fields, or
                contains invalid placement, side to move, castling rights, en
                passant square, or move counters.

        Notes:
            En passant is not supported: a target square is validated and then
            dropped, so :meth:`to_fen` always writes ``-`` in that field.
        """
        if not fen or not isinstance(fen, str):
            raise ValueError("FEN must be a non-empty string")
        parts = fen.strip().split()
        if len(parts) != 6:
            raise ValueError("FEN must have 6 fields")
        placement, stm, castling, ep, halfmove, fullmove = parts

        board = Board.from_placement(placement)
        if stm not in _SIDE_TO_COLOR:
            raise ValueError("side to move must be 'w' or 'b'")
        # Rights the placement cannot back (king or corner rook missing) are dropped
        rights = CastlingRights.from_fen_field(castling).clean(board)

        if ep != "-":
            try:
                ep_sq = str_to_square(ep)
            except ValueError as e:
                raise ValueError("invalid en passant square") from e
            # Target must sit on the third or sixth rank
            if ep_sq.rank not in (2, 5):
                raise ValueError("invalid en passant square rank")

        try:
            halfmove_clock = int(halfmove)
            fullmove_number = int(fullmove)
        except ValueError as e:
            raise ValueError("invalid move counters in FEN") from e
        if halfmove_clock < 0 or fullmove_number <= 0:
            raise ValueError("invalid move counters in FEN")

        return cls(
            board=board,
            turn=_SIDE_TO_COLOR[stm],
            rights=rights,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )

    def to_fen(self) -> str:
        return (
            f"{self.board.to_placement()} {_COLOR_TO_SIDE[self.turn]} "
            f"{self.rights.to_fen_field()} - {self.halfmove_clock} {self.fullmove_number}"
        )

    # --- Queries ---
    def legal_moves_from(self, sq: Square) -> List[Square]:
        return legal_moves(self.board, sq, self.rights, self.turn)

    def legal_moves(self) -> List[Move]:
        return all_legal_moves(self.board, self.turn, self.rights)

    def outcome(self) -> GameOutcome:
        return classify(self.board, self.turn, self.rights)

    def in_check(self) -> bool:
        return is_in_check(self.board, self.turn)

    def is_over(self) -> bool:
        return self.outcome().is_terminal

    def move_history_uci(self) -> List[str]:
        return [m.to_uci() for m in self.move_stack]

    # --- Mutation ---
    def apply_move(self, move: Move) -> GameOutcome:
        """Validate and commit ``move`` for the side to move.

        Returns:
            GameOutcome: Classification for the side that moves next.

        Raises:
            ValueError: If the game already ended or the move is not legal.
        """
        if self.is_over():
            raise ValueError("game is over")
        piece = self.board.piece_at(move.from_sq)
        if piece is None or move.to_sq not in self.legal_moves_from(move.from_sq):
            raise ValueError("illegal move")

        resets_clock = piece.kind is PieceKind.PAWN or self.board.piece_at(move.to_sq) is not None
        kind = classify_move(self.board, move)

        self._undo.append(
            _Snapshot(self.board, self.turn, self.rights, self.halfmove_clock, self.fullmove_number)
        )
        self.board, self.rights = apply_move(self.board, move.from_sq, move.to_sq, self.rights)
        self.move_stack.append(move)
        self.halfmove_clock = 0 if resets_clock else self.halfmove_clock + 1
        if self.turn is Color.BLACK:
            self.fullmove_number += 1
        self.turn = self.turn.opponent
        logger.debug("move %s (%s), %s to move", move.to_uci(), kind.value, self.turn.value)

        result = self.outcome()
        if result.is_terminal:
            logger.info("game over: %s after %d moves", result.value, len(self.move_stack))
        return result

    def undo_move(self) -> None:
        if not self._undo:
            raise ValueError("no moves to undo")
        snap = self._undo.pop()
        last = self.move_stack.pop()
        self.board = snap.board
        self.turn = snap.turn
        self.rights = snap.rights
        self.halfmove_clock = snap.halfmove_clock
        self.fullmove_number = snap.fullmove_number
        logger.debug("undo %s", last.to_uci())

    def status_message(self) -> str:
        """Human-readable status line.

        After a move it names the side that moved, the piece glyph and its
        destination (``"white's ♙ moved to e4."``), adding a check warning for
        the side now to move. Game end and the unplayed position get their own
        lines.
        """
        result = self.outcome()
        if result is GameOutcome.CHECKMATE:
            return f"Checkmate! {self.turn.opponent.value.upper()} wins!"
        if result is GameOutcome.STALEMATE:
            return "Stalemate! Game is a draw."
        check = f"{self.turn.value.upper()}'s King is in CHECK!"
        if not self.move_stack:
            return check if result is GameOutcome.CHECK else f"{self.turn.value} to move."

        last = self.move_stack[-1]
        moved = self.board.piece_at(last.to_sq)
        glyph = moved.glyph if moved is not None else "?"
        message = f"{self.turn.opponent.value}'s {glyph} moved to {square_to_str(last.to_sq)}."
        if result is GameOutcome.CHECK:
            message += f" {check}"
        return message
