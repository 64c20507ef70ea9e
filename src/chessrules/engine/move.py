from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .board import Board, PieceKind, Square


FILES = "abcdefgh"


class MoveKind(str, Enum):
    NORMAL = "normal"
    CAPTURE = "capture"
    KINGSIDE_CASTLE = "kingside_castle"
    QUEENSIDE_CASTLE = "queenside_castle"


@dataclass(frozen=True)
class Move:
    """A committed or candidate move.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
    """

    from_sq: Square
    to_sq: Square

    def to_uci(self) -> str:
        """Serialize the move into long algebraic form.

        Returns:
            str: Move encoded like ``"e2e4"``.
        """
        return square_to_str(self.from_sq) + square_to_str(self.to_sq)


def classify_move(board: Board, move: Move) -> MoveKind:
    """Derive the move classification from the position it is played in.

    A king moving two files castles; otherwise a move onto an occupied square
    captures. Nothing about the move is stored beyond its two squares.
    """
    piece = board.piece_at(move.from_sq)
    if piece is not None and piece.kind is PieceKind.KING:
        delta = move.to_sq.file - move.from_sq.file
        if delta == 2:
            return MoveKind.KINGSIDE_CASTLE
        if delta == -2:
            return MoveKind.QUEENSIDE_CASTLE
    if board.piece_at(move.to_sq) is not None:
        return MoveKind.CAPTURE
    return MoveKind.NORMAL


def parse_uci(uci: str) -> Move:
    """Parse a long algebraic move string such as ``"e2e4"``.

    Raises:
        ValueError: If the string is not four characters naming two squares.
            Promotion suffixes are rejected; promotion is not supported.
    """
    if len(uci) == 5:
        raise ValueError(f"promotion is not supported: {uci!r}")
    if len(uci) != 4:
        raise ValueError(f"invalid UCI move length: {uci!r}")
    return Move(str_to_square(uci[0:2]), str_to_square(uci[2:4]))


def str_to_square(s: str) -> Square:
    """Convert algebraic notation into a square.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: ``Square(rank, file)`` with rank 0 being the eighth rank.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] not in FILES or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    return Square(8 - int(s[1]), FILES.index(s[0]))


def square_to_str(sq: Square) -> str:
    """Convert a square into algebraic notation.

    Raises:
        ValueError: If ``sq`` is off the board.
    """
    rank, file = sq
    if not (0 <= rank < 8 and 0 <= file < 8):
        raise ValueError(f"invalid square: {tuple(sq)}")
    return FILES[file] + str(8 - rank)
