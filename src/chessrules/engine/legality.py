from __future__ import annotations

from typing import Iterable, List

from .attacks import is_square_attacked
from .board import Board, Color, Square
from .castling import CastlingRights
from .movegen import theoretical_moves


def filter_legal(
    board: Board, from_sq: Square, candidates: Iterable[Square], moving_color: Color
) -> List[Square]:
    """Keep the candidates that do not leave ``moving_color``'s king attacked.

    Each candidate is played on a scratch board (castling relocates the rook
    too) and the mover's king is looked up afterwards. A candidate after which
    no king can be found is discarded.
    """
    legal: List[Square] = []
    opponent = moving_color.opponent
    for to_sq in candidates:
        scratch = board.with_move(from_sq, to_sq)
        king_sq = scratch.find_king(moving_color)
        if king_sq is None:
            continue
        if not is_square_attacked(scratch, king_sq, opponent):
            legal.append(to_sq)
    return legal


def legal_moves(
    board: Board, from_sq: Square, rights: CastlingRights, color_to_move: Color
) -> List[Square]:
    """Return the legal destinations for the piece on ``from_sq``.

    Empty when the square is empty or holds a piece that is not
    ``color_to_move``'s. Always a subset of :func:`theoretical_moves`.
    """
    piece = board.piece_at(from_sq)
    if piece is None or piece.color is not color_to_move:
        return []
    return filter_legal(board, from_sq, theoretical_moves(board, from_sq, rights), color_to_move)
