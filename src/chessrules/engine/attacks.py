from __future__ import annotations

from typing import FrozenSet, Tuple

from .board import Board, Color, PieceKind, Square, in_bounds


Offsets = Tuple[Tuple[int, int], ...]

KNIGHT_OFFSETS: Offsets = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)
KING_OFFSETS: Offsets = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)
ORTHOGONAL_DIRS: Offsets = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIAGONAL_DIRS: Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))

_ORTHOGONAL_ATTACKERS: FrozenSet[PieceKind] = frozenset({PieceKind.ROOK, PieceKind.QUEEN})
_DIAGONAL_ATTACKERS: FrozenSet[PieceKind] = frozenset({PieceKind.BISHOP, PieceKind.QUEEN})


def is_square_attacked(board: Board, target: Square, attacking_color: Color) -> bool:
    """Return True if any ``attacking_color`` piece attacks ``target``.

    Covers: pawns, knights, king, and slider rays for bishops/rooks/queens.
    Works on any snapshot, including scratch boards with pieces missing, and
    does not depend on whose turn it is.
    """
    # Pawns attack diagonally forward, so attackers sit one rank behind target
    behind = -attacking_color.forward
    for d_file in (-1, 1):
        piece = board.piece_at(target.offset(behind, d_file))
        if piece is not None and piece.color is attacking_color and piece.kind is PieceKind.PAWN:
            return True

    if _hits_offset(board, target, attacking_color, KNIGHT_OFFSETS, PieceKind.KNIGHT):
        return True

    if _hits_ray(board, target, attacking_color, ORTHOGONAL_DIRS, _ORTHOGONAL_ATTACKERS):
        return True

    if _hits_ray(board, target, attacking_color, DIAGONAL_DIRS, _DIAGONAL_ATTACKERS):
        return True

    return _hits_offset(board, target, attacking_color, KING_OFFSETS, PieceKind.KING)


def is_in_check(board: Board, color: Color) -> bool:
    """Return True if ``color``'s king is attacked.

    A board without that king reports False: check cannot be evaluated, which
    callers must not read as a safety guarantee.
    """
    king_sq = board.find_king(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opponent)


def _hits_offset(
    board: Board, target: Square, color: Color, offsets: Offsets, kind: PieceKind
) -> bool:
    for d_rank, d_file in offsets:
        piece = board.piece_at(target.offset(d_rank, d_file))
        if piece is not None and piece.color is color and piece.kind is kind:
            return True
    return False


def _hits_ray(
    board: Board,
    target: Square,
    color: Color,
    directions: Offsets,
    kinds: FrozenSet[PieceKind],
) -> bool:
    for d_rank, d_file in directions:
        sq = target.offset(d_rank, d_file)
        while in_bounds(sq):
            piece = board.piece_at(sq)
            if piece is not None:
                if piece.color is color and piece.kind in kinds:
                    return True
                # Blocked by any other piece
                break
            sq = sq.offset(d_rank, d_file)
    return False
