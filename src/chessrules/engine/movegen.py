from __future__ import annotations

from typing import Dict, List

from .attacks import (
    DIAGONAL_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    ORTHOGONAL_DIRS,
    Offsets,
    is_square_attacked,
)
from .board import (
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    Board,
    Color,
    Piece,
    PieceKind,
    Square,
    in_bounds,
)
from .castling import CastlingRights, king_home


_SLIDER_DIRS: Dict[PieceKind, Offsets] = {
    PieceKind.ROOK: ORTHOGONAL_DIRS,
    PieceKind.BISHOP: DIAGONAL_DIRS,
    PieceKind.QUEEN: ORTHOGONAL_DIRS + DIAGONAL_DIRS,
}


def theoretical_moves(board: Board, from_sq: Square, rights: CastlingRights) -> List[Square]:
    """Return pseudo-legal destinations for the piece on ``from_sq``.

    Args:
        board (Board): Position to generate on.
        from_sq (Square): Square holding the piece to move.
        rights (CastlingRights): Castling history consulted for king moves.

    Returns:
        List[Square]: Destinations in generation order. Whether a move leaves
            the mover's own king attacked is not checked here; an empty
            square yields an empty list.

    Notes:
        Castling is the one exception: it is only offered when the king and
        the squares it crosses are not attacked.
    """
    piece = board.piece_at(from_sq)
    if piece is None:
        return []
    kind = piece.kind
    if kind is PieceKind.PAWN:
        return _pawn_moves(board, from_sq, piece.color)
    if kind is PieceKind.KNIGHT:
        return _step_moves(board, from_sq, piece.color, KNIGHT_OFFSETS)
    if kind is PieceKind.KING:
        moves = _step_moves(board, from_sq, piece.color, KING_OFFSETS)
        moves.extend(_castling_moves(board, from_sq, piece.color, rights))
        return moves
    return _slide_moves(board, from_sq, piece.color, _SLIDER_DIRS[kind])


def _pawn_moves(board: Board, from_sq: Square, color: Color) -> List[Square]:
    moves: List[Square] = []
    step = color.forward

    one = from_sq.offset(step, 0)
    if in_bounds(one) and board.is_empty(one):
        moves.append(one)
        # Double push only from the starting rank, both squares empty
        two = from_sq.offset(2 * step, 0)
        if from_sq.rank == color.pawn_rank and board.is_empty(two):
            moves.append(two)

    # Diagonal captures need an opposing piece; no en passant
    for d_file in (-1, 1):
        cap = from_sq.offset(step, d_file)
        target = board.piece_at(cap)
        if target is not None and target.color is not color:
            moves.append(cap)
    return moves


def _step_moves(board: Board, from_sq: Square, color: Color, offsets: Offsets) -> List[Square]:
    moves: List[Square] = []
    for d_rank, d_file in offsets:
        to_sq = from_sq.offset(d_rank, d_file)
        if not in_bounds(to_sq):
            continue
        target = board.piece_at(to_sq)
        if target is None or target.color is not color:
            moves.append(to_sq)
    return moves


def _slide_moves(board: Board, from_sq: Square, color: Color, directions: Offsets) -> List[Square]:
    moves: List[Square] = []
    for d_rank, d_file in directions:
        to_sq = from_sq.offset(d_rank, d_file)
        while in_bounds(to_sq):
            target = board.piece_at(to_sq)
            if target is not None:
                if target.color is not color:
                    moves.append(to_sq)
                break
            moves.append(to_sq)
            to_sq = to_sq.offset(d_rank, d_file)
    return moves


def _castling_moves(
    board: Board, king_sq: Square, color: Color, rights: CastlingRights
) -> List[Square]:
    side = rights.for_color(color)
    if king_sq != king_home(color) or not (side.kingside or side.queenside):
        return []
    opponent = color.opponent
    # Never castle out of check; evaluated once for both sides
    if is_square_attacked(board, king_sq, opponent):
        return []

    rank = king_sq.rank
    rook = Piece(PieceKind.ROOK, color)
    moves: List[Square] = []

    if side.kingside and board.piece_at(Square(rank, KINGSIDE_ROOK_FILE)) == rook:
        f_sq, g_sq = Square(rank, 5), Square(rank, 6)
        if (
            board.is_empty(f_sq)
            and board.is_empty(g_sq)
            and not is_square_attacked(board, f_sq, opponent)
            and not is_square_attacked(board, g_sq, opponent)
        ):
            moves.append(g_sq)

    if side.queenside and board.piece_at(Square(rank, QUEENSIDE_ROOK_FILE)) == rook:
        b_sq, c_sq, d_sq = Square(rank, 1), Square(rank, 2), Square(rank, 3)
        if (
            board.is_empty(b_sq)
            and board.is_empty(c_sq)
            and board.is_empty(d_sq)
            and not is_square_attacked(board, c_sq, opponent)
            and not is_square_attacked(board, d_sq, opponent)
        ):
            moves.append(c_sq)
    return moves
