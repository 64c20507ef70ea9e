from __future__ import annotations

from typing import Callable, Optional, Tuple

from .board import Board, Piece, PieceKind, Square
from .castling import CastlingRights


# Receives the moved piece and its destination; a returned kind replaces it
PromotionHook = Callable[[Piece, Square], Optional[PieceKind]]


def apply_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    rights: CastlingRights,
    promote: Optional[PromotionHook] = None,
) -> Tuple[Board, CastlingRights]:
    """Commit a move and return the resulting board and castling rights.

    The move must come from :func:`~chessrules.engine.legality.legal_moves`;
    legality is not re-checked. Castling relocates king and rook together, and
    capturing a rook on its corner drops that corner's castling right.

    Args:
        board (Board): Position before the move.
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        rights (CastlingRights): Rights before the move.
        promote (Optional[PromotionHook]): Optional piece-kind override applied
            to the moved piece after relocation.

    Returns:
        Tuple[Board, CastlingRights]: New board and updated rights; the inputs
            are left untouched.

    Raises:
        ValueError: If ``from_sq`` is empty.
    """
    piece = board.piece_at(from_sq)
    if piece is None:
        raise ValueError("no piece to move from from_sq")

    captured = board.piece_at(to_sq)
    new_board = board.with_move(from_sq, to_sq)
    if promote is not None:
        kind = promote(piece, to_sq)
        if kind is not None and kind is not piece.kind:
            new_board = new_board.with_piece(to_sq, Piece(kind, piece.color))

    return new_board, rights.after_move(piece, from_sq, to_sq, captured)
