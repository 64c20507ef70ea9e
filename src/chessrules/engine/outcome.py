from __future__ import annotations

from enum import Enum
from typing import List

from .attacks import is_in_check
from .board import Board, Color
from .castling import CastlingRights
from .legality import filter_legal
from .move import Move
from .movegen import theoretical_moves


class GameOutcome(str, Enum):
    ONGOING = "ongoing"
    CHECK = "check"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"

    @property
    def is_terminal(self) -> bool:
        return self in (GameOutcome.CHECKMATE, GameOutcome.STALEMATE)


def all_legal_moves(board: Board, color: Color, rights: CastlingRights) -> List[Move]:
    """Return every legal move for ``color``, origins in row-major order."""
    moves: List[Move] = []
    for from_sq, _ in board.pieces(color):
        candidates = theoretical_moves(board, from_sq, rights)
        for to_sq in filter_legal(board, from_sq, candidates, color):
            moves.append(Move(from_sq, to_sq))
    return moves


def has_legal_move(board: Board, color: Color, rights: CastlingRights) -> bool:
    """Return True as soon as any ``color`` piece has a legal move."""
    for from_sq, _ in board.pieces(color):
        candidates = theoretical_moves(board, from_sq, rights)
        if filter_legal(board, from_sq, candidates, color):
            return True
    return False


def classify(board: Board, color_to_move: Color, rights: CastlingRights) -> GameOutcome:
    """Classify the position for the side about to move.

    Re-run after every committed move; nothing is cached between calls.
    """
    can_move = has_legal_move(board, color_to_move, rights)
    in_check = is_in_check(board, color_to_move)
    if not can_move:
        return GameOutcome.CHECKMATE if in_check else GameOutcome.STALEMATE
    return GameOutcome.CHECK if in_check else GameOutcome.ONGOING
