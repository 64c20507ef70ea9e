"""Chess rules engine: move generation, legality, check and game outcome.

Every function here is pure over its explicit arguments; boards and castling
rights are immutable values.
"""

from __future__ import annotations

from .apply import PromotionHook, apply_move
from .attacks import is_in_check, is_square_attacked
from .board import STARTPOS_FEN, Board, Color, Piece, PieceKind, Square, in_bounds
from .castling import CastlingRights, SideRights
from .game import Game
from .legality import filter_legal, legal_moves
from .move import Move, MoveKind, classify_move, parse_uci, square_to_str, str_to_square
from .movegen import theoretical_moves
from .outcome import GameOutcome, all_legal_moves, classify, has_legal_move
from .perft import perft, perft_divide

__all__ = [
    "STARTPOS_FEN",
    "Board",
    "CastlingRights",
    "Color",
    "Game",
    "GameOutcome",
    "Move",
    "MoveKind",
    "Piece",
    "PieceKind",
    "PromotionHook",
    "SideRights",
    "Square",
    "all_legal_moves",
    "apply_move",
    "classify",
    "classify_move",
    "filter_legal",
    "has_legal_move",
    "in_bounds",
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    "parse_uci",
    "perft",
    "perft_divide",
    "square_to_str",
    "str_to_square",
    "theoretical_moves",
]
