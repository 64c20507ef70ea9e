from __future__ import annotations

from typing import Dict

from .apply import apply_move
from .board import Board, Color
from .castling import CastlingRights
from .outcome import all_legal_moves


def perft(board: Board, color: Color, rights: CastlingRights, depth: int) -> int:
    """Compute perft node count for the position at `depth`.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Note: en passant and promotion are not generated, so counts only match
    published tables at depths where neither can occur.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = all_legal_moves(board, color, rights)
    if depth == 1:
        return len(moves)

    nodes = 0
    for m in moves:
        child, child_rights = apply_move(board, m.from_sq, m.to_sq, rights)
        nodes += perft(child, color.opponent, child_rights, depth - 1)
    return nodes


def perft_divide(board: Board, color: Color, rights: CastlingRights, depth: int) -> Dict[str, int]:
    """Per-root-move perft counts keyed by UCI string; values sum to ``perft``."""
    if depth < 1:
        raise ValueError("divide needs depth >= 1")
    counts: Dict[str, int] = {}
    for m in all_legal_moves(board, color, rights):
        child, child_rights = apply_move(board, m.from_sq, m.to_sq, rights)
        counts[m.to_uci()] = perft(child, color.opponent, child_rights, depth - 1)
    return counts
