from __future__ import annotations

from chessrules.engine.attacks import is_in_check, is_square_attacked
from chessrules.engine.board import Board, Color
from chessrules.engine.move import str_to_square


def _attacked(placement: str, square: str, by: Color) -> bool:
    return is_square_attacked(Board.from_placement(placement), str_to_square(square), by)


def test_pawn_attacks_follow_attacker_direction() -> None:
    # White pawn e4 attacks d5/f5; black pawn e5 attacks d4/f4
    assert _attacked("8/8/8/8/4P3/8/8/8", "d5", Color.WHITE)
    assert _attacked("8/8/8/8/4P3/8/8/8", "f5", Color.WHITE)
    assert not _attacked("8/8/8/8/4P3/8/8/8", "d3", Color.WHITE)
    assert not _attacked("8/8/8/8/4P3/8/8/8", "e5", Color.WHITE)
    assert _attacked("8/8/8/4p3/8/8/8/8", "d4", Color.BLACK)
    assert not _attacked("8/8/8/4p3/8/8/8/8", "d6", Color.BLACK)
    # Color matters
    assert not _attacked("8/8/8/8/4P3/8/8/8", "d5", Color.BLACK)


def test_knight_attacks() -> None:
    placement = "8/8/8/8/8/8/8/6N1"  # white knight g1
    assert _attacked(placement, "f3", Color.WHITE)
    assert _attacked(placement, "h3", Color.WHITE)
    assert _attacked(placement, "e2", Color.WHITE)
    assert not _attacked(placement, "g3", Color.WHITE)


def test_rook_rays_stop_at_first_piece() -> None:
    placement = "8/8/8/8/8/P7/8/R7"  # rook a1 behind own pawn a3
    assert _attacked(placement, "a2", Color.WHITE)
    assert _attacked(placement, "a3", Color.WHITE)
    assert not _attacked(placement, "a4", Color.WHITE)
    assert _attacked(placement, "h1", Color.WHITE)


def test_diagonal_rays_for_bishop_and_queen() -> None:
    assert _attacked("8/8/8/8/8/8/8/2B5", "h6", Color.WHITE)
    assert not _attacked("8/8/8/8/8/4p3/8/2B5", "g5", Color.WHITE)
    assert _attacked("3q4/8/8/8/8/8/8/8", "h4", Color.BLACK)
    assert _attacked("3q4/8/8/8/8/8/8/8", "d1", Color.BLACK)
    # Rook does not attack diagonally
    assert not _attacked("3r4/8/8/8/8/8/8/8", "h4", Color.BLACK)


def test_king_attacks_adjacent_squares_only() -> None:
    placement = "8/8/8/3k4/8/8/8/8"
    assert _attacked(placement, "e4", Color.BLACK)
    assert _attacked(placement, "c6", Color.BLACK)
    assert not _attacked(placement, "d3", Color.BLACK)


def test_is_in_check() -> None:
    b = Board.from_placement("4r3/8/8/8/8/8/8/4K3")
    assert is_in_check(b, Color.WHITE)
    assert not is_in_check(Board.startpos(), Color.WHITE)


def test_is_in_check_without_king_reports_false() -> None:
    b = Board.from_placement("4r3/8/8/8/8/8/8/8")
    assert is_in_check(b, Color.WHITE) is False
