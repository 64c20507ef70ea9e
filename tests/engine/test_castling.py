from __future__ import annotations

import pytest

from chessrules.engine.apply import apply_move
from chessrules.engine.board import Board, Color, Piece, PieceKind
from chessrules.engine.castling import CastlingRights, SideRights
from chessrules.engine.game import Game
from chessrules.engine.move import parse_uci, str_to_square
from chessrules.engine.movegen import theoretical_moves


def moves_set(game: Game) -> set[str]:
    return {m.to_uci() for m in game.legal_moves()}


def test_white_castling_available_when_clear_and_not_in_check() -> None:
    game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    ms = moves_set(game)
    assert "e1g1" in ms
    assert "e1c1" in ms


def test_white_castling_blocked_when_in_check() -> None:
    # A black rook on e8 gives check on e1
    game = Game.from_fen("4r2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    ms = moves_set(game)
    assert "e1g1" not in ms
    assert "e1c1" not in ms


def test_kingside_castling_moves_rook_and_sets_rights() -> None:
    board = Board.from_placement("r3k2r/8/8/8/8/8/8/R3K2R")
    rights = CastlingRights()
    new_board, new_rights = apply_move(board, str_to_square("e1"), str_to_square("g1"), rights)

    assert new_board.piece_at(str_to_square("g1")) == Piece(PieceKind.KING, Color.WHITE)
    assert new_board.piece_at(str_to_square("f1")) == Piece(PieceKind.ROOK, Color.WHITE)
    assert new_board.is_empty(str_to_square("h1"))
    assert new_board.is_empty(str_to_square("e1"))
    assert new_rights.white.king_moved and new_rights.white.rook_kingside_moved
    assert new_rights.black == SideRights()
    # Inputs untouched
    assert rights == CastlingRights()
    assert board.piece_at(str_to_square("h1")) == Piece(PieceKind.ROOK, Color.WHITE)


def test_queenside_castling_for_black() -> None:
    game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R b KQkq - 0 1")
    game.apply_move(parse_uci("e8c8"))
    assert game.board.to_placement() == "2kr3r/8/8/8/8/8/8/R3K2R"
    assert game.rights.black.king_moved and game.rights.black.rook_queenside_moved
    assert game.to_fen().split()[2] == "KQ"


def test_rook_round_trip_loses_castling_for_good() -> None:
    game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    for uci in ("h1h2", "a8a7", "h2h1", "a7a8"):
        game.apply_move(parse_uci(uci))
    # Both rooks are home again, but they moved
    ms = moves_set(game)
    assert "e1g1" not in ms and "e1c1" in ms
    e1 = str_to_square("e1")
    assert str_to_square("g1") not in theoretical_moves(game.board, e1, game.rights)
    assert str_to_square("c1") in theoretical_moves(game.board, e1, game.rights)
    assert game.rights.black.rook_queenside_moved


def test_king_move_clears_both_sides() -> None:
    game = Game.from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
    game.apply_move(parse_uci("e1f1"))
    game.apply_move(parse_uci("a8b8"))
    game.apply_move(parse_uci("f1e1"))
    assert game.rights.white.king_moved
    assert not game.rights.white.kingside and not game.rights.white.queenside
    assert game.to_fen().split()[2] == "k"


def test_rook_move_off_non_home_square_keeps_rights() -> None:
    rights = CastlingRights()
    rook = Piece(PieceKind.ROOK, Color.WHITE)
    after = rights.after_move(rook, str_to_square("h4"), str_to_square("h5"))
    assert after == rights


def test_castling_field_round_trip() -> None:
    for text in ("KQkq", "Kq", "-", "Q"):
        assert CastlingRights.from_fen_field(text).to_fen_field() == text


def test_castling_field_rejects_garbage() -> None:
    for text in ("A", "KK", ""):
        with pytest.raises(ValueError):
            CastlingRights.from_fen_field(text)


def test_captured_home_rook_cannot_be_replaced_by_another_rook() -> None:
    game = Game.from_fen("4k3/8/8/8/8/8/6b1/R3K2R b KQ - 0 1")
    game.apply_move(parse_uci("g2h1"))
    assert game.to_fen() == "4k3/8/8/8/8/8/8/R3K2b w Q - 0 2"
    assert game.rights.white.rook_kingside_moved

    # The a-file rook walks over to h1; it never castles kingside
    for uci in ("a1a2", "e8d8", "a2h2", "d8e8", "h2h1", "e8d8"):
        game.apply_move(parse_uci(uci))
    assert game.to_fen() == "3k4/8/8/8/8/8/8/4K2R w - - 1 5"
    assert "e1g1" not in moves_set(game)


def test_capture_on_corner_marks_the_captured_side() -> None:
    board = Board.from_placement("r3k3/8/8/8/8/8/8/Q3K3")
    _, rights = apply_move(board, str_to_square("a1"), str_to_square("a8"), CastlingRights())
    assert rights.black.rook_queenside_moved
    assert not rights.black.rook_kingside_moved
    assert rights.white == SideRights()


def test_capturing_non_rook_on_corner_keeps_rights() -> None:
    # A knight sitting on h8 is not the home rook
    board = Board.from_placement("4k2n/8/8/8/8/8/8/4K2R")
    _, rights = apply_move(board, str_to_square("h1"), str_to_square("h8"), CastlingRights())
    assert rights.black == SideRights()
    assert rights.white.rook_kingside_moved


@pytest.mark.parametrize(
    "fen, expected",
    [
        # White's h1 rook is missing
        ("r3k2r/8/8/8/8/8/8/R3K3 w KQkq - 0 1", "Qkq"),
        # Enemy piece on the corner
        ("r3k2r/8/8/8/8/8/8/R3K2n w KQkq - 0 1", "Qkq"),
        # White king off its home square
        ("r3k2r/8/8/8/8/8/8/R2K3R w KQkq - 0 1", "kq"),
        ("4k3/8/8/8/8/8/8/4K3 w KQkq - 0 1", "-"),
    ],
)
def test_fen_rights_without_pieces_are_dropped(fen: str, expected: str) -> None:
    game = Game.from_fen(fen)
    assert game.to_fen().split()[2] == expected
    assert "e1g1" not in moves_set(game)
