from __future__ import annotations

import pytest

from chessrules.engine.board import STARTPOS_FEN
from chessrules.engine.game import Game


def test_startpos_round_trip() -> None:
    assert Game.from_fen(STARTPOS_FEN).to_fen() == STARTPOS_FEN
    assert Game.new().to_fen() == STARTPOS_FEN


@pytest.mark.parametrize(
    "fen",
    [
        # Mixed pieces and empty squares, some castling rights
        "r1bqkbnr/pppp1ppp/2n5/4p3/3P4/5N2/PPP1PPPP/RNBQKB1R b KQ - 2 3",
        # All castling rights
        "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1",
        # No castling rights
        "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
    ],
)
def test_round_trip_various_positions(fen: str) -> None:
    assert Game.from_fen(fen).to_fen() == fen


def test_en_passant_target_is_dropped() -> None:
    fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
    assert Game.from_fen(fen).to_fen() == fen.replace(" e3 ", " - ")


@pytest.mark.parametrize(
    "fen",
    [
        "",  # empty
        "8/8/8/8/8/8/8 w - - 0 1",  # not enough ranks
        "8/8/8/8/8/8/8/8 w - - 0",  # missing fields
        "8/8/8/8/8/8/8/8 x - - 0 1",  # bad side to move
        "8/8/8/8/8/8/8/8 w A - 0 1",  # bad castling
        "8/8/8/8/8/8/8/8 w - z9 0 1",  # bad ep square
        "8/8/8/8/8/8/8/8 w - e4 0 1",  # ep square on wrong rank
        "8/8/8/8/8/8/8/8 w - - -1 1",  # bad halfmove
        "8/8/8/8/8/8/8/8 w - - 0 0",  # bad fullmove
        "8/8/8/8/8/8/8/8 w - - x 1",  # non-numeric counter
        "9/8/8/8/8/8/8/8 w - - 0 1",  # too many squares
        "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",  # bad piece
    ],
)
def test_invalid_fen_raises(fen: str) -> None:
    with pytest.raises(ValueError):
        Game.from_fen(fen)
