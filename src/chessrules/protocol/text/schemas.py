from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ...engine.game import Game
from ...engine.move import square_to_str
from ...engine.board import Square


class GameState(BaseModel):
    fen: str
    turn: str = Field(..., description="Side to move: white or black")
    outcome: str = Field(..., description="ongoing, check, checkmate or stalemate")
    in_check: bool
    legal_moves: List[str]
    last_move: Optional[str]
    move_history: List[str]
    message: str

    @classmethod
    def from_game(cls, game: Game) -> "GameState":
        history = game.move_history_uci()
        return cls(
            fen=game.to_fen(),
            turn=game.turn.value,
            outcome=game.outcome().value,
            in_check=game.in_check(),
            legal_moves=[m.to_uci() for m in game.legal_moves()],
            last_move=history[-1] if history else None,
            move_history=history,
            message=game.status_message(),
        )


class SquareMoves(BaseModel):
    square: str
    moves: List[str] = Field(default_factory=list, description="Legal destinations")

    @classmethod
    def from_squares(cls, origin: Square, targets: List[Square]) -> "SquareMoves":
        return cls(square=square_to_str(origin), moves=[square_to_str(t) for t in targets])


class ErrorBody(BaseModel):
    code: str
    message: str
    type: str = "client_error"


class ErrorEnvelope(BaseModel):
    error: ErrorBody
