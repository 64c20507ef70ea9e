from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .board import (
    KING_FILE,
    KINGSIDE_ROOK_FILE,
    QUEENSIDE_ROOK_FILE,
    Board,
    Color,
    Piece,
    PieceKind,
    Square,
)


@dataclass(frozen=True)
class SideRights:
    """Movement history of one side's king and home-square rooks."""

    king_moved: bool = False
    rook_kingside_moved: bool = False
    rook_queenside_moved: bool = False

    @property
    def kingside(self) -> bool:
        return not (self.king_moved or self.rook_kingside_moved)

    @property
    def queenside(self) -> bool:
        return not (self.king_moved or self.rook_queenside_moved)


@dataclass(frozen=True)
class CastlingRights:
    """Castling history for both colors.

    Flags start cleared and only ever get set: by committed moves (the moving
    king or rook, or a rook captured on its corner) or by loading a position
    that cannot support them. A new value is returned on every update.
    """

    white: SideRights = field(default_factory=SideRights)
    black: SideRights = field(default_factory=SideRights)

    def for_color(self, color: Color) -> SideRights:
        return self.white if color is Color.WHITE else self.black

    def _with_side(self, color: Color, side: SideRights) -> "CastlingRights":
        if color is Color.WHITE:
            return replace(self, white=side)
        return replace(self, black=side)

    def after_move(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        captured: Optional[Piece] = None,
    ) -> "CastlingRights":
        """Return the rights after ``piece`` committed a move ``from_sq -> to_sq``.

        - Any king move sets ``king_moved``; castling also marks the rook it
          castled with.
        - A rook leaving its kingside/queenside home square sets that flag.
        - A rook captured on its home square sets its owner's flag for that
          corner, so no other rook can inherit the right.
        """
        rights = self._after_mover(piece, from_sq, to_sq)
        if captured is not None and captured.kind is PieceKind.ROOK:
            rights = rights._mark_rook_gone(captured.color, to_sq)
        return rights

    def _after_mover(self, piece: Piece, from_sq: Square, to_sq: Square) -> "CastlingRights":
        color = piece.color
        side = self.for_color(color)
        if piece.kind is PieceKind.KING:
            side = replace(side, king_moved=True)
            delta = to_sq.file - from_sq.file
            if delta == 2:
                side = replace(side, rook_kingside_moved=True)
            elif delta == -2:
                side = replace(side, rook_queenside_moved=True)
        elif piece.kind is PieceKind.ROOK:
            return self._mark_rook_gone(color, from_sq)
        if side == self.for_color(color):
            return self
        return self._with_side(color, side)

    def _mark_rook_gone(self, color: Color, corner: Square) -> "CastlingRights":
        # No-op unless ``corner`` is one of ``color``'s rook home squares
        side = self.for_color(color)
        if corner.rank != color.home_rank:
            return self
        if corner.file == KINGSIDE_ROOK_FILE and not side.rook_kingside_moved:
            return self._with_side(color, replace(side, rook_kingside_moved=True))
        if corner.file == QUEENSIDE_ROOK_FILE and not side.rook_queenside_moved:
            return self._with_side(color, replace(side, rook_queenside_moved=True))
        return self

    def clean(self, board: Board) -> "CastlingRights":
        """Drop rights the position cannot support.

        A side whose king is off its home square loses both rights; a corner
        without that side's rook loses its own. Used when loading FEN, where
        the castling field may claim more than the placement allows.
        """
        rights = self
        for color in (Color.WHITE, Color.BLACK):
            if board.piece_at(king_home(color)) != Piece(PieceKind.KING, color):
                side = replace(rights.for_color(color), king_moved=True)
                rights = rights._with_side(color, side)
            rook = Piece(PieceKind.ROOK, color)
            for file in (KINGSIDE_ROOK_FILE, QUEENSIDE_ROOK_FILE):
                corner = Square(color.home_rank, file)
                if board.piece_at(corner) != rook:
                    rights = rights._mark_rook_gone(color, corner)
        return rights

    # --- FEN castling field ---
    @classmethod
    def from_fen_field(cls, text: str) -> "CastlingRights":
        """Parse the FEN castling field (``"KQkq"``, a subset, or ``"-"``).

        An absent right is recorded as that rook having moved.

        Raises:
            ValueError: If the field has characters outside ``KQkq``.
        """
        if text == "-":
            text = ""
        elif not text or any(ch not in "KQkq" for ch in text) or len(set(text)) != len(text):
            raise ValueError(f"invalid castling rights: {text!r}")
        return cls(
            white=SideRights(
                rook_kingside_moved="K" not in text,
                rook_queenside_moved="Q" not in text,
            ),
            black=SideRights(
                rook_kingside_moved="k" not in text,
                rook_queenside_moved="q" not in text,
            ),
        )

    def to_fen_field(self) -> str:
        out = ""
        if self.white.kingside:
            out += "K"
        if self.white.queenside:
            out += "Q"
        if self.black.kingside:
            out += "k"
        if self.black.queenside:
            out += "q"
        return out or "-"


def king_home(color: Color) -> Square:
    return Square(color.home_rank, KING_FILE)
