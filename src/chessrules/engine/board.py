from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, NamedTuple, Optional, Sequence, Tuple


STARTPOS_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"
STARTPOS_PLACEMENT = STARTPOS_FEN.split()[0]

KING_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0


class Color(str, Enum):
    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def home_rank(self) -> int:
        """Back rank index (rank 0 is the eighth rank)."""
        return 7 if self is Color.WHITE else 0

    @property
    def forward(self) -> int:
        # White advances toward rank 0
        return -1 if self is Color.WHITE else 1

    @property
    def pawn_rank(self) -> int:
        return 6 if self is Color.WHITE else 1


class PieceKind(str, Enum):
    PAWN = "p"
    KNIGHT = "n"
    BISHOP = "b"
    ROOK = "r"
    QUEEN = "q"
    KING = "k"


_GLYPHS = {
    PieceKind.PAWN: ("♙", "♟"),
    PieceKind.KNIGHT: ("♘", "♞"),
    PieceKind.BISHOP: ("♗", "♝"),
    PieceKind.ROOK: ("♖", "♜"),
    PieceKind.QUEEN: ("♕", "♛"),
    PieceKind.KING: ("♔", "♚"),
}


@dataclass(frozen=True)
class Piece:
    """Piece value: a kind and a color, no identity beyond its square."""

    kind: PieceKind
    color: Color

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        """Build a piece from a FEN letter (uppercase = white).

        Raises:
            ValueError: If ``ch`` is not one of ``PNBRQKpnbrqk``.
        """
        try:
            kind = PieceKind(ch.lower())
        except ValueError:
            raise ValueError(f"invalid piece character: {ch!r}") from None
        return cls(kind, Color.WHITE if ch.isupper() else Color.BLACK)

    @property
    def symbol(self) -> str:
        """FEN letter for this piece."""
        ch = self.kind.value
        return ch.upper() if self.color is Color.WHITE else ch

    @property
    def glyph(self) -> str:
        white, black = _GLYPHS[self.kind]
        return white if self.color is Color.WHITE else black


class Square(NamedTuple):
    """Board coordinate; rank 0 is the eighth rank, file 0 is the a-file."""

    rank: int
    file: int

    def offset(self, d_rank: int, d_file: int) -> "Square":
        return Square(self.rank + d_rank, self.file + d_file)

    @property
    def index(self) -> int:
        return self.rank * 8 + self.file


def in_bounds(sq: Square) -> bool:
    return 0 <= sq.rank < 8 and 0 <= sq.file < 8


ALL_SQUARES: Tuple[Square, ...] = tuple(Square(r, f) for r in range(8) for f in range(8))

Cells = Tuple[Optional[Piece], ...]


def _empty_cells() -> Cells:
    return (None,) * 64


@dataclass(frozen=True)
class Board:
    """Immutable 8x8 piece placement.

    Notes:
    - Cells are stored row-major: rank 0 (eighth rank) first, file a first.
    - A board is a value; moves produce new boards via :meth:`with_move`.
    - At most one king per color is assumed; callers own that invariant.
    """

    cells: Cells = field(default_factory=_empty_cells)

    def __post_init__(self) -> None:
        if len(self.cells) != 64:
            raise ValueError(f"board needs 64 cells, got {len(self.cells)}")

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def startpos(cls) -> "Board":
        """Return the standard starting position (White on ranks 6-7)."""
        return cls.from_placement(STARTPOS_PLACEMENT)

    @classmethod
    def from_pieces(cls, placed: Sequence[Tuple[Square, Piece]]) -> "Board":
        cells: List[Optional[Piece]] = [None] * 64
        for sq, piece in placed:
            if not in_bounds(sq):
                raise ValueError(f"square out of bounds: {sq}")
            cells[sq.index] = piece
        return cls(tuple(cells))

    @classmethod
    def from_placement(cls, placement: str) -> "Board":
        """Parse the piece-placement field of a FEN string.

        Args:
            placement (str): e.g. ``"rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"``.

        Returns:
            Board: Board with the described placement.

        Raises:
            ValueError: If the field does not describe exactly 8 ranks of 8
                squares, or contains an unknown piece letter.
        """
        rows = placement.split("/")
        if len(rows) != 8:
            raise ValueError("FEN board must have 8 ranks")
        cells: List[Optional[Piece]] = []
        # FEN lists the eighth rank first, which is rank 0 here
        for row in rows:
            width = 0
            for ch in row:
                if ch.isdigit():
                    n = int(ch)
                    if n < 1 or n > 8:
                        raise ValueError("invalid empty count in FEN rank")
                    cells.extend([None] * n)
                    width += n
                else:
                    if width >= 8:
                        raise ValueError("too many squares in FEN rank")
                    cells.append(Piece.from_char(ch))
                    width += 1
            if width != 8:
                raise ValueError("rank does not sum to 8 squares in FEN")
        return cls(tuple(cells))

    def to_placement(self) -> str:
        rows: List[str] = []
        for rank in range(8):
            run = 0
            row = []
            for file in range(8):
                piece = self.cells[rank * 8 + file]
                if piece is None:
                    run += 1
                    continue
                if run:
                    row.append(str(run))
                    run = 0
                row.append(piece.symbol)
            if run:
                row.append(str(run))
            rows.append("".join(row))
        return "/".join(rows)

    # --- Queries ---
    def piece_at(self, sq: Square) -> Optional[Piece]:
        if not in_bounds(sq):
            return None
        return self.cells[sq.index]

    def is_empty(self, sq: Square) -> bool:
        return self.piece_at(sq) is None

    def pieces(self, color: Optional[Color] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` in row-major order, optionally for one color."""
        for sq, piece in zip(ALL_SQUARES, self.cells):
            if piece is not None and (color is None or piece.color is color):
                yield sq, piece

    def find_king(self, color: Color) -> Optional[Square]:
        """Return the first king of ``color`` in row-major order, or ``None``.

        ``None`` means check cannot be evaluated for that side; it must not be
        read as "the king is safe".
        """
        king = Piece(PieceKind.KING, color)
        for sq, piece in zip(ALL_SQUARES, self.cells):
            if piece == king:
                return sq
        return None

    # --- Derived boards ---
    def with_move(self, from_sq: Square, to_sq: Square) -> "Board":
        """Return a new board with the piece on ``from_sq`` moved to ``to_sq``.

        A king moving two files also relocates the rook it castles with:
        h-file rook to the f-file, or a-file rook to the d-file. Whatever stood
        on ``to_sq`` is overwritten (captured). An empty origin returns an
        unchanged copy.
        """
        cells = list(self.cells)
        piece = cells[from_sq.index]
        if piece is None:
            return Board(tuple(cells))
        cells[to_sq.index] = piece
        cells[from_sq.index] = None
        if piece.kind is PieceKind.KING and abs(to_sq.file - from_sq.file) == 2:
            if to_sq.file > from_sq.file:
                rook_from, rook_to = KINGSIDE_ROOK_FILE, to_sq.file - 1
            else:
                rook_from, rook_to = QUEENSIDE_ROOK_FILE, to_sq.file + 1
            rank = from_sq.rank
            cells[rank * 8 + rook_to] = cells[rank * 8 + rook_from]
            cells[rank * 8 + rook_from] = None
        return Board(tuple(cells))

    def with_piece(self, sq: Square, piece: Optional[Piece]) -> "Board":
        cells = list(self.cells)
        cells[sq.index] = piece
        return Board(tuple(cells))

    def __str__(self) -> str:
        lines = []
        for rank in range(8):
            row = [
                p.symbol if p is not None else "." for p in self.cells[rank * 8 : rank * 8 + 8]
            ]
            lines.append(f"{8 - rank} {' '.join(row)}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
