"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator

from openingtrainer.core.enums import Color, PieceType
from openingtrainer.core.piece import Piece
from openingtrainer.core.types import BOARD_SIZE, Square, make_square

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

BoardRows = tuple[tuple[Piece | None, ...], ...]


class Board:
    """Mutable grid of optional pieces, at most one per square.

    Indexed with ``(row, col)`` squares; row 0 is black's back rank.
    """

    __slots__ = ("_grid",)

    def __init__(self) -> None:
        self._grid: list[list[Piece | None]] = [
            [None] * BOARD_SIZE for _ in range(BOARD_SIZE)
        ]

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        row, col = sq
        return self._grid[row][col]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        row, col = sq
        self._grid[row][col] = piece

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every non-empty square."""
        for row, cells in enumerate(self._grid):
            for col, piece in enumerate(cells):
                if piece is not None:
                    yield make_square(row, col), piece

    def pieces(self, color: Color, piece_type: PieceType) -> list[Square]:
        """Squares occupied by *color*'s *piece_type*."""
        target = Piece(color, piece_type)
        return [sq for sq, piece in self.occupied() if piece == target]

    # -- Mutation / copying -------------------------------------------------

    def move_piece(self, from_sq: Square, to_sq: Square) -> Piece | None:
        """Relocate the piece on *from_sq*; return whatever it replaced.

        No legality check is made here.
        """
        piece = self[from_sq]
        captured = self[to_sq]
        self[to_sq] = piece
        self[from_sq] = None
        return captured

    def copy(self) -> Board:
        b = Board()
        b._grid = [row.copy() for row in self._grid]
        return b

    def clear(self) -> None:
        self._grid = [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def rows(self) -> BoardRows:
        """Read-only snapshot of the grid, row 0 first."""
        return tuple(tuple(row) for row in self._grid)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b[make_square(0, col)] = Piece(Color.BLACK, pt)
            b[make_square(1, col)] = Piece(Color.BLACK, PieceType.PAWN)
            b[make_square(6, col)] = Piece(Color.WHITE, PieceType.PAWN)
            b[make_square(7, col)] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_rows(cls, rows: list[str]) -> Board:
        """Build a board from eight strings of piece letters and dots.

        ``rows[0]`` is rank 8, e.g. ``"rnbqkbnr"``; ``"."`` marks an empty square.
        """
        if len(rows) != BOARD_SIZE or any(len(r) != BOARD_SIZE for r in rows):
            raise ValueError("Board layout must be 8 rows of 8 characters")
        b = cls()
        for row, text in enumerate(rows):
            for col, char in enumerate(text):
                if char != ".":
                    b[make_square(row, col)] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._grid == other._grid

    def __repr__(self) -> str:
        lines: list[str] = []
        for row, cells in enumerate(self._grid):
            text = " ".join(str(p) if p else "." for p in cells)
            lines.append(f"{BOARD_SIZE - row} {text}")
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
