"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from openingtrainer.core.enums import Color, PieceType

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "p",
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
    PieceType.KING: "k",
}
_TYPES_BY_LETTER: dict[str, PieceType] = {v: k for k, v in _LETTERS.items()}

# Outline glyphs for white, solid glyphs for black.
_GLYPHS: dict[Color, str] = {
    Color.WHITE: "♙♘♗♖♕♔",
    Color.BLACK: "♟♞♝♜♛♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A (side, kind) pair occupying one board square."""

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """Board letter: uppercase for white, lowercase for black."""
        letter = _LETTERS[self.piece_type]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its board letter, e.g. 'N' → white knight."""
        ptype = _TYPES_BY_LETTER.get(char.lower()) if len(char) == 1 else None
        if ptype is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)

    @property
    def is_white(self) -> bool:
        return self.color == Color.WHITE

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _GLYPHS[self.color][int(self.piece_type) - 1]
