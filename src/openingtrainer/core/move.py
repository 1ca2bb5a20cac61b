"""Move value object and canonical ``e2-e4`` notation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from openingtrainer.core.types import Square, parse_square, square_name

MOVE_SEPARATOR = "-"
HISTORY_DELIMITER = ","


@dataclass(frozen=True, slots=True)
class Move:
    """Ordered pair of squares: where a piece leaves and where it lands."""

    from_sq: Square
    to_sq: Square

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{MOVE_SEPARATOR}{square_name(self.to_sq)}"

    @property
    def notation(self) -> str:
        """Canonical notation, the join key into opening books."""
        return str(self)

    @classmethod
    def parse(cls, text: str) -> Move:
        """Parse canonical notation, e.g. ``'g1-f3'``."""
        parts = text.split(MOVE_SEPARATOR)
        if len(parts) != 2:
            raise ValueError(f"Invalid move notation: {text!r}")
        return cls(parse_square(parts[0]), parse_square(parts[1]))


def serialize_history(moves: Iterable[str | Move]) -> str:
    """Join moves into a lookup key; the empty history maps to ``""``."""
    return HISTORY_DELIMITER.join(str(m) for m in moves)


def parse_history(key: str) -> list[Move]:
    """Inverse of :func:`serialize_history`."""
    if not key:
        return []
    return [Move.parse(part) for part in key.split(HISTORY_DELIMITER)]
