"""Opening line value object and configuration errors."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from openingtrainer.core.enums import Color


class TrainerConfigError(Exception):
    """Base class for problems with the opening configuration."""


class UnknownOpeningError(TrainerConfigError, KeyError):
    """Requested opening name is not in the book."""

    def __init__(self, name: str, known: Sequence[str] = ()) -> None:
        self.name = name
        self.known = tuple(known)
        super().__init__(name)

    def __str__(self) -> str:
        known = ", ".join(self.known) or "none"
        return f"Unknown opening {self.name!r} (available: {known})"


class OpeningConfigError(TrainerConfigError, ValueError):
    """An opening line is malformed or lacks a required entry."""


@dataclass(frozen=True)
class OpeningLine:
    """A named branching move tree plus the side the trainee plays.

    ``moves`` maps a serialized history prefix (``""`` for the start
    position) to the acceptable next moves in canonical notation.
    """

    key: str
    title: str
    trainee_color: Color
    moves: Mapping[str, tuple[str, ...]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = {prefix: tuple(cands) for prefix, cands in self.moves.items()}
        object.__setattr__(self, "moves", MappingProxyType(frozen))

    @property
    def automated_color(self) -> Color:
        return self.trainee_color.opposite

    @property
    def trainee_moves_first(self) -> bool:
        return self.trainee_color == Color.WHITE

    @property
    def first_moves(self) -> tuple[str, ...]:
        """Candidates for the start position (may be empty if unauthored)."""
        return self.moves.get("", ())

    def candidates(self, prefix: str) -> tuple[str, ...]:
        return self.moves.get(prefix, ())

    def __repr__(self) -> str:
        return (
            f"OpeningLine({self.key!r}, trainee={self.trainee_color}, "
            f"{len(self.moves)} positions)"
        )
