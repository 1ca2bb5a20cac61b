"""Value objects describing a training session's state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from openingtrainer.core.enums import Color
from openingtrainer.core.move import Move
from openingtrainer.core.types import Square
from openingtrainer.training.interfaces import MoveOutcome, TrainingPhase

if TYPE_CHECKING:
    from openingtrainer.core.board import Board, BoardRows


@dataclass(frozen=True, slots=True)
class Score:
    """Correct and total trainee moves in the current session."""

    correct: int = 0
    total: int = 0

    def record(self, was_correct: bool) -> Score:
        return replace(
            self,
            correct=self.correct + (1 if was_correct else 0),
            total=self.total + 1,
        )

    @property
    def accuracy(self) -> int | None:
        """Whole-number percentage, or ``None`` before the first move."""
        if self.total == 0:
            return None
        return round(self.correct / self.total * 100)

    def __str__(self) -> str:
        return f"{self.correct}/{self.total}"


@dataclass(frozen=True, slots=True)
class Hint:
    """Suggested book move, in board coordinates and notation."""

    from_sq: Square
    to_sq: Square
    notation: str

    @classmethod
    def from_notation(cls, notation: str) -> Hint:
        move = Move.parse(notation)
        return cls(move.from_sq, move.to_sq, notation)


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Everything needed to roll a session back to before a mistake."""

    board: Board
    history: tuple[str, ...]
    turn: Color
    score: Score
    hint: Hint | None
    out_of_book: bool


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of a trainee move attempt plus the state to render."""

    outcome: MoveOutcome
    move: str | None
    board: BoardRows
    history: tuple[str, ...]
    score: Score
    hint: Hint | None
    phase: TrainingPhase
    feedback: str = ""

    @property
    def accepted(self) -> bool:
        return self.outcome.accepted
