"""Abstract interfaces and enums for the training layer.

``TrainingSession`` depends on :class:`IScheduler` for its deferred work, so
the same orchestrator runs under a Qt event loop or a virtual clock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum, StrEnum, auto

# ── Session FSM states ───────────────────────────────────────────────────────


class TrainingPhase(IntEnum):
    """Finite-state-machine states for one training game."""

    NOT_STARTED = auto()  # menu, no opening selected
    AWAITING_FIRST_MOVE = auto()  # automated side opens (trainee plays black)
    AWAITING_TRAINEE_MOVE = auto()
    AUTOMATED_THINKING = auto()  # reply scheduled after a correct move
    FEEDBACK = auto()  # incorrect move shown, clears on a timer
    OUT_OF_BOOK = auto()  # line finished


class MoveOutcome(StrEnum):
    """Result code of a trainee move attempt."""

    REJECTED_NOT_YOUR_TURN = "rejected-not-your-turn"
    REJECTED_ILLEGAL = "rejected-illegal"
    ACCEPTED_CORRECT = "accepted-correct"
    ACCEPTED_INCORRECT = "accepted-incorrect"

    @property
    def accepted(self) -> bool:
        return self in (MoveOutcome.ACCEPTED_CORRECT, MoveOutcome.ACCEPTED_INCORRECT)


# ── Scheduling ───────────────────────────────────────────────────────────────


class ScheduledTask(ABC):
    """Handle of a one-shot deferred callback."""

    @property
    @abstractmethod
    def is_active(self) -> bool:
        """``True`` until the callback has run or the task was cancelled."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running. Idempotent."""


class IScheduler(ABC):
    """Source of one-shot timers on the caller's thread."""

    @abstractmethod
    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """Run *callback* once after *delay_ms* milliseconds."""
