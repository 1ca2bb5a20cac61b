"""Qt signal bridge between a TrainingSession and presentation widgets."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from openingtrainer.core.enums import Color
from openingtrainer.core.types import make_square
from openingtrainer.training.interfaces import TrainingPhase
from openingtrainer.training.session import TrainingSession
from openingtrainer.training.state import MoveResult


class SessionBridge(QObject):
    """Re-emits session callbacks as signals and exposes slots for input.

    Widgets connect to the signals instead of registering Python callbacks,
    so queued connections and ``QSignalSpy`` work as usual.
    """

    move_played = pyqtSignal(str, int, bool)  # notation, mover color, automated
    result_ready = pyqtSignal(object)  # MoveResult
    phase_changed = pyqtSignal(int)  # TrainingPhase
    feedback_changed = pyqtSignal(str)
    position_reset = pyqtSignal()

    def __init__(self, session: TrainingSession, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._session = session
        events = session.events
        events.on_move.append(self._on_move)
        events.on_result.append(self.result_ready.emit)
        events.on_phase_changed.append(self._on_phase)
        events.on_feedback_changed.append(self.feedback_changed.emit)
        events.on_position_reset.append(self.position_reset.emit)

    @property
    def session(self) -> TrainingSession:
        return self._session

    # ── Slots for presentation input ─────────────────────────────────────

    @pyqtSlot(int, int)
    def click_square(self, row: int, col: int) -> None:
        self._session.select_square(make_square(row, col))

    @pyqtSlot(int, int, int, int)
    def drop_piece(self, from_row: int, from_col: int, to_row: int, to_col: int) -> None:
        self._session.attempt_move(
            make_square(from_row, from_col), make_square(to_row, to_col)
        )

    @pyqtSlot(str)
    def start_training(self, name: str) -> None:
        self._session.start_training(name)

    @pyqtSlot()
    def reset_game(self) -> None:
        self._session.reset_game()

    @pyqtSlot()
    def undo_last_mistake(self) -> None:
        self._session.undo_last_mistake()

    @pyqtSlot()
    def back_to_menu(self) -> None:
        self._session.back_to_menu()

    # ── Internal ─────────────────────────────────────────────────────────

    def _on_move(self, notation: str, mover: Color, automated: bool) -> None:
        self.move_played.emit(notation, int(mover), automated)

    def _on_phase(self, phase: TrainingPhase) -> None:
        self.phase_changed.emit(int(phase))


def describe_result(result: MoveResult) -> str:
    """One-line summary, handy for status bars and logs."""
    move = result.move or "-"
    return f"{result.outcome.value} {move} score {result.score}"
