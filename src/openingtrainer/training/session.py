"""TrainingSession — the orchestrator of one opening-training game.

Coordinates: Board, MoveEngine, OpeningBook, scheduler.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections import deque
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from openingtrainer.core.board import Board, BoardRows
from openingtrainer.core.enums import Color
from openingtrainer.core.move import Move, serialize_history
from openingtrainer.core.move_rules import MoveEngine
from openingtrainer.core.types import Square, is_on_board
from openingtrainer.i18n import set_language, t
from openingtrainer.openings.book import OpeningBook
from openingtrainer.openings.models import OpeningConfigError, OpeningLine
from openingtrainer.settings import TrainerSettings
from openingtrainer.training.interfaces import (
    IScheduler,
    MoveOutcome,
    ScheduledTask,
    TrainingPhase,
)
from openingtrainer.training.scheduler import ManualScheduler
from openingtrainer.training.state import Hint, MoveResult, Score, SessionSnapshot

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[str, Color, bool], None]  # notation, mover, automated
ResultCallback = Callable[[MoveResult], None]
PhaseCallback = Callable[[TrainingPhase], None]
FeedbackCallback = Callable[[str], None]
ResetCallback = Callable[[], None]
ChooseMove = Callable[[Sequence[str]], str]


@dataclass
class TrainingEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_result: list[ResultCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_feedback_changed: list[FeedbackCallback] = field(default_factory=list)
    # Board replaced wholesale: start, reset or undo.
    on_position_reset: list[ResetCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class TrainingSession:
    """Plays one opening line against the trainee.

    The trainee's moves arrive through :meth:`attempt_move` (or the
    click-style :meth:`select_square`). A move in the book is scored as
    correct and answered by a book reply after a short delay; any other legal
    move is scored as a miss, stays on the board and can be taken back with
    :meth:`undo_last_mistake`.

    Thread-safety: all methods, including scheduled callbacks, must run on a
    single thread. Every scheduled callback is tagged with the generation
    current when it was scheduled; starting, resetting, undoing or leaving a
    line bumps the generation, so a stale reply can never touch a new board.

    Args:
        book: Opening lines to train; defaults to the bundled catalog.
        scheduler: Source of one-shot timers; defaults to a
            :class:`ManualScheduler` that only runs when advanced.
        settings: Timing and rule options.
        engine: Move legality checker; built from *settings* when omitted.
        choose: Picks the automated reply among tied candidates;
            defaults to a uniform random choice.
    """

    __slots__ = (
        "_book",
        "_scheduler",
        "_settings",
        "_engine",
        "_choose",
        "_opening",
        "_board",
        "_history",
        "_turn",
        "_score",
        "_hint",
        "_selection",
        "_feedback",
        "_phase",
        "_out_of_book",
        "_undo_stack",
        "_pending",
        "_generation",
        "events",
    )

    def __init__(
        self,
        book: OpeningBook | None = None,
        *,
        scheduler: IScheduler | None = None,
        settings: TrainerSettings | None = None,
        engine: MoveEngine | None = None,
        choose: ChooseMove | None = None,
    ) -> None:
        self._book = book if book is not None else OpeningBook.default()
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._settings = settings if settings is not None else TrainerSettings()
        self._engine = engine or MoveEngine(
            strict_double_step=self._settings.strict_double_step
        )
        self._choose: ChooseMove = choose or random.choice

        self._opening: OpeningLine | None = None
        self._board = Board.initial()
        self._history: list[str] = []
        self._turn = Color.WHITE
        self._score = Score()
        self._hint: Hint | None = None
        self._selection: Square | None = None
        self._feedback = ""
        self._phase = TrainingPhase.NOT_STARTED
        self._out_of_book = False
        self._undo_stack: deque[SessionSnapshot] = deque(
            maxlen=self._settings.max_undo_depth
        )
        self._pending: list[ScheduledTask] = []
        self._generation = 0
        self.events = TrainingEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def book(self) -> OpeningBook:
        return self._book

    @property
    def settings(self) -> TrainerSettings:
        return self._settings

    @property
    def opening(self) -> OpeningLine | None:
        return self._opening

    @property
    def trainee_color(self) -> Color | None:
        return self._opening.trainee_color if self._opening else None

    @property
    def board(self) -> Board:
        """Copy of the current board; mutating it does not affect the session."""
        return self._board.copy()

    @property
    def board_rows(self) -> BoardRows:
        return self._board.rows()

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def current_turn(self) -> Color:
        return self._turn

    @property
    def score(self) -> Score:
        return self._score

    @property
    def hint(self) -> Hint | None:
        return self._hint

    @property
    def selection(self) -> Square | None:
        return self._selection

    @property
    def feedback(self) -> str:
        return self._feedback

    @property
    def phase(self) -> TrainingPhase:
        return self._phase

    @property
    def is_out_of_book(self) -> bool:
        return self._out_of_book

    @property
    def is_trainee_turn(self) -> bool:
        return (
            self._opening is not None
            and self._phase == TrainingPhase.AWAITING_TRAINEE_MOVE
            and self._turn == self._opening.trainee_color
        )

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def move_number(self) -> int:
        """Full-move number of the last move played (0 before any move)."""
        return (len(self._history) + 1) // 2

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start_training(self, name: str) -> None:
        """Begin a fresh game on the opening line *name*.

        Raises:
            UnknownOpeningError: *name* is not in the book.
            OpeningConfigError: the trainee plays black but the line has no
                opening move for the automated side.
        """
        line = self._book.line(name)
        if not line.trainee_moves_first and not line.first_moves:
            raise OpeningConfigError(
                f"{line.key}: no opening move for the automated side"
            )
        self._cancel_pending()
        self._opening = line
        _LOGGER.info(
            "Starting training: %s (trainee plays %s)", line.key, line.trainee_color
        )
        self._new_game()

    start = start_training

    def reset_game(self) -> None:
        """Restart the active line from the initial position."""
        if self._opening is None:
            raise RuntimeError("No opening line selected")
        self._cancel_pending()
        _LOGGER.info("Resetting training: %s", self._opening.key)
        self._new_game()

    reset = reset_game

    def back_to_menu(self) -> None:
        """Leave the active line; pending opponent replies are dropped."""
        self._cancel_pending()
        self._opening = None
        self._selection = None
        self._hint = None
        self._undo_stack.clear()
        self._set_feedback("")
        self._set_phase(TrainingPhase.NOT_STARTED)

    def apply_settings(self, settings: TrainerSettings) -> None:
        """Use *settings* for subsequent moves, timers and feedback language."""
        self._settings = settings
        set_language(settings.language)
        self._engine = MoveEngine(strict_double_step=settings.strict_double_step)
        self._undo_stack = deque(self._undo_stack, maxlen=settings.max_undo_depth)

    # ── Trainee input ────────────────────────────────────────────────────

    def attempt_move(self, from_sq: Square, to_sq: Square) -> MoveResult:
        """Try to play the trainee's piece from *from_sq* to *to_sq*.

        Never raises for trainee mistakes; the outcome code says what happened.
        """
        if not self.is_trainee_turn:
            self._notify_wait()
            return self._emit_result(MoveOutcome.REJECTED_NOT_YOUR_TURN)

        piece = self._board[from_sq] if is_on_board(from_sq) else None
        if (
            piece is None
            or piece.color != self._turn
            or not self._engine.is_legal_move(self._board, from_sq, to_sq, piece)
        ):
            _LOGGER.debug("Illegal move attempt %s -> %s", from_sq, to_sq)
            return self._emit_result(MoveOutcome.REJECTED_ILLEGAL)

        assert self._opening is not None
        snapshot = self._snapshot()
        prior_key = serialize_history(self._history)
        notation = self._apply_move(Move(from_sq, to_sq), automated=False)
        self._selection = None

        expected = self._book.next_moves(self._opening.key, prior_key)
        _LOGGER.debug("Checking %s against %s (key %r)", notation, expected, prior_key)
        if notation in expected:
            result = self._accept_correct(notation)
        else:
            result = self._accept_incorrect(notation, expected, snapshot)

        self._publish_result(result)
        return result

    def select_square(self, square: Square) -> MoveResult | None:
        """Click-style input: select a piece, then its destination.

        Clicking the selected square again deselects it. Returns the move
        result when a move was attempted, otherwise ``None``.
        """
        if self._opening is None:
            return None
        if not is_on_board(square):
            return None
        if not self.is_trainee_turn:
            self._notify_wait()
            return self._emit_result(MoveOutcome.REJECTED_NOT_YOUR_TURN)

        piece = self._board[square]
        is_own = piece is not None and piece.color == self._turn

        if self._selection is None:
            self._selection = square if is_own else None
            return None
        if square == self._selection:
            self._selection = None
            return None

        result = self.attempt_move(self._selection, square)
        if result.outcome == MoveOutcome.REJECTED_ILLEGAL:
            self._selection = square if is_own else None
        return result

    def clear_selection(self) -> None:
        self._selection = None

    def undo_last_mistake(self) -> bool:
        """Roll back the most recent incorrect move. Returns True on success."""
        if not self._undo_stack:
            return False

        self._cancel_pending()
        snapshot = self._undo_stack.pop()
        self._board = snapshot.board.copy()
        self._history = list(snapshot.history)
        self._turn = snapshot.turn
        self._score = snapshot.score
        self._hint = snapshot.hint
        self._out_of_book = snapshot.out_of_book
        self._selection = None
        _LOGGER.debug("Undo: history restored to %s", self._history)

        self._emit_position_reset()
        self._set_feedback("")
        self._set_phase(
            TrainingPhase.OUT_OF_BOOK
            if self._out_of_book
            else TrainingPhase.AWAITING_TRAINEE_MOVE
        )
        return True

    undo = undo_last_mistake

    # ── Internal helpers ─────────────────────────────────────────────────

    def _new_game(self) -> None:
        assert self._opening is not None
        self._board = Board.initial()
        self._history = []
        self._turn = Color.WHITE
        self._score = Score()
        self._hint = None
        self._selection = None
        self._out_of_book = False
        self._undo_stack.clear()
        self._emit_position_reset()

        if self._opening.trainee_moves_first:
            self._set_feedback(t().your_opening_move)
            self._set_phase(TrainingPhase.AWAITING_TRAINEE_MOVE)
            return

        strings = t()
        color_name = (
            strings.color_white
            if self._opening.automated_color == Color.WHITE
            else strings.color_black
        )
        self._set_phase(TrainingPhase.AWAITING_FIRST_MOVE)
        self._set_feedback(strings.opponent_first_move.format(color=color_name))
        self._apply_move(Move.parse(self._opening.first_moves[0]), automated=True)
        self._set_feedback(strings.your_turn)
        self._set_phase(TrainingPhase.AWAITING_TRAINEE_MOVE)

    def _accept_correct(self, notation: str) -> MoveResult:
        assert self._opening is not None
        self._score = self._score.record(True)
        self._hint = None
        self._set_feedback(t().correct_move)
        self._set_phase(TrainingPhase.AUTOMATED_THINKING)

        replies = self._book.next_moves(self._opening.key, self._history)
        if replies:
            self._schedule(self._settings.thinking_notice_ms, self._show_thinking)
            self._schedule(
                self._settings.opponent_delay_ms,
                lambda: self._play_automated_reply(replies),
            )
        else:
            _LOGGER.info("End of line %s after %s", self._opening.key, notation)
            self._out_of_book = True
            self._set_feedback(t().end_of_line)
            self._set_phase(TrainingPhase.OUT_OF_BOOK)
        return self._result(MoveOutcome.ACCEPTED_CORRECT, notation)

    def _accept_incorrect(
        self,
        notation: str,
        expected: tuple[str, ...],
        snapshot: SessionSnapshot,
    ) -> MoveResult:
        assert self._opening is not None
        self._score = self._score.record(False)
        self._undo_stack.append(snapshot)

        strings = t()
        if expected:
            self._hint = Hint.from_notation(expected[0])
            text = strings.incorrect_move.format(
                moves=strings.move_separator.join(expected)
            )
        else:
            _LOGGER.warning(
                "Opening %s has no entry for %r; cannot build a hint",
                self._opening.key,
                serialize_history(snapshot.history),
            )
            self._hint = None
            text = strings.incorrect_no_hint

        self._set_feedback(text)
        self._set_phase(TrainingPhase.FEEDBACK)
        self._schedule(self._settings.feedback_clear_ms, self._end_feedback)
        return self._result(MoveOutcome.ACCEPTED_INCORRECT, notation)

    def _play_automated_reply(self, candidates: tuple[str, ...]) -> None:
        if self._phase != TrainingPhase.AUTOMATED_THINKING:
            return
        choice = self._choose(candidates)
        _LOGGER.debug("Automated reply %s chosen from %s", choice, candidates)
        self._apply_move(Move.parse(choice), automated=True)
        self._set_feedback(t().your_turn)
        self._set_phase(TrainingPhase.AWAITING_TRAINEE_MOVE)

    def _show_thinking(self) -> None:
        if self._phase == TrainingPhase.AUTOMATED_THINKING:
            self._set_feedback(t().opponent_thinking)

    def _end_feedback(self) -> None:
        if self._phase != TrainingPhase.FEEDBACK:
            return
        self._set_feedback("")
        self._set_phase(TrainingPhase.AWAITING_TRAINEE_MOVE)

    def _notify_wait(self) -> None:
        if self._phase not in (
            TrainingPhase.AWAITING_FIRST_MOVE,
            TrainingPhase.AUTOMATED_THINKING,
        ):
            return
        notice = t().wait_for_opponent
        previous = self._feedback
        self._set_feedback(notice)

        def _restore() -> None:
            if self._feedback == notice:
                self._set_feedback(previous)

        self._schedule(self._settings.notice_clear_ms, _restore)

    def _apply_move(self, move: Move, *, automated: bool) -> str:
        mover = self._turn
        self._board.move_piece(move.from_sq, move.to_sq)
        notation = move.notation
        self._history.append(notation)
        self._turn = mover.opposite
        _LOGGER.debug(
            "%s move %s by %s; history %s",
            "Automated" if automated else "Trainee",
            notation,
            mover,
            self._history,
        )
        for cb in self.events.on_move:
            cb(notation, mover, automated)
        return notation

    def _snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            board=self._board.copy(),
            history=tuple(self._history),
            turn=self._turn,
            score=self._score,
            hint=self._hint,
            out_of_book=self._out_of_book,
        )

    def _result(self, outcome: MoveOutcome, move: str | None = None) -> MoveResult:
        return MoveResult(
            outcome=outcome,
            move=move,
            board=self._board.rows(),
            history=tuple(self._history),
            score=self._score,
            hint=self._hint,
            phase=self._phase,
            feedback=self._feedback,
        )

    def _emit_result(self, outcome: MoveOutcome) -> MoveResult:
        result = self._result(outcome)
        self._publish_result(result)
        return result

    def _publish_result(self, result: MoveResult) -> None:
        for cb in self.events.on_result:
            cb(result)

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        generation = self._generation

        def _run() -> None:
            if generation != self._generation:
                _LOGGER.debug("Dropping stale scheduled callback")
                return
            callback()

        self._pending = [task for task in self._pending if task.is_active]
        self._pending.append(self._scheduler.schedule(delay_ms, _run))

    def _cancel_pending(self) -> None:
        self._generation += 1
        for task in self._pending:
            task.cancel()
        self._pending.clear()

    def _set_phase(self, phase: TrainingPhase) -> None:
        if phase == self._phase:
            return
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _set_feedback(self, text: str) -> None:
        if text == self._feedback:
            return
        self._feedback = text
        for cb in self.events.on_feedback_changed:
            cb(text)

    def _emit_position_reset(self) -> None:
        for cb in self.events.on_position_reset:
            cb()
