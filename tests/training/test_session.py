"""Tests for TrainingSession — turn flow, scoring, undo and timers."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pytest

from openingtrainer.core.board import Board
from openingtrainer.core.enums import Color
from openingtrainer.core.types import (
    A7, A6, B1, B5, B8, C3, C6, D2, D4, D5, D7, E2, E4, E5, E7, F3, F8, G1,
)
from openingtrainer.i18n import set_language, t
from openingtrainer.openings.book import OpeningBook
from openingtrainer.openings.catalog import SCOTCH_GAME
from openingtrainer.openings.models import (
    OpeningConfigError,
    OpeningLine,
    UnknownOpeningError,
)
from openingtrainer.settings import TrainerSettings
from openingtrainer.training.interfaces import MoveOutcome, TrainingPhase
from openingtrainer.training.scheduler import ManualScheduler
from openingtrainer.training.session import TrainingSession
from openingtrainer.training.state import Score

DELAY = 800
FEEDBACK = 3000


def _first(candidates: Sequence[str]) -> str:
    return candidates[0]


def _make(
    book: OpeningBook | None = None,
    settings: TrainerSettings | None = None,
    choose=_first,
) -> tuple[TrainingSession, ManualScheduler]:
    scheduler = ManualScheduler()
    session = TrainingSession(
        book, scheduler=scheduler, settings=settings, choose=choose
    )
    return session, scheduler


def _play_scotch_to_branch(session: TrainingSession, scheduler: ManualScheduler) -> None:
    """Trainee (white) plays up to f3-d4; the reply comes from the chooser."""
    session.start_training("scotchGame")
    for frm, to in ((E2, E4), (G1, F3), (D2, D4), (F3, D4)):
        assert session.attempt_move(frm, to).outcome == MoveOutcome.ACCEPTED_CORRECT
        scheduler.advance(DELAY)


class TestStart:
    def test_white_trainee_waits_for_opening_move(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        assert session.phase == TrainingPhase.AWAITING_TRAINEE_MOVE
        assert session.history == ()
        assert session.current_turn == Color.WHITE
        assert session.trainee_color == Color.WHITE
        assert session.is_trainee_turn
        assert session.feedback == t().your_opening_move
        assert session.board == Board.initial()
        assert scheduler.pending_count == 0

    def test_black_trainee_gets_automated_first_move(self) -> None:
        session, _ = _make()
        session.start_training("sicilianDragon")
        assert session.history == ("e2-e4",)
        assert session.current_turn == Color.BLACK
        assert session.phase == TrainingPhase.AWAITING_TRAINEE_MOVE
        assert session.is_trainee_turn
        assert session.board[E4] is not None
        assert session.board[E2] is None
        assert session.score == Score()
        assert session.move_number == 1

    def test_unknown_opening(self) -> None:
        session, _ = _make()
        with pytest.raises(UnknownOpeningError):
            session.start_training("kingsGambit")
        assert session.phase == TrainingPhase.NOT_STARTED
        assert session.opening is None

    def test_black_line_without_first_move(self) -> None:
        gap = OpeningLine("gap", "Gap", Color.BLACK, {"e2-e4": ("c7-c5",)})
        session, _ = _make(OpeningBook([gap]))
        with pytest.raises(OpeningConfigError):
            session.start_training("gap")

    def test_reset_without_line(self) -> None:
        session, _ = _make()
        with pytest.raises(RuntimeError):
            session.reset_game()

    def test_start_alias(self) -> None:
        session, _ = _make()
        session.start("scotchGambit")
        assert session.opening is not None
        assert session.opening.key == "scotchGambit"

    def test_localised_feedback(self) -> None:
        set_language("Russian")
        session, _ = _make()
        session.start_training("scotchGame")
        assert session.feedback == "Ваш ход! Сделайте первый ход."

    def test_apply_settings_switches_language(self) -> None:
        session, _ = _make()
        session.apply_settings(TrainerSettings(language="Russian"))
        session.start_training("scotchGame")
        assert session.feedback == "Ваш ход! Сделайте первый ход."


class TestCorrectMoves:
    def test_reply_arrives_after_delay(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")

        result = session.attempt_move(E2, E4)
        assert result.outcome == MoveOutcome.ACCEPTED_CORRECT
        assert result.accepted
        assert result.move == "e2-e4"
        assert result.score == Score(1, 1)
        assert result.phase == TrainingPhase.AUTOMATED_THINKING
        assert session.feedback == t().correct_move
        assert not session.is_trainee_turn

        scheduler.advance(DELAY - 1)
        assert session.history == ("e2-e4",)
        scheduler.advance(1)
        assert session.history == ("e2-e4", "e7-e5")
        assert session.phase == TrainingPhase.AWAITING_TRAINEE_MOVE
        assert session.feedback == t().your_turn
        assert session.current_turn == Color.WHITE

    def test_scotch_sequence(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        scheduler.advance(DELAY)
        session.attempt_move(G1, F3)
        scheduler.advance(DELAY)
        assert session.history == ("e2-e4", "e7-e5", "g1-f3", "b8-c6")
        assert session.board[C6] is not None
        assert session.board[B8] is None
        assert session.move_number == 2

    def test_chooser_sees_all_candidates(self) -> None:
        seen: list[tuple[str, ...]] = []

        def record(candidates: Sequence[str]) -> str:
            seen.append(tuple(candidates))
            return candidates[-1]

        session, scheduler = _make(choose=record)
        _play_scotch_to_branch(session, scheduler)
        assert seen[-1] == ("f8-c5", "g8-f6", "d8-h4")
        assert session.history[-1] == "d8-h4"

    def test_default_chooser_picks_a_candidate(self) -> None:
        scheduler = ManualScheduler()
        session = TrainingSession(scheduler=scheduler)
        _play_scotch_to_branch(session, scheduler)
        assert session.history[-1] in ("f8-c5", "g8-f6", "d8-h4")

    def test_end_of_line(self) -> None:
        session, scheduler = _make()
        _play_scotch_to_branch(session, scheduler)
        assert session.history[-1] == "f8-c5"

        result = session.attempt_move(D4, B5)
        assert result.outcome == MoveOutcome.ACCEPTED_CORRECT
        assert session.is_out_of_book
        assert session.phase == TrainingPhase.OUT_OF_BOOK
        assert session.feedback == t().end_of_line
        assert session.score == Score(5, 5)
        assert scheduler.pending_count == 0

        again = session.attempt_move(B1, C3)
        assert again.outcome == MoveOutcome.REJECTED_NOT_YOUR_TURN
        assert session.score == Score(5, 5)

    def test_apply_settings_changes_delay(self) -> None:
        session, scheduler = _make()
        session.apply_settings(TrainerSettings(opponent_delay_ms=100))
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        scheduler.advance(100)
        assert session.history == ("e2-e4", "e7-e5")

    def test_thinking_notice_while_reply_pending(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        scheduler.advance(499)
        assert session.feedback == t().correct_move
        scheduler.advance(1)
        assert session.feedback == t().opponent_thinking
        assert session.phase == TrainingPhase.AUTOMATED_THINKING
        scheduler.advance(DELAY - 500)
        assert session.feedback == t().your_turn

    def test_no_thinking_notice_at_end_of_line(self) -> None:
        session, scheduler = _make()
        _play_scotch_to_branch(session, scheduler)
        session.attempt_move(D4, B5)
        scheduler.advance(DELAY)
        assert session.feedback == t().end_of_line


class TestIncorrectMoves:
    def test_miss_shows_hint_and_stays_on_board(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")

        result = session.attempt_move(D2, D4)
        assert result.outcome == MoveOutcome.ACCEPTED_INCORRECT
        assert result.accepted
        assert result.hint is not None
        assert result.hint.notation == "e2-e4"
        assert (result.hint.from_sq, result.hint.to_sq) == (E2, E4)
        assert result.score == Score(0, 1)
        assert session.history == ("d2-d4",)
        assert session.current_turn == Color.BLACK
        assert session.phase == TrainingPhase.FEEDBACK
        assert session.feedback == "✗ Not the best move. Try: e2-e4"
        assert session.can_undo

    def test_feedback_clears_on_timer(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(D2, D4)

        scheduler.advance(FEEDBACK - 1)
        assert session.phase == TrainingPhase.FEEDBACK
        scheduler.advance(1)
        assert session.phase == TrainingPhase.AWAITING_TRAINEE_MOVE
        assert session.feedback == ""
        # The opponent's side is to move; only undo continues the game.
        assert not session.is_trainee_turn
        result = session.attempt_move(E2, E4)
        assert result.outcome == MoveOutcome.REJECTED_NOT_YOUR_TURN
        assert session.history == ("d2-d4",)

    def test_hint_lists_every_candidate(self) -> None:
        session, scheduler = _make()
        _play_scotch_to_branch(session, scheduler)
        session.attempt_move(B1, C3)
        assert session.hint is not None
        assert session.hint.notation == "d4-b5"
        assert session.feedback == "✗ Not the best move. Try: d4-b5 or d4-c6"

    def test_black_trainee_hint(self) -> None:
        black_scotch = OpeningLine(
            "scotchBlack", "Scotch (black side)", Color.BLACK, SCOTCH_GAME.moves
        )
        session, scheduler = _make(OpeningBook([black_scotch]))
        session.start_training("scotchBlack")
        assert session.history == ("e2-e4",)

        session.attempt_move(E7, E5)
        scheduler.advance(DELAY)
        session.attempt_move(B8, C6)
        scheduler.advance(DELAY)
        assert session.history == ("e2-e4", "e7-e5", "g1-f3", "b8-c6", "d2-d4")

        result = session.attempt_move(A7, A6)
        assert result.outcome == MoveOutcome.ACCEPTED_INCORRECT
        assert result.hint is not None
        assert result.hint.notation == "e5-d4"
        assert (result.hint.from_sq, result.hint.to_sq) == (E5, D4)
        assert session.score == Score(2, 3)
        assert session.score.accuracy == 67

    def test_miss_without_book_entry(self, caplog: pytest.LogCaptureFixture) -> None:
        session, scheduler = _make(choose=lambda c: c[-1])
        _play_scotch_to_branch(session, scheduler)
        assert session.history[-1] == "d8-h4"

        with caplog.at_level(logging.WARNING, logger="openingtrainer"):
            result = session.attempt_move(B1, C3)
        assert result.outcome == MoveOutcome.ACCEPTED_INCORRECT
        assert result.hint is None
        assert session.feedback == t().incorrect_no_hint
        assert "no entry" in caplog.text


class TestUndo:
    def test_restores_previous_state(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        scheduler.advance(DELAY)
        before_board = session.board
        before_score = session.score

        session.attempt_move(D2, D4)
        assert session.undo_last_mistake()
        assert session.board == before_board
        assert session.history == ("e2-e4", "e7-e5")
        assert session.score == before_score
        assert session.current_turn == Color.WHITE
        assert session.hint is None
        assert session.phase == TrainingPhase.AWAITING_TRAINEE_MOVE
        assert session.feedback == ""
        assert session.is_trainee_turn

    def test_second_undo_is_noop(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        session.attempt_move(D2, D4)
        assert session.undo()
        assert not session.can_undo
        assert not session.undo_last_mistake()
        assert session.history == ()

    def test_undo_without_mistake(self) -> None:
        session, _ = _make()
        assert not session.undo_last_mistake()
        session.start_training("scotchGame")
        assert not session.undo_last_mistake()

    def test_undo_cancels_feedback_timer(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(D2, D4)
        session.undo_last_mistake()
        assert scheduler.pending_count == 0

        session.attempt_move(E2, E4)
        scheduler.advance(FEEDBACK)
        assert session.history == ("e2-e4", "e7-e5")
        assert session.feedback == t().your_turn

    def test_repeated_miss_and_undo(self) -> None:
        session, scheduler = _make()
        session.start_training("sicilianDragon")
        session.attempt_move(A7, A6)
        scheduler.advance(FEEDBACK)
        assert session.undo_last_mistake()
        session.attempt_move(D7, D5)
        assert session.undo_last_mistake()
        assert session.history == ("e2-e4",)
        assert session.score == Score()
        assert not session.can_undo


class TestRejections:
    def test_before_start(self) -> None:
        session, _ = _make()
        result = session.attempt_move(E2, E4)
        assert result.outcome == MoveOutcome.REJECTED_NOT_YOUR_TURN
        assert not result.accepted
        assert session.feedback == ""
        assert session.select_square(E2) is None

    @pytest.mark.parametrize(
        ("frm", "to"),
        [
            (E2, E5),  # pawn three squares
            (E4, E5),  # empty origin
            (E7, E5),  # opponent's piece
            ((9, 9), E4),  # off board
            (G1, E2),  # own piece on target
        ],
    )
    def test_illegal_attempts(self, frm, to) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        result = session.attempt_move(frm, to)
        assert result.outcome == MoveOutcome.REJECTED_ILLEGAL
        assert result.move is None
        assert session.history == ()
        assert session.score == Score()
        assert session.board == Board.initial()
        assert scheduler.pending_count == 0

    def test_wait_notice_during_reply(self) -> None:
        session, scheduler = _make(settings=TrainerSettings(notice_clear_ms=300))
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)

        result = session.attempt_move(D2, D4)
        assert result.outcome == MoveOutcome.REJECTED_NOT_YOUR_TURN
        assert session.feedback == t().wait_for_opponent
        assert session.score == Score(1, 1)

        scheduler.advance(300)
        assert session.feedback == t().correct_move
        scheduler.advance(200)
        assert session.feedback == t().opponent_thinking
        scheduler.advance(300)
        assert session.feedback == t().your_turn

    def test_wait_notice_does_not_clobber_newer_text(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        scheduler.advance(DELAY - 100)
        session.attempt_move(D2, D4)
        scheduler.advance(100)
        assert session.feedback == t().your_turn
        scheduler.advance(1000)
        assert session.feedback == t().your_turn


class TestStaleReplies:
    def test_reset_drops_pending_reply(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        session.reset_game()
        scheduler.advance(DELAY * 2)
        assert session.history == ()
        assert session.board == Board.initial()
        assert session.score == Score()
        assert session.phase == TrainingPhase.AWAITING_TRAINEE_MOVE

    def test_back_to_menu_drops_pending_reply(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        session.back_to_menu()
        scheduler.advance(DELAY * 2)
        assert session.history == ("e2-e4",)
        assert session.phase == TrainingPhase.NOT_STARTED
        assert session.opening is None
        assert session.feedback == ""

    def test_new_line_drops_pending_reply(self) -> None:
        session, scheduler = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        session.start_training("sicilianDragon")
        scheduler.advance(DELAY * 2)
        assert session.history == ("e2-e4",)
        assert session.current_turn == Color.BLACK
        assert session.is_trainee_turn


class TestSelection:
    def test_toggle(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        assert session.select_square(E2) is None
        assert session.selection == E2
        assert session.select_square(E2) is None
        assert session.selection is None

    def test_empty_or_opponent_square_not_selected(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        session.select_square(E4)
        assert session.selection is None
        session.select_square(E7)
        assert session.selection is None

    @pytest.mark.parametrize("square", [(8, 4), (-1, 4), (4, 8), (0, -1)])
    def test_off_board_click_ignored(self, square: tuple[int, int]) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        assert session.select_square(square) is None
        assert session.selection is None

        session.select_square(E2)
        assert session.select_square(square) is None
        assert session.selection == E2
        assert session.history == ()

    def test_click_move(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        session.select_square(E2)
        result = session.select_square(E4)
        assert result is not None
        assert result.outcome == MoveOutcome.ACCEPTED_CORRECT
        assert session.selection is None

    def test_illegal_click_reselects_own_piece(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        session.select_square(D2)
        result = session.select_square(G1)
        assert result is not None
        assert result.outcome == MoveOutcome.REJECTED_ILLEGAL
        assert session.selection == G1

        result = session.select_square(D5)
        assert result is not None
        assert result.outcome == MoveOutcome.REJECTED_ILLEGAL
        assert session.selection is None

    def test_clear_selection(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        session.select_square(E2)
        session.clear_selection()
        assert session.selection is None

    def test_click_while_opponent_thinks(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        result = session.select_square(D2)
        assert result is not None
        assert result.outcome == MoveOutcome.REJECTED_NOT_YOUR_TURN
        assert session.selection is None


class TestEvents:
    def test_event_sequence(self) -> None:
        session, scheduler = _make()
        log: list[tuple] = []
        session.events.on_position_reset.append(lambda: log.append(("reset",)))
        session.events.on_move.append(lambda n, c, a: log.append(("move", n, c, a)))
        session.events.on_phase_changed.append(lambda p: log.append(("phase", p)))
        session.events.on_feedback_changed.append(lambda f: log.append(("text", f)))
        session.events.on_result.append(lambda r: log.append(("result", r.outcome)))

        session.start_training("scotchGame")
        session.attempt_move(E2, E4)
        scheduler.advance(DELAY)

        assert log == [
            ("reset",),
            ("text", t().your_opening_move),
            ("phase", TrainingPhase.AWAITING_TRAINEE_MOVE),
            ("move", "e2-e4", Color.WHITE, False),
            ("text", t().correct_move),
            ("phase", TrainingPhase.AUTOMATED_THINKING),
            ("result", MoveOutcome.ACCEPTED_CORRECT),
            ("text", t().opponent_thinking),
            ("move", "e7-e5", Color.BLACK, True),
            ("text", t().your_turn),
            ("phase", TrainingPhase.AWAITING_TRAINEE_MOVE),
        ]

    def test_rejections_reported(self) -> None:
        session, _ = _make()
        outcomes: list[MoveOutcome] = []
        session.events.on_result.append(lambda r: outcomes.append(r.outcome))
        session.attempt_move(E2, E4)
        session.start_training("scotchGame")
        session.attempt_move(F8, C6)
        assert outcomes == [
            MoveOutcome.REJECTED_NOT_YOUR_TURN,
            MoveOutcome.REJECTED_ILLEGAL,
        ]

    def test_board_property_is_a_copy(self) -> None:
        session, _ = _make()
        session.start_training("scotchGame")
        board = session.board
        board.move_piece(E2, E4)
        assert session.board == Board.initial()
        assert session.board_rows == Board.initial().rows()
