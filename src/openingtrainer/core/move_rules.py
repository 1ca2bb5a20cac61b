"""Piece-movement geometry: is a single relocation legal on a given board.

Only raw movement rules are enforced (direction, distance, blocking and
capture). Check, castling, en passant and promotion are not modelled, and the
engine has no notion of whose turn it is.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from openingtrainer.core.enums import Color, PieceType
from openingtrainer.core.types import Square, is_on_board, make_square

if TYPE_CHECKING:
    from openingtrainer.core.board import Board
    from openingtrainer.core.piece import Piece


KNIGHT_DELTAS: frozenset[tuple[int, int]] = frozenset(
    {(-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1)}
)

# White pawns start on row 6 and move towards row 0.
_PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
_PAWN_START_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Whether every square strictly between *from_sq* and *to_sq* is empty.

    Walks the unit step from just past *from_sq* up to, excluding, *to_sq*.
    Squares not joined by a straight or diagonal line have no path: ``False``.
    """
    d_row = to_sq[0] - from_sq[0]
    d_col = to_sq[1] - from_sq[1]
    if d_row and d_col and abs(d_row) != abs(d_col):
        return False
    step_row = _sign(d_row)
    step_col = _sign(d_col)
    row, col = from_sq[0] + step_row, from_sq[1] + step_col
    while (row, col) != to_sq:
        if board[make_square(row, col)] is not None:
            return False
        row += step_row
        col += step_col
    return True


class MoveEngine:
    """Stateless legality checker for a single piece relocation.

    Args:
        strict_double_step: When ``True`` a pawn's two-square advance also
            requires the pass-through square to be empty. When ``False`` only
            the destination is checked, which lets a pawn hop over a blocker.
    """

    __slots__ = ("strict_double_step",)

    def __init__(self, *, strict_double_step: bool = True) -> None:
        self.strict_double_step = strict_double_step

    def is_legal_move(
        self,
        board: Board,
        from_sq: Square,
        to_sq: Square,
        piece: Piece,
    ) -> bool:
        """Return whether *piece* standing on *from_sq* may move to *to_sq*.

        *board* is only read, never modified or retained.
        """
        if not is_on_board(to_sq) or from_sq == to_sq:
            return False

        target = board[to_sq]
        if target is not None and target.color == piece.color:
            return False

        d_row = to_sq[0] - from_sq[0]
        d_col = to_sq[1] - from_sq[1]
        ptype = piece.piece_type

        if ptype == PieceType.PAWN:
            return self._is_legal_pawn_move(board, from_sq, to_sq, piece.color)
        if ptype == PieceType.KNIGHT:
            return (d_row, d_col) in KNIGHT_DELTAS
        if ptype == PieceType.BISHOP:
            return _is_diagonal(d_row, d_col) and is_path_clear(board, from_sq, to_sq)
        if ptype == PieceType.ROOK:
            return _is_straight(d_row, d_col) and is_path_clear(board, from_sq, to_sq)
        if ptype == PieceType.QUEEN:
            return (
                _is_straight(d_row, d_col) or _is_diagonal(d_row, d_col)
            ) and is_path_clear(board, from_sq, to_sq)
        if ptype == PieceType.KING:
            return abs(d_row) <= 1 and abs(d_col) <= 1
        return False

    def _is_legal_pawn_move(
        self,
        board: Board,
        from_sq: Square,
        to_sq: Square,
        color: Color,
    ) -> bool:
        direction = _PAWN_DIRECTION[color]
        d_row = to_sq[0] - from_sq[0]
        d_col = to_sq[1] - from_sq[1]
        target = board[to_sq]

        if d_col == 0:
            if target is not None:
                return False
            if d_row == direction:
                return True
            if d_row == 2 * direction and from_sq[0] == _PAWN_START_ROW[color]:
                if not self.strict_double_step:
                    return True
                return board[make_square(from_sq[0] + direction, from_sq[1])] is None
            return False

        # Diagonal step is a capture only; same-side targets were rejected above.
        if abs(d_col) == 1 and d_row == direction:
            return target is not None
        return False


def _is_diagonal(d_row: int, d_col: int) -> bool:
    return abs(d_row) == abs(d_col)


def _is_straight(d_row: int, d_col: int) -> bool:
    return (d_row == 0) != (d_col == 0)
