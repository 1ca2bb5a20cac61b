"""Core domain layer — board, pieces, notation and movement rules.

Quick start::

    from openingtrainer.core import Board, MoveEngine, parse_square

    board = Board.initial()
    e2, e4 = parse_square("e2"), parse_square("e4")
    MoveEngine().is_legal_move(board, e2, e4, board[e2])  # True
"""

from openingtrainer.core.board import Board
from openingtrainer.core.enums import Color, PieceType
from openingtrainer.core.move import (
    HISTORY_DELIMITER,
    Move,
    parse_history,
    serialize_history,
)
from openingtrainer.core.move_rules import MoveEngine, is_path_clear
from openingtrainer.core.piece import Piece
from openingtrainer.core.types import (
    Square,
    is_on_board,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveEngine",
    "Piece",
    "is_path_clear",
    # Notation
    "HISTORY_DELIMITER",
    "parse_history",
    "serialize_history",
]
