"""Opening trainer — learn a chess opening against a scripted opponent.

The Qt adapters live in :mod:`openingtrainer.ui` and are not imported here,
so the core, openings and training layers work without a Qt installation.
"""

from openingtrainer.core import Board, Color, Move, MoveEngine, Piece, PieceType
from openingtrainer.openings import (
    OpeningBook,
    OpeningConfigError,
    OpeningLine,
    TrainerConfigError,
    UnknownOpeningError,
)
from openingtrainer.settings import TrainerSettings
from openingtrainer.training import (
    ManualScheduler,
    MoveOutcome,
    MoveResult,
    TrainingPhase,
    TrainingSession,
)

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Color",
    "ManualScheduler",
    "Move",
    "MoveEngine",
    "MoveOutcome",
    "MoveResult",
    "OpeningBook",
    "OpeningConfigError",
    "OpeningLine",
    "Piece",
    "PieceType",
    "TrainerConfigError",
    "TrainerSettings",
    "TrainingPhase",
    "TrainingSession",
    "UnknownOpeningError",
]
