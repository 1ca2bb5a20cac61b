"""Opening books — branching theory trees keyed by move-history prefix."""

from openingtrainer.openings.book import OpeningBook, validate_line
from openingtrainer.openings.catalog import (
    DEFAULT_LINES,
    SCOTCH_GAMBIT,
    SCOTCH_GAME,
    SICILIAN_DRAGON,
)
from openingtrainer.openings.models import (
    OpeningConfigError,
    OpeningLine,
    TrainerConfigError,
    UnknownOpeningError,
)

__all__ = [
    "DEFAULT_LINES",
    "SCOTCH_GAMBIT",
    "SCOTCH_GAME",
    "SICILIAN_DRAGON",
    "OpeningBook",
    "OpeningConfigError",
    "OpeningLine",
    "TrainerConfigError",
    "UnknownOpeningError",
    "validate_line",
]
