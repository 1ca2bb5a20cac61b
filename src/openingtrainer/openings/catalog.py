"""Bundled opening lines."""

from __future__ import annotations

from openingtrainer.core.enums import Color
from openingtrainer.openings.models import OpeningLine

SICILIAN_DRAGON = OpeningLine(
    key="sicilianDragon",
    title="Sicilian Defence - Accelerated Dragon",
    trainee_color=Color.BLACK,
    moves={
        "": ("e2-e4",),
        "e2-e4": ("c7-c5",),
        "e2-e4,c7-c5": ("g1-f3",),
        "e2-e4,c7-c5,g1-f3": ("g7-g6",),
        "e2-e4,c7-c5,g1-f3,g7-g6": ("d2-d4",),
        "e2-e4,c7-c5,g1-f3,g7-g6,d2-d4": ("c5-d4",),
        "e2-e4,c7-c5,g1-f3,g7-g6,d2-d4,c5-d4": ("f3-d4",),
        "e2-e4,c7-c5,g1-f3,g7-g6,d2-d4,c5-d4,f3-d4": ("f8-g7",),
        "e2-e4,c7-c5,g1-f3,g7-g6,d2-d4,c5-d4,f3-d4,f8-g7": (
            "c2-c4",
            "b1-c3",
            "f2-f3",
        ),
        "e2-e4,c7-c5,g1-f3,g7-g6,d2-d4,c5-d4,f3-d4,f8-g7,c2-c4": ("b8-c6",),
        "e2-e4,c7-c5,g1-f3,g7-g6,d2-d4,c5-d4,f3-d4,f8-g7,b1-c3": ("b8-c6",),
    },
)

SCOTCH_GAME = OpeningLine(
    key="scotchGame",
    title="Scotch Game",
    trainee_color=Color.WHITE,
    moves={
        "": ("e2-e4",),
        "e2-e4": ("e7-e5",),
        "e2-e4,e7-e5": ("g1-f3",),
        "e2-e4,e7-e5,g1-f3": ("b8-c6",),
        "e2-e4,e7-e5,g1-f3,b8-c6": ("d2-d4",),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4": ("e5-d4",),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4": ("f3-d4",),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4,f3-d4": ("f8-c5", "g8-f6", "d8-h4"),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4,f3-d4,f8-c5": ("d4-b5", "d4-c6"),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4,f3-d4,g8-f6": ("d4-c6", "b1-c3"),
    },
)

# "e1-g1" (castling) cannot be played: the move rules have no castling.
SCOTCH_GAMBIT = OpeningLine(
    key="scotchGambit",
    title="Scotch Gambit",
    trainee_color=Color.WHITE,
    moves={
        "": ("e2-e4",),
        "e2-e4": ("e7-e5",),
        "e2-e4,e7-e5": ("g1-f3",),
        "e2-e4,e7-e5,g1-f3": ("b8-c6",),
        "e2-e4,e7-e5,g1-f3,b8-c6": ("d2-d4",),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4": ("e5-d4",),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4": ("f1-c4",),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4,f1-c4": ("f8-c5", "g8-f6", "f7-f5"),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4,f1-c4,f8-c5": ("c2-c3", "e1-g1"),
        "e2-e4,e7-e5,g1-f3,b8-c6,d2-d4,e5-d4,f1-c4,g8-f6": ("e4-e5", "c2-c3"),
    },
)

DEFAULT_LINES: tuple[OpeningLine, ...] = (SICILIAN_DRAGON, SCOTCH_GAME, SCOTCH_GAMBIT)
