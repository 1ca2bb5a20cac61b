"""Internationalisation strings for trainer feedback.

Usage::

    from openingtrainer.i18n import t, set_language

    set_language("Russian")
    print(t().correct_move)          # "✓ Верный ход!"
    print(t().incorrect_move.format(moves="e7-e5"))
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Strings:
    # ── Move feedback ────────────────────────────────────────────────────
    correct_move: str
    incorrect_move: str  # "... Try: {moves}"
    incorrect_no_hint: str
    move_separator: str  # joins candidates, e.g. " or "

    # ── Turn notices ─────────────────────────────────────────────────────
    your_turn: str
    your_opening_move: str
    opponent_thinking: str
    opponent_first_move: str  # "{color} is making the first move..."
    wait_for_opponent: str
    end_of_line: str

    # ── Side names ───────────────────────────────────────────────────────────────────────────────────────────────────────────────
    color_white: str
    color_black: str


_EN = Strings(
    correct_move="✓ Correct move!",
    incorrect_move="✗ Not the best move. Try: {moves}",
    incorrect_no_hint="✗ Not the best move.",
    move_separator=" or ",
    your_turn="Your turn!",
    your_opening_move="Your turn! Make your opening move.",
    opponent_thinking="Opponent is thinking...",
    opponent_first_move="{color} is making the first move...",
    wait_for_opponent="Wait for opponent to move...",
    end_of_line="End of opening line - great job!",
    color_white="White",
    color_black="Black",
)

_RU = Strings(
    correct_move="✓ Верный ход!",
    incorrect_move="✗ Не лучший ход. Попробуйте: {moves}",
    incorrect_no_hint="✗ Не лучший ход.",
    move_separator=" или ",
    your_turn="Ваш ход!",
    your_opening_move="Ваш ход! Сделайте первый ход.",
    opponent_thinking="Соперник думает...",
    opponent_first_move="{color} делают первый ход...",
    wait_for_opponent="Дождитесь хода соперника...",
    end_of_line="Дебютная линия пройдена - отлично!",
    color_white="Белые",
    color_black="Чёрные",
)

_LOCALES: dict[str, Strings] = {
    "English": _EN,
    "Russian": _RU,
}

LANGUAGES: list[str] = list(_LOCALES.keys())

_current: Strings = _EN


def t() -> Strings:
    """Return the active locale strings."""
    return _current


def set_language(language: str) -> None:
    """Switch the global locale. Unknown names fall back to English."""
    global _current
    _current = _LOCALES.get(language, _EN)
