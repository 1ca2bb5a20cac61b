"""OpeningBook — immutable lookup of theory moves by history prefix."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from openingtrainer.core.move import Move, parse_history, serialize_history
from openingtrainer.openings.models import (
    OpeningConfigError,
    OpeningLine,
    UnknownOpeningError,
)

_LOGGER = logging.getLogger(__name__)


def validate_line(line: OpeningLine) -> None:
    """Raise :class:`OpeningConfigError` if *line* is not well formed.

    Every prefix must parse as a move sequence and every candidate list must
    be non-empty canonical notation.
    """
    for prefix, candidates in line.moves.items():
        try:
            parse_history(prefix)
        except ValueError as exc:
            raise OpeningConfigError(
                f"{line.key}: bad history prefix {prefix!r}: {exc}"
            ) from exc
        if not candidates:
            raise OpeningConfigError(
                f"{line.key}: empty candidate list for prefix {prefix!r}"
            )
        for candidate in candidates:
            try:
                Move.parse(candidate)
            except ValueError as exc:
                raise OpeningConfigError(
                    f"{line.key}: bad candidate {candidate!r} after {prefix!r}"
                ) from exc


class OpeningBook:
    """Collection of named :class:`OpeningLine` objects.

    Lookups are exact string matches on the serialized history; two move
    orders reaching the same position are different keys.
    """

    __slots__ = ("_lines",)

    def __init__(self, lines: Iterable[OpeningLine]) -> None:
        self._lines: dict[str, OpeningLine] = {}
        for line in lines:
            if line.key in self._lines:
                raise OpeningConfigError(f"Duplicate opening key: {line.key!r}")
            validate_line(line)
            self._lines[line.key] = line

    @classmethod
    def default(cls) -> OpeningBook:
        """Book with the bundled opening catalog."""
        from openingtrainer.openings.catalog import DEFAULT_LINES

        return cls(DEFAULT_LINES)

    # ── Queries ──────────────────────────────────────────────────────────

    def names(self) -> list[str]:
        return list(self._lines)

    def line(self, name: str) -> OpeningLine:
        try:
            return self._lines[name]
        except KeyError:
            raise UnknownOpeningError(name, self.names()) from None

    def next_moves(
        self,
        name: str,
        history_prefix: str | Sequence[str | Move],
    ) -> tuple[str, ...]:
        """Acceptable next moves after *history_prefix*, or ``()`` if out of book."""
        key = (
            history_prefix
            if isinstance(history_prefix, str)
            else serialize_history(history_prefix)
        )
        moves = self.line(name).candidates(key)
        if not moves:
            _LOGGER.debug("No book entry for %r in %s", key, name)
        return moves

    def __contains__(self, name: object) -> bool:
        return name in self._lines

    def __iter__(self) -> Iterator[OpeningLine]:
        return iter(self._lines.values())

    def __len__(self) -> int:
        return len(self._lines)
