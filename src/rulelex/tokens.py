"""Token data structures and source position helpers."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Position:
    """Source position: 0-based line, column as counted from the last newline, offset."""

    line: int
    column: int
    offset: int


@dataclass(frozen=True, slots=True)
class Token:
    """A classified slice of the source.

    ``occurrences`` is greater than 1 only for collapsed tokens, and ``start``
    is the offset of the first raw match folded into the token.
    """

    text: str
    category: int
    occurrences: int
    start: int

    @property
    def end(self) -> int:
        """Offset just past the first raw match."""
        return self.start + len(self.text)


def line_and_column(source: str, offset: int) -> tuple[int, int]:
    """Return (line, column) for *offset* in *source*.

    line is the number of newlines before *offset*; column is *offset* minus
    the index of the last newline before it (-1 when there is none).
    """
    head = source[:offset]
    return head.count("\n"), offset - head.rfind("\n")


def position_at(source: str, offset: int) -> Position:
    """Return the Position of *offset* in *source*."""
    line, column = line_and_column(source, offset)
    return Position(line, column, offset)
