"""Error types with formatted source context."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rulelex.tokens import Position, Token


class RulelexError(Exception):
    """Base exception for all rulelex errors."""


class RuleError(RulelexError):
    """Raised for an invalid rule table: a bad pattern or a malformed rule entry."""

    def __init__(self, message: str, index: int | None = None, pattern: str | None = None) -> None:
        self.message = message
        self.index = index
        self.pattern = pattern
        location = f"rule {index}: " if index is not None else ""
        super().__init__(f"{location}{message}")


class LexError(RulelexError):
    """Raised when scanning stops, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(f"{position.line}:{position.column}: {message}")

    def format(self, filename: str = "<input>") -> str:
        lines = self.source.split("\n")
        line_idx = self.position.line
        col = self.position.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\r")
        else:
            source_line = ""

        pad = " " * (col - 1)

        # Display lines 1-based, as editors number them
        line_num = str(line_idx + 1)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{line_idx + 1}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}^"
        )


class IllegalCharacter(LexError):
    """Raised when no rule matches at the current scan position.

    ``tokens`` holds everything emitted before the failure so callers can
    report context.
    """

    def __init__(
        self,
        character: str,
        position: Position,
        source: str,
        tokens: tuple[Token, ...] = (),
    ) -> None:
        self.character = character
        self.tokens = tokens
        super().__init__(f"Illegal character: {character}", position, source)
