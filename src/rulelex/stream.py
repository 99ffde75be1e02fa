"""Cursor over a finished token sequence, for use by a parser."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from rulelex.tokens import Token


class Tokens:
    """Read view over a token sequence with a mutable cursor.

    The sequence itself is never modified; only ``pos`` moves.
    """

    __slots__ = ("_tokens", "pos")

    def __init__(self, tokens: Iterable[Token] = (), pos: int = 0) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)
        self.pos = pos

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        """Iterate over the tokens from the cursor on, without consuming them."""
        return iter(self._tokens[max(self.pos, 0) :])

    def __repr__(self) -> str:
        return f"Tokens({len(self._tokens)} tokens, pos={self.pos})"

    @property
    def tokens(self) -> tuple[Token, ...]:
        return self._tokens

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _at(self, idx: int) -> Token:
        # Plain indexing would wrap around on negative positions
        if not 0 <= idx < len(self._tokens):
            raise IndexError(f"token index {idx} out of range (0..{len(self._tokens) - 1})")
        return self._tokens[idx]

    def has_more(self) -> bool:
        """True while more than one token remains.

        The final token is never reported as available; parsers that loop on
        has_more() treat it as a terminator.
        """
        return self.pos < len(self._tokens) - 1

    def peek_previous(self) -> Token:
        """Return the token before the one just consumed."""
        return self._at(self.pos - 2)

    def get(self) -> Token:
        tok = self._at(self.pos)
        self.pos += 1
        return tok

    def peek_next(self) -> Token:
        return self._at(self.pos)

    def skip(self, n: int) -> None:
        """Move the cursor by *n* without bounds checking."""
        self.pos += n

    def until(self, categories: Iterable[int]) -> tuple[Tokens, int]:
        """Extract the tokens between the cursor and the next delimiter.

        Searches from ``pos + 1`` for the first token whose category is in
        *categories*. Returns a stream over the tokens from ``pos + 1`` up to
        (not including) the delimiter, and the delimiter's index relative to
        ``pos + 1``. Returns an empty stream and -1 when there is no delimiter.
        The cursor does not move.
        """
        wanted = frozenset(categories)
        begin = max(self.pos + 1, 0)
        for offset, tok in enumerate(self._tokens[begin:]):
            if tok.category in wanted:
                return Tokens(self._tokens[begin : begin + offset]), offset
        return Tokens(), -1
