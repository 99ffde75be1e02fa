"""Rule-table lexer with a cursor-based token stream."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rulelex.rules import RuleLike
    from rulelex.stream import Tokens

__version__ = "0.1.0"


def lex(source: str, rules: Iterable[RuleLike]) -> Tokens:
    """Scan source with the given rules and return a Tokens cursor over the result."""
    from rulelex.scanner import tokenize
    from rulelex.stream import Tokens

    return Tokens(tokenize(source, rules))
