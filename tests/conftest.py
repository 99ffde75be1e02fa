"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from rulelex.rules import Rule
from rulelex.scanner import tokenize
from rulelex.stream import Tokens
from rulelex.tokens import Token

NUMBER = 1
PLUS = 2
WORD = 3
NEWLINE = 4
INDENT = -5


@pytest.fixture
def arith_rules() -> list[Rule]:
    """Numbers and plus signs, spaces discarded."""
    return [
        Rule.tagged(r"\d+", NUMBER, "number"),
        Rule.tagged(r"\+", PLUS, "plus"),
        Rule.tagged(r" +", 0),
    ]


@pytest.fixture
def indent_rules() -> list[Rule]:
    """Words and newlines; each leading space is a collapsed INDENT match."""
    return [
        Rule.tagged(r"[a-z]+", WORD, "word"),
        Rule.tagged(r"\n", NEWLINE, "newline"),
        Rule.tagged(r" ", INDENT, "indent"),
    ]


@pytest.fixture
def lex():
    """Return a helper that scans source and returns (text, category, occurrences, start) tuples."""

    def _lex(source: str, rules) -> list[tuple[str, int, int, int]]:
        return [(t.text, t.category, t.occurrences, t.start) for t in tokenize(source, rules)]

    return _lex


@pytest.fixture
def make_stream():
    """Return a helper that builds a Tokens stream from a list of categories."""

    def _make(categories: list[int], pos: int = 0) -> Tokens:
        tokens = [Token(chr(ord("A") + i), c, 1, i) for i, c in enumerate(categories)]
        return Tokens(tokens, pos)

    return _make
