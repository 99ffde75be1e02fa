"""Human-readable and JSON token dumps."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import asdict
from typing import Any, TextIO

from rulelex.rules import Rule
from rulelex.tokens import Token


def dump_tokens(
    tokens: Sequence[Token],
    rules: Sequence[Rule] = (),
    *,
    file: TextIO = sys.stderr,
) -> None:
    """Print one line per token to *file*: index, category, count, offset, text.

    When *rules* name the category, the name follows in parentheses.
    """
    names = _category_names(rules)
    for i, tok in enumerate(tokens):
        name = names.get(tok.category)
        suffix = f"  ({name})" if name else ""
        file.write(
            f"{i:>4}  {tok.category:>4}  x{tok.occurrences:<4} @{tok.start:<6} {tok.text!r}{suffix}\n"
        )


def tokens_to_json(tokens: Sequence[Token]) -> list[dict[str, Any]]:
    return [asdict(tok) for tok in tokens]


def _category_names(rules: Sequence[Rule]) -> dict[int, str]:
    names: dict[int, str] = {}
    for rule in rules:
        if rule.name and rule.category != 0:
            names.setdefault(rule.category, rule.name)
    return names
