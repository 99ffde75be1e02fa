"""Rule-driven scanner — converts source text into a flat token sequence."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace

from rulelex.errors import IllegalCharacter
from rulelex.logger import get_logger
from rulelex.rules import Discard, EmitCollapsed, Rule, RuleLike, as_rule, compile_rule
from rulelex.tokens import Token, position_at

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Match:
    """A raw rule match, before emission policy is applied."""

    rule_index: int
    text: str
    start: int


class Scanner:
    """Scan source text with an ordered rule table; the first matching rule wins.

    Every pattern is compiled once, here, so an invalid pattern fails before
    any source is read.
    """

    def __init__(self, rules: Iterable[RuleLike]) -> None:
        self._rules: tuple[Rule, ...] = tuple(as_rule(r) for r in rules)
        self._compiled: tuple[re.Pattern[str], ...] = tuple(
            compile_rule(rule, i) for i, rule in enumerate(self._rules)
        )
        logger.debug("compiled %d rules", len(self._rules))

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    def matches(self, source: str) -> Iterator[Match]:
        """Yield raw matches in source order.

        Raises IllegalCharacter (with no tokens attached) where no rule matches.
        A zero-length match never advances, so a rule that can match the empty
        string loops forever unless an earlier rule consumes that input.
        """
        pos = 0
        while pos < len(source):
            # Match the remaining text so ^ and \A anchor at the scan position
            rest = source[pos:]
            for index, regex in enumerate(self._compiled):
                m = regex.match(rest)
                if m is not None:
                    break
            else:
                raise IllegalCharacter(source[pos], position_at(source, pos), source)
            text = m.group()
            yield Match(index, text, pos)
            pos += len(text)

    def scan(self, source: str) -> tuple[Token, ...]:
        """Scan the full source and return the emitted tokens."""
        tokens: list[Token] = []
        # Whether the last emitted token may absorb further collapsed matches
        last_collapsible = False
        try:
            for match in self.matches(source):
                policy = self._rules[match.rule_index].policy
                if isinstance(policy, Discard):
                    continue
                if isinstance(policy, EmitCollapsed):
                    if last_collapsible and tokens[-1].category == policy.category:
                        prev = tokens[-1]
                        tokens[-1] = replace(prev, occurrences=prev.occurrences + 1)
                        continue
                    last_collapsible = True
                else:
                    last_collapsible = False
                tokens.append(Token(match.text, policy.category, 1, match.start))
        except IllegalCharacter as exc:
            logger.debug("scan failed at offset %d after %d tokens", exc.position.offset, len(tokens))
            exc.tokens = tuple(tokens)
            raise

        logger.debug("scanned %d characters into %d tokens", len(source), len(tokens))
        return tuple(tokens)


def tokenize(source: str, rules: Iterable[RuleLike]) -> tuple[Token, ...]:
    """Convenience function: scan source with a fresh Scanner."""
    return Scanner(rules).scan(source)
