"""Rule table types: patterns paired with an emission policy."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeAlias

from rulelex.errors import RuleError


@dataclass(frozen=True, slots=True)
class Discard:
    """Match the pattern but emit nothing."""

    @property
    def category(self) -> int:
        return 0


@dataclass(frozen=True, slots=True)
class EmitEach:
    """Emit every match as its own token."""

    category: int

    def __post_init__(self) -> None:
        _require_category(self)


@dataclass(frozen=True, slots=True)
class EmitCollapsed:
    """Fold consecutive matches into one token carrying an occurrence count."""

    category: int

    def __post_init__(self) -> None:
        _require_category(self)


def _require_category(policy: EmitEach | EmitCollapsed) -> None:
    # Category 0 is reserved for Discard
    if policy.category == 0:
        raise RuleError(f"{type(policy).__name__} needs a non-zero category")


EmissionPolicy: TypeAlias = Discard | EmitEach | EmitCollapsed

DISCARD = Discard()


def policy_for_tag(tag: int) -> EmissionPolicy:
    """Map an integer tag to its policy: 0 discards, positive emits, negative collapses."""
    if tag == 0:
        return DISCARD
    if tag > 0:
        return EmitEach(tag)
    return EmitCollapsed(tag)


@dataclass(frozen=True, slots=True)
class Rule:
    """A pattern matched at the scan position, and what to do with the match."""

    pattern: str
    policy: EmissionPolicy
    name: str = ""

    @classmethod
    def tagged(cls, pattern: str, tag: int, name: str = "") -> Rule:
        """Build a rule from an integer tag.

        0 discards, a positive tag emits each match, a negative tag collapses
        repeated matches. The tag becomes the category of emitted tokens.
        """
        return cls(pattern, policy_for_tag(tag), name)

    @property
    def category(self) -> int:
        return self.policy.category

    def label(self) -> str:
        return self.name or self.pattern


RuleLike: TypeAlias = Rule | tuple[str, int]


def as_rule(rule: RuleLike) -> Rule:
    """Accept a Rule or a ``(pattern, tag)`` pair."""
    if isinstance(rule, Rule):
        return rule
    pattern, tag = rule
    return Rule.tagged(pattern, tag)


def compile_rule(rule: Rule, index: int) -> re.Pattern[str]:
    """Compile a rule's pattern, raising RuleError when it is invalid."""
    try:
        return re.compile(rule.pattern)
    except re.error as exc:
        raise RuleError(f"invalid pattern {rule.pattern!r}: {exc}", index, rule.pattern) from exc
