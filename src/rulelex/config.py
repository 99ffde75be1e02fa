"""TOML rule table loading."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from rulelex.errors import RuleError
from rulelex.logger import get_logger
from rulelex.rules import DISCARD, EmissionPolicy, EmitCollapsed, EmitEach, Rule, policy_for_tag

logger = get_logger(__name__)

CONFIG_NAME = "rulelex.toml"

_POLICIES = ("discard", "each", "collapse")


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / CONFIG_NAME

    if not path.is_file():
        logger.debug("no config at %s", path)
        return {}

    with open(path, "rb") as f:
        try:
            config = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise RuleError(f"{path}: {exc}") from exc
    logger.debug("loaded config from %s", path)
    return config


def _policy(entry: dict[str, Any], index: int) -> EmissionPolicy:
    category = entry.get("category", 0)
    if not isinstance(category, int) or isinstance(category, bool):
        raise RuleError(f"category must be an integer, got {category!r}", index)

    kind = entry.get("policy")
    if kind is None:
        return policy_for_tag(category)
    if kind not in _POLICIES:
        raise RuleError(f"policy must be one of {', '.join(_POLICIES)}, got {kind!r}", index)
    if kind == "discard":
        return DISCARD
    if category == 0:
        raise RuleError(f"policy {kind!r} needs a non-zero category", index)
    if kind == "each":
        return EmitEach(category)
    return EmitCollapsed(category)


def rules_from_config(config: dict[str, Any]) -> tuple[Rule, ...]:
    """Build the rule table from the ``[[rules]]`` entries of a config dict."""
    entries = config.get("rules")
    if not isinstance(entries, list) or not entries:
        raise RuleError("config defines no [[rules]]")

    rules: list[Rule] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RuleError("rule entry must be a table", index)
        pattern = entry.get("pattern")
        if not isinstance(pattern, str):
            raise RuleError("rule entry needs a string 'pattern'", index)
        name = entry.get("name", "")
        rules.append(Rule(pattern, _policy(entry, index), str(name)))
    return tuple(rules)


def load_rules(path: Path) -> tuple[Rule, ...]:
    """Read a rule table from a TOML file."""
    if not path.is_file():
        raise RuleError(f"rule file not found: {path}")
    return rules_from_config(load_config(path, path.parent))
