"""Logger factory for rulelex.

Example:
    >>> from rulelex.logger import get_logger
    >>> get_logger("scanner").name
    'rulelex.scanner'
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger namespaced under ``rulelex.``."""
    if not (name == "rulelex" or name.startswith("rulelex.")):
        name = f"rulelex.{name}"
    return logging.getLogger(name)
