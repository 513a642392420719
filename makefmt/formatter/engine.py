"""
Formatting pipeline engine.

Applies an ordered list of rules, feeding each rule's output to the next.
"""

from typing import List, Sequence

from makefmt.config import FormatterConfig
from makefmt.models import Node
from makefmt.rules.base import FormatRule
from makefmt.utils.logging import get_logger, log_rule_applied

logger = get_logger(__name__)


def run_pipeline(nodes: List[Node], config: FormatterConfig, rules: Sequence[FormatRule]) -> List[Node]:
    """
    Run ``rules`` over ``nodes`` in order.

    Args:
        nodes: Parsed nodes
        config: Formatter options passed to every rule
        rules: Rules in execution order

    Returns:
        Output of the last rule, or ``nodes`` itself when ``rules`` is empty
    """
    result = nodes
    for rule in rules:
        formatted = rule.format(result, config)
        log_rule_applied(logger, rule.name, _changed(result, formatted))
        result = formatted
    return result


def _changed(before: List[Node], after: List[Node]) -> bool:
    """Return True if any node was replaced, added or dropped."""
    if before is after:
        return False
    if len(before) != len(after):
        return True
    return any(old is not new for old, new in zip(before, after))
