"""Trailing whitespace removal."""

from typing import Any, Dict, List

from makefmt.config import FormatterConfig
from makefmt.models import TEXT_FIELDS, Node
from makefmt.rules.base import FormatRule


class TrailingWhitespace(FormatRule):
    """Removes trailing spaces and tabs from every line."""

    @property
    def name(self) -> str:
        return "trim_trailing_whitespace"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        if not config.trim_trailing_whitespace:
            return nodes
        return [trim_node(node) for node in nodes]


def trim_node(node: Node) -> Node:
    """
    Strip trailing whitespace from a node's raw text, text fields and children.

    Args:
        node: Node to trim

    Returns:
        ``node`` itself when nothing needed trimming, otherwise a trimmed clone
    """
    changes: Dict[str, Any] = {}

    # Raw may span several physical lines for continuation blocks
    trimmed_raw = trim_lines(node.raw)
    if trimmed_raw != node.raw:
        changes["raw"] = trimmed_raw

    for field in TEXT_FIELDS:
        value = getattr(node, field, None)
        if isinstance(value, str) and value != value.rstrip(" \t"):
            changes[field] = value.rstrip(" \t")

    children = getattr(node, "children", None)
    if children:
        trimmed_children = [trim_node(child) for child in children]
        if any(new is not old for new, old in zip(trimmed_children, children)):
            changes["children"] = trimmed_children

    if not changes:
        return node
    return node.clone(**changes)


def trim_lines(text: str) -> str:
    """Trim trailing spaces and tabs from each line of ``text``."""
    return "\n".join(line.rstrip(" \t") for line in text.split("\n"))
