"""Indentation of conditional block bodies."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.formatter.writer import reconstruct
from makefmt.models import ConditionalNode, Node, NodeType
from makefmt.rules.base import FormatRule

OPENING_DIRECTIVES = frozenset(["ifeq", "ifneq", "ifdef", "ifndef"])

# Nodes that always stay at column zero.
_UNINDENTED_TYPES = frozenset([
    NodeType.BLANK_LINE,
    NodeType.BANNER_COMMENT,
    NodeType.SECTION_HEADER,
])


class ConditionalIndent(FormatRule):
    """
    Indents content nested inside ``ifeq``/``ifdef``/... blocks with spaces.

    Opening directives sit at the enclosing level, ``else`` and ``endif``
    line up with their opening directive, and everything in between is
    indented by ``conditional_indent`` spaces per nesting level. Existing
    leading spaces are replaced rather than added to, so formatting an
    already indented file leaves it unchanged.

    Recipe lines belong to their rule and are never re-indented.
    """

    @property
    def name(self) -> str:
        return "indent_conditionals"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        width = config.conditional_indent
        if not config.indent_conditionals or width <= 0:
            return nodes

        result = []
        level = 0
        for node in nodes:
            if isinstance(node, ConditionalNode):
                if node.directive in OPENING_DIRECTIVES:
                    result.append(indent_node(node, width, level))
                    level += 1
                elif node.directive == "else":
                    result.append(indent_node(node, width, level - 1))
                else:
                    # endif; unbalanced ones clamp at the top level
                    level = max(level - 1, 0)
                    result.append(indent_node(node, width, level))
            else:
                result.append(indent_node(node, width, level))

        return result


def indent_node(node: Node, width: int, level: int) -> Node:
    """
    Set a node's leading indentation to ``width * level`` spaces.

    Args:
        node: Node to indent
        width: Spaces per nesting level
        level: Nesting depth

    Returns:
        ``node`` itself when no change is needed, otherwise an indented clone
    """
    if level <= 0 or node.type in _UNINDENTED_TYPES:
        return node

    text = node.raw if node.raw else reconstruct(node)
    indented = " " * (width * level) + text.lstrip(" ")
    if indented == node.raw:
        return node
    return node.clone(raw=indented)
