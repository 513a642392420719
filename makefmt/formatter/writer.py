"""
Serialize Makefile nodes back into text.

Nodes with a non-empty ``raw`` are emitted verbatim, which keeps unmodified
input byte-identical. A rule that wants the text rebuilt clears ``raw`` and
the writer reconstructs it from the node's fields.
"""

from typing import List

from makefmt.models import (
    AssignmentNode,
    BannerCommentNode,
    BlankLineNode,
    CommentNode,
    ConditionalNode,
    DirectiveNode,
    IncludeNode,
    Node,
    RawNode,
    RecipeNode,
    RuleNode,
    SectionHeaderNode,
)


def write(nodes: List[Node]) -> str:
    """
    Serialize nodes into Makefile text.

    Every top-level node is followed by exactly one newline.

    Args:
        nodes: Nodes in document order

    Returns:
        Makefile source text
    """
    return "".join(render_node(node) + "\n" for node in nodes)


def render_node(node: Node) -> str:
    """Render one node and its recipe children, without a final newline."""
    text = node.raw if node.raw else reconstruct(node)
    for child in getattr(node, "children", ()):
        text += "\n" + render_node(child)
    return text


def reconstruct(node: Node) -> str:
    """
    Rebuild a node's text from its fields.

    Args:
        node: Node whose ``raw`` has been cleared

    Returns:
        Canonical single-line text for the node
    """
    if isinstance(node, BlankLineNode):
        return ""

    if isinstance(node, (CommentNode, SectionHeaderNode)):
        return _join(node.prefix, node.text)

    if isinstance(node, AssignmentNode):
        return _join(f"{node.var_name} {node.assign_op}", node.var_value)

    if isinstance(node, RuleNode):
        text = " ".join(node.targets) + ":"
        if node.prerequisites:
            text += " " + " ".join(node.prerequisites)
        if node.order_only:
            text += " | " + " ".join(node.order_only)
        if node.inline_help:
            text += " ## " + node.inline_help
        return text

    if isinstance(node, RecipeNode):
        return "\t" + node.text

    if isinstance(node, ConditionalNode):
        return _join(node.directive, node.condition)

    if isinstance(node, IncludeNode):
        return _join(node.include_type, " ".join(node.paths))

    if isinstance(node, (BannerCommentNode, DirectiveNode, RawNode)):
        return node.text

    return ""


def _join(head: str, tail: str) -> str:
    return f"{head} {tail}" if tail else head
