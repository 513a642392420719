"""Space after the comment marker."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.models import CommentNode, Node
from makefmt.rules.base import FormatRule


class CommentSpacing(FormatRule):
    """
    Inserts a space after ``#`` in plain comments.

    Only single-``#`` comments are touched. ``##`` help comments, section
    headers, banners, shebang lines and bare ``#`` lines are left alone.
    """

    @property
    def name(self) -> str:
        return "space_after_comment"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        if not config.space_after_comment:
            return nodes
        return [space_comment(node) if isinstance(node, CommentNode) else node for node in nodes]


def space_comment(node: CommentNode) -> CommentNode:
    if node.prefix != "#":
        return node

    stripped = node.raw.strip()
    if not stripped.startswith("#") or stripped == "#" or stripped.startswith("#!"):
        return node
    if stripped[1] in " \t":
        return node

    # Lines joined by a trailing backslash stay part of the comment
    body = node.raw.lstrip()[1:]
    return node.clone(raw="# " + body, text=stripped[1:].strip())
