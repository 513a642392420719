"""Alignment of trailing backslashes in continuation blocks."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.models import Node
from makefmt.rules.base import FormatRule


class BackslashAlign(FormatRule):
    """
    Aligns trailing backslashes of continuation lines to one column.

    The column is ``backslash_column`` (1-indexed), or, when that is 0, one
    past the widest continuation line of the node plus a separating space.
    A line too long for the column keeps a single space before its
    backslash.
    """

    @property
    def name(self) -> str:
        return "align_backslash_continuations"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        if not config.align_backslash_continuations:
            return nodes

        return [
            align_backslashes(node, config.backslash_column) if has_continuation(node.raw) else node
            for node in nodes
        ]


def has_continuation(raw: str) -> bool:
    """Return True if any line of ``raw`` ends in a backslash."""
    return any(_continuation_content(line) is not None for line in raw.split("\n"))


def align_backslashes(node: Node, backslash_column: int) -> Node:
    """
    Align every trailing backslash in the node's raw text.

    Args:
        node: Node whose raw text holds continuation lines
        backslash_column: Target column, or 0 for automatic

    Returns:
        ``node`` itself if already aligned, otherwise an aligned clone
    """
    lines = node.raw.split("\n")
    contents = [_continuation_content(line) for line in lines]

    target = backslash_column
    if target == 0:
        target = max(len(content) for content in contents if content is not None) + 2

    aligned = []
    for line, content in zip(lines, contents):
        if content is None:
            aligned.append(line)
            continue
        padding = max(target - 1 - len(content), 1)
        aligned.append(content + " " * padding + "\\")

    raw = "\n".join(aligned)
    if raw == node.raw:
        return node
    return node.clone(raw=raw)


def _continuation_content(line: str):
    """Return the text before a trailing backslash, or None if there is none."""
    stripped = line.rstrip(" \t")
    if not stripped.endswith("\\"):
        return None
    return stripped[:-1].rstrip(" \t")
