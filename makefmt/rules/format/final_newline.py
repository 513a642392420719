"""Final newline normalization."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.models import Node, NodeType
from makefmt.rules.base import FormatRule


class FinalNewline(FormatRule):
    """
    Ensures the file ends with exactly one newline.

    Trailing blank lines are dropped from the node list; the writer always
    terminates the last node with a newline, which gives exactly one.
    """

    @property
    def name(self) -> str:
        return "insert_final_newline"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        if not config.insert_final_newline:
            return nodes

        end = len(nodes)
        while end > 0 and nodes[end - 1].type == NodeType.BLANK_LINE:
            end -= 1
        return list(nodes[:end])
