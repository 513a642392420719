"""Blank line collapsing."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.models import Node, NodeType
from makefmt.rules.base import FormatRule


class BlankLines(FormatRule):
    """Collapses runs of blank lines down to ``max_blank_lines``."""

    @property
    def name(self) -> str:
        return "max_blank_lines"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        limit = config.max_blank_lines
        if limit < 0:
            return nodes

        result: List[Node] = []
        run = 0
        for node in nodes:
            if node.type == NodeType.BLANK_LINE:
                run += 1
                if run > limit:
                    continue
            else:
                run = 0
            result.append(node)
        return result
