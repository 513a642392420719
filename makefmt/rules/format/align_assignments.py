"""Column alignment of assignment operators."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.models import AssignmentNode, Node, NodeType
from makefmt.rules.base import FormatRule
from makefmt.rules.format.assignment_spacing import normalize_assignment


class AlignAssignments(FormatRule):
    """
    Column-aligns assignment operators within groups of consecutive
    assignments.

    A group is a maximal run of assignment nodes; any other node ends it.
    Existing padding is stripped before measuring, so over-padded input is
    normalized down to the narrowest column the group needs.

    The 'preserve' spacing mode is not honored here: aligned groups are
    always written with a single space on each side of the operator.
    """

    @property
    def name(self) -> str:
        return "align_assignments"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        if not config.align_assignments:
            return nodes

        result = list(nodes)
        i = 0
        while i < len(result):
            if result[i].type != NodeType.ASSIGNMENT:
                i += 1
                continue

            start = i
            while i < len(result) and result[i].type == NodeType.ASSIGNMENT:
                i += 1

            # Single assignments need no padding
            if i - start > 1:
                result[start:i] = align_group(result[start:i], config.assignment_spacing)

        return result


def align_group(group: List[AssignmentNode], spacing_mode: str) -> List[AssignmentNode]:
    """
    Pad every variable name in ``group`` to the longest bare name.

    Args:
        group: Consecutive assignment nodes (two or more)
        spacing_mode: Configured assignment spacing mode

    Returns:
        Aligned clones in the same order
    """
    width = max(len(node.var_name.rstrip(" ")) for node in group)

    aligned = []
    for node in group:
        padded = node.var_name.rstrip(" ").ljust(width)
        aligned.append(normalize_assignment(node, spacing_mode, var_name=padded))
    return aligned
