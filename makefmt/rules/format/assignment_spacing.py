"""Whitespace normalization around assignment operators."""

from typing import List, Optional

from makefmt.config import FormatterConfig
from makefmt.models import AssignmentNode, Node
from makefmt.parser import parse_assignment
from makefmt.rules.base import FormatRule


class AssignmentSpacing(FormatRule):
    """
    Normalizes spacing around assignment operators.

    Modes:
    - space: ``VAR := value`` (the writer's reconstruction)
    - no_space: ``VAR:=value``
    - preserve: leave assignments untouched
    """

    @property
    def name(self) -> str:
        return "assignment_spacing"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        mode = config.assignment_spacing
        if mode not in ("space", "no_space"):
            return nodes

        return [
            normalize_assignment(node, mode) if isinstance(node, AssignmentNode) else node
            for node in nodes
        ]


def normalize_assignment(node: AssignmentNode, mode: str, var_name: Optional[str] = None) -> AssignmentNode:
    """
    Rewrite one assignment in the given spacing mode.

    The original text is kept when a rebuilt line would end in a backslash,
    since that would continue onto the following line. A compact form that
    reads back as a different assignment (``A! = b`` as ``A!=b``) falls back
    to the spaced form.

    Args:
        node: Assignment to normalize
        mode: 'space' or 'no_space'; any other mode rebuilds with spaces
        var_name: Name to write instead of the node's own, e.g. padded

    Returns:
        Clone with ``raw`` cleared (spaced) or set to the compact form,
        or ``node`` itself when it has to stay as written
    """
    if var_name is None:
        var_name = node.var_name

    if node.var_value.endswith("\\"):
        return node

    if mode == "no_space":
        compact = compact_assignment(var_name, node)
        if _reads_back_as(compact, node):
            return node.clone(var_name=var_name, raw=compact)

    # Clearing raw makes the writer emit "NAME op value"
    return node.clone(var_name=var_name, raw="")


def compact_assignment(name: str, node: AssignmentNode) -> str:
    """Render ``name`` and the node's operator and value with no spaces."""
    return name + node.assign_op + node.var_value


def _reads_back_as(text: str, node: AssignmentNode) -> bool:
    parsed = parse_assignment(text)
    if parsed is None:
        return False
    return (parsed.var_name, parsed.assign_op, parsed.var_value) == \
        (node.var_name.strip(), node.assign_op, node.var_value)
