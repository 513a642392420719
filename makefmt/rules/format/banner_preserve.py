"""Banner comment preservation."""

from typing import List

from makefmt.config import FormatterConfig
from makefmt.formatter.writer import reconstruct
from makefmt.models import Node, NodeType
from makefmt.rules.base import FormatRule

_GUARDED_TYPES = frozenset([NodeType.BANNER_COMMENT, NodeType.SECTION_HEADER])


class BannerPreserve(FormatRule):
    """
    Keeps decorative banners and section headers exactly as written.

    The other rules leave these nodes alone, so normally every one of them
    is passed through as the parser's own object. A banner or header whose
    ``raw`` has been cleared gets it back from its fields, so the writer
    never re-derives decorative text.

    Always active; it must run last.
    """

    @property
    def name(self) -> str:
        return "preserve_banner_comments"

    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        return [restore_raw(node) for node in nodes]


def restore_raw(node: Node) -> Node:
    """Return ``node``, or a copy with ``raw`` rebuilt if a guarded node lost it."""
    if node.type not in _GUARDED_TYPES or node.raw:
        return node
    return node.clone(raw=reconstruct(node))
