"""
Line-oriented Makefile parser.

The parser makes a single forward pass over the source, joining backslash
continuations before classifying each logical line. It never raises: any
line it cannot classify becomes a ``RawNode`` holding the original text.
"""

import logging
import re
from typing import List, Optional, Tuple

from makefmt.models import (
    AssignmentNode,
    BannerCommentNode,
    BlankLineNode,
    CommentNode,
    ConditionalNode,
    DirectiveNode,
    IncludeNode,
    Node,
    NodeType,
    RawNode,
    RecipeNode,
    RuleNode,
    SectionHeaderNode,
)

logger = logging.getLogger(__name__)

# Longest first, so "::=" is tried before ":=".
ASSIGN_OPS = ("::=", "!=", "?=", "+=", ":=", "=")

CONDITIONAL_KEYWORDS = ("ifeq", "ifneq", "ifdef", "ifndef", "else", "endif")

INCLUDE_KEYWORDS = ("include", "-include", "sinclude")

DIRECTIVE_KEYWORDS = frozenset([
    ".PHONY",
    ".DEFAULT_GOAL",
    ".SUFFIXES",
    ".DELETE_ON_ERROR",
    ".SECONDARY",
    ".PRECIOUS",
    ".INTERMEDIATE",
    ".NOTPARALLEL",
    ".ONESHELL",
    ".POSIX",
    ".SILENT",
    ".IGNORE",
    ".EXPORT_ALL_VARIABLES",
    "export",
    "unexport",
    "vpath",
    "override",
])

# Keywords that may not name a variable: the rebuilt "NAME = value" line
# would be read back as the keyword on the next pass.
RESERVED_NAMES = frozenset(CONDITIONAL_KEYWORDS + INCLUDE_KEYWORDS + ("define", "endef")) | DIRECTIVE_KEYWORDS

# Decorative separators: "#####", "# =====", "# -----", "## Title ##".
BANNER_RE = re.compile(r"#+|#\s*[=\-#]{3,}\s*|#{2,}\s+.*\s+#{2,}")

# Nodes that may sit between a rule and its next recipe line.
_RECIPE_GAP_TYPES = frozenset([
    NodeType.RECIPE,
    NodeType.COMMENT,
    NodeType.BANNER_COMMENT,
    NodeType.SECTION_HEADER,
    NodeType.BLANK_LINE,
])


class MakefileParser:
    """Single-use parser state for one source text."""

    def __init__(self):
        """Initialize parser state."""
        self._in_rule = False
        self._in_define = False
        self._nodes: List[Node] = []
        self._line_num = 0

    def parse(self, text: str) -> List[Node]:
        """
        Parse Makefile source into an ordered list of nodes.

        Args:
            text: Makefile source

        Returns:
            Top-level nodes in document order; recipe lines are attached
            to their owning ``RuleNode``
        """
        lines = split_lines(text)

        while self._line_num < len(lines):
            if self._in_define:
                self._consume_define(lines)
                self._line_num += 1
                continue

            joined, count = join_continuations(lines, self._line_num)
            raw = "\n".join(lines[self._line_num:self._line_num + count])

            node = self._classify(joined, raw, self._line_num + 1)
            self._add_node(node)

            self._line_num += count

        logger.debug(f"Parsed {len(lines)} lines into {len(self._nodes)} nodes")
        return self._nodes

    def _add_node(self, node: Node) -> None:
        """Append a node, attaching recipe lines to their rule."""
        if node.type == NodeType.RULE:
            self._in_rule = True
            self._nodes.append(node)

        elif node.type == NodeType.RECIPE:
            parent = self._find_rule_parent()
            if parent is not None:
                parent.children.append(node)
                return
            # No owning rule: keep the text as unparsed content
            self._nodes.append(RawNode(line=node.line, raw=node.raw, text=node.text))

        elif node.type == NodeType.BLANK_LINE:
            # A blank line ends the recipe block
            self._in_rule = False
            self._nodes.append(node)

        elif node.type in (NodeType.COMMENT, NodeType.SECTION_HEADER, NodeType.BANNER_COMMENT):
            self._nodes.append(node)

        else:
            self._in_rule = False
            self._nodes.append(node)

    def _find_rule_parent(self) -> Optional[RuleNode]:
        """Return the nearest preceding rule, skipping comments and blanks."""
        for node in reversed(self._nodes):
            if isinstance(node, RuleNode):
                return node
            if node.type not in _RECIPE_GAP_TYPES:
                return None
        return None

    def _consume_define(self, lines: List[str]) -> None:
        """Capture lines up to and including ``endef`` into the define node."""
        define_node = self._nodes[-1]
        raw_parts = [define_node.raw]

        while self._line_num < len(lines):
            line = lines[self._line_num]
            raw_parts.append(line)
            if line.strip() == "endef":
                break
            self._line_num += 1

        # Unterminated blocks keep whatever was collected
        self._in_define = False
        self._nodes[-1] = define_node.clone(raw="\n".join(raw_parts))

    def _classify(self, joined: str, raw: str, line: int) -> Node:
        """Classify one logical (continuation-joined) line."""
        trimmed = joined.strip()

        if not trimmed:
            return BlankLineNode(line=line, raw=raw)

        if trimmed.startswith("define ") or trimmed == "define":
            self._in_define = True
            return RawNode(line=line, raw=raw)

        if trimmed.startswith("##@"):
            return SectionHeaderNode(line=line, raw=raw, text=trimmed[3:].strip())

        if is_banner_comment(trimmed):
            return BannerCommentNode(line=line, raw=raw, text=trimmed)

        if trimmed.startswith("#"):
            return _parse_comment(trimmed, raw, line)

        if joined.startswith("\t") and self._in_rule:
            return RecipeNode(line=line, raw=raw, text=joined[1:])

        # Directives go before assignments and rules so that
        # ".DEFAULT_GOAL := x" and ".PHONY: x" stay directives.
        for try_parse in (_try_conditional, _try_include, _try_directive, _try_assignment, _try_rule):
            node = try_parse(trimmed, raw, line)
            if node is not None:
                return node

        return RawNode(line=line, raw=raw)


def parse(text: str) -> List[Node]:
    """
    Parse Makefile source text into nodes.

    Never raises; unrecognized content is kept verbatim in ``RawNode``.

    Args:
        text: Makefile source

    Returns:
        Ordered list of top-level nodes
    """
    return MakefileParser().parse(text)


def parse_assignment(text: str) -> Optional[AssignmentNode]:
    """Classify a single line as an assignment, or return None."""
    return _try_assignment(text.strip(), text, 0)


def is_banner_comment(trimmed: str) -> bool:
    """Return True for decorative comment lines (a lone ``#`` is not one)."""
    if not trimmed.startswith("#") or trimmed == "#":
        return False
    return BANNER_RE.fullmatch(trimmed) is not None


def _parse_comment(trimmed: str, raw: str, line: int) -> CommentNode:
    prefix = "##" if trimmed.startswith("##") else "#"
    return CommentNode(
        line=line,
        raw=raw,
        text=trimmed[len(prefix):].strip(),
        prefix=prefix,
    )


def _match_keyword(trimmed: str, keywords) -> Optional[Tuple[str, str]]:
    """Return (keyword, remainder) if the line starts with one of ``keywords``."""
    for keyword in keywords:
        if trimmed == keyword or trimmed.startswith(keyword + " ") or trimmed.startswith(keyword + "\t"):
            return keyword, trimmed[len(keyword):].strip()
    return None


def _try_conditional(trimmed: str, raw: str, line: int) -> Optional[ConditionalNode]:
    match = _match_keyword(trimmed, CONDITIONAL_KEYWORDS)
    if match is None:
        return None
    directive, condition = match
    return ConditionalNode(line=line, raw=raw, directive=directive, condition=condition)


def _try_include(trimmed: str, raw: str, line: int) -> Optional[IncludeNode]:
    match = _match_keyword(trimmed, INCLUDE_KEYWORDS)
    if match is None:
        return None
    include_type, paths = match
    return IncludeNode(line=line, raw=raw, include_type=include_type, paths=paths.split())


def _try_directive(trimmed: str, raw: str, line: int) -> Optional[DirectiveNode]:
    first_word = re.split(r"[ \t:]", trimmed, maxsplit=1)[0]
    if first_word not in DIRECTIVE_KEYWORDS:
        return None
    return DirectiveNode(line=line, raw=raw, text=trimmed)


def _try_assignment(trimmed: str, raw: str, line: int) -> Optional[AssignmentNode]:
    for op in ASSIGN_OPS:
        idx = trimmed.find(op)
        if idx < 0:
            continue

        # A bare "=" must not be the tail of ":=", "?=", "+=" or "!="
        if op == "=" and idx > 0 and trimmed[idx - 1] in ":?+!":
            continue

        # A bare ":=" must not be the tail of "::="
        if op == ":=" and idx > 0 and trimmed[idx - 1] == ":":
            continue

        var_name = trimmed[:idx].strip()
        if not var_name:
            continue

        if " " in var_name or "\t" in var_name:
            parts = var_name.split()
            if len(parts) == 2 and parts[0] == "override":
                var_name = "override " + parts[1]
            else:
                continue

        # "target: prereq" shapes are rules, not assignments
        if ":" in var_name:
            continue

        if var_name in RESERVED_NAMES:
            continue

        return AssignmentNode(
            line=line,
            raw=raw,
            var_name=var_name,
            assign_op=op,
            var_value=trimmed[idx + len(op):].strip(),
        )
    return None


def _find_rule_colon(trimmed: str) -> int:
    """Return the index of the target/prerequisite colon, or -1."""
    if any(op in trimmed for op in ASSIGN_OPS):
        return -1
    return trimmed.find(":")


def _try_rule(trimmed: str, raw: str, line: int) -> Optional[RuleNode]:
    colon = _find_rule_colon(trimmed)
    if colon < 0:
        return None

    targets = trimmed[:colon].split()
    if not targets:
        return None

    rest = trimmed[colon + 1:].strip()

    inline_help = ""
    help_idx = rest.find("##")
    if help_idx >= 0:
        inline_help = rest[help_idx + 2:].strip()
        rest = rest[:help_idx].strip()

    prerequisites, _, order_only = rest.partition("|")

    return RuleNode(
        line=line,
        raw=raw,
        targets=targets,
        prerequisites=prerequisites.split(),
        order_only=order_only.split(),
        inline_help=inline_help,
    )


def split_lines(text: str) -> List[str]:
    """Split on newlines, dropping the empty element after a final newline."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def has_continuation(line: str) -> bool:
    """Return True if the line ends in a backslash, ignoring trailing blanks."""
    return line.rstrip(" \t").endswith("\\")


def join_continuations(lines: List[str], start: int) -> Tuple[str, int]:
    """
    Join a run of backslash-continued lines starting at ``start``.

    Args:
        lines: All physical lines
        start: Index of the first line of the logical line

    Returns:
        Tuple of (joined logical line, number of physical lines consumed)
    """
    if not has_continuation(lines[start]):
        return lines[start], 1

    parts = []
    i = start
    while i < len(lines) and has_continuation(lines[i]):
        parts.append(lines[i].rstrip(" \t")[:-1])
        i += 1

    # The final, non-continued line
    if i < len(lines):
        parts.append(lines[i])
        i += 1

    return " ".join(parts), i - start
