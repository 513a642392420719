"""
Makefile AST node models.

Each node kind is its own pydantic model carrying only the attributes that
kind needs. The shared ``line`` and ``raw`` fields live on the ``Node`` base:
a non-empty ``raw`` is printed verbatim by the writer, an empty one tells the
writer to rebuild the text from the kind-specific fields.

Nodes are frozen. Rules never modify a node in place; they call ``clone``
and put the copy in their output.
"""

from enum import Enum
from typing import Any, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class NodeType(str, Enum):
    """Node kinds produced by the parser."""

    COMMENT = "comment"
    SECTION_HEADER = "section_header"
    BANNER_COMMENT = "banner_comment"
    BLANK_LINE = "blank_line"
    ASSIGNMENT = "assignment"
    RULE = "rule"
    RECIPE = "recipe"
    CONDITIONAL = "conditional"
    INCLUDE = "include"
    DIRECTIVE = "directive"
    RAW = "raw"


class Node(BaseModel):
    """Base class for every parsed Makefile element."""

    model_config = ConfigDict(frozen=True)

    type: NodeType
    line: int = Field(0, description="1-indexed source line of the first physical line")
    raw: str = Field("", description="Original text, possibly spanning several lines")

    def clone(self, **changes: Any) -> "Node":
        """
        Return a deep copy of this node with ``changes`` applied.

        List-valued fields and children are copied, so the clone never
        shares mutable storage with the original.

        Args:
            **changes: Field values to override on the copy

        Returns:
            New node of the same kind
        """
        return self.model_copy(update=changes, deep=True)


class CommentNode(Node):
    """A ``#`` or ``##`` comment line."""

    type: Literal[NodeType.COMMENT] = NodeType.COMMENT
    text: str = ""
    prefix: str = "#"
    inline: bool = Field(False, description="Reserved for trailing comments; the parser never sets it")


class SectionHeaderNode(Node):
    """A ``##@ Section`` header used by self-documenting help targets."""

    type: Literal[NodeType.SECTION_HEADER] = NodeType.SECTION_HEADER
    text: str = ""
    prefix: str = "##@"


class BannerCommentNode(Node):
    """A decorative separator such as ``#####`` or ``# =====``."""

    type: Literal[NodeType.BANNER_COMMENT] = NodeType.BANNER_COMMENT
    text: str = ""


class BlankLineNode(Node):
    type: Literal[NodeType.BLANK_LINE] = NodeType.BLANK_LINE


class AssignmentNode(Node):
    """A variable assignment such as ``VAR := value``."""

    type: Literal[NodeType.ASSIGNMENT] = NodeType.ASSIGNMENT
    var_name: str = ""
    assign_op: str = "="
    var_value: str = ""


class RecipeNode(Node):
    """A tab-led command line owned by a rule."""

    type: Literal[NodeType.RECIPE] = NodeType.RECIPE
    text: str = ""


class RuleNode(Node):
    """A target definition; owns its recipe lines as children."""

    type: Literal[NodeType.RULE] = NodeType.RULE
    targets: List[str] = Field(default_factory=list)
    prerequisites: List[str] = Field(default_factory=list)
    order_only: List[str] = Field(default_factory=list, description="Prerequisites after |")
    inline_help: str = Field("", description="Trailing '## text' help comment")
    children: List[RecipeNode] = Field(default_factory=list)


class ConditionalNode(Node):
    """An ``ifeq``/``ifneq``/``ifdef``/``ifndef``/``else``/``endif`` line."""

    type: Literal[NodeType.CONDITIONAL] = NodeType.CONDITIONAL
    directive: str = ""
    condition: str = ""


class IncludeNode(Node):
    """An ``include``/``-include``/``sinclude`` line."""

    type: Literal[NodeType.INCLUDE] = NodeType.INCLUDE
    include_type: str = "include"
    paths: List[str] = Field(default_factory=list)


class DirectiveNode(Node):
    """A special directive such as ``.PHONY`` or ``export``."""

    type: Literal[NodeType.DIRECTIVE] = NodeType.DIRECTIVE
    text: str = ""


class RawNode(Node):
    """Anything the parser could not classify, including define blocks."""

    type: Literal[NodeType.RAW] = NodeType.RAW
    text: str = ""


AnyNode = Union[
    CommentNode,
    SectionHeaderNode,
    BannerCommentNode,
    BlankLineNode,
    AssignmentNode,
    RuleNode,
    RecipeNode,
    ConditionalNode,
    IncludeNode,
    DirectiveNode,
    RawNode,
]

# Fields holding free text; trailing whitespace is trimmed from these.
TEXT_FIELDS = ("text", "var_value", "inline_help", "condition")
