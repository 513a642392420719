"""Data models for the Makefile formatter."""

from .node import (
    AnyNode,
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
    TEXT_FIELDS,
)

__all__ = [
    # Base
    "Node",
    "NodeType",
    "AnyNode",
    "TEXT_FIELDS",
    # Comment kinds
    "CommentNode",
    "SectionHeaderNode",
    "BannerCommentNode",
    # Layout
    "BlankLineNode",
    # Statements
    "AssignmentNode",
    "RuleNode",
    "RecipeNode",
    "ConditionalNode",
    "IncludeNode",
    "DirectiveNode",
    # Fallback
    "RawNode",
]
