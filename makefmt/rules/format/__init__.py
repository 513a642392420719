"""
Built-in formatting rules.
"""

from makefmt.rules.format.align_assignments import AlignAssignments
from makefmt.rules.format.assignment_spacing import AssignmentSpacing
from makefmt.rules.format.backslash_align import BackslashAlign
from makefmt.rules.format.banner_preserve import BannerPreserve
from makefmt.rules.format.blank_lines import BlankLines
from makefmt.rules.format.comment_spacing import CommentSpacing
from makefmt.rules.format.conditional_indent import ConditionalIndent
from makefmt.rules.format.final_newline import FinalNewline
from makefmt.rules.format.trailing_whitespace import TrailingWhitespace

__all__ = [
    "AlignAssignments",
    "AssignmentSpacing",
    "BackslashAlign",
    "BannerPreserve",
    "BlankLines",
    "CommentSpacing",
    "ConditionalIndent",
    "FinalNewline",
    "TrailingWhitespace",
]
