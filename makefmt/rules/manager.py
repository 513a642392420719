"""
Rule Manager for the formatting pipeline.

This module holds the ordered set of rules a run applies, and builds the
default pipeline.
"""

import logging
from typing import Dict, List, Optional

from makefmt.rules.base import FormatRule
from makefmt.rules.format import (
    AlignAssignments,
    AssignmentSpacing,
    BackslashAlign,
    BannerPreserve,
    BlankLines,
    CommentSpacing,
    ConditionalIndent,
    FinalNewline,
    TrailingWhitespace,
)

logger = logging.getLogger(__name__)


class RuleManager:
    """Manages rule registration and execution order."""

    def __init__(self, rules: Optional[List[FormatRule]] = None):
        """
        Initialize the rule manager.

        Args:
            rules: Initial rules, in execution order
        """
        self._rules: List[FormatRule] = []
        for rule in rules or []:
            self.register_rule(rule)

    def register_rule(self, rule: FormatRule) -> None:
        """
        Register a rule at the end of the pipeline.

        A rule whose name is already registered replaces the existing one
        in its original position.

        Args:
            rule: FormatRule instance to register
        """
        for i, existing in enumerate(self._rules):
            if existing.name == rule.name:
                logger.warning(f"Rule '{rule.name}' already registered, overwriting")
                self._rules[i] = rule
                return

        self._rules.append(rule)
        logger.debug(f"Registered rule '{rule.name}'")

    def unregister_rule(self, name: str) -> bool:
        """
        Unregister a rule.

        Args:
            name: Name of the rule to remove

        Returns:
            True if the rule was removed, False if not found
        """
        for i, existing in enumerate(self._rules):
            if existing.name == name:
                del self._rules[i]
                logger.debug(f"Unregistered rule '{name}'")
                return True
        return False

    def get_rule(self, name: str) -> Optional[FormatRule]:
        """
        Get a rule by name.

        Args:
            name: Rule name

        Returns:
            FormatRule instance if found, None otherwise
        """
        for rule in self._rules:
            if rule.name == name:
                return rule
        return None

    def list_rule_names(self) -> List[str]:
        """List registered rule names in execution order."""
        return [rule.name for rule in self._rules]

    @property
    def rules(self) -> List[FormatRule]:
        """Registered rules in execution order (a copy)."""
        return list(self._rules)

    def get_statistics(self) -> Dict[str, object]:
        """
        Get manager statistics.

        Returns:
            Dictionary with the rule count and rule names in execution order
        """
        return {
            "total_rules": len(self._rules),
            "rules": self.list_rule_names(),
        }


def default_rules() -> List[FormatRule]:
    """
    Build the default pipeline.

    Conditional indentation runs before backslash alignment so that
    alignment is measured on the final, indented text.

    Returns:
        Fresh rule instances in execution order
    """
    return [
        TrailingWhitespace(),
        FinalNewline(),
        BlankLines(),
        AssignmentSpacing(),
        AlignAssignments(),
        CommentSpacing(),
        ConditionalIndent(),
        BackslashAlign(),
        BannerPreserve(),
    ]


def create_default_manager() -> RuleManager:
    """Create a manager holding the default pipeline."""
    return RuleManager(default_rules())
