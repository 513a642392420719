"""
Formatting rules and the rule manager.
"""

from makefmt.rules.base import FormatRule
from makefmt.rules.manager import RuleManager, create_default_manager, default_rules

__all__ = ["FormatRule", "RuleManager", "create_default_manager", "default_rules"]
