"""
Base interface for formatting rules.

This module defines the abstract base class that every formatting rule must
implement. Rules are applied in a caller-supplied order by the pipeline
engine, each receiving the previous rule's output.
"""

from abc import ABC, abstractmethod
from typing import List

from makefmt.config import FormatterConfig
from makefmt.models import Node


class FormatRule(ABC):
    """Base interface for a single formatting policy."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the configuration key for this rule (e.g., 'max_blank_lines')."""
        pass

    @abstractmethod
    def format(self, nodes: List[Node], config: FormatterConfig) -> List[Node]:
        """
        Apply the rule to a node sequence.

        Implementations must not modify the input nodes. A node that needs
        to change is cloned; every other node is passed through as the same
        object so later rules can tell what was touched. A disabled rule
        returns ``nodes`` itself.

        Args:
            nodes: Nodes in document order
            config: Formatter options

        Returns:
            Resulting nodes in document order
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
