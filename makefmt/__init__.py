"""
makefmt - a formatter for Makefiles.

Parses Makefile text into typed nodes, rewrites them through an ordered
pipeline of formatting rules, and writes them back out. A unified diff of
the result can be produced instead of rewriting.
"""

__version__ = "0.1.0"

from makefmt.diff import unified_diff
from makefmt.formatter import run_pipeline, write
from makefmt.parser import parse
from makefmt.rules import default_rules

__all__ = ["__version__", "parse", "write", "run_pipeline", "unified_diff", "default_rules"]
