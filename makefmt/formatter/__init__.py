"""
Formatting engine and writer.
"""

from makefmt.formatter.engine import run_pipeline
from makefmt.formatter.writer import reconstruct, render_node, write

__all__ = ["run_pipeline", "write", "render_node", "reconstruct"]
