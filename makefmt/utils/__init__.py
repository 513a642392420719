"""
Utility modules for makefmt.
"""

from makefmt.utils.logging import (
    ContextLoggerAdapter,
    JSONFormatter,
    get_logger,
    log_file_result,
    log_rule_applied,
    setup_logging,
)

__all__ = [
    "ContextLoggerAdapter",
    "JSONFormatter",
    "get_logger",
    "log_file_result",
    "log_rule_applied",
    "setup_logging",
]
