"""Exception types raised by the formatter's I/O layers."""

from typing import Optional


class MakefmtError(Exception):
    """Base class for makefmt errors."""


class ConfigError(MakefmtError):
    """A configuration file could not be read, parsed or validated."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ConfigNotFoundError(ConfigError):
    """An explicitly requested configuration file does not exist."""
