"""
Configuration management.

Formatter options come from an optional YAML file (``makefmt.yml`` and
friends) layered over built-in defaults. Process-level settings such as the
log level come from ``MAKEFMT_*`` environment variables.
"""

from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from makefmt.exceptions import ConfigError, ConfigNotFoundError

# Searched in this order; the first existing file wins.
CONFIG_FILE_NAMES = (
    "makefmt.yml",
    "makefmt.yaml",
    ".makefmt.yml",
    ".makefmt.yaml",
)


class FormatterConfig(BaseModel):
    """Options read by the formatting rules."""

    indent_style: str = Field("tab", description="Indentation style for recipes")
    tab_width: int = Field(4, description="Display width of a tab")
    max_blank_lines: int = Field(2, description="Maximum consecutive blank lines; negative disables")
    insert_final_newline: bool = Field(True, description="End the file with exactly one newline")
    trim_trailing_whitespace: bool = Field(True, description="Strip trailing spaces and tabs")
    align_assignments: bool = Field(False, description="Column-align operators in assignment groups")
    assignment_spacing: Literal["space", "no_space", "preserve"] = Field(
        "space", description="Whitespace around assignment operators"
    )
    sort_prerequisites: bool = Field(False, description="Reserved; not applied by any rule")
    align_backslash_continuations: bool = Field(True, description="Align trailing backslashes")
    backslash_column: int = Field(79, description="Backslash column; 0 selects automatic")
    space_after_comment: bool = Field(True, description="Require a space after '#'")
    indent_conditionals: bool = Field(True, description="Indent conditional block bodies")
    conditional_indent: int = Field(2, description="Spaces per conditional nesting level")
    recipe_prefix: str = Field("preserve", description="Reserved; not applied by any rule")


class Config(BaseModel):
    """Top-level configuration file model."""

    formatter: FormatterConfig = Field(default_factory=FormatterConfig)


class Settings(BaseSettings):
    """Process settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MAKEFMT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = "WARNING"
    config_path: Optional[str] = None


def default_config() -> Config:
    """Return a configuration with every option at its default."""
    return Config()


def discover(directory: Union[str, Path]) -> Optional[Path]:
    """
    Find a configuration file in ``directory``.

    Args:
        directory: Directory to search

    Returns:
        Path of the first file from ``CONFIG_FILE_NAMES`` that exists, or None
    """
    directory = Path(directory)
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from YAML, falling back to defaults.

    With no ``config_path`` (None or empty) the current working directory
    is searched with ``discover``. Partial files are allowed: keys that are
    not present keep their default values.

    Args:
        config_path: Explicit configuration file, or None to discover one

    Returns:
        Loaded configuration

    Raises:
        ConfigNotFoundError: If an explicit ``config_path`` does not exist
        ConfigError: If the file cannot be read, parsed or validated
    """
    if not config_path:
        config_path = discover(Path.cwd())
        if config_path is None:
            return default_config()

    path = Path(config_path)
    if not path.exists():
        raise ConfigNotFoundError(f"config file not found: {path}", path=str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"parsing config file {path}: {e}", path=str(path)) from e
    except OSError as e:
        raise ConfigError(f"reading config file {path}: {e}", path=str(path)) from e

    return _build_config(data, path)


def _build_config(data: Any, path: Path) -> Config:
    """Validate parsed YAML into a ``Config``."""
    if data is None:
        return default_config()

    if not isinstance(data, dict):
        raise ConfigError(f"parsing config file {path}: expected a mapping at top level", path=str(path))

    values: Dict[str, Any] = dict(data)
    # An empty "formatter:" section means "all defaults"
    if values.get("formatter") is None:
        values.pop("formatter", None)

    try:
        return Config.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"invalid config file {path}: {e}", path=str(path)) from e
