"""
makefmt CLI - command-line interface for the Makefile formatter
"""

import sys
from typing import Optional, Tuple

import click

from makefmt import __version__
from makefmt.config import Settings
from makefmt.runner import RunOptions, run
from makefmt.utils.logging import setup_logging


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="makefmt", message="%(prog)s %(version)s")
@click.argument("files", nargs=-1)
@click.option("--check", is_flag=True, help="Exit 1 if any file is not formatted")
@click.option("--diff", "show_diff", is_flag=True, help="Print unified diff of changes")
@click.option("-w", "--write", "write_files", is_flag=True, help="Write result to file (default for files)")
@click.option("--config", "config_path", metavar="PATH", help="Path to config file")
@click.option("-q", "--quiet", is_flag=True, help="Suppress informational output")
@click.option("-v", "--verbose", is_flag=True, help="Print files as they are processed")
def cli(
    files: Tuple[str, ...],
    check: bool,
    show_diff: bool,
    write_files: bool,
    config_path: Optional[str],
    quiet: bool,
    verbose: bool,
):
    """Format Makefile(s). With no FILES, reads from stdin."""
    settings = Settings()
    setup_logging("DEBUG" if verbose else settings.log_level)

    options = RunOptions(
        files=list(files),
        check=check,
        diff=show_diff,
        write=write_files,
        config_path=config_path or settings.config_path,
        quiet=quiet,
        verbose=verbose,
    )
    sys.exit(run(options))


def main() -> None:
    cli(prog_name="makefmt")
