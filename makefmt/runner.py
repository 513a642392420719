"""
Format runner.

Orchestrates parse -> format -> output for each input, in one of the
output modes (check, diff, write in place, or stdout), and folds the
per-input results into a process exit code.
"""

import sys
from typing import List, Optional, Sequence, TextIO

from pydantic import BaseModel, Field

from makefmt.config import FormatterConfig, load_config
from makefmt.diff import unified_diff
from makefmt.exceptions import ConfigError
from makefmt.formatter import run_pipeline, write
from makefmt.parser import parse
from makefmt.rules import FormatRule, RuleManager, create_default_manager
from makefmt.utils.logging import get_logger, log_file_result

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FORMAT_DIFF = 1
EXIT_ERROR = 2

STDIN_NAME = "<stdin>"

# Undecodable bytes and CRLF line endings survive a read/write round trip.
_FILE_ENCODING = {"encoding": "utf-8", "errors": "surrogateescape", "newline": ""}


class RunOptions(BaseModel):
    """Options for one formatter run."""

    files: List[str] = Field(default_factory=list, description="Files to format; empty reads stdin")
    check: bool = Field(False, description="Report unformatted inputs without writing")
    diff: bool = Field(False, description="Print a unified diff of the changes")
    write: bool = Field(False, description="Write results back to files (the default for files)")
    config_path: Optional[str] = Field(None, description="Explicit configuration file")
    quiet: bool = Field(False, description="Suppress informational output")
    verbose: bool = Field(False, description="Print files as they are processed")


def format_source(text: str, config: FormatterConfig, rules: Sequence[FormatRule]) -> str:
    """
    Format Makefile source text.

    Args:
        text: Makefile source
        config: Formatter options
        rules: Rules in execution order

    Returns:
        Formatted source text
    """
    return write(run_pipeline(parse(text), config, rules))


class FormatRunner:
    """Runs the formatter over files or stdin and reports the outcome."""

    def __init__(
        self,
        options: RunOptions,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        manager: Optional[RuleManager] = None,
    ):
        """
        Initialize the runner.

        Args:
            options: Run options
            stdin: Input stream for stdin mode (default: sys.stdin)
            stdout: Stream for formatted text and diffs (default: sys.stdout)
            stderr: Stream for file names and errors (default: sys.stderr)
            manager: Rule manager supplying the pipeline (default: the built-in rules)
        """
        self.options = options
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr
        self.manager = manager if manager is not None else create_default_manager()
        self.rules = self.manager.rules

    def run(self) -> int:
        """
        Format every input.

        Returns:
            Highest exit code across inputs: EXIT_OK, EXIT_FORMAT_DIFF or EXIT_ERROR
        """
        try:
            config = load_config(self.options.config_path).formatter
        except ConfigError as e:
            logger.error(f"Failed to load configuration: {e}", extra={"path": e.path})
            self._err(f"makefmt: {e}")
            return EXIT_ERROR

        stats = self.manager.get_statistics()
        logger.debug(f"Running {stats['total_rules']} rules", extra={"rules": stats["rules"]})

        if not self.options.files:
            return self._run_stdin(config)

        exit_code = EXIT_OK
        for path in self.options.files:
            exit_code = max(exit_code, self._run_file(path, config))
        return exit_code

    def _run_stdin(self, config: FormatterConfig) -> int:
        try:
            source = self.stdin.read()
        except OSError as e:
            logger.error(f"Failed to read stdin: {e}", exc_info=True)
            self._err(f"makefmt: reading stdin: {e}")
            return EXIT_ERROR

        output = format_source(source, config, self.rules)

        if self.options.check:
            status = EXIT_OK if output == source else EXIT_FORMAT_DIFF
            log_file_result(logger, STDIN_NAME, "unchanged" if status == EXIT_OK else "would_reformat")
            return status

        if self.options.diff:
            return self._emit_diff(STDIN_NAME, source, output)

        self.stdout.write(output)
        log_file_result(logger, STDIN_NAME, "unchanged" if output == source else "reformatted")
        return EXIT_OK

    def _run_file(self, path: str, config: FormatterConfig) -> int:
        file_logger = logger.with_context(path=path)

        try:
            with open(path, "r", **_FILE_ENCODING) as f:
                source = f.read()
        except OSError as e:
            file_logger.error(f"Failed to read {path}: {e}", exc_info=True)
            self._err(f"makefmt: {e}")
            return EXIT_ERROR

        output = format_source(source, config, self.rules)

        if self.options.verbose:
            self._err(path)

        if self.options.check:
            if output != source:
                if not self.options.quiet:
                    self._err(path)
                log_file_result(file_logger, path, "would_reformat")
                return EXIT_FORMAT_DIFF
            log_file_result(file_logger, path, "unchanged")
            return EXIT_OK

        if self.options.diff:
            return self._emit_diff(path, source, output)

        if output == source:
            log_file_result(file_logger, path, "unchanged")
            return EXIT_OK

        try:
            with open(path, "w", **_FILE_ENCODING) as f:
                f.write(output)
        except OSError as e:
            file_logger.error(f"Failed to write {path}: {e}", exc_info=True)
            self._err(f"makefmt: writing {path}: {e}")
            return EXIT_ERROR

        log_file_result(file_logger, path, "reformatted")
        return EXIT_OK

    def _emit_diff(self, name: str, source: str, output: str) -> int:
        diff_text = unified_diff(name, source, output)
        if not diff_text:
            log_file_result(logger, name, "unchanged")
            return EXIT_OK
        self.stdout.write(diff_text)
        log_file_result(logger, name, "would_reformat")
        return EXIT_FORMAT_DIFF

    def _err(self, message: str) -> None:
        self.stderr.write(message + "\n")


def run(options: RunOptions, **streams) -> int:
    """Run the formatter with ``options``; see ``FormatRunner``."""
    return FormatRunner(options, **streams).run()
