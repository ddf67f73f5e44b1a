"""Exit codes and typed errors for the calendar CLI.

Errors raised while reading arguments or the config file carry the exit
code they map to; ``handle_error`` reports them on stderr.
"""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional, TextIO

LOG = logging.getLogger(__name__)


class ExitCode(IntEnum):
    SUCCESS = 0
    ERROR = 1  # also used when the end date precedes the start date
    USAGE = 2
    CONFIG_ERROR = 3
    INTERRUPTED = 130  # 128 + SIGINT


@dataclass
class CLIError(Exception):
    """Error that ends the run with ``code`` after printing ``message``."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message

    def report_lines(self) -> List[str]:
        lines = [f"Error: {self.message}"]
        if self.hint:
            lines.append(f"Hint: {self.hint}")
        return lines


class ConfigError(CLIError):
    """Unreadable layout defaults file, or a value of the wrong type in it."""

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        CLIError.__init__(self, message, code=ExitCode.CONFIG_ERROR, hint=hint)


class UsageError(CLIError):
    """Command line that cannot be interpreted, e.g. too many dates."""

    def __init__(self, message: str, hint: Optional[str] = None) -> None:
        CLIError.__init__(self, message, code=ExitCode.USAGE, hint=hint)


INTERRUPTED_MESSAGE = "\nInterrupted."


def handle_error(error: BaseException, verbose: bool = False, stream: Optional[TextIO] = None) -> int:
    """Report ``error`` and return the exit code for it.

    Args:
        error: The exception that ended the command.
        verbose: Log the traceback of unexpected errors at DEBUG.
        stream: Where to write the report (stderr by default).
    """
    out = stream or sys.stderr
    if isinstance(error, KeyboardInterrupt):
        print(INTERRUPTED_MESSAGE, file=out)
        return int(ExitCode.INTERRUPTED)

    if isinstance(error, CLIError):
        for line in error.report_lines():
            print(line, file=out)
        LOG.debug("%s -> exit %d", type(error).__name__, int(error.code))
        return int(error.code)

    print(f"Error: {error}", file=out)
    if verbose:
        LOG.debug("Unhandled exception", exc_info=error)
    return int(ExitCode.ERROR)
