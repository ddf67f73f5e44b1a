"""Single-command argparse application.

An app declares its one entry point with decorators::

    app = CLIApp("mdcal", "Generate a markdown calendar", version="v0.1.1")

    @app.entrypoint
    @app.argument("dates", nargs="*")
    @app.argument("--start", "-s", help="First day of the week")
    def cmd_generate(args):
        print(args.dates)
        return 0

    if __name__ == "__main__":
        app.main()

``run`` accepts positionals and flags in any order, configures logging
from ``--verbose`` and turns raised errors into exit codes.
"""
from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .cli_errors import ExitCode, handle_error

LOG = logging.getLogger(__name__)

Handler = Callable[[argparse.Namespace], int]

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass
class ArgSpec:
    """Positional or flag declared with ``@app.argument``."""
    flags: tuple
    options: Dict[str, Any] = field(default_factory=dict)

    def add_to(self, parser: argparse.ArgumentParser) -> None:
        parser.add_argument(*self.flags, **self.options)


@dataclass
class Entrypoint:
    handler: Handler
    args: List[ArgSpec] = field(default_factory=list)


def configure_logging(verbose: bool = False) -> None:
    """Attach a stderr handler to the root logger once.

    WARNING by default, DEBUG when verbose. Calling again only adjusts the level.
    """
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)


class CLIApp:
    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        usage: Optional[str] = None,
        version: Optional[str] = None,
        epilog: Optional[str] = None,
    ):
        """
        Args:
            name: Program name shown in usage and ``--version``.
            description: Text above the option list in ``--help``.
            usage: Usage line override.
            version: Enables ``-V/--version`` when set.
            epilog: Text below the option list in ``--help``.
        """
        self.name = name
        self.description = description
        self.usage = usage
        self.version = version
        self.epilog = epilog
        self._entry: Optional[Entrypoint] = None
        self._queued: List[ArgSpec] = []

    def argument(self, *flags: str, **options: Any) -> Callable[[Handler], Handler]:
        """Queue an argument for the entry point; use below ``@entrypoint``."""
        def queue(func: Handler) -> Handler:
            self._queued.append(ArgSpec(flags, options))
            return func
        return queue

    def entrypoint(self, func: Handler) -> Handler:
        """Register ``func`` as the handler for every invocation.

        Decorators apply bottom-up, so the queued arguments are reversed to
        keep the order they were written in.
        """
        self._entry = Entrypoint(func, list(reversed(self._queued)))
        self._queued = []
        return func

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            usage=self.usage,
            description=self.description,
            epilog=self.epilog,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.version:
            parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {self.version}")
        parser.add_argument("--verbose", action="store_true", help="Enable debug logging on stderr")
        if self._entry is not None:
            for spec in self._entry.args:
                spec.add_to(parser)
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Parse ``argv`` (default ``sys.argv[1:]``), call the entry point, return the exit code.

        The raw argument list is kept on the namespace as ``_argv`` so the
        handler can tell a bare invocation from one with only flags.
        """
        raw = list(sys.argv[1:] if argv is None else argv)
        parser = self.build_parser()
        args = parser.parse_intermixed_args(raw)
        args._argv = raw
        configure_logging(args.verbose)

        if self._entry is None:
            parser.print_help()
            return int(ExitCode.USAGE)

        LOG.debug("%s invoked with %r", self.name, raw)
        try:
            return int(self._entry.handler(args))
        except KeyboardInterrupt as exc:
            return handle_error(exc)
        except Exception as exc:
            return handle_error(exc, verbose=args.verbose)

    def main(self, argv: Optional[Sequence[str]] = None) -> None:
        sys.exit(self.run(argv))
