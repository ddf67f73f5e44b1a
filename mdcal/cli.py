"""Markdown calendar CLI using CLIApp framework.

Examples:
  mdcal 2025 3          - March 2025
  mdcal 2025 3 5        - March through May 2025
  mdcal 2025 12 2026 1  - December 2025 through January 2026
  mdcal 2025 -s sunday  - all of 2025, weeks starting on Sunday

With no arguments at all, an interactive wizard asks for the options.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.cli_errors import ExitCode
from core.cli_framework import CLIApp
from core.pipeline import run_pipeline

from .args import resolve_positionals
from .config import (
    apply_layout_defaults,
    load_layout_defaults,
    resolve_config_path,
    write_layout_config,
)
from .meta import APP_ID, PURPOSE, VERSION
from .options import JUSTIFY_CHOICES, CalendarOptions, Weekday, default_options, normalize_justify
from .pipeline import CalendarProcessor, CalendarProducer, CalendarRequest
from .wizard import run_wizard

LOG = logging.getLogger(__name__)

EXAMPLES = """\
Examples:
  mdcal 2025 3          Generate calendar for March 2025
  mdcal 2025 3 5        Generate calendar for March through May 2025
  mdcal 2025 12 2026 1  Generate calendar for December 2025 through January 2026

If no arguments are provided, it runs in interactive mode."""

app = CLIApp(
    APP_ID,
    PURPOSE,
    usage="%(prog)s [year] [month] [endMonth | endYear endMonth] [options]",
    version=f"v{VERSION}",
    epilog=EXAMPLES,
)


def _justify_arg(value: str) -> str:
    return value.strip().lower()


def apply_layout_flags(options: CalendarOptions, args: argparse.Namespace) -> CalendarOptions:
    """Overlay explicitly given layout flags on ``options``."""
    changes = {}
    if args.start is not None:
        changes["first_day_of_week"] = Weekday.parse(args.start)
    if args.no_week_no:
        changes["show_calendar_week"] = False
    if args.workweek:
        changes["show_weekends"] = False
    if args.no_comment:
        changes["show_comments"] = False
    if args.short:
        changes["use_short_day_names"] = True
    if args.justify is not None:
        justify = normalize_justify(args.justify)
        if justify is None:
            print(f"Invalid justification {args.justify!r}, using left")
            justify = "left"
        changes["justify"] = justify
    return options.replace(**changes) if changes else options


def _print_warnings(warnings: List[str]) -> None:
    for line in warnings:
        print(line)


# Note: @argument decorators must come BELOW @entrypoint (decorators apply bottom-up)
@app.entrypoint
@app.argument("dates", nargs="*", metavar="DATE", help="year, month, then optional endMonth or endYear endMonth")
@app.argument("--start", "-s", metavar="DAY", help="First day of the week, e.g. monday/mon (default: monday)")
@app.argument("--no-week-no", "-w", action="store_true", help="Leave week numbers off the calendar")
@app.argument("--workweek", "-W", action="store_true", help="Leave weekends off the calendar")
@app.argument("--no-comment", "-c", action="store_true", help="Leave the comments column off")
@app.argument("--short", "-S", action="store_true", help="Use short day names (Mon, Tue, ...)")
@app.argument("--justify", "-j", type=_justify_arg, metavar="{%s}" % ",".join(JUSTIFY_CHOICES), help="Cell justification (default: left)")
@app.argument("--out", "-o", help="Also write the markdown to this file")
@app.argument("--config", help="Layout defaults YAML (default: $MDCAL_CONFIG or ~/.config/mdcal/config.yaml)")
@app.argument("--write-config", action="store_true", help="Save the effective layout options to the config file and exit")
def cmd_generate(args: argparse.Namespace) -> int:
    """Generate the requested calendar."""
    config_path = resolve_config_path(args.config)
    options = apply_layout_defaults(default_options(), load_layout_defaults(config_path))
    options = apply_layout_flags(options, args)

    if args.write_config:
        written = write_layout_config(config_path, options)
        print(f"Wrote layout defaults to {written}")
        return int(ExitCode.SUCCESS)

    if not getattr(args, "_argv", None):
        if sys.stdin.isatty():
            chosen = run_wizard(options)
            if chosen is None:
                return int(ExitCode.INTERRUPTED)
            options = chosen
        else:
            LOG.info("stdin is not a terminal; skipping the wizard and using defaults")
    else:
        options, warnings = resolve_positionals(args.dates, options)
        _print_warnings(warnings)

    request = CalendarRequest(options=options, out_path=Path(args.out) if args.out else None)
    return run_pipeline(request, CalendarProcessor, CalendarProducer)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the mdcal CLI."""
    return app.run(argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
