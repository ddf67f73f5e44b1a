"""Positional date argument resolution.

``mdcal [year] [month] [endMonth | endYear endMonth]``

Bad values never abort the run: each one falls back to a default and
adds an advisory line for the caller to print.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from core.cli_errors import UsageError
from core.date_utils import parse_month

from .options import CalendarOptions, is_valid_month, is_valid_year

MAX_POSITIONALS = 4

WARN_YEAR = "Invalid year, using current year"
WARN_MONTH = "Invalid month, generating calendar for the whole year"
WARN_END_YEAR = "Invalid end year, ignoring range"
WARN_END_MONTH = "Invalid end month, ignoring range"
WARN_RANGE_NO_START = "Range requires a start month, ignoring range"


def _parse_int(value: str) -> Optional[int]:
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_year(value: str) -> Optional[int]:
    year = _parse_int(value)
    if year is None or not is_valid_year(year):
        return None
    return year


def parse_month_arg(value: str) -> Optional[int]:
    """Month as a number 1-12 or an English name/abbreviation."""
    month = _parse_int(value)
    if month is None:
        return parse_month(value)
    return month if is_valid_month(month) else None


def resolve_positionals(
    values: Sequence[str], options: CalendarOptions
) -> Tuple[CalendarOptions, List[str]]:
    """Apply positional date arguments to ``options``.

    Returns the updated options and the warnings produced along the way.
    Raises UsageError for more than four positionals.
    """
    if len(values) > MAX_POSITIONALS:
        raise UsageError(
            f"Too many date arguments ({len(values)})",
            hint="Use: mdcal [year] [month] [endMonth | endYear endMonth]",
        )
    warnings: List[str] = []
    changes = {}

    if len(values) > 0:
        year = parse_year(values[0])
        if year is None:
            warnings.append(WARN_YEAR)
        else:
            changes["year"] = year
    start_year = changes.get("year", options.year)

    month: Optional[int] = None
    if len(values) > 1:
        month = parse_month_arg(values[1])
        if month is None:
            warnings.append(WARN_MONTH)
        changes["month"] = month

    end_year: Optional[int] = None
    end_month: Optional[int] = None
    if len(values) == 3:
        end_year = start_year
        end_month = parse_month_arg(values[2])
        if end_month is None:
            warnings.append(WARN_END_MONTH)
    elif len(values) == 4:
        end_year = parse_year(values[2])
        end_month = parse_month_arg(values[3])
        if end_year is None:
            warnings.append(WARN_END_YEAR)
        if end_month is None:
            warnings.append(WARN_END_MONTH)

    if end_year is not None and end_month is not None:
        if month is None:
            warnings.append(WARN_RANGE_NO_START)
        else:
            changes["end_year"] = end_year
            changes["end_month"] = end_month

    return options.replace(**changes), warnings
