"""Shared date name utilities.

Weekday and month name parsing used by the CLI, the wizard and the
config loader. Weekday ordinals follow the Sunday=0 ... Saturday=6
convention.
"""
from __future__ import annotations

import datetime as _dt
from typing import Optional

__all__ = [
    "DAY_MAP",
    "MONTH_NAMES",
    "MONDAY",
    "month_name",
    "parse_month",
    "parse_weekday",
    "weekday_ordinal",
]

MONDAY = 1

# Day-of-week name/abbreviation to Sunday-based ordinal
DAY_MAP = {
    "sunday": 0,
    "sun": 0,
    "monday": 1,
    "mon": 1,
    "tuesday": 2,
    "tue": 2,
    "tues": 2,
    "wednesday": 3,
    "wed": 3,
    "thursday": 4,
    "thu": 4,
    "thur": 4,
    "thurs": 4,
    "friday": 5,
    "fri": 5,
    "saturday": 6,
    "sat": 6,
}

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def parse_weekday(day_name: Optional[str], default: int = MONDAY) -> int:
    """Convert a day name to its Sunday-based ordinal.

    Unknown or empty names fall back to ``default`` (Monday).

    Examples:
        'Sunday' -> 0
        'thurs' -> 4
        'someday' -> 1
    """
    return DAY_MAP.get((day_name or "").strip().lower(), default)


def weekday_ordinal(d: _dt.date) -> int:
    """Sunday-based weekday ordinal of a date (Sunday=0 ... Saturday=6)."""
    return d.isoweekday() % 7


def month_name(month: int) -> str:
    """English full month name for 1-12."""
    return MONTH_NAMES[month - 1]


def parse_month(month_str: Optional[str]) -> Optional[int]:
    """Parse month name (full or abbreviated) to number (1-12).

    An abbreviation is any leading part of the full name of at least
    three letters; other words give None.

    Examples:
        'January' -> 1
        'jan' -> 1
        'sept' -> 9
        'junk' -> None
    """
    cleaned = (month_str or "").strip().lower()
    if len(cleaned) < 3:
        return None
    for number, name in enumerate(MONTH_NAMES, start=1):
        if name.lower().startswith(cleaned):
            return number
    return None
