"""Calendar generation options.

``CalendarOptions`` is the complete configuration handed to the generator.
Optional fields use ``None`` for "absent": a missing ``month`` means the
whole year, and a range exists only when both end fields are set.
"""
from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass, replace as _replace
from enum import IntEnum
from typing import Optional, Tuple

from core.date_utils import parse_weekday, weekday_ordinal

JUSTIFY_CHOICES: Tuple[str, ...] = ("left", "center", "right")
DEFAULT_JUSTIFY = "left"

# Week windows can spill a few days into the neighbouring year, so the
# outermost years supported by ``datetime`` are excluded.
MIN_YEAR = _dt.MINYEAR + 1
MAX_YEAR = _dt.MAXYEAR - 1


class Weekday(IntEnum):
    """Weekday with Sunday-based ordinals."""
    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @classmethod
    def parse(cls, name: Optional[str]) -> "Weekday":
        """Parse a day name or abbreviation; unknown names give Monday."""
        return cls(parse_weekday(name))

    @classmethod
    def of(cls, d: _dt.date) -> "Weekday":
        return cls(weekday_ordinal(d))

    @property
    def label(self) -> str:
        return self.name.title()


def normalize_justify(value: Optional[str]) -> Optional[str]:
    """Lower-case a justification value; None when unrecognized."""
    cleaned = (value or "").strip().lower()
    return cleaned if cleaned in JUSTIFY_CHOICES else None


def is_valid_year(year: int) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def is_valid_month(month: int) -> bool:
    return 1 <= month <= 12


@dataclass(frozen=True)
class CalendarOptions:
    year: int
    month: Optional[int] = None
    end_year: Optional[int] = None
    end_month: Optional[int] = None
    first_day_of_week: Weekday = Weekday.MONDAY
    show_calendar_week: bool = True
    show_weekends: bool = True
    show_comments: bool = True
    use_short_day_names: bool = False
    justify: str = DEFAULT_JUSTIFY

    def __post_init__(self) -> None:
        for name in ("year", "end_year"):
            value = getattr(self, name)
            if value is not None and not is_valid_year(value):
                raise ValueError(f"{name} must be between {MIN_YEAR} and {MAX_YEAR}, got {value}")
        for name in ("month", "end_month"):
            value = getattr(self, name)
            if value is not None and not is_valid_month(value):
                raise ValueError(f"{name} must be between 1 and 12, got {value}")
        if not isinstance(self.first_day_of_week, Weekday):
            object.__setattr__(self, "first_day_of_week", Weekday(self.first_day_of_week))

    def is_range(self) -> bool:
        return self.end_year is not None and self.end_month is not None

    def replace(self, **changes) -> "CalendarOptions":
        """Return a copy with the given fields changed."""
        return _replace(self, **changes)


def default_options(today: Optional[_dt.date] = None) -> CalendarOptions:
    """Defaults: current year, whole-year mode, Monday first, all columns, full names."""
    today = today or _dt.date.today()
    return CalendarOptions(year=today.year)
