"""Markdown calendar table generation.

Pure string building: every function is a deterministic function of its
arguments, with no I/O and no clock access.
"""
from __future__ import annotations

import datetime as _dt
import logging
from typing import Iterator, List, Optional, Sequence, Tuple

from core.date_utils import month_name

from .markdown import separator_cell, table_row
from .options import CalendarOptions, Weekday

LOG = logging.getLogger(__name__)

SHORT_DAY_NAMES: Tuple[str, ...] = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
FULL_DAY_NAMES: Tuple[str, ...] = (
    "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday",
)
WEEKEND_SHORT_NAMES = frozenset({"Sat", "Sun"})

SHORT_NAME_TO_WEEKDAY = {
    "Mon": Weekday.MONDAY,
    "Tue": Weekday.TUESDAY,
    "Wed": Weekday.WEDNESDAY,
    "Thu": Weekday.THURSDAY,
    "Fri": Weekday.FRIDAY,
    "Sat": Weekday.SATURDAY,
    "Sun": Weekday.SUNDAY,
}

WEEK_HEADER = "CW  "
WEEK_HEADER_CENTERED = "CW   "
COMMENTS_HEADER = "Comments"

RANGE_ERROR = "Error: End date cannot be before start date\n"

ONE_WEEK = _dt.timedelta(days=7)


def generate_calendar_header(year: int, month: int) -> str:
    """``# January 2023`` followed by a blank line."""
    return f"# {month_name(month)} {year}\n\n"


def get_weekday_names(
    first_day_of_week: Weekday,
    show_weekends: bool,
    short_names: Sequence[str] = SHORT_DAY_NAMES,
    full_names: Sequence[str] = FULL_DAY_NAMES,
) -> Tuple[List[str], List[str]]:
    """Rotate the Monday-first name lists to start at ``first_day_of_week``.

    Returns index-aligned (short, full) lists; weekends are dropped when
    ``show_weekends`` is false. The input sequences are not modified.
    """
    if not short_names:
        return [], []
    offset = (int(first_day_of_week) + 6) % 7
    shifted_short = list(short_names[offset:]) + list(short_names[:offset])
    shifted_full = list(full_names[offset:]) + list(full_names[:offset])

    day_short: List[str] = []
    day_full: List[str] = []
    for short, full in zip(shifted_short, shifted_full):
        if not show_weekends and short in WEEKEND_SHORT_NAMES:
            continue
        day_short.append(short)
        day_full.append(full)
    return day_short, day_full


def prepare_column_headers(
    day_short_names: Sequence[str],
    day_full_names: Sequence[str],
    use_short_day_names: bool,
    show_calendar_week: bool,
    show_comments: bool,
    justify: str,
) -> Tuple[List[str], List[int]]:
    """Header labels and fixed column widths, left to right."""
    headers: List[str] = []
    widths: List[int] = []
    if show_calendar_week:
        # a centered ':-:' under "CW" needs one extra column of padding
        label = WEEK_HEADER_CENTERED if (justify or "").lower() == "center" else WEEK_HEADER
        headers.append(label)
        widths.append(len(label))
    for name in (day_short_names if use_short_day_names else day_full_names):
        headers.append(name)
        widths.append(len(name))
    if show_comments:
        headers.append(COMMENTS_HEADER)
        widths.append(len(COMMENTS_HEADER))
    return headers, widths


def generate_table_header(headers: Sequence[str], widths: Sequence[int], justify: str) -> str:
    """Header row plus the alignment separator row."""
    separators = [separator_cell(w, justify) for w in widths]
    return table_row(headers, widths) + table_row(separators, widths)


def convert_to_weekdays(day_short_names: Sequence[str]) -> List[Weekday]:
    """Map short names back to weekdays; unknown names are skipped."""
    return [SHORT_NAME_TO_WEEKDAY[d] for d in day_short_names if d in SHORT_NAME_TO_WEEKDAY]


def calculate_month_boundaries(
    year: int, month: int, first_day_of_week: Weekday
) -> Tuple[_dt.date, _dt.date, _dt.date]:
    """(first of month, last of month, start of the first displayed week)."""
    first_of_month = _dt.date(year, month, 1)
    if month == 12:
        next_month = _dt.date(year + 1, 1, 1)
    else:
        next_month = _dt.date(year, month + 1, 1)
    last_of_month = next_month - _dt.timedelta(days=1)
    shift = (int(Weekday.of(first_of_month)) - int(first_day_of_week) + 7) % 7
    week_start = first_of_month - _dt.timedelta(days=shift)
    return first_of_month, last_of_month, week_start


def generate_week_row(
    cur: _dt.date,
    month: int,
    week_days: Sequence[Weekday],
    first_day_of_week: Weekday,
    column_widths: Sequence[int],
    show_calendar_week: bool,
    show_comments: bool,
) -> str:
    """Row for the 7-day window starting at ``cur``.

    Days outside ``month`` are left blank. The week cell holds the ISO
    week number of ``cur`` in italics.
    """
    cells: List[str] = []
    if show_calendar_week:
        cells.append(f"_{cur.isocalendar()[1]}_")
    for wd in week_days:
        delta = (int(wd) - int(first_day_of_week) + 7) % 7
        day = cur + _dt.timedelta(days=delta)
        cells.append(str(day.day) if day.month == month else "")
    if show_comments:
        cells.append("")
    return table_row(cells, column_widths)


def iter_weeks(week_start: _dt.date, last_of_month: _dt.date) -> Iterator[_dt.date]:
    cur = week_start
    while cur <= last_of_month:
        yield cur
        cur += ONE_WEEK


def generate_month_calendar(options: CalendarOptions) -> str:
    """Complete markdown for ``options.year``/``options.month``."""
    if options.month is None:
        raise ValueError("generate_month_calendar needs a month")
    year, month = options.year, options.month
    first_day = options.first_day_of_week
    LOG.debug("Generating %04d-%02d (first day %s)", year, month, first_day.label)

    day_short, day_full = get_weekday_names(first_day, options.show_weekends)
    headers, widths = prepare_column_headers(
        day_short,
        day_full,
        options.use_short_day_names,
        options.show_calendar_week,
        options.show_comments,
        options.justify,
    )
    week_days = convert_to_weekdays(day_short)
    _, last_of_month, week_start = calculate_month_boundaries(year, month, first_day)

    parts = [generate_calendar_header(year, month), generate_table_header(headers, widths, options.justify)]
    for cur in iter_weeks(week_start, last_of_month):
        parts.append(
            generate_week_row(
                cur,
                month,
                week_days,
                first_day,
                widths,
                options.show_calendar_week,
                options.show_comments,
            )
        )
    return "".join(parts)


def validate_date_range(options: CalendarOptions) -> Tuple[bool, str]:
    """Reject ranges whose end month precedes the start month.

    Without both end fields there is nothing to check. A missing start
    month compares as January.
    """
    if not options.is_range():
        return True, ""
    start = _dt.date(options.year, options.month or 1, 1)
    end = _dt.date(options.end_year, options.end_month, 1)  # type: ignore[arg-type]
    if start > end:
        LOG.info(
            "Rejected range %04d-%02d..%04d-%02d", start.year, start.month, end.year, end.month
        )
        return False, RANGE_ERROR
    return True, ""


def iter_months(options: CalendarOptions) -> Iterator[Tuple[int, int]]:
    """(year, month) pairs to render, in order.

    Range mode wins when both end fields are set (start month defaults to
    January); otherwise a missing month means the whole year. Call
    validate_date_range first: a reversed range yields nothing.
    """
    if options.is_range():
        year, month = options.year, options.month or 1
        end = (options.end_year, options.end_month)
        while (year, month) <= end:  # type: ignore[operator]
            yield year, month
            month += 1
            if month > 12:
                month = 1
                year += 1
    elif options.month is None:
        for month in range(1, 13):
            yield options.year, month
    else:
        yield options.year, options.month


def render_calendar(options: CalendarOptions) -> str:
    """Markdown for every month selected by ``options``.

    Multi-month output puts a blank line after each month. An invalid
    range returns the literal range error instead of any calendar.
    """
    valid, message = validate_date_range(options)
    if not valid:
        return message

    multi = options.is_range() or options.month is None
    parts: List[str] = []
    for year, month in iter_months(options):
        parts.append(generate_month_calendar(options.replace(year=year, month=month)))
        if multi:
            parts.append("\n")
    return "".join(parts)


def count_months(options: CalendarOptions) -> int:
    valid, _ = validate_date_range(options)
    return sum(1 for _ in iter_months(options)) if valid else 0


def week_count(year: int, month: int, first_day_of_week: Optional[Weekday] = None) -> int:
    """Number of week rows a month renders with."""
    _, last_of_month, week_start = calculate_month_boundaries(
        year, month, first_day_of_week if first_day_of_week is not None else Weekday.MONDAY
    )
    return sum(1 for _ in iter_weeks(week_start, last_of_month))
