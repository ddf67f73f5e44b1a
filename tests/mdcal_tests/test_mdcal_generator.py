"""Tests for mdcal/generator.py."""

import calendar
import datetime as dt
import math
import unittest

from mdcal.generator import (
    FULL_DAY_NAMES,
    RANGE_ERROR,
    SHORT_DAY_NAMES,
    calculate_month_boundaries,
    convert_to_weekdays,
    count_months,
    generate_calendar_header,
    generate_month_calendar,
    generate_table_header,
    generate_week_row,
    get_weekday_names,
    iter_months,
    prepare_column_headers,
    render_calendar,
    validate_date_range,
    week_count,
)
from mdcal.options import Weekday
from tests.fixtures import make_options, split_cells, table_rows, week_rows

WORKWEEK = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]

FEBRUARY_2021_SHORT = (
    "# February 2021\n\n"
    "| CW   | Mon | Tue | Wed | Thu | Fri | Sat | Sun |\n"
    "| :--- | :-- | :-- | :-- | :-- | :-- | :-- | :-- |\n"
    "| _5_  | 1   | 2   | 3   | 4   | 5   | 6   | 7   |\n"
    "| _6_  | 8   | 9   | 10  | 11  | 12  | 13  | 14  |\n"
    "| _7_  | 15  | 16  | 17  | 18  | 19  | 20  | 21  |\n"
    "| _8_  | 22  | 23  | 24  | 25  | 26  | 27  | 28  |\n"
)

JANUARY_2023_WORKWEEK_RIGHT = (
    "# January 2023\n\n"
    "| Monday | Tuesday | Wednesday | Thursday | Friday | Comments |\n"
    "| -----: | ------: | --------: | -------: | -----: | -------: |\n"
    "| 2      | 3       | 4         | 5        | 6      |          |\n"
    "| 9      | 10      | 11        | 12       | 13     |          |\n"
    "| 16     | 17      | 18        | 19       | 20     |          |\n"
    "| 23     | 24      | 25        | 26       | 27     |          |\n"
    "| 30     | 31      |           |          |        |          |\n"
)


class TestCalendarHeader(unittest.TestCase):
    def test_heading_and_blank_line(self):
        self.assertEqual(generate_calendar_header(2023, 1), "# January 2023\n\n")
        self.assertEqual(generate_calendar_header(1999, 12), "# December 1999\n\n")


class TestWeekdayNames(unittest.TestCase):
    def test_monday_first(self):
        short, full = get_weekday_names(Weekday.MONDAY, True)
        self.assertEqual(short, list(SHORT_DAY_NAMES))
        self.assertEqual(full, list(FULL_DAY_NAMES))

    def test_sunday_first(self):
        short, full = get_weekday_names(Weekday.SUNDAY, True)
        self.assertEqual(short, ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"])
        self.assertEqual(full[0], "Sunday")
        self.assertEqual(full[-1], "Saturday")

    def test_wednesday_first(self):
        short, _ = get_weekday_names(Weekday.WEDNESDAY, True)
        self.assertEqual(short, ["Wed", "Thu", "Fri", "Sat", "Sun", "Mon", "Tue"])

    def test_saturday_first(self):
        short, _ = get_weekday_names(Weekday.SATURDAY, True)
        self.assertEqual(short, ["Sat", "Sun", "Mon", "Tue", "Wed", "Thu", "Fri"])

    def test_without_weekends(self):
        short, full = get_weekday_names(Weekday.SUNDAY, False)
        self.assertEqual(short, ["Mon", "Tue", "Wed", "Thu", "Fri"])
        self.assertEqual(full, ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"])

    def test_lists_stay_aligned(self):
        for first in Weekday:
            for weekends in (True, False):
                short, full = get_weekday_names(first, weekends)
                self.assertEqual(len(short), 7 if weekends else 5)
                for s, f in zip(short, full):
                    self.assertTrue(f.startswith(s))

    def test_empty_input(self):
        self.assertEqual(get_weekday_names(Weekday.MONDAY, True, [], []), ([], []))

    def test_inputs_not_modified(self):
        short_in = list(SHORT_DAY_NAMES)
        full_in = list(FULL_DAY_NAMES)
        get_weekday_names(Weekday.THURSDAY, False, short_in, full_in)
        self.assertEqual(short_in, list(SHORT_DAY_NAMES))
        self.assertEqual(full_in, list(FULL_DAY_NAMES))


class TestColumnHeaders(unittest.TestCase):
    def test_full_names_with_all_columns(self):
        short, full = get_weekday_names(Weekday.MONDAY, True)
        headers, widths = prepare_column_headers(short, full, False, True, True, "left")
        self.assertEqual(headers[0], "CW  ")
        self.assertEqual(headers[-1], "Comments")
        self.assertEqual(widths, [4, 6, 7, 9, 8, 6, 8, 6, 8])

    def test_centered_week_header_is_wider(self):
        short, full = get_weekday_names(Weekday.MONDAY, True)
        headers, widths = prepare_column_headers(short, full, True, True, False, "center")
        self.assertEqual(headers[0], "CW   ")
        self.assertEqual(widths, [5, 3, 3, 3, 3, 3, 3, 3])

    def test_optional_columns_omitted(self):
        short, full = get_weekday_names(Weekday.MONDAY, False)
        headers, widths = prepare_column_headers(short, full, True, False, False, "left")
        self.assertEqual(headers, ["Mon", "Tue", "Wed", "Thu", "Fri"])
        self.assertEqual(widths, [3, 3, 3, 3, 3])

    def test_table_header_default_layout(self):
        short, full = get_weekday_names(Weekday.MONDAY, True)
        headers, widths = prepare_column_headers(short, full, False, True, True, "left")
        header = generate_table_header(headers, widths, "left")
        first, second = header.splitlines()
        self.assertEqual(
            first,
            "| CW   | Monday | Tuesday | Wednesday | Thursday | Friday | Saturday | Sunday | Comments |",
        )
        self.assertEqual(
            second,
            "| :--- | :----- | :------ | :-------- | :------- | :----- | :------- | :----- | :------- |",
        )

    def test_table_header_center_separators(self):
        header = generate_table_header(["CW   ", "Mon", "Comments"], [5, 3, 8], "center")
        self.assertEqual(header.splitlines()[1], "| :---: | :-: | :------: |")


class TestWeekHelpers(unittest.TestCase):
    def test_convert_to_weekdays_skips_unknown(self):
        self.assertEqual(convert_to_weekdays(["Mon", "Sun", "Xyz"]), [Weekday.MONDAY, Weekday.SUNDAY])

    def test_boundaries_monday_first(self):
        first, last, start = calculate_month_boundaries(2023, 1, Weekday.MONDAY)
        self.assertEqual(first, dt.date(2023, 1, 1))
        self.assertEqual(last, dt.date(2023, 1, 31))
        self.assertEqual(start, dt.date(2022, 12, 26))

    def test_boundaries_month_starts_on_first_day(self):
        _, _, start = calculate_month_boundaries(2023, 1, Weekday.SUNDAY)
        self.assertEqual(start, dt.date(2023, 1, 1))

    def test_boundaries_leap_february(self):
        _, last, start = calculate_month_boundaries(2024, 2, Weekday.MONDAY)
        self.assertEqual(last, dt.date(2024, 2, 29))
        self.assertEqual(start, dt.date(2024, 1, 29))

    def test_boundaries_december(self):
        _, last, _ = calculate_month_boundaries(2023, 12, Weekday.MONDAY)
        self.assertEqual(last, dt.date(2023, 12, 31))

    def test_week_start_on_first_day_and_not_after_month_start(self):
        for year in (2000, 2023, 2024):
            for month in range(1, 13):
                for first_day in Weekday:
                    first, _, start = calculate_month_boundaries(year, month, first_day)
                    self.assertLessEqual(start, first)
                    self.assertLess(first - start, dt.timedelta(days=7))
                    self.assertIs(Weekday.of(start), first_day)

    def test_week_row_outside_month_is_blank(self):
        row = generate_week_row(
            dt.date(2022, 12, 26), 1, WORKWEEK, Weekday.MONDAY, [4, 3, 3, 3, 3, 3, 8], True, True
        )
        self.assertEqual(row, "| _52_ |     |     |     |     |     |          |\n")

    def test_week_row_without_optional_columns(self):
        row = generate_week_row(dt.date(2023, 1, 2), 1, WORKWEEK, Weekday.MONDAY, [3] * 5, False, False)
        self.assertEqual(row, "| 2   | 3   | 4   | 5   | 6   |\n")


class TestMonthCalendar(unittest.TestCase):
    def test_february_2021_short_names(self):
        opts = make_options(year=2021, month=2, use_short_day_names=True, show_comments=False)
        self.assertEqual(generate_month_calendar(opts), FEBRUARY_2021_SHORT)

    def test_january_2023_workweek_right(self):
        opts = make_options(
            month=1,
            first_day_of_week=Weekday.SUNDAY,
            show_weekends=False,
            show_calendar_week=False,
            justify="right",
        )
        self.assertEqual(generate_month_calendar(opts), JANUARY_2023_WORKWEEK_RIGHT)

    def test_january_2023_default_layout(self):
        text = generate_month_calendar(make_options(month=1))
        self.assertTrue(text.startswith("# January 2023\n\n| CW   | Monday |"))
        rows = week_rows(text)
        self.assertEqual(len(rows), 6)
        self.assertEqual(split_cells(rows[0]), ["_52_", "", "", "", "", "", "", "1", ""])
        self.assertEqual(split_cells(rows[-1]), ["_5_", "30", "31", "", "", "", "", "", ""])

    def test_sunday_first_row(self):
        rows = week_rows(generate_month_calendar(make_options(month=1, first_day_of_week=Weekday.SUNDAY)))
        self.assertEqual(len(rows), 5)
        self.assertEqual(split_cells(rows[0]), ["_52_", "1", "2", "3", "4", "5", "6", "7", ""])

    def test_iso_week_crosses_year_end(self):
        rows = week_rows(generate_month_calendar(make_options(year=2024, month=12)))
        self.assertEqual(split_cells(rows[0])[0], "_48_")
        self.assertEqual(split_cells(rows[-1])[0], "_1_")

    def test_needs_a_month(self):
        with self.assertRaises(ValueError):
            generate_month_calendar(make_options())

    def test_is_idempotent(self):
        opts = make_options(month=7, justify="center", use_short_day_names=True)
        self.assertEqual(generate_month_calendar(opts), generate_month_calendar(opts))

    def test_row_count_matches_calendar_arithmetic(self):
        for year in range(2019, 2026):
            for month in range(1, 13):
                days = calendar.monthrange(year, month)[1]
                weekday = dt.date(year, month, 1).isoweekday() % 7
                for first in Weekday:
                    offset = (weekday - int(first) + 7) % 7
                    expected = math.ceil((offset + days) / 7)
                    self.assertEqual(week_count(year, month, first), expected, (year, month, first))

    def test_every_day_appears_once_in_order(self):
        for month in range(1, 13):
            days = calendar.monthrange(2024, month)[1]
            for first in Weekday:
                opts = make_options(
                    year=2024,
                    month=month,
                    first_day_of_week=first,
                    show_calendar_week=False,
                    show_comments=False,
                )
                cells = [c for row in week_rows(generate_month_calendar(opts)) for c in split_cells(row)]
                self.assertEqual([c for c in cells if c], [str(d) for d in range(1, days + 1)])

    def test_rows_have_header_column_count(self):
        variants = [
            {},
            {"show_weekends": False},
            {"show_calendar_week": False},
            {"show_comments": False, "use_short_day_names": True},
            {"show_weekends": False, "show_calendar_week": False, "show_comments": False},
        ]
        for extra in variants:
            opts = make_options(month=3, **extra)
            expected = (7 if opts.show_weekends else 5) + opts.show_calendar_week + opts.show_comments
            for row in table_rows(generate_month_calendar(opts)):
                self.assertEqual(len(split_cells(row)), expected, extra)

    def test_rows_share_one_width(self):
        for justify in ("left", "center", "right"):
            rows = table_rows(generate_month_calendar(make_options(month=5, justify=justify)))
            self.assertEqual(len({len(r) for r in rows}), 1, justify)


class TestDateRange(unittest.TestCase):
    def test_end_before_start_rejected(self):
        valid, message = validate_date_range(make_options(month=5, end_year=2023, end_month=3))
        self.assertFalse(valid)
        self.assertEqual(message, "Error: End date cannot be before start date\n")

    def test_same_month_accepted(self):
        self.assertEqual(validate_date_range(make_options(month=5, end_year=2023, end_month=5)), (True, ""))

    def test_across_year_accepted(self):
        self.assertTrue(validate_date_range(make_options(month=12, end_year=2024, end_month=1))[0])

    def test_end_year_before_start_rejected(self):
        self.assertFalse(validate_date_range(make_options(year=2024, month=1, end_year=2023, end_month=12))[0])

    def test_no_range_is_valid(self):
        self.assertEqual(validate_date_range(make_options()), (True, ""))
        self.assertEqual(validate_date_range(make_options(month=2, end_year=2022)), (True, ""))

    def test_missing_start_month_compares_as_january(self):
        self.assertTrue(validate_date_range(make_options(end_year=2023, end_month=1))[0])
        self.assertFalse(validate_date_range(make_options(end_year=2022, end_month=12))[0])


class TestRenderCalendar(unittest.TestCase):
    @staticmethod
    def _headings(text):
        return [line for line in text.splitlines() if line.startswith("# ")]

    def test_single_month_has_no_trailing_blank_line(self):
        opts = make_options(month=4)
        text = render_calendar(opts)
        self.assertEqual(text, generate_month_calendar(opts))
        self.assertFalse(text.endswith("\n\n"))

    def test_whole_year(self):
        text = render_calendar(make_options())
        self.assertEqual(self._headings(text), [f"# {calendar.month_name[m]} 2023" for m in range(1, 13)])
        self.assertTrue(text.endswith("|\n\n"))
        self.assertIn("|\n\n# February 2023\n\n", text)

    def test_range_across_years(self):
        text = render_calendar(make_options(month=11, end_year=2024, end_month=2))
        self.assertEqual(
            self._headings(text),
            ["# November 2023", "# December 2023", "# January 2024", "# February 2024"],
        )

    def test_range_of_one_month(self):
        text = render_calendar(make_options(month=6, end_year=2023, end_month=6))
        self.assertEqual(self._headings(text), ["# June 2023"])
        self.assertEqual(text, generate_month_calendar(make_options(month=6)) + "\n")

    def test_range_without_start_month_starts_in_january(self):
        text = render_calendar(make_options(end_year=2023, end_month=3))
        self.assertEqual(self._headings(text), ["# January 2023", "# February 2023", "# March 2023"])

    def test_invalid_range_returns_error_only(self):
        self.assertEqual(render_calendar(make_options(month=5, end_year=2023, end_month=3)), RANGE_ERROR)

    def test_is_idempotent(self):
        opts = make_options(month=2, end_year=2024, end_month=4, first_day_of_week=Weekday.SUNDAY)
        self.assertEqual(render_calendar(opts), render_calendar(opts))


class TestMonthIteration(unittest.TestCase):
    def test_count_months(self):
        self.assertEqual(count_months(make_options(month=11, end_year=2024, end_month=2)), 4)
        self.assertEqual(count_months(make_options()), 12)
        self.assertEqual(count_months(make_options(month=3)), 1)
        self.assertEqual(count_months(make_options(month=3, end_year=2022, end_month=3)), 0)

    def test_long_range_is_finite_and_ordered(self):
        months = list(iter_months(make_options(year=2000, month=1, end_year=2010, end_month=12)))
        self.assertEqual(len(months), 132)
        self.assertEqual(months[0], (2000, 1))
        self.assertEqual(months[-1], (2010, 12))
        self.assertEqual(months, sorted(months))

    def test_week_count_examples(self):
        self.assertEqual(week_count(2021, 2, Weekday.MONDAY), 4)
        self.assertEqual(week_count(2023, 1), 6)
        self.assertEqual(week_count(2023, 1, Weekday.SUNDAY), 5)


if __name__ == "__main__":
    unittest.main()
