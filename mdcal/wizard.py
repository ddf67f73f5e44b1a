"""Interactive step-by-step wizard that collects calendar options.

The wizard is a small finite-state machine::

    DATE_MODE -> DATE_ENTRY -> LAYOUT -> DONE
         \\____________\\___________\\____-> CANCELLED

Each state prompts for an enumerated list of fields. ``focus`` always names
the field being asked for, so a cancelled run still reports where it stopped.
Prompts are line based and read from/write to injected streams; styling is
an explicit ``Theme`` value.
"""
from __future__ import annotations

import datetime as _dt
import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TextIO, Tuple, TypeVar

from core.date_utils import DAY_MAP, MONTH_NAMES, parse_month

from .options import (
    JUSTIFY_CHOICES,
    MAX_YEAR,
    MIN_YEAR,
    CalendarOptions,
    Weekday,
    is_valid_month,
    is_valid_year,
    normalize_justify,
)

LOG = logging.getLogger(__name__)

T = TypeVar("T")

BANNER = (
    "                  __           __\n"
    "   ____ ___  ____/ /________ _/ /\n"
    "  / __ `__ \\/ __  / ___/ __ `/ / \n"
    " / / / / / / /_/ / /__/ /_/ / /  \n"
    "/_/ /_/ /_/\\__,_/\\___/\\__,_/_/   \n"
    "Markdown Calendar Generator\n"
)

CANCEL_WORDS = frozenset({"q", "quit", "exit"})
YES_WORDS = frozenset({"y", "yes"})
NO_WORDS = frozenset({"n", "no"})


class WizardState(Enum):
    DATE_MODE = "date_mode"
    DATE_ENTRY = "date_entry"
    LAYOUT = "layout"
    DONE = "done"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset({WizardState.DONE, WizardState.CANCELLED})


class DateMode(Enum):
    YEAR = "Year"
    MONTH = "Month"
    RANGE = "Range"


DATE_MODE_DESCRIPTIONS = {
    DateMode.YEAR: "All the months for a calendar year",
    DateMode.MONTH: "A specific month",
    DateMode.RANGE: "All the months inside a range",
}


class DateField(Enum):
    YEAR = "Year"
    MONTH = "Month"
    END_YEAR = "End year"
    END_MONTH = "End month"


DATE_FIELDS: Dict[DateMode, Tuple[DateField, ...]] = {
    DateMode.YEAR: (DateField.YEAR,),
    DateMode.MONTH: (DateField.YEAR, DateField.MONTH),
    DateMode.RANGE: (DateField.YEAR, DateField.MONTH, DateField.END_YEAR, DateField.END_MONTH),
}


class LayoutField(Enum):
    FIRST_DAY = "First day of the week"
    WEEK_NUMBERS = "Show week numbers"
    WEEKENDS = "Show weekends"
    COMMENTS = "Show comments column"
    SHORT_NAMES = "Use short day names"
    JUSTIFY = "Cell justification"


# LayoutField -> CalendarOptions attribute for the yes/no fields
LAYOUT_TOGGLES = {
    LayoutField.WEEK_NUMBERS: "show_calendar_week",
    LayoutField.WEEKENDS: "show_weekends",
    LayoutField.COMMENTS: "show_comments",
    LayoutField.SHORT_NAMES: "use_short_day_names",
}

# Monday-first, as the week is usually read
WEEKDAY_CHOICES: Tuple[Weekday, ...] = tuple(Weekday(i % 7) for i in range(1, 8))


@dataclass(frozen=True)
class Theme:
    """ANSI prefixes per text role; empty strings mean unstyled."""
    title: str = ""
    prompt: str = ""
    error: str = ""
    help: str = ""
    reset: str = ""

    def render(self, role: str, text: str) -> str:
        code = getattr(self, role)
        return f"{code}{text}{self.reset}" if code else text


PLAIN_THEME = Theme()
ANSI_THEME = Theme(
    title="\x1b[1;38;2;125;86;244m",
    prompt="\x1b[38;2;45;125;154m",
    error="\x1b[38;2;255;0;0m",
    help="\x1b[3;38;2;98;98;98m",
    reset="\x1b[0m",
)


def pick_theme(stream: TextIO) -> Theme:
    """ANSI theme for terminals unless NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return PLAIN_THEME
    isatty = getattr(stream, "isatty", None)
    return ANSI_THEME if isatty is not None and isatty() else PLAIN_THEME


class WizardCancelled(Exception):
    """Raised inside a step when the user quits."""


class Wizard:
    def __init__(
        self,
        defaults: CalendarOptions,
        *,
        input_stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
        theme: Theme = PLAIN_THEME,
        today: Optional[_dt.date] = None,
    ) -> None:
        self.defaults = defaults
        self.input_stream = input_stream or sys.stdin
        self.output = output or sys.stderr
        self.theme = theme
        self.today = today or _dt.date.today()

        self.state = WizardState.DATE_MODE
        self.focus: Optional[Enum] = None
        self.mode: Optional[DateMode] = None
        self.dates: Dict[DateField, int] = {}
        self.layout: Dict[LayoutField, Any] = {}
        self._handlers: Dict[WizardState, Callable[[], WizardState]] = {
            WizardState.DATE_MODE: self._date_mode_step,
            WizardState.DATE_ENTRY: self._date_entry_step,
            WizardState.LAYOUT: self._layout_step,
        }

    # -- state machine ---------------------------------------------------

    def run(self) -> Optional[CalendarOptions]:
        """Drive the wizard to a terminal state; None when cancelled."""
        self._emit(self.theme.render("title", BANNER))
        self._emit(self.theme.render("help", "Enter accepts the [default]; q quits."))
        while self.state not in TERMINAL_STATES:
            self.step()
        if self.state is WizardState.CANCELLED:
            LOG.debug("Wizard cancelled at %s", self.focus)
            return None
        return self.build_options()

    def step(self) -> WizardState:
        """Run the current state's prompts and move to the next state."""
        if self.state in TERMINAL_STATES:
            return self.state
        handler = self._handlers[self.state]
        try:
            next_state = handler()
        except WizardCancelled:
            next_state = WizardState.CANCELLED
        LOG.debug("Wizard %s -> %s", self.state.value, next_state.value)
        self.state = next_state
        return next_state

    def _date_mode_step(self) -> WizardState:
        self._section("What would you like to generate?")
        modes = list(DateMode)
        for i, mode in enumerate(modes, start=1):
            self._emit(f"  {i}. {mode.value:<6} {DATE_MODE_DESCRIPTIONS[mode]}")
        self.focus = None
        self.mode = self._ask_choice("Choice", modes, DateMode.YEAR, [[m.value] for m in modes])
        return WizardState.DATE_ENTRY

    def _date_entry_step(self) -> WizardState:
        if self.mode is None:
            return WizardState.DATE_MODE
        self._section("Date Options")
        for field in DATE_FIELDS[self.mode]:
            self.focus = field
            self.dates[field] = self._ask_date_field(field)
        return WizardState.LAYOUT

    def _layout_step(self) -> WizardState:
        self._section("Layout Options")
        for field in LayoutField:
            self.focus = field
            if field is LayoutField.FIRST_DAY:
                names = [[wd.label, *_aliases(int(wd))] for wd in WEEKDAY_CHOICES]
                self._emit("  " + "  ".join(f"{i}. {wd.label}" for i, wd in enumerate(WEEKDAY_CHOICES, 1)))
                self.layout[field] = self._ask_choice(
                    field.value, list(WEEKDAY_CHOICES), self.defaults.first_day_of_week, names
                )
            elif field is LayoutField.JUSTIFY:
                current = normalize_justify(self.defaults.justify) or "left"
                self.layout[field] = self._ask_choice(
                    field.value, list(JUSTIFY_CHOICES), current, [[j] for j in JUSTIFY_CHOICES]
                )
            else:
                default = bool(getattr(self.defaults, LAYOUT_TOGGLES[field]))
                self.layout[field] = self._ask_yes_no(field.value, default)
        self.focus = None
        return WizardState.DONE

    def build_options(self) -> CalendarOptions:
        """Options assembled from the answers given so far."""
        year = self.dates.get(DateField.YEAR, self.defaults.year)
        month = self.dates.get(DateField.MONTH)
        end_year = self.dates.get(DateField.END_YEAR)
        end_month = self.dates.get(DateField.END_MONTH)
        changes: Dict[str, Any] = {
            "year": year,
            "month": month,
            "end_year": end_year if self.mode is DateMode.RANGE else None,
            "end_month": end_month if self.mode is DateMode.RANGE else None,
        }
        if LayoutField.FIRST_DAY in self.layout:
            changes["first_day_of_week"] = self.layout[LayoutField.FIRST_DAY]
        if LayoutField.JUSTIFY in self.layout:
            changes["justify"] = self.layout[LayoutField.JUSTIFY]
        for field, attr in LAYOUT_TOGGLES.items():
            if field in self.layout:
                changes[attr] = self.layout[field]
        return self.defaults.replace(**changes)

    # -- field prompts ---------------------------------------------------

    def _date_default(self, field: DateField) -> int:
        if field is DateField.YEAR:
            return self.today.year
        if field is DateField.END_YEAR:
            return self.dates.get(DateField.YEAR, self.today.year)
        return self.today.month

    def _ask_date_field(self, field: DateField) -> int:
        default = self._date_default(field)
        is_month = field in (DateField.MONTH, DateField.END_MONTH)
        shown = MONTH_NAMES[default - 1] if is_month else str(default)
        while True:
            answer = self._ask(f"{field.value} [{shown}]: ")
            if not answer:
                return default
            value = _parse_month_answer(answer) if is_month else _parse_year_answer(answer)
            if value is not None:
                return value
            if is_month:
                self._error("Month must be between 1 and 12 (or a month name)")
            else:
                self._error(f"Year must be a number between {MIN_YEAR} and {MAX_YEAR}")

    def _ask_yes_no(self, label: str, default: bool) -> bool:
        hint = "Y/n" if default else "y/N"
        while True:
            answer = self._ask(f"{label}? ({hint}): ").lower()
            if not answer:
                return default
            if answer in YES_WORDS:
                return True
            if answer in NO_WORDS:
                return False
            self._error("Please answer y or n")

    def _ask_choice(
        self,
        label: str,
        choices: Sequence[T],
        default: T,
        names: Sequence[Sequence[str]],
    ) -> T:
        """Pick by 1-based number or by any of the names listed per choice."""
        default_name = names[list(choices).index(default)][0]
        while True:
            answer = self._ask(f"{label} [{default_name}]: ")
            if not answer:
                return default
            index = _parse_index(answer, len(choices))
            if index is not None:
                return choices[index]
            lowered = answer.lower()
            for choice, aliases in zip(choices, names):
                if lowered in (a.lower() for a in aliases):
                    return choice
            self._error(f"Pick 1-{len(choices)} or one of: {', '.join(n[0] for n in names)}")

    # -- I/O -------------------------------------------------------------

    def _ask(self, prompt: str) -> str:
        self.output.write(self.theme.render("prompt", prompt))
        self.output.flush()
        try:
            line = self.input_stream.readline()
        except KeyboardInterrupt:
            raise WizardCancelled() from None
        if not line:
            raise WizardCancelled()
        answer = line.strip()
        if answer.lower() in CANCEL_WORDS:
            raise WizardCancelled()
        return answer

    def _emit(self, text: str) -> None:
        self.output.write(text + "\n")

    def _section(self, title: str) -> None:
        self._emit("")
        self._emit(self.theme.render("title", title))

    def _error(self, message: str) -> None:
        self._emit(self.theme.render("error", message))


def _aliases(ordinal: int) -> List[str]:
    return [name for name, value in DAY_MAP.items() if value == ordinal]


def _parse_index(answer: str, count: int) -> Optional[int]:
    """Zero-based index for a 1-based choice number, else None."""
    try:
        number = int(answer)
    except ValueError:
        return None
    return number - 1 if 1 <= number <= count else None


def _parse_year_answer(answer: str) -> Optional[int]:
    try:
        year = int(answer)
    except ValueError:
        return None
    return year if is_valid_year(year) else None


def _parse_month_answer(answer: str) -> Optional[int]:
    try:
        month = int(answer)
    except ValueError:
        return parse_month(answer)
    return month if is_valid_month(month) else None


def run_wizard(
    defaults: CalendarOptions,
    *,
    input_stream: Optional[TextIO] = None,
    output: Optional[TextIO] = None,
    theme: Optional[Theme] = None,
    today: Optional[_dt.date] = None,
) -> Optional[CalendarOptions]:
    """Run the wizard; returns the chosen options, or None when cancelled."""
    out = output or sys.stderr
    wizard = Wizard(
        defaults,
        input_stream=input_stream,
        output=out,
        theme=theme if theme is not None else pick_theme(out),
        today=today,
    )
    return wizard.run()
