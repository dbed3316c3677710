"""
Calendar Service

Builds the month grids shown in a market's detail panel: one grid per
season month, Sunday-first weeks, each cell tagged with whether it belongs
to the month, is a market day, or is today.
"""

import calendar
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable

from domain.season import DEFAULT_SEASON_MONTHS, DEFAULT_SEASON_YEAR

DAY_HEADERS = ("S", "M", "T", "W", "T", "F", "S")


@dataclass(frozen=True)
class CalendarDay:
    day: date
    in_month: bool
    is_market_date: bool
    is_today: bool

    @property
    def css_classes(self) -> str:
        classes = ["calendar-day"]
        if not self.in_month:
            classes.append("other-month")
        if self.is_market_date:
            classes.append("highlight")
        if self.is_today:
            classes.append("today")
        return " ".join(classes)


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int
    days: tuple[CalendarDay, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return calendar.month_name[self.month]

    @property
    def weeks(self) -> list[tuple[CalendarDay, ...]]:
        return [self.days[i:i + 7] for i in range(0, len(self.days), 7)]


def _sunday_index(day: date) -> int:
    # date.weekday() is Monday=0; the grid starts on Sunday
    return (day.weekday() + 1) % 7


def build_month(
    year: int,
    month: int,
    market_dates: Iterable[date],
    today: date,
) -> CalendarMonth:
    """
    Grid for one month, padded with neighbouring days to whole weeks.

    Starts on the Sunday on or before the 1st and ends on the Saturday on or
    after the last day of the month.
    """
    wanted = set(market_dates)
    first = date(year, month, 1)
    last = date(year, month, calendar.monthrange(year, month)[1])

    current = first - timedelta(days=_sunday_index(first))
    days = []
    while current <= last or _sunday_index(current) != 0:
        days.append(CalendarDay(
            day=current,
            in_month=current.month == month,
            is_market_date=current in wanted,
            is_today=current == today,
        ))
        current += timedelta(days=1)
    return CalendarMonth(year=year, month=month, days=tuple(days))


def build_season_calendar(
    market_dates: Iterable[date],
    today: date,
    year: int = DEFAULT_SEASON_YEAR,
    months: Iterable[int] = DEFAULT_SEASON_MONTHS,
) -> list[CalendarMonth]:
    """One CalendarMonth per season month, in the order given."""
    dates = list(market_dates)
    return [build_month(year, month, dates, today) for month in months]
