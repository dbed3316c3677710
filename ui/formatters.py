"""
UI Formatting Utilities

Helpers for turning markets and calendar grids into display strings and
small HTML fragments for the Streamlit page.

Design Principles:
- Pure functions with no side effects
- User-provided text is HTML-escaped before it goes into markup
"""

from datetime import date
from html import escape
from typing import Iterable

from services.calendar_service import CalendarMonth, DAY_HEADERS

CALENDAR_CSS = """
<style>
.date-calendar { margin-top: 0.75rem; }
.calendar-title { font-weight: 600; margin-bottom: 0.5rem; }
.calendar-months { display: flex; gap: 1.5rem; flex-wrap: wrap; }
.month-name { font-weight: 600; text-align: center; margin-bottom: 0.25rem; }
.calendar-grid { display: grid; grid-template-columns: repeat(7, 2rem); gap: 2px; }
.calendar-day-header { text-align: center; font-size: 0.75rem; opacity: 0.7; }
.calendar-day { text-align: center; padding: 0.2rem 0; border-radius: 4px; font-size: 0.85rem; }
.calendar-day.other-month { opacity: 0.3; }
.calendar-day.highlight { background-color: #c0392b; color: white; font-weight: 600; }
.calendar-day.today { outline: 2px solid #1f6f8b; }
</style>
"""


def format_short_date(day: date) -> str:
    """date(2025, 12, 6) -> "Dec 6" """
    return f"{day.strftime('%b')} {day.day}"


def format_market_days(dates: Iterable[date]) -> str:
    """
    Summarize market days, collapsing consecutive runs.

    Args:
        dates: Parsed market days, any order, duplicates allowed

    Returns:
        e.g. "Nov 28 - Dec 1, Dec 13 - Dec 14", or "" for no dates
    """
    days = sorted(set(dates))
    if not days:
        return ""

    runs = []
    start = prev = days[0]
    for day in days[1:]:
        if (day - prev).days == 1:
            prev = day
            continue
        runs.append((start, prev))
        start = prev = day
    runs.append((start, prev))

    parts = []
    for first, last in runs:
        if first == last:
            parts.append(format_short_date(first))
        else:
            parts.append(f"{format_short_date(first)} - {format_short_date(last)}")
    return ", ".join(parts)


def format_results_count(count: int) -> str:
    return f"{count} market{'s' if count != 1 else ''} found"


def render_month_html(month: CalendarMonth) -> str:
    """One month grid as HTML."""
    cells = [f'<div class="calendar-day-header">{h}</div>' for h in DAY_HEADERS]
    cells += [
        f'<div class="{cell.css_classes}">{cell.day.day}</div>'
        for cell in month.days
    ]
    return (
        '<div class="month-calendar">'
        f'<div class="month-name">{escape(month.name)}</div>'
        f'<div class="calendar-grid">{"".join(cells)}</div>'
        '</div>'
    )


def render_calendar_html(months: list[CalendarMonth]) -> str:
    """Side-by-side month grids with a "November & December 2025" title."""
    if not months:
        return ""
    names = " & ".join(m.name for m in months)
    title = f"{names} {months[0].year}"
    body = "".join(render_month_html(m) for m in months)
    return (
        '<div class="date-calendar">'
        f'<div class="calendar-title">{escape(title)}</div>'
        f'<div class="calendar-months">{body}</div>'
        '</div>'
    )
