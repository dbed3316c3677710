"""
Market Date Parser

Turns the hand-written "Date" column of the sheet into concrete calendar
days for the season year.

Supported fragments (comma-separated, each parsed on its own):
- "Nov 29|Nov 30"            pipe range, both ends month + day
- "Nov. 28-Dec. 1"           dash range across months
- "Dec. 13-14"               dash range, end day inherits the start month
- "Dec. 6"                   single day

Month names match on their first three letters, any case, with an optional
trailing period. Days may carry an ordinal suffix ("Dec. 6th"). A fragment
that can't be resolved contributes no dates and is logged; the rest of the
text still parses.
"""

import re
from datetime import date, timedelta
from typing import Optional

from domain.season import DEFAULT_SEASON_YEAR
from logging_config import setup_logging

logger = setup_logging(__name__, log_file="date_parser.log")

MONTHS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12,
}

MONTH_DAY_PATTERN = re.compile(
    r'\b(jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+(\d{1,2})(?:st|nd|rd|th)?\b',
    re.IGNORECASE,
)
BARE_DAY_PATTERN = re.compile(r'^\s*(\d{1,2})(?:st|nd|rd|th)?\b', re.IGNORECASE)

ONE_DAY = timedelta(days=1)


def _make_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def parse_month_day(text: str, year: int = DEFAULT_SEASON_YEAR) -> Optional[date]:
    """Parse "Dec. 13" / "dec 13" / "December 13" into a date in year."""
    match = MONTH_DAY_PATTERN.search(text)
    if not match:
        return None
    month = MONTHS[match.group(1)[:3].lower()]
    return _make_date(year, month, int(match.group(2)))


def date_range(start: date, end: date) -> list[date]:
    """Every day from start to end inclusive; empty if end is before start."""
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += ONE_DAY
    return days


def _parse_pipe(fragment: str, year: int) -> Optional[list[date]]:
    left, _, right = fragment.partition('|')
    start = parse_month_day(left, year)
    end = parse_month_day(right, year)
    if start is None or end is None:
        return None
    return date_range(start, end)


def _parse_dash(fragment: str, year: int) -> Optional[list[date]]:
    # Split on the last dash so "Nov. 28-Dec. 1" keeps "Nov. 28" whole
    cut = fragment.rfind('-')
    left, right = fragment[:cut], fragment[cut + 1:]

    start = parse_month_day(left, year)
    if start is None:
        return None

    end = parse_month_day(right, year)
    if end is None:
        bare = BARE_DAY_PATTERN.match(right)
        if bare:
            end = _make_date(year, start.month, int(bare.group(1)))
    if end is None:
        return None
    return date_range(start, end)


def parse_fragment(fragment: str, year: int = DEFAULT_SEASON_YEAR) -> Optional[list[date]]:
    """
    Parse one comma-free fragment.

    Returns:
        The fragment's dates (possibly empty for a reversed range), or None
        if the fragment matched none of the formats
    """
    if '|' in fragment:
        dates = _parse_pipe(fragment, year)
        if dates is not None:
            return dates

    if '-' in fragment:
        return _parse_dash(fragment, year)

    single = parse_month_day(fragment, year)
    return [single] if single is not None else None


def parse_market_dates(text: str, year: int = DEFAULT_SEASON_YEAR) -> list[date]:
    """
    Parse a sheet date cell into market days anchored to year.

    Fragments keep their order and are not de-duplicated. Unparseable
    fragments are skipped with a warning; this never raises.

    Args:
        text: Raw date text, e.g. "Nov. 28-Dec. 1, Dec. 13-14"
        year: Season year

    Returns:
        List of dates, empty if nothing could be parsed

    Example:
        >>> parse_market_dates("Dec. 13-14", 2025)
        [datetime.date(2025, 12, 13), datetime.date(2025, 12, 14)]
    """
    if not text or not text.strip():
        return []

    dates: list[date] = []
    for raw in text.split(','):
        fragment = raw.strip()
        if not fragment:
            continue
        parsed = parse_fragment(fragment, year)
        if parsed is None:
            logger.warning(f"Could not parse date fragment {fragment!r} in {text!r}")
            continue
        if not parsed:
            logger.debug(f"Date fragment {fragment!r} is a reversed range; no dates")
        dates.extend(parsed)
    return dates
