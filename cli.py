"""Lightweight CLI for the holiday markets data.

Usage:
    markets fetch                       # download the sheet and summarize it
    markets fetch --url URL             # use a different CSV export URL
    markets parse-dates "Nov. 28-Dec. 1, Dec. 13-14"
    markets parse-dates "Dec. 6" --year 2026
    markets log-level DEBUG             # set log level in settings.toml
"""

import argparse
import logging
import re
import sys
from collections import Counter
from pathlib import Path
from time import perf_counter

from settings_service import SETTINGS_PATH, _load_settings, get_season_config

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def cmd_fetch(args: argparse.Namespace) -> int:
    """Fetch the sheet, parse it and print a per-city summary."""
    if not args.verbose:
        # Suppress library logs before service imports set up handlers
        logging.disable(logging.INFO)

    from repositories.sheet_repo import SheetFetchError, _fetch_sheet_csv_impl, build_csv_url
    from services.ingestion_service import IngestionReport, build_records

    season = get_season_config()
    url = args.url or build_csv_url(season.csv_url_template, season.sheet_id)

    print(f"fetching {url} …", end=" ", flush=True)
    t0 = perf_counter()
    try:
        csv_text = _fetch_sheet_csv_impl(url, season.timeout)
    except SheetFetchError as e:
        elapsed = round((perf_counter() - t0) * 1000)
        print(f"error ({elapsed} ms): {e}")
        return 1
    elapsed = round((perf_counter() - t0) * 1000)
    print(f"ok ({elapsed} ms)")

    report = IngestionReport()
    records = build_records(csv_text, season.year, report)
    print(f"markets: {report.kept} kept, {report.skipped} skipped")
    if report.skipped_lines:
        print(f"skipped lines: {', '.join(map(str, report.skipped_lines))}")

    unscheduled = [r.name for r in records if not r.has_schedule]
    if unscheduled:
        print(f"no parseable dates: {', '.join(unscheduled)}")

    for city, count in sorted(Counter(r.city for r in records).items()):
        print(f"  {city}: {count}")
    return 0


def cmd_parse_dates(args: argparse.Namespace) -> int:
    """Print the dates parsed from a date cell, one ISO date per line."""
    from services.date_parser import parse_market_dates

    year = args.year or get_season_config().year
    dates = parse_market_dates(args.text, year)
    if not dates:
        print("no dates")
        return 1
    for day in dates:
        print(day.isoformat())
    return 0


def cmd_log_level(args: argparse.Namespace) -> int:
    """Get or set the log level in settings.toml."""
    settings_path = Path(args.settings) if args.settings else SETTINGS_PATH
    settings = _load_settings(settings_path)
    current = settings["env"]["log_level"]

    if args.level is None:
        print(current)
        return 0

    level = args.level.upper()
    if level not in VALID_LOG_LEVELS:
        print(f"invalid level: {args.level} (expected one of {', '.join(VALID_LOG_LEVELS)})")
        return 1

    if level == current:
        print(f"already {level}")
        return 0

    content = settings_path.read_text()
    updated = re.sub(
        r'(log_level\s*=\s*)"[^"]*"',
        rf'\1"{level}"',
        content,
    )
    settings_path.write_text(updated)
    settings["env"]["log_level"] = level
    print(f"{current} → {level}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="markets", description="Holiday markets data tools")
    sub = parser.add_subparsers(dest="command")

    fetch_parser = sub.add_parser("fetch", help="Download the market sheet and summarize it")
    fetch_parser.add_argument("--url", default=None, help="CSV export URL (defaults to settings.toml)")
    fetch_parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed fetch logs")

    dates_parser = sub.add_parser("parse-dates", help="Show the dates parsed from a date cell")
    dates_parser.add_argument("text", help='Date text, e.g. "Nov. 28-Dec. 1"')
    dates_parser.add_argument("--year", type=int, default=None, help="Season year (defaults to settings.toml)")

    ll_parser = sub.add_parser("log-level", help="Get or set the log level in settings.toml")
    ll_parser.add_argument("level", nargs="?", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    ll_parser.add_argument("--settings", default=None, help=argparse.SUPPRESS)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "fetch":
        return cmd_fetch(args)
    if args.command == "parse-dates":
        return cmd_parse_dates(args)
    if args.command == "log-level":
        return cmd_log_level(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
