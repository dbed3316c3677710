"""
Services Package

Business logic for the holiday markets map. Nothing in here renders UI;
the page layer calls these services and draws the results.

Each service module follows these principles:
1. Single Responsibility - one concern per module
2. Dependency Injection - fetchers, clocks and loggers passed in
3. Dataclasses - structured results instead of loose dicts

Available Services:
- parser_utils: CSV line tokenizing and city extraction
- date_parser: the sheet's date-range grammar
- ingestion_service: CSV text -> MarketRecords -> catalog
- catalog_service: MarketCatalog filter/sort/selection engine
- calendar_service: month grids for the detail panel
"""

# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------
from services.parser_utils import tokenize_csv_line, extract_city
from services.date_parser import parse_market_dates, parse_month_day, date_range

# -----------------------------------------------------------------------------
# Ingestion
# -----------------------------------------------------------------------------
from services.ingestion_service import (
    IngestionReport,
    build_record,
    build_records,
    assign_market_ids,
    load_catalog,
)

# -----------------------------------------------------------------------------
# Catalog and calendar
# -----------------------------------------------------------------------------
from services.catalog_service import MarketCatalog, next_weekend
from services.calendar_service import (
    CalendarDay,
    CalendarMonth,
    build_month,
    build_season_calendar,
)

__all__ = [
    # Parsing
    'tokenize_csv_line',
    'extract_city',
    'parse_market_dates',
    'parse_month_day',
    'date_range',

    # Ingestion
    'IngestionReport',
    'build_record',
    'build_records',
    'assign_market_ids',
    'load_catalog',

    # Catalog
    'MarketCatalog',
    'next_weekend',

    # Calendar
    'CalendarDay',
    'CalendarMonth',
    'build_month',
    'build_season_calendar',
]
