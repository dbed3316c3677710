"""
Ingestion Service

Builds MarketRecords from the sheet's CSV text and loads them into a
MarketCatalog.

Design Principles:
1. Row-level problems never fail the load - bad rows are skipped and counted
2. Columns are positional; the header row is read past, not validated
3. The fetch function is injected so tests never touch the network
"""

from dataclasses import dataclass, field
from typing import Callable, Optional
import logging

from domain.converters import clean_field, parse_coordinate, slugify
from domain.models import MarketRecord, UNKNOWN, DEFAULT_COST
from domain.season import DEFAULT_SEASON_YEAR, SeasonConfig
from logging_config import setup_logging
from repositories.sheet_repo import SheetFetchError, build_csv_url, fetch_sheet_csv_cached
from services.date_parser import parse_market_dates
from services.parser_utils import extract_city, tokenize_csv_line

logger = setup_logging(__name__, log_file="ingestion_service.log")

# Positional sheet columns
COL_NAME = 0
COL_LAT = 1
COL_LON = 2
COL_REGION = 3
COL_ZIP = 4
COL_ADDRESS = 5
COL_DATE = 6
COL_COST = 7
COL_WEBSITE = 8
COL_DESCRIPTION = 9

MIN_COLUMNS = 3

LOAD_ERROR_MESSAGE = (
    "Unable to load market data. Please refresh the page. If the error persists, "
    "ensure the Google Sheet is publicly accessible (View Only)."
)


@dataclass
class IngestionReport:
    """Counts from one build_records() pass."""
    kept: int = 0
    too_few_columns: int = 0
    missing_name: int = 0
    bad_coordinates: int = 0
    skipped_lines: list[int] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.too_few_columns + self.missing_name + self.bad_coordinates


def _cell(values: list[str], index: int) -> Optional[str]:
    return values[index] if index < len(values) else None


def build_record(values: list[str], year: int = DEFAULT_SEASON_YEAR) -> Optional[MarketRecord]:
    """
    Build one record from a tokenized row, or None if the row is unusable.

    The returned record has an empty market_id; build_records() assigns ids
    once the whole sheet is known.
    """
    if len(values) < MIN_COLUMNS:
        return None
    name = clean_field(values[COL_NAME])
    if not name:
        return None

    latitude = parse_coordinate(_cell(values, COL_LAT))
    longitude = parse_coordinate(_cell(values, COL_LON))
    if latitude is None or longitude is None:
        return None

    address = clean_field(_cell(values, COL_ADDRESS))
    raw_date_text = clean_field(_cell(values, COL_DATE))

    return MarketRecord(
        market_id="",
        name=name,
        latitude=latitude,
        longitude=longitude,
        region=clean_field(_cell(values, COL_REGION), UNKNOWN),
        city=extract_city(address),
        zip_code=clean_field(_cell(values, COL_ZIP)),
        address=address,
        raw_date_text=raw_date_text,
        cost=clean_field(_cell(values, COL_COST), DEFAULT_COST),
        website=clean_field(_cell(values, COL_WEBSITE)),
        description=clean_field(_cell(values, COL_DESCRIPTION)),
        dates=tuple(parse_market_dates(raw_date_text, year)),
    )


def assign_market_ids(records: list[MarketRecord]) -> list[MarketRecord]:
    """
    Give every record a unique, stable id derived from its name.

    Repeated names keep both markets: the second "Holiday Bazaar" becomes
    "holiday-bazaar-2", the third "holiday-bazaar-3", in sheet order.
    """
    seen: dict[str, int] = {}
    taken: set[str] = set()
    result = []
    for record in records:
        base = slugify(record.name)
        count = seen.get(base, 0) + 1
        market_id = base if count == 1 else f"{base}-{count}"
        while market_id in taken:
            count += 1
            market_id = f"{base}-{count}"
        seen[base] = count
        taken.add(market_id)
        if count > 1:
            logger.warning(f"Duplicate market name {record.name!r}; using id {market_id!r}")
        result.append(record.with_id(market_id))
    return result


def build_records(
    csv_text: str,
    year: int = DEFAULT_SEASON_YEAR,
    report: Optional[IngestionReport] = None,
) -> list[MarketRecord]:
    """
    Parse the whole sheet into MarketRecords.

    Args:
        csv_text: Full CSV body, header row first
        year: Season year for parsed dates
        report: Optional IngestionReport filled in with kept/skipped counts

    Returns:
        Records in sheet order; empty if there is no data row
    """
    report = report if report is not None else IngestionReport()
    if not csv_text:
        return []
    # Only "\n" ends a row; str.splitlines() would also break on characters
    # such as U+2028 that can appear inside a pasted cell
    lines = [line.rstrip("\r") for line in csv_text.strip().split("\n")]
    if len(lines) < 2:
        return []

    records: list[MarketRecord] = []
    for line_number, line in enumerate(lines[1:], start=2):
        values = tokenize_csv_line(line)
        record = build_record(values, year)
        if record is not None:
            records.append(record)
            continue

        report.skipped_lines.append(line_number)
        if len(values) < MIN_COLUMNS:
            report.too_few_columns += 1
            logger.debug(f"Line {line_number}: skipped, only {len(values)} columns")
        elif not values[COL_NAME].strip():
            report.missing_name += 1
            logger.debug(f"Line {line_number}: skipped, no market name")
        else:
            report.bad_coordinates += 1
            logger.debug(f"Line {line_number}: skipped {values[COL_NAME].strip()!r}, bad coordinates")

    report.kept = len(records)
    logger.info(f"Parsed {report.kept} markets ({report.skipped} rows skipped)")
    return assign_market_ids(records)


def load_catalog(
    catalog,
    config: SeasonConfig,
    fetch: Callable[[str, float], str] = fetch_sheet_csv_cached,
    logger_instance: Optional[logging.Logger] = None,
) -> bool:
    """
    Fetch the sheet, parse it and load the catalog.

    A fetch failure is fatal for the session: the catalog stays empty and
    carries a user-facing error message. No retry is attempted.

    Returns:
        True if the catalog was loaded
    """
    log = logger_instance or logger
    try:
        csv_text = fetch(build_csv_url(config.csv_url_template, config.sheet_id), config.timeout)
    except SheetFetchError as e:
        log.error(f"Error fetching market data: {e}")
        catalog.mark_failed(f"{LOAD_ERROR_MESSAGE} ({e})")
        return False

    records = build_records(csv_text, config.year)
    if records:
        log.info(f"First market: {records[0].name}")
    catalog.load(records)
    return True
