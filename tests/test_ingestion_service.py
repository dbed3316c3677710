"""
Tests for the ingestion service

Builds records from a synthetic sheet export and loads a catalog through an
injected fetch function, so no test touches the network or Streamlit cache.
"""
from datetime import date
from unittest.mock import Mock

import pytest

from domain.season import SeasonConfig
from repositories.sheet_repo import SheetFetchError
from services.catalog_service import MarketCatalog
from services.ingestion_service import (
    LOAD_ERROR_MESSAGE,
    IngestionReport,
    assign_market_ids,
    build_record,
    build_records,
    load_catalog,
)


# ---------------------------------------------------------------------------
# build_record
# ---------------------------------------------------------------------------

class TestBuildRecord:
    def test_full_row(self):
        values = [
            " Christkindlmarket ", "39.7474", "-104.9903", "Denver Metro", "80202",
            "1445 Larimer St, Denver, CO 80202", "Dec. 13-14", "Free",
            "https://example.com", "Crafts",
        ]
        record = build_record(values, 2025)
        assert record is not None
        assert record.name == "Christkindlmarket"
        assert record.latitude == pytest.approx(39.7474)
        assert record.longitude == pytest.approx(-104.9903)
        assert record.city == "Denver"
        assert record.raw_date_text == "Dec. 13-14"
        assert record.dates == (date(2025, 12, 13), date(2025, 12, 14))
        assert record.market_id == ""

    def test_three_columns_is_enough(self):
        record = build_record(["Pop-up", "39.5", "-105.0"], 2025)
        assert record is not None
        assert record.region == "Unknown"
        assert record.city == "Unknown"
        assert record.cost == "Free"
        assert record.address == ""
        assert record.dates == ()

    def test_blank_region_and_cost_take_defaults(self):
        values = ["Market", "39.5", "-105.0", "  ", "", "", "", "   "]
        record = build_record(values, 2025)
        assert record.region == "Unknown"
        assert record.cost == "Free"

    def test_zero_latitude_is_a_coordinate(self):
        record = build_record(["Null Island", "0", "0"], 2025)
        assert record is not None
        assert record.latitude == 0.0

    @pytest.mark.parametrize("values", [
        ["Market", "39.5"],
        ["   ", "39.5", "-105.0"],
        ["Market", "abc", "-105.0"],
        ["Market", "39.5", ""],
        ["Market", "nan", "-105.0"],
    ])
    def test_unusable_rows(self, values):
        assert build_record(values, 2025) is None


# ---------------------------------------------------------------------------
# assign_market_ids
# ---------------------------------------------------------------------------

class TestAssignMarketIds:
    def test_duplicate_names_get_suffixes_in_order(self, make_record):
        records = [
            make_record("Holiday Bazaar", market_id="x"),
            make_record("Winter Market", market_id="x"),
            make_record("Holiday Bazaar", market_id="x"),
            make_record("Holiday Bazaar", market_id="x"),
        ]
        ids = [r.market_id for r in assign_market_ids(records)]
        assert ids == ["holiday-bazaar", "winter-market", "holiday-bazaar-2", "holiday-bazaar-3"]

    def test_suffix_avoids_existing_slug(self, make_record):
        records = [
            make_record("Market 2"),
            make_record("Market"),
            make_record("Market"),
        ]
        ids = [r.market_id for r in assign_market_ids(records)]
        assert ids == ["market-2", "market", "market-3"]
        assert len(set(ids)) == len(ids)

    def test_name_without_letters_still_gets_id(self, make_record):
        assert assign_market_ids([make_record("★★★")])[0].market_id == "market"


# ---------------------------------------------------------------------------
# build_records
# ---------------------------------------------------------------------------

class TestBuildRecords:
    def test_sample_sheet(self, sample_csv):
        report = IngestionReport()
        records = build_records(sample_csv, 2025, report)

        assert [r.name for r in records] == [
            "Christkindlmarket", "Olde Town Holiday Market", "Christkindlmarket",
        ]
        assert [r.market_id for r in records] == [
            "christkindlmarket", "olde-town-holiday-market", "christkindlmarket-2",
        ]
        assert report.kept == 3
        assert report.missing_name == 1
        assert report.bad_coordinates == 1
        assert report.too_few_columns == 1
        assert report.skipped == 3
        assert report.skipped_lines == [4, 5, 6]

    def test_sample_sheet_fields(self, sample_csv):
        first, olde_town, boulder = build_records(sample_csv, 2025)

        assert first.description == 'German-style market with "glühwein" and crafts'
        assert first.address == "1445 Larimer St, Denver, CO 80202"
        assert len(first.dates) == 33  # Nov 21 through Dec 23

        assert olde_town.city == "Arvada"
        assert olde_town.region == "Unknown"
        assert olde_town.zip_code == "80003"
        assert olde_town.cost == "Free"
        assert olde_town.website == ""

        assert boulder.city == "Boulder"
        assert boulder.cost == "$5"
        assert boulder.raw_date_text == "TBD"
        assert not boulder.has_schedule

    @pytest.mark.parametrize("text", ["", "   \n  ", "Name,Latitude,Longitude"])
    def test_no_data_rows(self, text):
        assert build_records(text, 2025) == []

    def test_surrounding_whitespace_trimmed_before_split(self):
        text = "\n\nName,Lat,Lon\nMarket,39.5,-105.0\n\n"
        records = build_records(text, 2025)
        assert len(records) == 1

    def test_crlf_line_endings(self):
        text = "Name,Lat,Lon\r\nA,39.5,-105.0\r\nB,39.6,-105.1\r\n"
        assert [r.name for r in build_records(text, 2025)] == ["A", "B"]

    @pytest.mark.parametrize("separator", ["\u2028", "\x0c", "\x1e", "\x85"])
    def test_only_newline_ends_a_row(self, separator):
        text = (
            "Name,Lat,Lon,Region,Zip,Address,Date,Cost,Website,Description\n"
            f'A,39.5,-105.0,,,,,,,"Mulled wine{separator}and crafts"\n'
            "B,39.6,-105.1\n"
        )
        report = IngestionReport()
        records = build_records(text, 2025, report)
        assert [r.name for r in records] == ["A", "B"]
        assert records[0].description == f"Mulled wine{separator}and crafts"
        assert report.skipped == 0


# ---------------------------------------------------------------------------
# load_catalog
# ---------------------------------------------------------------------------

class TestLoadCatalog:
    @pytest.fixture
    def season(self):
        return SeasonConfig(
            sheet_id="abc123",
            csv_url_template="https://sheets.example/{sheetId}.csv",
            timeout=5,
        )

    def test_success_loads_catalog(self, season, sample_csv):
        fetch = Mock(return_value=sample_csv)
        catalog = MarketCatalog()

        assert load_catalog(catalog, season, fetch=fetch) is True

        fetch.assert_called_once_with("https://sheets.example/abc123.csv", 5)
        assert catalog.is_loaded
        assert catalog.load_error is None
        assert len(catalog.all_records) == 3
        assert len(catalog) == 3

    def test_fetch_failure_marks_catalog_failed(self, season):
        fetch = Mock(side_effect=SheetFetchError("Failed to fetch data: 403"))
        catalog = MarketCatalog()
        log = Mock()

        assert load_catalog(catalog, season, fetch=fetch, logger_instance=log) is False

        assert not catalog.is_loaded
        assert catalog.all_records == []
        assert catalog.current_view == []
        assert catalog.load_error.startswith(LOAD_ERROR_MESSAGE)
        assert "403" in catalog.load_error
        log.error.assert_called_once()

    def test_header_only_sheet_loads_empty(self, season):
        catalog = MarketCatalog()
        assert load_catalog(catalog, season, fetch=lambda url, timeout: "Name,Lat,Lon") is True
        assert catalog.is_loaded
        assert catalog.current_view == []
