"""
Tests for domain models, enums and converters

Pure Python, no Streamlit or network.
"""
from dataclasses import FrozenInstanceError
from datetime import date

import pytest

from domain import DateFilter, FilterState, MarketRecord, SortKey
from domain.converters import clean_field, parse_coordinate, slugify


class TestMarketRecord:
    def test_defaults(self):
        record = MarketRecord(market_id="a", name="A", latitude=1.0, longitude=2.0)
        assert record.region == "Unknown"
        assert record.city == "Unknown"
        assert record.cost == "Free"
        assert record.dates == ()
        assert not record.has_schedule

    def test_frozen(self):
        record = MarketRecord(market_id="a", name="A", latitude=1.0, longitude=2.0)
        with pytest.raises(FrozenInstanceError):
            record.name = "B"

    def test_unscheduled_market_is_always_open(self):
        record = MarketRecord(market_id="a", name="A", latitude=1.0, longitude=2.0)
        assert record.is_open_on(date(2025, 12, 25))
        assert record.is_open_on_any([])

    def test_scheduled_market(self):
        record = MarketRecord(
            market_id="a", name="A", latitude=1.0, longitude=2.0,
            dates=(date(2025, 12, 6), date(2025, 12, 7)),
        )
        assert record.is_open_on(date(2025, 12, 7))
        assert not record.is_open_on(date(2025, 12, 8))
        assert record.is_open_on_any([date(2025, 12, 1), date(2025, 12, 6)])
        assert not record.is_open_on_any([date(2025, 12, 13), date(2025, 12, 14)])

    def test_with_id_copies(self):
        record = MarketRecord(market_id="", name="A", latitude=1.0, longitude=2.0)
        renamed = record.with_id("a-2")
        assert renamed.market_id == "a-2"
        assert record.market_id == ""


class TestEnums:
    @pytest.mark.parametrize("value,expected", [
        ("", DateFilter.NONE),
        (None, DateFilter.NONE),
        ("Today", DateFilter.TODAY),
        (" WEEKEND ", DateFilter.WEEKEND),
        (DateFilter.TOMORROW, DateFilter.TOMORROW),
    ])
    def test_date_filter_from_value(self, value, expected):
        assert DateFilter.from_value(value) is expected

    def test_date_filter_rejects_unknown(self):
        with pytest.raises(ValueError, match="Invalid date filter"):
            DateFilter.from_value("yesterday")

    def test_quick_filters_order(self):
        assert [f.display_name for f in DateFilter.quick_filters()] == ["Today", "Tomorrow", "This Weekend"]

    def test_sort_key_from_value(self):
        assert SortKey.from_value("CITY") is SortKey.CITY
        with pytest.raises(ValueError, match="Invalid sort key"):
            SortKey.from_value(None)

    def test_filter_state_is_active(self):
        assert not FilterState().is_active
        assert FilterState(region="Mountains").is_active
        assert FilterState(date_filter=DateFilter.TODAY).is_active


class TestConverters:
    @pytest.mark.parametrize("value,expected", [
        (" 39.74 ", 39.74),
        ("-105", -105.0),
        ("0", 0.0),
        ("1e1", 10.0),
    ])
    def test_parse_coordinate(self, value, expected):
        assert parse_coordinate(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, "", "  ", "n/a", "39.7N", "inf", "nan"])
    def test_parse_coordinate_rejects(self, value):
        assert parse_coordinate(value) is None

    def test_clean_field(self):
        assert clean_field("  Denver ") == "Denver"
        assert clean_field("   ", "Unknown") == "Unknown"
        assert clean_field(None, "Free") == "Free"

    @pytest.mark.parametrize("text,expected", [
        ("Christkindlmarket", "christkindlmarket"),
        ("  Olde Town: Holiday Market! ", "olde-town-holiday-market"),
        ("Café Noël", "caf-no-l"),
        ("!!!", "market"),
    ])
    def test_slugify(self, text, expected):
        assert slugify(text) == expected
