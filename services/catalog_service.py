"""
Catalog Service

The market catalog: every ingested record plus the user's filter, sort and
selection state, and the filtered+sorted "current view" derived from them.

Design Principles:
1. Mutate only through the contract methods; each one ends in recompute()
2. recompute() rebuilds the view from scratch, never patches it
3. Reference dates (today, tomorrow, weekend) are fixed when the catalog is
   created, so a long-lived session keeps answering for the same day
4. No Streamlit imports - the page layer stores the catalog in session state
"""

from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional
import logging

import pandas as pd

from domain.enums import DateFilter, SortKey
from domain.models import FilterState, MarketRecord
from logging_config import setup_logging

logger = setup_logging(__name__, log_file="catalog_service.log")

# Elapsed-time day, not a calendar day; DST shifts are ignored.
MS_PER_DAY = 86_400_000
SATURDAY = 5

VIEW_COLUMNS = [
    "market_id", "name", "raw_date_text", "city", "region", "cost",
    "latitude", "longitude", "is_selected",
]


def next_weekend(today: date) -> tuple[date, date]:
    """
    Saturday and Sunday of the coming weekend.

    A Saturday "today" looks a full week ahead rather than at itself; a
    Sunday looks six days ahead.
    """
    days_until_saturday = (SATURDAY - today.weekday()) % 7 or 7
    start = today + timedelta(days=days_until_saturday)
    return start, start + timedelta(days=1)


def _sort_value(record: MarketRecord, key: SortKey) -> str:
    if key is SortKey.NAME:
        return record.name
    if key is SortKey.DATE:
        return record.raw_date_text.lower()
    return record.city.lower()


class MarketCatalog:
    """
    In-memory market catalog and query engine.

    Example:
        catalog = MarketCatalog()
        catalog.load(records)
        catalog.set_city_filter("Denver")
        catalog.set_date_filter("weekend")
        catalog.set_sort("date", ascending=False)
        for market in catalog.current_view:
            ...
    """

    def __init__(
        self,
        now: Optional[datetime] = None,
        logger_instance: Optional[logging.Logger] = None,
    ):
        self._logger = logger_instance or logger
        self._now = now or datetime.now()
        tomorrow = self._now + timedelta(milliseconds=MS_PER_DAY)

        self.today: date = self._now.date()
        self.tomorrow: date = tomorrow.date()
        self.weekend_start, self.weekend_end = next_weekend(self.today)

        self._records: list[MarketRecord] = []
        self._by_id: dict[str, MarketRecord] = {}
        self._filters = FilterState()
        self._sort_key = SortKey.NAME
        self._sort_ascending = True
        self._selected_id: Optional[str] = None
        self._view: list[MarketRecord] = []
        self._loaded = False
        self.load_error: Optional[str] = None

    # -------------------------------------------------------------------------
    # Read-only state
    # -------------------------------------------------------------------------

    @property
    def all_records(self) -> list[MarketRecord]:
        return list(self._records)

    @property
    def current_view(self) -> list[MarketRecord]:
        return list(self._view)

    @property
    def filter_state(self) -> FilterState:
        return self._filters

    @property
    def sort_key(self) -> SortKey:
        return self._sort_key

    @property
    def sort_ascending(self) -> bool:
        return self._sort_ascending

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[MarketRecord]:
        if self._selected_id is None:
            return None
        return self._by_id.get(self._selected_id)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def __len__(self) -> int:
        return len(self._view)

    def get(self, market_id: str) -> Optional[MarketRecord]:
        return self._by_id.get(market_id)

    # -------------------------------------------------------------------------
    # Population
    # -------------------------------------------------------------------------

    def load(self, records: list[MarketRecord]) -> None:
        """Replace all records and rebuild the view."""
        self._records = list(records)
        self._by_id = {r.market_id: r for r in self._records}
        if len(self._by_id) != len(self._records):
            self._logger.warning("Catalog loaded with duplicate market ids; lookups keep the last one")
        if self._selected_id not in self._by_id:
            self._selected_id = None
        self._loaded = True
        self.load_error = None
        self._logger.info(f"Catalog loaded with {len(self._records)} markets")
        self.recompute()

    def mark_failed(self, message: str) -> None:
        """Record a fatal ingestion failure; the catalog stays empty."""
        self._records = []
        self._by_id = {}
        self._view = []
        self._selected_id = None
        self._loaded = False
        self.load_error = message

    # -------------------------------------------------------------------------
    # Filter and sort mutations
    # -------------------------------------------------------------------------

    def set_search(self, text: Optional[str]) -> None:
        self._filters = replace(self._filters, search_text=text or "")
        self.recompute()

    def set_city_filter(self, city: Optional[str]) -> None:
        self._filters = replace(self._filters, city=city or "")
        self.recompute()

    def set_region_filter(self, region: Optional[str]) -> None:
        self._filters = replace(self._filters, region=region or "")
        self.recompute()

    def set_date_filter(self, kind) -> None:
        """
        Set the quick date filter.

        Args:
            kind: DateFilter or one of "", "today", "tomorrow", "weekend"

        Raises:
            ValueError: for any other value
        """
        self._filters = replace(self._filters, date_filter=DateFilter.from_value(kind))
        self.recompute()

    def toggle_date_filter(self, kind) -> DateFilter:
        """Activate kind, or clear it if it is already active. Returns the new filter."""
        wanted = DateFilter.from_value(kind)
        if self._filters.date_filter is wanted:
            wanted = DateFilter.NONE
        self.set_date_filter(wanted)
        return wanted

    def set_sort(self, key, ascending: bool = True) -> None:
        """
        Sort the view by "name", "date" or "city".

        Raises:
            ValueError: for an unknown key
        """
        self._sort_key = SortKey.from_value(key)
        self._sort_ascending = bool(ascending)
        self.recompute()

    def clear_filters(self) -> None:
        self._filters = FilterState()
        self.recompute()

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, market_id: Optional[str]) -> Optional[MarketRecord]:
        """Select a market by id; unknown ids clear the selection."""
        if market_id is None or market_id not in self._by_id:
            self._selected_id = None
            return None
        self._selected_id = market_id
        return self._by_id[market_id]

    def clear_selection(self) -> None:
        self._selected_id = None

    # -------------------------------------------------------------------------
    # Query engine
    # -------------------------------------------------------------------------

    def matches_search(self, record: MarketRecord) -> bool:
        needle = self._filters.search_text.lower()
        if not needle:
            return True
        return (
            needle in record.name.lower()
            or needle in record.address.lower()
            or needle in record.description.lower()
        )

    def matches_date(self, record: MarketRecord) -> bool:
        kind = self._filters.date_filter
        if kind is DateFilter.NONE:
            return True
        if kind is DateFilter.TODAY:
            return record.is_open_on(self.today)
        if kind is DateFilter.TOMORROW:
            return record.is_open_on(self.tomorrow)
        return record.is_open_on_any((self.weekend_start, self.weekend_end))

    def matches(self, record: MarketRecord) -> bool:
        """True if record passes every active filter."""
        f = self._filters
        if f.city and record.city != f.city:
            return False
        if f.region and record.region != f.region:
            return False
        return self.matches_search(record) and self.matches_date(record)

    def recompute(self) -> list[MarketRecord]:
        """Rebuild current_view from all records, filters and sort."""
        filtered = [r for r in self._records if self.matches(r)]
        # sorted() is stable in both directions, so ties keep sheet order
        self._view = sorted(
            filtered,
            key=lambda r: _sort_value(r, self._sort_key),
            reverse=not self._sort_ascending,
        )
        self._logger.debug(
            f"View recomputed: {len(self._view)}/{len(self._records)} markets, "
            f"filters={self._filters}, sort={self._sort_key.value} "
            f"{'asc' if self._sort_ascending else 'desc'}"
        )
        return self.current_view

    # -------------------------------------------------------------------------
    # Filter options and view projections
    # -------------------------------------------------------------------------

    def city_options(self) -> list[str]:
        """Distinct cities across all records, sorted."""
        return sorted({r.city for r in self._records})

    def region_options(self) -> list[str]:
        return sorted({r.region for r in self._records})

    def marker_points(self) -> list[dict]:
        """Map markers for the current view."""
        return [
            {
                "id": r.market_id,
                "latitude": r.latitude,
                "longitude": r.longitude,
                "is_selected": r.market_id == self._selected_id,
            }
            for r in self._view
        ]

    def table_rows(self) -> list[dict]:
        """Table rows for the current view, in view order."""
        return [
            {"id": r.market_id, "name": r.name, "raw_date_text": r.raw_date_text, "city": r.city}
            for r in self._view
        ]

    def view_frame(self) -> pd.DataFrame:
        """Current view as a DataFrame, one row per market, in view order."""
        if not self._view:
            return pd.DataFrame(columns=VIEW_COLUMNS)
        return pd.DataFrame(
            [
                {
                    "market_id": r.market_id,
                    "name": r.name,
                    "raw_date_text": r.raw_date_text,
                    "city": r.city,
                    "region": r.region,
                    "cost": r.cost,
                    "latitude": r.latitude,
                    "longitude": r.longitude,
                    "is_selected": r.market_id == self._selected_id,
                }
                for r in self._view
            ],
            columns=VIEW_COLUMNS,
        )
