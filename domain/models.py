"""
Domain Models

Dataclasses representing holiday markets and the catalog's filter state.
Records are frozen once built; the catalog never patches one in place.

Design Principles:
1. Immutability (frozen=True) - Safe to share between view projections
2. Explicit identity - market_id is the key for markers, rows and selection
3. Computed properties - Schedule questions answered on the model
"""

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Iterable

from domain.enums import DateFilter

UNKNOWN = "Unknown"
DEFAULT_COST = "Free"


# =============================================================================
# MarketRecord - One row of the published sheet
# =============================================================================

@dataclass(frozen=True)
class MarketRecord:
    """
    A single holiday market as listed in the spreadsheet.

    Attributes:
        market_id: Stable identifier, unique within one ingestion
        name: Market name (never blank)
        latitude: Marker latitude
        longitude: Marker longitude
        region: Sheet-provided region, "Unknown" when blank
        city: City derived from the address, "Unknown" when not found
        zip_code: Postal code cell
        address: Free-text street address
        raw_date_text: Date text exactly as written in the sheet (trimmed)
        cost: Admission, "Free" when blank
        website: Market website URL
        description: Free-text description
        dates: Parsed market days; empty means the schedule is unknown
    """
    market_id: str
    name: str
    latitude: float
    longitude: float
    region: str = UNKNOWN
    city: str = UNKNOWN
    zip_code: str = ""
    address: str = ""
    raw_date_text: str = ""
    cost: str = DEFAULT_COST
    website: str = ""
    description: str = ""
    dates: tuple[date, ...] = field(default_factory=tuple)

    @property
    def has_schedule(self) -> bool:
        """False when no market day could be parsed."""
        return len(self.dates) > 0

    def is_open_on(self, day: date) -> bool:
        """True if the market runs on day, or its schedule is unknown."""
        if not self.dates:
            return True
        return day in self.dates

    def is_open_on_any(self, days: Iterable[date]) -> bool:
        """True if the market runs on any of days, or its schedule is unknown."""
        if not self.dates:
            return True
        wanted = set(days)
        return any(d in wanted for d in self.dates)

    def with_id(self, market_id: str) -> "MarketRecord":
        return replace(self, market_id=market_id)


# =============================================================================
# FilterState - What the user has narrowed the view to
# =============================================================================

@dataclass(frozen=True)
class FilterState:
    """
    Active filters. Every non-empty filter must pass for a record to show.

    Attributes:
        search_text: Case-insensitive substring over name/address/description
        city: Exact city, "" for all
        region: Exact region, "" for all
        date_filter: Quick date filter
    """
    search_text: str = ""
    city: str = ""
    region: str = ""
    date_filter: DateFilter = DateFilter.NONE

    @property
    def is_active(self) -> bool:
        return bool(
            self.search_text or self.city or self.region
            or self.date_filter is not DateFilter.NONE
        )
