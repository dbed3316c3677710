"""
Domain Models Package

Core domain types for the holiday markets map. These dataclasses and enums
carry no Streamlit or network dependencies.

Key Components:
- Enums: DateFilter, SortKey for the catalog controls
- Models: MarketRecord, FilterState
- Season: SeasonConfig with the fixed season year
"""

from domain.enums import DateFilter, SortKey
from domain.models import MarketRecord, FilterState, UNKNOWN, DEFAULT_COST
from domain.season import SeasonConfig, DEFAULT_SEASON_YEAR, DEFAULT_SEASON_MONTHS

__all__ = [
    # Enums
    "DateFilter",
    "SortKey",
    # Models
    "MarketRecord",
    "FilterState",
    "UNKNOWN",
    "DEFAULT_COST",
    # Season
    "SeasonConfig",
    "DEFAULT_SEASON_YEAR",
    "DEFAULT_SEASON_MONTHS",
]
