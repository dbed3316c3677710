"""
Repository Layer Package

Encapsulates access to the external market data source so services never
talk to the network directly.

Key Components:
- sheet_repo: published Google Sheet CSV export, with a cached fetch
"""

from repositories.sheet_repo import (
    SheetFetchError,
    build_csv_url,
    looks_like_html,
    fetch_sheet_csv_cached,
)

__all__ = [
    "SheetFetchError",
    "build_csv_url",
    "looks_like_html",
    "fetch_sheet_csv_cached",
]
