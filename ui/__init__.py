"""
UI Package

Presentation layer components for the Streamlit page: the map figure,
table column config, sidebar controls, detail panel and formatting helpers.

This package keeps widget wiring out of the services, so the catalog and
parsers stay testable without a Streamlit runtime.
"""

from ui.column_definitions import get_market_table_column_config, TABLE_COLUMNS
from ui.controls import dispatch, register_handler, registered_events, render_filters
from ui.details import render_market_details
from ui.formatters import (
    format_market_days,
    format_results_count,
    format_short_date,
    render_calendar_html,
)
from ui.map_view import create_market_map, selected_market_id

__all__ = [
    # Column configs
    "get_market_table_column_config",
    "TABLE_COLUMNS",
    # Controls
    "dispatch",
    "register_handler",
    "registered_events",
    "render_filters",
    # Details
    "render_market_details",
    # Formatters
    "format_market_days",
    "format_results_count",
    "format_short_date",
    "render_calendar_html",
    # Map
    "create_market_map",
    "selected_market_id",
]
