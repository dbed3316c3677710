"""
Market Detail Panel

Shows the selected market: date, cost and region across the top, the
description and location below, and the season calendar with the market's
days highlighted.
"""

import streamlit as st

from domain.models import MarketRecord
from domain.season import SeasonConfig
from services.calendar_service import build_season_calendar
from services.catalog_service import MarketCatalog
from ui.controls import dispatch
from ui.formatters import CALENDAR_CSS, format_market_days, render_calendar_html


def _close(catalog: MarketCatalog) -> None:
    dispatch(catalog, "close_details")


def render_market_details(catalog: MarketCatalog, market: MarketRecord, season: SeasonConfig) -> None:
    """Draw the detail panel for market inside a bordered container."""
    with st.container(border=True):
        title_col, close_col = st.columns([0.9, 0.1], vertical_alignment="center")
        with title_col:
            st.subheader(market.name)
        with close_col:
            st.button("✕", key="close_details", help="Close details",
                      on_click=_close, args=(catalog,))

        date_col, cost_col, region_col = st.columns(3)
        with date_col:
            st.caption("Date")
            st.markdown(market.raw_date_text or "See website")
        with cost_col:
            st.caption("Cost")
            st.markdown(market.cost)
        with region_col:
            st.caption("Region")
            st.markdown(market.region)

        desc_col, location_col = st.columns(2)
        with desc_col:
            st.caption("Description")
            st.write(market.description or "No description provided.")
            if market.website:
                st.link_button("Visit Website", market.website)
        with location_col:
            st.caption("Location")
            st.write(market.address or "Address not listed")
            if market.zip_code:
                st.caption(f"Zip: {market.zip_code}")

        if market.has_schedule:
            st.caption(f"Open: {format_market_days(market.dates)}")
        else:
            st.caption("Schedule not listed; this market shows for every date filter.")

        months = build_season_calendar(market.dates, catalog.today, season.year, season.months)
        st.markdown(CALENDAR_CSS + render_calendar_html(months), unsafe_allow_html=True)
