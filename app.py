"""
Holiday Markets Page

Map and table of the season's holiday markets with search, city/region and
date filters, sorting, and a detail panel for the selected market.

Run with:
    streamlit run app.py
"""

from typing import Optional

import pandas as pd
import streamlit as st

from logging_config import setup_logging
from services import load_catalog, MarketCatalog
from settings_service import SettingsService
from state import get_catalog, ss_get, ss_set
from ui import (
    TABLE_COLUMNS,
    create_market_map,
    dispatch,
    format_results_count,
    get_market_table_column_config,
    render_filters,
    render_market_details,
    selected_market_id,
)

settings = SettingsService()
logger = setup_logging(__name__, log_file="app.log", level=settings.log_level)


def _consume(key: str, value: Optional[str]) -> Optional[str]:
    """Return value only the first time it is seen for key.

    Streamlit keeps a widget's selection across reruns; without this a
    closed detail panel would reopen on the next interaction.
    """
    last_key = f"{key}_last"
    if ss_get(last_key) == value:
        return None
    ss_set(last_key, value)
    return value


def render_map(catalog: MarketCatalog, season) -> None:
    fig = create_market_map(catalog.view_frame(), season, catalog.selected)
    event = st.plotly_chart(
        fig,
        width="stretch",
        on_select="rerun",
        selection_mode="points",
        key="market_map",
    )
    clicked = _consume("market_map", selected_market_id(event))
    if clicked and clicked != catalog.selected_id:
        dispatch(catalog, "select", clicked)
        st.rerun()


def render_table(catalog: MarketCatalog) -> None:
    rows = catalog.table_rows()
    if not rows:
        st.info("No markets found")
        return

    table_df = pd.DataFrame(rows, columns=["id"] + TABLE_COLUMNS)
    event = st.dataframe(
        table_df,
        hide_index=True,
        width="stretch",
        column_config=get_market_table_column_config(),
        on_select="rerun",
        selection_mode="single-row",
        key="market_table",
    )
    picked_rows = event.selection.rows if event else []
    picked = table_df.iloc[picked_rows[0]]["id"] if picked_rows else None
    picked = _consume("market_table", picked)
    if picked and picked != catalog.selected_id:
        dispatch(catalog, "select", picked)
        st.rerun()


def _load(catalog: MarketCatalog, season) -> bool:
    logger.info(f"Loading {season.title} ({settings.env}) from sheet {season.sheet_id}")
    return load_catalog(catalog, season)


def main():
    season = settings.season
    st.set_page_config(page_title=season.title, page_icon="❄️", layout="wide")

    with st.spinner("Fetching markets data..."):
        catalog = get_catalog(lambda c: _load(c, season))

    st.title(f"❄️ {season.title}")

    if catalog.load_error:
        st.error(catalog.load_error)
        return

    render_filters(catalog)

    st.caption(format_results_count(len(catalog)))

    map_col, table_col = st.columns([0.6, 0.4])
    with map_col:
        render_map(catalog, season)
    with table_col:
        render_table(catalog)

    market = catalog.selected
    if market is not None:
        render_market_details(catalog, market, season)


if __name__ == "__main__":
    main()
