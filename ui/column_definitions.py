"""
Column Definitions for the Market Table

Streamlit column_config for the results table next to the map.

Usage:
    from ui import get_market_table_column_config

    st.dataframe(
        table_df,
        column_config=get_market_table_column_config(),
        hide_index=True
    )
"""

import streamlit as st

TABLE_COLUMNS = ["name", "raw_date_text", "city"]


def get_market_table_column_config() -> dict:
    """
    Column configuration for the market results table.

    Returns:
        Dict of column name -> st.column_config configuration
    """
    return {
        'name': st.column_config.TextColumn(
            "Market",
            help="Market name",
            width="medium"
        ),
        'raw_date_text': st.column_config.TextColumn(
            "Dates",
            help="Dates as listed by the market",
            width="small"
        ),
        'city': st.column_config.TextColumn(
            "City",
            help="City taken from the market address",
            width="small"
        ),
        # hidden, used to map a selected row back to its market
        'id': None,
    }
