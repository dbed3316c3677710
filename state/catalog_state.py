"""
Catalog State

Keeps one MarketCatalog per browser session in ``st.session_state``.

The catalog is created and loaded on the first run of a session. Later
reruns get the same object back, so filters, sort and selection survive
widget interactions, and the sheet is fetched exactly once per session.
"""

from typing import Callable

import streamlit as st

from services.catalog_service import MarketCatalog

CATALOG_KEY = "market_catalog"


def get_catalog(loader: Callable[[MarketCatalog], object]) -> MarketCatalog:
    """Return the session's catalog, creating and loading it on first use.

    Args:
        loader: Called once with the new, empty catalog to populate it
            (see services.ingestion_service.load_catalog)

    Example:
        catalog = get_catalog(lambda c: load_catalog(c, season))
    """
    if CATALOG_KEY not in st.session_state:
        catalog = MarketCatalog()
        loader(catalog)
        st.session_state[CATALOG_KEY] = catalog
    return st.session_state[CATALOG_KEY]
