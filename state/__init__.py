"""
State Management Module

Streamlit session state for the markets page:
- Session state utilities (ss_get, ss_init, ss_set)
- The per-session MarketCatalog (get_catalog)

Usage:
    from state import ss_get, ss_init
    from state import get_catalog
"""

from state.session_state import ss_get, ss_init, ss_set
from state.catalog_state import get_catalog, CATALOG_KEY

__all__ = [
    # Session state utilities
    'ss_get',
    'ss_init',
    'ss_set',
    # Catalog
    'get_catalog',
    'CATALOG_KEY',
]
