"""
Market Controls

Sidebar filter/sort widgets and the event table that turns widget changes
into MarketCatalog calls.

Widget values are compared with the catalog on every run and any change goes
through dispatch(), so the catalog is only ever mutated by the handlers
registered here.
"""

from typing import Any, Callable

import streamlit as st

from domain.enums import DateFilter, SortKey
from logging_config import setup_logging
from services.catalog_service import MarketCatalog
from state import ss_init

logger = setup_logging(__name__, log_file="controls.log")

ALL_OPTION = "All"
ASCENDING = "Ascending"
DESCENDING = "Descending"

# widget keys
SEARCH_KEY = "search_text"
CITY_KEY = "city_filter"
REGION_KEY = "region_filter"
DATE_KEY = "date_filter"
SORT_KEY = "sort_key"
SORT_DIRECTION_KEY = "sort_direction"

Handler = Callable[[MarketCatalog, Any], None]

_HANDLERS: dict[str, Handler] = {}


def register_handler(event: str) -> Callable[[Handler], Handler]:
    """Register the catalog call for a UI event name."""
    def decorator(func: Handler) -> Handler:
        _HANDLERS[event] = func
        return func
    return decorator


def registered_events() -> list[str]:
    return sorted(_HANDLERS)


def dispatch(catalog: MarketCatalog, event: str, value: Any = None) -> None:
    """
    Apply a UI event to the catalog.

    Raises:
        ValueError: if no handler is registered for event
    """
    handler = _HANDLERS.get(event)
    if handler is None:
        raise ValueError(f"No handler registered for UI event {event!r}")
    logger.debug(f"dispatch {event}={value!r}")
    handler(catalog, value)


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------

@register_handler("search")
def _on_search(catalog: MarketCatalog, value) -> None:
    catalog.set_search((value or "").strip())


@register_handler("city")
def _on_city(catalog: MarketCatalog, value) -> None:
    catalog.set_city_filter("" if value in (None, ALL_OPTION) else value)


@register_handler("region")
def _on_region(catalog: MarketCatalog, value) -> None:
    catalog.set_region_filter("" if value in (None, ALL_OPTION) else value)


@register_handler("date")
def _on_date(catalog: MarketCatalog, value) -> None:
    catalog.set_date_filter(value or "")


@register_handler("sort")
def _on_sort(catalog: MarketCatalog, value) -> None:
    catalog.set_sort(value or SortKey.NAME.value, catalog.sort_ascending)


@register_handler("sort_direction")
def _on_sort_direction(catalog: MarketCatalog, value) -> None:
    catalog.set_sort(catalog.sort_key, value != DESCENDING)


@register_handler("select")
def _on_select(catalog: MarketCatalog, value) -> None:
    catalog.select(value)


@register_handler("close_details")
def _on_close_details(catalog: MarketCatalog, value) -> None:
    catalog.clear_selection()


# -----------------------------------------------------------------------------
# Widgets
# -----------------------------------------------------------------------------

def _sync(catalog: MarketCatalog, event: str, value, current) -> None:
    """Dispatch event only when the widget value differs from the catalog."""
    if value != current:
        dispatch(catalog, event, value)


def render_filters(catalog: MarketCatalog) -> None:
    """Draw the sidebar filter and sort widgets and apply any changes to catalog."""
    ss_init({
        SEARCH_KEY: "",
        CITY_KEY: ALL_OPTION,
        REGION_KEY: ALL_OPTION,
        DATE_KEY: None,
        SORT_KEY: SortKey.NAME.value,
        SORT_DIRECTION_KEY: ASCENDING,
    })
    filters = catalog.filter_state

    st.sidebar.header("Find a Market")
    search = st.sidebar.text_input(
        "Search",
        key=SEARCH_KEY,
        placeholder="Name, address or description",
    )
    _sync(catalog, "search", search.strip(), filters.search_text)

    city = st.sidebar.selectbox(
        "City",
        options=[ALL_OPTION] + catalog.city_options(),
        key=CITY_KEY,
    )
    _sync(catalog, "city", city, filters.city or ALL_OPTION)

    region = st.sidebar.selectbox(
        "Region",
        options=[ALL_OPTION] + catalog.region_options(),
        key=REGION_KEY,
    )
    _sync(catalog, "region", region, filters.region or ALL_OPTION)

    with st.sidebar.container(border=True):
        # pills return None when the active pill is clicked again
        when = st.pills(
            "When",
            options=[f.value for f in DateFilter.quick_filters()],
            format_func=lambda v: DateFilter(v).display_name,
            selection_mode="single",
            key=DATE_KEY,
        )
    _sync(catalog, "date", when, filters.date_filter.value or None)

    st.sidebar.subheader("Sort")
    sort_key = st.sidebar.selectbox(
        "Sort by",
        options=[k.value for k in SortKey],
        format_func=lambda v: SortKey(v).display_name,
        key=SORT_KEY,
    )
    _sync(catalog, "sort", sort_key, catalog.sort_key.value)

    direction = st.sidebar.radio(
        "Direction",
        options=[ASCENDING, DESCENDING],
        horizontal=True,
        key=SORT_DIRECTION_KEY,
    )
    _sync(catalog, "sort_direction", direction, ASCENDING if catalog.sort_ascending else DESCENDING)
