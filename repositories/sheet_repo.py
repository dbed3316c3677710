"""
Sheet Repository

Fetches the published market spreadsheet as CSV text.

Design Principles:
1. Single Responsibility - Only the HTTP fetch and body sanity check
2. Cached Functions - Module-level @st.cache_data wrapper around a plain
   implementation function that tests call directly
3. Fail loudly - Every unusable response raises SheetFetchError
"""

import time
import logging
from typing import Optional

import requests
import streamlit as st

from logging_config import setup_logging

logger = setup_logging(__name__, log_file="sheet_repo.log")

DEFAULT_TIMEOUT = 30
HTML_MARKERS = ("<!doctype", "<html")


class SheetFetchError(Exception):
    """The sheet could not be fetched or did not return CSV."""


def build_csv_url(url_template: str, sheet_id: str) -> str:
    """Substitute ``{sheetId}`` in the export URL template."""
    return url_template.replace("{sheetId}", sheet_id)


def looks_like_html(body: str) -> bool:
    """True when the body is a web page (sign-in or error page) instead of CSV.

    Only the start of the body is checked, so a cell that mentions "<html>"
    doesn't reject the whole sheet.
    """
    head = body.lstrip("\ufeff \t\r\n")[:64].lower()
    return head.startswith(HTML_MARKERS)


# =============================================================================
# Implementation Functions (non-cached, for testability)
# =============================================================================

def _fetch_sheet_csv_impl(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
    logger_instance: Optional[logging.Logger] = None,
) -> str:
    """Download the sheet export and return its text.

    Raises:
        SheetFetchError: on network errors, non-2xx status, or an empty or
            HTML-shaped body (usually a sheet that isn't shared publicly)
    """
    log = logger_instance or logger
    http = session or requests
    start = time.perf_counter()
    log.info(f"Fetching market sheet: {url}")

    try:
        response = http.get(url, headers={"Accept": "text/csv"}, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        log.error(f"Sheet fetch timed out after {timeout}s")
        raise SheetFetchError(f"Timed out fetching market data after {timeout}s") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        log.error(f"Sheet fetch failed with status {status}")
        raise SheetFetchError(f"Failed to fetch data: {status}") from e
    except requests.exceptions.RequestException as e:
        log.error(f"Sheet fetch error: {e}")
        raise SheetFetchError(f"Failed to fetch data: {e}") from e

    body = response.text or ""
    elapsed = round((time.perf_counter() - start) * 1000, 2)
    log.info(f"TIME fetch_sheet_csv() = {elapsed} ms, {len(body)} characters")

    if not body.strip():
        log.error("Sheet returned an empty body")
        raise SheetFetchError("The market sheet returned no data.")
    if looks_like_html(body):
        log.error("Received HTML instead of CSV - likely a redirect or sign-in page")
        raise SheetFetchError(
            "Google Sheets returned HTML instead of CSV. "
            "Make sure the sheet is publicly accessible."
        )
    return body


# =============================================================================
# Cached Functions
# =============================================================================

@st.cache_data(ttl=600, show_spinner=False)
def fetch_sheet_csv_cached(url: str, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Memoized sheet fetch. Failures are not cached (the exception propagates)."""
    return _fetch_sheet_csv_impl(url, timeout)
