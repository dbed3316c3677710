"""
Type Conversion Utilities for Domain Model Factories

Safe conversions used when building MarketRecords from spreadsheet rows.
Spreadsheet cells arrive as raw strings (or not at all when a row is short),
so every helper accepts None and falls back to a default instead of raising.

Usage:
    ```python
    from domain.converters import parse_coordinate, clean_field

    lat = parse_coordinate(values[1])        # None if not a finite number
    region = clean_field(values[3], "Unknown")
    ```
"""

import math
import re
from typing import Optional

_SLUG_STRIP = re.compile(r"[^a-z0-9]+")


def parse_coordinate(value) -> Optional[float]:
    """
    Parse a latitude/longitude cell.

    Args:
        value: Raw cell text or None when the column is missing

    Returns:
        The float value, or None if the cell is blank, not a number,
        NaN or infinite

    Examples:
        >>> parse_coordinate(" 39.74 ")
        39.74
        >>> parse_coordinate("n/a") is None
        True
        >>> parse_coordinate(None) is None
        True
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def clean_field(value, default: str = "") -> str:
    """
    Trim a text cell, returning default when it is missing or blank.

    Examples:
        >>> clean_field("  Denver ")
        'Denver'
        >>> clean_field("   ", default="Unknown")
        'Unknown'
        >>> clean_field(None, default="Free")
        'Free'
    """
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def slugify(text: str) -> str:
    """Lowercase, hyphen-separated identifier built from text."""
    slug = _SLUG_STRIP.sub("-", text.lower()).strip("-")
    return slug or "market"
