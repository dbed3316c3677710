"""
Parser Utilities for Sheet Ingestion

Pure functions for splitting spreadsheet CSV lines and pulling a city name
out of a free-text address. No network or Streamlit dependencies.

Design:
- Pure functions (no side effects)
- Never raise on malformed input; degrade to a best-effort result
- Callers trim individual fields
"""

import re

from domain.models import UNKNOWN


# =============================================================================
# CSV Line Tokenizing
# =============================================================================

def tokenize_csv_line(line: str) -> list[str]:
    """
    Split one CSV line into fields.

    Commas inside double quotes don't split. Inside a quoted field ``""``
    is a literal quote; any other quote toggles quoted state. Fields are
    returned untrimmed. An unterminated quote runs to the end of the line.

    Args:
        line: One raw line of CSV text

    Returns:
        List of field strings (at least one, possibly empty)

    Example:
        >>> tokenize_csv_line('Tree Lighting,"Denver, CO","a ""big"" tree"')
        ['Tree Lighting', 'Denver, CO', 'a "big" tree']
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == '"':
            if in_quotes and i + 1 < length and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current))
    return fields


# =============================================================================
# City Extraction
# =============================================================================

# "CO 80202" anywhere in a segment, or a segment that is just "CO"
STATE_ZIP_PATTERN = re.compile(r'\b[A-Z]{2}\s+\d{5}\b')
BARE_STATE_PATTERN = re.compile(r'^[A-Z]{2}$')

# "101 W 14th Ave" - a segment that starts with a street number
STREET_NUMBER_PATTERN = re.compile(r'^\d+\s')


def _is_state_segment(segment: str) -> bool:
    return bool(STATE_ZIP_PATTERN.search(segment) or BARE_STATE_PATTERN.match(segment))


def _city_candidate(segment: str) -> str | None:
    if not segment or STREET_NUMBER_PATTERN.match(segment):
        return None
    return segment


def extract_city(address: str) -> str:
    """
    Guess the city from a comma-separated US-style address.

    The city is taken to be the segment just before the last segment that
    holds a state code ("CO 80202" or a bare "CO"). Segments that look like
    a street ("123 Main St") are never returned.

    Args:
        address: Free-text address

    Returns:
        City name, or "Unknown"

    Examples:
        >>> extract_city("123 Main St, Denver, CO 80211")
        'Denver'
        >>> extract_city("No State Info Here")
        'Unknown'
    """
    if not address or not address.strip():
        return UNKNOWN

    segments = [s.strip() for s in address.split(',')]

    state_index = None
    for i in range(len(segments) - 1, -1, -1):
        if _is_state_segment(segments[i]):
            state_index = i
            break

    if not state_index:
        return UNKNOWN
    return _city_candidate(segments[state_index - 1]) or UNKNOWN
