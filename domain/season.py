"""
Season Configuration Domain Model

Pure Python dataclass describing the market season being displayed.
No Streamlit or infrastructure dependencies, domain layer only.
"""

from dataclasses import dataclass

DEFAULT_SEASON_YEAR = 2025
DEFAULT_SEASON_MONTHS = (11, 12)
DEFAULT_CSV_URL_TEMPLATE = (
    "https://docs.google.com/spreadsheets/d/{sheetId}/export?format=csv&gid=0"
)


@dataclass(frozen=True)
class SeasonConfig:
    """Immutable configuration for one holiday-market season.

    Attributes:
        sheet_id: Published Google Sheet identifier
        csv_url_template: Export URL with a ``{sheetId}`` placeholder
        year: Season year every parsed market date is anchored to
        months: Calendar months shown in the detail panel (1-12)
        title: Page title
        timeout: Seconds before the sheet fetch gives up
        center_lat: Initial map center latitude
        center_lon: Initial map center longitude
        zoom: Initial map zoom
        selected_zoom: Zoom used when a market is selected
        map_style: Plotly map style name
    """

    sheet_id: str
    csv_url_template: str = DEFAULT_CSV_URL_TEMPLATE
    year: int = DEFAULT_SEASON_YEAR
    months: tuple[int, ...] = DEFAULT_SEASON_MONTHS
    title: str = "Holiday Markets"
    timeout: float = 30.0
    center_lat: float = 39.0
    center_lon: float = -105.5
    zoom: float = 6
    selected_zoom: float = 11
    map_style: str = "carto-positron"

