"""
Market Map

Plotly map of the current view. Markers cluster when zoomed out; the
selected market is drawn on its own unclustered layer so it always shows.

The figure is returned unrendered; the page passes it to st.plotly_chart.
"""

from typing import Optional

import pandas as pd
import plotly.graph_objects as go

from domain.models import MarketRecord
from domain.season import SeasonConfig

MARKER_COLOR = "#1f6f8b"
SELECTED_COLOR = "#c0392b"
CLUSTER_COLOR = "#5fa8d3"
MAP_HEIGHT = 560

HOVER_TEMPLATE = "<b>%{text}</b><br>%{customdata[1]}<br>%{customdata[2]}<extra></extra>"


def _customdata(frame: pd.DataFrame):
    return frame[["market_id", "raw_date_text", "city"]].to_numpy()


def create_market_map(
    frame: pd.DataFrame,
    season: SeasonConfig,
    selected: Optional[MarketRecord] = None,
) -> go.Figure:
    """
    Build the market map.

    Args:
        frame: MarketCatalog.view_frame() for the current view
        season: Map center, zoom and style
        selected: Currently selected market, centered and highlighted

    Returns:
        Plotly Figure; every marker carries its market_id as customdata[0]
    """
    fig = go.Figure()

    if not frame.empty:
        fig.add_trace(go.Scattermap(
            lat=frame["latitude"],
            lon=frame["longitude"],
            mode="markers",
            text=frame["name"],
            customdata=_customdata(frame),
            hovertemplate=HOVER_TEMPLATE,
            marker=dict(size=14, color=MARKER_COLOR),
            cluster=dict(enabled=True, color=CLUSTER_COLOR, size=28, step=10, maxzoom=12),
            name="Markets",
        ))

    if selected is not None:
        chosen = frame[frame["market_id"] == selected.market_id] if not frame.empty else frame
        if not chosen.empty:
            fig.add_trace(go.Scattermap(
                lat=chosen["latitude"],
                lon=chosen["longitude"],
                mode="markers",
                text=chosen["name"],
                customdata=_customdata(chosen),
                hovertemplate=HOVER_TEMPLATE,
                marker=dict(size=22, color=SELECTED_COLOR),
                name="Selected",
            ))

    if selected is not None:
        center = dict(lat=selected.latitude, lon=selected.longitude)
        zoom = season.selected_zoom
    else:
        center = dict(lat=season.center_lat, lon=season.center_lon)
        zoom = season.zoom

    fig.update_layout(
        map=dict(style=season.map_style, center=center, zoom=zoom),
        margin=dict(l=0, r=0, t=0, b=0),
        height=MAP_HEIGHT,
        showlegend=False,
        clickmode="event+select",
    )
    return fig


def selected_market_id(event) -> Optional[str]:
    """Pull the clicked market_id out of a st.plotly_chart selection event."""
    if not event:
        return None
    try:
        points = event["selection"]["points"]
    except (KeyError, TypeError):
        return None
    for point in points:
        data = point.get("customdata")
        if data:
            return str(data[0])
    return None
