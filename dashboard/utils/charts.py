"""
Chart and plotting utilities for the dashboard.
"""

from typing import Optional, Sequence

import plotly.graph_objects as go

from core.overlay import DragDeltaOverlay
from core.series import PricePoint, to_frame

_HIDE_TRACE_NAME = "<extra></extra>"

RANGE_BUTTONS = [
    dict(count=1, label="1m", step="month", stepmode="backward"),
    dict(count=3, label="3m", step="month", stepmode="backward"),
    dict(count=6, label="6m", step="month", stepmode="backward"),
    dict(count=1, label="YTD", step="year", stepmode="todate"),
    dict(count=1, label="1y", step="year", stepmode="backward"),
    dict(step="all", label="All"),
]


def default_tooltip(ticker: str, field: str) -> str:
    """Plotly hovertemplate body for a plain point tooltip."""
    return "%{x|%b %d, %Y}<br>" + f"{ticker} {field}: " + "%{y:,.2f}"


def tooltip_template(ticker: str, field: str, overlay: Optional[DragDeltaOverlay] = None) -> str:
    """Hovertemplate for the price trace, replaced by the drag readout while one is showing."""
    text = default_tooltip(ticker, field)
    if overlay is not None:
        text = overlay.render_tooltip(text)
    return text + _HIDE_TRACE_NAME


def create_price_chart(
    points: Sequence[PricePoint],
    ticker: str,
    field: str,
    overlay: Optional[DragDeltaOverlay] = None,
) -> go.Figure:
    """
    Line chart of one price field.

    Dragging horizontally selects instead of zooming; the page turns that
    selection into a drag readout on *overlay*.
    """
    frame = to_frame(points)

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=frame["date"],
            y=frame["value"],
            mode="lines",
            name=ticker,
            line=dict(color="#3498db", width=2),
            connectgaps=False,
            hovertemplate=tooltip_template(ticker, field, overlay),
        )
    )

    current = overlay.current if overlay is not None else None
    if current is not None:
        trend_color = "#2ecc71" if current.percent >= 0 else "#e74c3c"
        fig.add_annotation(
            text=f"{current.format_range(overlay.date_format)}: <b>{current.percent:.2f}%</b>",
            xref="paper",
            yref="paper",
            x=0,
            y=1.08,
            xanchor="left",
            showarrow=False,
            font=dict(color=trend_color, size=14),
        )

    fig.update_layout(
        title=f"{ticker} Stock Price",
        yaxis_title=field,
        template="plotly_dark",
        height=550,
        showlegend=False,
        hovermode="closest",
        # drag measures instead of zooming
        dragmode="select",
        selectdirection="h",
        margin=dict(l=0, r=0, t=60, b=0),
    )
    fig.update_xaxes(
        type="date",
        rangeselector=dict(buttons=RANGE_BUTTONS),
    )

    return fig
