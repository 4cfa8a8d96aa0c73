"""
components/charts.py - Plotly timeline figure.
"""

import plotly.graph_objects as go
from typing import Dict, List

GOOD_TOP = "#FFFFFF"
GOOD_BOTTOM = "#C6EBFF"
EVIL_BOTTOM = "#AB2222"


def timeline_figure(timeline: Dict, height_px: int = 900) -> go.Figure:
    """
    Vertical timeline: y is the pin offset in vh (0 at the top), x is the
    lateral stagger in px around the axis at 0.
    """
    geometry = timeline["geometry"]
    items: List[Dict] = timeline["items"]
    page_vh = geometry["page_vh"]
    half = page_vh / 2

    fig = go.Figure()

    # Good half on top, evil half below
    fig.add_shape(type="rect", x0=-100, x1=100, y0=0, y1=half,
                  fillcolor=GOOD_BOTTOM, opacity=0.5, line=dict(width=0), layer="below")
    fig.add_shape(type="rect", x0=-100, x1=100, y0=half, y1=page_vh,
                  fillcolor=EVIL_BOTTOM, opacity=0.5, line=dict(width=0), layer="below")
    fig.add_shape(type="line", x0=0, x1=0,
                  y0=geometry["top_vh"], y1=page_vh - geometry["bottom_vh"],
                  line=dict(color="white", width=6), layer="below")

    fig.add_trace(go.Scatter(
        x=[c["stagger_px"] for c in items],
        y=[c["top_vh"] for c in items],
        mode="markers+text",
        marker=dict(size=geometry["avatar_size_px"] / 3, color="#1e293b",
                    line=dict(color="white", width=2)),
        text=[c["name"] for c in items],
        textposition="middle right",
        customdata=[[c["reason"], c["score_label"], c["count"]] for c in items],
        hovertemplate=(
            "<b>%{text}</b><br>%{customdata[0]}<br>"
            "Score: %{customdata[1]} (%{customdata[2]} votes)<extra></extra>"
        ),
    ))

    fig.update_layout(
        xaxis=dict(range=[-100, 100], visible=False),
        yaxis=dict(range=[page_vh, 0], visible=False),
        height=height_px, margin=dict(l=10, r=10, t=10, b=10),
        showlegend=False, plot_bgcolor=GOOD_TOP,
    )
    return fig
