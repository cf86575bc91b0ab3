"""
components/charts.py — Plotly chart builders for the scoring form.
"""

import plotly.graph_objects as go
import pandas as pd

from randa_scoring.models.enumerations import label_text
from randa_scoring.scoring.rubric import FINAL_RATING_RANGES, PP_MAX_SCORE

RATING_COLORS = {
    "Highly Effective": "#10b981",
    "Effective": "#3b82f6",
    "Partially Effective": "#f59e0b",
    "Ineffective": "#ef4444",
}

BAND_FILLS = {
    "Highly Effective": "#d1fae5",
    "Effective": "#dbeafe",
    "Partially Effective": "#fef3c7",
    "Ineffective": "#fee2e2",
}


def final_score_gauge(total: float, rating: str) -> go.Figure:
    """Gauge of the final 0-1000 score with the effectiveness bands as steps."""
    steps = [
        {
            "range": [float(band.min_score), float(band.max_score)],
            "color": BAND_FILLS.get(label_text(band.label), "#f1f5f9"),
        }
        for band in FINAL_RATING_RANGES
    ]

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=total,
        title={"text": f"Final Score: {rating}"},
        number={"suffix": " / 1000"},
        gauge={
            "axis": {"range": [0, 1000]},
            "bar": {"color": RATING_COLORS.get(rating, "#6b7280")},
            "steps": steps,
        },
    ))
    fig.update_layout(height=280, margin=dict(t=60, b=20))
    return fig


def standards_bar_chart(df: pd.DataFrame) -> go.Figure:
    """Weighted 700-scale contribution of each standard, with its rating as label."""
    fig = go.Figure(go.Bar(
        x=df["Standard"], y=df["Weighted (700)"],
        marker_color="#6366f1",
        text=df["Rating"], textposition="outside",
    ))
    fig.update_layout(
        title="Professional Practices by Standard",
        yaxis=dict(title="Weighted Score", range=[0, float(PP_MAX_SCORE)]),
        height=320, margin=dict(t=50, b=40),
        showlegend=False, plot_bgcolor="white",
    )
    return fig
