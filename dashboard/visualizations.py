from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from dashboard.constants import DAY_STATUS_COLORS
from dashboard.dates import month_grid, weekday_labels

STATUS_LEVELS = {"neutral": 0, "none": 1, "partial": 2, "complete": 3}


def apply_common_plot_style(fig, title):
    fig.update_layout(
        title=title,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        margin=dict(l=30, r=20, t=40, b=30),
        xaxis=dict(showgrid=False, zeroline=False),
        yaxis=dict(showgrid=False, zeroline=False),
    )
    return fig


def build_month_heatmap(cells, view_year, view_month):
    """Lay the month's day cells out on a Monday-first week grid.

    Returns ``(z, text)``: ``z`` holds a status level per slot (NaN outside the
    month), ``text`` the hover label.
    """
    grid = month_grid(view_year, view_month)
    weeks = (grid.first_day_offset + grid.days_in_month + 6) // 7
    z = np.full((weeks, 7), np.nan)
    text = [["" for _ in range(7)] for _ in range(weeks)]
    for cell in cells:
        slot = grid.first_day_offset + cell.label - 1
        row, col = divmod(slot, 7)
        z[row, col] = STATUS_LEVELS[cell.status]
        if cell.is_future or cell.active_count == 0:
            detail = "no habits to track"
        else:
            detail = f"{cell.completed_count}/{cell.active_count} done"
        text[row][col] = f"{cell.iso} • {detail}"
    return z, text


def month_heatmap_figure(cells, view_year, view_month):
    z, text = build_month_heatmap(cells, view_year, view_month)
    colorscale = [
        [0.0, DAY_STATUS_COLORS["neutral"]],
        [1 / 3, DAY_STATUS_COLORS["none"]],
        [2 / 3, DAY_STATUS_COLORS["partial"]],
        [1.0, DAY_STATUS_COLORS["complete"]],
    ]
    fig = go.Figure(
        data=go.Heatmap(
            z=z,
            x=weekday_labels(),
            text=text,
            hoverinfo="text",
            colorscale=colorscale,
            zmin=0,
            zmax=3,
            showscale=False,
            xgap=4,
            ygap=4,
        )
    )
    fig.update_yaxes(autorange="reversed", showticklabels=False)
    return apply_common_plot_style(fig, month_grid(view_year, view_month).label)


def completion_bar_chart(names, completions, color="#22c55e"):
    fig = go.Figure(
        data=go.Bar(
            x=list(completions),
            y=list(names),
            orientation="h",
            marker_color=color,
            text=[f"{value}%" for value in completions],
            textposition="auto",
        )
    )
    fig.update_xaxes(range=[0, 100])
    return apply_common_plot_style(fig, "Completion")
