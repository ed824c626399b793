"""Plotly chart builders for STL decompositions."""

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from ..core.decomposition.result import Decomposition


# Consistent color palette
COLORS = [
    "#1f77b4", "#ff7f0e", "#2ca02c", "#d62728", "#9467bd",
    "#8c564b", "#e377c2", "#7f7f7f", "#bcbd22", "#17becf",
]


def plot_decomposition(
    result: Decomposition,
    title: str = "Time Series Decomposition",
) -> go.Figure:
    """Plot stacked observed/trend/seasonal/remainder panels.

    Robust decompositions get a fifth panel with the robustness weights.
    """
    panels = [
        ("Observed", result.data),
        ("Trend", result.trend),
        ("Seasonal", result.seasonal),
        ("Remainder", result.remainder),
    ]
    if result.robust:
        panels.append(("Robustness weights", result.weights))

    x = result.times if result.times is not None else np.arange(len(result))

    fig = make_subplots(
        rows=len(panels), cols=1,
        shared_xaxes=True,
        subplot_titles=[name for name, _ in panels],
        vertical_spacing=0.06,
    )
    for row, (name, values) in enumerate(panels, start=1):
        if name == "Remainder":
            trace = go.Scatter(x=x, y=values, name=name, mode="markers",
                               marker=dict(color=COLORS[row - 1], size=4))
        else:
            trace = go.Scatter(x=x, y=values, name=name, line=dict(color=COLORS[row - 1]))
        fig.add_trace(trace, row=row, col=1)

    # Zero line under the remainder panel
    fig.add_hline(y=0, line=dict(color="gray", width=1), row=4, col=1)

    if result.robust:
        fig.update_yaxes(range=[-0.05, 1.05], row=len(panels), col=1)

    fig.update_layout(
        title=title,
        height=175 * len(panels),
        showlegend=False,
        template="plotly_white",
    )
    return fig
