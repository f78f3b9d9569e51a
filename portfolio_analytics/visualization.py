"""
visualization.py — Plotly figure factories for the fund dashboard panels.

Depends on: dashboard.py
All functions return plotly.graph_objects.Figure objects.
"""
from __future__ import annotations

import plotly.graph_objects as go
from plotly.subplots import make_subplots

from portfolio_analytics.dashboard import DashboardMetrics


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------

_VC_COLORS = {
    "background": "#0D1117",
    "paper": "#161B22",
    "grid": "#21262D",
    "text": "#C9D1D9",
    "text_secondary": "#8B949E",
    "accent": "#58A6FF",
    "positive": "#3FB950",
    "negative": "#F85149",
    "neutral": "#FFA657",
}

_SECTOR_PALETTE = [
    "#58A6FF", "#3FB950", "#FFA657", "#F85149",
    "#A371F7", "#39D353", "#FF7B72", "#79C0FF",
]

_HEALTH_COLORS = {
    "green": _VC_COLORS["positive"],
    "yellow": _VC_COLORS["neutral"],
    "red": _VC_COLORS["negative"],
}

_PLOTLY_TEMPLATE = "plotly_dark"


def _apply_vc_theme(fig: go.Figure) -> go.Figure:
    """
    Apply the dashboard's dark styling to a Plotly figure.

    Modifies the figure in-place and returns it for chaining.
    """
    fig.update_layout(
        template=_PLOTLY_TEMPLATE,
        paper_bgcolor=_VC_COLORS["paper"],
        plot_bgcolor=_VC_COLORS["background"],
        font=dict(
            family="Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif",
            color=_VC_COLORS["text"],
            size=12,
        ),
        title_font=dict(size=16, color=_VC_COLORS["text"]),
        legend=dict(
            bgcolor=_VC_COLORS["paper"],
            bordercolor=_VC_COLORS["grid"],
            borderwidth=1,
            font=dict(color=_VC_COLORS["text_secondary"]),
        ),
    )
    fig.update_xaxes(gridcolor=_VC_COLORS["grid"], zerolinecolor=_VC_COLORS["grid"])
    fig.update_yaxes(gridcolor=_VC_COLORS["grid"], zerolinecolor=_VC_COLORS["grid"])
    return fig


# ---------------------------------------------------------------------------
# Sector allocation
# ---------------------------------------------------------------------------

def plot_sector_allocation(
    metrics: DashboardMetrics,
    title: str = "Sector Allocation — Current Valuation",
) -> go.Figure:
    """Donut chart of current valuation by sector."""
    df = metrics.sector_allocation_frame()
    if df.empty:
        return go.Figure()

    fig = go.Figure(
        go.Pie(
            labels=df["sector"],
            values=df["value"].astype(float),
            hole=0.55,
            sort=False,
            marker=dict(colors=_SECTOR_PALETTE[: len(df)]),
            customdata=df["percentage"],
            hovertemplate="%{label}<br>$%{value:,.0f}<br>%{customdata:.1f}%<extra></extra>",
        )
    )
    fig.update_layout(title=title)
    return _apply_vc_theme(fig)


# ---------------------------------------------------------------------------
# Portfolio history
# ---------------------------------------------------------------------------

def plot_portfolio_history(
    metrics: DashboardMetrics,
    title: str = "Portfolio Performance Over Time",
) -> go.Figure:
    """
    Invested capital vs. estimated value per quarter.

    The value series is the linear reconstruction from history.py, not
    recorded marks.
    """
    df = metrics.history_frame()
    if df.empty:
        return go.Figure()

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=df["quarter"],
            y=df["total_invested"].astype(float),
            fill="tozeroy",
            name="Invested",
            line=dict(color=_VC_COLORS["neutral"], width=2),
            fillcolor="rgba(255, 166, 87, 0.10)",
            hovertemplate="%{x}<br>Invested: $%{y:,.0f}<extra></extra>",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=df["quarter"],
            y=df["current_value"].astype(float),
            fill="tozeroy",
            name="Estimated Value",
            line=dict(color=_VC_COLORS["accent"], width=3),
            fillcolor="rgba(88, 166, 255, 0.15)",
            customdata=df["company_count"],
            hovertemplate=(
                "%{x}<br>Value: $%{y:,.0f}<br>Companies: %{customdata}<extra></extra>"
            ),
        )
    )
    fig.update_layout(
        title=title,
        xaxis_title="Quarter",
        yaxis_title="Value ($)",
        hovermode="x unified",
    )
    return _apply_vc_theme(fig)


# ---------------------------------------------------------------------------
# Sector comparison
# ---------------------------------------------------------------------------

def plot_sector_comparison(
    metrics: DashboardMetrics,
    title: str = "Sector Performance — Invested vs. Current",
) -> go.Figure:
    """Grouped invested/current bars per sector with MOIC on a secondary axis."""
    df = metrics.sector_comparison_frame()
    if df.empty:
        return go.Figure()

    fig = make_subplots(specs=[[{"secondary_y": True}]])
    fig.add_trace(
        go.Bar(
            x=df["sector"],
            y=df["total_invested"].astype(float),
            name="Invested",
            marker_color=_VC_COLORS["neutral"],
            opacity=0.8,
            hovertemplate="%{x}<br>Invested: $%{y:,.0f}<extra></extra>",
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Bar(
            x=df["sector"],
            y=df["current_value"].astype(float),
            name="Current Value",
            marker_color=_VC_COLORS["accent"],
            opacity=0.8,
            hovertemplate="%{x}<br>Current: $%{y:,.0f}<extra></extra>",
        ),
        secondary_y=False,
    )
    fig.add_trace(
        go.Scatter(
            x=df["sector"],
            y=df["moic"].astype(float),
            name="MOIC",
            mode="lines+markers",
            line=dict(color=_VC_COLORS["positive"], width=2),
            marker=dict(size=8),
            hovertemplate="%{x}<br>MOIC: %{y:.2f}x<extra></extra>",
        ),
        secondary_y=True,
    )
    fig.update_layout(title=title, barmode="group")
    fig.update_yaxes(title_text="Capital ($)", secondary_y=False)
    fig.update_yaxes(title_text="MOIC (x)", secondary_y=True)
    return _apply_vc_theme(fig)


# ---------------------------------------------------------------------------
# Portfolio health
# ---------------------------------------------------------------------------

def plot_portfolio_health(
    metrics: DashboardMetrics,
    title: str = "Portfolio Health — Runway",
) -> go.Figure:
    """Company counts per runway band."""
    counts = metrics.portfolio_health.counts()
    if not any(counts.values()):
        return go.Figure()

    labels = {"green": "≥ 6 months", "yellow": "3–6 months", "red": "< 3 months"}
    fig = go.Figure(
        go.Bar(
            x=[labels[status] for status in counts],
            y=list(counts.values()),
            marker_color=[_HEALTH_COLORS[status] for status in counts],
            hovertemplate="%{x}<br>%{y} companies<extra></extra>",
        )
    )
    fig.update_layout(title=title, xaxis_title="Runway", yaxis_title="Companies")
    return _apply_vc_theme(fig)
