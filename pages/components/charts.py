"""Chart components using Plotly for data visualization."""

from typing import Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go


def _empty_chart(message: str):
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        xref="paper", yref="paper",
        x=0.5, y=0.5, showarrow=False
    )
    return fig


def create_weight_trend(frame: pd.DataFrame, target_weight: Optional[float] = None):
    """Create line chart of logged weight with a 7-entry rolling average.

    Args:
        frame: Progress frame from tracker.progress_frame
        target_weight: Optional goal weight for a reference line

    Returns:
        Plotly figure
    """
    weighed = frame.dropna(subset=["Weight"])
    if weighed.empty:
        return _empty_chart("No weigh-ins logged")

    df = weighed[["Date", "Weight"]].copy()
    df["Weight"] = df["Weight"].astype(float)
    df["Average"] = df["Weight"].rolling(7, min_periods=1).mean()

    fig = px.line(
        df,
        x="Date",
        y=["Weight", "Average"],
        title="Weight Trend",
        markers=True,
        color_discrete_sequence=["#9CA3AF", "#2563EB"]
    )

    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Weight (lb)",
        hovermode="x unified",
        legend_title=""
    )

    if target_weight:
        fig.add_hline(
            y=target_weight,
            line_dash="dash",
            annotation_text="Target",
            line_color="green"
        )

    return fig


def create_delta_chart(frame: pd.DataFrame, planned_daily_delta: float):
    """Create bar chart of the achieved daily delta against the plan.

    Days without a calorie entry show as zero.
    """
    logged = frame[frame["Calories"] > 0]
    if logged.empty:
        return _empty_chart("No calorie logs found")

    colors = ["#16A34A" if d <= 0 else "#F97316" for d in logged["Delta"]]
    fig = go.Figure(go.Bar(x=logged["Date"], y=logged["Delta"], marker_color=colors))
    fig.update_layout(
        title="Daily Deficit / Surplus",
        xaxis_title="Date",
        yaxis_title="kcal",
        hovermode="x unified"
    )

    if planned_daily_delta:
        fig.add_hline(
            y=planned_daily_delta,
            line_dash="dash",
            annotation_text="Plan",
            line_color="blue"
        )

    return fig


def create_calorie_trend(frame: pd.DataFrame):
    """Create line chart of calories eaten vs the day's target."""
    logged = frame[frame["Calories"] > 0]
    if logged.empty:
        return _empty_chart("No calorie logs found")

    fig = px.line(
        logged,
        x="Date",
        y=["Calories", "Target"],
        title="Calories vs Target",
        markers=True,
        color_discrete_sequence=["#F97316", "#6B7280"]
    )
    fig.update_layout(
        xaxis_title="Date",
        yaxis_title="Calories (kcal)",
        hovermode="x unified",
        legend_title=""
    )
    return fig


def create_progress_gauge(value: float, target: float, label: str, lower_is_better: bool = False):
    """Create gauge chart of progress toward one daily target.

    Args:
        value: Logged value
        target: Daily target
        label: Metric label (e.g., "Steps", "AZM")
        lower_is_better: Calories count as on track while under target

    Returns:
        Plotly figure
    """
    pct = value / target * 100 if target > 0 else 0

    if lower_is_better:
        color = "darkgreen" if pct <= 100 else "red"
    elif pct >= 100:
        color = "darkgreen"
    elif pct >= 75:
        color = "orange"
    else:
        color = "red"

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=pct,
        number={'suffix': '%'},
        title={'text': label},
        gauge={
            'axis': {'range': [0, max(150, pct)]},
            'bar': {'color': color},
            'steps': [
                {'range': [0, 75], 'color': "lightgray"},
                {'range': [75, 100], 'color': "lightyellow"},
            ],
            'threshold': {
                'line': {'color': "red", 'width': 4},
                'thickness': 0.75,
                'value': 100
            }
        }
    ))
    fig.update_layout(height=220, margin=dict(t=50, b=10, l=20, r=20))
    return fig
