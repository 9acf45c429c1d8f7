"""Chart builders (Altair) for trends and distributions."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import altair as alt
import pandas as pd

from itsm_app.analytics.metrics.trends import Point, format_date_label


def trend_chart(series: Sequence[Point], interval: str = "day", *, title: str = "Count", color: str = "#1f77b4"):
    """Line + point chart for one trend series; ``None`` when empty."""
    if not series:
        return None
    chart_df = pd.DataFrame(series)
    chart_df["date"] = pd.to_datetime(chart_df["date"])
    chart_df["label"] = [format_date_label(p["date"], interval) for p in series]

    line = (
        alt.Chart(chart_df)
        .mark_line(color=color)
        .encode(
            x=alt.X("date:T", title="Date"),
            y=alt.Y("count:Q", title=title),
        )
    )
    points = (
        alt.Chart(chart_df)
        .mark_circle(color=color, opacity=0.75, size=60)
        .encode(
            x="date:T",
            y="count:Q",
            tooltip=[
                alt.Tooltip("label:N", title="Period"),
                alt.Tooltip("count:Q", title=title),
            ],
        )
    )
    return (line + points).properties(height=280)


def histogram_chart(buckets: Sequence[Mapping[str, Any]], *, title: str | None = None):
    """Bar chart of ``bucketize`` output, keeping bucket order."""
    if not buckets or not any(b["count"] for b in buckets):
        return None
    chart_df = pd.DataFrame(buckets)
    chart = (
        alt.Chart(chart_df)
        .mark_bar(color="#2ca02c")
        .encode(
            x=alt.X("label:N", sort=list(chart_df["label"]), title="Range"),
            y=alt.Y("count:Q", title="Incidents"),
            tooltip=[
                alt.Tooltip("range:N", title="Range"),
                alt.Tooltip("count:Q", title="Count"),
                alt.Tooltip("percentage:Q", title="%", format=".1f"),
            ],
        )
        .properties(height=280)
    )
    if title:
        chart = chart.properties(title=title)
    return chart


def count_bar_chart(counts: Mapping[str, int], *, category: str = "Category", sort_desc: bool = True):
    """Bar chart of a ``{label: count}`` mapping."""
    if not counts:
        return None
    chart_df = pd.DataFrame({"label": list(counts), "count": list(counts.values())})
    return (
        alt.Chart(chart_df)
        .mark_bar()
        .encode(
            x=alt.X("label:N", sort="-y" if sort_desc else None, title=category),
            y=alt.Y("count:Q", title="Count"),
            tooltip=["label", "count"],
        )
        .properties(height=280)
    )
