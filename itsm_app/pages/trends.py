"""Trends page: incident, change, SLA and MTTR series over time."""

from __future__ import annotations

import streamlit as st

from itsm_app.analytics.metrics.trends import zero_fill
from itsm_app.app import register_page
from itsm_app.core.config import TIME_INTERVALS
from itsm_app.features.trends.context import build_trends
from itsm_app.visual.charts import trend_chart
from itsm_app.visual.filters import render_errors, render_source_notice, require_services, run_view, sidebar_filters


@register_page("Trends")
def trends_page():
    st.title("Trends")
    services = require_services()
    filters = sidebar_filters()
    interval = st.radio("Interval", list(TIME_INTERVALS), horizontal=True)
    ctx = run_view(build_trends, services, filters, interval)
    if ctx is None:
        return
    render_source_notice()
    render_errors(ctx.errors)

    span = filters.resolved_range()
    panels = [
        ("incidents", "Incidents created", zero_fill(ctx.incident_trends, interval, span.start, span.end), "#1f77b4"),
        ("changes", "Changes created", zero_fill(ctx.change_trends, interval, span.start, span.end), "#9467bd"),
        ("sla", "SLA compliance %", ctx.sla_trends, "#2ca02c"),
        ("mttr", "Average MTTR (h)", ctx.mttr_trends, "#d62728"),
    ]
    for name, title, series, color in panels:
        st.subheader(f"{title} ({ctx.classifications.get(name, '')})")
        chart = trend_chart(series, interval, title=title, color=color)
        if chart is None:
            st.caption("No data in range.")
        else:
            st.altair_chart(chart, use_container_width=True)
    st.caption(f"Totals: {ctx.totals.get('incidents', 0)} incidents, {ctx.totals.get('changes', 0)} changes")
