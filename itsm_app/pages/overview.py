"""Overview page: headline KPIs, health score and insights."""

from __future__ import annotations

import streamlit as st

from itsm_app.analytics.metrics.health import health_level
from itsm_app.app import register_page
from itsm_app.features.overview.context import build_overview
from itsm_app.visual.filters import (
    render_errors,
    render_insights,
    render_source_notice,
    require_services,
    run_view,
    sidebar_filters,
)


@register_page("Overview")
def overview_page():
    st.title("ITSM Overview")
    services = require_services()
    filters = sidebar_filters()
    ctx = run_view(build_overview, services, filters)
    if ctx is None:
        return
    render_source_notice()
    render_errors(ctx.errors)

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Open incidents", ctx.open_incidents, help=f"{ctx.total_incidents} fetched")
    c2.metric("Changes", ctx.total_changes)
    c3.metric("SLA compliance", f"{ctx.sla_compliance:.1f}%")
    c4.metric("Avg MTTR", f"{ctx.avg_mttr:.1f}h", help=f"Median {ctx.median_mttr:.1f}h")

    level = health_level(ctx.health_score)
    st.subheader(f"Service health: {ctx.health_score}/100")
    st.progress(min(ctx.health_score, 100) / 100, text=level.title())
    render_insights(ctx.insights)
