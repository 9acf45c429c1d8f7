"""Per-domain detail pages: MTTR, SLA, Changes and Incidents."""

from __future__ import annotations

import pandas as pd
import streamlit as st

from itsm_app.app import register_page
from itsm_app.core.config import OPEN_INCIDENT_FIELDS
from itsm_app.core.mappers import records_to_dataframe
from itsm_app.features.details.context import build_changes, build_incidents, build_mttr, build_sla
from itsm_app.visual.charts import count_bar_chart, histogram_chart
from itsm_app.visual.filters import (
    render_errors,
    render_insights,
    render_source_notice,
    require_services,
    run_view,
    sidebar_filters,
)


def _chart(chart) -> None:
    if chart is None:
        st.caption("No data.")
    else:
        st.altair_chart(chart, use_container_width=True)


@register_page("MTTR Analysis")
def mttr_page():
    st.title("Mean Time To Resolution")
    ctx = run_view(build_mttr, require_services(), sidebar_filters())
    if ctx is None:
        return
    render_source_notice()

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Average", f"{ctx.summary.avg:.1f}h")
    c2.metric("Median", f"{ctx.summary.median:.1f}h")
    c3.metric("Resolved", ctx.summary.count)
    c4.metric("Performance score", ctx.score)

    st.subheader("Resolution time distribution")
    _chart(histogram_chart(ctx.distribution))

    left, right = st.columns(2)
    left.subheader("By priority")
    left.dataframe(pd.DataFrame.from_dict(ctx.by_priority, orient="index"), use_container_width=True)
    right.subheader("By category")
    right.dataframe(pd.DataFrame.from_dict(ctx.by_category, orient="index"), use_container_width=True)

    left, right = st.columns(2)
    left.subheader("Fastest resolutions")
    left.dataframe(pd.DataFrame(ctx.fastest), hide_index=True, use_container_width=True)
    right.subheader("Slowest resolutions")
    right.dataframe(pd.DataFrame(ctx.slowest), hide_index=True, use_container_width=True)


@register_page("SLA Performance")
def sla_page():
    st.title("SLA Performance")
    ctx = run_view(build_sla, require_services(), sidebar_filters())
    if ctx is None:
        return
    render_source_notice()
    render_errors(ctx.errors)

    c1, c2, c3 = st.columns(3)
    c1.metric("Compliance", f"{ctx.compliance['rate']:.2f}%")
    c2.metric("Measured", ctx.compliance["total"])
    c3.metric("Breaches", ctx.breach_count)
    render_insights(ctx.insights)

    st.subheader("Compliance by SLA definition")
    st.dataframe(pd.DataFrame(ctx.by_type), hide_index=True, use_container_width=True)
    if ctx.sla_types:
        st.caption("Configured SLA definitions: " + ", ".join(ctx.sla_types))


@register_page("Changes")
def changes_page():
    st.title("Change Management")
    ctx = run_view(build_changes, require_services(), sidebar_filters())
    if ctx is None:
        return
    render_source_notice()

    c1, c2, c3 = st.columns(3)
    c1.metric("Changes", ctx.total)
    c2.metric("Completed", ctx.successful_count)
    c3.metric("Success rate", f"{ctx.success_rate}%")
    render_insights(ctx.insights)

    left, right = st.columns(2)
    left.subheader("By state")
    with left:
        _chart(count_bar_chart(ctx.by_state, category="State"))
    right.subheader("By type")
    with right:
        _chart(count_bar_chart(ctx.by_type, category="Type"))


@register_page("Incidents")
def incidents_page():
    st.title("Open Incidents")
    ctx = run_view(build_incidents, require_services(), sidebar_filters())
    if ctx is None:
        return
    render_source_notice()

    c1, c2 = st.columns(2)
    c1.metric("Fetched", ctx.total)
    c2.metric("Open", ctx.open_count)

    left, right = st.columns(2)
    left.subheader("By priority")
    with left:
        _chart(count_bar_chart(ctx.by_priority, category="Priority", sort_desc=False))
    right.subheader("By category")
    with right:
        _chart(count_bar_chart(ctx.by_category, category="Category"))

    st.subheader("Incidents")
    st.dataframe(records_to_dataframe(ctx.records, OPEN_INCIDENT_FIELDS), hide_index=True, use_container_width=True)
