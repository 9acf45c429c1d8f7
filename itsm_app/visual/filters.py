"""Sidebar filter widgets and shared page helpers."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta

import streamlit as st

from itsm_app.core.config import (
    CHANGE_TYPES,
    DEFAULT_DATE_WINDOW_DAYS,
    DEFAULT_RECORD_LIMIT,
    MAX_RECORD_LIMIT,
    MIN_RECORD_LIMIT,
    PRIORITY_LABELS,
)
from itsm_app.core.models import DashboardFilters, DateRange


def sidebar_filters() -> DashboardFilters:
    """Collect the shared dashboard filters from the sidebar."""
    st.sidebar.markdown("### Filters")
    today = date.today()
    picked = st.sidebar.date_input(
        "Date range",
        value=(today - timedelta(days=DEFAULT_DATE_WINDOW_DAYS), today),
    )
    date_range = None
    if isinstance(picked, (list, tuple)) and len(picked) == 2:
        date_range = DateRange(picked[0], picked[1])

    priority = st.sidebar.selectbox("Priority", ["All", *PRIORITY_LABELS])
    category = st.sidebar.text_input("Category", value="")
    assignment_group = st.sidebar.text_input("Assignment group", value="")
    sla_type = st.sidebar.text_input("SLA definition", value="")
    change_type = st.sidebar.selectbox("Change type", ["All", *CHANGE_TYPES])
    record_limit = st.sidebar.number_input(
        "Record limit",
        min_value=MIN_RECORD_LIMIT,
        max_value=MAX_RECORD_LIMIT,
        value=DEFAULT_RECORD_LIMIT,
        step=500,
    )
    return DashboardFilters(
        date_range=date_range,
        priority=None if priority == "All" else priority[1:],
        category=category or None,
        assignment_group=assignment_group or None,
        sla_type=sla_type or None,
        change_type=None if change_type == "All" else change_type.lower(),
        record_limit=int(record_limit),
    )


def require_services():
    """Return the session's ServiceBundle, or stop the page with a hint."""
    services = st.session_state.get("services")
    if services is None:
        st.warning("No data source configured. Open the Setup / Connection page first.")
        st.stop()
    return services


def render_errors(errors: dict[str, str]) -> None:
    for name, message in errors.items():
        st.error(f"{name}: {message}")


def render_source_notice() -> None:
    """Flag demo data when any fetch in the last load fell back to synthetic records."""
    recorder = st.session_state.get("diagnostics")
    if recorder is not None and recorder.used_fallback:
        st.info("Showing demo data: the ServiceNow API was unavailable for at least one source.")


def run_view(builder, *args, **kwargs):
    """Run one async context builder to completion for this script run.

    Returns ``None`` after rendering an error when the builder raises.
    """
    recorder = st.session_state.get("diagnostics")
    if recorder is not None:
        recorder.reports.clear()
    try:
        return asyncio.run(builder(*args, **kwargs))
    except Exception as exc:
        st.error(f"Failed to load view: {exc}")
        return None


def render_insights(insights) -> None:
    renderers = {"success": st.success, "warning": st.warning, "critical": st.error}
    for insight in insights:
        renderers.get(insight.kind, st.info)(f"**{insight.title}**: {insight.description}")
