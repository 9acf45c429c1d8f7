"""Connection setup page: collect ServiceNow settings and build the service bundle."""

from __future__ import annotations

import streamlit as st

from itsm_app.app import register_page
from itsm_app.core.bundle import build_services
from itsm_app.core.config import (
    REQUEST_TIMEOUT_SECONDS,
    SERVICENOW_DEFAULT_INSTANCE,
    ServiceNowSettings,
)
from itsm_app.core.diagnostics import LoggingDiagnostics, RecordingDiagnostics


def install_services(settings: ServiceNowSettings) -> None:
    """Build the bundle once and keep it (with its diagnostics recorder) in the session."""
    recorder = RecordingDiagnostics(forward=LoggingDiagnostics())
    st.session_state["diagnostics"] = recorder
    st.session_state["servicenow_instance"] = settings.instance_url
    st.session_state["services"] = build_services(settings, diagnostics=recorder)


@register_page("Setup / Connection")
def setup_page():
    st.title("ServiceNow Connection Setup")
    st.caption("Enter connection details (use secrets manager in production).")

    sn_secrets = st.secrets.get("servicenow", {})
    secret_instance = sn_secrets.get("SERVICENOW_INSTANCE") or st.secrets.get("SERVICENOW_INSTANCE")
    secret_token = sn_secrets.get("SERVICENOW_TOKEN") or st.secrets.get("SERVICENOW_TOKEN")

    instance = st.text_input(
        "Instance URL",
        value=st.session_state.get("servicenow_instance") or secret_instance or SERVICENOW_DEFAULT_INSTANCE,
    )
    token = st.text_input("Session token (X-UserToken)", type="password", value=secret_token or "")
    timeout = st.number_input(
        "Request timeout (seconds)", min_value=1.0, max_value=120.0, value=REQUEST_TIMEOUT_SECONDS
    )

    if st.button("Initialize Connection", type="primary"):
        if not instance:
            st.error("Instance URL required.")
            return
        install_services(ServiceNowSettings(instance_url=instance, token=token, request_timeout=float(timeout)))
        st.success("Connection initialized. Unavailable sources fall back to demo data.")

    if "services" in st.session_state:
        st.info("Services ready.")
