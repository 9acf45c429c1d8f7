"""Convenience launcher for the Streamlit app.

Usage:
  streamlit run run_dashboard.py

Automatically imports every module in ``itsm_app/pages`` so each page
decorated with ``@register_page`` registers itself without manual edits here.
"""

import logging
from importlib import import_module
from pathlib import Path

import streamlit as st

from itsm_app.app import main
from itsm_app.core.config import ServiceNowSettings
from itsm_app.core.diagnostics import RefreshCounter

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

st.set_page_config(layout="wide")


@st.cache_resource
def _refresh_counter() -> RefreshCounter:
    return RefreshCounter()


def _auto_init_services():
    """Initialize the ServiceNow services from Streamlit secrets if available."""
    if "services" in st.session_state:
        return

    sn_secrets = st.secrets.get("servicenow", {})
    instance = sn_secrets.get("SERVICENOW_INSTANCE") or st.secrets.get("SERVICENOW_INSTANCE")
    token = sn_secrets.get("SERVICENOW_TOKEN") or st.secrets.get("SERVICENOW_TOKEN")

    if instance:
        from itsm_app.pages.setup import install_services

        install_services(ServiceNowSettings(instance_url=instance, token=token or ""))
        st.sidebar.success("ServiceNow services initialized from secrets.")
    else:
        st.sidebar.warning("ServiceNow secrets not found. Please use the Setup page.")


_refresh_counter().log_cycle("page rerun")
_auto_init_services()

PAGES_DIR = Path(__file__).parent / "itsm_app" / "pages"
for py in sorted(PAGES_DIR.glob("[!_]*.py")):
    mod_name = f"itsm_app.pages.{py.stem}"
    try:
        import_module(mod_name)
    except Exception as e:
        logger.error("Failed importing page %s: %s", mod_name, e)

if __name__ == "__main__":
    main()
