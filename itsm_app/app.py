"""Application entry point: page registry and router."""

from __future__ import annotations

import streamlit as st

PAGES = {}

SETUP_PAGE = "Setup / Connection"


def register_page(label):
    def decorator(func):
        PAGES[label] = func
        return func

    return decorator


def main():
    st.sidebar.title("ITSM Analytics Dashboard")
    pages = list(PAGES.keys())
    if not pages:
        st.write("No pages registered yet.")
        return
    preferred_order = [
        "Overview",
        "Trends",
        "MTTR Analysis",
        "SLA Performance",
        "Changes",
        "Incidents",
        SETUP_PAGE,
    ]

    ordered = [name for name in preferred_order if name in pages]
    trailing = sorted(name for name in pages if name not in preferred_order)
    pages = ordered + trailing

    if SETUP_PAGE in pages and "services" not in st.session_state:
        default = pages.index(SETUP_PAGE)
    else:
        default = 0
    page = st.sidebar.selectbox("Page", pages, index=default)
    PAGES[page]()


if __name__ == "__main__":
    main()
