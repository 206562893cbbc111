"""
Session state management and initialization for the dashboard.
"""

import streamlit as st

from core.controller import SeriesViewController
from core.overlay import DragDeltaOverlay
from core.providers import create_default_provider


def init_session_state() -> None:
    """Initialize dashboard session state variables."""
    # ── Fetch / normalize controller ────────────────────────────────────
    if "controller" not in st.session_state:
        st.session_state.controller = SeriesViewController(create_default_provider())

    # ── Drag overlay (one per chart) ────────────────────────────────────
    if "overlay" not in st.session_state:
        st.session_state.overlay = DragDeltaOverlay()


def remember_selection(chart_key: str) -> None:
    """on_select callback: keep the chart's latest selection event for later reruns."""
    st.session_state.drag_selection = (chart_key, st.session_state.get(chart_key))


def get_remembered_selection(chart_key: str):
    """Last selection event seen for *chart_key*, or None if it belongs to another chart."""
    remembered_key, event = st.session_state.get("drag_selection", (None, None))
    if remembered_key != chart_key:
        return None
    return event


def get_controller() -> SeriesViewController:
    """Get this session's view controller."""
    return st.session_state.controller


def get_overlay() -> DragDeltaOverlay:
    """Get this session's drag overlay."""
    return st.session_state.overlay
