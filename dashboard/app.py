"""
Price Delta Viewer: Streamlit Dashboard
=======================================
Daily price history for one ticker with a selectable price field.
Drag across the chart to measure the percent change between two days.

Run with:
    streamlit run dashboard/app.py
"""

import sys
from datetime import date
from functools import partial
from pathlib import Path

# Ensure the package root is importable when launched with `streamlit run`
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import streamlit as st

from config import DEFAULT_FROM_DATE, LOG_LEVEL
from core.log import setup_logging
from core.series import PRICE_FIELDS
from core.surface import SeriesSurface
from dashboard.core.session import (
    get_controller,
    get_overlay,
    get_remembered_selection,
    init_session_state,
    remember_selection,
)
from dashboard.utils.charts import create_price_chart
from dashboard.utils.gesture import apply_selection
from dashboard.utils.validation import missing_config_warning

ERROR_MESSAGE = "Unable. Check the logs."

setup_logging(LOG_LEVEL)

# ── Page Config ──────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Price Delta Viewer",
    page_icon="📈",
    layout="wide",
)

# ── Session State ────────────────────────────────────────────────────────────
init_session_state()
controller = get_controller()
overlay = get_overlay()

# ── Sidebar ──────────────────────────────────────────────────────────────────
with st.sidebar:
    st.markdown("# Price Delta Viewer")
    st.caption("Drag across the chart to measure a move. Double-click to clear.")
    st.divider()

    warning = missing_config_warning()
    if warning:
        st.warning(warning)

    ticker = st.text_input("Ticker", value=controller.state.ticker, key="ticker_input")
    from_date = st.date_input(
        "From",
        value=date.fromisoformat(controller.state.from_date or DEFAULT_FROM_DATE),
        max_value=date.today(),
        key="from_date_input",
    )

    if st.button("🔄 Refresh", type="secondary", help="Fetch the price history again"):
        with st.spinner("Loading chart..."):
            controller.refresh()
        overlay.on_gesture_end()

# ── Field selector ───────────────────────────────────────────────────────────
field = st.selectbox(
    "Price field",
    PRICE_FIELDS,
    index=PRICE_FIELDS.index(controller.state.field),
    key="field_select",
)
controller.set_field(field)

if not ticker.strip():
    st.info("Enter a ticker symbol in the sidebar.")
    st.stop()

# ── Fetch (only when ticker or start date changed) ───────────────────────────
with st.spinner("Loading chart..."):
    if controller.set_source(ticker, from_date.isoformat()):
        overlay.on_gesture_end()

state = controller.state

if state.error is not None:
    st.error(ERROR_MESSAGE)
    st.stop()

if state.loading:
    st.info("Loading chart...")
    st.stop()

# ── Chart ────────────────────────────────────────────────────────────────────
points = controller.series
surface = SeriesSurface(points)

# A new ticker/field/start gets a fresh widget, which drops any old selection.
chart_key = f"price_chart_{state.ticker}_{state.field}_{state.from_date}"
readout = apply_selection(overlay, surface, get_remembered_selection(chart_key))

if readout is not None:
    st.metric(
        readout.format_range(overlay.date_format),
        f"{readout.percent:.2f}%",
    )
elif not points:
    st.warning("No price history returned for this selection.")
else:
    st.caption(f"{controller.record_count} daily records since {state.from_date}")

fig = create_price_chart(points, state.ticker, state.field, overlay)
st.plotly_chart(
    fig,
    width="stretch",
    key=chart_key,
    on_select=partial(remember_selection, chart_key),
    selection_mode="box",
)
