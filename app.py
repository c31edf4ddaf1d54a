import logging
from contextlib import contextmanager

import altair as alt
import pandas as pd
import streamlit as st

from manpower_core.data import load_dashboard_data
from manpower_core.filters import DETAIL_TABS, STAT_CARDS, normalize_filters
from manpower_core.metrics_overview import compute_overview, style_status_badges
from manpower_core.metrics_trend import compute_trend_payload
from manpower_core.models import FIRST_DAY, LAST_DAY

alt.data_transformers.disable_max_rows()
logger = logging.getLogger(__name__)

CARD_COLORS = {
    "on_duty_count": "#14b8a6",
    "empty_count": "#ef4444",
    "rooster_count": "#3b82f6",
    "available_spares": "#22c55e",
}


# ---------- UI / layout helpers ----------
def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .card {border: 1px solid #e5e7eb;border-radius: 12px;padding: 16px;background: #ffffff;
               box-shadow: 0 1px 2px rgba(0,0,0,0.04); margin-bottom: 12px;}
        .card-title {font-weight: 600;font-size: 1.0rem;color: #111827;margin-bottom: 8px;}
        .stat-card {border-radius: 16px;padding: 16px 20px;background: #ffffff;border: 1px solid #e5e7eb;
                    box-shadow: 0 1px 3px rgba(0,0,0,0.06);}
        .stat-card .stat-title {font-size: 0.85rem;color: #64748b;font-weight: 500;}
        .stat-card .stat-value {font-size: 2rem;font-weight: 700;color: #1e293b;}
        .stat-card .stat-bar {height: 4px;border-radius: 2px;margin-bottom: 8px;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_stat_card(column, title: str, value: int, color: str):
    column.markdown(
        f"""
        <div class="stat-card">
          <div class="stat-bar" style="background:{color}"></div>
          <div class="stat-title">{title}</div>
          <div class="stat-value">{value}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_detail_table(df: pd.DataFrame, export_name: str):
    if df.empty:
        st.info("No data available for this category on the selected day.")
        return
    st.dataframe(style_status_badges(df), hide_index=True, use_container_width=True)
    st.download_button(
        "Export CSV",
        data=df.to_csv(index=False).encode("utf-8"),
        file_name=export_name,
        mime="text/csv",
    )


# ---------- UI setup ----------
st.set_page_config(page_title="Manpower & Equipment Dashboard", layout="wide")
inject_base_styles()
st.title("Manpower & Equipment Dashboard")
st.caption("Daily operational overview for workforce and vehicle availability.")

try:
    data_ctx = load_dashboard_data()
except Exception as exc:
    logger.exception("roster load failed")
    st.error(f"Could not read the manpower file: {exc}")
    st.stop()

roster = data_ctx.get("roster")
if roster is None:
    st.error("No files found. Place a Manpower*.xlsx or Manpower*.csv file next to app.py.")
    st.stop()

selected_day = st.slider("Select Day", min_value=FIRST_DAY, max_value=LAST_DAY, value=FIRST_DAY)
shift_label = st.radio("Shift", ["☀️ Day Shift", "🌙 Night Shift"], horizontal=True)
active_shift = "night" if shift_label.startswith("🌙") else "day"

# Switching shift sends the detail view back to On Duty.
if st.session_state.get("_last_shift") != active_shift:
    st.session_state["_last_shift"] = active_shift
    st.session_state["active_tab"] = "on_duty"

active_tab = st.radio(
    "Details",
    list(DETAIL_TABS),
    format_func=lambda key: DETAIL_TABS[key],
    horizontal=True,
    key="active_tab",
)

filters = normalize_filters({"selected_day": selected_day, "active_shift": active_shift, "active_tab": active_tab})
overview = compute_overview(filters, roster)

if not overview["has_data"]:
    st.info("Select a valid day.")
    st.stop()

stat_cols = st.columns(len(STAT_CARDS))
for col, (key, title) in zip(stat_cols, STAT_CARDS.items()):
    render_stat_card(col, title, overview["stats"][key], CARD_COLORS[key])

st.markdown("")
with card(DETAIL_TABS[filters.active_tab]):
    render_detail_table(
        pd.DataFrame(overview["rows"], columns=overview["columns"]),
        export_name=f"day{filters.selected_day:02d}_{filters.active_shift}_{filters.active_tab}.csv",
    )

with st.expander("Month trend", expanded=False):
    trend_payload = compute_trend_payload(roster, shift=filters.active_shift)
    chart_spec = trend_payload["charts"].get("daily_counts")
    if chart_spec:
        st.vega_lite_chart(chart_spec, use_container_width=True)
    peak = trend_payload.get("peak_shortage")
    if peak and peak["empty_count"]:
        st.caption(f"Most empty units this month: {peak['empty_count']} on day {peak['day']}.")

st.caption(f"Source: {data_ctx.get('active_file')}")
