from __future__ import annotations

import logging
from typing import Any

import altair as alt
import pandas as pd
import streamlit as st

from marketing_insights.aggregate import (
    compute_age_group_metrics,
    compute_device_metrics,
    compute_gender_age_group_metrics,
    compute_gender_metrics,
    compute_region_metrics,
    compute_weekly_metrics,
)
from marketing_insights.aggregate.frames import (
    device_chart_rows,
    gender_age_group_frame,
    to_frame,
)
from marketing_insights.config import get_settings
from marketing_insights.ingest.fetch_data import fetch_marketing_document
from marketing_insights.logging_config import configure_logging

configure_logging()
log = logging.getLogger("marketing_insights.dashboard")

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Marketing Performance Dashboard", layout="wide")
st.title("📊 Marketing Performance Dashboard")


# =====================================================
# Data source
# =====================================================
@st.cache_data(ttl=300, show_spinner="Loading marketing data...")
def load_document() -> Any:
    """Fetch the marketing document (no disk cache; Streamlit caches in memory)."""
    s = get_settings()
    return fetch_marketing_document(s.data_url, timeout=s.request_timeout)


try:
    document = load_document()
except RuntimeError as exc:  # DataSourceError or invalid settings
    log.error("Dashboard data load failed: %s", exc)
    st.error(f"Error: {exc}")
    st.stop()


# =====================================================
# Helpers
# =====================================================
def currency(value: float) -> str:
    return f"${value:,.0f}"


def center_dataframe(df: pd.DataFrame):
    """Center-align column headers and values for display."""
    return (
        df.style
        .set_properties(**{"text-align": "center"})
        .set_table_styles(
            [{"selector": "th", "props": [("text-align", "center")]}]
        )
    )


view = st.sidebar.radio(
    "View",
    ["Demographics", "Devices", "Regions", "Weekly"],
)

# =====================================================
# DEMOGRAPHICS
# =====================================================
if view == "Demographics":
    st.header("👥 Demographic View")

    gender = compute_gender_metrics(document)
    c1, c2, c3 = st.columns(3)
    with c1:
        st.metric("Total Clicks (Male)", f"{gender.male.clicks:,}")
        st.metric("Total Clicks (Female)", f"{gender.female.clicks:,}")
    with c2:
        st.metric("Total Spend (Male)", currency(gender.male.spend))
        st.metric("Total Spend (Female)", currency(gender.female.spend))
    with c3:
        st.metric("Total Revenue (Male)", currency(gender.male.revenue))
        st.metric("Total Revenue (Female)", currency(gender.female.revenue))

    st.divider()
    st.subheader("Spend & Revenue by Age Group")
    df_age = to_frame(compute_age_group_metrics(document))
    if df_age.empty:
        st.info("No demographic breakdown available.")
    else:
        age_order = df_age["age_group"].tolist()
        df_age_long = df_age.melt(
            id_vars="age_group", value_vars=["spend", "revenue"], var_name="metric"
        )
        chart_age = (
            alt.Chart(df_age_long)
            .mark_bar()
            .encode(
                x=alt.X("age_group:N", sort=age_order, title="Age Group"),
                xOffset="metric:N",
                y=alt.Y("value:Q", title="USD"),
                color=alt.Color("metric:N", title=None),
                tooltip=["age_group:N", "metric:N", "value:Q"],
            )
            .properties(height=320)
        )
        st.altair_chart(chart_age, width="stretch")

    st.subheader("Click-Through Rate by Age Group")
    df_ga = gender_age_group_frame(compute_gender_age_group_metrics(document))
    if df_ga.empty:
        st.info("No demographic engagement available.")
    else:
        chart_ctr = (
            alt.Chart(df_ga)
            .mark_bar()
            .encode(
                x=alt.X("age_group:N", title="Age Group"),
                xOffset="gender:N",
                y=alt.Y("ctr:Q", title="CTR (%)"),
                color=alt.Color("gender:N", title="Gender"),
                tooltip=["gender:N", "age_group:N", "ctr:Q", "conversion_rate:Q"],
            )
            .properties(height=320)
        )
        st.altair_chart(chart_ctr, width="stretch")
        st.dataframe(center_dataframe(df_ga), width="stretch")

# =====================================================
# DEVICES
# =====================================================
elif view == "Devices":
    st.header("📱 Device Performance")

    devices = compute_device_metrics(document)
    if not devices:
        st.info("No device data available.")
    else:
        df_chart = pd.DataFrame(device_chart_rows(devices)).melt(
            id_vars="name", var_name="device", value_name="value"
        )
        chart_dev = (
            alt.Chart(df_chart)
            .mark_bar()
            .encode(
                x=alt.X("name:N", title=None),
                xOffset="device:N",
                y=alt.Y("value:Q", title=None),
                color=alt.Color("device:N", title="Device"),
                tooltip=["name:N", "device:N", "value:Q"],
            )
            .properties(height=320)
        )
        st.altair_chart(chart_dev, width="stretch")
        st.dataframe(center_dataframe(to_frame(devices)), width="stretch")

# =====================================================
# REGIONS
# =====================================================
elif view == "Regions":
    st.header("🌍 Regional Performance")

    regions = compute_region_metrics(document)
    df_regions = to_frame(regions.region_list)
    if df_regions.empty:
        st.info("No regional data available.")
    else:
        df_map = to_frame(regions.map_data)
        if df_map.empty:
            st.caption("No geographic coordinates available for map view")
        else:
            st.map(df_map, latitude="lat", longitude="lng", size="value")

        chart_reg = (
            alt.Chart(df_regions)
            .mark_bar()
            .encode(
                x=alt.X("region:N", sort=alt.SortField("value", order="descending"), title=None),
                y=alt.Y("value:Q", title="Revenue + Spend"),
                color=alt.Color("performance:Q", title="ROAS"),
                tooltip=["region:N", "country:N", "revenue:Q", "spend:Q", "performance:Q"],
            )
            .properties(height=320)
        )
        st.altair_chart(chart_reg, width="stretch")
        st.dataframe(center_dataframe(df_regions), width="stretch")

# =====================================================
# WEEKLY
# =====================================================
else:
    st.header("📈 Weekly View")
    st.caption("Profitability Analysis: Revenue vs Spend")

    df_week = to_frame(compute_weekly_metrics(document))
    if df_week.empty:
        st.info("No weekly data available.")
    else:
        week_order = df_week["week_label"].tolist()
        df_week_long = df_week.melt(
            id_vars=["week_start", "week_label"],
            value_vars=["revenue", "spend"],
            var_name="metric",
        )
        chart_week = (
            alt.Chart(df_week_long)
            .mark_line(point=True)
            .encode(
                x=alt.X("week_label:N", sort=week_order, title="Week"),
                y=alt.Y("value:Q", title="USD"),
                color=alt.Color("metric:N", title=None),
                tooltip=["week_start:N", "metric:N", "value:Q"],
            )
            .properties(height=320)
        )
        st.altair_chart(chart_week, width="stretch")

# =====================================================
# Footer
# =====================================================
st.caption("Marketing data API • pandas • Streamlit • Altair")
