"""
Insurance Analytics — Dashboard
===============================

Interactive view over the same analysis the console report prints:
  1. Summary statistics per numeric field
  2. Age / age-range / BMI / smoker / region histograms
  3. Cohort checks (age, smoking, region, children)
  4. Least-squares fit of charges on BMI with its prediction table

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import pandas as pd
import streamlit as st

try:
    import altair as alt
    _HAS_ALTAIR = True
except Exception:
    alt = None
    _HAS_ALTAIR = False

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import AnalysisConfig
from data_prep.loader import DataSourceError, read_text_csv, records_from_frame
from analytics.binning import Histogram
from report.findings import build_analysis_report
from report.tables import (
    fairness_frame,
    histogram_frame,
    monotonicity_frame,
    prediction_frame,
    region_range_frame,
    stats_table,
)

# ---------------------------------------------------------------------------
# Data directory
# ---------------------------------------------------------------------------
DATA_DIR = PROJECT_ROOT / "data"


# ---------------------------------------------------------------------------
# Cached loaders
# ---------------------------------------------------------------------------
@st.cache_data(show_spinner="Loading CSV...")
def _load_raw(source) -> pd.DataFrame:
    return read_text_csv(source)


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _fmt_money(val):
    """Format charges with commas."""
    return f"{val:,.2f}"


def _plot_histogram(hist: Optional[Histogram], *, title: str, x_label: str, height: int = 260):
    if hist is None:
        st.info("No data.")
        return
    df_hist = histogram_frame(hist)
    if not _HAS_ALTAIR:
        st.markdown(f"**{title}**")
        import matplotlib.pyplot as plt
        fig, ax = plt.subplots(figsize=(6, 3))
        ax.bar(df_hist["Bucket"], df_hist["Count"], edgecolor="white", alpha=0.8)
        ax.set_xlabel(x_label)
        ax.set_ylabel("Records")
        ax.set_title(title)
        ax.tick_params(axis="x", labelrotation=45)
        st.pyplot(fig)
        return
    chart = (
        alt.Chart(df_hist).mark_bar(opacity=0.8)
        .encode(
            x=alt.X("Bucket:N", sort=None, title=x_label),
            y=alt.Y("Count:Q", title="Records"),
            tooltip=["Bucket", "Count"],
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_fit(records_df: pd.DataFrame, fit_df: pd.DataFrame, *, height: int = 320):
    if not _HAS_ALTAIR or len(records_df) == 0:
        st.dataframe(fit_df, use_container_width=True, hide_index=True)
        return
    points = (
        alt.Chart(records_df).mark_circle(opacity=0.6)
        .encode(
            x=alt.X("bmi:Q", title="BMI"),
            y=alt.Y("charges:Q", title="Charges", axis=alt.Axis(format=",.0f")),
            color=alt.Color("smoker:N", title="Smoker"),
        )
    )
    line = (
        alt.Chart(fit_df).mark_line(color="firebrick")
        .encode(x="bmi:Q", y="predicted_charges:Q")
    )
    st.altair_chart((points + line).properties(height=height), use_container_width=True)


def main() -> None:
    # ═══════════════════════════════════════════════════════════════════════
    # PAGE CONFIG
    # ═══════════════════════════════════════════════════════════════════════
    st.set_page_config(page_title="Insurance Analytics", layout="wide")
    st.title("Insurance Analytics")
    st.caption("Descriptive statistics, histograms, cohort checks and a BMI/charges fit.")

    defaults = AnalysisConfig()

    # ═══════════════════════════════════════════════════════════════════════
    # SIDEBAR — Data & Settings
    # ═══════════════════════════════════════════════════════════════════════
    with st.sidebar:
        st.header("Data")
        uploaded = st.file_uploader("Upload insurance CSV", type=["csv"])
        csv_files = sorted(DATA_DIR.glob("*.csv")) if DATA_DIR.exists() else []
        selected = None
        if uploaded is None and csv_files:
            selected = st.selectbox("Or pick a file", options=[str(p) for p in csv_files])

        st.header("Settings")
        limit = st.number_input("Records to read", min_value=1, value=defaults.record_limit, step=10)
        age_bin = st.number_input("Age range width", min_value=1, value=defaults.age_bin_width)
        bmi_bin = st.number_input("BMI range width", min_value=0.5, value=defaults.bmi_bin_width, step=0.5)
        tolerance = st.slider("Region fairness tolerance", 0.0, 0.25, defaults.fairness_tolerance, 0.01)

    source = uploaded if uploaded is not None else selected
    if source is None:
        st.info(f"Upload a CSV or place one in {DATA_DIR}.")
        st.stop()

    try:
        cfg = defaults.with_overrides(
            record_limit=int(limit),
            age_bin_width=int(age_bin),
            bmi_bin_width=float(bmi_bin),
            fairness_tolerance=float(tolerance),
        )
        records, validation = records_from_frame(_load_raw(source), limit=cfg.record_limit)
    except (DataSourceError, ValueError) as exc:
        st.error(str(exc))
        st.stop()

    if validation.rows_rejected:
        with st.expander(f"{validation.rows_rejected} rows rejected", expanded=False):
            st.text(validation.summary())

    report = build_analysis_report(records, cfg)

    # ═══════════════════════════════════════════════════════════════════════
    # KPI ROW
    # ═══════════════════════════════════════════════════════════════════════
    charges = report.stats["charges"]
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Records", f"{report.n_records:,}")
    k2.metric("Mean Charges", _fmt_money(charges.mean))
    k3.metric("Median Charges", _fmt_money(charges.p50))
    k4.metric("BMI → Charges r", f"{report.regression.correlation:.3f}" if report.regression else "n/a")

    for flag in report.flags:
        st.warning(flag)

    # ═══════════════════════════════════════════════════════════════════════
    # STATISTICS
    # ═══════════════════════════════════════════════════════════════════════
    st.subheader("Summary Statistics")
    st.dataframe(stats_table(report.stats).round(2), use_container_width=True, hide_index=True)

    # ═══════════════════════════════════════════════════════════════════════
    # HISTOGRAMS
    # ═══════════════════════════════════════════════════════════════════════
    st.subheader("Histograms")
    h1, h2 = st.columns(2)
    with h1:
        _plot_histogram(report.age_histogram, title="Age", x_label="Age")
        _plot_histogram(report.bmi_histogram, title=f"BMI (width {cfg.bmi_bin_width:g})", x_label="BMI")
    with h2:
        _plot_histogram(report.age_range_histogram, title=f"Age Ranges (width {cfg.age_bin_width})",
                        x_label="Age range")
        s1, s2 = st.columns(2)
        with s1:
            _plot_histogram(report.smoker_histogram, title="Smokers", x_label="", height=200)
        with s2:
            _plot_histogram(report.region_histogram, title="Regions", x_label="", height=200)

    # ═══════════════════════════════════════════════════════════════════════
    # COHORTS
    # ═══════════════════════════════════════════════════════════════════════
    st.subheader("Cohort Checks")
    c1, c2 = st.columns([1, 1])
    with c1:
        st.dataframe(report.to_dataframe(), use_container_width=True, hide_index=True)
        st.markdown("**Charge per Child**")
        st.dataframe(monotonicity_frame(report.monotonicity).round(2), use_container_width=True, hide_index=True)
    with c2:
        st.markdown("**Charge Range by Region**")
        st.dataframe(region_range_frame(report.region_ranges).round(2), use_container_width=True, hide_index=True)
        st.markdown("**Region Proportions**")
        st.dataframe(fairness_frame(report.fairness).round(4), use_container_width=True, hide_index=True)

    # ═══════════════════════════════════════════════════════════════════════
    # REGRESSION
    # ═══════════════════════════════════════════════════════════════════════
    st.subheader("Charges vs BMI")
    if report.regression is None:
        st.info("Regression not computable (no records or no variance in BMI).")
        return
    m = report.regression
    st.markdown(
        f"charges = **{m.intercept:,.2f}** + **{m.slope:,.2f}** × bmi  "
        f"(r = {m.correlation:.4f}, r² = {m.r_squared:.4f}, n = {m.n})"
    )
    fit_df = prediction_frame(m)
    left, right = st.columns([2, 1])
    with left:
        _plot_fit(records.to_dataframe(), fit_df)
    with right:
        st.dataframe(fit_df.round(2), use_container_width=True, hide_index=True)


if __name__ == "__main__":
    main()
