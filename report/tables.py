"""
Display tables for analysis results.

Turns StatSummary / Histogram / RegressionModel / cohort results into pandas
DataFrames for the console and the dashboard. No analysis happens here.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd

from analytics.binning import Histogram
from analytics.cohorts import CohortRange, FairnessResult, MonotonicityResult
from analytics.regression import RegressionModel
from analytics.stats import StatSummary


def stats_table(summaries: Dict[str, StatSummary]) -> pd.DataFrame:
    """One row per field with count, mean, std and the five-number summary."""
    rows = []
    for name, s in summaries.items():
        rows.append({
            "Field": name,
            "Count": s.count,
            "Mean": s.mean,
            "Std Dev": s.std,
            "Min": s.min,
            "P25": s.p25,
            "P50": s.p50,
            "P75": s.p75,
            "Max": s.max,
        })
    return pd.DataFrame(
        rows,
        columns=["Field", "Count", "Mean", "Std Dev", "Min", "P25", "P50", "P75", "Max"],
    )


def histogram_frame(hist: Optional[Histogram]) -> pd.DataFrame:
    """Bucket label, raw key and count; empty frame for the no-data signal."""
    if hist is None:
        return pd.DataFrame(columns=["Bucket", "Key", "Count"])
    return pd.DataFrame({
        "Bucket": hist.labels(),
        "Key": list(hist.buckets.keys()),
        "Count": list(hist.buckets.values()),
    })


def prediction_frame(model: Optional[RegressionModel], *, x_label: str = "bmi", y_label: str = "charges") -> pd.DataFrame:
    if model is None:
        return pd.DataFrame(columns=[x_label, f"predicted_{y_label}"])
    return pd.DataFrame(list(model.predictions), columns=[x_label, f"predicted_{y_label}"])


def region_range_frame(ranges: Dict[str, CohortRange]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Region": k, "Count": v.count, "Min": v.min, "Max": v.max, "Spread": v.spread}
            for k, v in ranges.items()
        ],
        columns=["Region", "Count", "Min", "Max", "Spread"],
    )


def fairness_frame(result: FairnessResult) -> pd.DataFrame:
    return pd.DataFrame(
        [{"Region": k, "Proportion": v} for k, v in result.proportions.items()],
        columns=["Region", "Proportion"],
    )


def monotonicity_frame(result: MonotonicityResult) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"Children": c, "Records": result.group_sizes.get(c, 0), "Charge per Child": v}
            for c, v in result.per_child
        ],
        columns=["Children", "Records", "Charge per Child"],
    )
