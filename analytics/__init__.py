"""
Analytics engine — pure functions from a RecordSet to structured results.

  1. stats.py       — per-field count / mean / population std / quartiles
  2. binning.py     — per-value, range and categorical histograms
  3. cohorts.py     — threshold and categorical cohort comparisons
  4. regression.py  — least-squares fit with correlation and a prediction table

Nothing here reads files, prints, or mutates its input.
"""

from .stats import StatSummary, describe_field, describe_records, percentile
from .binning import (
    Histogram,
    age_histogram,
    age_range_histogram,
    bin_start,
    bmi_histogram,
    category_histogram,
    range_histogram,
    region_histogram,
    smoker_histogram,
    value_histogram,
)
from .cohorts import (
    Cohort,
    CohortComparison,
    CohortRange,
    FairnessResult,
    MonotonicityResult,
    charge_range_by_region,
    charges_per_child_non_increasing,
    children_charge_monotonicity,
    compare_means,
    is_region_fair,
    old_pay_more_than_young,
    region_fairness,
    region_pays_more,
    smokers_pay_more,
)
from .regression import RegressionModel, fit_linear, prediction_sweep

__all__ = [
    "StatSummary",
    "describe_field",
    "describe_records",
    "percentile",
    "Histogram",
    "age_histogram",
    "age_range_histogram",
    "bin_start",
    "bmi_histogram",
    "category_histogram",
    "range_histogram",
    "region_histogram",
    "smoker_histogram",
    "value_histogram",
    "Cohort",
    "CohortComparison",
    "CohortRange",
    "FairnessResult",
    "MonotonicityResult",
    "charge_range_by_region",
    "charges_per_child_non_increasing",
    "children_charge_monotonicity",
    "compare_means",
    "is_region_fair",
    "old_pay_more_than_young",
    "region_fairness",
    "region_pays_more",
    "smokers_pay_more",
    "RegressionModel",
    "fit_linear",
    "prediction_sweep",
]
