"""
Analysis report — every analysis run once over a RecordSet, plus headline flags.

Answers the questions the dataset is usually asked:
  Q1: "Who is in the data?"          → per-field summaries, age / BMI histograms
  Q2: "Does age drive charges?"       → old vs young cohort comparison
  Q3: "Does smoking drive charges?"   → smoker vs non-smoker comparison
  Q4: "Is the sample balanced?"       → region fairness
  Q5: "Does BMI explain charges?"     → least-squares fit with correlation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from analytics.binning import (
    Histogram,
    age_histogram,
    age_range_histogram,
    bmi_histogram,
    region_histogram,
    smoker_histogram,
)
from analytics.cohorts import (
    CohortComparison,
    CohortRange,
    FairnessResult,
    MonotonicityResult,
    age_at_least,
    age_at_most,
    charge_range_by_region,
    children_charge_monotonicity,
    compare_means,
    non_smokers,
    old_pay_more_than_young,
    region_fairness,
    region_matching,
    region_pays_more,
    smokers,
    smokers_pay_more,
)
from analytics.regression import RegressionModel, fit_linear, prediction_sweep
from analytics.stats import StatSummary, describe_records
from core.config import AnalysisConfig
from core.records import RecordSet

logger = logging.getLogger(__name__)


@dataclass
class AnalysisReport:
    """Structured output of one full analysis run."""
    n_records: int
    stats: Dict[str, StatSummary]

    # histograms (None = no data)
    age_histogram: Optional[Histogram]
    age_range_histogram: Optional[Histogram]
    bmi_histogram: Optional[Histogram]
    smoker_histogram: Optional[Histogram]
    region_histogram: Optional[Histogram]

    # cohort checks
    old_vs_young: Optional[CohortComparison]
    old_pay_more: bool
    smoker_vs_non_smoker: Optional[CohortComparison]
    smokers_pay_more: bool
    region_split: Optional[CohortComparison]
    region_pays_more: bool
    region_ranges: Dict[str, CohortRange]
    fairness: FairnessResult
    monotonicity: MonotonicityResult

    # regression of charges on BMI (None = not computable)
    regression: Optional[RegressionModel]

    flags: List[str] = field(default_factory=list)

    def to_dataframe(self) -> pd.DataFrame:
        """Headline checks as a display-friendly table."""
        rows = [
            {"Check": "Records analysed", "Result": str(self.n_records)},
            {"Check": "Old pay more than young", "Result": _yes_no(self.old_pay_more)},
            {"Check": "Smokers pay more", "Result": _yes_no(self.smokers_pay_more)},
            {"Check": "Region split pays more", "Result": _yes_no(self.region_pays_more)},
            {"Check": "Regions evenly represented", "Result": _yes_no(self.fairness.is_fair)},
            {"Check": "Charge per child non-increasing", "Result": _yes_no(self.monotonicity.passes)},
        ]
        if self.regression is not None:
            rows.append({"Check": "BMI → charges slope", "Result": f"{self.regression.slope:,.2f}"})
            rows.append({"Check": "BMI → charges r", "Result": f"{self.regression.correlation:.4f}"})
        else:
            rows.append({"Check": "BMI → charges regression", "Result": "not computable"})
        if self.flags:
            rows.append({"Check": "FLAGS", "Result": " | ".join(self.flags)})
        return pd.DataFrame(rows)

    def summary(self) -> str:
        return "\n".join(f"{r.Check}: {r.Result}" for r in self.to_dataframe().itertuples())


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


def build_analysis_report(records: RecordSet, config: Optional[AnalysisConfig] = None) -> AnalysisReport:
    """Run every analysis over `records` with the thresholds in `config`."""
    cfg = config or AnalysisConfig()
    logger.debug("Building analysis report over %d records", len(records))

    sweep = prediction_sweep(cfg.sweep_start, cfg.sweep_step, cfg.sweep_points)
    fairness = region_fairness(records, cfg.fairness_tolerance)
    monotonicity = children_charge_monotonicity(records)
    regression = fit_linear(records, "bmi", "charges", sweep=sweep)

    flags = []
    if len(records) == 0:
        flags.append("NO_DATA: no valid records")
    if len(records) and regression is None:
        flags.append("REGRESSION_NOT_COMPUTABLE: BMI has no variance")
    if len(records) and not fairness.is_fair:
        flags.append(
            f"REGION_IMBALANCE: proportion spread {fairness.spread:.1%} exceeds "
            f"{fairness.tolerance:.0%}"
        )
    if monotonicity.violation is not None:
        a, b = monotonicity.violation
        flags.append(f"CHARGE_PER_CHILD_RISES: {a} → {b} children")

    return AnalysisReport(
        n_records=len(records),
        stats=describe_records(records),
        age_histogram=age_histogram(records),
        age_range_histogram=age_range_histogram(records, cfg.age_bin_width),
        bmi_histogram=bmi_histogram(records, cfg.bmi_bin_width),
        smoker_histogram=smoker_histogram(records),
        region_histogram=region_histogram(records),
        old_vs_young=compare_means(records, age_at_least(cfg.old_age), age_at_most(cfg.young_age)),
        old_pay_more=old_pay_more_than_young(
            records, old_age=cfg.old_age, young_age=cfg.young_age, factor=cfg.old_young_factor
        ),
        smoker_vs_non_smoker=compare_means(records, smokers(), non_smokers()),
        smokers_pay_more=smokers_pay_more(records, factor=cfg.smoker_factor),
        region_split=compare_means(
            records, region_matching(cfg.region_first), region_matching(cfg.region_second)
        ),
        region_pays_more=region_pays_more(records, cfg.region_first, cfg.region_second),
        region_ranges=charge_range_by_region(records),
        fairness=fairness,
        monotonicity=monotonicity,
        regression=regression,
        flags=flags,
    )
