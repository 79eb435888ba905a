"""
Console report for an insurance CSV.

Run: insurance-analytics "insurance.csv" --limit 50
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from core.config import AnalysisConfig
from data_prep.loader import DataSourceError, load_insurance_csv
from report.findings import AnalysisReport, build_analysis_report
from report.render import render_horizontal, render_vertical
from report.tables import (
    monotonicity_frame,
    prediction_frame,
    region_range_frame,
    stats_table,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    defaults = AnalysisConfig()
    parser = argparse.ArgumentParser(
        prog="insurance-analytics",
        description="Summary statistics, histograms, cohort checks and a BMI/charges fit.",
    )
    parser.add_argument("path", help="CSV file with age,sex,bmi,children,smoker,region,charges")
    parser.add_argument("--limit", type=int, default=defaults.record_limit,
                        help="read at most this many valid records (default: %(default)s)")
    parser.add_argument("--age-bin", type=int, default=None,
                        help=f"age range width (default: {defaults.age_bin_width})")
    parser.add_argument("--bmi-bin", type=float, default=None,
                        help=f"BMI range width (default: {defaults.bmi_bin_width})")
    parser.add_argument("--bar-width", type=int, default=None,
                        help=f"longest horizontal bar (default: {defaults.bar_width})")
    parser.add_argument("--orientation", choices=("horizontal", "vertical"), default="horizontal",
                        help="histogram layout (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.getenv("LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)-20s | %(levelname)-7s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _section(title: str) -> List[str]:
    return ["", f"=== {title} ==="]


def format_report(report: AnalysisReport, cfg: AnalysisConfig, orientation: str = "horizontal") -> List[str]:
    """All console lines for one report."""

    def hist_lines(hist, *, short_labels: bool = False) -> List[str]:
        if orientation == "vertical":
            return render_vertical(hist, short_labels=short_labels)
        return render_horizontal(hist, max_width=cfg.bar_width)

    lines: List[str] = [f"Records analysed: {report.n_records}"]

    lines += _section("Summary Statistics")
    lines += stats_table(report.stats).to_string(index=False, float_format=lambda v: f"{v:,.2f}").splitlines()

    lines += _section("Age Histogram")
    lines += hist_lines(report.age_histogram)
    lines += _section(f"Age Ranges (width {cfg.age_bin_width})")
    lines += hist_lines(report.age_range_histogram)
    lines += _section(f"BMI Histogram (width {cfg.bmi_bin_width:g})")
    lines += hist_lines(report.bmi_histogram)
    lines += _section("Smoker Histogram")
    lines += hist_lines(report.smoker_histogram, short_labels=True)

    lines += _section("Cohort Checks")
    lines += report.summary().splitlines()
    if report.region_ranges:
        lines += _section("Charge Range by Region")
        lines += region_range_frame(report.region_ranges).to_string(
            index=False, float_format=lambda v: f"{v:,.2f}"
        ).splitlines()
    if report.monotonicity.per_child:
        lines += _section("Charge per Child")
        lines += monotonicity_frame(report.monotonicity).to_string(
            index=False, float_format=lambda v: f"{v:,.2f}"
        ).splitlines()

    lines += _section("Regression: charges ~ bmi")
    if report.regression is None:
        lines.append("Not computable (no records or no variance in BMI).")
    else:
        m = report.regression
        lines.append(f"charges = {m.intercept:,.2f} + {m.slope:,.2f} * bmi   (r = {m.correlation:.4f})")
        lines += prediction_frame(m).to_string(index=False, float_format=lambda v: f"{v:,.2f}").splitlines()
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        cfg = AnalysisConfig(record_limit=args.limit).with_overrides(
            age_bin_width=args.age_bin,
            bmi_bin_width=args.bmi_bin,
            bar_width=args.bar_width,
        )
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    try:
        records = load_insurance_csv(args.path, cfg.record_limit)
    except DataSourceError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    report = build_analysis_report(records, cfg)
    print("\n".join(format_report(report, cfg, args.orientation)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
