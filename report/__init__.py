"""
Reporting — tables, text histograms, and the full analysis report.
"""

from .findings import AnalysisReport, build_analysis_report
from .render import render_horizontal, render_no_data, render_vertical
from .tables import histogram_frame, prediction_frame, stats_table

__all__ = [
    "AnalysisReport",
    "build_analysis_report",
    "render_horizontal",
    "render_no_data",
    "render_vertical",
    "histogram_frame",
    "prediction_frame",
    "stats_table",
]
