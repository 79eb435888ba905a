"""
Tests for the full analysis report.
"""

import pytest

from core.config import AnalysisConfig
from core.records import RecordSet
from report.findings import build_analysis_report

from factories import make_record


class TestBuildAnalysisReport:

    def test_scenario_report(self, scenario_records):
        report = build_analysis_report(scenario_records)
        assert report.n_records == 2
        assert report.stats["age"].mean == pytest.approx(39.0)
        assert report.smoker_histogram.buckets == {"smoker": 1, "non-smoker": 1}
        assert report.old_pay_more is True
        assert report.smokers_pay_more is True
        assert report.old_vs_young.ratio == pytest.approx(15.0)
        assert report.regression is not None
        assert report.region_pays_more is True  # southeast 30000 vs northwest 2000

    def test_sample_report(self, sample_records):
        report = build_analysis_report(sample_records)
        assert report.fairness.is_fair
        assert report.monotonicity.passes
        assert report.region_pays_more is False
        assert report.flags == []
        assert len(report.regression.predictions) == 11

    def test_config_drives_thresholds_and_bins(self, sample_records):
        cfg = AnalysisConfig(
            bmi_bin_width=5.0, age_bin_width=20, smoker_factor=3.0,
            region_first="north", region_second="south", sweep_points=3,
        )
        report = build_analysis_report(sample_records, cfg)
        assert report.bmi_histogram.bin_width == 5.0
        assert list(report.age_range_histogram.buckets) == [0, 20, 40, 60]
        assert report.smokers_pay_more is False
        assert report.region_pays_more is True
        assert len(report.regression.predictions) == 3

    def test_empty_report(self, empty_records):
        report = build_analysis_report(empty_records)
        assert report.n_records == 0
        assert report.age_histogram is None
        assert report.bmi_histogram is None
        assert report.regression is None
        assert report.old_vs_young is None
        assert report.old_pay_more is False
        assert not report.fairness.is_fair
        assert report.flags == ["NO_DATA: no valid records"]

    def test_flags(self):
        records = RecordSet([
            make_record(bmi=30.0, children=1, region="southeast", charges=1000.0),
            make_record(bmi=30.0, children=2, region="southeast", charges=8000.0),
            make_record(bmi=30.0, children=0, region="northwest", charges=500.0),
        ])
        report = build_analysis_report(records)
        assert "REGRESSION_NOT_COMPUTABLE: BMI has no variance" in report.flags
        assert any(f.startswith("REGION_IMBALANCE") for f in report.flags)
        assert "CHARGE_PER_CHILD_RISES: 0 → 1 children" in report.flags

    def test_summary_table(self, sample_records):
        report = build_analysis_report(sample_records)
        df = report.to_dataframe()
        assert list(df.columns) == ["Check", "Result"]
        results = dict(zip(df["Check"], df["Result"]))
        assert results["Records analysed"] == "8"
        assert results["Smokers pay more"] == "yes"
        assert results["Regions evenly represented"] == "yes"
        assert "Smokers pay more: yes" in report.summary()

    def test_summary_without_regression(self, empty_records):
        text = build_analysis_report(empty_records).summary()
        assert "BMI → charges regression: not computable" in text
        assert "FLAGS: NO_DATA" in text
