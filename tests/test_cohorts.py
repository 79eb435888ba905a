"""
Tests for cohort comparisons.

Empty cohorts must produce a definite negative (False / None), never raise.
"""

import pytest

from analytics.cohorts import (
    age_at_least,
    age_at_most,
    charge_range_by_region,
    charges_per_child_non_increasing,
    children_charge_monotonicity,
    compare_means,
    is_region_fair,
    non_smokers,
    old_pay_more_than_young,
    region_fairness,
    region_matching,
    region_pays_more,
    smokers,
    smokers_pay_more,
)
from core.records import RecordSet

from factories import make_record


def _regions(counts):
    """RecordSet with `n` records per region name."""
    rows = []
    for region, n in counts.items():
        rows.extend(make_record(region=region) for _ in range(n))
    return RecordSet(rows)


# ─────────────────────────────────────────────────────────────────────
# Threshold cohorts
# ─────────────────────────────────────────────────────────────────────

class TestAgeCohorts:

    def test_scenario_old_pay_twice_young(self, scenario_records):
        assert old_pay_more_than_young(scenario_records) is True

    def test_factor_not_met(self, scenario_records):
        # 30000 >= 20 * 2000 is false
        assert old_pay_more_than_young(scenario_records, factor=20.0) is False

    def test_empty_young_cohort_is_false(self):
        records = RecordSet([make_record(age=55, charges=1.0), make_record(age=35, charges=1.0)])
        assert old_pay_more_than_young(records) is False

    def test_overlapping_thresholds_count_records_in_both(self, scenario_records):
        cmp = compare_means(scenario_records, age_at_least(18), age_at_most(60))
        assert cmp.first_count == 2
        assert cmp.second_count == 2
        assert cmp.ratio == pytest.approx(1.0)

    def test_record_in_neither_cohort(self):
        records = RecordSet([
            make_record(age=60, charges=9000.0),
            make_record(age=35, charges=1_000_000.0),
            make_record(age=19, charges=3000.0),
        ])
        cmp = compare_means(records, age_at_least(50), age_at_most(20))
        assert (cmp.first_count, cmp.second_count) == (1, 1)
        assert cmp.ratio == pytest.approx(3.0)


# ─────────────────────────────────────────────────────────────────────
# Categorical cohorts
# ─────────────────────────────────────────────────────────────────────

class TestSmokerCohorts:

    def test_smokers_pay_more_on_sample(self, sample_records):
        assert smokers_pay_more(sample_records) is True
        # smoker mean ≈ 22904, non-smoker mean ≈ 7925
        assert smokers_pay_more(sample_records, factor=2.5) is True
        assert smokers_pay_more(sample_records, factor=3.0) is False

    def test_all_smokers_is_false(self):
        records = RecordSet([make_record(smoker=True, charges=c) for c in (100.0, 200.0)])
        assert smokers_pay_more(records) is False
        assert compare_means(records, smokers(), non_smokers()) is None

    def test_split_is_exhaustive(self, sample_records):
        cmp = compare_means(sample_records, smokers(), non_smokers())
        assert cmp.first_count + cmp.second_count == len(sample_records)

    def test_zero_mean_second_cohort_has_no_ratio(self):
        records = RecordSet([make_record(smoker=True, charges=10.0), make_record(smoker=False, charges=0.0)])
        cmp = compare_means(records, smokers(), non_smokers())
        assert cmp.ratio is None
        assert smokers_pay_more(records) is True


class TestRegionCohorts:

    def test_directional_split(self, sample_records):
        # south ≈ 7825, north ≈ 15514
        assert region_pays_more(sample_records, "south", "north") is False
        assert region_pays_more(sample_records, "north", "south") is True

    def test_unmatched_regions_are_excluded(self, sample_records):
        extra = RecordSet(list(sample_records) + [make_record(region="central", charges=1e9)])
        cmp = compare_means(extra, region_matching("south"), region_matching("north"))
        assert (cmp.first_count, cmp.second_count) == (4, 4)

    def test_missing_side_is_false(self):
        records = RecordSet([make_record(region="southeast"), make_record(region="southwest")])
        assert region_pays_more(records, "south", "north") is False

    def test_charge_range_by_region(self, sample_records):
        ranges = charge_range_by_region(sample_records)
        assert list(ranges) == ["southwest", "southeast", "northwest", "northeast"]
        ne = ranges["northeast"]
        assert ne.count == 2
        assert ne.min == pytest.approx(7281.51)
        assert ne.max == pytest.approx(28923.14)
        assert ne.spread == pytest.approx(28923.14 - 7281.51)

    def test_charge_range_empty(self, empty_records):
        assert charge_range_by_region(empty_records) == {}


# ─────────────────────────────────────────────────────────────────────
# Region fairness
# ─────────────────────────────────────────────────────────────────────

class TestRegionFairness:

    def test_balanced_sample_is_fair(self, sample_records):
        result = region_fairness(sample_records)
        assert result.is_fair
        assert result.spread == pytest.approx(0.0)
        assert sum(result.proportions.values()) == pytest.approx(1.0)

    def test_unbalanced_is_not_fair(self):
        records = _regions({"southeast": 2, "northwest": 1})
        result = region_fairness(records)
        assert result.spread == pytest.approx(1 / 3)
        assert not result.is_fair

    def test_spread_at_tolerance_is_fair_despite_rounding(self):
        # 11/40 - 9/40 is 0.05 plus float noise
        records = _regions({"a": 11, "b": 10, "c": 10, "d": 9})
        assert is_region_fair(records, tolerance=0.05) is True

    def test_spread_over_tolerance(self):
        records = _regions({"a": 12, "b": 10, "c": 10, "d": 8})
        assert is_region_fair(records, tolerance=0.05) is False
        assert is_region_fair(records, tolerance=0.10) is True

    def test_uses_proportions_not_counts(self):
        small = _regions({"a": 1, "b": 1})
        large = _regions({"a": 100, "b": 100})
        assert is_region_fair(small) and is_region_fair(large)

    def test_empty_is_not_fair(self, empty_records):
        result = region_fairness(empty_records)
        assert result.is_fair is False
        assert result.proportions == {}


# ─────────────────────────────────────────────────────────────────────
# Children vs charge per child
# ─────────────────────────────────────────────────────────────────────

class TestChildrenMonotonicity:

    def test_sample_passes(self, sample_records):
        result = children_charge_monotonicity(sample_records)
        assert result.passes
        assert [c for c, _ in result.per_child] == [0, 1, 3]
        assert result.per_child[0][1] == pytest.approx((16884.92 + 21984.47 + 3866.86 + 28923.14) / 4)
        assert result.per_child[2][1] == pytest.approx((4449.46 + 7281.51) / 2 / 3)
        assert result.group_sizes == {0: 4, 1: 2, 3: 2}

    def test_single_violation_fails(self):
        records = RecordSet([
            make_record(children=0, charges=9000.0),
            make_record(children=1, charges=1000.0),
            make_record(children=2, charges=4000.0),   # 2000 per child > 1000
            make_record(children=3, charges=300.0),
        ])
        result = children_charge_monotonicity(records)
        assert not result.passes
        assert result.violation == (1, 2)
        assert charges_per_child_non_increasing(records) is False

    def test_zero_children_uses_raw_mean(self):
        records = RecordSet([
            make_record(children=0, charges=500.0),
            make_record(children=1, charges=1000.0),
        ])
        result = children_charge_monotonicity(records)
        assert result.per_child == ((0, 500.0), (1, 1000.0))
        assert result.violation == (0, 1)

    def test_equal_values_are_non_increasing(self):
        records = RecordSet([
            make_record(children=1, charges=1000.0),
            make_record(children=2, charges=2000.0),
        ])
        assert charges_per_child_non_increasing(records) is True

    def test_single_group_passes(self):
        records = RecordSet([make_record(children=2, charges=c) for c in (10.0, 20.0)])
        assert charges_per_child_non_increasing(records) is True

    def test_empty_fails(self, empty_records):
        assert charges_per_child_non_increasing(empty_records) is False
