"""
Cohort comparisons.

Each check partitions the RecordSet, aggregates per cohort and returns either a
bool or a small result object:

  old_pay_more_than_young         age >= 50 mean charges vs age <= 20 mean charges
  smokers_pay_more                smoker vs non-smoker mean charges
  region_pays_more                e.g. "south*" vs "north*" mean charges
  charge_range_by_region          min / max charges per region
  region_fairness                 spread of region proportions within a tolerance
  children_charge_monotonicity    mean charge per child non-increasing in children count

Threshold cohorts are independent (a record can sit in both, one or neither).
Categorical splits are mutually exclusive; records matching neither side of a
directional region split are left out of both.

An empty required cohort is a definite negative (False / None), never an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from core.records import FieldSpec, Record, RecordSet
from core.utils import normalize_label, safe_ratio

logger = logging.getLogger(__name__)

# float slack for the fairness inequality
FAIRNESS_EPSILON = 1e-12


@dataclass(frozen=True)
class Cohort:
    """A named predicate over records."""
    name: str
    predicate: Callable[[Record], bool]

    def select(self, records: RecordSet) -> RecordSet:
        return records.filter(self.predicate)


def age_at_least(age: int) -> Cohort:
    return Cohort(f"age >= {age}", lambda r: r.age >= age)


def age_at_most(age: int) -> Cohort:
    return Cohort(f"age <= {age}", lambda r: r.age <= age)


def smokers() -> Cohort:
    return Cohort("smoker", lambda r: r.smoker)


def non_smokers() -> Cohort:
    return Cohort("non-smoker", lambda r: not r.smoker)


def region_matching(fragment: str) -> Cohort:
    return Cohort(f"region ~ {normalize_label(fragment)}", lambda r: r.in_region(fragment))


# ---------------------------------------------------------------------------
# Mean comparison
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CohortComparison:
    """Means of one field over two cohorts. ratio is None when second_mean is 0."""
    first: str
    second: str
    field: str
    first_count: int
    second_count: int
    first_mean: float
    second_mean: float
    ratio: Optional[float]

    def at_least(self, factor: float) -> bool:
        return self.first_mean >= factor * self.second_mean


def compare_means(
    records: RecordSet,
    first: Cohort,
    second: Cohort,
    field: FieldSpec = "charges",
) -> Optional[CohortComparison]:
    """Compare mean `field` between two cohorts; None if either cohort is empty."""
    a = first.select(records).values(field)
    b = second.select(records).values(field)
    if len(a) == 0 or len(b) == 0:
        logger.debug(
            "compare_means: empty cohort (%s=%d, %s=%d)", first.name, len(a), second.name, len(b)
        )
        return None

    first_mean = float(np.mean(a))
    second_mean = float(np.mean(b))
    return CohortComparison(
        first=first.name,
        second=second.name,
        field=field if isinstance(field, str) else getattr(field, "__name__", "value"),
        first_count=len(a),
        second_count=len(b),
        first_mean=first_mean,
        second_mean=second_mean,
        ratio=safe_ratio(first_mean, second_mean),
    )


def old_pay_more_than_young(
    records: RecordSet,
    *,
    old_age: int = 50,
    young_age: int = 20,
    factor: float = 2.0,
) -> bool:
    """mean(charges | age >= old_age) >= factor * mean(charges | age <= young_age)."""
    cmp = compare_means(records, age_at_least(old_age), age_at_most(young_age))
    return cmp is not None and cmp.at_least(factor)


def smokers_pay_more(records: RecordSet, *, factor: float = 1.0) -> bool:
    """Smoker mean charges >= factor * non-smoker mean charges."""
    cmp = compare_means(records, smokers(), non_smokers())
    return cmp is not None and cmp.at_least(factor)


def region_pays_more(records: RecordSet, first: str = "south", second: str = "north") -> bool:
    """Mean charges of regions containing `first` strictly exceed those containing `second`."""
    cmp = compare_means(records, region_matching(first), region_matching(second))
    return cmp is not None and cmp.first_mean > cmp.second_mean


# ---------------------------------------------------------------------------
# Ranges per region
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CohortRange:
    count: int
    min: float
    max: float

    @property
    def spread(self) -> float:
        return self.max - self.min


def charge_range_by_region(records: RecordSet, field: FieldSpec = "charges") -> Dict[str, CohortRange]:
    """Min / max of `field` per region (case-insensitive), in first-seen region order."""
    groups: Dict[str, List[Record]] = {}
    for r in records:
        groups.setdefault(normalize_label(r.region), []).append(r)

    out: Dict[str, CohortRange] = {}
    for region, rows in groups.items():
        vals = RecordSet(rows).values(field)
        out[region] = CohortRange(count=len(vals), min=float(vals.min()), max=float(vals.max()))
    return out


# ---------------------------------------------------------------------------
# Region fairness
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FairnessResult:
    """Region proportions and whether their spread stays within tolerance."""
    proportions: Dict[str, float]
    spread: float
    tolerance: float
    is_fair: bool


def region_fairness(records: RecordSet, tolerance: float = 0.05) -> FairnessResult:
    """
    Judge whether regions are evenly represented.

    The largest pairwise gap between region proportions (max - min) must not
    exceed `tolerance`. An empty RecordSet is never fair.
    """
    n = len(records)
    if n == 0:
        return FairnessResult(proportions={}, spread=0.0, tolerance=tolerance, is_fair=False)

    counts: Dict[str, int] = {}
    for r in records:
        key = normalize_label(r.region)
        counts[key] = counts.get(key, 0) + 1

    proportions = {k: v / n for k, v in counts.items()}
    spread = max(proportions.values()) - min(proportions.values())
    return FairnessResult(
        proportions=proportions,
        spread=spread,
        tolerance=tolerance,
        is_fair=spread <= tolerance + FAIRNESS_EPSILON,
    )


def is_region_fair(records: RecordSet, tolerance: float = 0.05) -> bool:
    return region_fairness(records, tolerance).is_fair


# ---------------------------------------------------------------------------
# Children vs charge per child
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MonotonicityResult:
    """
    Mean charge per child for each children count, ascending.

    `per_child` holds (children, normalized mean) pairs; count 0 keeps the raw
    mean. `violation` is the first adjacent pair that increases, if any.
    """
    per_child: Tuple[Tuple[int, float], ...]
    passes: bool
    violation: Optional[Tuple[int, int]] = None
    group_sizes: Dict[int, int] = field(default_factory=dict)


def children_charge_monotonicity(records: RecordSet) -> MonotonicityResult:
    """Passes iff the normalized mean charge never increases with the children count."""
    if records.is_empty:
        return MonotonicityResult(per_child=(), passes=False)

    groups: Dict[int, List[float]] = {}
    for r in records:
        groups.setdefault(r.children, []).append(r.charges)

    per_child: List[Tuple[int, float]] = []
    for children in sorted(groups):
        mean = float(np.mean(groups[children]))
        per_child.append((children, mean if children == 0 else mean / children))

    violation = None
    for (c_prev, v_prev), (c_next, v_next) in zip(per_child, per_child[1:]):
        if v_next > v_prev:
            violation = (c_prev, c_next)
            break

    return MonotonicityResult(
        per_child=tuple(per_child),
        passes=violation is None,
        violation=violation,
        group_sizes={k: len(v) for k, v in sorted(groups.items())},
    )


def charges_per_child_non_increasing(records: RecordSet) -> bool:
    return children_charge_monotonicity(records).passes
